"""Experimental graded-relevance measures: ndcg_rel, Rndcg and G.

Gains default to the relevance level and can be overridden with
``(rel_level, gain)`` pairs, exactly as for :func:`treceval_measures.gains.ndcg`.
"""

from __future__ import annotations

import math

from treceval_measures.counts import ResRels
from treceval_measures.gains import Gains, setup_gains

__all__ = ["ndcg_rel", "rndcg", "g_measure"]


def _ideal_steps(gains: Gains) -> list[float]:
    """Gain of the ideal ranking at each rank while it is still positive.

    Levels are walked from the highest gain down, each repeated once per
    judged document at that level.  The step at which the gain first drops
    to zero or below is included as the last entry.
    """
    levels = gains.rel_gains
    cur = len(levels) - 1
    ideal = levels[cur].gain if cur >= 0 else 0.0
    count = 0
    steps: list[float] = []
    while ideal > 0.0:
        count += 1
        while cur >= 0 and count > levels[cur].num_at_level:
            count = 1
            cur -= 1
            ideal = levels[cur].gain if cur >= 0 else 0.0
        steps.append(ideal)
    return steps


def _initial_ideal(gains: Gains) -> float:
    return gains.rel_gains[-1].gain if gains.rel_gains else 0.0


def _ranked(res_rels: ResRels) -> list[int]:
    return res_rels.results_rel_list[: res_rels.num_ret]


def _log2(value: float) -> float:
    if value > 0.0:
        return math.log2(value)
    return -math.inf if value == 0.0 else math.nan


def ndcg_rel(res_rels: ResRels, gain_pairs=None) -> float:
    """nDCG averaged over the relevant documents (those with positive gain).

    A relevant document that is not retrieved contributes the DCG at the end
    of the ranking divided by the full ideal DCG.
    """
    gains = setup_gains(res_rels, gain_pairs)
    ideal = _ideal_steps(gains)
    results_dcg = 0.0
    ideal_dcg = 0.0
    total = 0.0
    num_rel = 0
    num_rel_ret = 0

    rels = _ranked(res_rels)
    for index, rel in enumerate(rels):
        results_gain = gains.gain(rel)
        if results_gain != 0:
            results_dcg += results_gain / math.log2(index + 2)
        if index < len(ideal) and ideal[index] > 0.0:
            num_rel += 1
            ideal_dcg += ideal[index] / math.log2(index + 2)
        if results_gain > 0:
            total += results_dcg / ideal_dcg
            num_rel_ret += 1

    for index in range(len(rels), len(ideal)):
        if ideal[index] > 0.0:
            num_rel += 1
            ideal_dcg += ideal[index] / math.log2(index + 2)

    if ideal_dcg > 0.0:
        total += (num_rel - num_rel_ret) * results_dcg / ideal_dcg
    if total > 0.0:
        return total / num_rel
    return 0.0


def rndcg(res_rels: ResRels, gain_pairs=None) -> float:
    """nDCG averaged at each rank where the ideal gain level changes.

    A final point is taken at the end of the ranking if it ends before the
    ideal gains run out.  A topic without relevant documents scores 0; if no
    point could be measured the result is NaN.
    """
    gains = setup_gains(res_rels, gain_pairs)
    if res_rels.num_rel == 0:
        return 0.0
    ideal = _ideal_steps(gains)
    rels = _ranked(res_rels)
    old_ideal = _initial_ideal(gains)
    results_dcg = 0.0
    ideal_dcg = 0.0
    total = 0.0
    points = 0

    def boundary(ideal_gain: float) -> None:
        nonlocal old_ideal, total, points
        if old_ideal != ideal_gain:
            if ideal_dcg > 0.0:
                total += results_dcg / ideal_dcg
                points += 1
            old_ideal = ideal_gain

    shared = min(len(rels), len(ideal))
    for index in range(shared):
        ideal_gain = ideal[index]
        boundary(ideal_gain)
        results_gain = gains.gain(rels[index])
        if results_gain != 0:
            results_dcg += results_gain / math.log2(index + 2)
        if ideal_gain > 0.0:
            ideal_dcg += ideal_gain / math.log2(index + 2)

    if shared < len(rels):
        for index in range(shared, len(rels)):
            results_gain = gains.gain(rels[index])
            if results_gain != 0:
                results_dcg += results_gain / math.log2(index + 2)
        if ideal_dcg > 0.0:
            total += results_dcg / ideal_dcg
            points += 1

    for index in range(shared, len(ideal)):
        ideal_gain = ideal[index]
        boundary(ideal_gain)
        if ideal_gain > 0.0:
            ideal_dcg += ideal_gain / math.log2(index + 2)

    if points == 0:
        return math.nan
    return total / points


def g_measure(res_rels: ResRels, gain_pairs=None) -> float:
    """Normalized gain G.

    A document at rank i contributes gain(doc) / log2(2 + cost(i) - results(i)),
    where results(i) is the gain retrieved so far and cost(i) the ideal gain so
    far, each ideal step costing at least 1.  The sum is normalized by the
    total positive ideal gain.
    """
    gains = setup_gains(res_rels, gain_pairs)
    ideal = _ideal_steps(gains)
    rels = _ranked(res_rels)
    min_cost = 1.0
    results_g = 0.0
    sum_results = 0.0
    sum_ideal = 0.0
    sum_cost = 0.0

    for index, rel in enumerate(rels):
        results_gain = gains.gain(rel)
        sum_results += results_gain
        if index < len(ideal):
            ideal_gain = ideal[index]
            if ideal_gain > 0.0:
                sum_ideal += ideal_gain
            sum_cost += ideal_gain if ideal_gain >= min_cost else min_cost
        else:
            sum_cost += min_cost
        if results_gain != 0:
            results_g += results_gain / _log2(2 + sum_cost - sum_results)

    for ideal_gain in ideal[len(rels):]:
        if ideal_gain > 0.0:
            sum_ideal += ideal_gain

    if sum_ideal > 0.0:
        return results_g / sum_ideal
    return 0.0