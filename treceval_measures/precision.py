"""Precision-based measures of a single topic's ranking.

Each measure takes the relevance of the retrieved documents of one topic
(see :class:`treceval_measures.counts.ResRels`).  A document counts as
relevant when its relevance value is at least ``relevance_level``.
Measures averaged over judgment groups take one ``ResRels`` per group.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from itertools import accumulate

from treceval_measures.counts import ResRels

__all__ = [
    "RELVALUE_NONPOOL",
    "RELVALUE_UNJUDGED",
    "MIN_GEO_MEAN",
    "INFAP_EPSILON",
    "average_precision",
    "gm_average_precision",
    "average_precision_avgjg",
    "r_precision",
    "precision_at",
    "precision_at_avgjg",
    "average_precision_at",
    "bin_g",
    "inf_ap",
]

RELVALUE_NONPOOL = -1
"""Relevance value of a retrieved document that was not in the judgment pool."""

RELVALUE_UNJUDGED = -2
"""Relevance value of a pooled document that was never judged."""

MIN_GEO_MEAN = 0.00001
"""Lower bound applied to a value before taking its logarithm."""

INFAP_EPSILON = 0.00001
"""Smoothing constant of inferred AP."""


def _ranked(res_rels: ResRels) -> list[int]:
    return res_rels.results_rel_list[: res_rels.num_ret]


def _check_cutoffs(cutoffs: Iterable[int]) -> list[int]:
    ordered = sorted(int(cutoff) for cutoff in cutoffs)
    if not ordered:
        raise ValueError("no cutoff values")
    if ordered[0] <= 0:
        raise ValueError("cutoffs must be positive")
    if len(set(ordered)) != len(ordered):
        raise ValueError("cutoffs must not contain duplicates")
    return ordered


def _ap_sum(rels: Sequence[int], relevance_level: int) -> tuple[float, int]:
    """Sum of precision at each relevant document, and the number of them."""
    total = 0.0
    rel_so_far = 0
    for rank, rel in enumerate(rels, 1):
        if rel >= relevance_level:
            rel_so_far += 1
            total += rel_so_far / rank
    return total, rel_so_far


def average_precision(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Average of the precision after each relevant document (map)."""
    total, rel_so_far = _ap_sum(_ranked(res_rels), relevance_level)
    if rel_so_far:
        return total / res_rels.num_rel
    return 0.0


def gm_average_precision(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Logarithm of average precision, for geometric averaging over topics."""
    value = average_precision(res_rels, relevance_level)
    return math.log(max(value, MIN_GEO_MEAN))


def average_precision_avgjg(
    jgs: Sequence[ResRels], relevance_level: int = 1
) -> float:
    """Average precision averaged over judgment groups."""
    total = sum(average_precision(jg, relevance_level) for jg in jgs)
    return total / len(jgs) if len(jgs) > 1 else total


def r_precision(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Precision after R documents, R being the number of relevant ones."""
    num_to_look_at = min(res_rels.num_ret, res_rels.num_rel)
    if num_to_look_at == 0:
        return 0.0
    rel_so_far = sum(
        1 for rel in _ranked(res_rels)[:num_to_look_at] if rel >= relevance_level
    )
    return rel_so_far / res_rels.num_rel


def precision_at(
    res_rels: ResRels, cutoffs: Iterable[int], relevance_level: int = 1
) -> dict[int, float]:
    """Precision at each document cutoff, keyed by cutoff in ascending order.

    Missing documents past the end of the ranking count as non-relevant.
    """
    ordered = _check_cutoffs(cutoffs)
    rels = _ranked(res_rels)
    rel_counts = [0, *accumulate(1 if rel >= relevance_level else 0 for rel in rels)]
    return {
        cutoff: rel_counts[min(cutoff, len(rels))] / cutoff for cutoff in ordered
    }


def precision_at_avgjg(
    jgs: Sequence[ResRels], cutoffs: Iterable[int], relevance_level: int = 1
) -> dict[int, float]:
    """Precision at cutoffs, averaged over judgment groups."""
    ordered = _check_cutoffs(cutoffs)
    totals = dict.fromkeys(ordered, 0.0)
    for jg in jgs:
        for cutoff, value in precision_at(jg, ordered, relevance_level).items():
            totals[cutoff] += value
    if len(jgs) > 1:
        return {cutoff: value / len(jgs) for cutoff, value in totals.items()}
    return totals


def average_precision_at(
    res_rels: ResRels, cutoffs: Iterable[int], relevance_level: int = 1
) -> dict[int, float]:
    """Average precision over the first documents up to each cutoff (map_cut)."""
    ordered = _check_cutoffs(cutoffs)
    if res_rels.num_rel == 0:
        return dict.fromkeys(ordered, 0.0)
    rels = _ranked(res_rels)
    partial_sums = [0.0]
    rel_so_far = 0
    for rank, rel in enumerate(rels, 1):
        gain = 0.0
        if rel >= relevance_level:
            rel_so_far += 1
            gain = rel_so_far / rank
        partial_sums.append(partial_sums[-1] + gain)
    return {
        cutoff: partial_sums[min(cutoff, len(rels))] / res_rels.num_rel
        for cutoff in ordered
    }


def bin_g(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Binary G: mean over relevant docs of 1 / log2(2 + nonrel before it)."""
    total = 0.0
    rel_so_far = 0
    for index, rel in enumerate(_ranked(res_rels)):
        if rel >= relevance_level:
            rel_so_far += 1
            total += 1.0 / math.log2(3 + index - rel_so_far)
    if rel_so_far:
        return total / res_rels.num_rel
    return 0.0


def inf_ap(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Inferred average precision for a sampled judgment pool."""
    total = 0.0
    nonrel_so_far = 0
    rel_so_far = 0
    pool_unjudged_so_far = 0
    for index, rel in enumerate(_ranked(res_rels)):
        if rel == RELVALUE_NONPOOL:
            continue
        if rel == RELVALUE_UNJUDGED:
            pool_unjudged_so_far += 1
            continue
        if 0 <= rel < relevance_level:
            nonrel_so_far += 1
            continue
        rel_so_far += 1
        if index == 0:
            total += 1.0
        else:
            fj = float(index)
            total += 1.0 / (fj + 1.0) + (fj / (fj + 1.0)) * (
                (rel_so_far - 1 + nonrel_so_far + pool_unjudged_so_far) / fj
            ) * (
                (rel_so_far - 1 + INFAP_EPSILON)
                / (rel_so_far - 1 + nonrel_so_far + 2 * INFAP_EPSILON)
            )
    if res_rels.num_rel:
        total /= res_rels.num_rel
    return total