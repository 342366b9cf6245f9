"""Gain-based measures: normalized discounted cumulative gain (nDCG).

By default the gain of a document is its relevance level.  The gain of any
level can be overridden with ``(rel_level, gain)`` pairs, given either as a
mapping or as an iterable of pairs.  Gains may be zero or negative, and
level 0 may be given a gain.
"""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from itertools import accumulate, islice, repeat

from treceval_measures.counts import ResRels

__all__ = [
    "DEFAULT_NDCG_CUTOFFS",
    "RelGain",
    "Gains",
    "setup_gains",
    "ndcg",
    "ndcg_p",
    "ndcg_cut",
]

DEFAULT_NDCG_CUTOFFS = (5, 10, 15, 20, 30, 100, 200, 500, 1000)
"""Default document cutoffs of ``ndcg_cut``."""

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class RelGain:
    """Gain of one relevance level and the number of judged docs at it."""

    rel_level: int
    num_at_level: int
    gain: float


@dataclass
class Gains:
    """Gains of all relevance levels, sorted by increasing gain."""

    rel_gains: list[RelGain] = field(default_factory=list)

    @property
    def total_num_at_levels(self) -> int:
        """Number of judged documents over all levels."""
        return sum(rg.num_at_level for rg in self.rel_gains)

    def gain(self, rel_level: int) -> float:
        """Gain of ``rel_level``; 0.0 for a level that is not known."""
        for rg in self.rel_gains:
            if rg.rel_level == rel_level:
                return rg.gain
        return 0.0

    def _ideal_gains(self) -> Iterator[float]:
        """Gains of an ideal ranking: best first, positive gains only."""
        for rg in reversed(self.rel_gains):
            if rg.num_at_level <= 0:
                continue
            if rg.gain <= 0.0:
                return
            yield from repeat(rg.gain, rg.num_at_level)


def _atol(name: object) -> int:
    if isinstance(name, int):
        return name
    match = _LEADING_INT.match(str(name))
    return int(match.group(1)) if match else 0


def _pairs(gain_pairs) -> list[tuple[int, float]]:
    if gain_pairs is None:
        return []
    items = gain_pairs.items() if isinstance(gain_pairs, Mapping) else gain_pairs
    return [(_atol(name), float(value)) for name, value in items]


def setup_gains(res_rels: ResRels, gain_pairs=None) -> Gains:
    """Combine explicit gains with the topic's relevance level counts."""
    rel_gains = [RelGain(level, 0, gain) for level, gain in _pairs(gain_pairs)]
    for level, count in enumerate(res_rels.rel_levels):
        match = next((rg for rg in rel_gains if rg.rel_level == level), None)
        if match is not None:
            match.num_at_level = count
        else:
            rel_gains.append(RelGain(level, count, float(level)))
    rel_gains.sort(key=lambda rg: rg.gain)
    return Gains(rel_gains)


def _ranked(res_rels: ResRels) -> list[int]:
    return res_rels.results_rel_list[: res_rels.num_ret]


def _as_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def ndcg(res_rels: ResRels, gain_pairs=None) -> float:
    """nDCG over the whole ranking, discount log2(rank + 1)."""
    gains = setup_gains(res_rels, gain_pairs)
    results_dcg = 0.0
    for index, rel in enumerate(_ranked(res_rels)):
        gain = gains.gain(rel)
        if gain != 0:
            results_dcg += gain / math.log2(index + 2)
    ideal_dcg = 0.0
    for index, gain in enumerate(gains._ideal_gains()):
        ideal_dcg += gain / math.log2(index + 2)
    if ideal_dcg > 0.0:
        return results_dcg / ideal_dcg
    return 0.0


def ndcg_p(res_rels: ResRels, gain_pairs=None) -> float:
    """nDCG with the first document undiscounted and log2(rank) afterwards."""
    gains = setup_gains(res_rels, gain_pairs)
    total = 0.0
    for index, rel in enumerate(_ranked(res_rels)):
        gain = gains.gain(rel)
        if gain != 0:
            total += gain / math.log2(index + 1) if index > 0 else gain
    ideal_dcg = 0.0
    for index, gain in enumerate(gains._ideal_gains()):
        if index == 0:
            ideal_dcg += gain
        else:
            ideal_dcg += gain / _as_float32(math.log2(index + 1))
    if res_rels.num_rel_ret <= 0:
        return 0.0
    if ideal_dcg == 0.0:
        return math.nan if total == 0.0 else math.copysign(math.inf, total)
    return total / ideal_dcg


def _check_cutoffs(cutoffs: Iterable[int]) -> list[int]:
    ordered = sorted(int(cutoff) for cutoff in cutoffs)
    if not ordered:
        raise ValueError("no cutoff values")
    if ordered[0] <= 0:
        raise ValueError("cutoffs must be positive")
    if len(set(ordered)) != len(ordered):
        raise ValueError("cutoffs must not contain duplicates")
    return ordered


def _level_ideal_gains(rel_levels: list[int]) -> Iterator[float]:
    for level in range(len(rel_levels) - 1, 0, -1):
        yield from repeat(float(level), rel_levels[level])


def ndcg_cut(
    res_rels: ResRels, cutoffs: Iterable[int] = DEFAULT_NDCG_CUTOFFS
) -> dict[int, float]:
    """nDCG at each document cutoff, gains being the relevance values.

    Keys are the cutoffs in ascending order.  Where the ideal DCG is not
    positive, the unnormalized DCG is returned.
    """
    ordered = _check_cutoffs(cutoffs)
    rels = _ranked(res_rels)
    dcg = [0.0, *accumulate(
        rel / math.log2(index + 2) if rel > 0 else 0.0
        for index, rel in enumerate(rels)
    )]
    ideal_gains = list(islice(_level_ideal_gains(res_rels.rel_levels), ordered[-1]))
    ideal = [0.0, *accumulate(
        gain / math.log2(index + 2) for index, gain in enumerate(ideal_gains)
    )]
    values = {}
    for cutoff in ordered:
        value = dcg[min(cutoff, len(rels))]
        ideal_dcg = ideal[min(cutoff, len(ideal_gains))]
        if ideal_dcg > 0.0:
            value /= ideal_dcg
        values[cutoff] = value
    return values