"""Preference measures averaged over judgment groups.

A judgment group (jg) holds the preferences of one user for one topic,
expressed either as equivalence classes of documents with the same
relevance level, or as a full preference array.  Counts of fulfilled and
possible preferences are formed elsewhere and handed in through
:class:`JudgmentGroupPrefs`; the ``Rnonrel`` measures go back to the
equivalence classes or the preference array to recount them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import takewhile

__all__ = [
    "EquivalenceClass",
    "JudgmentGroupPrefs",
    "ResultsPrefs",
    "prefs_avgjg",
    "prefs_avgjg_imp",
    "prefs_avgjg_ret",
    "prefs_avgjg_rnonrel",
    "prefs_avgjg_rnonrel_ret",
]


@dataclass
class EquivalenceClass:
    """Documents of one relevance level, given by their judged-doc ranks.

    ``docid_ranks`` are positions in the ranking of judged documents, in
    increasing order; ranks below ``num_judged_ret`` were retrieved.
    """

    rel_level: float
    docid_ranks: list[int] = field(default_factory=list)

    @property
    def num_in_ec(self) -> int:
        return len(self.docid_ranks)


@dataclass
class JudgmentGroupPrefs:
    """Preference counts and preference structure of one judgment group.

    Preferences are given either by ``ecs`` (sorted by decreasing relevance,
    the last class holding the non-relevant documents) or, when ``ecs`` is
    empty, by ``prefs_array`` where ``prefs_array[i][j]`` is true if the
    document at judged rank i is preferred to the one at rank j.
    ``rel_array[i]`` is the relevance of the document at judged rank i.
    """

    num_prefs_fulfilled_ret: int = 0
    num_prefs_possible_ret: int = 0
    num_prefs_fulfilled_imp: int = 0
    num_prefs_possible_imp: int = 0
    num_prefs_possible_notoccur: int = 0
    num_nonrel: int = 0
    num_nonrel_ret: int = 0
    num_rel: int = 0
    num_rel_ret: int = 0
    ecs: list[EquivalenceClass] = field(default_factory=list)
    prefs_array: list[list[int]] = field(default_factory=list)
    rel_array: list[float] = field(default_factory=list)

    @property
    def num_judged(self) -> int:
        return len(self.prefs_array)


@dataclass
class ResultsPrefs:
    """Preference information of one topic over all its judgment groups."""

    jgs: list[JudgmentGroupPrefs] = field(default_factory=list)
    num_judged_ret: int = 0

    @property
    def num_jgs(self) -> int:
        return len(self.jgs)


def _ratio(num: int, den: int) -> float:
    """Floating division; 0/0 gives NaN and x/0 an infinity, as in IEEE."""
    if den:
        return num / den
    if num == 0:
        return math.nan
    return math.copysign(math.inf, num)


def _average(sum_: float, results_prefs: ResultsPrefs) -> float:
    if sum_ > 0.0:
        return sum_ / results_prefs.num_jgs
    return 0.0


def _avg_simple(results_prefs: ResultsPrefs, counts) -> float:
    total = 0.0
    for jg in results_prefs.jgs:
        ful, poss = counts(jg)
        if poss:
            total += ful / poss
    return _average(total, results_prefs)


def prefs_avgjg(results_prefs: ResultsPrefs) -> float:
    """Fulfilled over possible preferences per jg, averaged over jgs.

    Implied preferences count, and a pair with neither document retrieved
    counts as a failure.
    """
    return _avg_simple(
        results_prefs,
        lambda jg: (
            jg.num_prefs_fulfilled_ret + jg.num_prefs_fulfilled_imp,
            jg.num_prefs_possible_ret
            + jg.num_prefs_possible_imp
            + jg.num_prefs_possible_notoccur,
        ),
    )


def prefs_avgjg_imp(results_prefs: ResultsPrefs) -> float:
    """As :func:`prefs_avgjg`, ignoring pairs with neither doc retrieved."""
    return _avg_simple(
        results_prefs,
        lambda jg: (
            jg.num_prefs_fulfilled_ret + jg.num_prefs_fulfilled_imp,
            jg.num_prefs_possible_ret + jg.num_prefs_possible_imp,
        ),
    )


def prefs_avgjg_ret(results_prefs: ResultsPrefs) -> float:
    """As :func:`prefs_avgjg`, counting only pairs with both docs retrieved."""
    return _avg_simple(
        results_prefs,
        lambda jg: (jg.num_prefs_fulfilled_ret, jg.num_prefs_possible_ret),
    )


def _ec_counts(
    jg: JudgmentGroupPrefs, num_judged_ret: int, keep: int, retrieved_only: bool
) -> tuple[int, int]:
    """Recount preferences from the equivalence classes.

    The last class is replaced by its first ``keep`` documents when pairing
    with the non-relevant docs.
    """
    def ranks(docid_ranks: Sequence[int]):
        if retrieved_only:
            return list(takewhile(lambda rank: rank < num_judged_ret, docid_ranks))
        return list(docid_ranks)

    def count(ranks1: Sequence[int], ranks2: Sequence[int]) -> tuple[int, int]:
        ful = poss = 0
        for r1 in ranks(ranks1):
            for r2 in ranks(ranks2):
                if r1 < r2 and r1 < num_judged_ret:
                    ful += 1
                else:
                    poss += 1
        return ful, poss

    num_ful = num_poss = 0
    ecs = jg.ecs
    new_nonrel = ecs[-1].docid_ranks[:keep]
    for ec1_index, ec1 in enumerate(ecs):
        for ec2 in ecs[ec1_index + 1 : len(ecs) - 1]:
            ful, poss = count(ec1.docid_ranks, ec2.docid_ranks)
            num_ful += ful
            num_poss += poss
    for ec1 in ecs:
        ful, poss = count(ec1.docid_ranks, new_nonrel)
        num_ful += ful
        num_poss += poss
    return num_ful, num_poss + num_ful


def _array_counts(
    jg: JudgmentGroupPrefs, num_judged_ret: int, retrieved_only: bool
) -> tuple[int, int]:
    """Recount preferences from the preference array.

    Non-relevant docs after the first ``num_rel`` of them are ignored.
    """
    a = jg.prefs_array
    rel_array = jg.rel_array
    num_judged = jg.num_judged
    search_limit = num_judged_ret if retrieved_only else num_judged

    first_discarded = search_limit
    nonrel_seen = 0
    for i in range(search_limit):
        if rel_array[i] == 0.0:
            nonrel_seen += 1
            if nonrel_seen == jg.num_rel + 1:
                first_discarded = i
                break

    def kept(index: int) -> bool:
        return not (index >= first_discarded and rel_array[index] == 0.0)

    def hits(row: int, columns: range) -> int:
        return sum(1 for j in columns if kept(j) and a[row][j])

    num_ful = num_poss = 0
    for i in filter(kept, range(num_judged_ret)):
        num_poss += hits(i, range(i))
        num_ful += hits(i, range(i + 1, num_judged_ret))
        if not retrieved_only:
            num_ful += hits(i, range(num_judged_ret, num_judged))
    if not retrieved_only:
        for i in filter(kept, range(num_judged_ret, num_judged)):
            num_poss += hits(i, range(num_judged_ret))
            num_poss += hits(i, range(num_judged_ret, num_judged))
    return num_ful, num_poss + num_ful


def _recalculate(
    jg: JudgmentGroupPrefs, num_judged_ret: int, retrieved_only: bool
) -> tuple[int, int]:
    if jg.ecs:
        keep = jg.num_rel_ret if retrieved_only else jg.num_rel
        return _ec_counts(jg, num_judged_ret, keep, retrieved_only)
    return _array_counts(jg, num_judged_ret, retrieved_only)


def prefs_avgjg_rnonrel(results_prefs: ResultsPrefs) -> float:
    """As :func:`prefs_avgjg` with the non-relevant docs of each jg set to R.

    With N non-relevant and R relevant docs, R * (R - N) fulfilled
    preferences are added when N < R; when N > R only the first R
    non-relevant docs are used and the preferences are recounted.
    """
    total = 0.0
    for jg in results_prefs.jgs:
        big_r, big_n = jg.num_rel, jg.num_nonrel
        if big_r >= big_n:
            num_ful = (
                jg.num_prefs_fulfilled_ret
                + jg.num_prefs_fulfilled_imp
                + jg.num_rel_ret * (big_r - big_n)
            )
            num_poss = (
                jg.num_prefs_possible_ret
                + jg.num_prefs_possible_imp
                + jg.num_prefs_possible_notoccur
                + jg.num_rel * (big_r - big_n)
            )
        else:
            num_ful, num_poss = _recalculate(
                jg, results_prefs.num_judged_ret, retrieved_only=False
            )
        total += _ratio(num_ful, num_poss)
    return _average(total, results_prefs)


def prefs_avgjg_rnonrel_ret(results_prefs: ResultsPrefs) -> float:
    """As :func:`prefs_avgjg_rnonrel`, counting only retrieved docs."""
    total = 0.0
    for jg in results_prefs.jgs:
        big_r, big_n = jg.num_rel_ret, jg.num_nonrel_ret
        if big_r >= big_n:
            num_ful = jg.num_prefs_fulfilled_ret + jg.num_rel_ret * (big_r - big_n)
            num_poss = jg.num_prefs_possible_ret + jg.num_rel * (big_r - big_n)
        else:
            num_ful, num_poss = _recalculate(
                jg, results_prefs.num_judged_ret, retrieved_only=True
            )
        total += _ratio(num_ful, num_poss)
    return _average(total, results_prefs)