"""Interpolated precision measures and precision at multiples of R.

Cutoffs are fractions: recall levels for the interpolated measures and
multiples of the number of relevant documents for ``rprec_mult``.  They are
turned into document counts as ``int(fraction * num_rel + 0.9)``.  This keeps
the default recall points on the same cutoffs as the historical
implementations.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from treceval_measures.counts import ResRels

__all__ = [
    "DEFAULT_RECALL_CUTOFFS",
    "DEFAULT_RPREC_MULT_CUTOFFS",
    "iprec_at_recall",
    "eleven_pt_avg",
    "rprec_mult",
    "rprec_mult_avgjg",
]

DEFAULT_RECALL_CUTOFFS = (0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)
"""The eleven standard recall points."""

DEFAULT_RPREC_MULT_CUTOFFS = (0.2, 0.4, 0.6, 0.8, 1.0, 1.2, 1.4, 1.6, 1.8, 2.0)
"""Default multiples of R for ``rprec_mult``."""


def _sorted_fractions(cutoffs: Iterable[float]) -> list[float]:
    ordered = sorted(float(cutoff) for cutoff in cutoffs)
    if not ordered:
        raise ValueError("no cutoff values")
    return ordered


def _doc_cutoffs(fractions: Sequence[float], num_rel: int) -> list[int]:
    return [int(fraction * num_rel + 0.9) for fraction in fractions]


def _reverse_ranks(res_rels: ResRels):
    """Yield ``(rank, relevance)`` from the last retrieved document upwards."""
    rels = res_rels.results_rel_list[: res_rels.num_ret]
    return zip(range(res_rels.num_ret, 0, -1), reversed(rels))


def _interpolated_values(
    res_rels: ResRels, fractions: Sequence[float], relevance_level: int
) -> list[float]:
    """Interpolated precision at each recall fraction (fractions ascending).

    Int_Prec(X) is the maximum precision at any rank Y >= X.  A topic with
    nothing retrieved has interpolated precision 0.
    """
    cutoffs = _doc_cutoffs(fractions, res_rels.num_rel)
    values = [0.0] * len(cutoffs)
    num_rel_ret = res_rels.num_rel_ret
    # Recall levels that were never reached keep precision 0.
    pending = [index for index, cutoff in enumerate(cutoffs) if cutoff <= num_rel_ret]

    int_precis = num_rel_ret / res_rels.num_ret if res_rels.num_ret else 0.0
    rel_so_far = num_rel_ret
    for rank, rel in _reverse_ranks(res_rels):
        if rel_so_far <= 0:
            break
        int_precis = max(int_precis, rel_so_far / rank)
        if rel >= relevance_level:
            while pending and cutoffs[pending[-1]] == rel_so_far:
                values[pending.pop()] = int_precis
            rel_so_far -= 1

    for index in pending:
        values[index] = int_precis
    return values


def iprec_at_recall(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RECALL_CUTOFFS,
    relevance_level: int = 1,
) -> dict[float, float]:
    """Interpolated precision at each recall cutoff, keyed by cutoff ascending."""
    fractions = _sorted_fractions(cutoffs)
    values = _interpolated_values(res_rels, fractions, relevance_level)
    return dict(zip(fractions, values))


def eleven_pt_avg(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RECALL_CUTOFFS,
    relevance_level: int = 1,
) -> float:
    """Interpolated precision averaged over all the given recall cutoffs."""
    fractions = _sorted_fractions(cutoffs)
    values = _interpolated_values(res_rels, fractions, relevance_level)
    return sum(values) / len(values)


def _rprec_mult_values(
    res_rels: ResRels, fractions: Sequence[float], relevance_level: int
) -> list[float]:
    cutoffs = _doc_cutoffs(fractions, res_rels.num_rel)
    values = [0.0] * len(cutoffs)
    pending = list(range(len(cutoffs)))
    num_rel_ret = res_rels.num_rel_ret

    # Cutoffs past the end of the ranking: missing documents are non-relevant.
    while pending and cutoffs[pending[-1]] > res_rels.num_ret:
        index = pending.pop()
        values[index] = num_rel_ret / cutoffs[index]

    rel_so_far = num_rel_ret
    for rank, rel in _reverse_ranks(res_rels):
        if rel_so_far <= 0:
            break
        precis = rel_so_far / rank
        while pending and cutoffs[pending[-1]] == rank:
            values[pending.pop()] = precis
        if rel >= relevance_level:
            rel_so_far -= 1
    return values


def rprec_mult(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RPREC_MULT_CUTOFFS,
    relevance_level: int = 1,
) -> dict[float, float]:
    """Precision at multiples of R, keyed by multiple in ascending order."""
    fractions = _sorted_fractions(cutoffs)
    values = _rprec_mult_values(res_rels, fractions, relevance_level)
    return dict(zip(fractions, values))


def rprec_mult_avgjg(
    jgs: Sequence[ResRels],
    cutoffs: Iterable[float] = DEFAULT_RPREC_MULT_CUTOFFS,
    relevance_level: int = 1,
) -> dict[float, float]:
    """Precision at multiples of R, averaged over judgment groups."""
    fractions = _sorted_fractions(cutoffs)
    totals = [0.0] * len(fractions)
    for jg in jgs:
        values = _rprec_mult_values(jg, fractions, relevance_level)
        totals = [total + value for total, value in zip(totals, values)]
    if len(jgs) > 1:
        totals = [total / len(jgs) for total in totals]
    return dict(zip(fractions, totals))