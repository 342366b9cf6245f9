"""Measures that depend only on judged documents: binary preference."""

from __future__ import annotations

import math

from treceval_measures.counts import ResRels
from treceval_measures.precision import (
    MIN_GEO_MEAN,
    RELVALUE_NONPOOL,
    RELVALUE_UNJUDGED,
)

__all__ = ["bpref", "gm_bpref"]


def bpref(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Fraction of preferences of relevant over top-R non-relevant docs kept.

    Documents outside the judgment pool and pooled but unjudged documents
    are ignored.
    """
    num_rel = res_rels.num_rel
    num_nonrel = sum(res_rels.rel_levels[:relevance_level])
    total = 0.0
    nonrel_so_far = 0
    for rel in res_rels.results_rel_list[: res_rels.num_ret]:
        if rel in (RELVALUE_NONPOOL, RELVALUE_UNJUDGED):
            continue
        if 0 <= rel < relevance_level:
            nonrel_so_far += 1
        elif nonrel_so_far > 0:
            total += 1.0 - min(nonrel_so_far, num_rel) / min(num_nonrel, num_rel)
        else:
            total += 1.0
    if num_rel:
        total /= num_rel
    return total


def gm_bpref(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Logarithm of bpref, for geometric averaging over topics."""
    return math.log(max(bpref(res_rels, relevance_level), MIN_GEO_MEAN))