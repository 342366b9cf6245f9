"""Per-topic document counts and their summaries over all topics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

__all__ = [
    "ResRels",
    "num_ret",
    "num_rel",
    "num_rel_ret",
    "num_nonrel_judged_ret",
    "average_num_q",
    "total_num_rel",
]


@dataclass
class ResRels:
    """Relevance of the retrieved documents of one topic, in rank order.

    ``results_rel_list`` holds the relevance value of each retrieved document.
    ``rel_levels[i]`` is the number of judged documents at relevance level i.
    ``num_ret`` defaults to the length of ``results_rel_list``.
    """

    results_rel_list: list[int] = field(default_factory=list)
    rel_levels: list[int] = field(default_factory=list)
    num_rel: int = 0
    num_rel_ret: int = 0
    num_nonpool: int = 0
    num_unjudged_in_pool: int = 0
    num_ret: int | None = None

    def __post_init__(self) -> None:
        self.results_rel_list = list(self.results_rel_list)
        self.rel_levels = list(self.rel_levels)
        if self.num_ret is None:
            self.num_ret = len(self.results_rel_list)

    def num_rel_levels(self) -> int:
        """Number of distinct relevance levels (0 up to the highest seen)."""
        return len(self.rel_levels)


def num_ret(res_rels: ResRels) -> int:
    """Number of documents retrieved for the topic."""
    return res_rels.num_ret


def num_rel(res_rels: ResRels) -> int:
    """Number of relevant documents for the topic."""
    return res_rels.num_rel


def num_rel_ret(res_rels: ResRels) -> int:
    """Number of relevant documents retrieved for the topic."""
    return res_rels.num_rel_ret


def num_nonrel_judged_ret(res_rels: ResRels) -> int:
    """Number of judged non-relevant documents retrieved for the topic."""
    return (
        res_rels.num_ret
        - res_rels.num_nonpool
        - res_rels.num_unjudged_in_pool
        - res_rels.num_rel_ret
    )


def average_num_q(num_queries: int, num_q_rels: int, average_complete: bool) -> int:
    """Number of topics averaged over.

    When averaging over all judged topics, the number of topics in the
    relevance information is used rather than the number evaluated.
    """
    return num_q_rels if average_complete else num_queries


def _count_positive(rels: Iterable[int]) -> int:
    return sum(1 for rel in rels if rel > 0)


def total_num_rel(query_judgments: Iterable[tuple[str, Iterable]]) -> int:
    """Count relevant judgments over every topic of the relevance information.

    Each item is ``(rel_format, judgments)``.  For the ``"qrels"`` format the
    judgments are relevance values; for ``"qrels_jg"`` they are one sequence
    of relevance values per judgment group.  Any other format is an error.
    """
    total = 0
    for rel_format, judgments in query_judgments:
        if rel_format == "qrels":
            total += _count_positive(judgments)
        elif rel_format == "qrels_jg":
            total += sum(_count_positive(group) for group in judgments)
        else:
            raise ValueError(
                f"rel_info format {rel_format!r} is not qrels or qrels_jg"
            )
    return total