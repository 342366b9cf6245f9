"""Reading reference means and standard deviations for Z-score measures.

Each line of a Z-score file is ``qid measure_name mean stddev`` with fields
separated by whitespace.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from itertools import groupby

__all__ = ["ZScoreFormatError", "ZScore", "QueryZScores", "parse_zscores", "read_zscores"]

_NUMBER_PREFIX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class ZScoreFormatError(ValueError):
    """Raised when Z-score text is empty or holds a malformed line."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


@dataclass(frozen=True)
class ZScore:
    """Reference mean and standard deviation of one measure."""

    meas: str
    mean: float
    stddev: float


@dataclass
class QueryZScores:
    """All Z-score references of one query, sorted by measure name."""

    qid: str
    zscores: list[ZScore] = field(default_factory=list)


def _to_float(text: str) -> float:
    """Convert the longest numeric prefix of ``text``; 0.0 if there is none."""
    match = _NUMBER_PREFIX.match(text)
    return float(match.group(0)) if match else 0.0


def _parse_line(line: str, number: int) -> tuple[str, str, float, float]:
    fields = line.split()
    if len(fields) != 4:
        raise ZScoreFormatError(f"Malformed line {number}", line=number)
    qid, meas, mean, stddev = fields
    return qid, meas, _to_float(mean), _to_float(stddev)


def parse_zscores(text: str) -> list[QueryZScores]:
    """Parse Z-score text into per-query lists sorted by qid, then measure."""
    if not text:
        raise ZScoreFormatError("Empty zscores input")
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    entries = [_parse_line(line, number) for number, line in enumerate(lines, 1)]
    entries.sort(key=lambda entry: (entry[0], entry[1]))
    return [
        QueryZScores(
            qid=qid,
            zscores=[ZScore(meas, mean, stddev) for _, meas, mean, stddev in group],
        )
        for qid, group in groupby(entries, key=lambda entry: entry[0])
    ]


def read_zscores(path: str | os.PathLike) -> list[QueryZScores]:
    """Read and parse a Z-score file."""
    with open(path, encoding="utf-8") as handle:
        text = handle.read()
    return parse_zscores(text)