"""Per-query retrieval evaluation measures and z-score reference data."""

__version__ = "9.0.4"

__all__ = [
    "counts",
    "zscores",
    "precision",
    "interpolated",
    "judged",
    "gains",
    "graded",
    "prefs",
]