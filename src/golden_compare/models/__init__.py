"""Core enums for the golden-compare package."""

from golden_compare.models.enums import ComparatorKind, ComparisonOutcome, PathStyle

__all__ = [
    "ComparatorKind",
    "ComparisonOutcome",
    "PathStyle",
]
