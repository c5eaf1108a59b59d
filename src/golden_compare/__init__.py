"""Golden file comparison for visual regression tests.

Public API:

* :func:`match_golden_file` -- the assertion tests call.
* :class:`GoldenFileComparator`, :class:`LocalFileComparator`,
  :class:`TrivialComparator`, :class:`ComparisonResult`.
* :class:`GoldenContext` and the registry helpers that manage the active
  comparator and auto-update flag.
"""

from golden_compare.comparators import (
    ComparisonResult,
    GoldenFileComparator,
    LocalFileComparator,
    TrivialComparator,
    get_comparator,
)
from golden_compare.errors import (
    ComparatorNotInitializedError,
    GoldenError,
    GoldenMismatchError,
    MissingGoldenError,
)
from golden_compare.matcher import match_golden_file
from golden_compare.models.enums import ComparatorKind, ComparisonOutcome, PathStyle
from golden_compare.registry import (
    DEFAULT_CONTEXT,
    GoldenContext,
    bootstrap,
    get_context,
    override,
    reset_context,
    set_auto_update,
    set_comparator,
    set_context,
    use_context,
)

__all__ = [
    "DEFAULT_CONTEXT",
    "ComparatorKind",
    "ComparatorNotInitializedError",
    "ComparisonOutcome",
    "ComparisonResult",
    "GoldenContext",
    "GoldenError",
    "GoldenFileComparator",
    "GoldenMismatchError",
    "LocalFileComparator",
    "MissingGoldenError",
    "PathStyle",
    "TrivialComparator",
    "bootstrap",
    "get_comparator",
    "get_context",
    "match_golden_file",
    "override",
    "reset_context",
    "set_auto_update",
    "set_comparator",
    "set_context",
    "use_context",
]
