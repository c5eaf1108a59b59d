"""Golden file comparators.

Public API:

* :class:`ComparisonResult` -- data-class returned by every comparator.
* :class:`GoldenFileComparator` -- abstract base class.
* :class:`TrivialComparator`
* :class:`LocalFileComparator`
* :func:`get_comparator` -- factory that maps a
  :class:`~golden_compare.models.enums.ComparatorKind` to a comparator
  instance.
"""

from __future__ import annotations

from golden_compare.comparators.base import ComparisonResult, GoldenFileComparator
from golden_compare.comparators.local_file import LocalFileComparator
from golden_compare.comparators.trivial import TrivialComparator
from golden_compare.models.enums import ComparatorKind, PathStyle
from golden_compare.paths import GoldenKey

__all__ = [
    "ComparisonResult",
    "GoldenFileComparator",
    "LocalFileComparator",
    "TrivialComparator",
    "get_comparator",
]


def get_comparator(
    kind: ComparatorKind,
    test_file: GoldenKey | None = None,
    path_style: PathStyle | None = None,
) -> GoldenFileComparator:
    """Return a comparator instance for the given *kind*.

    Raises:
        ValueError: If *kind* is not a recognised
            :class:`~golden_compare.models.enums.ComparatorKind`, or if
            ``LOCAL_FILE`` is requested without a *test_file*.
    """
    if kind == ComparatorKind.TRIVIAL:
        return TrivialComparator()
    if kind == ComparatorKind.LOCAL_FILE:
        if test_file is None:
            raise ValueError("LOCAL_FILE comparator requires the location of the test file")
        return LocalFileComparator(test_file, path_style=path_style)
    raise ValueError(
        f"Unknown comparator kind {kind!r}. "
        f"Supported kinds: {', '.join(k.value for k in ComparatorKind)}"
    )
