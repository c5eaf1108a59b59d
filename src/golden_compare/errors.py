"""Exceptions raised by golden file comparators and the matcher."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from golden_compare.comparators.base import ComparisonResult


class GoldenError(Exception):
    """Base class for every golden-compare failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MissingGoldenError(GoldenError, FileNotFoundError):
    """The golden file a comparison asked for does not exist.

    This usually points at a typo in the key or a golden that was never
    generated, so it is always raised rather than reported as a mismatch.
    """

    def __init__(self, golden: str, path: str | None = None) -> None:
        super().__init__(f'Could not be compared against non-existent file: "{golden}"')
        self.golden = golden
        self.path = path


class GoldenMismatchError(GoldenError, AssertionError):
    """Image bytes differ from the golden file.

    Comparators may raise this themselves to control the failure message;
    :func:`~golden_compare.matcher.match_golden_file` raises it for any
    mismatched :class:`~golden_compare.comparators.base.ComparisonResult`.
    """

    def __init__(self, result: ComparisonResult, message: str | None = None) -> None:
        super().__init__(message or _describe_mismatch(result))
        self.result = result


class ComparatorNotInitializedError(GoldenError, RuntimeError):
    """A golden update was requested before a real comparator was installed."""

    def __init__(self, message: str = "golden file comparator has not been initialized") -> None:
        super().__init__(message)


def _describe_mismatch(result: ComparisonResult) -> str:
    details = result.details
    parts = [f'Image does not match golden file "{result.golden}"']
    if "byte_length_actual" in details and "byte_length_golden" in details:
        parts.append(
            f"(actual {details['byte_length_actual']} bytes, "
            f"golden {details['byte_length_golden']} bytes"
        )
        offset = details.get("first_difference")
        if offset is not None:
            parts[-1] += f", first difference at byte {offset}"
        parts[-1] += ")"
    return " ".join(parts)
