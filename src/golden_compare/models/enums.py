"""PathStyle, ComparisonOutcome, and ComparatorKind enums."""

from enum import StrEnum


class PathStyle(StrEnum):
    """Path rules used to turn golden keys into file-system paths.

    ``URL`` keeps locations in URI form end to end, which is what a
    comparator backed by something other than the local disk would use.
    """

    POSIX = "POSIX"
    WINDOWS = "WINDOWS"
    URL = "URL"


class ComparisonOutcome(StrEnum):
    """How a golden file comparison concluded."""

    MATCHED = "MATCHED"
    MISMATCHED = "MISMATCHED"
    SKIPPED = "SKIPPED"
    UPDATED = "UPDATED"


class ComparatorKind(StrEnum):
    """Comparator implementations that can be selected through configuration."""

    TRIVIAL = "TRIVIAL"
    LOCAL_FILE = "LOCAL_FILE"
