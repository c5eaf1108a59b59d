"""Placeholder comparator installed until a test session sets up a real one."""

from __future__ import annotations

import logging

from golden_compare.comparators.base import ComparisonResult, GoldenFileComparator
from golden_compare.errors import ComparatorNotInitializedError
from golden_compare.models.enums import ComparisonOutcome
from golden_compare.paths import GoldenKey, as_key

logger = logging.getLogger(__name__)


class TrivialComparator(GoldenFileComparator):
    """Skips every comparison and refuses every update.

    Running a test outside a managed session (for example straight from an
    editor) leaves this comparator active, so comparisons are logged and
    reported as passing.  Updates still fail: silently dropping a golden
    write would hide a missing bootstrap.
    """

    async def compare(self, image_bytes: bytes, golden: GoldenKey) -> ComparisonResult:
        key = as_key(golden)
        logger.info('Golden file comparison requested for "%s"; skipping...', key)
        return ComparisonResult(
            outcome=ComparisonOutcome.SKIPPED,
            golden=key,
            details={"byte_length_actual": len(image_bytes)},
        )

    async def update(self, golden: GoldenKey, image_bytes: bytes) -> None:
        raise ComparatorNotInitializedError()

    def get_test_uri(self, key: GoldenKey, version: int | None = None) -> str:
        return as_key(key)

    def __repr__(self) -> str:
        return "TrivialComparator()"
