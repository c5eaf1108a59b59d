"""Golden file assertions for tests."""

from __future__ import annotations

import logging

from golden_compare.comparators.base import ComparisonResult
from golden_compare.errors import GoldenMismatchError
from golden_compare.models.enums import ComparisonOutcome
from golden_compare.paths import GoldenKey
from golden_compare.registry import GoldenContext, get_context

logger = logging.getLogger(__name__)


async def match_golden_file(
    image_bytes: bytes,
    key: GoldenKey,
    *,
    version: int | None = None,
    context: GoldenContext | None = None,
) -> ComparisonResult:
    """Assert that *image_bytes* match the golden file identified by *key*.

    In auto-update mode the bytes become the new golden and the assertion
    passes.  Otherwise the comparator's verdict is enforced.

    Parameters
    ----------
    image_bytes:
        Encoded image produced by the test.
    key:
        Golden key, relative to the comparator's base location.
    version:
        Optional historical version spliced into the key.
    context:
        Comparator and auto-update flag to use.  Defaults to the active
        context from :mod:`golden_compare.registry`.

    Raises
    ------
    GoldenMismatchError
        If the comparator reports (or raises) a mismatch.
    MissingGoldenError
        If the golden file does not exist.
    ComparatorNotInitializedError
        If auto-update mode is on but no real comparator is installed.
    """
    context = context if context is not None else get_context()
    comparator = context.comparator
    golden = comparator.get_test_uri(key, version)

    if context.auto_update:
        await comparator.update(golden, image_bytes)
        return ComparisonResult(
            outcome=ComparisonOutcome.UPDATED,
            golden=golden,
            details={"byte_length_actual": len(image_bytes)},
        )

    result = await comparator.compare(image_bytes, golden)
    if not result.matched:
        raise GoldenMismatchError(result)
    logger.debug('Golden "%s": %s', golden, result.outcome.value)
    return result
