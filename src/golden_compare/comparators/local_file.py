"""Byte-for-byte comparison against golden files on the local disk.

Golden keys are treated as paths relative to the directory of the test file
the comparator was created for.  The comparison is deliberately naive: two
PNGs holding the same pixels but encoded differently are a mismatch.
Decoding and tolerance-based comparison belong in other
:class:`~golden_compare.comparators.base.GoldenFileComparator`
implementations.

All blocking file-system calls are dispatched via ``asyncio.to_thread`` so
that the event loop running the test is never blocked.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from golden_compare.comparators.base import ComparisonResult, GoldenFileComparator
from golden_compare.errors import MissingGoldenError
from golden_compare.models.enums import ComparisonOutcome, PathStyle
from golden_compare.paths import GoldenKey, as_key, resolve_base, resolve_style, to_file_path

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 65536


class LocalFileComparator(GoldenFileComparator):
    """Loads and stores golden files next to the test that uses them.

    Parameters:
        test_file: Location of the test file, as a ``file:`` URI, a path
            string or a ``PathLike``.  Golden keys resolve relative to its
            directory.
        path_style: Path rules to apply.  Defaults to the running
            platform's; tests pass an explicit style to spoof another one.
            ``PathStyle.URL`` is rejected: URL locations belong to
            comparators that do not store goldens on the local disk.

    Raises:
        ValueError: If *path_style* is ``PathStyle.URL``.
    """

    def __init__(self, test_file: GoldenKey, path_style: PathStyle | None = None) -> None:
        self._path_style = resolve_style(path_style)
        if self._path_style is PathStyle.URL:
            raise ValueError("LocalFileComparator needs a file-system path style, not URL")
        self._basedir = resolve_base(test_file, self._path_style)

    @property
    def basedir(self) -> str:
        """Directory-form URI that golden keys are resolved against.

        A ``file:`` URI for absolute test locations; a relative reference
        such as ``./`` when the test file was given without a directory.
        """
        return self._basedir

    @property
    def path_style(self) -> PathStyle:
        return self._path_style

    def golden_path(self, golden: GoldenKey) -> str:
        """Return the native path of the golden file for *golden*."""
        return to_file_path(self._basedir, golden, self._path_style)

    # ------------------------------------------------------------------
    # GoldenFileComparator
    # ------------------------------------------------------------------

    async def compare(self, image_bytes: bytes, golden: GoldenKey) -> ComparisonResult:
        key = as_key(golden)
        path = Path(self.golden_path(key))

        if not await asyncio.to_thread(path.is_file):
            raise MissingGoldenError(key, str(path))

        golden_bytes = await asyncio.to_thread(path.read_bytes)
        actual = bytes(image_bytes)
        offset = _first_difference(actual, golden_bytes)

        details: dict = {
            "path": str(path),
            "byte_length_actual": len(actual),
            "byte_length_golden": len(golden_bytes),
            "first_difference": offset,
        }
        if offset is None:
            logger.debug('Golden "%s" matched (%d bytes)', key, len(actual))
            return ComparisonResult(
                outcome=ComparisonOutcome.MATCHED, golden=key, details=details
            )

        logger.warning(
            'Golden "%s" mismatch: first difference at byte %d (actual %d bytes, golden %d bytes)',
            key,
            offset,
            len(actual),
            len(golden_bytes),
        )
        return ComparisonResult(
            outcome=ComparisonOutcome.MISMATCHED, golden=key, details=details
        )

    async def update(self, golden: GoldenKey, image_bytes: bytes) -> None:
        path = Path(self.golden_path(golden))
        await asyncio.to_thread(_write_durably, path, bytes(image_bytes))
        logger.info("Updated golden file %s (%d bytes)", path, len(image_bytes))

    def __repr__(self) -> str:
        return f"LocalFileComparator(basedir={self._basedir!r}, path_style={self._path_style.value})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _first_difference(a: bytes, b: bytes) -> int | None:
    """Return the offset of the first byte where *a* and *b* differ.

    A payload that is a strict prefix of the other differs at the end of
    the shorter one.  Returns ``None`` when both are identical.
    """
    if a == b:
        return None

    min_len = min(len(a), len(b))
    for start in range(0, min_len, _CHUNK_SIZE):
        end = min(start + _CHUNK_SIZE, min_len)
        if a[start:end] == b[start:end]:
            continue
        for index in range(start, end):
            if a[index] != b[index]:
                return index

    return min_len


def _write_durably(path: Path, data: bytes) -> None:
    """Create parent directories, then write and fsync *data* to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as fh:
        fh.write(data)
        fh.flush()
        os.fsync(fh.fileno())
