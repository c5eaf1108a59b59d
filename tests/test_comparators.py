"""Tests for golden file comparators."""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from golden_compare.comparators import get_comparator
from golden_compare.comparators.base import ComparisonResult, GoldenFileComparator
from golden_compare.comparators.local_file import LocalFileComparator, _first_difference
from golden_compare.comparators.trivial import TrivialComparator
from golden_compare.errors import ComparatorNotInitializedError, MissingGoldenError
from golden_compare.models.enums import ComparatorKind, ComparisonOutcome, PathStyle


# ======================================================================
# Factory
# ======================================================================


class TestGetComparator:
    """Tests for the get_comparator factory function."""

    def test_trivial(self) -> None:
        assert isinstance(get_comparator(ComparatorKind.TRIVIAL), TrivialComparator)

    def test_local_file(self, tmp_path: Path) -> None:
        comparator = get_comparator(ComparatorKind.LOCAL_FILE, test_file=tmp_path / "test_x.py")
        assert isinstance(comparator, LocalFileComparator)

    def test_local_file_requires_test_file(self) -> None:
        with pytest.raises(ValueError, match="requires the location"):
            get_comparator(ComparatorKind.LOCAL_FILE)

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown comparator kind"):
            get_comparator("NONEXISTENT")  # type: ignore[arg-type]


# ======================================================================
# TrivialComparator
# ======================================================================


class TestTrivialComparator:
    """Tests for TrivialComparator."""

    def setup_method(self) -> None:
        self.cmp = TrivialComparator()

    @pytest.mark.asyncio
    async def test_compare_always_matches(self) -> None:
        r = await self.cmp.compare(b"\x00\x01", "anything.png")
        assert r.matched is True
        assert r.outcome == ComparisonOutcome.SKIPPED
        assert r.golden == "anything.png"

    @pytest.mark.asyncio
    async def test_compare_logs_skipped_key(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO", logger="golden_compare"):
            await self.cmp.compare(b"", "goldens/button.png")
        assert 'Golden file comparison requested for "goldens/button.png"; skipping...' in caplog.text

    @pytest.mark.asyncio
    async def test_update_always_fails(self) -> None:
        with pytest.raises(ComparatorNotInitializedError, match="not been initialized"):
            await self.cmp.update("x.png", b"\x01")

    def test_get_test_uri_is_identity(self) -> None:
        assert self.cmp.get_test_uri("foo.png") == "foo.png"
        assert self.cmp.get_test_uri("foo.png", 2) == "foo.png"


# ======================================================================
# LocalFileComparator
# ======================================================================


class TestLocalFileComparator:
    """Tests for LocalFileComparator against a temporary test directory."""

    @pytest.fixture
    def cmp(self, tmp_path: Path) -> LocalFileComparator:
        return LocalFileComparator(tmp_path / "test_widget.py")

    # --- base directory ---

    def test_basedir_is_test_directory(self, cmp: LocalFileComparator, tmp_path: Path) -> None:
        assert cmp.basedir.startswith("file://")
        assert cmp.basedir.endswith("/")
        assert Path(cmp.golden_path("c.png")) == tmp_path / "c.png"

    def test_basedir_from_file_uri(self) -> None:
        cmp = LocalFileComparator("file:///a/b/test.py", path_style=PathStyle.POSIX)
        assert cmp.basedir == "file:///a/b/"
        assert cmp.golden_path("c.png") == "/a/b/c.png"

    def test_spoofed_windows_style(self) -> None:
        cmp = LocalFileComparator("C:\\a\\b\\test.py", path_style=PathStyle.WINDOWS)
        assert cmp.path_style is PathStyle.WINDOWS
        assert cmp.golden_path("goldens/c.png") == "C:\\a\\b\\goldens\\c.png"

    def test_bare_filename_resolves_to_current_directory(self) -> None:
        posix = LocalFileComparator("test_x.py", path_style=PathStyle.POSIX)
        assert posix.basedir == "./"
        assert posix.golden_path("c.png") == "./c.png"

        windows = LocalFileComparator("test_x.py", path_style=PathStyle.WINDOWS)
        assert windows.golden_path("c.png") == ".\\c.png"

    def test_url_style_rejected(self) -> None:
        with pytest.raises(ValueError, match="file-system path style"):
            LocalFileComparator("https://ci.example.com/suite/test.py", path_style=PathStyle.URL)

    # --- compare / update ---

    @pytest.mark.asyncio
    async def test_update_then_compare_identical(self, cmp: LocalFileComparator) -> None:
        await cmp.update("x.png", b"\x01\x02\x03")
        r = await cmp.compare(b"\x01\x02\x03", "x.png")
        assert r.matched is True
        assert r.outcome == ComparisonOutcome.MATCHED
        assert r.details["first_difference"] is None

    @pytest.mark.asyncio
    async def test_different_byte_mismatches(self, cmp: LocalFileComparator) -> None:
        await cmp.update("x.png", b"\x01\x02\x03")
        r = await cmp.compare(b"\x01\x02\x04", "x.png")
        assert r.matched is False
        assert not r
        assert r.outcome == ComparisonOutcome.MISMATCHED
        assert r.details["first_difference"] == 2

    @pytest.mark.asyncio
    async def test_length_difference_mismatches(self, cmp: LocalFileComparator) -> None:
        await cmp.update("x.png", b"\x01\x02\x03")
        r = await cmp.compare(b"\x01\x02\x03\x04", "x.png")
        assert r.matched is False
        assert r.details["byte_length_actual"] == 4
        assert r.details["byte_length_golden"] == 3
        assert r.details["first_difference"] == 3

    @pytest.mark.asyncio
    async def test_empty_golden(self, cmp: LocalFileComparator) -> None:
        await cmp.update("empty.png", b"")
        assert (await cmp.compare(b"", "empty.png")).matched is True
        assert (await cmp.compare(b"\x00", "empty.png")).matched is False

    @pytest.mark.asyncio
    async def test_accepts_bytearray_and_memoryview(self, cmp: LocalFileComparator) -> None:
        await cmp.update("x.png", bytearray(b"\x89PNG"))
        assert (await cmp.compare(memoryview(b"\x89PNG"), "x.png")).matched is True

    @pytest.mark.asyncio
    async def test_missing_golden_raises(self, cmp: LocalFileComparator) -> None:
        with pytest.raises(MissingGoldenError, match='non-existent file: "missing.png"'):
            await cmp.compare(b"\x01", "missing.png")

    @pytest.mark.asyncio
    async def test_missing_golden_is_file_not_found(self, cmp: LocalFileComparator) -> None:
        with pytest.raises(FileNotFoundError):
            await cmp.compare(b"\x01", "missing.png")

    @pytest.mark.asyncio
    async def test_directory_is_not_a_golden(self, cmp: LocalFileComparator, tmp_path: Path) -> None:
        (tmp_path / "goldens").mkdir()
        with pytest.raises(MissingGoldenError):
            await cmp.compare(b"\x01", "goldens")

    @pytest.mark.asyncio
    async def test_update_creates_parent_directories(
        self, cmp: LocalFileComparator, tmp_path: Path
    ) -> None:
        await cmp.update("goldens/nested/x.png", b"\x01")
        assert (tmp_path / "goldens" / "nested" / "x.png").read_bytes() == b"\x01"

    @pytest.mark.asyncio
    async def test_update_overwrites(self, cmp: LocalFileComparator, tmp_path: Path) -> None:
        await cmp.update("x.png", b"\x01\x02\x03\x04")
        await cmp.update("x.png", b"\x09")
        assert (tmp_path / "x.png").read_bytes() == b"\x09"

    @pytest.mark.asyncio
    async def test_update_is_idempotent(self, cmp: LocalFileComparator, tmp_path: Path) -> None:
        await cmp.update("x.png", b"\x01\x02")
        first = (tmp_path / "x.png").read_bytes()
        await cmp.update("x.png", b"\x01\x02")
        assert (tmp_path / "x.png").read_bytes() == first
        assert (await cmp.compare(b"\x01\x02", "x.png")).matched is True

    @pytest.mark.asyncio
    async def test_versioned_key(self, cmp: LocalFileComparator, tmp_path: Path) -> None:
        key = cmp.get_test_uri("button.png", 2)
        assert key == "button.2.png"
        await cmp.update(key, b"\x01")
        assert (tmp_path / "button.2.png").exists()

    @pytest.mark.asyncio
    async def test_pathlike_key(self, cmp: LocalFileComparator, tmp_path: Path) -> None:
        await cmp.update(Path("goldens") / "x.png", b"\x05")
        r = await cmp.compare(b"\x05", Path("goldens") / "x.png")
        assert r.golden == "goldens/x.png"
        assert r.matched is True

    @pytest.mark.asyncio
    async def test_mismatch_logs_warning(
        self, cmp: LocalFileComparator, caplog: pytest.LogCaptureFixture
    ) -> None:
        await cmp.update("x.png", b"\x01")
        with caplog.at_level("WARNING", logger="golden_compare"):
            await cmp.compare(b"\x02", "x.png")
        assert 'Golden "x.png" mismatch' in caplog.text


class TestLocalFileComparatorProperties:
    """Property-based tests: a golden matches exactly the bytes it was written with."""

    @staticmethod
    def _update_then_compare(golden: bytes, candidate: bytes) -> ComparisonResult:
        with tempfile.TemporaryDirectory() as tmp:
            cmp = LocalFileComparator(Path(tmp) / "test_widget.py")

            async def _run() -> ComparisonResult:
                await cmp.update("goldens/x.png", golden)
                return await cmp.compare(candidate, "goldens/x.png")

            return asyncio.run(_run())

    @given(data=st.binary(max_size=512))
    @settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_round_trip_always_matches(self, data: bytes) -> None:
        r = self._update_then_compare(data, data)
        assert r.matched is True
        assert r.outcome == ComparisonOutcome.MATCHED

    @given(golden=st.binary(max_size=512), candidate=st.binary(max_size=512))
    @settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_matches_iff_identical(self, golden: bytes, candidate: bytes) -> None:
        r = self._update_then_compare(golden, candidate)
        assert r.matched is (golden == candidate)
        assert r.details["byte_length_golden"] == len(golden)
        assert r.details["byte_length_actual"] == len(candidate)


# ======================================================================
# _first_difference
# ======================================================================


class TestFirstDifference:
    """Tests for locating the first differing byte."""

    def test_identical(self) -> None:
        assert _first_difference(b"abc", b"abc") is None

    def test_prefix(self) -> None:
        assert _first_difference(b"ab", b"abc") == 2

    def test_beyond_first_chunk(self) -> None:
        a = bytes(70000)
        b = bytes(69999) + b"\x01"
        assert _first_difference(a, b) == 69999

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(a=st.binary(max_size=256), b=st.binary(max_size=256))
    def test_offset_is_first_disagreement(self, a: bytes, b: bytes) -> None:
        offset = _first_difference(a, b)
        if a == b:
            assert offset is None
            return
        assert offset is not None
        assert a[:offset] == b[:offset]
        assert offset == min(len(a), len(b)) or a[offset] != b[offset]


# ======================================================================
# Interface / ComparisonResult
# ======================================================================


class _AlwaysMatchComparator(GoldenFileComparator):
    async def compare(self, image_bytes: bytes, golden) -> ComparisonResult:
        return ComparisonResult(outcome=ComparisonOutcome.MATCHED, golden=str(golden))

    async def update(self, golden, image_bytes: bytes) -> None:
        return None


class TestGoldenFileComparator:
    """Tests for the abstract comparator interface."""

    def test_cannot_instantiate_abstract(self) -> None:
        with pytest.raises(TypeError):
            GoldenFileComparator()  # type: ignore[abstract]

    def test_default_get_test_uri(self) -> None:
        cmp = _AlwaysMatchComparator()
        assert cmp.get_test_uri("foo.png") == "foo.png"
        assert cmp.get_test_uri("foo.png", 2) == "foo.2.png"


class TestComparisonResult:
    """Tests for the ComparisonResult dataclass."""

    def test_defaults(self) -> None:
        r = ComparisonResult(outcome=ComparisonOutcome.MATCHED, golden="x.png")
        assert r.details == {}
        assert r.matched is True

    @pytest.mark.parametrize(
        "outcome, matched",
        [
            (ComparisonOutcome.MATCHED, True),
            (ComparisonOutcome.SKIPPED, True),
            (ComparisonOutcome.UPDATED, True),
            (ComparisonOutcome.MISMATCHED, False),
        ],
    )
    def test_matched_follows_outcome(self, outcome: ComparisonOutcome, matched: bool) -> None:
        r = ComparisonResult(outcome=outcome, golden="x.png")
        assert r.matched is matched
        assert bool(r) is matched
