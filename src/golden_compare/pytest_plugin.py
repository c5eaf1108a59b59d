"""pytest integration: ``--update-goldens`` and golden fixtures.

Registered through the ``pytest11`` entry point, so installing the package
is enough::

    @pytest.mark.asyncio
    async def test_button(golden_context, render_button):
        await match_golden_file(render_button(), "goldens/button.png")

Run ``pytest --update-goldens`` (or set ``GOLDEN_UPDATE_GOLDENS=1``) to
rewrite the golden files instead of comparing against them.
"""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from golden_compare.comparators import get_comparator
from golden_compare.comparators.base import GoldenFileComparator
from golden_compare.config import Settings
from golden_compare.registry import GoldenContext, use_context

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("golden", "golden file comparison")
    group.addoption(
        "--update-goldens",
        action="store_true",
        default=False,
        help="Overwrite golden files with the images produced by the tests.",
    )


@pytest.fixture(scope="session")
def golden_settings() -> Settings:
    """Settings loaded once per session from ``GOLDEN_*`` environment variables."""
    return Settings()


@pytest.fixture(scope="session")
def update_goldens(request: pytest.FixtureRequest, golden_settings: Settings) -> bool:
    """Whether this session runs in auto-update mode."""
    enabled = bool(request.config.getoption("update_goldens")) or golden_settings.update_goldens
    if enabled:
        logger.info("Golden files will be updated instead of compared")
    return enabled


@pytest.fixture
def golden_comparator(
    request: pytest.FixtureRequest, golden_settings: Settings
) -> GoldenFileComparator:
    """Comparator selected by ``GOLDEN_COMPARATOR``, bound to the requesting test module."""
    return get_comparator(
        golden_settings.comparator,
        test_file=request.path,
        path_style=golden_settings.path_style,
    )


@pytest.fixture
def golden_context(
    golden_comparator: GoldenFileComparator, update_goldens: bool
) -> Iterator[GoldenContext]:
    """Install a context for the duration of the test, then restore the previous one."""
    with use_context(GoldenContext(comparator=golden_comparator, auto_update=update_goldens)) as context:
        yield context
