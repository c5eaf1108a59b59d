"""Shared fixtures for golden-compare tests."""

from __future__ import annotations

from typing import Iterator

import pytest

from golden_compare.registry import reset_context


@pytest.fixture(autouse=True)
def _clean_context() -> Iterator[None]:
    """Every test starts and ends with the default context active."""
    reset_context()
    yield
    reset_context()
