"""The comparator and auto-update flag that golden assertions consult.

Golden assertions read a :class:`GoldenContext`: the comparator to use and
whether mismatches should overwrite the golden instead of failing.  Callers
that want isolation pass a context explicitly to
:func:`~golden_compare.matcher.match_golden_file`; everything else falls
back to the active context kept here.

The active context starts as :data:`DEFAULT_CONTEXT`, whose
:class:`~golden_compare.comparators.trivial.TrivialComparator` skips
comparisons.  A test session replaces it once during bootstrap (see
:func:`bootstrap` and the pytest plugin), and individual tests or
directories may override it with :func:`override`.  There is always an
active comparator; installing ``None`` is rejected.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Iterator

from golden_compare.comparators import get_comparator
from golden_compare.comparators.base import GoldenFileComparator
from golden_compare.comparators.trivial import TrivialComparator
from golden_compare.config import Settings, configure_logging
from golden_compare.paths import GoldenKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoldenContext:
    """Immutable pairing of a comparator and the auto-update flag."""

    comparator: GoldenFileComparator = field(default_factory=TrivialComparator)
    auto_update: bool = False

    def __post_init__(self) -> None:
        if self.comparator is None:
            raise TypeError("GoldenContext.comparator must not be None")

    def with_comparator(self, comparator: GoldenFileComparator) -> GoldenContext:
        return replace(self, comparator=comparator)

    def with_auto_update(self, auto_update: bool) -> GoldenContext:
        return replace(self, auto_update=auto_update)


DEFAULT_CONTEXT = GoldenContext()

_active: GoldenContext = DEFAULT_CONTEXT


def get_context() -> GoldenContext:
    """Return the active context."""
    return _active


def set_context(context: GoldenContext) -> GoldenContext:
    """Install *context* as the active one and return the previous context."""
    global _active
    if not isinstance(context, GoldenContext):
        raise TypeError(f"Expected a GoldenContext, got {type(context).__name__}")
    previous, _active = _active, context
    return previous


def set_comparator(comparator: GoldenFileComparator) -> None:
    """Replace the active comparator, keeping the auto-update flag."""
    set_context(_active.with_comparator(comparator))


def set_auto_update(auto_update: bool) -> None:
    """Turn auto-update mode on or off, keeping the active comparator."""
    set_context(_active.with_auto_update(auto_update))


def reset_context() -> None:
    """Restore :data:`DEFAULT_CONTEXT`."""
    set_context(DEFAULT_CONTEXT)


@contextmanager
def use_context(context: GoldenContext) -> Iterator[GoldenContext]:
    """Make *context* active inside the ``with`` block, then restore the previous one."""
    previous = set_context(context)
    try:
        yield context
    finally:
        set_context(previous)


@contextmanager
def override(
    comparator: GoldenFileComparator | None = None,
    auto_update: bool | None = None,
) -> Iterator[GoldenContext]:
    """Temporarily replace parts of the active context.

    Arguments left as ``None`` keep their current value.
    """
    context = _active
    if comparator is not None:
        context = context.with_comparator(comparator)
    if auto_update is not None:
        context = context.with_auto_update(auto_update)
    with use_context(context) as active:
        yield active


def bootstrap(test_file: GoldenKey, settings: Settings | None = None) -> GoldenContext:
    """Install a context built from *settings* for tests living beside *test_file*.

    Parameters
    ----------
    test_file:
        Location of the test file (or any file in the test directory).
    settings:
        Configuration to apply.  Loaded from the environment when omitted.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)
    comparator = get_comparator(
        settings.comparator,
        test_file=test_file,
        path_style=settings.path_style,
    )
    context = GoldenContext(comparator=comparator, auto_update=settings.update_goldens)
    set_context(context)
    logger.info(
        "Installed golden comparator %r (auto_update=%s)",
        comparator,
        context.auto_update,
    )
    return context
