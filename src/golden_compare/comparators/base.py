"""Abstract golden file comparator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from golden_compare.models.enums import ComparisonOutcome
from golden_compare.paths import GoldenKey, apply_version


@dataclass
class ComparisonResult:
    """Outcome of comparing image bytes against a golden file.

    Attributes:
        outcome: How the comparison concluded.
        golden: The golden key that was compared (after versioning).
        details: Comparator-specific diagnostic information.
    """

    outcome: ComparisonOutcome
    golden: str
    details: dict = field(default_factory=dict)

    @property
    def matched(self) -> bool:
        """Whether the test should pass; only a mismatch counts as failure."""
        return self.outcome is not ComparisonOutcome.MISMATCHED

    def __bool__(self) -> bool:
        return self.matched


class GoldenFileComparator(ABC):
    """Compares encoded image bytes against golden files.

    Subclasses decide how a golden key is located and how its bytes are
    loaded and stored: the local file system, a remote bucket, a
    pixel-aware decoder, and so on.

    Implementations signal a mismatch either by returning a result whose
    :attr:`ComparisonResult.matched` is false, or by raising
    :class:`~golden_compare.errors.GoldenMismatchError` to control the
    failure message.  Callers must handle both.
    """

    @abstractmethod
    async def compare(self, image_bytes: bytes, golden: GoldenKey) -> ComparisonResult:
        """Compare *image_bytes* against the golden file identified by *golden*.

        Parameters:
            image_bytes: Encoded image produced by the test.
            golden: Key of the golden file.

        Returns:
            A :class:`ComparisonResult` describing the outcome.
        """
        ...

    @abstractmethod
    async def update(self, golden: GoldenKey, image_bytes: bytes) -> None:
        """Replace the golden file identified by *golden* with *image_bytes*.

        Invoked instead of :meth:`compare` when auto-update mode is on.
        Writing the same bytes twice must leave the same golden behind.
        """
        ...

    def get_test_uri(self, key: GoldenKey, version: int | None = None) -> str:
        """Return the golden key for *version* of *key*.

        The default splices the version into the filename, see
        :func:`~golden_compare.paths.apply_version`.
        """
        return apply_version(key, version)
