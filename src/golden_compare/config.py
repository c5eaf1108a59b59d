"""Pydantic settings for golden file comparison."""

import logging

from pydantic_settings import BaseSettings

from golden_compare.models.enums import ComparatorKind, PathStyle


class Settings(BaseSettings):
    """Test-session configuration loaded from environment variables."""

    model_config = {"env_prefix": "GOLDEN_"}

    update_goldens: bool = False
    comparator: ComparatorKind = ComparatorKind.LOCAL_FILE
    path_style: PathStyle | None = None  # None -> platform style
    log_level: str = "INFO"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging the way the test bootstrap expects."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
