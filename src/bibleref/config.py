"""Configuration settings for bibleref."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Largest number of chapters or verses a single "A-B" range may expand to.
DEFAULT_MAX_RANGE_SIZE = 1000

METADATA_PATH_ENV = "BIBLEREF_METADATA_PATH"
MAX_RANGE_SIZE_ENV = "BIBLEREF_MAX_RANGE_SIZE"


def _env_metadata_path() -> Path | None:
    value = os.environ.get(METADATA_PATH_ENV)
    return Path(value) if value else None


def _env_max_range_size() -> int:
    value = os.environ.get(MAX_RANGE_SIZE_ENV)
    if not value:
        return DEFAULT_MAX_RANGE_SIZE
    try:
        size = int(value)
    except ValueError:
        raise ValueError(
            f"{MAX_RANGE_SIZE_ENV} must be an integer, got '{value}'"
        ) from None
    if size < 1:
        raise ValueError(f"{MAX_RANGE_SIZE_ENV} must be at least 1, got {size}")
    return size


@dataclass
class Settings:
    """Application settings."""

    # Metadata table (None means the books.yaml bundled with the package)
    metadata_path: Path | None = field(default_factory=_env_metadata_path)

    # Range expansion guard
    max_range_size: int = field(default_factory=_env_max_range_size)
