"""Canonical book metadata: names, abbreviations and verse counts.

Loads books.yaml (or a replacement table) into an immutable lookup used by
the reference parsers. Lookups normalize the key the same way for every
caller: lowercase, with whitespace and periods removed, so "Matt.",
"matt" and "MATTHEW" all resolve to the Matthew record.

Path resolution for load_metadata():
1. Explicit path argument
2. BIBLEREF_METADATA_PATH env var
3. books.yaml bundled next to this module
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator

import yaml

from bibleref.config import _env_metadata_path

logger = logging.getLogger(__name__)

BUNDLED_METADATA_PATH = Path(__file__).resolve().parent / "books.yaml"

_KEY_STRIP = re.compile(r"[\s.]+")


class MetadataError(ValueError):
    """Raised when a metadata table is malformed."""

    def __init__(self, message: str, book: str | None = None):
        self.book = book
        full_message = f"[{book}] {message}" if book else message
        super().__init__(full_message)


def normalize_key(name: str) -> str:
    """Normalize a book name or abbreviation for lookup.

    >>> normalize_key("1 Sam.")
    '1sam'
    """
    return _KEY_STRIP.sub("", name.lower())


@dataclass(frozen=True)
class MetadataRecord:
    """Immutable metadata for one book."""

    name: str
    short_name: str
    chapter_verse_counts: tuple[int, ...]
    aliases: tuple[str, ...] = ()

    @property
    def chapter_count(self) -> int:
        return len(self.chapter_verse_counts)

    def verse_count(self, chapter: int) -> int | None:
        """Verses in a 1-indexed chapter, or None if the book has no such chapter."""
        if chapter < 1 or chapter > self.chapter_count:
            return None
        return self.chapter_verse_counts[chapter - 1]

    @property
    def keys(self) -> tuple[str, ...]:
        """Every normalized key this record answers to, without duplicates."""
        names = (self.name, self.short_name, *self.aliases)
        return tuple(dict.fromkeys(normalize_key(n) for n in names))

    @classmethod
    def from_dict(cls, data: dict) -> "MetadataRecord":
        """Create a record from one books.yaml entry."""
        if not isinstance(data, dict):
            raise MetadataError(f"Book entry must be a mapping, got {data!r}")

        name = data.get("name")
        if not name or not isinstance(name, str):
            raise MetadataError("Missing required field: name")

        short_name = data.get("short_name")
        if not short_name or not isinstance(short_name, str):
            raise MetadataError("Missing required field: short_name", name)

        counts = data.get("chapter_verse_counts")
        if not isinstance(counts, list) or not counts:
            raise MetadataError(
                "chapter_verse_counts must be a non-empty list", name
            )
        for chapter, count in enumerate(counts, start=1):
            if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                raise MetadataError(
                    f"Invalid verse count for chapter {chapter}: {count!r}", name
                )

        aliases = data.get("aliases") or []
        if not isinstance(aliases, list):
            raise MetadataError("aliases must be a list", name)

        return cls(
            name=name,
            short_name=short_name,
            chapter_verse_counts=tuple(counts),
            aliases=tuple(str(a) for a in aliases),
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "short_name": self.short_name,
            "aliases": list(self.aliases),
            "chapter_count": self.chapter_count,
            "chapter_verse_counts": list(self.chapter_verse_counts),
        }


@dataclass(frozen=True)
class MetadataTable:
    """Read-only lookup of MetadataRecord by normalized name.

    Built once and shared by reference; nothing in the parsers mutates it.
    """

    records: tuple[MetadataRecord, ...]
    path: Path | None = None
    _index: dict[str, MetadataRecord] = field(
        default_factory=dict, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index: dict[str, MetadataRecord] = {}
        for record in self.records:
            for key in record.keys:
                existing = index.get(key)
                if existing is not None and existing is not record:
                    raise MetadataError(
                        f"'{key}' is already claimed by {existing.name}",
                        record.name,
                    )
                index[key] = record
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_records(
        cls, records: Iterable[MetadataRecord | dict], path: Path | None = None
    ) -> "MetadataTable":
        """Build a table from records or raw books.yaml entries."""
        built = tuple(
            r if isinstance(r, MetadataRecord) else MetadataRecord.from_dict(r)
            for r in records
        )
        return cls(records=built, path=path)

    def lookup(self, key: str) -> MetadataRecord | None:
        """Find the record for a name or abbreviation, or None."""
        return self._index.get(normalize_key(key))

    def __getitem__(self, key: str) -> MetadataRecord:
        record = self.lookup(key)
        if record is None:
            raise KeyError(key)
        return record

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.lookup(key) is not None

    def __iter__(self) -> Iterator[MetadataRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


def load_metadata(path: Path | str | None = None) -> MetadataTable:
    """Load a metadata table from YAML.

    Args:
        path: Path to a books.yaml-style file. If None, uses
              BIBLEREF_METADATA_PATH or the bundled books.yaml.

    Returns:
        Loaded and validated MetadataTable

    Raises:
        MetadataError: If the table is malformed
        FileNotFoundError: If the file does not exist
    """
    if path is None:
        path = _env_metadata_path() or BUNDLED_METADATA_PATH

    if isinstance(path, str):
        path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Metadata table not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        raw_data = yaml.safe_load(f)

    if not isinstance(raw_data, list):
        raise MetadataError("Metadata table must be a YAML list of books")

    table = MetadataTable.from_records(raw_data, path=path)
    logger.info(f"Loaded {len(table)} books from {path}")
    return table


@lru_cache(maxsize=1)
def default_table() -> MetadataTable:
    """The process-wide table, loaded on first use."""
    return load_metadata()
