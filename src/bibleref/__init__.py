"""Parsing and validation for scripture passages.

Turns citations such as "Gen. 1:15-18, 21; Matt 1" into books, chapters
and verses checked against canonical metadata, collecting every problem
found along the way instead of stopping at the first one.
"""

from bibleref.metadata import (
    MetadataError,
    MetadataRecord,
    MetadataTable,
    default_table,
    load_metadata,
)
from bibleref.reference import (
    BookReference,
    ChapterReference,
    ReferenceCollection,
    VerseReference,
    parse_books,
    parse_chapters,
    parse_chapters_in_reference,
    parse_verses,
    parse_verses_in_reference,
)

__version__ = "0.1.0"

parse = parse_books

__all__ = [
    "BookReference",
    "ChapterReference",
    "MetadataError",
    "MetadataRecord",
    "MetadataTable",
    "ReferenceCollection",
    "VerseReference",
    "default_table",
    "load_metadata",
    "parse",
    "parse_books",
    "parse_chapters",
    "parse_chapters_in_reference",
    "parse_verses",
    "parse_verses_in_reference",
]
