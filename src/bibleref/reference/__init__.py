"""Book, chapter and verse references and their parsers."""

from bibleref.reference.book import BookReference, parse_books
from bibleref.reference.chapter import (
    ChapterReference,
    parse_chapters,
    parse_chapters_in_reference,
)
from bibleref.reference.collection import ReferenceCollection
from bibleref.reference.tracking import ErrorLog, TracksErrors
from bibleref.reference.verse import (
    VerseReference,
    parse_verses,
    parse_verses_in_reference,
)

__all__ = [
    "BookReference",
    "ChapterReference",
    "ErrorLog",
    "ReferenceCollection",
    "TracksErrors",
    "VerseReference",
    "parse_books",
    "parse_chapters",
    "parse_chapters_in_reference",
    "parse_verses",
    "parse_verses_in_reference",
]
