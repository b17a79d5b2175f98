"""Verse references: the leaf level of a parsed passage.

    verses = parse_verses("1-10, 15")
    verses[0].number   # 1
    verses.last.number # 15
    len(verses)        # 11

Given a book's metadata and a chapter number, each verse is also checked
against the number of verses in that chapter:

    verses = parse_verses("500", default_table()["Genesis"], 1)
    verses.errors()    # ["The verse '500' does not exist for Genesis 1"]
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bibleref.config import DEFAULT_MAX_RANGE_SIZE
from bibleref.metadata import MetadataRecord
from bibleref.reference.collection import ReferenceCollection
from bibleref.reference.numbers import coerce_int
from bibleref.reference.tracking import ErrorLog

if TYPE_CHECKING:
    from bibleref.reference.chapter import ChapterReference

logger = logging.getLogger(__name__)

# Everything except digits and the separators - , ; : is noise.
_NOISE = re.compile(r"[^0-9:;,\-]")

# A range of verses first, then a single verse.
_VERSE_PATTERN = re.compile(r"(?P<range>(?P<first>\d+)-(?P<last>\d+))|(?P<single>\d+)")


class VerseReference:
    """A single verse number, validated when it is constructed."""

    children = None

    def __init__(
        self,
        number: int | str,
        metadata: MetadataRecord | None = None,
        chapter_number: int | None = None,
    ) -> None:
        self._errors = ErrorLog()
        self.number: int | None = None

        number = coerce_int(number)

        if number < 1:
            self.add_error(f"The verse number '{number}' is not valid")
            return

        if metadata is not None and chapter_number is not None:
            total_verses = metadata.verse_count(chapter_number)
            if total_verses is not None and number > total_verses:
                self.add_error(
                    f"The verse '{number}' does not exist for "
                    f"{metadata.name} {chapter_number}"
                )
                return

        self.number = number

    def is_valid(self) -> bool:
        """Whether the verse number itself is valid."""
        return self.number is not None

    def clean(self, chain: bool = True) -> list:
        # Verses hold no child references.
        return []

    def add_error(self, message: str) -> None:
        self._errors.add(message)

    def clear_errors(self) -> None:
        self._errors.clear()

    def errors(self, include_children: bool = True) -> list[str]:
        return self._errors.collect()

    def has_errors(self) -> bool:
        return bool(self.errors())

    def no_errors(self) -> bool:
        return not self.errors()

    def to_dict(self) -> dict:
        return {"number": self.number, "errors": self.errors(False)}

    def __repr__(self) -> str:
        return f"VerseReference(number={self.number!r})"


def parse_verses(
    string: str | int,
    metadata: MetadataRecord | None = None,
    chapter_number: int | None = None,
    *,
    max_range: int = DEFAULT_MAX_RANGE_SIZE,
) -> ReferenceCollection[VerseReference]:
    """Parse the verses in a string.

    Args:
        string: Verse list such as "1-5, 10, 15-20" (an int is accepted too)
        metadata: Book metadata used to check each verse exists
        chapter_number: Chapter the verses belong to; used with metadata
        max_range: Largest number of verses a single range may expand to

    Returns:
        ReferenceCollection of VerseReference, one per verse, in the
        order they appear. A reversed range such as "2-1" adds an error to
        the collection and yields no verses.
    """
    verses: ReferenceCollection[VerseReference] = ReferenceCollection()
    string_slim = _NOISE.sub("", str(string))

    for match in _VERSE_PATTERN.finditer(string_slim):
        if match.group("range"):
            verse_range = match.group("range")
            first = int(match.group("first"))
            last = int(match.group("last"))

            if last < first:
                verses.add_error(f"'{verse_range}' is an invalid range of verses")
                continue

            if last - first + 1 > max_range:
                logger.debug(f"Rejected verse range {verse_range} (limit {max_range})")
                verses.add_error(
                    f"'{verse_range}' spans more than {max_range} verses"
                )
                continue

            for number in range(first, last + 1):
                verses.append(VerseReference(number, metadata, chapter_number))
        else:
            verses.append(
                VerseReference(match.group("single"), metadata, chapter_number)
            )

    return verses


def parse_verses_in_reference(
    chapter: "ChapterReference", *, max_range: int = DEFAULT_MAX_RANGE_SIZE
) -> ReferenceCollection[VerseReference]:
    """Parse the verses selected by a chapter reference.

    A chapter without raw_content selects all of its verses when its book
    is known, and only the first verse when it is not. Selecting a whole
    chapter is never rejected by max_range.
    """
    if chapter.raw_content is not None:
        return parse_verses(
            chapter.raw_content, chapter.metadata, chapter.number, max_range=max_range
        )

    if chapter.metadata is not None and chapter.number is not None:
        total_verses = chapter.metadata.verse_count(chapter.number)
        if total_verses is not None:
            return parse_verses(
                f"1-{total_verses}",
                chapter.metadata,
                chapter.number,
                max_range=max(max_range, total_verses),
            )

    return parse_verses(1, max_range=max_range)
