"""Chapter references and the chapter-level parser.

    chapters = parse_chapters("1:1-10, 5:6")
    chapters[0].number       # 1
    chapters[0].raw_content  # "1-10"
    chapters[1].number       # 5

Book names inside a passage are ignored, so the chapters of a whole
passage can be read directly:

    parse_chapters("Genesis 1:1-10; Mark 5:6")   # chapters 1 and 5

With a book's metadata each chapter is also checked against the number of
chapters in that book:

    book = BookReference("Genesis", "1:1000, 51:10")
    book.chapter_references.errors()
    # ["The verse '1000' does not exist for Genesis 1",
    #  "Chapter '51' does not exist for the book Genesis"]
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
from bibleref.reference.verse import VerseReference, parse_verses_in_reference

if TYPE_CHECKING:
    from bibleref.reference.book import BookReference

logger = logging.getLogger(__name__)

_LETTERS = re.compile(r"[a-zA-Z]+")
_NOISE = re.compile(r"[^0-9:;,\-]")
_CHAPTER_BEFORE_COLON = re.compile(r"[0-9]+:")
_TRAILING_NON_DIGITS = re.compile(r"[^0-9]+$")

# Alternatives are tried in order at each position:
# 1. a chapter with its verses, "15:1-5,15"
# 2. a range of chapters, "4-7"
# 3. a single chapter, with the separator that may follow it
_CHAPTER_PATTERN = re.compile(
    r"(?P<with_verses>\d+):(?P<verses>[0-9,\-]+)"
    r"|(?P<range>(?P<first>\d+)-(?P<last>\d+))"
    r"|(?P<single>\d+)[,;]?"
)


class ChapterReference:
    """A chapter number and the verses selected in it."""

    def __init__(
        self,
        number: int | str,
        raw_content: str | None = None,
        metadata: MetadataRecord | None = None,
        *,
        max_range: int = DEFAULT_MAX_RANGE_SIZE,
    ) -> None:
        """Validate the chapter and parse its verses.

        Args:
            number: The chapter number, as an int or string
            raw_content: Verses selected in the chapter, e.g. "1-10"
            metadata: Book metadata used to check the chapter exists
            max_range: Largest number of verses a single range may expand to
        """
        self._errors = ErrorLog()
        self.number: int | None = None
        self.raw_content: str | None = None
        self.metadata = metadata
        self.verse_references: ReferenceCollection[VerseReference] | None = None

        number = coerce_int(number)

        if number < 1:
            self.add_error(f"The chapter number '{number}' is not valid")
            return

        if metadata is not None and number > metadata.chapter_count:
            self.add_error(
                f"Chapter '{number}' does not exist for the book {metadata.name}"
            )
            return

        self.number = number
        self.raw_content = raw_content
        self.verse_references = parse_verses_in_reference(self, max_range=max_range)

    @property
    def children(self) -> ReferenceCollection[VerseReference] | None:
        return self.verse_references

    def is_valid(self) -> bool:
        """Whether the chapter itself is valid, regardless of its verses."""
        return self.number is not None

    def clean(self, chain: bool = True) -> list:
        """Move invalid verses into verse_references.invalid_references."""
        if self.verse_references is None:
            return []
        return self.verse_references.clean(chain)

    def verse_numbers(self) -> list[int]:
        """Numbers of the valid verses, in passage order."""
        if self.verse_references is None:
            return []
        return [v.number for v in self.verse_references if v.is_valid()]

    def add_error(self, message: str) -> None:
        self._errors.add(message)

    def clear_errors(self) -> None:
        self._errors.clear()

    def errors(self, include_children: bool = True) -> list[str]:
        return self._errors.collect(self.verse_references, include_children)

    def has_errors(self) -> bool:
        return bool(self.errors())

    def no_errors(self) -> bool:
        return not self.errors()

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "raw_content": self.raw_content,
            "errors": self.errors(False),
            "verses": (
                self.verse_references.to_dict()
                if self.verse_references is not None
                else None
            ),
        }

    def __repr__(self) -> str:
        return (
            f"ChapterReference(number={self.number!r}, "
            f"raw_content={self.raw_content!r})"
        )


def _prepare(passage: str) -> str:
    # Letters become separators so "Genesis 1 Exodus 1" doesn't read as "11".
    passage = _LETTERS.sub(";", passage)
    passage = _NOISE.sub("", passage)
    # A chapter with verses always starts a new group: "1:5,10,5:10" is
    # chapter 1 verses 5 and 10, then chapter 5 verse 10.
    return _CHAPTER_BEFORE_COLON.sub(r";\g<0>", passage)


def parse_chapters(
    passage: str | int,
    metadata: MetadataRecord | None = None,
    *,
    max_range: int = DEFAULT_MAX_RANGE_SIZE,
) -> ReferenceCollection[ChapterReference]:
    """Parse the chapters in a passage or string.

    Args:
        passage: Chapters such as "1:1-10, 2:5-7; 4-6" (an int is accepted too)
        metadata: Book metadata used to check each chapter exists; prefer
                  parse_chapters_in_reference when a BookReference is at hand
        max_range: Largest number of chapters or verses a range may expand to

    Returns:
        ReferenceCollection of ChapterReference in passage order. A chapter
        range expands to one reference per chapter; a reversed chapter range
        expands to nothing.

    Examples:
        >>> [c.number for c in parse_chapters("1:1;5;6:10")]
        [1, 5, 6]
    """
    chapters: ReferenceCollection[ChapterReference] = ReferenceCollection()

    for match in _CHAPTER_PATTERN.finditer(_prepare(str(passage))):
        if match.group("range"):
            first = int(match.group("first"))
            last = int(match.group("last"))

            if last - first + 1 > max_range:
                chapter_range = match.group("range")
                logger.debug(
                    f"Rejected chapter range {chapter_range} (limit {max_range})"
                )
                chapters.add_error(
                    f"'{chapter_range}' spans more than {max_range} chapters"
                )
                continue

            for number in range(first, last + 1):
                chapters.append(
                    ChapterReference(number, None, metadata, max_range=max_range)
                )
            continue

        if match.group("with_verses"):
            number = match.group("with_verses")
            # Drops trailing punctuation such as the comma in "1-10,". "2:,"
            # keeps an empty verse list and selects no verses.
            verses = _TRAILING_NON_DIGITS.sub("", match.group("verses"))
        else:
            number = match.group("single")
            verses = None

        chapters.append(ChapterReference(number, verses, metadata, max_range=max_range))

    return chapters


def parse_chapters_in_reference(
    book: "BookReference", *, max_range: int = DEFAULT_MAX_RANGE_SIZE
) -> ReferenceCollection[ChapterReference]:
    """Parse the chapters selected by a book reference.

    A book cited without chapters selects chapter 1.
    """
    if book.raw_content is None:
        return parse_chapters(1, book.metadata, max_range=max_range)
    return parse_chapters(book.raw_content, book.metadata, max_range=max_range)
