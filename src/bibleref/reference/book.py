"""Book references: the top level of a parsed passage.

    books = parse_books("Matt. 1:1-10, Revelation 5:6-11, Luke 7:7")
    books[0].name        # "Matthew"
    books[1].short_name  # "Rev."
    books[2].name        # "Luke"

Problems anywhere in the passage are collected rather than raised:

    books = parse_books("Gethensis 1:1, Matthew 1:5000")
    books.errors()
    # ["The book 'Gethensis' could not be found",
    #  "The verse '5000' does not exist for Matthew 1"]
"""

from __future__ import annotations

import logging
import re

from bibleref.config import DEFAULT_MAX_RANGE_SIZE
from bibleref.metadata import MetadataRecord, MetadataTable, default_table
from bibleref.reference.chapter import ChapterReference, parse_chapters_in_reference
from bibleref.reference.collection import ReferenceCollection
from bibleref.reference.tracking import ErrorLog

logger = logging.getLogger(__name__)

_NOISE = re.compile(r"[^0-9a-zA-Z:;,\-]")
_TRAILING_NON_DIGITS = re.compile(r"[^0-9]+$")

# Group "name": an optional single digit ("1 Samuel") then letters.
# Group "contents": the chapters and verses after it. The last character is
# left out when a letter follows it, so in "Matt1:1,2Sam1:1" the "2" goes to
# the next book rather than to Matthew.
_BOOK_PATTERN = re.compile(r"(?P<name>[0-9]?[a-zA-Z]+)(?P<contents>[^a-zA-Z]+(?![a-zA-Z]))?")


class BookReference:
    """A book of the Bible and the chapters selected in it."""

    def __init__(
        self,
        book_name: str,
        raw_content: str | None = None,
        table: MetadataTable | None = None,
        *,
        max_range: int = DEFAULT_MAX_RANGE_SIZE,
    ) -> None:
        """Look up the book and parse its chapters.

        Args:
            book_name: Full name or abbreviation, e.g. "Genesis" or "gen."
            raw_content: Chapters and verses for the book, e.g. "1:1-10"
            table: Metadata to resolve the name with (default: bundled table)
            max_range: Largest number of chapters or verses a range may expand to
        """
        self._errors = ErrorLog()
        self.name: str | None = None
        self.short_name: str | None = None
        self.raw_content: str | None = None
        self.chapter_references: ReferenceCollection[ChapterReference] | None = None

        table = table if table is not None else default_table()
        self.metadata: MetadataRecord | None = table.lookup(book_name)

        if self.metadata is None:
            self.add_error(f"The book '{book_name}' could not be found")
            return

        self.name = self.metadata.name
        self.short_name = self.metadata.short_name
        self.raw_content = raw_content
        self.chapter_references = parse_chapters_in_reference(
            self, max_range=max_range
        )

    @property
    def children(self) -> ReferenceCollection[ChapterReference] | None:
        return self.chapter_references

    def is_valid(self) -> bool:
        """Whether the book was found, regardless of its chapters."""
        return self.name is not None

    def clean(self, chain: bool = True) -> list:
        """Move invalid chapters into chapter_references.invalid_references.

        With chain, valid chapters clean their verses too and the removed
        verses are returned along with the removed chapters.
        """
        if self.chapter_references is None:
            return []
        return self.chapter_references.clean(chain)

    def chapter_numbers(self) -> list[int]:
        """Numbers of the valid chapters, in passage order."""
        if self.chapter_references is None:
            return []
        return [c.number for c in self.chapter_references if c.is_valid()]

    def add_error(self, message: str) -> None:
        self._errors.add(message)

    def clear_errors(self) -> None:
        self._errors.clear()

    def errors(self, include_children: bool = True) -> list[str]:
        return self._errors.collect(self.chapter_references, include_children)

    def has_errors(self) -> bool:
        return bool(self.errors())

    def no_errors(self) -> bool:
        return not self.errors()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "short_name": self.short_name,
            "raw_content": self.raw_content,
            "errors": self.errors(False),
            "chapters": (
                self.chapter_references.to_dict()
                if self.chapter_references is not None
                else None
            ),
        }

    def __repr__(self) -> str:
        return f"BookReference(name={self.name!r}, raw_content={self.raw_content!r})"


def parse_books(
    passage: str,
    table: MetadataTable | None = None,
    *,
    max_range: int = DEFAULT_MAX_RANGE_SIZE,
) -> ReferenceCollection[BookReference]:
    """Parse the books in a passage.

    Args:
        passage: Passage such as "Genesis 1:1-10, Exodus 1:5-7"
        table: Metadata to resolve book names with (default: bundled table)
        max_range: Largest number of chapters or verses a range may expand to

    Returns:
        ReferenceCollection with one BookReference per book cited, in
        passage order. A book cited twice gets two references. A book
        without chapters means chapter 1 ("gen 5, exodus" is Exodus 1).
        Whitespace and stray punctuation are ignored, so
        "[rev1:15][daniel  12: 1]" parses.

    Examples:
        >>> [b.name for b in parse_books("Gen. 1-5, Ex. 7:14")]
        ['Genesis', 'Exodus']
    """
    table = table if table is not None else default_table()
    books: ReferenceCollection[BookReference] = ReferenceCollection()

    for match in _BOOK_PATTERN.finditer(_NOISE.sub("", passage)):
        contents = match.group("contents")
        if contents is not None:
            # A bare trailing separator ("Genesis;") leaves an empty remainder,
            # which selects no chapters.
            contents = _TRAILING_NON_DIGITS.sub("", contents)

        books.append(
            BookReference(match.group("name"), contents, table, max_range=max_range)
        )

    if books.is_empty():
        logger.debug(f"No books found in passage {passage!r}")
        books.add_error(f"'{passage}' does not contain any books")

    return books
