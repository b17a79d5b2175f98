"""Ordered collections of references that keep track of invalid entries.

A ReferenceCollection is returned by every parse function, and each valid
book or chapter reference holds one for its children:

    books = parse_books("Genthesis 1:1-10, Matthew 1:5, Rev. 5000")
    len(books)           # 3
    books.errors()       # ["The book 'Genthesis' could not be found",
                         #  "Chapter '5000' does not exist for the book Revelation"]
    books.clean()
    len(books)           # 1 (Matthew 1:5)
    len(books.invalid_references)  # 2

clean() only demotes a reference that is itself invalid. A valid book
holding nothing but invalid chapters stays in place; its chapters move to
the book's own invalid_references, and are also reported to the caller's
collection when clean() cascades.
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, Protocol, TypeVar, overload

from bibleref.reference.tracking import ErrorLog


class Reference(Protocol):
    """What a collection needs from the items it holds."""

    def is_valid(self) -> bool: ...

    def clean(self, chain: bool = True) -> list: ...

    def errors(self, include_children: bool = True) -> list[str]: ...


T = TypeVar("T", bound=Reference)


class ReferenceCollection(Generic[T]):
    """A list of references partitioned into valid and invalid entries."""

    def __init__(
        self,
        references: Iterable[T] | None = None,
        invalid_references: Iterable[T] | None = None,
    ) -> None:
        self._errors = ErrorLog()
        self.references: list[T] = list(references or [])
        self.invalid_references: list[T] = list(invalid_references or [])

    # Error tracking

    def add_error(self, message: str) -> None:
        self._errors.add(message)

    def clear_errors(self) -> None:
        self._errors.clear()

    def errors(self, include_children: bool = True) -> list[str]:
        """Errors on the collection, its invalid references and its references.

        Messages are de-duplicated by text, keeping the first occurrence.
        """
        all_errors = self._errors.collect()
        for reference in self.invalid_references:
            all_errors += reference.errors(include_children)
        for reference in self.references:
            all_errors += reference.errors(include_children)
        return list(dict.fromkeys(all_errors))

    def has_errors(self) -> bool:
        return bool(self.errors())

    def no_errors(self) -> bool:
        return not self.errors()

    # Cleaning

    def clean(self, chain: bool = True) -> list:
        """Move invalid references into invalid_references.

        With chain, every reference that stays is cleaned as well and the
        references it removed are added to this collection's
        invalid_references too.

        Returns:
            References demoted at this level, then those demoted through
            the chain.
        """
        removed: list[T] = []
        removed_through_chain: list = []

        for reference in self.references:
            if reference.is_valid():
                if chain:
                    removed_through_chain += reference.clean(chain)
            else:
                removed.append(reference)

        removed_ids = {id(r) for r in removed}
        self.references = [r for r in self.references if id(r) not in removed_ids]

        all_removed = removed + removed_through_chain
        self.invalid_references += all_removed
        return all_removed

    # Sequence behaviour

    def append(self, reference: T) -> None:
        """Add a reference whether or not it is valid."""
        self.references.append(reference)

    def union(
        self, other: "ReferenceCollection[T] | Iterable[T]"
    ) -> "ReferenceCollection[T]":
        """New collection with other's references appended to ours."""
        return ReferenceCollection(
            self.references + _references_of(other), self.invalid_references
        )

    def difference(
        self, other: "ReferenceCollection[T] | Iterable[T]"
    ) -> "ReferenceCollection[T]":
        """New collection without any of other's references."""
        excluded = {id(r) for r in _references_of(other)}
        return ReferenceCollection(
            [r for r in self.references if id(r) not in excluded],
            self.invalid_references,
        )

    __add__ = union
    __sub__ = difference

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index):
        return self.references[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self.references)

    def __len__(self) -> int:
        return len(self.references)

    @property
    def first(self) -> T | None:
        return self.references[0] if self.references else None

    @property
    def last(self) -> T | None:
        return self.references[-1] if self.references else None

    def is_empty(self) -> bool:
        return not self.references

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "references": [r.to_dict() for r in self.references],
            "invalid_references": [r.to_dict() for r in self.invalid_references],
            "errors": self._errors.collect(),
        }

    def __repr__(self) -> str:
        return (
            f"ReferenceCollection({self.references!r}, "
            f"invalid={len(self.invalid_references)})"
        )


def _references_of(other) -> list:
    if isinstance(other, ReferenceCollection):
        return list(other.references)
    return list(other)
