"""Error tracking shared by references and reference collections.

Parsing never stops at the first problem. Each node keeps the messages
for the problems it detected itself, and a parent reports its children's
messages only when asked through errors(include_children=True).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bibleref.reference.collection import ReferenceCollection


@runtime_checkable
class TracksErrors(Protocol):
    """Capability implemented by every reference type and by collections."""

    def add_error(self, message: str) -> None: ...

    def clear_errors(self) -> None: ...

    def errors(self, include_children: bool = True) -> list[str]: ...

    def has_errors(self) -> bool: ...

    def no_errors(self) -> bool: ...


class ErrorLog:
    """Ordered list of error messages owned by a single node."""

    __slots__ = ("_messages",)

    def __init__(self) -> None:
        self._messages: list[str] = []

    def add(self, message: str) -> None:
        self._messages.append(message)

    def clear(self) -> None:
        self._messages = []

    def collect(
        self,
        children: "ReferenceCollection | None" = None,
        include_children: bool = True,
    ) -> list[str]:
        """Own messages, followed by the child collection's when requested."""
        if include_children and children is not None:
            return self._messages + children.errors(True)
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"ErrorLog({self._messages!r})"
