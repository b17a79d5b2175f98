"""Lenient integer coercion for chapter and verse numbers."""

from __future__ import annotations

import re

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_int(value: int | str | None) -> int:
    """Read the leading integer of a value, or 0 when there is none.

    Chapter and verse numbers arrive as ints or as digit runs cut out of a
    passage. Anything unreadable becomes 0 so the caller can report it as an
    invalid number instead of raising.

    >>> coerce_int("12,")
    12
    >>> coerce_int("invalid")
    0
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if value is None:
        return 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0
