"""Shared fixtures for bibleref tests."""

from __future__ import annotations

import pytest

from bibleref.metadata import MetadataTable, default_table


@pytest.fixture
def table() -> MetadataTable:
    """The bundled metadata table."""
    return default_table()


@pytest.fixture
def genesis(table):
    return table["Genesis"]


@pytest.fixture
def matthew(table):
    return table["Matthew"]


@pytest.fixture
def small_table() -> MetadataTable:
    """A two-book table for tests that need exact control over the data."""
    return MetadataTable.from_records(
        [
            {
                "name": "Alpha",
                "short_name": "Alp.",
                "aliases": ["al"],
                "chapter_verse_counts": [3, 2],
            },
            {
                "name": "1 Beta",
                "short_name": "1 Bet.",
                "chapter_verse_counts": [4],
            },
        ]
    )
