"""Tests for the error tracking shared by every reference type.

Each factory below builds a fresh instance; every test runs against all
of them so references and collections behave identically.
"""

from __future__ import annotations

import pytest

from bibleref.reference import (
    BookReference,
    ChapterReference,
    ReferenceCollection,
    TracksErrors,
    VerseReference,
)
from bibleref.reference.tracking import ErrorLog

FACTORIES = {
    "book": lambda: BookReference("Matthew", "1:1"),
    "invalid_book": lambda: BookReference("anathema"),
    "chapter": lambda: ChapterReference(1, "1-10,15"),
    "invalid_chapter": lambda: ChapterReference(0),
    "verse": lambda: VerseReference(1),
    "invalid_verse": lambda: VerseReference(0),
    "collection": lambda: ReferenceCollection(),
}


@pytest.fixture(params=sorted(FACTORIES))
def instance(request):
    ref = FACTORIES[request.param]()
    ref.clear_errors()
    return ref


def _children(ref):
    return getattr(ref, "children", None)


class TestTracksErrors:
    """Behaviour common to every TracksErrors implementation."""

    def test_implements_protocol(self, instance):
        assert isinstance(instance, TracksErrors)

    def test_errors_is_list(self, instance):
        assert isinstance(instance.errors(), list)

    def test_starts_empty_after_clear(self, instance):
        assert instance.errors(False) == []

    def test_add_error(self, instance):
        instance.add_error("invalid")
        assert instance.errors(False) == ["invalid"]

    def test_clear_errors(self, instance):
        instance.add_error("invalid")
        instance.clear_errors()
        assert instance.errors(False) == []

    def test_has_errors(self, instance):
        assert not instance.has_errors()
        instance.add_error("invalid")
        assert instance.has_errors()

    def test_no_errors(self, instance):
        assert instance.no_errors()
        instance.add_error("invalid")
        assert not instance.no_errors()

    def test_excludes_child_errors_when_asked(self, instance):
        children = _children(instance)
        instance.add_error("invalid")
        if children is not None:
            children.add_error("invalid_child")

        assert instance.errors(False) == ["invalid"]

    def test_includes_child_errors_by_default(self, instance):
        children = _children(instance)
        instance.add_error("invalid")
        if children is not None:
            children.add_error("invalid_child")

        expected = ["invalid", "invalid_child"] if children is not None else ["invalid"]
        assert instance.errors() == expected
        assert instance.errors(True) == expected


class TestErrorLog:
    """Tests for the ErrorLog value."""

    def test_keeps_insertion_order_and_duplicates(self):
        log = ErrorLog()
        log.add("b")
        log.add("a")
        log.add("b")
        assert log.collect() == ["b", "a", "b"]
        assert len(log) == 3

    def test_collect_returns_copy(self):
        log = ErrorLog()
        log.add("a")
        log.collect().append("b")
        assert log.collect() == ["a"]

    def test_collect_appends_children(self):
        log = ErrorLog()
        log.add("own")
        children = ReferenceCollection()
        children.add_error("child")
        assert log.collect(children) == ["own", "child"]
        assert log.collect(children, include_children=False) == ["own"]
