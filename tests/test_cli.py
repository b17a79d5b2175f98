"""Tests for the bibleref command line.

Tests cover:
- parse: tree output, exit codes, --json and --clean
- lookup of names and abbreviations
- books listing
- --metadata with custom and unusable tables
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from bibleref.__main__ import _verse_summary, cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def custom_metadata(tmp_path):
    path = tmp_path / "books.yaml"
    path.write_text(
        "- name: Alpha\n"
        "  short_name: Alp.\n"
        "  aliases: [al]\n"
        "  chapter_verse_counts: [3, 2]\n"
    )
    return path


class TestParseCommand:
    """Tests for `bibleref parse`."""

    def test_valid_passage(self, runner):
        result = runner.invoke(cli, ["parse", "Gen. 1:15-18, 21; Matt 1"])
        assert result.exit_code == 0, result.output
        assert "Genesis" in result.output
        assert "Matthew" in result.output
        assert "No errors" in result.output

    def test_invalid_book_exits_1(self, runner):
        result = runner.invoke(cli, ["parse", "Genthesis 1"])
        assert result.exit_code == 1
        assert "could not be found" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["parse", "Ruth 3-4", "--json"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["passage"] == "Ruth 3-4"
        assert data["errors"] == []
        assert [b["name"] for b in data["books"]] == ["Ruth"]
        chapters = data["books"][0]["chapters"]["references"]
        assert [c["number"] for c in chapters] == [3, 4]

    def test_json_lists_errors(self, runner):
        result = runner.invoke(cli, ["parse", "Matthew 1:26", "--json"])
        assert result.exit_code == 1

        data = json.loads(result.output)
        assert data["errors"] == ["The verse '26' does not exist for Matthew 1"]

    def test_clean(self, runner):
        result = runner.invoke(
            cli, ["parse", "Genesis 1:1, Exoduth 1", "--clean", "--json"]
        )
        assert result.exit_code == 1

        data = json.loads(result.output)
        assert [b["name"] for b in data["books"]] == ["Genesis"]
        assert data["invalid_references"] == 1
        assert data["errors"] == ["The book 'Exoduth' could not be found"]

    def test_custom_metadata(self, runner, custom_metadata):
        result = runner.invoke(
            cli, ["parse", "al 2:1-2", "--json", "--metadata", str(custom_metadata)]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["books"][0]["name"] == "Alpha"

    def test_missing_metadata_exits_2(self, runner, tmp_path):
        missing = tmp_path / "missing.yaml"
        result = runner.invoke(cli, ["parse", "Genesis 1", "--metadata", str(missing)])
        assert result.exit_code == 2

    def test_malformed_metadata_exits_2(self, runner, tmp_path):
        path = tmp_path / "books.yaml"
        path.write_text("name: Alpha\n")
        result = runner.invoke(cli, ["parse", "Genesis 1", "--metadata", str(path)])
        assert result.exit_code == 2
        assert "Error" in result.output


class TestLookupCommand:
    """Tests for `bibleref lookup`."""

    def test_abbreviation(self, runner):
        result = runner.invoke(cli, ["lookup", "matt."])
        assert result.exit_code == 0, result.output
        assert "Matthew" in result.output
        assert "Chapters: 28" in result.output

    def test_unknown_name_exits_1(self, runner):
        result = runner.invoke(cli, ["lookup", "anathema"])
        assert result.exit_code == 1
        assert "No book found" in result.output

    def test_custom_metadata(self, runner, custom_metadata):
        result = runner.invoke(cli, ["lookup", "al", "--metadata", str(custom_metadata)])
        assert result.exit_code == 0, result.output
        assert "Alpha" in result.output
        assert "Verses: 5" in result.output


class TestBooksCommand:
    """Tests for `bibleref books`."""

    def test_lists_bundled_books(self, runner):
        result = runner.invoke(cli, ["books"])
        assert result.exit_code == 0, result.output
        assert "Genesis" in result.output
        assert "Revelation" in result.output


class TestVerseSummary:
    """Tests for the compact verse list used in tree output."""

    @pytest.mark.parametrize(
        "numbers,expected",
        [
            ([], "none"),
            ([7], "7"),
            ([1, 2, 3], "1-3"),
            ([1, 2, 3, 5], "1-3,5"),
            ([15, 16, 17, 18, 21], "15-18,21"),
            ([3, 1, 2], "3,1-2"),
        ],
    )
    def test_summary(self, numbers, expected):
        assert _verse_summary(numbers) == expected


class TestSettingsErrors:
    """Tests for invalid environment settings."""

    @pytest.mark.parametrize(
        "command", [["parse", "Genesis 1"], ["lookup", "gen"], ["books"]]
    )
    def test_invalid_max_range_size_exits_2(self, runner, monkeypatch, command):
        monkeypatch.setenv("BIBLEREF_MAX_RANGE_SIZE", "lots")
        result = runner.invoke(cli, command)
        assert result.exit_code == 2
        assert "BIBLEREF_MAX_RANGE_SIZE" in result.output

    def test_max_range_size_from_env(self, runner, monkeypatch):
        monkeypatch.setenv("BIBLEREF_MAX_RANGE_SIZE", "3")
        result = runner.invoke(cli, ["parse", "Genesis 1:1-5", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["errors"] == ["'1-5' spans more than 3 verses"]
