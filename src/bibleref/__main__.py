"""CLI entry point for bibleref."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from bibleref import __version__
from bibleref.config import Settings
from bibleref.metadata import MetadataError, MetadataTable, load_metadata
from bibleref.reference import BookReference, ReferenceCollection, parse_books

console = Console()


def _load_settings() -> Settings:
    """Read settings from the environment, exiting with status 2 if invalid."""
    try:
        return Settings()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(2)


def _load_table(metadata: str | None, settings: Settings) -> MetadataTable:
    """Load the metadata table, exiting with status 2 if it is unusable."""
    try:
        return load_metadata(metadata or settings.metadata_path)
    except (MetadataError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(2)


def _verse_summary(numbers: list[int]) -> str:
    """Compact "1-3,5" form of a list of verse numbers."""
    if not numbers:
        return "none"
    parts = []
    start = prev = numbers[0]
    for n in numbers[1:] + [None]:
        if n is not None and n == prev + 1:
            prev = n
            continue
        parts.append(str(start) if start == prev else f"{start}-{prev}")
        if n is not None:
            start = prev = n
    return ",".join(parts)


def _render_tree(passage: str, books: ReferenceCollection[BookReference]) -> Tree:
    tree = Tree(f"[bold]{passage}[/bold]")
    for book in books:
        if not book.is_valid():
            tree.add(f"[red]✗ {book.errors(False)[0]}[/red]")
            continue
        book_node = tree.add(f"[bold cyan]{book.name}[/bold cyan] ({book.short_name})")
        for chapter in book.chapter_references:
            if not chapter.is_valid():
                book_node.add(f"[red]✗ {chapter.errors(False)[0]}[/red]")
                continue
            verses = _verse_summary(chapter.verse_numbers())
            chapter_node = book_node.add(f"Chapter {chapter.number}: {verses}")
            for message in chapter.verse_references.errors():
                chapter_node.add(f"[red]✗ {message}[/red]")
    return tree


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """bibleref - parse and validate scripture references."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


@cli.command()
@click.argument("passage")
@click.option("--clean", is_flag=True, help="Move invalid references aside first")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.option(
    "--metadata",
    type=click.Path(dir_okay=False),
    default=None,
    help="Alternate books.yaml",
)
def parse(passage: str, clean: bool, as_json: bool, metadata: str | None):
    """Parse a passage into books, chapters and verses.

    Example: bibleref parse "Gen. 1:15-18, 21; Matt 1"
    """
    settings = _load_settings()
    table = _load_table(metadata, settings)
    books = parse_books(passage, table, max_range=settings.max_range_size)

    if clean:
        books.clean()

    errors = books.errors()

    if as_json:
        result = {
            "passage": passage,
            "books": [b.to_dict() for b in books],
            "invalid_references": len(books.invalid_references),
            "errors": errors,
        }
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        console.print(_render_tree(passage, books))
        if errors:
            console.print(f"\n[bold red]{len(errors)} error(s):[/bold red]")
            for message in errors:
                console.print(f"  • {message}")
        else:
            console.print("\n[green]✓ No errors[/green]")

    if errors:
        sys.exit(1)


@cli.command()
@click.argument("name")
@click.option(
    "--metadata",
    type=click.Path(dir_okay=False),
    default=None,
    help="Alternate books.yaml",
)
def lookup(name: str, metadata: str | None):
    """Show the book a name or abbreviation resolves to."""
    settings = _load_settings()
    table = _load_table(metadata, settings)
    record = table.lookup(name)

    if record is None:
        console.print(f"[yellow]No book found for '{name}'[/yellow]")
        sys.exit(1)

    console.print(f"[bold]{record.name}[/bold] ({record.short_name})")
    console.print(f"  Chapters: {record.chapter_count}")
    console.print(f"  Verses: {sum(record.chapter_verse_counts)}")
    if record.aliases:
        console.print(f"  [dim]Aliases: {', '.join(record.aliases)}[/dim]")


@cli.command()
@click.option(
    "--metadata",
    type=click.Path(dir_okay=False),
    default=None,
    help="Alternate books.yaml",
)
def books(metadata: str | None):
    """List the books in the metadata table."""
    settings = _load_settings()
    table = _load_table(metadata, settings)

    listing = Table(title=f"Books ({Path(table.path).name if table.path else 'table'})")
    listing.add_column("Book", style="cyan")
    listing.add_column("Abbrev.")
    listing.add_column("Chapters", justify="right")
    listing.add_column("Verses", justify="right")

    for record in table:
        listing.add_row(
            record.name,
            record.short_name,
            str(record.chapter_count),
            str(sum(record.chapter_verse_counts)),
        )

    console.print(listing)


if __name__ == "__main__":
    cli()
