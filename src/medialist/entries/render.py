"""Rich renderables for media entries."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from medialist.entries.model import RATING_FALLBACK, MediaEntry

EMPTY_MESSAGE = "No entries match your filters."


def format_genres(entry: MediaEntry) -> str:
    return ", ".join(entry.genres) if entry.genres else RATING_FALLBACK


def entries_table(entries: Sequence[MediaEntry], title: str | None = None) -> Table:
    """Build the list view: one row per entry, notes dimmed under the title."""
    table = Table(title=title or f"Media list ({len(entries)} shown)")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Genres")
    table.add_column("Rating", justify="right")

    for entry in entries:
        # Text() keeps user-entered brackets from being read as markup
        title_cell = Text(entry.title, style="bold")
        if entry.notes:
            title_cell.append(f"\n{entry.notes}", style="dim")
        table.add_row(
            entry.id[:8],
            title_cell,
            Text(f"{entry.type} - {entry.sub_type}"),
            Text(entry.status),
            Text(format_genres(entry)),
            entry.display_rating,
        )

    return table


def entry_table(entry: MediaEntry) -> Table:
    """Build a two-column detail view of one entry."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    rows = [
        ("ID", entry.id),
        ("Title", entry.title),
        ("Type", entry.type),
        ("Sub-type", entry.sub_type),
        ("Status", entry.status),
        ("Genres", format_genres(entry)),
        ("Rating", entry.display_rating),
        ("Notes", entry.notes),
    ]
    for name, value in rows:
        table.add_row(name, Text(value))
    return table
