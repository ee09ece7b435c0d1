"""CLI commands for the remote media entries API."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from medialist.core.errors import NotFoundError, TransportError
from medialist.entries.model import MediaEntry

if TYPE_CHECKING:
    from medialist.remote.client import MediaEntriesClient

console = Console()


def get_client() -> MediaEntriesClient:
    """Create a client for the configured API origin."""
    from medialist.config.commands import get_api_base_url
    from medialist.remote.client import MediaEntriesClient

    return MediaEntriesClient(get_api_base_url())


def _fail(e: Exception) -> NoReturn:
    console.print(f"[red]{escape(str(e))}[/red]")
    raise SystemExit(1)


def _payload(
    title: str,
    type_: str,
    sub_type: str,
    genres: tuple[str, ...],
    status: str,
    rating: str,
    notes: str,
) -> dict[str, Any]:
    from medialist.entries.model import normalize_fields

    return normalize_fields({
        "title": title,
        "type": type_,
        "subType": sub_type,
        "genres": list(genres),
        "status": status,
        "rating": rating,
        "notes": notes,
    })


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group(name="remote")
def remote() -> None:
    """Work with the remote media entries API.

    The API origin comes from $MEDIALIST_API_BASE or the remote.base_url
    setting.
    """
    pass


@remote.command(name="list")
@click.option("-q", "--query", "q", help="Text search")
@click.option("--type", "type_", help="Filter by type")
@click.option("-t", "--tag", help="Filter by tag/genre")
@click.option("--sort", default="updated", show_default=True, help="Sort field")
@click.option("--dir", "direction", type=click.Choice(["asc", "desc"]), default="desc",
              show_default=True, help="Sort direction")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=50, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_remote(
    q: str | None,
    type_: str | None,
    tag: str | None,
    sort: str,
    direction: str,
    page: int,
    page_size: int,
    as_json: bool,
) -> None:
    """List remote entries."""
    from medialist.remote.client import ListCriteria

    criteria = ListCriteria(
        q=q, type=type_, tag=tag, sort=sort, dir=direction, page=page, page_size=page_size
    )
    try:
        result = get_client().list_entries(criteria)
    except TransportError as e:
        _fail(e)

    if as_json:
        _echo_json({
            "items": result.items,
            "total": result.total,
            "page": result.page,
            "pageSize": result.page_size,
        })
        return

    if not result.items:
        console.print("[yellow]No remote entries found[/yellow]")
        return

    table = Table(title=f"Remote entries (page {result.page}, {result.total} total)")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Rating", justify="right")
    for item in result.items:
        entry = MediaEntry.from_record(item)
        table.add_row(
            escape(entry.id),
            escape(entry.title),
            escape(entry.type),
            escape(entry.status),
            entry.display_rating,
        )
    console.print(table)


@remote.command(name="show")
@click.argument("entry_id")
def show_remote(entry_id: str) -> None:
    """Fetch one remote entry."""
    try:
        data = get_client().get_entry(entry_id)
    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("[dim]Use 'medialist remote list' to see available entries.[/dim]")
        raise SystemExit(1) from e
    except TransportError as e:
        _fail(e)
    _echo_json(data)


@remote.command(name="add")
@click.argument("title")
@click.option("--type", "type_", default="")
@click.option("--sub-type", default="")
@click.option("-g", "--genre", "genres", multiple=True)
@click.option("--status", default="")
@click.option("--rating", default="")
@click.option("--notes", default="")
def add_remote(
    title: str,
    type_: str,
    sub_type: str,
    genres: tuple[str, ...],
    status: str,
    rating: str,
    notes: str,
) -> None:
    """Create an entry on the remote API."""
    payload = _payload(title, type_, sub_type, genres, status, rating, notes)
    if not payload["title"]:
        console.print("[red]Please enter a title.[/red]")
        raise SystemExit(1)
    try:
        created = get_client().create_entry(payload)
    except TransportError as e:
        _fail(e)
    console.print("[green]Created remote entry[/green]")
    if created is not None:
        _echo_json(created)


@remote.command(name="update")
@click.argument("entry_id")
@click.option("--title", required=True)
@click.option("--type", "type_", default="")
@click.option("--sub-type", default="")
@click.option("-g", "--genre", "genres", multiple=True)
@click.option("--status", default="")
@click.option("--rating", default="")
@click.option("--notes", default="")
def update_remote(
    entry_id: str,
    title: str,
    type_: str,
    sub_type: str,
    genres: tuple[str, ...],
    status: str,
    rating: str,
    notes: str,
) -> None:
    """Replace a remote entry."""
    payload = _payload(title, type_, sub_type, genres, status, rating, notes)
    try:
        updated = get_client().update_entry(entry_id, payload)
    except TransportError as e:
        _fail(e)
    console.print(f"[green]Updated remote entry {escape(entry_id)}[/green]")
    if updated is not None:
        _echo_json(updated)


@remote.command(name="delete")
@click.argument("entry_id")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation")
def delete_remote(entry_id: str, yes: bool) -> None:
    """Delete a remote entry."""
    if not yes:
        click.confirm(f"Delete remote entry {entry_id}? This cannot be undone.", abort=True)
    try:
        get_client().delete_entry(entry_id)
    except TransportError as e:
        _fail(e)
    console.print(f"[green]Deleted remote entry {escape(entry_id)}[/green]")


@remote.command(name="push")
@click.argument("entry_id")
def push(entry_id: str) -> None:
    """Copy a local entry to the remote API as a new entry."""
    from medialist.entries.commands import open_store, resolve_id
    from medialist.remote.client import entry_to_payload

    store = open_store()
    try:
        entry = store.get(resolve_id(store, entry_id))
    except NotFoundError as e:
        _fail(e)

    try:
        created = get_client().create_entry(entry_to_payload(entry))
    except TransportError as e:
        _fail(e)
    console.print(f"[green]Pushed:[/green] {escape(entry.title)}")
    if created is not None:
        _echo_json(created)
