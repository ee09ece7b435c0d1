"""CLI commands for the local media list."""

from __future__ import annotations

import json
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from medialist.core.config import StorePaths, get_paths
from medialist.core.errors import NotFoundError, ValidationError
from medialist.core.storage import LocalStorage
from medialist.entries.query import SORT_KEYS, QueryCriteria, distinct_values, query
from medialist.entries.render import EMPTY_MESSAGE, entries_table, entry_table
from medialist.entries.store import EntryStore, validate_fields

console = Console()


def storage_for(paths: StorePaths) -> LocalStorage:
    """Storage for a data root, honouring the backup.* settings."""
    from medialist.config.commands import get_setting

    return LocalStorage(
        paths.storage_file,
        backup_dir=paths.backups,
        create_backups=bool(get_setting("backup.enabled", paths.config_file)),
        keep_backups=int(get_setting("backup.keep_count", paths.config_file)),
    )


def open_store(paths: StorePaths | None = None) -> EntryStore:
    """Build and load the entry store for ``paths`` (default: current data root)."""
    store = EntryStore(storage_for(paths or get_paths()))
    store.load()
    return store


def resolve_id(store: EntryStore, entry_id: str) -> str:
    """Expand a unique id prefix (as shown by ``list``) to a full id.

    Raises:
        NotFoundError: If nothing matches
        click.UsageError: If the prefix is ambiguous
    """
    if entry_id in store:
        return entry_id

    candidates = [e.id for e in store.list() if entry_id and e.id.startswith(entry_id)]
    if len(candidates) == 1:
        return candidates[0]
    if len(candidates) > 1:
        raise click.UsageError(f"Ambiguous id prefix '{entry_id}' ({len(candidates)} matches)")
    raise NotFoundError(entry_id)


def _report_not_found(e: NotFoundError) -> NoReturn:
    console.print(f"[red]{escape(e.message)}[/red]")
    console.print("[dim]Use 'medialist list' to return to the list.[/dim]")
    raise SystemExit(1)


def _report_invalid(e: ValidationError) -> NoReturn:
    console.print(f"[red]{e.message}[/red]")
    raise SystemExit(1)


def entry_options(func: Any) -> Any:
    """Shared field options for add/edit."""
    options = [
        click.option("--type", "type_", default="", help="Media type (e.g. movie, series)"),
        click.option("--sub-type", default="", help="Sub-type (e.g. anime, live-action)"),
        click.option("-g", "--genre", "genres", multiple=True, help="Genre (repeatable)"),
        click.option("--status", default="", help="Status (e.g. completed, in-progress)"),
        click.option("--rating", default="", help="Numeric rating"),
        click.option("--notes", default="", help="Free-text notes"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _fields(
    title: str,
    type_: str,
    sub_type: str,
    genres: tuple[str, ...],
    status: str,
    rating: str,
    notes: str,
) -> dict[str, Any]:
    return {
        "title": title,
        "type": type_,
        "subType": sub_type,
        "genres": list(genres),
        "status": status,
        "rating": rating,
        "notes": notes,
    }


@click.command(name="list")
@click.option("--type", "type_", default="", help="Only entries of this type")
@click.option("--sub-type", default="", help="Only entries of this sub-type")
@click.option("-g", "--genre", default="", help="Only entries with this genre")
@click.option("-s", "--sort", type=click.Choice(SORT_KEYS), help="Sort key")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_entries(type_: str, sub_type: str, genre: str, sort: str | None, as_json: bool) -> None:
    """List entries, filtered and sorted.

    \b
    Examples:
        medialist list --type series --sort rating
        medialist list -g drama --json
    """
    store = open_store()
    criteria = QueryCriteria(type=type_, sub_type=sub_type, genre=genre, sort=sort or "")
    results = query(store.list(), criteria)

    if as_json:
        click.echo(json.dumps([entry.to_dict() for entry in results], indent=2, ensure_ascii=False))
        return

    if not results:
        console.print(f"[yellow]{EMPTY_MESSAGE}[/yellow]")
        return

    console.print(entries_table(results))


@click.command()
@click.argument("entry_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(entry_id: str, as_json: bool) -> None:
    """Show one entry (full id or unique prefix)."""
    store = open_store()
    try:
        entry = store.get(resolve_id(store, entry_id))
    except NotFoundError as e:
        _report_not_found(e)

    if as_json:
        click.echo(json.dumps(entry.to_dict(), indent=2, ensure_ascii=False))
        return

    console.print(Panel(entry_table(entry), title=escape(entry.title or entry.id)))


@click.command()
@click.argument("title")
@entry_options
@click.pass_obj
def add(
    ctx: Any,
    title: str,
    type_: str,
    sub_type: str,
    genres: tuple[str, ...],
    status: str,
    rating: str,
    notes: str,
) -> None:
    """Add a new entry.

    \b
    Examples:
        medialist add "Spirited Away" --type movie --sub-type anime -g fantasy --rating 10
    """
    fields = _fields(title, type_, sub_type, genres, status, rating, notes)

    if ctx is not None and ctx.dry_run:
        try:
            validate_fields(fields)
        except ValidationError as e:
            _report_invalid(e)
        console.print("[yellow]Dry run -- no changes saved.[/yellow]")
        return

    store = open_store()
    try:
        entry = store.create(fields)
    except ValidationError as e:
        _report_invalid(e)

    console.print(f"[green]Added:[/green] {escape(entry.title)} [dim]({entry.id})[/dim]")


@click.command()
@click.argument("entry_id")
@click.option("--title", required=True, help="Title")
@entry_options
@click.pass_obj
def edit(
    ctx: Any,
    entry_id: str,
    title: str,
    type_: str,
    sub_type: str,
    genres: tuple[str, ...],
    status: str,
    rating: str,
    notes: str,
) -> None:
    """Replace an entry's fields, keeping its id.

    Options left out are cleared, not kept.

    \b
    Examples:
        medialist edit 3f2a --title "Breaking Bad" --type series --status completed
    """
    store = open_store()
    fields = _fields(title, type_, sub_type, genres, status, rating, notes)

    try:
        full_id = resolve_id(store, entry_id)
        validate_fields(fields)
        if ctx is not None and ctx.dry_run:
            console.print("[yellow]Dry run -- no changes saved.[/yellow]")
            return
        entry = store.update(full_id, fields)
    except NotFoundError as e:
        _report_not_found(e)
    except ValidationError as e:
        _report_invalid(e)

    console.print(f"[green]Saved changes:[/green] {escape(entry.title)}")


@click.command()
@click.argument("entry_id")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation")
@click.pass_obj
def remove(ctx: Any, entry_id: str, yes: bool) -> None:
    """Delete an entry."""
    store = open_store()
    try:
        full_id = resolve_id(store, entry_id)
    except NotFoundError:
        console.print(f"[yellow]No entry with id {escape(entry_id)}; nothing to delete.[/yellow]")
        return

    entry = store.get(full_id)
    name = f'"{entry.title}"' if entry.title else "this entry"
    if not yes:
        click.confirm(f"Delete {name}? This cannot be undone.", abort=True)

    if ctx is not None and ctx.dry_run:
        console.print("[yellow]Dry run -- no changes saved.[/yellow]")
        return

    store.delete(full_id)
    console.print(f"[green]Deleted:[/green] {escape(name)}")


@click.command()
def facets() -> None:
    """Show the types, sub-types and genres in use."""
    entries = open_store().list()
    for label, field in (("Types", "type"), ("Sub-types", "sub_type"), ("Genres", "genres")):
        values = distinct_values(entries, field)
        console.print(f"[bold]{label}:[/bold] {', '.join(values) if values else '-'}")
