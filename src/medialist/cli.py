"""
Main CLI dispatcher for medialist.

Usage:
    medialist init [--seed]                 # Initialize .medialist/ directory
    medialist list [--type|--sub-type|--genre|--sort]
    medialist add|edit|show|remove
    medialist remote [list|show|add|update|delete|push]
    medialist config [show|get|set|unset]
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from medialist import __version__

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False, dry_run: bool = False):
        self.verbose = verbose
        self.dry_run = dry_run
        self.console = console


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich; DEBUG with -v, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # urllib3 connection chatter is rarely useful
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="medialist")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-n", "--dry-run", is_flag=True, help="Preview without making changes")
@click.pass_context
def main(ctx: click.Context, verbose: bool, dry_run: bool) -> None:
    """Personal movie and series tracking list.

    Record what you watch, filter and sort it, and mirror it to a remote API.
    """
    ctx.obj = Context(verbose=verbose, dry_run=dry_run)
    setup_logging(verbose)

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No changes will be made[/yellow]")


@main.command()
@click.option("--force", "-f", is_flag=True, help="Reinitialize an existing .medialist/ directory")
@click.option("--seed", is_flag=True, help="Add sample entries to an empty list")
@click.pass_obj
def init(ctx, force: bool, seed: bool) -> None:
    """Initialize .medialist/ directory structure.

    Creates the .medialist/ directory in the current directory (or the
    configured data root if one is already found).
    """
    from pathlib import Path

    from medialist.core.config import get_data_root, get_paths

    dry_run = ctx.dry_run if ctx else False

    try:
        root = get_data_root()
    except FileNotFoundError:
        # .medialist/ doesn't exist yet
        root = Path.cwd()

    paths = get_paths(root)

    if paths.data_dir.exists() and not force:
        console.print(f"[yellow].medialist/ directory already exists at {paths.data_dir}[/yellow]")
        console.print("[dim]Use --force to reinitialize.[/dim]")
    else:
        console.print(f"[cyan]Initializing .medialist/ directory at {root}[/cyan]")
        for dir_path in (paths.data_dir, paths.backups):
            if not dry_run:
                dir_path.mkdir(parents=True, exist_ok=True)
            console.print(f"  [green]Created[/green] {dir_path.relative_to(root)}")

    if seed and not dry_run:
        from medialist.entries.commands import open_store

        store = open_store(paths)
        added = store.seed()
        if added:
            console.print(f"  [green]Seeded[/green] {added} sample entries")
        else:
            console.print("  [dim]List is not empty; skipped sample entries[/dim]")

    console.print()
    if dry_run:
        console.print("[yellow]DRY RUN - no changes made[/yellow]")
    else:
        console.print("[green]Done![/green]")


# Import and register command groups (imports after main definition intentional)
from medialist.config.commands import config  # noqa: E402
from medialist.entries.commands import (  # noqa: E402
    add,
    edit,
    facets,
    list_entries,
    remove,
    show,
)
from medialist.remote.commands import remote  # noqa: E402

main.add_command(list_entries)
main.add_command(show)
main.add_command(add)
main.add_command(edit)
main.add_command(remove)
main.add_command(facets)
main.add_command(remote)
main.add_command(config)


if __name__ == "__main__":
    main()
