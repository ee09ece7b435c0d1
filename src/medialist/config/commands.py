"""
Settings stored in .medialist/config.yaml, and the `medialist config` group.

Keys are dotted paths into nested YAML mappings (``backup.keep_count`` is
``{"backup": {"keep_count": ...}}``). Only keys listed in CONFIG_SCHEMA can
be set from the command line.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from medialist.core.backup import DEFAULT_KEEP_COUNT
from medialist.core.config import get_paths
from medialist.remote.client import DEFAULT_BASE_URL

console = Console()

API_BASE_ENV = "MEDIALIST_API_BASE"

TRUE_WORDS = ("true", "1", "yes", "on")

CONFIG_SCHEMA: dict[str, dict[str, Any]] = {
    "remote.base_url": {
        "default": DEFAULT_BASE_URL,
        "type": str,
        "description": f"Remote API origin (overridden by ${API_BASE_ENV})",
    },
    "backup.enabled": {
        "default": True,
        "type": bool,
        "description": "Back up the storage file before every write",
    },
    "backup.keep_count": {
        "default": DEFAULT_KEEP_COUNT,
        "type": int,
        "description": "Number of storage backups to keep",
    },
}


def get_config_path() -> Path:
    return get_paths().config_file


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read config.yaml; a missing, empty or non-mapping file reads as {}."""
    config_path = config_path or get_config_path()
    if not config_path.exists():
        return {}

    loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    return loaded if isinstance(loaded, dict) else {}


def save_config(cfg: dict[str, Any]) -> None:
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.safe_dump(cfg, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )


def _parent_of(cfg: dict[str, Any], key: str, create: bool) -> dict[str, Any] | None:
    """Return the mapping that holds the last part of ``key``.

    With ``create`` missing or non-mapping levels are replaced by new dicts;
    without it a missing level gives None.
    """
    node = cfg
    for part in key.split(".")[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            if not create:
                return None
            child = node[part] = {}
        node = child
    return node


def get_config_value(key: str, default: Any = None, config_path: Path | None = None) -> Any:
    """Look up a dotted key in config.yaml."""
    parent = _parent_of(load_config(config_path), key, create=False)
    leaf = key.rsplit(".", 1)[-1]
    if parent is None or leaf not in parent:
        return default
    return parent[leaf]


def set_config_value(key: str, value: Any) -> None:
    """Write a dotted key to config.yaml, keeping sibling settings."""
    cfg = load_config()
    parent = _parent_of(cfg, key, create=True)
    parent[key.rsplit(".", 1)[-1]] = value
    save_config(cfg)


def get_setting(key: str, config_path: Path | None = None) -> Any:
    """Get a known setting, falling back to its schema default."""
    return get_config_value(key, CONFIG_SCHEMA[key]["default"], config_path)


def get_api_base_url() -> str:
    """Resolve the remote API origin: $MEDIALIST_API_BASE, then remote.base_url."""
    return os.environ.get(API_BASE_ENV) or str(get_setting("remote.base_url"))


def _coerce(key: str, raw: str) -> Any:
    """Convert a command-line string to the schema type for ``key``.

    Raises:
        click.BadParameter: If the value does not fit the type
    """
    kind = CONFIG_SCHEMA[key]["type"]
    if kind is bool:
        return raw.strip().lower() in TRUE_WORDS
    if kind is int:
        try:
            return int(raw)
        except ValueError as e:
            raise click.BadParameter(f"Invalid value type. Expected int, got {raw!r}") from e
    return raw


def _known(key: str) -> bool:
    if key in CONFIG_SCHEMA:
        return True
    console.print(f"[red]Unknown setting: {escape(key)}[/red]")
    console.print("\nAvailable settings:")
    for name in CONFIG_SCHEMA:
        console.print(f"  - {name}")
    return False


@click.group()
def config() -> None:
    """Manage medialist configuration.

    Settings are stored in .medialist/config.yaml.
    """
    pass


@config.command(name="show")
@click.option("--all", "show_all", is_flag=True, help="Include settings left at their default")
def show_cmd(show_all: bool) -> None:
    """Show settings that differ from their defaults (or all with --all)."""
    rows = []
    for key, schema in CONFIG_SCHEMA.items():
        value = get_config_value(key)
        if show_all or (value is not None and value != schema["default"]):
            rows.append((key, value, schema))

    if not rows:
        console.print("[dim]No custom configuration set. Using defaults.[/dim]")
        console.print(f"[dim]Config file: {get_config_path()}[/dim]")
        return

    table = Table(title="Configuration", header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value", style="green")
    table.add_column("Default", style="dim")
    table.add_column("Description", style="dim")
    for key, value, schema in rows:
        shown = escape(str(value)) if value is not None else f"[dim]{schema['default']}[/dim]"
        table.add_row(key, shown, str(schema["default"]), schema["description"])

    console.print(table)
    console.print(f"\n[dim]Config file: {get_config_path()}[/dim]")


@config.command(name="get")
@click.argument("key")
def get_cmd(key: str) -> None:
    """Print one setting.

    \b
    Examples:
        medialist config get remote.base_url
    """
    if not _known(key):
        return

    value = get_config_value(key)
    if value is None:
        console.print(f"{key} = {CONFIG_SCHEMA[key]['default']} [dim](default)[/dim]")
    else:
        console.print(f"{key} = {escape(str(value))}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
def set_cmd(key: str, value: str) -> None:
    """Change one setting.

    \b
    Examples:
        medialist config set remote.base_url https://media.example.org
        medialist config set backup.keep_count 5
    """
    if not _known(key):
        return

    try:
        typed = _coerce(key, value)
    except click.BadParameter as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        return

    set_config_value(key, typed)
    console.print(f"[green]Set {key} = {escape(str(typed))}[/green]")


@config.command(name="unset")
@click.argument("key")
def unset_cmd(key: str) -> None:
    """Reset one setting to its default."""
    if not _known(key):
        return

    cfg = load_config()
    parent = _parent_of(cfg, key, create=False)
    leaf = key.rsplit(".", 1)[-1]
    if parent is None or leaf not in parent:
        console.print(f"[dim]{key} is already at default[/dim]")
        return

    del parent[leaf]
    save_config(cfg)
    console.print(f"[green]Reset {key} to default ({CONFIG_SCHEMA[key]['default']})[/green]")
