"""
Where the media list lives on disk.

A data root is any directory holding a ``.medialist/`` folder. It is found
by, in order: $MEDIALIST_ROOT, the nearest ancestor of the working
directory with a ``.medialist/`` folder, then the ``root`` key of the
per-user config (``$XDG_CONFIG_HOME/medialist/config.yaml``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

DATA_DIR_NAME = ".medialist"
ROOT_ENV = "MEDIALIST_ROOT"


@dataclass(frozen=True)
class StorePaths:
    """Files and folders under one data root."""

    root: Path
    data_dir: Path
    storage_file: Path  # JSON slots, including mediaList
    config_file: Path
    backups: Path


def get_global_config_path() -> Path:
    """Per-user config file; it need not exist."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / "medialist" / "config.yaml"


def load_global_config() -> dict:
    """Read the per-user config. Missing or broken files read as {}."""
    config_path = get_global_config_path()
    if not config_path.is_file():
        return {}
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _has_data_dir(path: Path) -> bool:
    return (path / DATA_DIR_NAME).is_dir()


def _nearest_root(start: Path) -> Path | None:
    for candidate in (start, *start.parents):
        if _has_data_dir(candidate):
            return candidate
    return None


def find_data_root(start_path: Path | None = None) -> Path:
    """Locate the data root.

    Args:
        start_path: Where the ancestor search begins (cwd if omitted)

    Raises:
        FileNotFoundError: When no source yields a directory with .medialist/
    """
    env_root = os.environ.get(ROOT_ENV)
    if env_root:
        env_path = Path(env_root).resolve()
        if not _has_data_dir(env_path):
            raise FileNotFoundError(
                f"{ROOT_ENV}={env_root} does not contain a {DATA_DIR_NAME}/ directory."
            )
        return env_path

    start = Path(start_path if start_path is not None else Path.cwd()).resolve()
    nearest = _nearest_root(start)
    if nearest is not None:
        return nearest

    configured = load_global_config().get("root")
    if configured:
        configured_path = Path(configured).expanduser().resolve()
        if not _has_data_dir(configured_path):
            raise FileNotFoundError(
                f"Global config root={configured} does not contain a {DATA_DIR_NAME}/ directory."
            )
        return configured_path

    raise FileNotFoundError(
        f"No {DATA_DIR_NAME}/ directory found from {start}. Run 'medialist init', "
        f"set {ROOT_ENV}, or set root in {get_global_config_path()}."
    )


@lru_cache(maxsize=1)
def get_data_root() -> Path:
    return find_data_root()


def get_paths(root: Path | None = None) -> StorePaths:
    """Paths under ``root`` (the discovered data root by default)."""
    root = Path(root) if root is not None else get_data_root()
    data_dir = root / DATA_DIR_NAME
    return StorePaths(
        root=root,
        data_dir=data_dir,
        storage_file=data_dir / "storage.json",
        config_file=data_dir / "config.yaml",
        backups=data_dir / "backups",
    )
