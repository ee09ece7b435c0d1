"""
Atomic JSON writes for the storage file.

Before each write the previous file is copied to ``backups/`` under a
timestamped name (``storage_20261018_093000.json``) and the oldest copies
beyond the keep count are pruned.
"""

from __future__ import annotations

import contextlib
import json
import os
import re
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

DEFAULT_KEEP_COUNT = 10
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
TIMESTAMP_PATTERN = re.compile(r"_(\d{8}_\d{6})\.")


def parse_backup_timestamp(filename: str) -> datetime | None:
    """Return the timestamp embedded in a backup name, or None."""
    match = TIMESTAMP_PATTERN.search(filename)
    if match is None:
        return None
    try:
        return datetime.strptime(match.group(1), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def _default_backup_dir(file_path: Path) -> Path:
    return file_path.parent / "backups"


def create_backup(file_path: Path, backup_dir: Path | None = None) -> Path:
    """Copy ``file_path`` into ``backup_dir`` with a timestamp in its name.

    Raises:
        FileNotFoundError: If file_path doesn't exist
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Cannot backup non-existent file: {file_path}")

    target_dir = Path(backup_dir) if backup_dir is not None else _default_backup_dir(file_path)
    target_dir.mkdir(parents=True, exist_ok=True)

    # Two writes in the same second share a name; the later copy wins
    stamp = datetime.now().strftime(TIMESTAMP_FORMAT)
    backup_path = target_dir / f"{file_path.stem}_{stamp}{file_path.suffix}"
    shutil.copy2(file_path, backup_path)
    return backup_path


def _backup_age_key(path: Path) -> float:
    stamp = parse_backup_timestamp(path.name)
    return stamp.timestamp() if stamp else path.stat().st_mtime


def cleanup_old_backups(
    backup_dir: Path,
    pattern: str = "*_[0-9]*_[0-9]*.*",
    keep_last: int = DEFAULT_KEEP_COUNT,
) -> list[Path]:
    """Delete all but the newest ``keep_last`` files matching ``pattern``.

    Age comes from the name's timestamp, or the file mtime when the name has
    none.

    Returns:
        The deleted paths
    """
    backup_dir = Path(backup_dir)
    if not backup_dir.is_dir():
        return []

    newest_first = sorted(backup_dir.glob(pattern), key=_backup_age_key, reverse=True)
    stale = newest_first[max(keep_last, 0):]
    for path in stale:
        path.unlink()
    return stale


def _atomic_write_text(file_path: Path, text: str) -> None:
    """Write through a temp file in the same directory, then rename over."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent, text=True
    )
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        temp_path.replace(file_path)
    except OSError as e:
        with contextlib.suppress(OSError):
            temp_path.unlink()
        raise OSError(f"Failed to write {file_path}: {e}") from e


def safe_write_json(
    file_path: Path,
    data: dict[str, Any],
    create_backup_first: bool = True,
    backup_dir: Path | None = None,
    indent: int = 2,
    ensure_ascii: bool = False,
    keep_backups: int = DEFAULT_KEEP_COUNT,
) -> Path | None:
    """Serialize ``data`` and replace ``file_path`` atomically.

    Serialization happens before anything touches the disk, so bad data
    never costs a backup slot or a half-written file.

    Args:
        file_path: JSON file to write (parent directories are created)
        data: JSON-serializable mapping
        create_backup_first: Copy the existing file to backups first
        backup_dir: Backup location (defaults to file_path.parent / 'backups')
        indent: JSON indentation
        ensure_ascii: Escape non-ASCII characters
        keep_backups: How many backups of this file to retain

    Returns:
        The backup path if one was made, else None

    Raises:
        ValueError: If data cannot be serialized to JSON
        OSError: If the write fails
    """
    file_path = Path(file_path)

    try:
        text = json.dumps(data, indent=indent, ensure_ascii=ensure_ascii) + "\n"
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cannot serialize data to JSON: {e}") from e

    backup_path = None
    if create_backup_first and file_path.exists():
        target_dir = Path(backup_dir) if backup_dir is not None else _default_backup_dir(file_path)
        backup_path = create_backup(file_path, target_dir)
        cleanup_old_backups(target_dir, f"{file_path.stem}_*{file_path.suffix}", keep_backups)

    _atomic_write_text(file_path, text)
    return backup_path
