"""
Key/value storage backed by a single JSON file.

Each top-level key of the file is a named slot holding one JSON value.
Every write rewrites the whole file atomically.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from medialist.core.backup import DEFAULT_KEEP_COUNT, safe_write_json
from medialist.core.errors import StorageError

logger = logging.getLogger(__name__)


class LocalStorage:
    """Named slots persisted to a JSON file."""

    def __init__(
        self,
        path: Path,
        backup_dir: Path | None = None,
        create_backups: bool = True,
        keep_backups: int = DEFAULT_KEEP_COUNT,
    ):
        """Initialize storage.

        Args:
            path: Path to the storage file (created on first write)
            backup_dir: Where to keep backups (defaults to path.parent / 'backups')
            create_backups: Back up the previous file before every write
            keep_backups: Number of backups to retain
        """
        self.path = Path(path)
        self.backup_dir = backup_dir
        self.create_backups = create_backups
        self.keep_backups = keep_backups

    def _read_all(self) -> dict[str, Any]:
        """Read every slot.

        Raises:
            StorageError: If the file exists but is not a JSON object
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(self.path, f"unreadable storage file ({e})") from e

        if not isinstance(data, dict):
            raise StorageError(self.path, "storage file does not hold a JSON object")
        return data

    def get_item(self, key: str) -> Any:
        """Return the value stored under ``key`` or None if absent."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, overwriting the slot wholesale.

        An unreadable file is replaced; its previous contents survive in the
        backup taken before the write.
        """
        try:
            data = self._read_all()
        except StorageError:
            logger.warning("Replacing unreadable storage file %s", self.path)
            data = {}

        data[key] = value
        safe_write_json(
            self.path,
            data,
            create_backup_first=self.create_backups,
            backup_dir=self.backup_dir,
            keep_backups=self.keep_backups,
        )
        logger.debug("Wrote slot %r to %s", key, self.path)
