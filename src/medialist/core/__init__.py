"""Core utilities for medialist."""

from medialist.core.backup import (
    DEFAULT_KEEP_COUNT,
    cleanup_old_backups,
    create_backup,
    safe_write_json,
)
from medialist.core.config import get_data_root, get_paths
from medialist.core.errors import (
    MediaListError,
    NotFoundError,
    RemoteNotFoundError,
    StorageError,
    TransportError,
    ValidationError,
)
from medialist.core.storage import LocalStorage

__all__ = [
    # Backup
    "create_backup",
    "safe_write_json",
    "cleanup_old_backups",
    "DEFAULT_KEEP_COUNT",
    # Config
    "get_data_root",
    "get_paths",
    # Errors
    "MediaListError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
    "TransportError",
    "RemoteNotFoundError",
    # Storage
    "LocalStorage",
]
