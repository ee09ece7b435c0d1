"""
Entry store: the in-memory media list and its persistence.

The collection lives in one storage slot and is written back after every
mutation, before the mutating call returns.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from medialist.core.errors import NotFoundError, StorageError, ValidationError
from medialist.core.storage import LocalStorage
from medialist.entries.ids import ensure_entry_ids, new_entry_id
from medialist.entries.model import MediaEntry, normalize_fields

logger = logging.getLogger(__name__)

STORAGE_KEY = "mediaList"

# First-run sample list
SAMPLE_ENTRIES: list[dict[str, Any]] = [
    {
        "title": "Spirited Away",
        "type": "movie",
        "subType": "anime",
        "genres": ["fantasy", "adventure"],
        "status": "completed",
        "rating": 10,
        "notes": "Gorgeous visuals and emotional story.",
    },
    {
        "title": "Breaking Bad",
        "type": "series",
        "subType": "live-action",
        "genres": ["drama", "crime"],
        "status": "completed",
        "rating": 9,
        "notes": "Amazing character development.",
    },
    {
        "title": "Attack on Titan",
        "type": "series",
        "subType": "anime",
        "genres": ["action", "drama"],
        "status": "in-progress",
        "rating": 8,
        "notes": "Intense and plot-heavy.",
    },
]


class EntryStore:
    """Owns the media list and keeps its storage slot in sync."""

    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY):
        """Initialize the store.

        Args:
            storage: Key/value storage holding the list
            key: Name of the slot holding the list
        """
        self.storage = storage
        self.key = key
        self._records: list[dict[str, Any]] = []
        self._loaded = False

    def load(self) -> None:
        """Read the list from storage and assign any missing ids.

        Missing or unreadable data yields an empty list.
        """
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as e:
            logger.warning("Ignoring unreadable media list: %s", e)
            raw = None

        if raw is None:
            raw = []
        elif not isinstance(raw, list):
            logger.warning("Ignoring media list of type %s", type(raw).__name__)
            raw = []

        self._records = [dict(item) for item in raw if isinstance(item, dict)]
        self._loaded = True
        ensure_entry_ids(self._records, save=self.save)

    def save(self) -> None:
        """Write the whole list to its storage slot."""
        self._require_loaded()
        self.storage.set_item(self.key, self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, entry_id: str) -> bool:
        return self._find(entry_id) >= 0

    def _find(self, entry_id: str) -> int:
        """Index of the first record with ``entry_id``, or -1."""
        for idx, record in enumerate(self._records):
            if str(record.get("id")) == str(entry_id):
                return idx
        return -1

    def list(self) -> tuple[MediaEntry, ...]:
        """Return a detached snapshot of the collection in stored order."""
        return tuple(MediaEntry.from_record(record) for record in self._records)

    def get(self, entry_id: str) -> MediaEntry:
        """Get an entry by id.

        Raises:
            NotFoundError: If no entry has this id
        """
        idx = self._find(entry_id)
        if idx < 0:
            raise NotFoundError(entry_id)
        return MediaEntry.from_record(self._records[idx])

    def create(self, fields: Mapping[str, Any]) -> MediaEntry:
        """Add a new entry with a fresh id.

        Raises:
            ValidationError: If the title is empty
        """
        self._require_loaded()
        body = validate_fields(fields)
        record = {"id": new_entry_id(), **body}
        self._records.append(record)
        self.save()
        logger.debug("Created entry %s", record["id"])
        return MediaEntry.from_record(record)

    def update(self, entry_id: str, fields: Mapping[str, Any]) -> MediaEntry:
        """Replace every field of an entry except its id.

        Fields missing from ``fields`` are reset to empty values rather than
        keeping their previous contents.

        Raises:
            NotFoundError: If no entry has this id
            ValidationError: If the title is empty
        """
        self._require_loaded()
        idx = self._find(entry_id)
        if idx < 0:
            raise NotFoundError(entry_id)

        body = validate_fields(fields)
        record = {"id": self._records[idx]["id"], **body}
        self._records[idx] = record
        self.save()
        logger.debug("Updated entry %s", record["id"])
        return MediaEntry.from_record(record)

    def delete(self, entry_id: str) -> MediaEntry | None:
        """Remove an entry.

        Returns:
            The removed entry, or None if the id was unknown (nothing is written)
        """
        self._require_loaded()
        idx = self._find(entry_id)
        if idx < 0:
            return None

        record = self._records.pop(idx)
        self.save()
        logger.debug("Deleted entry %s", record.get("id"))
        return MediaEntry.from_record(record)

    def seed(self, entries: Sequence[Mapping[str, Any]] = SAMPLE_ENTRIES) -> int:
        """Fill an empty list with sample entries.

        Returns:
            Number of entries added (0 if the list was not empty)
        """
        self._require_loaded()
        if self._records:
            return 0
        self._records = [normalize_fields(entry) for entry in entries]
        ensure_entry_ids(self._records)
        self.save()
        return len(self._records)

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError("Store not loaded. Call load() first.")


def validate_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    body = normalize_fields(fields)
    if not body["title"]:
        raise ValidationError("title")
    return body
