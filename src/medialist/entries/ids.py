"""Stable identifiers for media entries."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable, MutableMapping
from typing import Any

logger = logging.getLogger(__name__)


def new_entry_id() -> str:
    """Return a fresh random (version 4) UUID string."""
    return str(uuid.uuid4())


def ensure_entry_ids(
    records: Iterable[MutableMapping[str, Any]],
    save: Callable[[], None] | None = None,
) -> int:
    """Give every record without an ``id`` a new one, in place.

    Records that already carry a non-empty id are left untouched. ``save``
    is called once if any id was assigned, and not at all otherwise, so the
    migration is safe to run on every load.

    Args:
        records: Mutable entry records
        save: Persistence callback

    Returns:
        Number of ids assigned
    """
    assigned = 0
    for record in records:
        if not record.get("id"):
            record["id"] = new_entry_id()
            assigned += 1

    if assigned:
        logger.debug("Assigned ids to %d entries", assigned)
        if save is not None:
            save()
    return assigned
