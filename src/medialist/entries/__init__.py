"""Media entries: model, identifiers, store and queries."""

from medialist.entries.ids import ensure_entry_ids, new_entry_id
from medialist.entries.model import MediaEntry
from medialist.entries.query import QueryCriteria, query
from medialist.entries.store import EntryStore

__all__ = [
    "EntryStore",
    "MediaEntry",
    "QueryCriteria",
    "ensure_entry_ids",
    "new_entry_id",
    "query",
]
