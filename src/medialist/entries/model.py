"""
Media entry model.

Entries are stored as plain dicts using the camelCase keys written by the
web front end (``subType``), so existing lists load unchanged. MediaEntry
wraps one record and exposes typed accessors.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

# Editable fields, in display order. ``id`` is managed by the store.
ENTRY_FIELDS = ("title", "type", "subType", "genres", "status", "rating", "notes")

RATING_FALLBACK = "N/A"


def parse_rating(value: Any) -> int | float | None:
    """Interpret a stored or user-supplied rating.

    Numbers and numeric strings are accepted; anything else (missing, empty,
    non-numeric, NaN, booleans) means unrated.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None

    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        if number.is_integer():
            return int(number)
    return number


def normalize_genres(value: Any) -> list[str]:
    """Return genres as a list of unique, non-empty strings.

    Accepts a list/tuple/set of strings or a comma-separated string.
    Insertion order is kept for display.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        return []

    genres: list[str] = []
    for item in items:
        genre = str(item).strip()
        if genre and genre not in genres:
            genres.append(genre)
    return genres


def normalize_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Build a complete record body from user-supplied fields.

    Absent fields fall back to empty values, so the result always carries
    every editable field. ``sub_type`` is accepted as an alias of ``subType``.
    """
    sub_type = fields.get("subType", fields.get("sub_type"))
    return {
        "title": str(fields.get("title") or "").strip(),
        "type": str(fields.get("type") or ""),
        "subType": str(sub_type or ""),
        "genres": normalize_genres(fields.get("genres")),
        "status": str(fields.get("status") or ""),
        "rating": parse_rating(fields.get("rating")),
        "notes": str(fields.get("notes") or "").strip(),
    }


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class MediaEntry:
    """A single tracked movie or series."""

    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> MediaEntry:
        """Create a detached entry from a stored record."""
        data = dict(record)
        if isinstance(data.get("genres"), list):
            data["genres"] = list(data["genres"])
        return cls(data=data)

    @property
    def id(self) -> str:
        return _text(self.data.get("id"))

    @property
    def title(self) -> str:
        return _text(self.data.get("title"))

    @property
    def type(self) -> str:
        return _text(self.data.get("type"))

    @property
    def sub_type(self) -> str:
        return _text(self.data.get("subType"))

    @property
    def genres(self) -> list[str]:
        """Genres in insertion order (empty if missing or malformed)."""
        return normalize_genres(self.data.get("genres"))

    @property
    def status(self) -> str:
        return _text(self.data.get("status"))

    @property
    def rating(self) -> int | float | None:
        """Numeric rating, or None when unrated."""
        return parse_rating(self.data.get("rating"))

    @property
    def notes(self) -> str:
        return _text(self.data.get("notes"))

    @property
    def sort_rating(self) -> int | float:
        """Rating used for ordering; unrated sorts as 0."""
        rating = self.rating
        return 0 if rating is None else rating

    @property
    def display_rating(self) -> str:
        rating = self.rating
        return RATING_FALLBACK if rating is None else str(rating)

    def has_genre(self, genre: str) -> bool:
        return genre in self.genres

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the record, id first."""
        record = {"id": self.id}
        record.update((k, v) for k, v in self.data.items() if k != "id")
        return record
