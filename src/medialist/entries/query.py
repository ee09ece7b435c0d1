"""
Filtering and sorting of media entries.

Pure functions over a sequence of entries; the input is never modified.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from medialist.entries.model import MediaEntry

SORT_KEYS = ("title", "rating", "status")


@dataclass(frozen=True)
class QueryCriteria:
    """Filters (combined with AND) and an optional sort key.

    Empty strings impose no constraint.
    """

    type: str = ""
    sub_type: str = ""
    genre: str = ""
    sort: str = ""


def _strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _text_key(value: str) -> tuple[str, str, str, str]:
    """Collation key: letters first, then accents, then case (lower before upper).

    "Élan" sorts between "apple" and "Zebra"; "elan" comes before "élan".
    """
    folded = value.casefold()
    return (_strip_accents(folded), folded, value.swapcase(), value)


_SORTERS: dict[str, tuple[Callable[[MediaEntry], Any], bool]] = {
    "title": (lambda e: _text_key(e.title), False),
    "rating": (lambda e: e.sort_rating, True),
    "status": (lambda e: _text_key(e.status), False),
}


def matches(entry: MediaEntry, criteria: QueryCriteria) -> bool:
    """Check whether an entry satisfies every filter in ``criteria``."""
    if criteria.type and entry.type != criteria.type:
        return False
    if criteria.sub_type and entry.sub_type != criteria.sub_type:
        return False
    return not (criteria.genre and not entry.has_genre(criteria.genre))


def query(
    entries: Iterable[MediaEntry],
    criteria: QueryCriteria | None = None,
) -> list[MediaEntry]:
    """Return the entries matching ``criteria``, sorted by its sort key.

    Without a sort key the input order is kept. Sorting is stable, so equal
    keys also keep input order.

    Raises:
        ValueError: For an unknown sort key
    """
    if criteria is None:
        criteria = QueryCriteria()

    result = [entry for entry in entries if matches(entry, criteria)]

    if criteria.sort:
        if criteria.sort not in _SORTERS:
            raise ValueError(
                f"Unknown sort key: {criteria.sort!r} (expected one of {', '.join(SORT_KEYS)})"
            )
        key, reverse = _SORTERS[criteria.sort]
        result.sort(key=key, reverse=reverse)

    return result


def distinct_values(entries: Sequence[MediaEntry], field: str) -> list[str]:
    """Sorted distinct non-empty values of ``type``, ``sub_type`` or ``genres``."""
    values: set[str] = set()
    for entry in entries:
        if field == "genres":
            values.update(entry.genres)
        elif field == "type":
            values.add(entry.type)
        elif field == "sub_type":
            values.add(entry.sub_type)
        else:
            raise ValueError(f"Unknown field: {field!r}")
    values.discard("")
    return sorted(values, key=_text_key)
