"""Tests for entry id assignment."""

import uuid
from unittest.mock import MagicMock

from medialist.entries.ids import ensure_entry_ids, new_entry_id


def test_new_entry_id_is_uuid4():
    value = uuid.UUID(new_entry_id())
    assert value.version == 4
    assert value.variant == uuid.RFC_4122


def test_new_entry_ids_differ():
    assert len({new_entry_id() for _ in range(100)}) == 100


class TestEnsureEntryIds:
    """Tests for ensure_entry_ids()."""

    def test_assigns_missing_ids(self):
        records = [{"title": "A"}, {"title": "B", "id": ""}, {"title": "C", "id": None}]
        save = MagicMock()

        assigned = ensure_entry_ids(records, save=save)

        assert assigned == 3
        ids = [r["id"] for r in records]
        assert all(ids)
        assert len(set(ids)) == 3
        save.assert_called_once_with()

    def test_existing_ids_untouched(self):
        records = [{"id": "keep-me", "title": "A"}, {"title": "B"}]
        ensure_entry_ids(records)

        assert records[0] == {"id": "keep-me", "title": "A"}
        assert records[1]["id"]

    def test_second_run_is_noop(self):
        records = [{"title": "A"}, {"title": "B"}]
        ensure_entry_ids(records)
        before = [dict(r) for r in records]
        save = MagicMock()

        assert ensure_entry_ids(records, save=save) == 0
        assert records == before
        save.assert_not_called()

    def test_empty_collection(self):
        save = MagicMock()
        assert ensure_entry_ids([], save=save) == 0
        save.assert_not_called()
