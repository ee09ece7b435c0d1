"""Tests for MediaEntry and field normalisation."""

import pytest

from medialist.entries.model import (
    MediaEntry,
    normalize_fields,
    normalize_genres,
    parse_rating,
)


class TestParseRating:
    """Tests for parse_rating()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (9, 9),
            (7.5, 7.5),
            (8.0, 8),
            ("8", 8),
            (" 6.5 ", 6.5),
            ("", None),
            (None, None),
            ("great", None),
            (float("nan"), None),
            (True, None),
            ([5], None),
        ],
    )
    def test_values(self, value, expected):
        assert parse_rating(value) == expected


class TestNormalizeGenres:
    """Tests for normalize_genres()."""

    def test_list_keeps_order_and_drops_duplicates(self):
        assert normalize_genres(["drama", "crime", "drama", " "]) == ["drama", "crime"]

    def test_comma_string(self):
        assert normalize_genres("action, drama") == ["action", "drama"]

    def test_malformed(self):
        assert normalize_genres(None) == []
        assert normalize_genres(42) == []


class TestNormalizeFields:
    """Tests for normalize_fields()."""

    def test_absent_fields_become_empty(self):
        body = normalize_fields({"title": "X"})
        assert body == {
            "title": "X",
            "type": "",
            "subType": "",
            "genres": [],
            "status": "",
            "rating": None,
            "notes": "",
        }

    def test_strips_title_and_notes(self):
        body = normalize_fields({"title": "  Dune  ", "notes": " long \n"})
        assert body["title"] == "Dune"
        assert body["notes"] == "long"

    def test_sub_type_alias(self):
        assert normalize_fields({"sub_type": "anime"})["subType"] == "anime"


class TestMediaEntry:
    """Tests for MediaEntry accessors."""

    def test_properties(self, sample_records):
        entry = MediaEntry.from_record(sample_records[2])

        assert entry.id == "33333333-3333-4333-8333-333333333333"
        assert entry.title == "Attack on Titan"
        assert entry.type == "series"
        assert entry.sub_type == "anime"
        assert entry.genres == ["action", "drama"]
        assert entry.status == "in-progress"
        assert entry.rating == 8
        assert entry.notes == "Intense and plot-heavy."

    def test_defaults(self):
        entry = MediaEntry(data={})

        assert entry.id == ""
        assert entry.title == ""
        assert entry.genres == []
        assert entry.rating is None
        assert entry.sort_rating == 0
        assert entry.display_rating == "N/A"

    def test_from_record_is_detached(self, sample_records):
        entry = MediaEntry.from_record(sample_records[0])
        entry.data["title"] = "changed"
        entry.data["genres"].append("extra")

        assert sample_records[0]["title"] == "Spirited Away"
        assert sample_records[0]["genres"] == ["fantasy", "adventure"]

    def test_has_genre(self, sample_records):
        entry = MediaEntry.from_record(sample_records[1])
        assert entry.has_genre("drama")
        assert not entry.has_genre("comedy")

    def test_to_dict_puts_id_first(self):
        entry = MediaEntry(data={"title": "A", "id": "x"})
        assert list(entry.to_dict()) == ["id", "title"]
