"""Tests for the query engine."""

import pytest

from medialist.entries.model import MediaEntry
from medialist.entries.query import QueryCriteria, distinct_values, matches, query


@pytest.fixture
def entries(sample_records):
    return [MediaEntry.from_record(r) for r in sample_records]


def _titles(result):
    return [e.title for e in result]


class TestFilters:
    """Filtering by type, sub-type and genre."""

    def test_no_criteria_returns_all_in_order(self, entries):
        assert query(entries) == entries
        assert query(entries, QueryCriteria()) == entries

    def test_filter_type(self, entries):
        result = query(entries, QueryCriteria(type="series"))
        assert _titles(result) == ["Breaking Bad", "Attack on Titan"]

    def test_filter_sub_type(self, entries):
        result = query(entries, QueryCriteria(sub_type="anime"))
        assert _titles(result) == ["Spirited Away", "Attack on Titan"]

    def test_filter_genre(self, entries):
        result = query(entries, QueryCriteria(genre="drama"))
        assert result == [e for e in entries if "drama" in e.genres]
        assert _titles(result) == ["Breaking Bad", "Attack on Titan"]

    def test_filters_compose_with_and(self, entries):
        result = query(entries, QueryCriteria(type="series", sub_type="anime", genre="drama"))
        assert _titles(result) == ["Attack on Titan"]

    def test_no_match(self, entries):
        assert query(entries, QueryCriteria(genre="comedy")) == []

    def test_missing_genres_never_match(self):
        entry = MediaEntry(data={"id": "x", "title": "Bare"})
        assert not matches(entry, QueryCriteria(genre="drama"))
        assert matches(entry, QueryCriteria())


class TestSorting:
    """Sorting by title, rating and status."""

    def test_rating_descending_missing_as_zero(self):
        entries = [
            MediaEntry(data={"title": "A", "rating": 5}),
            MediaEntry(data={"title": "B", "rating": 9}),
            MediaEntry(data={"title": "C"}),
        ]
        assert _titles(query(entries, QueryCriteria(sort="rating"))) == ["B", "A", "C"]

    def test_rating_non_numeric_as_zero(self):
        entries = [
            MediaEntry(data={"title": "junk", "rating": "great"}),
            MediaEntry(data={"title": "neg", "rating": -1}),
            MediaEntry(data={"title": "str", "rating": "7"}),
        ]
        assert _titles(query(entries, QueryCriteria(sort="rating"))) == ["str", "junk", "neg"]

    def test_rating_non_increasing(self, entries):
        ratings = [e.sort_rating for e in query(entries, QueryCriteria(sort="rating"))]
        assert ratings == sorted(ratings, reverse=True)

    def test_rating_ties_keep_input_order(self):
        entries = [
            MediaEntry(data={"title": "first"}),
            MediaEntry(data={"title": "second", "rating": ""}),
            MediaEntry(data={"title": "third", "rating": 0}),
        ]
        assert _titles(query(entries, QueryCriteria(sort="rating"))) == [
            "first",
            "second",
            "third",
        ]

    def test_title_ascending_case_insensitive(self):
        entries = [
            MediaEntry(data={"title": "banana"}),
            MediaEntry(data={"title": "Apple"}),
            MediaEntry(data={}),
            MediaEntry(data={"title": "cherry"}),
        ]
        assert _titles(query(entries, QueryCriteria(sort="title"))) == [
            "",
            "Apple",
            "banana",
            "cherry",
        ]

    def test_title_accents_sort_with_base_letter(self):
        entries = [
            MediaEntry(data={"title": "Zebra"}),
            MediaEntry(data={"title": "Élan"}),
            MediaEntry(data={"title": "apple"}),
            MediaEntry(data={"title": "Ōkami"}),
        ]
        assert _titles(query(entries, QueryCriteria(sort="title"))) == [
            "apple",
            "Élan",
            "Ōkami",
            "Zebra",
        ]

    def test_title_unaccented_before_accented(self):
        entries = [
            MediaEntry(data={"title": "élan"}),
            MediaEntry(data={"title": "Elan"}),
            MediaEntry(data={"title": "elan"}),
        ]
        assert _titles(query(entries, QueryCriteria(sort="title"))) == ["elan", "Elan", "élan"]

    def test_status_ascending(self, entries):
        result = query(entries, QueryCriteria(sort="status"))
        assert [e.status for e in result] == ["completed", "completed", "in-progress"]
        # Stable for equal statuses
        assert _titles(result)[:2] == ["Spirited Away", "Breaking Bad"]

    def test_filter_then_sort(self, entries):
        result = query(entries, QueryCriteria(sub_type="anime", sort="title"))
        assert _titles(result) == ["Attack on Titan", "Spirited Away"]

    def test_unknown_sort_key(self, entries):
        with pytest.raises(ValueError, match="Unknown sort key"):
            query(entries, QueryCriteria(sort="year"))

    def test_input_not_mutated(self, entries):
        before = list(entries)
        query(entries, QueryCriteria(sort="title"))
        assert entries == before

    def test_accepts_tuple(self, entries):
        result = query(tuple(entries), QueryCriteria(sort="rating"))
        assert isinstance(result, list)
        assert _titles(result) == ["Spirited Away", "Breaking Bad", "Attack on Titan"]


class TestDistinctValues:
    """Tests for distinct_values()."""

    def test_types(self, entries):
        assert distinct_values(entries, "type") == ["movie", "series"]

    def test_sub_types(self, entries):
        assert distinct_values(entries, "sub_type") == ["anime", "live-action"]

    def test_genres(self, entries):
        assert distinct_values(entries, "genres") == [
            "action",
            "adventure",
            "crime",
            "drama",
            "fantasy",
        ]

    def test_accented_values_collate(self):
        entries = [
            MediaEntry(data={"genres": ["western", "épopée", "action"]}),
        ]
        assert distinct_values(entries, "genres") == ["action", "épopée", "western"]

    def test_unknown_field(self, entries):
        with pytest.raises(ValueError):
            distinct_values(entries, "rating")
