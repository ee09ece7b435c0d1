"""Shared test fixtures for medialist package."""

import json

import pytest

from medialist.core.storage import LocalStorage
from medialist.entries.store import EntryStore


@pytest.fixture
def sample_json_file(tmp_path):
    """Create a sample JSON file for testing."""
    data = {"key": "value", "number": 42}
    file_path = tmp_path / "sample.json"
    file_path.write_text(json.dumps(data))
    return file_path


@pytest.fixture
def sample_records():
    """Three stored entries, as the web front end writes them."""
    return [
        {
            "id": "11111111-1111-4111-8111-111111111111",
            "title": "Spirited Away",
            "type": "movie",
            "subType": "anime",
            "genres": ["fantasy", "adventure"],
            "status": "completed",
            "rating": 10,
            "notes": "Gorgeous visuals and emotional story.",
        },
        {
            "id": "22222222-2222-4222-8222-222222222222",
            "title": "Breaking Bad",
            "type": "series",
            "subType": "live-action",
            "genres": ["drama", "crime"],
            "status": "completed",
            "rating": 9,
            "notes": "Amazing character development.",
        },
        {
            "id": "33333333-3333-4333-8333-333333333333",
            "title": "Attack on Titan",
            "type": "series",
            "subType": "anime",
            "genres": ["action", "drama"],
            "status": "in-progress",
            "rating": "8",
            "notes": "Intense and plot-heavy.",
        },
    ]


@pytest.fixture
def storage_file(tmp_path, sample_records):
    """Create a storage file holding the sample list."""
    file_path = tmp_path / "storage.json"
    file_path.write_text(json.dumps({"mediaList": sample_records}, indent=2))
    return file_path


@pytest.fixture
def storage(tmp_path):
    """Empty storage with backups under tmp_path/backups."""
    return LocalStorage(tmp_path / "storage.json", backup_dir=tmp_path / "backups")


@pytest.fixture
def store(storage_file, tmp_path):
    """A loaded store over the sample list."""
    s = EntryStore(LocalStorage(storage_file, backup_dir=tmp_path / "backups"))
    s.load()
    return s


@pytest.fixture
def mock_data_root(tmp_path, monkeypatch):
    """Create a data root with a .medialist/ directory."""
    data_dir = tmp_path / ".medialist"
    data_dir.mkdir()
    (data_dir / "backups").mkdir()

    monkeypatch.delenv("MEDIALIST_API_BASE", raising=False)

    # Clear the lru_cache first, then pin the root
    from medialist.core import config
    config.get_data_root.cache_clear()
    monkeypatch.setattr(config, "get_data_root", lambda: tmp_path)

    return tmp_path


@pytest.fixture
def seeded_root(mock_data_root, sample_records):
    """Data root whose storage file holds the sample list."""
    storage_path = mock_data_root / ".medialist" / "storage.json"
    storage_path.write_text(json.dumps({"mediaList": sample_records}, indent=2))
    return mock_data_root
