"""Tests for the medialist exception hierarchy."""

from pathlib import Path

from medialist.core.errors import (
    MediaListError,
    NotFoundError,
    RemoteNotFoundError,
    StorageError,
    TransportError,
    ValidationError,
)


def test_validation_error_default_message():
    e = ValidationError("title")
    assert e.field == "title"
    assert str(e) == "Please enter a title."
    assert isinstance(e, MediaListError)


def test_not_found_error_carries_id():
    e = NotFoundError("abc")
    assert e.entry_id == "abc"
    assert "abc" in str(e)


def test_storage_error_names_path():
    e = StorageError(Path("/tmp/storage.json"), "bad")
    assert str(e) == "/tmp/storage.json: bad"


def test_transport_error_fields():
    e = TransportError("HTTP 500 Internal Server Error: boom", status_code=500,
                       reason="Internal Server Error", detail="boom")
    assert e.status_code == 500
    assert e.detail == "boom"
    assert str(e) == "HTTP 500 Internal Server Error: boom"


def test_remote_not_found_is_both():
    e = RemoteNotFoundError("x1", "HTTP 404 Not Found", reason="Not Found")
    assert isinstance(e, TransportError)
    assert isinstance(e, NotFoundError)
    assert e.status_code == 404
    assert e.entry_id == "x1"
    assert str(e) == "HTTP 404 Not Found"
