"""
Exception hierarchy for medialist.

Validation and not-found errors are raised for user-initiated actions and
are meant to be shown to the user. Storage errors are recovered by the
entry store. Transport errors wrap non-success remote responses.
"""

from __future__ import annotations

from pathlib import Path


class MediaListError(Exception):
    """Base exception for medialist errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(MediaListError):
    """A required field is missing or empty."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Please enter a {field}.")


class NotFoundError(MediaListError):
    """An operation targeted an unknown entry id."""

    def __init__(self, entry_id: str, message: str | None = None):
        self.entry_id = entry_id
        super().__init__(message or f"Could not find entry: {entry_id}")


class StorageError(MediaListError):
    """Persisted data could not be read."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class TransportError(MediaListError):
    """Non-success response (or no response) from the remote API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        reason: str = "",
        detail: str = "",
    ):
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        MediaListError.__init__(self, message)


class RemoteNotFoundError(TransportError, NotFoundError):
    """The remote API answered 404 for a single-entry fetch."""

    def __init__(self, entry_id: str, message: str, reason: str = "", detail: str = ""):
        self.entry_id = entry_id
        TransportError.__init__(self, message, status_code=404, reason=reason, detail=detail)
