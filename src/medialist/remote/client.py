"""
Client for the remote media entries API.

The API exposes a single collection resource:

    GET    /api/mediaentries?q&type&tag&sort&dir&page&pageSize
    GET    /api/mediaentries/{id}
    POST   /api/mediaentries
    PUT    /api/mediaentries/{id}
    DELETE /api/mediaentries/{id}

Usage:
    client = MediaEntriesClient("https://localhost:7143")
    page = client.list_entries(ListCriteria(type="movie"))
    entry = client.get_entry(page.items[0]["id"])
"""

from __future__ import annotations

import json
import logging
import urllib.parse
from dataclasses import dataclass, field
from typing import Any

import requests

from medialist.core.errors import RemoteNotFoundError, TransportError
from medialist.entries.model import MediaEntry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://localhost:7143"
COLLECTION_PATH = "/api/mediaentries"


@dataclass(frozen=True)
class ListCriteria:
    """Query parameters for listing remote entries."""

    q: str | None = None
    type: str | None = None
    tag: str | None = None
    sort: str = "updated"
    dir: str = "desc"
    page: int = 1
    page_size: int = 50

    def to_params(self) -> dict[str, str]:
        """Build query parameters; empty filters are left out."""
        params: dict[str, str] = {}
        if self.q:
            params["q"] = self.q
        if self.type:
            params["type"] = self.type
        if self.tag:
            params["tag"] = self.tag
        params["sort"] = self.sort
        params["dir"] = self.dir
        params["page"] = str(self.page)
        params["pageSize"] = str(self.page_size)
        return params


@dataclass
class EntryPage:
    """One page of remote entries."""

    items: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 50

    @classmethod
    def from_api_response(cls, data: Any, criteria: ListCriteria) -> EntryPage:
        """Create from a list response.

        Accepts a paged object (``items``, ``total``/``totalCount``, ``page``,
        ``pageSize``) or a bare JSON array.
        """
        if data is None:
            return cls(page=criteria.page, page_size=criteria.page_size)
        if isinstance(data, list):
            return cls(
                items=list(data),
                total=len(data),
                page=criteria.page,
                page_size=criteria.page_size,
            )
        # null fields read as absent
        items = list(data.get("items") or [])
        total = next(
            (v for v in (data.get("total"), data.get("totalCount")) if v is not None),
            len(items),
        )
        page = data.get("page")
        page_size = data.get("pageSize")
        return cls(
            items=items,
            total=int(total),
            page=int(page) if page is not None else criteria.page,
            page_size=int(page_size) if page_size is not None else criteria.page_size,
        )


def extract_problem_detail(response: requests.Response) -> str:
    """Pull a readable message out of an error response.

    Prefers the ``detail`` then ``title`` of a ProblemDetails body, then the
    whole JSON body, then the raw response text.
    """
    try:
        problem = response.json()
    except ValueError:
        return (response.text or "").strip()

    if isinstance(problem, dict):
        message = problem.get("detail") or problem.get("title")
        if message:
            return str(message)
    return json.dumps(problem)


def entry_to_payload(entry: MediaEntry) -> dict[str, Any]:
    """Map a local entry to the API's create/update body."""
    return {
        "title": entry.title,
        "type": entry.type,
        "subType": entry.sub_type,
        "genres": entry.genres,
        "status": entry.status,
        "rating": entry.rating,
        "notes": entry.notes,
    }


class MediaEntriesClient:
    """Client for the remote media entries collection."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, session: requests.Session | None = None):
        """Initialize the client.

        Args:
            base_url: API origin, e.g. https://localhost:7143
            session: Optional preconfigured session
        """
        self.base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def _entry_path(self, entry_id: str) -> str:
        return f"{COLLECTION_PATH}/{urllib.parse.quote(str(entry_id), safe='')}"

    def _request(
        self,
        method: str,
        path: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Make a request to the API.

        Args:
            method: HTTP method
            path: Path relative to base_url
            json_data: JSON body
            params: Query parameters

        Returns:
            Decoded JSON body, or None for an empty success response

        Raises:
            TransportError: On connection failure or non-success status
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, url, params)

        try:
            response = self._session.request(method, url, json=json_data, params=params)
        except requests.RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        if not response.ok:
            detail = extract_problem_detail(response)
            reason = response.reason or ""
            message = f"HTTP {response.status_code} {reason}".rstrip()
            if detail:
                message = f"{message}: {detail}"
            raise TransportError(
                message,
                status_code=response.status_code,
                reason=reason,
                detail=detail,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON in response from {method} {path}",
                status_code=response.status_code,
                reason=response.reason or "",
                detail=response.text,
            ) from e

    def list_entries(self, criteria: ListCriteria | None = None) -> EntryPage:
        """List entries with optional filters, sorting and paging."""
        if criteria is None:
            criteria = ListCriteria()
        data = self._request("GET", COLLECTION_PATH, params=criteria.to_params())
        return EntryPage.from_api_response(data, criteria)

    def get_entry(self, entry_id: str) -> dict[str, Any]:
        """Fetch a single entry.

        Raises:
            RemoteNotFoundError: If the API answers 404
            TransportError: On any other failure
        """
        try:
            data = self._request("GET", self._entry_path(entry_id))
        except TransportError as e:
            if e.status_code == 404:
                raise RemoteNotFoundError(
                    entry_id, e.message, reason=e.reason, detail=e.detail
                ) from e
            raise
        return data

    def create_entry(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        """Create an entry; returns the created entry."""
        return self._request("POST", COLLECTION_PATH, json_data=payload)

    def update_entry(self, entry_id: str, payload: dict[str, Any]) -> dict[str, Any] | None:
        """Replace an entry. The id is repeated in the body."""
        body = {"id": entry_id, **payload}
        return self._request("PUT", self._entry_path(entry_id), json_data=body)

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry."""
        self._request("DELETE", self._entry_path(entry_id))
