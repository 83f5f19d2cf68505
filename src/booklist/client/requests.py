"""
# Books HTTP Client (FastAPI /api/v1/books routes)

Thin wrapper around the book list service:

- GET  /health
- GET  /api/v1/books
- POST /api/v1/books

## Usage
from booklist.client import BooksApiClient

client = BooksApiClient("http://127.0.0.1:8000")
print(client.health())

book = client.create_book(title="Dune")
print("Created:", book)

for book in client.list_books():
    print(book.id, book.title)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union, cast

import requests

JsonDict = Dict[str, Any]
Json = Union[JsonDict, List[Any], str, int, float, bool, None]

BOOKS_PATH = "/api/v1/books"


class BooksApiError(RuntimeError):
    """
    Exception raised when the books API returns a non-2xx response.

    `details` holds the `errors` mapping of a 422 response, FastAPI's
    `detail` for other errors, or the raw body when neither is present.
    """

    def __init__(
        self, status_code: int, message: str, url: str, details: Optional[Any] = None
    ) -> None:
        super().__init__(f"[BooksApiError] {status_code} {message} | url={url} | details={details}")
        self.status_code = status_code
        self.message = message
        self.url = url
        self.details = details


@dataclass(frozen=True)
class BookRead:
    """
    Client-side representation of a persisted book.
    """

    id: int
    title: str

    @staticmethod
    def from_row(row: JsonDict) -> "BookRead":
        return BookRead(id=int(row["id"]), title=str(row["title"]))


@dataclass(frozen=True)
class BooksApiClient:
    """
    A small client for the book list endpoints.

    Attributes:
        base_url: Base URL for the FastAPI service, e.g. "http://127.0.0.1:8000"
        timeout_s: Request timeout in seconds.
        session: Optional requests.Session for connection reuse.
    """

    base_url: str
    timeout_s: float = 10.0
    session: Optional[requests.Session] = None

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[Json] = None,
    ) -> JsonDict:
        """
        Perform an HTTP request and return JSON response.

        Raises:
            BooksApiError: If server returns non-2xx response.
            requests.RequestException: For network errors/timeouts.
            ValueError: If response is not JSON or not a JSON object.
        """
        url = self._url(path)
        sess = self.session or requests

        resp = sess.request(
            method=method,
            url=url,
            params=params,
            json=json_body,
            timeout=self.timeout_s,
        )

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if not (200 <= resp.status_code < 300):
            details = payload
            if isinstance(payload, dict):
                details = payload.get("errors", payload.get("detail"))
            raise BooksApiError(resp.status_code, resp.reason, url, details)

        if not isinstance(payload, dict):
            raise ValueError(f"Expected JSON object response, got: {type(payload)} from {url}")

        return cast(JsonDict, payload)

    def health(self) -> JsonDict:
        """GET /health"""
        return self._request("GET", "/health")

    def list_books(self) -> List[BookRead]:
        """
        GET /api/v1/books, parsed into BookRead objects in stored order.
        """
        payload = self._request("GET", BOOKS_PATH)
        rows = payload.get("books")
        if not isinstance(rows, list):
            raise ValueError("Expected payload['books'] to be a list")
        return [BookRead.from_row(cast(JsonDict, r)) for r in rows]

    def post_book(self, payload: JsonDict) -> BookRead:
        """
        POST /api/v1/books with a ready-made `{"book": {...}}` body.

        Raises:
            BooksApiError: status_code 422 with the errors mapping in `details`
                           when the book fails validation.
        """
        resp = self._request("POST", BOOKS_PATH, json_body=payload)
        row = resp.get("book")
        if not isinstance(row, dict):
            raise ValueError("Expected payload['book'] to be an object")
        return BookRead.from_row(cast(JsonDict, row))

    def create_book(self, *, title: str) -> BookRead:
        """Create a book from its title."""
        return self.post_book({"book": {"title": title}})
