"""
Headless book list view.

Holds the state a front-end renders (the books and the last validation
errors) and performs the fetches behind it. Rendering is left to callers.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from .requests import BookRead, BooksApiClient, BooksApiError, JsonDict

logger = logging.getLogger(__name__)

Errors = Dict[str, List[str]]


def error_messages(errors: Errors) -> List[str]:
    """
    Flatten an errors mapping into display lines, e.g. "Title can't be blank".
    """
    lines = []
    for name, messages in errors.items():
        label = name.replace("_", " ").capitalize()
        lines.extend(f"{label} {message}" for message in messages)
    return lines


class BookListView:
    """
    State:
      - books: every book fetched or created so far, in order
      - errors: field name -> messages from the last rejected submission
    """

    def __init__(self, client: BooksApiClient) -> None:
        self.client = client
        self.books: List[BookRead] = []
        self.errors: Errors = {}
        self._mounted = False
        self.loaded = False

    def mount(self) -> bool:
        """
        Fetch the list once. Failures are logged and leave the state as is.

        Returns:
            True once the list has been fetched successfully.
        """
        if self._mounted:
            return self.loaded
        self._mounted = True

        try:
            books = self.client.list_books()
        except (BooksApiError, requests.RequestException, ValueError) as e:
            logger.error("Error in fetch: %s", e)
            return False
        self.books = books
        self.loaded = True
        return True

    def add_book(self, payload: JsonDict) -> Optional[BookRead]:
        """
        Submit a `{"book": {...}}` payload.

        Returns:
            The created book, or None when it was rejected or the request failed.
        """
        try:
            book = self.client.post_book(payload)
        except BooksApiError as e:
            if e.status_code == 422 and isinstance(e.details, dict):
                self.errors = e.details
            else:
                logger.error("Error in fetch: %s", e)
            return None
        except (requests.RequestException, ValueError) as e:
            logger.error("Error in fetch: %s", e)
            return None

        self.errors = {}
        self.books = [*self.books, book]
        return book

    def error_messages(self) -> List[str]:
        return error_messages(self.errors)


class BookForm:
    """
    A single-field form. submit() hands `{"book": {"title": ...}}` to the
    callback and clears the field.
    """

    def __init__(self, on_submit: Callable[[JsonDict], Any]) -> None:
        self.on_submit = on_submit
        self.title = ""

    def change(self, value: str) -> None:
        self.title = value

    def submit(self) -> Any:
        payload = {"book": {"title": self.title}}
        result = self.on_submit(payload)
        self.title = ""
        return result
