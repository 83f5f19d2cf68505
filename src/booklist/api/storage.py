from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from .models import Book

logger = logging.getLogger(__name__)

# Top-level key of the collection document.
COLLECTION_KEY = "books"

DEFAULT_BOOKS_PATH = Path("books.json")


class BookStorage(Protocol):
    """
    Full-snapshot access to the book collection.

    There is no partial update: every mutation rewrites the whole collection.
    """

    def read_all(self) -> List[Book]: ...

    def write_all(self, books: Sequence[Book]) -> None: ...


class JsonFileStorage:
    """
    Stores the collection as `{"books": [...]}` in a single JSON file.

    A missing or malformed file is not handled here; the read error propagates.
    Nothing locks the file, so writers in separate processes can overwrite
    each other.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read_all(self) -> List[Book]:
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return [Book.from_row(row) for row in data[COLLECTION_KEY]]

    def write_all(self, books: Sequence[Book]) -> None:
        """
        Dump the collection to a sibling temp file, then swap it over the
        document so readers never see a partially written file.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {COLLECTION_KEY: [b.to_dict() for b in books]}

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class InMemoryStorage:
    """Keeps the collection in a list; handy for tests."""

    def __init__(self, books: Optional[Sequence[Book]] = None) -> None:
        self._rows = [b.to_dict() for b in (books or [])]

    def read_all(self) -> List[Book]:
        return [Book.from_row(row) for row in self._rows]

    def write_all(self, books: Sequence[Book]) -> None:
        self._rows = [b.to_dict() for b in books]


def initialize_storage(path: Optional[Path] = None) -> Path:
    """
    Create an empty collection document if none exists yet.

    Args:
        path (Optional[Path]): Document location. If None, uses DEFAULT_BOOKS_PATH.

    Returns:
        Path: The document location.
    """
    path = Path(path or DEFAULT_BOOKS_PATH)
    if not path.exists():
        logger.info("Creating empty book collection at %s", path)
        JsonFileStorage(path).write_all([])
    return path
