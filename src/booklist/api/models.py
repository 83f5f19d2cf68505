from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

if TYPE_CHECKING:
    from .storage import BookStorage

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title",)
BLANK_MESSAGE = "can't be blank"

# Id handed to the first book of an empty collection.
FIRST_BOOK_ID = 1

# Serializes read-modify-write cycles of save() within one process.
_save_lock = threading.Lock()


def next_book_id(books: Sequence["Book"]) -> int:
    """
    Compute the id for a new book from the current collection.

    Args:
        books: Every book currently persisted.

    Returns:
        Largest existing id + 1, or FIRST_BOOK_ID when the collection is empty.
    """
    ids = [b.id for b in books if b.id is not None]
    if not ids:
        return FIRST_BOOK_ID
    return max(ids) + 1


@dataclass
class Book:
    """
    A single book record.

    `errors` is populated by is_valid() and maps field name -> messages.
    It is None until the book has been validated, and again after a save.
    """

    title: Optional[str] = None
    id: Optional[int] = None
    errors: Optional[Dict[str, List[str]]] = field(default=None, compare=False, repr=False)

    @staticmethod
    def from_row(row: Dict[str, Any]) -> "Book":
        return Book(id=row.get("id"), title=row.get("title"))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title}

    def is_valid(self) -> bool:
        self.errors = {}
        valid = True
        for name in REQUIRED_FIELDS:
            self.errors[name] = []
            if not getattr(self, name):
                valid = False
                self.errors[name].append(BLANK_MESSAGE)
        return valid

    def save(self, storage: "BookStorage") -> bool:
        """
        Validate, assign the next id and append to the persisted collection.

        Returns:
            True when the book was written, False when validation failed
            (errors stay on the instance).
        """
        if not self.is_valid():
            logger.info("Rejected book %r: %s", self.title, self.errors)
            return False

        self.errors = None
        with _save_lock:
            books = storage.read_all()
            self.id = next_book_id(books)
            books.append(self)
            storage.write_all(books)

        logger.info("Saved book id=%s title=%r", self.id, self.title)
        return True
