from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    ok: bool = True
    service: str = "Booklist API"


class BookIn(BaseModel):
    """
    Book fields accepted from clients.

    `title` is optional here so that a blank or missing title reaches the
    record validation and is reported as "can't be blank".
    """

    title: Optional[str] = Field(None, description="Book title (required to save)")


class BookCreate(BaseModel):
    """
    Body of POST /api/v1/books: `{"book": {"title": ...}}`.
    """

    book: BookIn = Field(default_factory=BookIn)


class BookRead(BaseModel):
    """
    API representation of a persisted book.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Assigned on save: previous max id + 1")
    title: str


class BookEnvelope(BaseModel):
    book: BookRead


class BooksResponse(BaseModel):
    books: List[BookRead]


class ErrorsResponse(BaseModel):
    errors: Dict[str, List[str]]
