from __future__ import annotations

from typing import Any, Dict, List, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .deps import get_storage
from .models import Book
from .schemas import (
    BookCreate,
    BookEnvelope,
    BookRead,
    BooksResponse,
    ErrorsResponse,
    HealthResponse,
)
from .storage import BookStorage

router = APIRouter()

books_router = APIRouter(prefix="/api/v1/books", tags=["books"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(ok=True, service="Booklist API")


# Storage calls block, so the book handlers are plain `def` and run in the threadpool.
@books_router.get("", response_model=BooksResponse)
def list_books(storage: BookStorage = Depends(get_storage)) -> BooksResponse:
    books = storage.read_all()
    return BooksResponse(books=[BookRead.model_validate(b) for b in books])


@books_router.post(
    "",
    response_model=BookEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorsResponse}},
)
def create_book(
    payload: BookCreate, storage: BookStorage = Depends(get_storage)
) -> Union[BookEnvelope, JSONResponse]:
    book = Book(title=payload.book.title)
    if not book.save(storage):
        return JSONResponse(
            status_code=422,
            content=ErrorsResponse(errors=book.errors or {}).model_dump(),
        )
    return BookEnvelope(book=BookRead.model_validate(book))


def _error_field(loc: List[Any]) -> str:
    names = [str(part) for part in loc if isinstance(part, str) and part != "body"]
    return names[-1] if names else "book"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report unparseable request bodies in the same `{"errors": {...}}` shape
    as record validation failures.
    """
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        errors.setdefault(_error_field(list(err.get("loc", ()))), []).append(str(err.get("msg")))
    return JSONResponse(
        status_code=422,
        content=ErrorsResponse(errors=errors).model_dump(),
    )


router.include_router(books_router)
