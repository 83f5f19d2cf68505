from .requests import BookRead, BooksApiClient, BooksApiError
from .view import BookForm, BookListView, error_messages

__all__ = [
    "BookRead",
    "BooksApiClient",
    "BooksApiError",
    "BookForm",
    "BookListView",
    "error_messages",
]
