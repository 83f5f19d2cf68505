from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI, Request

from .storage import BookStorage, JsonFileStorage, initialize_storage

logger = logging.getLogger(__name__)


def _books_path_from_env() -> Path:
    """
    Determine the collection document path.

    Env var:
        BOOKS_PATH: path to the books JSON file
    """
    return Path(os.getenv("BOOKS_PATH", "books.json"))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    App startup:
      - keep a storage injected by create_app() as is
      - otherwise make sure the JSON document exists and open it
    """
    if getattr(app.state, "storage", None) is None:
        path = initialize_storage(_books_path_from_env())
        logger.info("Serving books from %s", path)
        app.state.storage = JsonFileStorage(path)
    yield


async def get_storage(request: Request) -> BookStorage:
    """
    Dependency to retrieve the BookStorage from app.state.
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise RuntimeError("BookStorage not available on app.state (lifespan not initialized).")
    return storage
