from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .deps import lifespan
from .routers import router, validation_error_handler
from .storage import BookStorage


def create_app(storage: Optional[BookStorage] = None) -> FastAPI:
    """
    Build the API app.

    Args:
        storage: Collection accessor to serve. If None, the lifespan opens
                 the JSON document named by BOOKS_PATH.
    """
    app = FastAPI(
        title="Booklist API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.storage = storage

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(router)

    @app.get("/")
    async def root():
        return {"ok": True, "service": "Booklist API"}

    return app


# ASGI entrypoint (uvicorn booklist.api.run:app)
app = create_app()
