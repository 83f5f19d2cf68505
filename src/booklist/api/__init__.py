"""
Book list API.

`app` is the ASGI entrypoint (serves BOOKS_PATH); `create_app` builds an app
around any BookStorage.
"""

from .run import app, create_app

__all__ = ["app", "create_app"]
