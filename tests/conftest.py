"""Shared pytest fixtures for booklist tests."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from booklist.api import create_app
from booklist.api.storage import InMemoryStorage


class TestClientSession:
    """Adapts FastAPI's TestClient to the requests.Session surface the client uses."""

    __test__ = False

    def __init__(self, client: TestClient) -> None:
        self.client = client

    def request(self, method: str, url: str, params: Any = None, json: Any = None, timeout: Any = None):
        resp = self.client.request(method, url, params=params, json=json)
        return SimpleNamespace(status_code=resp.status_code, reason=resp.reason_phrase, json=resp.json)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def api(storage: InMemoryStorage) -> Iterator[TestClient]:
    """TestClient over an app backed by the in-memory storage."""
    with TestClient(create_app(storage)) as client:
        yield client


@pytest.fixture
def session(api: TestClient) -> TestClientSession:
    return TestClientSession(api)
