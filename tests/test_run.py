"""Tests for the booklist command line."""

from __future__ import annotations

import pytest
import requests

from booklist import __version__, run
from booklist.client import BooksApiClient


@pytest.fixture
def app_client(monkeypatch: pytest.MonkeyPatch, session):
    """Point the CLI's client at the in-process app."""

    def factory(base_url: str) -> BooksApiClient:
        return BooksApiClient("http://testserver", session=session)

    monkeypatch.setattr(run, "BooksApiClient", factory)


class TestParser:
    def test_serve_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BOOKS_PATH", raising=False)
        args = run.build_parser().parse_args(["serve"])
        assert (args.host, args.port, args.books_path, args.reload) == ("127.0.0.1", 8000, None, False)

    def test_base_url_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOOKS_API_URL", "http://books.test:9000")
        args = run.build_parser().parse_args(["list"])
        assert args.base_url == "http://books.test:9000"

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            run.build_parser().parse_args([])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            run.build_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_project_env_sets_books_path(self) -> None:
        env = run._project_env("/tmp/books.json")
        assert env["BOOKS_PATH"] == "/tmp/books.json"
        assert env["PYTHONUNBUFFERED"] == "1"


class TestCommands:
    def test_add_then_list(self, app_client, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            run.main(["add", "Dune"])
        assert excinfo.value.code == 0
        assert capsys.readouterr().out == "1\tDune\n"

        with pytest.raises(SystemExit) as excinfo:
            run.main(["list"])
        assert excinfo.value.code == 0
        assert capsys.readouterr().out == "1\tDune\n"

    def test_add_blank_title_fails(self, app_client, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            run.main(["add", ""])

        assert excinfo.value.code == 1
        assert "Title can't be blank" in capsys.readouterr().err

    def test_list_fails_when_server_unreachable(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        class DownSession:
            def request(self, **kwargs):
                raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(
            run, "BooksApiClient", lambda base_url: BooksApiClient(base_url, session=DownSession())
        )

        with pytest.raises(SystemExit) as excinfo:
            run.main(["list"])

        assert excinfo.value.code == 1
        assert capsys.readouterr().out == ""
