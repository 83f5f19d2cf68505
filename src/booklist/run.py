#!/usr/bin/env python3
"""
booklist run script.

- serve: start the API under uvicorn (child process, stopped on Ctrl+C)
- list:  print every book known to a running server
- add:   submit a new book through the form
"""

from __future__ import annotations

import argparse
import logging
import os
import signal
import subprocess
import sys
import time
from typing import Optional

from booklist import __version__
from booklist.client import BookForm, BookListView, BooksApiClient

logger = logging.getLogger("booklist.run")

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


def _project_env(books_path: Optional[str] = None) -> dict[str, str]:
    """
    Build an env for the server process.

    Ensures unbuffered output so logs appear immediately.
    """
    env = dict(os.environ)
    env["PYTHONUNBUFFERED"] = "1"
    if books_path:
        env["BOOKS_PATH"] = books_path
    return env


def _terminate_process(proc: subprocess.Popen, grace_s: float = 6.0) -> None:
    """
    Terminate a process gracefully, then force kill if needed.
    """
    if proc.poll() is not None:
        return

    if os.name == "nt":
        proc.terminate()
    else:
        proc.send_signal(signal.SIGTERM)

    start = time.time()
    while time.time() - start < grace_s:
        if proc.poll() is not None:
            return
        time.sleep(0.1)

    proc.kill()


def _serve(args: argparse.Namespace) -> int:
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "booklist.api.run:app",
        "--host",
        args.host,
        "--port",
        str(args.port),
    ]
    if args.reload:
        cmd.append("--reload")

    logger.info("Starting API on http://%s:%s", args.host, args.port)
    proc = subprocess.Popen(cmd, env=_project_env(args.books_path))
    try:
        return proc.wait()
    except KeyboardInterrupt:
        logger.info("Ctrl+C received; shutting down...")
        _terminate_process(proc)
        return 0


def _list(args: argparse.Namespace) -> int:
    view = BookListView(BooksApiClient(args.base_url))
    if not view.mount():
        return 1
    for book in view.books:
        print(f"{book.id}\t{book.title}")
    return 0


def _add(args: argparse.Namespace) -> int:
    view = BookListView(BooksApiClient(args.base_url))
    form = BookForm(view.add_book)
    form.change(args.title)
    book = form.submit()

    if book is None:
        for line in view.error_messages():
            print(line, file=sys.stderr)
        return 1

    print(f"{book.id}\t{book.title}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="booklist", description="Book list service and client")
    parser.add_argument("--version", action="version", version=f"booklist {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--books-path", default=os.getenv("BOOKS_PATH"), help="JSON file holding the books")
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=_serve)

    base_url = os.getenv("BOOKS_API_URL", DEFAULT_BASE_URL)

    list_cmd = sub.add_parser("list", help="Print all books")
    list_cmd.add_argument("--base-url", default=base_url)
    list_cmd.set_defaults(func=_list)

    add = sub.add_parser("add", help="Create a book")
    add.add_argument("title")
    add.add_argument("--base-url", default=base_url)
    add.set_defaults(func=_add)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = build_parser().parse_args(argv)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
