"""
Shared test fixtures and configuration for Bookshelf tests.
"""
import json
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from bookshelf import create_app
from bookshelf.config import TestConfig
from bookshelf.extensions import STORE_KEY
from bookshelf.storage.json_store import BookStore


@pytest.fixture
def books_file(tmp_path: Path) -> Path:
    """Location of the books file for one test; not created yet."""
    return tmp_path / "data" / "books.json"


@pytest.fixture
def app(books_file: Path) -> Flask:
    """Create a test Flask application bound to a per-test books file."""

    class _Config(TestConfig):
        BOOKS_FILE = books_file

    app = create_app(_Config)
    yield app
    app.extensions[STORE_KEY].close()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def book_store(books_file: Path) -> BookStore:
    """A standalone BookStore on a temporary file."""
    store = BookStore(books_file)
    yield store
    store.close()


@pytest.fixture
def write_books(books_file: Path):
    """Write the books file directly, bypassing the store."""
    def _write(books) -> None:
        books_file.parent.mkdir(parents=True, exist_ok=True)
        books_file.write_text(json.dumps(books, indent=2), encoding="utf-8")
    return _write


@pytest.fixture
def read_books(books_file: Path):
    """Read the books file directly, bypassing the store."""
    def _read():
        return json.loads(books_file.read_text(encoding="utf-8"))
    return _read
