# bookshelf/extensions.py
from flask import current_app
from flask_cors import CORS

from .storage.json_store import BookStore

# CORS is a real Flask extension (keeps init_app)
cors = CORS()

STORE_KEY = "book_store"


def init_store(app) -> BookStore:
    store = BookStore(app.config["BOOKS_FILE"])
    app.extensions[STORE_KEY] = store
    return store


def get_store() -> BookStore:
    """The store bound to the running app."""
    return current_app.extensions[STORE_KEY]
