"""
Book handlers: validation, id assignment and partial updates.

Every handler takes the store explicitly and re-reads the collection; the
mutating ones run their read-modify-write through ``BookStore.mutate`` so
validation happens before anything is queued for writing.
"""
import re
from typing import Any, Dict, List

from ..errors import NotFoundError, ValidationError
from ..storage.json_store import BookStore

UPDATABLE_FIELDS = ("title", "author", "available")

_ID_RE = re.compile(r"[0-9]+")


def parse_book_id(raw_id) -> int:
    """Accept only positive base-10 integers ("3", not "abc", "-1", "0" or "1.5")."""
    if isinstance(raw_id, bool):
        raise ValidationError("Invalid id")
    if isinstance(raw_id, int):
        book_id = raw_id
    elif isinstance(raw_id, str) and _ID_RE.fullmatch(raw_id):
        book_id = int(raw_id)
    else:
        raise ValidationError("Invalid id")
    if book_id <= 0:
        raise ValidationError("Invalid id")
    return book_id


def _is_text(value) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        # Lone surrogates survive json.loads but cannot be written back out
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _index_of(books: List[Dict[str, Any]], book_id: int) -> int:
    for i, b in enumerate(books):
        if b.get("id") == book_id:
            return i
    raise NotFoundError("Book not found")


def list_books(store: BookStore) -> List[Dict[str, Any]]:
    return store.load()


def list_available_books(store: BookStore) -> List[Dict[str, Any]]:
    return [b for b in store.load() if b.get("available") is True]


def create_book(store: BookStore, payload: Dict[str, Any]) -> Dict[str, Any]:
    title = payload.get("title")
    author = payload.get("author")
    if not _is_text(title) or not _is_text(author):
        raise ValidationError("title and author are required")
    available = payload.get("available")

    def _append(books):
        book = {
            "id": store.next_id(books),
            "title": title.strip(),
            "author": author.strip(),
            "available": available if isinstance(available, bool) else True,
        }
        books.append(book)
        return book

    return store.mutate(_append)


def update_book(store: BookStore, raw_id, payload: Dict[str, Any]) -> Dict[str, Any]:
    book_id = parse_book_id(raw_id)
    changes = {k: payload[k] for k in UPDATABLE_FIELDS if k in payload}
    if not changes:
        raise ValidationError("Provide at least one of title, author, available")
    for field in ("title", "author"):
        if field in changes:
            if not _is_text(changes[field]):
                raise ValidationError(f"{field} must be a non-empty string")
            changes[field] = changes[field].strip()
    if "available" in changes:
        changes["available"] = bool(changes["available"])

    def _apply(books):
        book = books[_index_of(books, book_id)]
        book.update(changes)
        return book

    return store.mutate(_apply)


def delete_book(store: BookStore, raw_id) -> Dict[str, Any]:
    book_id = parse_book_id(raw_id)

    def _remove(books):
        return books.pop(_index_of(books, book_id))

    removed = store.mutate(_remove)
    return {"message": "Deleted", "book": removed}
