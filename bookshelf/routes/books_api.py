from flask import Blueprint, current_app, jsonify, request

from ..extensions import get_store
from ..services import books as book_service

bp = Blueprint("books_api", __name__)


def _payload() -> dict:
    # Missing or non-object bodies count as empty
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@bp.get("/books")
def api_list_books():
    return jsonify(book_service.list_books(get_store()))


@bp.get("/books/available")
def api_list_available_books():
    return jsonify(book_service.list_available_books(get_store()))


@bp.post("/books")
def api_create_book():
    book = book_service.create_book(get_store(), _payload())
    current_app.logger.info("Created book %s", book["id"])
    return jsonify(book), 201


@bp.put("/books/<book_id>")
def api_update_book(book_id: str):
    book = book_service.update_book(get_store(), book_id, _payload())
    current_app.logger.info("Updated book %s", book["id"])
    return jsonify(book)


@bp.delete("/books/<book_id>")
def api_delete_book(book_id: str):
    result = book_service.delete_book(get_store(), book_id)
    current_app.logger.info("Deleted book %s", result["book"]["id"])
    return jsonify(result)
