from flask import Blueprint, render_template

bp = Blueprint("pages", __name__)

ENDPOINTS = [
    "GET /books",
    "GET /books/available",
    "POST /books",
    "PUT /books/:id",
    "DELETE /books/:id",
]


@bp.get("/")
def index():
    return render_template("index.html", endpoints=ENDPOINTS)
