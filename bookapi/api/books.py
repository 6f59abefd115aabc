from __future__ import annotations

from flask import Blueprint, request, jsonify, current_app, url_for

from bookapi.api.utils.pagination import parse_pagination
from bookapi.services import BookService
from bookapi.utils.decorators import roles_required, ELEVATED_ROLES

bp = Blueprint("books", __name__)


def service() -> BookService:
    return current_app.extensions["book_service"]


def json_response(payload: str):
    return current_app.response_class(payload, status=200, mimetype="application/json")


@bp.get("/books")
def list_books():
    """
    List books (paginated, cached per page and limit)
    """
    page, limit = parse_pagination()
    return json_response(service().list(page, limit))


@bp.get("/books/<int:book_id>")
def get_book(book_id: int):
    """
    Get a single book by id
    """
    return json_response(service().detail(book_id))


@bp.post("/books")
@roles_required(ELEVATED_ROLES)
def create_book():
    """
    Create a new book
    """
    data = service().create(request.get_json())
    location = url_for("books.get_book", book_id=data["id"], _external=True)
    return jsonify({"data": data}), 201, {"Location": location}


@bp.put("/books/<int:book_id>")
@roles_required(ELEVATED_ROLES)
def update_book(book_id: int):
    """
    Update a book; authorId is re-resolved on every update
    """
    service().update(book_id, request.get_json())
    return ("", 204)


@bp.delete("/books/<int:book_id>")
@roles_required(ELEVATED_ROLES)
def delete_book(book_id: int):
    """
    Delete a book (its author is left untouched)
    """
    service().delete(book_id)
    return ("", 204)
