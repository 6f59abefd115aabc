from __future__ import annotations

from flask import Blueprint, request, jsonify, current_app, url_for

from bookapi.api.utils.pagination import parse_pagination
from bookapi.services import AuthorService
from bookapi.utils.decorators import roles_required, ELEVATED_ROLES

bp = Blueprint("authors", __name__)


def service() -> AuthorService:
    return current_app.extensions["author_service"]


def json_response(payload: str):
    return current_app.response_class(payload, status=200, mimetype="application/json")


@bp.get("/authors")
def list_authors():
    """
    List authors (paginated, cached per page and limit)
    """
    page, limit = parse_pagination()
    return json_response(service().list(page, limit))


@bp.get("/authors/<int:author_id>")
def get_author(author_id: int):
    """
    Get an author by id, with the books it owns
    """
    return json_response(service().detail(author_id))


@bp.post("/authors")
@roles_required(ELEVATED_ROLES)
def create_author():
    """
    Create an author
    """
    data = service().create(request.get_json())
    location = url_for("authors.get_author", author_id=data["id"], _external=True)
    return jsonify({"data": data}), 201, {"Location": location}


@bp.put("/authors/<int:author_id>")
@roles_required(ELEVATED_ROLES)
def update_author(author_id: int):
    """
    Update an author; fields left out keep their value
    """
    service().update(author_id, request.get_json())
    return ("", 204)


@bp.delete("/authors/<int:author_id>")
@roles_required(ELEVATED_ROLES)
def delete_author(author_id: int):
    """
    Delete an author and every book it owns
    """
    service().delete(author_id)
    return ("", 204)
