from marshmallow import Schema, fields, EXCLUDE, post_load

from bookapi.models.schemas.author import AuthorOutSchema
from bookapi.models.schemas.common import (
    validate_not_blank,
    validate_max_length,
    resolve_id,
)


class BookInSchema(Schema):
    """Validates the resulting book on create and update."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(
        required=True,
        validate=[validate_not_blank, validate_max_length()],
    )
    cover_text = fields.String(data_key="coverText", allow_none=True, load_default=None)
    # Anything goes here; an id that does not resolve leaves the book without author
    author_id = fields.Raw(data_key="authorId", allow_none=True, load_default=None)

    @post_load
    def _normalize_author_id(self, data, **kwargs):
        data["author_id"] = resolve_id(data.get("author_id"))
        return data


class BookOutSchema(Schema):
    id = fields.Integer()
    title = fields.String()
    cover_text = fields.String(data_key="coverText", allow_none=True)
    author = fields.Nested(AuthorOutSchema, allow_none=True)
