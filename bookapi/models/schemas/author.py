from marshmallow import Schema, fields, EXCLUDE

from bookapi.models.schemas.common import validate_not_blank, validate_max_length


class AuthorInSchema(Schema):
    """Validates the resulting author on create and update."""

    class Meta:
        unknown = EXCLUDE

    last_name = fields.String(
        data_key="lastName",
        required=True,
        validate=[validate_not_blank, validate_max_length()],
    )
    first_name = fields.String(
        data_key="firstName",
        allow_none=True,
        load_default=None,
        validate=validate_max_length(),
    )


class AuthorOutSchema(Schema):
    """List projection: no nested collections."""

    id = fields.Integer()
    last_name = fields.String(data_key="lastName")
    first_name = fields.String(data_key="firstName", allow_none=True)


class AuthorBookSchema(Schema):
    id = fields.Integer()
    title = fields.String()
    cover_text = fields.String(data_key="coverText", allow_none=True)


class AuthorDetailSchema(AuthorOutSchema):
    """Detail projection: the author plus the books it owns."""

    books = fields.List(fields.Nested(AuthorBookSchema))
