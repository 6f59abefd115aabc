from marshmallow import Schema, fields, pre_load, EXCLUDE


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class UserLoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = {**data, "email": _norm_email(data["email"])}
        return data


class UserOutSchema(Schema):
    id = fields.Integer()
    email = fields.String()
    roles = fields.List(fields.String())
