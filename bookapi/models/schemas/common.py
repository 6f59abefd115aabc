from marshmallow import ValidationError

from bookapi.models.base_model import MAX_ID

NAME_MAX_LENGTH = 255


def validate_not_blank(value: str) -> None:
    if value is None or not value.strip():
        raise ValidationError("This value should not be blank.")


def validate_max_length(limit: int = NAME_MAX_LENGTH):
    def _validate(value: str) -> None:
        if value is not None and len(value) > limit:
            raise ValidationError(f"Must be at most {limit} characters long.")

    return _validate


def resolve_id(value):
    """
    Coerce a client supplied identifier to an int.
    Returns None for anything that cannot name a row (None, booleans, junk
    strings, fractional or non-finite numbers, ids outside the key range).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        value = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not 0 < value <= MAX_ID:
        return None
    return value


def flatten_errors(messages, prefix: str = "") -> list[dict]:
    """
    Turn marshmallow's nested {field: [messages]} into a flat list of
    {"field": ..., "message": ...} pairs.
    """
    pairs = []
    if isinstance(messages, dict):
        for field, value in messages.items():
            name = f"{prefix}.{field}" if prefix else str(field)
            pairs.extend(flatten_errors(value, name))
    elif isinstance(messages, (list, tuple)):
        for value in messages:
            pairs.extend(flatten_errors(value, prefix))
    else:
        pairs.append({"field": prefix or "_schema", "message": str(messages)})
    return pairs
