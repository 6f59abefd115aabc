from __future__ import annotations
from functools import wraps
from flask import request, g, abort, current_app
from bookapi.utils.security import decode_token, TokenError
from bookapi.models.user import User

# Role allowed to create, update and delete
ELEVATED_ROLES = ["admin"]


def jwt_required():
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            auth = request.headers.get("Authorization", "")
            if not auth.startswith("Bearer "):
                abort(401, description="Missing or invalid Authorization header")
            token = auth.split(" ", 1)[1].strip()
            try:
                decoded = decode_token(token, expected_type="access")
            except TokenError as e:
                abort(401, description=str(e))

            try:
                user_id = int(decoded.get("sub"))
            except (TypeError, ValueError):
                abort(401, description="Invalid token subject")
            storage = current_app.extensions["storage"]
            user = storage.get(User, user_id)
            if not user:
                abort(401, description="User not found")
            # Roles come from the stored user so a demotion takes effect immediately
            g.current_user = user
            g.current_user_roles = list(user.roles or [])
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def roles_required(required_roles: list[str]):
    """
    Allow access if the user has ANY of the required roles.
    Deny (403) only if there is NO overlap between user_roles and required_roles.
    """
    req = set(required_roles or [])

    def decorator(fn):
        @wraps(fn)
        @jwt_required()
        def wrapper(*args, **kwargs):
            user_roles = set(getattr(g, "current_user_roles", []))
            if not (user_roles & req):
                abort(403, description="Insufficient role")
            return fn(*args, **kwargs)

        return wrapper

    return decorator
