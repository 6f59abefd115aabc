"""
Authentication blueprint:
- POST /auth/login
- GET  /auth/me

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues access tokens (JWTs signed with HS256) carrying the user's roles
- Users are provisioned by the `flask seed` command, not through the API
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort, current_app

from bookapi.models.user import User
from bookapi.models.schemas.user import UserLoginSchema, UserOutSchema
from bookapi.utils.decorators import jwt_required
from bookapi.utils.security import verify_password, create_access_token

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()


@bp.post("/auth/login")
def login():
    """
    Login: return an access_token
    """
    payload = user_login_schema.load(request.get_json(silent=True) or {})

    session = current_app.extensions["storage"].get_session()
    user = session.query(User).filter(User.email == payload["email"]).first()
    if not user or not verify_password(payload["password"], user.password_hash):
        abort(401, description="Invalid credentials")

    token = create_access_token(subject=user.id, roles=user.roles)
    return jsonify(
        {
            "access_token": token,
            "token_type": "bearer",
            "expires_in": int(current_app.config["JWT_TOKEN_EXPIRES"].total_seconds())
        }
    ), 200


@bp.get("/auth/me")
@jwt_required()
def me():
    """
    The authenticated user
    """
    return jsonify({"data": user_out_schema.dump(g.current_user)})
