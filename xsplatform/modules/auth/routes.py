from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from xsplatform.app.extensions import db
from xsplatform.app.models import User
from xsplatform.app.common.auth import Identity, end_session, issue_token, resolve_identity, start_session
from xsplatform.app.common.validation import get_json, normalize_email, optional_text, require_fields
from xsplatform.app.common.errors import abort_json

bp = Blueprint("auth", __name__)


def _authenticated_response(user: User, message: str):
    start_session(user)
    return {
        "success": True,
        "message": message,
        "token": issue_token(user),
        "user": Identity.from_user(user).to_public(),
    }


@bp.post("/auth/register")
def register():
    """POST /api/auth/register - Create an account and sign it in."""
    data = get_json()
    require_fields(data, ["email", "password"])

    email = normalize_email(data["email"])
    if User.query.filter_by(email=email).first():
        abort_json(400, "conflict", "Email already registered")

    user = User(
        email=email,
        password_hash=generate_password_hash(str(data["password"])),
        first_name=optional_text(data, "firstName"),
        last_name=optional_text(data, "lastName"),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.session.rollback()
        abort_json(400, "conflict", "Email already registered")
    current_app.logger.info("Registered user %s", user.id)

    return _authenticated_response(user, "Registration successful"), 201


@bp.post("/auth/login")
def login():
    """POST /api/auth/login - Authenticate and start a session."""
    data = get_json()
    require_fields(data, ["email", "password"])

    email = str(data["email"]).strip().lower()
    user = User.query.filter_by(email=email).first()
    # Same answer for unknown email and wrong password.
    if not user or not check_password_hash(user.password_hash, str(data["password"])):
        abort_json(401, "invalid_credentials", "Invalid credentials")

    return _authenticated_response(user, "Login successful"), 200


@bp.post("/auth/logout")
def logout():
    """POST /api/auth/logout - Terminate session."""
    end_session()
    return {"success": True, "message": "Logged out successfully"}, 200


@bp.get("/auth/me")
def me():
    """GET /api/auth/me - Who the header widget is talking to, if anyone."""
    identity = resolve_identity()
    if identity is None:
        return {"success": True, "authenticated": False, "user": None}, 200
    return {"success": True, "authenticated": True, "user": identity.to_public()}, 200
