"""Session gate: who is calling, and which pages need them to be known.

Two credentials are honoured. A bearer token (``Authorization: Bearer``)
signed with ``JWT_SECRET`` wins when it verifies; otherwise the Flask
session's ``user_id`` is used. Either way the user row is reloaded, so a
user deleted after login resolves to anonymous. Anything malformed,
expired or missing resolves to ``None`` and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from flask import current_app, g, request, session

from xsplatform.app.extensions import db
from xsplatform.app.models import User

JWT_ALGORITHM = "HS256"

_UNRESOLVED = object()


@dataclass(frozen=True)
class Identity:
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, email=user.email, first_name=user.first_name, last_name=user.last_name)

    @property
    def display_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or self.email

    def to_public(self) -> Dict[str, Any]:
        # Never carries the password hash.
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }


def issue_token(user: User) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "iat": now,
        "exp": now + timedelta(hours=current_app.config["JWT_EXPIRES_HOURS"]),
    }
    return jwt.encode(claims, current_app.config["JWT_SECRET"], algorithm=JWT_ALGORITHM)


def _bearer_user_id() -> Optional[int]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    try:
        claims = jwt.decode(
            token.strip(),
            current_app.config["JWT_SECRET"],
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
        return int(claims["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        return None


def _session_user_id() -> Optional[int]:
    try:
        return int(session["user_id"])
    except (KeyError, TypeError, ValueError):
        return None


def resolve_identity() -> Optional[Identity]:
    """Return the caller's identity for this request, or None if anonymous.

    Cached on ``g`` so the router and views see the same answer.
    """
    cached = g.get("_identity", _UNRESOLVED)
    if cached is not _UNRESOLVED:
        return cached

    identity = None
    for user_id in (_bearer_user_id(), _session_user_id()):
        if user_id is None:
            continue
        user = db.session.get(User, user_id)
        if user is not None:
            identity = Identity.from_user(user)
            break

    g._identity = identity
    return identity


def is_protected(page_name: str) -> bool:
    return page_name in current_app.config["PROTECTED_PAGES"]


def start_session(user: User) -> None:
    session.clear()
    session.permanent = True
    session["user_id"] = user.id
    g._identity = Identity.from_user(user)


def end_session() -> None:
    session.clear()
    g._identity = None
