from __future__ import annotations

import re
from typing import Any, Dict, Iterable
from flask import request

from xsplatform.app.common.errors import abort_json

EMAIL_REGEX = r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$"


def get_json() -> Dict[str, Any]:
    if not request.is_json:
        abort_json(400, "invalid_json", "Request must be application/json")
    data = request.get_json(silent=True)
    if data is None or not isinstance(data, dict):
        abort_json(400, "invalid_json", "Malformed JSON body")
    return data


def require_fields(data: Dict[str, Any], fields: Iterable[str]) -> None:
    missing = [f for f in fields if not data.get(f)]
    if missing:
        abort_json(400, "validation_error", "Missing required fields", {"missing": missing})


def normalize_email(raw: Any) -> str:
    email = str(raw or "").strip().lower()
    if not re.match(EMAIL_REGEX, email):
        abort_json(400, "validation_error", "Invalid email format")
    return email


def optional_text(data: Dict[str, Any], field: str) -> str | None:
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        abort_json(400, "validation_error", f"{field} must be a string", {"field": field})
    return value.strip() or None
