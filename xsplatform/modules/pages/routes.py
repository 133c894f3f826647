from __future__ import annotations

from pathlib import Path
from typing import Optional

from flask import Blueprint, current_app, redirect, render_template, send_from_directory

from xsplatform.app.common.auth import Identity, is_protected, resolve_identity
from xsplatform.app.common.errors import PageNotFound
from xsplatform.modules.pages.composer import render
from xsplatform.modules.pages.store import PAGE_SUFFIX, page_store

bp = Blueprint("pages", __name__)

# Forms an authenticated user has no business seeing again.
AUTH_FORMS = ("login", "register")


def render_error_page(status_code: int, message: str):
    return render_template("error.html", status_code=status_code, message=message), status_code


def _page_name(raw: str) -> str:
    # Page files are lower-case; folding here keeps the protected check and file lookup in agreement.
    name = raw.lower()
    return name[: -len(PAGE_SUFFIX)] if name.endswith(PAGE_SUFFIX) else name


def _compose(name: str, identity: Optional[Identity]):
    store = page_store()
    fragment = store.get_page(name)
    html = render(store.get_header_shell(), fragment, identity)
    return html, 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.get("/")
def index():
    return redirect(current_app.config["HOME_PATH"])


@bp.get("/<page>")
def show_page(page: str):
    name = _page_name(page)
    identity = resolve_identity()

    if identity is None and is_protected(name):
        if not page_store().has_page(name):
            raise PageNotFound(name)
        return redirect(current_app.config["LOGIN_PATH"])

    return _compose(name, identity)


@bp.get("/auth/<subpage>")
def auth_page(subpage: str):
    name = _page_name(subpage)
    identity = resolve_identity()

    if identity is not None and name in AUTH_FORMS:
        return redirect(current_app.config["HOME_PATH"])

    return _compose(f"auth/{name}", identity)


@bp.get("/<any(css, js, images):prefix>/<path:filename>")
def asset(prefix: str, filename: str):
    return send_from_directory(Path(current_app.config["WEB_DIR"]) / prefix, filename)
