from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, current_app
from werkzeug.security import safe_join

from xsplatform.app.common.errors import PageNotFound

logger = logging.getLogger(__name__)

PLACEHOLDER = "{{content}}"
HEADER_SHELL_NAME = "header"
PAGE_SUFFIX = ".html"

# Served when header.html is missing so one absent asset never takes every page down.
DEFAULT_SHELL = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>XS Platform</title>
    <link rel="stylesheet" href="/css/header.css">
</head>
<body>
<header class="main-header"></header>
<main class="main-content">
    {{content}}
</main>
<script src="/js/header.js"></script>
</body>
</html>
"""


class PageStore:
    """Read-only access to the page fragments under one directory.

    ``auth/login`` resolves to ``<root>/auth/login.html``. The header shell
    lives in the same directory but is not a page.
    """

    def __init__(self, root: str | Path, cache_shell: bool = True):
        self.root = Path(root)
        self.cache_shell = cache_shell
        self._shell: Optional[str] = None

    def _path_for(self, name: str) -> Optional[str]:
        if not name or name == HEADER_SHELL_NAME:
            return None
        return self._file_for(name)

    def _file_for(self, name: str) -> Optional[str]:
        path = safe_join(str(self.root), f"{name}{PAGE_SUFFIX}")
        if path is None or not os.path.isfile(path):
            return None
        return path

    def has_page(self, name: str) -> bool:
        return self._path_for(name) is not None

    def get_page(self, name: str) -> str:
        path = self._path_for(name)
        if path is None:
            raise PageNotFound(name)
        with open(path, encoding="utf-8") as f:
            return f.read()

    def get_header_shell(self) -> str:
        if self._shell is not None:
            return self._shell
        path = self._file_for(HEADER_SHELL_NAME)
        if path is None:
            logger.warning("Header shell missing under %s, using built-in default", self.root)
            return DEFAULT_SHELL
        with open(path, encoding="utf-8") as f:
            shell = f.read()
        if self.cache_shell:
            self._shell = shell
        return shell


def init_pages(app: Flask) -> PageStore:
    store = PageStore(app.config["PAGES_DIR"], cache_shell=app.config.get("CACHE_HEADER_SHELL", True))
    app.extensions["xs_pages"] = store

    # A protected name with no fragment would bounce anonymous users to login for a page that can't exist.
    missing = [p for p in app.config["PROTECTED_PAGES"] if not store.has_page(p)]
    if missing:
        logger.warning("Protected pages without a fragment (served as 404): %s", ", ".join(missing))
    return store


def page_store() -> PageStore:
    return current_app.extensions["xs_pages"]
