"""Splice a page fragment into the shared header shell."""

from __future__ import annotations

import logging
import re
from typing import Optional

from jinja2.utils import htmlsafe_json_dumps

from xsplatform.app.common.auth import Identity
from xsplatform.modules.pages.store import PLACEHOLDER

logger = logging.getLogger(__name__)

BODY_RE = re.compile(r"<body[^>]*>([\s\S]*)</body>", re.IGNORECASE)
BODY_CLOSE_RE = re.compile(r"</body\s*>", re.IGNORECASE)

CURRENT_USER_SCRIPT_ID = "xs-current-user"


def extract_body(fragment: str) -> str:
    """Content between <body> tags for full documents, the whole fragment otherwise."""
    match = BODY_RE.search(fragment)
    return match.group(1) if match else fragment


def identity_script(identity: Identity) -> str:
    # htmlsafe_json_dumps escapes <, >, & and ' so stored names can't close the tag.
    payload = htmlsafe_json_dumps(identity.to_public())
    return f'<script type="application/json" id="{CURRENT_USER_SCRIPT_ID}">{payload}</script>\n'


def _insert_before_body_close(html: str, snippet: str) -> str:
    matches = list(BODY_CLOSE_RE.finditer(html))
    if not matches:
        return html + snippet
    pos = matches[-1].start()
    return html[:pos] + snippet + html[pos:]


def render(shell: str, fragment: str, identity: Optional[Identity] = None) -> str:
    if PLACEHOLDER not in shell:
        logger.warning("Header shell has no %s placeholder; page content dropped", PLACEHOLDER)
        html = shell
    else:
        head, _, tail = shell.partition(PLACEHOLDER)
        if PLACEHOLDER in tail:
            logger.warning("Header shell has more than one %s placeholder; extras removed", PLACEHOLDER)
            tail = tail.replace(PLACEHOLDER, "")
        html = head + extract_body(fragment) + tail

    if identity is not None:
        html = _insert_before_body_close(html, identity_script(identity))
    return html
