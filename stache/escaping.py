"""
HTML escaping for {{ value }} tags.
"""

from __future__ import annotations

import re

ENTITY_MAP = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    "/": "&#x2F;",
    "`": "&#x60;",
    "=": "&#x3D;",
}

_UNSAFE_RE = re.compile("[" + re.escape("".join(ENTITY_MAP)) + "]")


def escape_html(text: str) -> str:
    """Replaces every HTML-unsafe character with its entity."""
    return _UNSAFE_RE.sub(lambda m: ENTITY_MAP[m.group(0)], text)


__all__ = ["ENTITY_MAP", "escape_html"]
