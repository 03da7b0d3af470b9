"""Colour literal extraction from embedded stylesheets."""
from __future__ import annotations

import re
from typing import List

from . import config

COLOR_PATTERN = re.compile(
    r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![0-9a-fA-F])|rgba?\([^)]*\)",
    re.IGNORECASE,
)

# Pure black and white add nothing to a palette; text colours come from the
# prompt constraints instead.
BLOCKED_COLORS = frozenset(
    {
        "#000",
        "#000000",
        "#fff",
        "#ffffff",
        "rgb(0,0,0)",
        "rgb(255,255,255)",
        "rgba(0,0,0,1)",
        "rgba(255,255,255,1)",
    }
)


def _color_key(token: str) -> str:
    return re.sub(r"\s+", "", token).lower()


def extract_colors(style_text: str | None, cap: int | None = None) -> List[str]:
    """Return up to ``cap`` distinct, non-trivial colour literals in source order.

    Matching is case-insensitive and whitespace-insensitive for the purpose of
    deduplication and blocklist checks; the first spelling seen is returned.
    """

    if not style_text:
        return []
    limit = config.color_cap() if cap is None else cap
    if limit <= 0:
        return []

    seen: set[str] = set()
    colors: List[str] = []
    for match in COLOR_PATTERN.finditer(style_text):
        token = match.group(0)
        key = _color_key(token)
        if key in seen:
            continue
        seen.add(key)
        if key in BLOCKED_COLORS:
            continue
        colors.append(token)
        if len(colors) >= limit:
            break
    return colors
