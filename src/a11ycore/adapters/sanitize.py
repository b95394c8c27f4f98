"""Coercions that keep adapter output inside the node schema."""

from __future__ import annotations

import re
from typing import Any, Optional

from ..models.semantic_node import ARIA_ROLES

MAX_TYPE_LENGTH = 100
MAX_NAME_LENGTH = 1000
FALLBACK_TYPE = "unknown"

_INVALID_TYPE_CHARS = re.compile(r"[^a-zA-Z0-9_-]+")


def sanitize_type(raw: Any) -> str:
    """Map an arbitrary role/tag string onto the node type alphabet."""
    if not isinstance(raw, str):
        return FALLBACK_TYPE
    cleaned = _INVALID_TYPE_CHARS.sub("-", raw.strip()).strip("-")
    if not cleaned:
        return FALLBACK_TYPE
    if not cleaned[0].isalpha():
        cleaned = f"x-{cleaned}"
    return cleaned[:MAX_TYPE_LENGTH]


def clean_name(raw: Any) -> Optional[str]:
    if raw is None or raw == "":
        return None
    trimmed = str(raw).strip()
    if not trimmed:
        return None
    return trimmed[:MAX_NAME_LENGTH]


def split_role(raw: Any) -> tuple[Optional[str], Optional[str]]:
    """
    Return ``(aria_role, foreign_role)``.

    Exactly one side is set for a non-blank string; roles outside the ARIA
    set land on the foreign side.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None, None
    trimmed = raw.strip()
    if trimmed in ARIA_ROLES:
        return trimmed, None
    return None, trimmed
