"""
Tolerant readers for the open ``props`` map.

Every rule reads properties through these helpers. A missing key, or a
value of the wrong type, reads as absent; nothing here raises.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Union

Number = Union[int, float]

TAB_INDEX_KEYS = ("tabIndex", "tabindex")
KEY_HANDLER_KEYS = ("keyboardHandlers", "keyHandlers")
CLASS_KEYS = ("class", "className")

_KEY_ALIASES = {
    " ": "space",
    "spacebar": "space",
}


def get_first(props: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not None."""
    for key in keys:
        value = props.get(key)
        if value is not None:
            return value
    return None


def get_string(props: Mapping[str, Any], key: str) -> Optional[str]:
    value = props.get(key)
    return value if isinstance(value, str) else None


def get_nonblank_string(props: Mapping[str, Any], key: str) -> Optional[str]:
    value = get_string(props, key)
    if value is None or not value.strip():
        return None
    return value


def is_true(props: Mapping[str, Any], key: str) -> bool:
    """Strict boolean check: only the literal ``True`` counts."""
    return props.get(key) is True


def is_false(props: Mapping[str, Any], key: str) -> bool:
    return props.get(key) is False


def is_true_or_true_string(props: Mapping[str, Any], key: str) -> bool:
    value = props.get(key)
    return value is True or value == "true"


def is_flag_set(props: Mapping[str, Any], key: str) -> bool:
    """Truthiness check for presence-style attributes such as ``href``."""
    return bool(props.get(key))


def booleanish(value: Any) -> Optional[str]:
    """Normalize booleans to "true"/"false" and strings to trimmed lowercase."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value.strip().lower()
    return None


def to_number(value: Any) -> Optional[Number]:
    """
    Coerce a property value to a finite number.

    Booleans are not numbers here. Numeric strings are accepted after
    trimming; blank strings and non-finite values read as absent.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return None
        try:
            parsed = float(trimmed)
        except ValueError:
            return None
        if not math.isfinite(parsed):
            return None
        return int(parsed) if parsed.is_integer() else parsed
    return None


def get_number(props: Mapping[str, Any], key: str) -> Optional[Number]:
    return to_number(props.get(key))


def get_tab_index(props: Optional[Mapping[str, Any]]) -> Optional[Number]:
    if not props:
        return None
    return to_number(get_first(props, *TAB_INDEX_KEYS))


def normalize_key(key: str) -> str:
    normalized = key.strip().lower()
    if key == " ":
        return "space"
    return _KEY_ALIASES.get(normalized, normalized)


def get_keyboard_handlers(props: Mapping[str, Any]) -> frozenset[str]:
    """
    Declared keyboard handler keys, lowercased.

    Accepts a list of strings or a comma-separated string.
    """
    raw = get_first(props, *KEY_HANDLER_KEYS)
    items: list[str] = []
    if isinstance(raw, list):
        items = [item for item in raw if isinstance(item, str)]
    elif isinstance(raw, str):
        items = raw.split(",")
    return frozenset(key for key in (normalize_key(item) for item in items) if key)


def get_class_names(props: Mapping[str, Any]) -> list[str]:
    for key in CLASS_KEYS:
        value = get_string(props, key)
        if value is not None:
            return value.split()
    return []
