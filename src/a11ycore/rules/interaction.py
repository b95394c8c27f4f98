"""
Interactive role tables and focusability.

Shared by the keyboard and screen-reader rules so both agree on what a
keyboard user can reach.
"""

from __future__ import annotations

from ..models.semantic_node import SemanticNode
from .props import get_tab_index, is_false, is_true, is_true_or_true_string

INTERACTIVE_ROLES: frozenset[str] = frozenset(
    {
        "button",
        "link",
        "textbox",
        "checkbox",
        "radio",
        "combobox",
        "searchbox",
        "menuitem",
        "menuitemcheckbox",
        "menuitemradio",
        "option",
        "switch",
        "slider",
        "tab",
    }
)

# Types the browser makes focusable without author help
NATIVE_INTERACTIVE_TYPES: frozenset[str] = frozenset({"a", "button", "input", "select", "textarea"}) | INTERACTIVE_ROLES


def role_or_type(node: SemanticNode) -> str:
    return node.role or node.type


def is_interactive(node: SemanticNode) -> bool:
    return role_or_type(node) in INTERACTIVE_ROLES


def is_native_interactive(node: SemanticNode) -> bool:
    return node.type in NATIVE_INTERACTIVE_TYPES


def is_custom_interactive(node: SemanticNode) -> bool:
    return is_interactive(node) and not is_native_interactive(node)


def is_disabled(node: SemanticNode) -> bool:
    props = node.props or {}
    return is_true_or_true_string(props, "disabled") or is_true_or_true_string(props, "aria-disabled")


def is_focusable(node: SemanticNode) -> bool:
    """
    Focusability resolution, first match wins:

    1. disabled -> not focusable
    2. explicit numeric tab index -> focusable iff >= 0
    3. explicit ``focusable`` flag
    4. interactive role/type
    """
    if is_disabled(node):
        return False

    props = node.props or {}
    tab_index = get_tab_index(props)
    if tab_index is not None:
        return tab_index >= 0

    if is_false(props, "focusable"):
        return False
    if is_true(props, "focusable"):
        return True

    return is_interactive(node)
