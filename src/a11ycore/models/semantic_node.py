"""
Semantic tree model.

A SemanticNode is one accessibility-relevant unit. Trees are built once by an
external collaborator (an adapter, a fixture, a JSON payload), validated by
this schema, and then consumed read-only by every rule.

The schema enforces shape only. Rules never rely on it: they read ``props``
through the accessors in ``a11ycore.rules.props``.
"""

from __future__ import annotations

import re
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue, StringConstraints, field_validator

# Common ARIA roles (WAI-ARIA 1.2 role definitions, not exhaustive)
ARIA_ROLES: frozenset[str] = frozenset(
    {
        "alert", "alertdialog", "application", "article", "banner", "button",
        "cell", "checkbox", "columnheader", "combobox", "complementary",
        "contentinfo", "definition", "dialog", "directory", "document",
        "feed", "figure", "form", "grid", "gridcell", "group", "heading",
        "img", "link", "list", "listbox", "listitem", "log", "main",
        "marquee", "math", "menu", "menubar", "menuitem", "menuitemcheckbox",
        "menuitemradio", "navigation", "none", "note", "option", "presentation",
        "progressbar", "radio", "radiogroup", "region", "row", "rowgroup",
        "rowheader", "scrollbar", "search", "searchbox", "separator", "slider",
        "spinbutton", "status", "switch", "tab", "table", "tablist", "tabpanel",
        "term", "textbox", "timer", "toolbar", "tooltip", "tree", "treegrid",
        "treeitem",
    }
)

TYPE_PATTERN = r"^[a-zA-Z][a-zA-Z0-9_-]*$"

# Implicit role of native element types
TYPE_ROLE_MAP: dict[str, str] = {
    "a": "link",
    "button": "button",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "ul": "list",
    "ol": "list",
    "li": "listitem",
    "nav": "navigation",
    "main": "main",
    "img": "img",
    "table": "table",
    "tr": "row",
    "th": "columnheader",
    "td": "cell",
}

_HEADING_TYPE = re.compile(r"^h([1-6])$", re.IGNORECASE)


class SemanticNode(BaseModel):
    """
    Immutable node of the semantic tree.

    ``children`` order is document order. Paths into the tree are built from
    child indices, so reordering children changes every finding path below.
    """

    model_config = ConfigDict(frozen=True)

    type: Annotated[str, StringConstraints(min_length=1, max_length=100, pattern=TYPE_PATTERN)] = Field(
        description="Element category, for example button, h2 or custom-widget."
    )
    name: Optional[Annotated[str, StringConstraints(max_length=1000)]] = Field(
        default=None,
        description="Accessible name. Stored trimmed; whitespace-only names are rejected.",
    )
    role: Optional[Annotated[str, StringConstraints(max_length=100)]] = Field(
        default=None,
        description="Explicit ARIA role. Absent means derive from type.",
    )
    props: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Open property map: colors, tab index, ARIA attributes, flags.",
    )
    children: tuple["SemanticNode", ...] = Field(
        default=(),
        description="Child nodes in document order.",
    )

    @field_validator("name")
    @classmethod
    def _trim_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Name cannot be empty or whitespace-only")
        return trimmed

    @field_validator("role")
    @classmethod
    def _check_role(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        trimmed = value.strip()
        if not trimmed:
            return None
        if trimmed not in ARIA_ROLES:
            examples = ", ".join(sorted(ARIA_ROLES)[:5])
            raise ValueError(f"Role must be a valid ARIA role (e.g., {examples})")
        return trimmed


def effective_role(node: SemanticNode) -> Optional[str]:
    """Explicit role if present, else the implicit role of the node type."""
    if node.role:
        return node.role
    return TYPE_ROLE_MAP.get(node.type.lower())


def heading_level_from_type(node_type: str) -> Optional[int]:
    """Parse ``h1``..``h6`` into 1..6; anything else yields None."""
    match = _HEADING_TYPE.match(node_type)
    return int(match.group(1)) if match else None
