"""
ARIA usage checks.

Role-specific checks (required states, allowed values, redundant and
conflicting roles) run only on nodes with an explicit role. Relationship
and live-region checks run on every node, since ``aria-labelledby`` or
``aria-live`` are meaningful without a role.

Relationship targets are resolved against an id map built from the whole
tree before any node is checked, so forward references are fine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..logging import logger
from ..models.finding import Finding, Severity
from ..models.semantic_node import SemanticNode
from .base import Rule
from .props import booleanish, get_first, get_string
from .tree import ROOT_PATH, walk


@dataclass(frozen=True)
class AriaRoleRule:
    required: tuple[str, ...] = ()
    allowed: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


_CHECKED_TRISTATE = ("true", "false", "mixed")
_CHECKED_BINARY = ("true", "false")
_RANGE_VALUES = ("aria-valuenow", "aria-valuemin", "aria-valuemax")

ROLE_REQUIRED_ATTRS: dict[str, AriaRoleRule] = {
    "checkbox": AriaRoleRule(required=("aria-checked",), allowed={"aria-checked": _CHECKED_TRISTATE}),
    "radio": AriaRoleRule(required=("aria-checked",), allowed={"aria-checked": _CHECKED_BINARY}),
    "switch": AriaRoleRule(required=("aria-checked",), allowed={"aria-checked": _CHECKED_BINARY}),
    "slider": AriaRoleRule(required=_RANGE_VALUES),
    "progressbar": AriaRoleRule(required=_RANGE_VALUES),
    "combobox": AriaRoleRule(required=("aria-expanded",), allowed={"aria-expanded": _CHECKED_BINARY}),
    "listbox": AriaRoleRule(required=("aria-expanded",), allowed={"aria-expanded": _CHECKED_BINARY}),
}

REDUNDANT_ROLE_BY_TYPE: dict[str, frozenset[str]] = {
    "button": frozenset({"button"}),
    "a": frozenset({"link"}),
    "input": frozenset({"textbox", "checkbox", "radio", "switch", "combobox", "searchbox"}),
    "textarea": frozenset({"textbox"}),
    "select": frozenset({"listbox", "combobox"}),
}

CONFLICTING_ROLE_BY_TYPE: dict[str, frozenset[str]] = {
    "button": frozenset({"link"}),
    "a": frozenset({"button"}),
}

RELATIONSHIP_ATTRS = ("aria-labelledby", "aria-describedby")
LIVE_REGION_VALUES = frozenset({"off", "polite", "assertive"})
MAX_QUOTED_ID = 80


def _quoted_ref(ref: str) -> str:
    if len(ref) <= MAX_QUOTED_ID:
        return ref
    return ref[:MAX_QUOTED_ID] + "..."


def collect_ids(root: SemanticNode, path: str = ROOT_PATH) -> dict[str, str]:
    """Map every non-empty ``id`` prop to the path of the node carrying it."""
    ids: dict[str, str] = {}
    for node, current in walk(root, path):
        node_id = get_string(node.props, "id")
        if node_id:
            ids[node_id] = current
    return ids


class AriaUsageRule(Rule):
    """Required ARIA states, role/type agreement, id references and live regions."""

    name = "aria-usage"

    def evaluate(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        id_map = collect_ids(root, path)
        logger.debug("ARIA usage: collected %d ids", len(id_map))

        for node, current in walk(root, path):
            if node.role:
                findings.extend(self._check_required_attributes(node, current))
                findings.extend(self._check_attribute_values(node, current))
                findings.extend(self._check_redundant_role(node, current))
                findings.extend(self._check_conflicting_role(node, current))
            findings.extend(self._check_relationships(node, current, id_map))
            findings.extend(self._check_live_region(node, current))
        return findings

    def _check_required_attributes(self, node: SemanticNode, path: str) -> list[Finding]:
        rule = ROLE_REQUIRED_ATTRS.get(node.role or "")
        if rule is None:
            return []
        return [
            Finding(
                code="ARIA_REQUIRED_ATTRIBUTE_MISSING",
                path=path,
                message=f"Role '{node.role}' requires {attr}.",
            )
            for attr in rule.required
            if attr not in node.props
        ]

    def _check_attribute_values(self, node: SemanticNode, path: str) -> list[Finding]:
        rule = ROLE_REQUIRED_ATTRS.get(node.role or "")
        if rule is None:
            return []
        findings: list[Finding] = []
        for attr, allowed in rule.allowed.items():
            if attr not in node.props:
                continue
            value = booleanish(node.props[attr])
            # Non-string, non-boolean values cannot be judged here.
            if value and value not in allowed:
                findings.append(
                    Finding(
                        code="ARIA_INVALID_ATTRIBUTE_VALUE",
                        path=path,
                        message=f"Attribute {attr} on role '{node.role}' must be one of: {', '.join(allowed)}.",
                    )
                )
        return findings

    def _check_redundant_role(self, node: SemanticNode, path: str) -> list[Finding]:
        if node.role not in REDUNDANT_ROLE_BY_TYPE.get(node.type, frozenset()):
            return []
        return [
            Finding(
                code="ARIA_REDUNDANT_ROLE",
                path=path,
                message=f"Role '{node.role}' is redundant on <{node.type}>. Remove the role attribute.",
                severity=Severity.WARNING,
            )
        ]

    def _check_conflicting_role(self, node: SemanticNode, path: str) -> list[Finding]:
        if node.role not in CONFLICTING_ROLE_BY_TYPE.get(node.type, frozenset()):
            return []
        return [
            Finding(
                code="ARIA_CONFLICTING_ROLE",
                path=path,
                message=(
                    f"Role '{node.role}' conflicts with native <{node.type}> semantics. "
                    "Remove the role or change the element."
                ),
            )
        ]

    def _check_relationships(self, node: SemanticNode, path: str, id_map: Mapping[str, str]) -> list[Finding]:
        findings: list[Finding] = []
        for attr in RELATIONSHIP_ATTRS:
            value = get_string(node.props, attr)
            if not value:
                continue
            for ref in value.split():
                if ref in id_map:
                    continue
                findings.append(
                    Finding(
                        code="ARIA_RELATIONSHIP_MISSING_TARGET",
                        path=path,
                        message=(
                            f"ARIA relationship {attr} references missing id '{_quoted_ref(ref)}'. "
                            "Ensure the referenced id exists."
                        ),
                    )
                )
        return findings

    def _check_live_region(self, node: SemanticNode, path: str) -> list[Finding]:
        live = booleanish(get_first(node.props, "aria-live", "ariaLive"))
        if not live or live in LIVE_REGION_VALUES:
            return []
        return [
            Finding(
                code="ARIA_LIVE_INVALID",
                path=path,
                message="Aria-live must be off, polite, or assertive.",
            )
        ]


_RULE = AriaUsageRule()


def validate_aria_usage(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.evaluate(root, path)
