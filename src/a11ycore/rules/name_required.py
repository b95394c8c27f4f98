"""
Accessible-name requirement for core interactive types.

NOTE: a whitespace-only name counts as present here. The tree schema rejects
such names at construction, so this only matters for trees built without
validation (``SemanticNode.model_construct``). Both behaviors are kept.
"""

from __future__ import annotations

from ..models.finding import Finding
from ..models.semantic_node import SemanticNode
from .base import Rule
from .tree import ROOT_PATH, walk

NAME_REQUIRED_TYPES = frozenset({"button", "link", "textbox", "checkbox", "radio"})


class NameRequiredRule(Rule):
    name = "name-required"

    def evaluate(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        return [
            Finding(
                code="NAME_MISSING",
                path=current,
                message=f"Interactive element '{node.type}' must have a name.",
            )
            for node, current in walk(root, path)
            if (node.type in NAME_REQUIRED_TYPES or node.role in NAME_REQUIRED_TYPES) and not node.name
        ]


_RULE = NameRequiredRule()


def validate_name_required(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.evaluate(root, path)
