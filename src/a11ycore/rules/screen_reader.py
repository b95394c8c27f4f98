"""
Screen-reader visibility checks.

"Hidden" means removed from rendering (``hidden`` flag, ``display: none``,
``visibility: hidden``). Hiding without an explicit ``aria-hidden`` signal is
treated as unintentional.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..models.finding import Finding, Severity
from ..models.semantic_node import SemanticNode
from .base import Rule
from .interaction import is_focusable, is_interactive
from .props import get_class_names, get_string, is_true, is_true_or_true_string
from .tree import ROOT_PATH, walk

VISUALLY_HIDDEN_CLASSES = frozenset({"sr-only", "visually-hidden"})


def is_hidden(props: Mapping[str, Any]) -> bool:
    if is_true(props, "hidden"):
        return True
    return get_string(props, "display") == "none" or get_string(props, "visibility") == "hidden"


def is_aria_hidden(props: Mapping[str, Any]) -> bool:
    return is_true_or_true_string(props, "aria-hidden")


def has_meaningful_text(node: SemanticNode) -> bool:
    """Own name, or the name of any direct child."""
    if node.name and node.name.strip():
        return True
    return any(child.name and child.name.strip() for child in node.children)


class ScreenReaderContentRule(Rule):
    name = "screen-reader-content"

    def evaluate(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            props = node.props
            hidden = is_hidden(props)
            aria_hidden = is_aria_hidden(props)

            if hidden and not aria_hidden:
                findings.append(
                    Finding(
                        code="SR_CONTENT_HIDDEN",
                        path=current,
                        message=(
                            "Content is hidden from screen readers via display/visibility. "
                            "Avoid hiding meaningful content or use aria-hidden intentionally."
                        ),
                    )
                )

            if hidden and is_interactive(node):
                findings.append(
                    Finding(
                        code="SR_INTERACTIVE_HIDDEN",
                        path=current,
                        message="Interactive elements should not be hidden from users.",
                    )
                )

            if aria_hidden and is_focusable(node):
                findings.append(
                    Finding(
                        code="SR_ARIA_HIDDEN_FOCUSABLE",
                        path=current,
                        message="Focusable elements must not be aria-hidden.",
                    )
                )

            visually_hidden = not VISUALLY_HIDDEN_CLASSES.isdisjoint(get_class_names(props))
            if visually_hidden and not has_meaningful_text(node):
                findings.append(
                    Finding(
                        code="SR_ONLY_NO_TEXT",
                        path=current,
                        message="Visually hidden content should include meaningful text.",
                        severity=Severity.WARNING,
                    )
                )
        return findings


_RULE = ScreenReaderContentRule()


def validate_screen_reader_content(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.evaluate(root, path)
