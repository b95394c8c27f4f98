"""
Keyboard accessibility checks and tab-order simulation.

The rule is stateless over the tree. It does synthesize the sequential
navigation order a browser would produce:

    1. focusable nodes with a positive tab index, by (tab index, document order)
    2. then focusable nodes with tab index 0 (explicit or default), in document order

Nodes with a negative tab index are focusable only programmatically and are
not part of the sequence.

NATIVE VS. CUSTOM
-----------------
Native interactive elements (``button``, ``a``, ``input``...) get default
focusability and default key handling from the browser. Custom interactive
nodes (an interactive role on a non-native type) must declare a tab index,
and key-handler checks only apply to them or to nodes that already declare
some handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..logging import logger
from ..models.finding import Finding, Severity
from ..models.semantic_node import SemanticNode
from .base import Rule
from .interaction import (
    is_custom_interactive,
    is_focusable,
    is_interactive,
    is_native_interactive,
    role_or_type,
)
from .props import get_keyboard_handlers, get_tab_index, is_false, is_true
from .tree import ROOT_PATH, walk

WIDGET_ROLES: frozenset[str] = frozenset(
    {
        "listbox",
        "menu",
        "menubar",
        "tablist",
        "radiogroup",
        "tree",
        "treegrid",
        "grid",
        "toolbar",
        "slider",
        "spinbutton",
    }
)

ARROW_KEYS: frozenset[str] = frozenset({"arrowup", "arrowdown", "arrowleft", "arrowright"})

_ENTER_SPACE = ("enter", "space")

KEY_REQUIRED_BY_ROLE: dict[str, tuple[str, ...]] = {
    "button": _ENTER_SPACE,
    "link": ("enter",),
    "checkbox": ("space",),
    "radio": ("space",),
    "switch": ("space",),
    "tab": _ENTER_SPACE,
    "menuitem": _ENTER_SPACE,
    "menuitemcheckbox": _ENTER_SPACE,
    "menuitemradio": _ENTER_SPACE,
    "option": _ENTER_SPACE,
}


@dataclass(frozen=True)
class FocusTarget:
    """One stop in the synthesized tab sequence."""

    path: str
    node: SemanticNode
    tab_index: Union[int, float]


@dataclass(frozen=True)
class _Focusable:
    path: str
    node: SemanticNode
    tab_index: Union[int, float]
    doc_index: int


def _collect_focusable(root: SemanticNode, path: str) -> list[_Focusable]:
    focusables: list[_Focusable] = []
    for node, current in walk(root, path):
        if not is_focusable(node):
            continue
        tab_index = get_tab_index(node.props)
        focusables.append(
            _Focusable(
                path=current,
                node=node,
                tab_index=0 if tab_index is None else tab_index,
                doc_index=len(focusables),
            )
        )
    return focusables


def _has_escape(node: SemanticNode, handlers: frozenset[str]) -> bool:
    return "escape" in handlers or is_true(node.props, "escapeCloses")


def simulate_tab_navigation(root: SemanticNode, path: str = ROOT_PATH) -> list[FocusTarget]:
    """Synthesize the order in which sequential Tab presses visit nodes."""
    focusables = _collect_focusable(root, path)
    positive = sorted(
        (item for item in focusables if item.tab_index > 0),
        key=lambda item: (item.tab_index, item.doc_index),
    )
    rest = [item for item in focusables if item.tab_index == 0]
    return [FocusTarget(path=item.path, node=item.node, tab_index=item.tab_index) for item in [*positive, *rest]]


class KeyboardAccessibleRule(Rule):
    """Focusability, activation keys, escape paths, arrow keys, traps and tab order."""

    name = "keyboard-accessible"

    def evaluate(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        findings.extend(self.check_focusable(root, path))
        findings.extend(self.check_focus_indicators(root, path))
        findings.extend(self.check_keyboard_handlers(root, path))
        findings.extend(self.check_focus_order(root, path))
        findings.extend(self.check_keyboard_traps(root, path))
        return findings

    def check_focusable(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            if not is_interactive(node):
                continue
            tab_index = get_tab_index(node.props)

            if tab_index is not None and tab_index < 0:
                findings.append(
                    Finding(
                        code="KEYBOARD_NEGATIVE_TABINDEX",
                        path=current,
                        message=(
                            "Interactive element has tabindex < 0 and is not reachable by Tab. "
                            "Use tabindex=0 or remove the negative value."
                        ),
                    )
                )

            if not is_focusable(node):
                findings.append(
                    Finding(
                        code="KEYBOARD_NOT_FOCUSABLE",
                        path=current,
                        message="Interactive element must be focusable for keyboard access.",
                    )
                )

            if not is_native_interactive(node) and tab_index is None:
                findings.append(
                    Finding(
                        code="KEYBOARD_MISSING_TABINDEX",
                        path=current,
                        message="Custom interactive element must define tabindex to be keyboard focusable.",
                    )
                )
        return findings

    def check_focus_indicators(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        return [
            Finding(
                code="KEYBOARD_MISSING_FOCUS_INDICATOR",
                path=current,
                message="Focusable element should provide a visible focus indicator.",
                severity=Severity.WARNING,
            )
            for node, current in walk(root, path)
            if is_false(node.props, "focusVisible") and is_focusable(node)
        ]

    def check_keyboard_handlers(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            role = role_or_type(node)
            handlers = get_keyboard_handlers(node.props)
            # Native elements are assumed to ship default key handling.
            applies = is_custom_interactive(node) or bool(handlers)
            if not applies:
                continue

            required = KEY_REQUIRED_BY_ROLE.get(role, ())
            missing = [key for key in required if key not in handlers]
            if missing:
                findings.append(
                    Finding(
                        code="KEYBOARD_MISSING_KEYBOARD_HANDLER",
                        path=current,
                        message=f"Missing keyboard activation keys: {', '.join(missing)}. Add handlers for these keys.",
                    )
                )

            is_modal = role == "dialog" or is_true(node.props, "aria-modal")
            if is_modal and not _has_escape(node, handlers):
                findings.append(
                    Finding(
                        code="KEYBOARD_MISSING_ESCAPE_HANDLER",
                        path=current,
                        message="Modal dialog should close on Escape key. Add an Escape handler.",
                    )
                )

            if role in WIDGET_ROLES and not (handlers & ARROW_KEYS):
                findings.append(
                    Finding(
                        code="KEYBOARD_MISSING_ARROW_KEY_SUPPORT",
                        path=current,
                        message="Widget should support arrow key navigation.",
                        severity=Severity.WARNING,
                    )
                )
        return findings

    def check_focus_order(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        """Positive tab indices that decrease in document order are flagged."""
        positive = [item for item in _collect_focusable(root, path) if item.tab_index > 0]
        findings: list[Finding] = []
        for prev, curr in zip(positive, positive[1:]):
            if curr.tab_index < prev.tab_index:
                findings.append(
                    Finding(
                        code="KEYBOARD_TABINDEX_OUT_OF_ORDER",
                        path=curr.path,
                        message="Positive tabindex values must increase in document order for logical tabbing.",
                        severity=Severity.WARNING,
                    )
                )
        logger.debug("Focus order: %d positive tab stops, %d findings", len(positive), len(findings))
        return findings

    def check_keyboard_traps(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            props = node.props
            if not (is_true(props, "keyboardTrap") or is_true(props, "focusTrap")):
                continue
            if _has_escape(node, get_keyboard_handlers(props)):
                continue
            findings.append(
                Finding(
                    code="KEYBOARD_TRAP",
                    path=current,
                    message="Focusable element traps keyboard focus without an Escape exit. Add an Escape handler.",
                )
            )
        return findings


_RULE = KeyboardAccessibleRule()


def validate_keyboard_accessible(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.evaluate(root, path)


def validate_focus_order(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.check_focus_order(root, path)


def validate_keyboard_traps(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.check_keyboard_traps(root, path)
