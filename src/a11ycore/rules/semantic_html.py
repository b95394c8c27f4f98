"""
Structural semantics checks.

Covers the document-structure rules that native HTML semantics express and
that authors most often get wrong:

1. Heading hierarchy
   Headings are collected in document order. Going deeper by more than one
   level (h1 -> h3) is an error; going back up to ANY shallower level is
   always allowed. A document with headings but no level-1 heading gets a
   warning, not an error.

2. Button vs. link
   Links navigate (need ``href``, no ``onclick``); buttons act (no ``href``).

3. List structure
   Every DIRECT child of ``ul``/``ol``/``role=list`` must be a list item.
   Each violation is reported at the child's own path.

4. Table semantics
   Header cells are searched through the whole table subtree (thead > tr,
   tbody > tr, nested row groups). Each ``th`` without ``scope`` is a
   warning reported at the table path, a table with no header cells at all
   is a warning, and a table with more than 3 direct children and no
   ``thead``/``tbody`` gets an info hint.

5. Form labels
   Label ``for`` targets are collected tree-wide BEFORE any control is
   checked, so a label may appear after its control in document order.

Reference: https://developer.mozilla.org/en-US/docs/Learn_web_development/Core/Accessibility/HTML
"""

from __future__ import annotations

from dataclasses import dataclass

from ..logging import logger
from ..models.finding import Finding, Severity
from ..models.semantic_node import SemanticNode, effective_role, heading_level_from_type
from .base import Rule
from .props import get_first, get_number, get_string, is_flag_set
from .tree import ROOT_PATH, child_path, walk

LIST_TYPES = frozenset({"ul", "ol"})
FORM_CONTROL_TYPES = frozenset({"input", "select", "textarea"})
FORM_CONTROL_ROLES = frozenset({"textbox", "combobox", "searchbox"})
HEADER_CELL_ROLES = frozenset({"columnheader", "rowheader"})
ROW_GROUP_TYPES = frozenset({"thead", "tbody"})

# Tables with more direct children than this should group rows
COMPLEX_TABLE_CHILDREN = 3


@dataclass(frozen=True)
class _Heading:
    level: int
    path: str


def _is_link_like(node: SemanticNode) -> bool:
    return node.type == "a" or node.role == "link"


def _is_button_like(node: SemanticNode) -> bool:
    return node.type == "button" or node.role == "button"


def _is_list(node: SemanticNode) -> bool:
    return node.type in LIST_TYPES or node.role == "list"


def _is_list_item(node: SemanticNode) -> bool:
    return node.type == "li" or node.role == "listitem"


def _is_table(node: SemanticNode) -> bool:
    return node.type == "table" or node.role == "table"


def _is_row(node: SemanticNode) -> bool:
    return node.type == "tr" or node.role == "row"


def _is_header_cell(node: SemanticNode) -> bool:
    return node.type == "th" or node.role in HEADER_CELL_ROLES


def _is_form_control(node: SemanticNode) -> bool:
    return node.type in FORM_CONTROL_TYPES or node.role in FORM_CONTROL_ROLES


def _heading_level(node: SemanticNode) -> int | None:
    """``aria-level`` wins over the ``hN`` type."""
    explicit = get_number(node.props, "aria-level")
    if explicit is not None and float(explicit).is_integer():
        return int(explicit)
    return heading_level_from_type(node.type)


class SemanticHTMLRule(Rule):
    """Heading, link/button, list, table and form-label structure."""

    name = "semantic-html"

    def evaluate(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        findings.extend(self.check_heading_hierarchy(root, path))
        findings.extend(self.check_button_vs_link(root, path))
        findings.extend(self.check_list_structure(root, path))
        findings.extend(self.check_table_semantics(root, path))
        findings.extend(self.check_form_labels(root, path))
        return findings

    # ========================================================================
    # Headings
    # ========================================================================

    def check_heading_hierarchy(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        headings: list[_Heading] = []
        for node, current in walk(root, path):
            if effective_role(node) != "heading":
                continue
            level = _heading_level(node)
            if level is not None:
                headings.append(_Heading(level=level, path=current))

        findings: list[Finding] = []
        for prev, curr in zip(headings, headings[1:]):
            if curr.level > prev.level + 1:
                expected = prev.level + 1
                findings.append(
                    Finding(
                        code="SEMANTIC_HEADING_LEVEL_SKIP",
                        path=curr.path,
                        message=(
                            f"Heading level {curr.level} skips level {expected}. "
                            f"Use h{expected} before h{curr.level}."
                        ),
                        severity=Severity.ERROR,
                    )
                )

        if headings and not any(h.level == 1 for h in headings):
            findings.append(
                Finding(
                    code="SEMANTIC_MISSING_H1",
                    path=path,
                    message="Document should have at least one h1 heading.",
                    severity=Severity.WARNING,
                )
            )

        logger.debug("Heading hierarchy: %d headings, %d findings", len(headings), len(findings))
        return findings

    # ========================================================================
    # Links and buttons
    # ========================================================================

    def check_button_vs_link(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            props = node.props
            if _is_link_like(node):
                if is_flag_set(props, "onclick"):
                    findings.append(
                        Finding(
                            code="SEMANTIC_LINK_WITH_ONCLICK",
                            path=current,
                            message="Link has onclick handler. Use <button> for actions, <a> for navigation.",
                        )
                    )
                if not is_flag_set(props, "href"):
                    findings.append(
                        Finding(
                            code="SEMANTIC_LINK_WITHOUT_HREF",
                            path=current,
                            message="Link missing href attribute. Use <button> if not navigating.",
                        )
                    )
            if _is_button_like(node) and is_flag_set(props, "href"):
                findings.append(
                    Finding(
                        code="SEMANTIC_BUTTON_WITH_HREF",
                        path=current,
                        message="Button has href attribute. Use <a> for navigation, <button> for actions.",
                    )
                )
        return findings

    # ========================================================================
    # Lists
    # ========================================================================

    def check_list_structure(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            if not _is_list(node):
                continue
            for index, child in enumerate(node.children):
                if _is_list_item(child):
                    continue
                findings.append(
                    Finding(
                        code="SEMANTIC_INVALID_LIST_CHILD",
                        path=child_path(current, index),
                        message=f'List child must be <li> or role="listitem", found type="{child.type}".',
                    )
                )
        return findings

    # ========================================================================
    # Tables
    # ========================================================================

    def check_table_semantics(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            if not _is_table(node):
                continue

            has_row_groups = any(child.type in ROW_GROUP_TYPES for child in node.children)
            header_cells = 0

            for descendant, _ in walk(node, current):
                if not _is_row(descendant):
                    continue
                for cell in descendant.children:
                    if not _is_header_cell(cell):
                        continue
                    header_cells += 1
                    if cell.type == "th" and not is_flag_set(cell.props, "scope"):
                        findings.append(
                            Finding(
                                code="SEMANTIC_TH_MISSING_SCOPE",
                                path=current,
                                message=(
                                    "Header cells (<th>) should have scope attribute "
                                    "(row, col, rowgroup, colgroup)."
                                ),
                                severity=Severity.WARNING,
                            )
                        )

            if not has_row_groups and len(node.children) > COMPLEX_TABLE_CHILDREN:
                findings.append(
                    Finding(
                        code="SEMANTIC_TABLE_MISSING_THEAD_TBODY",
                        path=current,
                        message="Complex tables should use <thead> and <tbody> for better structure.",
                        severity=Severity.INFO,
                    )
                )

            if header_cells == 0:
                findings.append(
                    Finding(
                        code="SEMANTIC_TABLE_MISSING_HEADERS",
                        path=current,
                        message="Tables should have header cells (<th> or role='columnheader/rowheader').",
                        severity=Severity.WARNING,
                    )
                )
        return findings

    # ========================================================================
    # Form labels
    # ========================================================================

    def check_form_labels(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        labeled_ids: set[str] = set()
        for node, _ in walk(root, path):
            if node.type != "label":
                continue
            target = get_first(node.props, "for", "htmlFor")
            if isinstance(target, str) and target:
                labeled_ids.add(target)

        findings: list[Finding] = []
        for node, current in walk(root, path):
            if not _is_form_control(node):
                continue
            props = node.props
            control_id = get_string(props, "id")
            has_name = bool(node.name)
            has_label = bool(control_id) and control_id in labeled_ids
            has_aria_label = is_flag_set(props, "aria-label") or is_flag_set(props, "aria-labelledby")
            if not (has_name or has_label or has_aria_label):
                findings.append(
                    Finding(
                        code="SEMANTIC_FORM_CONTROL_UNLABELED",
                        path=current,
                        message="Form control should have associated <label>, aria-label, or aria-labelledby.",
                    )
                )
        return findings


_RULE = SemanticHTMLRule()


def validate_semantic_html(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.evaluate(root, path)
