"""
Text alternatives for non-text content.

Images need ``alt`` unless decorative; an empty ``alt`` on a meaningful image
is reported separately from a missing one. SVG, media, icon-only controls
and canvas/iframe each have their own acceptable alternatives.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..models.finding import Finding
from ..models.semantic_node import SemanticNode
from .base import Rule
from .props import get_nonblank_string, get_string, is_true
from .tree import ROOT_PATH, walk

DECORATIVE_ROLES = frozenset({"presentation", "none"})
MEDIA_TYPES = frozenset({"video", "audio"})
FALLBACK_TYPES = frozenset({"canvas", "iframe"})
LABEL_PROPS = ("aria-label", "aria-labelledby", "title", "desc")
MEDIA_FLAGS = ("captions", "transcript", "hasCaptions", "hasTranscript")


def has_accessible_label(node: SemanticNode, props: Mapping[str, Any]) -> bool:
    """Own name or any non-blank labelling prop."""
    if node.name and node.name.strip():
        return True
    return any(get_nonblank_string(props, key) for key in LABEL_PROPS)


def _is_image(node: SemanticNode) -> bool:
    return node.type == "img" or node.role == "img"


def _is_decorative(node: SemanticNode) -> bool:
    return is_true(node.props, "decorative") or node.role in DECORATIVE_ROLES


def _is_icon_only_control(node: SemanticNode) -> bool:
    if not is_true(node.props, "iconOnly"):
        return False
    return node.type in {"button", "a"} or node.role in {"button", "link"}


def _has_media_alternative(node: SemanticNode) -> bool:
    if any(is_true(node.props, flag) for flag in MEDIA_FLAGS):
        return True
    return has_accessible_label(node, node.props)


def _has_fallback(node: SemanticNode) -> bool:
    return (
        len(node.children) > 0
        or has_accessible_label(node, node.props)
        or bool(get_string(node.props, "fallbackText"))
    )


class TextAlternativesRule(Rule):
    name = "text-alternatives"

    def evaluate(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            props = node.props

            if _is_image(node) and not _is_decorative(node):
                if "alt" not in props:
                    findings.append(
                        Finding(
                            code="TEXT_ALT_MISSING_ALT",
                            path=current,
                            message="Image elements must provide alt text.",
                        )
                    )
                elif get_string(props, "alt") == "":
                    findings.append(
                        Finding(
                            code="TEXT_ALT_EMPTY_ALT_MEANINGFUL",
                            path=current,
                            message="Meaningful images must not use empty alt text.",
                        )
                    )

            if node.type == "svg" and not has_accessible_label(node, props):
                findings.append(
                    Finding(
                        code="TEXT_ALT_MISSING_SVG_LABEL",
                        path=current,
                        message="SVG elements must have a title/desc or ARIA label.",
                    )
                )

            if node.type in MEDIA_TYPES and not _has_media_alternative(node):
                findings.append(
                    Finding(
                        code="TEXT_ALT_MISSING_MEDIA_ALTERNATIVE",
                        path=current,
                        message="Audio and video elements must provide captions or transcripts.",
                    )
                )

            if _is_icon_only_control(node) and not has_accessible_label(node, props):
                findings.append(
                    Finding(
                        code="TEXT_ALT_ICON_CONTROL_MISSING_LABEL",
                        path=current,
                        message="Icon-only controls must include an accessible label.",
                    )
                )

            if node.type in FALLBACK_TYPES and not _has_fallback(node):
                findings.append(
                    Finding(
                        code="TEXT_ALT_MISSING_FALLBACK_CONTENT",
                        path=current,
                        message="Canvas and iframe elements must include fallback content.",
                    )
                )
        return findings


_RULE = TextAlternativesRule()


def validate_text_alternatives(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.evaluate(root, path)
