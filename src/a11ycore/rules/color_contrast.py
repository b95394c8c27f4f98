"""
Color contrast checks (WCAG 2.x relative luminance).

Colors must already be resolved on the node: the rule reads ``color`` /
``textColor`` and ``backgroundColor`` / ``background`` and skips nodes where
either side is missing or unparseable. No cascade is inferred.

Thresholds:
    non-text (``nonText`` flag or ``contrastType="non-text"``)   3.0
    large text (``largeText`` flag, >= 24px, or >= 18.66px bold)  3.0
    normal text                                                   4.5
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from ..models.finding import Finding
from ..models.semantic_node import SemanticNode
from .base import Rule
from .props import get_first, get_string, is_true, to_number
from .tree import ROOT_PATH, walk

NON_TEXT_MIN_RATIO = 3.0
LARGE_TEXT_MIN_RATIO = 3.0
TEXT_MIN_RATIO = 4.5

LARGE_TEXT_PX = 24.0
LARGE_BOLD_TEXT_PX = 18.66
BOLD_WEIGHT = 700

_HEX_DIGITS = re.compile(r"^[0-9a-f]+$")
_RGB_FUNCTION = re.compile(r"rgba?\(([^)]+)\)")


class RGB(NamedTuple):
    r: float
    g: float
    b: float


@dataclass(frozen=True)
class ContrastTarget:
    foreground: RGB
    background: RGB
    is_large_text: bool
    is_non_text: bool


def parse_color(value: Any) -> Optional[RGB]:
    """Parse ``#rgb``, ``#rrggbb``, ``rgb(r, g, b)`` or ``rgba(r, g, b, a)``."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip().lower()
    if trimmed.startswith("#"):
        return _parse_hex(trimmed[1:])
    if trimmed.startswith("rgb"):
        return _parse_rgb_function(trimmed)
    return None


def _parse_hex(digits: str) -> Optional[RGB]:
    if not _HEX_DIGITS.match(digits):
        return None
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        return None
    return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def _parse_rgb_function(value: str) -> Optional[RGB]:
    match = _RGB_FUNCTION.search(value)
    if not match:
        return None
    parts = [part.strip() for part in match.group(1).split(",")]
    if len(parts) < 3:
        return None
    channels = [to_number(part) for part in parts[:3]]
    if any(channel is None for channel in channels):
        return None
    # CSS clamps out-of-range channels
    return RGB(*(min(max(channel, 0), 255) for channel in channels))


def _linearize(channel: float) -> float:
    normalized = channel / 255
    if normalized <= 0.03928:
        return normalized / 12.92
    return ((normalized + 0.055) / 1.055) ** 2.4


def relative_luminance(color: RGB) -> float:
    return 0.2126 * _linearize(color.r) + 0.7152 * _linearize(color.g) + 0.0722 * _linearize(color.b)


def contrast_ratio(first: RGB, second: RGB) -> float:
    """Symmetric in its arguments; 1.0 for identical colors, 21.0 for black on white."""
    l1 = relative_luminance(first)
    l2 = relative_luminance(second)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def parse_font_size(value: Any) -> Optional[float]:
    if isinstance(value, str):
        trimmed = value.strip().lower()
        if trimmed.endswith("px"):
            trimmed = trimmed[:-2]
        value = trimmed
    size = to_number(value)
    return float(size) if size is not None else None


def is_bold(value: Any) -> bool:
    if isinstance(value, str) and value.strip().lower() in {"bold", "bolder"}:
        return True
    weight = to_number(value)
    return weight is not None and weight >= BOLD_WEIGHT


def is_large_font(font_size: Any, font_weight: Any) -> bool:
    size = parse_font_size(font_size)
    if not size:
        return False
    if is_bold(font_weight):
        return size >= LARGE_BOLD_TEXT_PX
    return size >= LARGE_TEXT_PX


def extract_contrast_target(node: SemanticNode) -> Optional[ContrastTarget]:
    props = node.props
    foreground = parse_color(get_first(props, "color", "textColor"))
    background = parse_color(get_first(props, "backgroundColor", "background"))
    if foreground is None or background is None:
        return None
    return ContrastTarget(
        foreground=foreground,
        background=background,
        is_large_text=is_true(props, "largeText") or is_large_font(props.get("fontSize"), props.get("fontWeight")),
        is_non_text=is_true(props, "nonText") or get_string(props, "contrastType") == "non-text",
    )


def required_ratio(target: ContrastTarget) -> tuple[float, str]:
    """Minimum ratio and a label for the message."""
    if target.is_non_text:
        return NON_TEXT_MIN_RATIO, "Non-text"
    if target.is_large_text:
        return LARGE_TEXT_MIN_RATIO, "Large text"
    return TEXT_MIN_RATIO, "Text"


def _format_ratio(value: float) -> str:
    return f"{value:g}"


class ColorContrastRule(Rule):
    """Foreground/background contrast against the classified minimum."""

    name = "color-contrast"

    def evaluate(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        findings: list[Finding] = []
        for node, current in walk(root, path):
            target = extract_contrast_target(node)
            if target is None:
                continue
            ratio = contrast_ratio(target.foreground, target.background)
            min_ratio, label = required_ratio(target)
            if ratio >= min_ratio:
                continue
            required = _format_ratio(min_ratio)
            findings.append(
                Finding(
                    code="COLOR_INSUFFICIENT_CONTRAST",
                    path=current,
                    message=(
                        f"{label} contrast ratio {ratio:.2f}:1 is below {required}:1. "
                        f"Increase contrast to at least {required}:1."
                    ),
                )
            )
        return findings


_RULE = ColorContrastRule()


def validate_color_contrast(root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
    return _RULE.evaluate(root, path)
