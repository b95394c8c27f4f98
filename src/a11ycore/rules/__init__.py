from .aria_usage import AriaUsageRule, validate_aria_usage
from .base import Rule, RuleRegistry
from .color_contrast import (
    ColorContrastRule,
    contrast_ratio,
    parse_color,
    relative_luminance,
    validate_color_contrast,
)
from .keyboard import (
    FocusTarget,
    KeyboardAccessibleRule,
    simulate_tab_navigation,
    validate_focus_order,
    validate_keyboard_accessible,
    validate_keyboard_traps,
)
from .name_required import NameRequiredRule, validate_name_required
from .screen_reader import ScreenReaderContentRule, validate_screen_reader_content
from .semantic_html import SemanticHTMLRule, validate_semantic_html
from .text_alternatives import TextAlternativesRule, validate_text_alternatives
from .tree import ROOT_PATH, child_path, walk


def default_registry() -> RuleRegistry:
    """Fresh registry holding every built-in rule."""
    return RuleRegistry(
        [
            SemanticHTMLRule(),
            AriaUsageRule(),
            KeyboardAccessibleRule(),
            ColorContrastRule(),
            TextAlternativesRule(),
            ScreenReaderContentRule(),
            NameRequiredRule(),
        ]
    )


__all__ = [
    "Rule",
    "RuleRegistry",
    "default_registry",
    "ROOT_PATH",
    "child_path",
    "walk",
    "SemanticHTMLRule",
    "AriaUsageRule",
    "KeyboardAccessibleRule",
    "ColorContrastRule",
    "TextAlternativesRule",
    "ScreenReaderContentRule",
    "NameRequiredRule",
    "FocusTarget",
    "validate_semantic_html",
    "validate_aria_usage",
    "validate_keyboard_accessible",
    "validate_focus_order",
    "validate_keyboard_traps",
    "simulate_tab_navigation",
    "validate_color_contrast",
    "contrast_ratio",
    "relative_luminance",
    "parse_color",
    "validate_text_alternatives",
    "validate_screen_reader_content",
    "validate_name_required",
]
