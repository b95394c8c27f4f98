"""
Public API for the a11ycore package.
"""

from loguru import logger as _loguru_logger

from .engine import bless, bless_async, coerce_tree, validate, validate_async
from .models import (
    BlessPolicy,
    BlessResult,
    Finding,
    SemanticNode,
    Severity,
    ValidationReport,
    compare_findings,
    sort_findings,
)
from .rules import Rule, RuleRegistry, default_registry

_loguru_logger.disable(__name__)

__all__ = [
    "validate",
    "bless",
    "validate_async",
    "bless_async",
    "coerce_tree",
    "BlessPolicy",
    "BlessResult",
    "Finding",
    "SemanticNode",
    "Severity",
    "ValidationReport",
    "compare_findings",
    "sort_findings",
    "Rule",
    "RuleRegistry",
    "default_registry",
]
