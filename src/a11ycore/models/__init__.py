from .contracts import ElementSpec, ValidatorSpec
from .engine import (
    BlessPolicy,
    BlessResult,
    FailOn,
    PolicyProfile,
    ValidationReport,
)
from .finding import (
    Finding,
    Severity,
    compare_findings,
    finding_sort_key,
    sort_findings,
)
from .semantic_node import (
    ARIA_ROLES,
    TYPE_ROLE_MAP,
    SemanticNode,
    effective_role,
    heading_level_from_type,
)

__all__ = [
    "ElementSpec",
    "ValidatorSpec",
    "BlessPolicy",
    "BlessResult",
    "FailOn",
    "PolicyProfile",
    "ValidationReport",
    "Finding",
    "Severity",
    "compare_findings",
    "finding_sort_key",
    "sort_findings",
    "ARIA_ROLES",
    "TYPE_ROLE_MAP",
    "SemanticNode",
    "effective_role",
    "heading_level_from_type",
]
