"""
Finding model and its total ordering.

A Finding is the only thing an evaluator emits. Findings are immutable
values; the engine merges them from every rule and sorts them with
``sort_findings`` so that output is byte-stable regardless of the order
in which rules ran.

ORDERING
--------
Primary key is severity (error < warning < info), then code, then path,
then message. Strings compare by code point, never by locale.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Iterable

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

# <DOMAIN>_<RULE> in uppercase snake case
CODE_PATTERN = r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+$"

# JSONPath subset: $ followed by .name, .[n], [n] or quoted-key segments
PATH_PATTERN = (
    r"^\$(?:\[(?:\d+|'[^']*'|\"[^\"]*\")\]"
    r"|\.(?:[a-zA-Z_][a-zA-Z0-9_]*|\[(?:\d+|'[^']*'|\"[^\"]*\")\]))*$"
)


class Severity(str, Enum):
    """
    Finding severity. Declaration order is the reporting order.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}


class Finding(BaseModel):
    """
    A single rule violation located in the semantic tree.
    """

    model_config = ConfigDict(frozen=True)

    code: Annotated[str, StringConstraints(min_length=1, max_length=100, pattern=CODE_PATTERN)] = Field(
        description="Namespaced rule identifier, for example SEMANTIC_MISSING_H1."
    )
    path: Annotated[str, StringConstraints(min_length=1, pattern=PATH_PATTERN)] = Field(
        description="Location in the tree: $ for the root, .children[N] per descent."
    )
    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        description="Actionable human-readable sentence."
    )
    severity: Severity = Field(default=Severity.ERROR, description="error | warning | info.")


def finding_sort_key(finding: Finding) -> tuple[int, str, str, str]:
    """Key implementing the total order over findings."""
    return (finding.severity.rank, finding.code, finding.path, finding.message)


def compare_findings(a: Finding, b: Finding) -> int:
    """
    Three-way comparison of two findings.

    Returns:
        -1 if ``a`` sorts first, 1 if ``b`` sorts first, 0 if they are equal
        on every ordering key.
    """
    key_a = finding_sort_key(a)
    key_b = finding_sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Return a new, stably sorted list. Sorting a sorted list is a no-op."""
    return sorted(findings, key=finding_sort_key)
