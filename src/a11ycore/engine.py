"""
Orchestrator: run every registered rule against one tree.

validate -> coerce subject -> run registry -> merge -> sort
bless    -> validate -> zero findings passes

The engine never raises on a bad subject. Anything that cannot be turned
into a ``SemanticNode`` yields a single ``ENGINE_SUBJECT_INVALID`` finding
at the root path, so callers always get a report back.
"""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger
from pydantic import ValidationError

from .models import (
    BlessPolicy,
    BlessResult,
    Finding,
    SemanticNode,
    ValidationReport,
    sort_findings,
)
from .rules import ROOT_PATH, RuleRegistry, default_registry

SUBJECT_INVALID_CODE = "ENGINE_SUBJECT_INVALID"


def _subject_invalid_finding() -> Finding:
    return Finding(
        code=SUBJECT_INVALID_CODE,
        path=ROOT_PATH,
        message=(
            "Validation subject is not a usable semantic tree. "
            "Provide a SemanticNode or a mapping that matches its schema."
        ),
    )


def coerce_tree(subject: Any) -> Optional[SemanticNode]:
    """Normalize a caller subject into a ``SemanticNode`` or ``None``."""
    if isinstance(subject, SemanticNode):
        return subject
    if isinstance(subject, dict):
        try:
            return SemanticNode.model_validate(subject)
        except ValidationError as exc:
            logger.warning(f"Invalid semantic tree ignored: {exc}")
            return None
    if subject is not None:
        logger.warning(f"Unsupported subject type ignored: {type(subject).__name__}")
    return None


def _run(
    tree: SemanticNode,
    registry: RuleRegistry,
) -> list[Finding]:
    findings = sort_findings(registry.run(tree, ROOT_PATH))
    logger.info(f"Engine: {len(registry)} rules produced {len(findings)} findings")
    return findings


def validate(
    subject: Any,
    policy: Optional[BlessPolicy] = None,
    registry: Optional[RuleRegistry] = None,
) -> ValidationReport:
    """
    Evaluate ``subject`` with every rule and return findings in total order.

    Args:
        subject: A ``SemanticNode`` or a mapping accepted by its schema.
        policy: Recorded for diagnostics only; it does not filter findings.
        registry: Rules to run. Defaults to ``default_registry()``.
    """
    if policy is not None:
        logger.debug(f"Engine: policy received (not applied): {policy.model_dump(by_alias=True)}")

    tree = coerce_tree(subject)
    if tree is None:
        return ValidationReport(findings=[_subject_invalid_finding()])

    return ValidationReport(findings=_run(tree, registry or default_registry()))


def bless(
    subject: Any,
    policy: Optional[BlessPolicy] = None,
    registry: Optional[RuleRegistry] = None,
) -> BlessResult:
    """Pass iff validation produced zero findings; the tree is returned only on pass."""
    report = validate(subject, policy=policy, registry=registry)
    if report.findings:
        logger.info(f"Engine: bless failed with {len(report.findings)} findings")
        return BlessResult(ok=False, value=None, findings=report.findings)
    return BlessResult(ok=True, value=coerce_tree(subject), findings=[])


async def validate_async(
    subject: Any,
    policy: Optional[BlessPolicy] = None,
    registry: Optional[RuleRegistry] = None,
) -> ValidationReport:
    return validate(subject, policy=policy, registry=registry)


async def bless_async(
    subject: Any,
    policy: Optional[BlessPolicy] = None,
    registry: Optional[RuleRegistry] = None,
) -> BlessResult:
    return bless(subject, policy=policy, registry=registry)
