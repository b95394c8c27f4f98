"""
Public models for the orchestration surface.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .finding import Finding
from .semantic_node import SemanticNode


class PolicyProfile(str, Enum):
    MDN = "mdn"
    WCAG_LITE = "wcag-lite"
    PROJECT = "project"


class FailOn(str, Enum):
    ERROR = "error"
    WARN = "warn"


class BlessPolicy(BaseModel):
    """
    Gating policy declared by the caller.

    NOTE: accepted and recorded, but not consulted by ``bless``. The
    pass/fail decision is "zero findings passes" until code filtering and
    severity gating semantics are agreed on.
    """

    model_config = ConfigDict(populate_by_name=True)

    profile: PolicyProfile = Field(default=PolicyProfile.MDN, description="Rule profile name.")
    allow_codes: list[str] = Field(
        default_factory=list,
        alias="allowCodes",
        description="Finding codes the caller intends to tolerate.",
    )
    deny_codes: list[str] = Field(
        default_factory=list,
        alias="denyCodes",
        description="Finding codes the caller intends to always reject.",
    )
    fail_on: Optional[FailOn] = Field(
        default=None,
        alias="failOn",
        description="Lowest severity the caller intends to fail on.",
    )


class ValidationReport(BaseModel):
    """Sorted findings for one evaluated tree."""

    findings: list[Finding] = Field(default_factory=list, description="Findings in total order.")


class BlessResult(BaseModel):
    """
    Pass/fail decision over a validation report.

    ``value`` carries the validated tree only when ``ok`` is true.
    """

    ok: bool = Field(description="True when the tree produced no findings.")
    value: Optional[SemanticNode] = Field(default=None, description="The blessed tree, when ok.")
    findings: list[Finding] = Field(default_factory=list, description="Findings in total order.")
