"""
Input contracts for declarative element trees and validator identity.

``ElementSpec`` describes markup to be checked before it is rendered or
converted: lowercase tags, lowercase attribute names, string attribute
values, and either text or children but never both. Script containers and
inline event handlers are refused outright.

``ValidatorSpec`` names a validator with a kebab-case id and a semantic
version (``MAJOR.MINOR.PATCH`` with optional pre-release and build parts).
"""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator, model_validator

# Lowercase alphanumeric words joined by single hyphens (custom elements, ids)
KEBAB_PATTERN = r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$"

ATTRIBUTE_NAME_PATTERN = r"^[a-z:][a-z0-9:_-]*$"

SEMVER_PATTERN = (
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

FORBIDDEN_TAGS = frozenset({"script", "iframe"})

EVENT_HANDLER_ATTRIBUTES = frozenset(
    {
        "onerror",
        "onload",
        "onclick",
        "onmouseover",
        "onfocus",
        "onblur",
        "onchange",
        "onsubmit",
    }
)

AttributeName = Annotated[str, StringConstraints(pattern=ATTRIBUTE_NAME_PATTERN)]
AttributeValue = Annotated[str, StringConstraints(max_length=10_000)]


class ElementSpec(BaseModel):
    """
    Declarative element: tag, attributes and either text or child elements.
    """

    model_config = ConfigDict(frozen=True)

    tag: Annotated[str, StringConstraints(min_length=1, max_length=100, pattern=KEBAB_PATTERN)] = Field(
        description="Lowercase tag name; hyphenated custom elements are allowed."
    )
    attrs: dict[AttributeName, AttributeValue] = Field(
        default_factory=dict,
        description="Attribute map. Values must already be strings.",
    )
    text: Optional[Annotated[str, StringConstraints(max_length=100_000)]] = Field(
        default=None,
        description="Text content. Empty text and absent text are distinct.",
    )
    children: tuple["ElementSpec", ...] = Field(
        default=(),
        description="Child elements in document order.",
    )

    @field_validator("tag")
    @classmethod
    def _reject_script_containers(cls, value: str) -> str:
        if value in FORBIDDEN_TAGS:
            raise ValueError("Script and iframe tags are not allowed for security reasons")
        return value

    @field_validator("attrs")
    @classmethod
    def _reject_event_handlers(cls, value: dict[str, str]) -> dict[str, str]:
        if any(key.lower() in EVENT_HANDLER_ATTRIBUTES for key in value):
            raise ValueError("Event handler attributes are not allowed for security reasons")
        return value

    @model_validator(mode="after")
    def _text_or_children(self) -> "ElementSpec":
        if self.text and self.children:
            raise ValueError("Element cannot have both text content and children")
        return self


class ValidatorSpec(BaseModel):
    """Identity of a validator: kebab-case id plus semantic version."""

    model_config = ConfigDict(frozen=True)

    id: Annotated[str, StringConstraints(min_length=1, max_length=100, pattern=KEBAB_PATTERN)] = Field(
        description="Kebab-case identifier, for example semantic-html."
    )
    version: Annotated[str, StringConstraints(pattern=SEMVER_PATTERN)] = Field(
        description="Semantic version, for example 1.0.0 or 1.0.0-alpha.1+build.123."
    )
