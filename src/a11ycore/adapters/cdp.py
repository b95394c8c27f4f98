"""
Chrome DevTools Protocol accessibility snapshot -> semantic tree.

Input is the ``nodes`` array of ``Accessibility.getFullAXTree``. The flat
list is linked through ``parentId``/``childIds`` and rebuilt bottom-up into
immutable ``SemanticNode`` objects.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..models.semantic_node import SemanticNode
from .sanitize import FALLBACK_TYPE, clean_name, sanitize_type, split_role


class AXRelatedNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    backend_dom_node_id: Optional[int] = Field(default=None, alias="backendDOMNodeId")
    idref: Optional[str] = None
    text: Optional[str] = None


class AXValue(BaseModel):
    """A single computed accessibility value."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    value: Any = None
    related_nodes: Optional[list[AXRelatedNode]] = Field(default=None, alias="relatedNodes")
    sources: Optional[list[dict[str, Any]]] = None


class AXProperty(BaseModel):
    name: str
    value: AXValue


class AXNode(BaseModel):
    """One node of the flat CDP accessibility tree."""

    model_config = ConfigDict(populate_by_name=True)

    node_id: str = Field(alias="nodeId")
    ignored: bool = False
    ignored_reasons: Optional[list[AXProperty]] = Field(default=None, alias="ignoredReasons")
    role: Optional[AXValue] = None
    chrome_role: Optional[AXValue] = Field(default=None, alias="chromeRole")
    name: Optional[AXValue] = None
    description: Optional[AXValue] = None
    value: Optional[AXValue] = None
    properties: Optional[list[AXProperty]] = None
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    child_ids: Optional[list[str]] = Field(default=None, alias="childIds")
    backend_dom_node_id: Optional[int] = Field(default=None, alias="backendDOMNodeId")
    frame_id: Optional[str] = Field(default=None, alias="frameId")


_AX_NODES = TypeAdapter(list[AXNode])


def parse_ax_nodes(nodes: Iterable[Union[AXNode, dict[str, Any]]]) -> list[AXNode]:
    """Validate raw CDP payloads. Raises ``pydantic.ValidationError`` on bad shapes."""
    return _AX_NODES.validate_python(list(nodes))


def _ax_value(value: Optional[AXValue]) -> Any:
    return value.value if value is not None else None


def _build_props(ax: AXNode, cdp_role: Optional[str]) -> dict[str, Any]:
    props: dict[str, Any] = {}
    if ax.description is not None and ax.description.value is not None:
        props["description"] = ax.description.value
    if ax.value is not None and ax.value.value is not None:
        props["value"] = ax.value.value
    if ax.backend_dom_node_id is not None:
        props["backendDOMNodeId"] = ax.backend_dom_node_id
    if ax.ignored:
        props["ignored"] = True
    for prop in ax.properties or ():
        props[prop.name] = prop.value.value
    if cdp_role is not None:
        props["cdpRole"] = cdp_role
    return props


def _convert(ax: AXNode, children: list[SemanticNode]) -> SemanticNode:
    raw_role = _ax_value(ax.role)
    raw_role = str(raw_role) if raw_role not in (None, "") else None
    role, cdp_role = split_role(raw_role)

    raw_type = raw_role or _ax_value(ax.chrome_role)
    node_type = sanitize_type(str(raw_type)) if raw_type not in (None, "") else FALLBACK_TYPE

    return SemanticNode(
        type=node_type,
        name=clean_name(_ax_value(ax.name)),
        role=role,
        props=_build_props(ax, cdp_role),
        children=tuple(children),
    )


def _next_child(
    pending: Iterator[str],
    by_id: dict[str, AXNode],
    seen: set[str],
) -> Optional[AXNode]:
    for child_id in pending:
        child = by_id.get(child_id)
        if child is None:
            logger.debug(f"CDP: dangling child id {child_id} skipped")
            continue
        if child.ignored:
            continue
        if child_id in seen:
            logger.warning(f"CDP: node {child_id} reached twice, cycle cut")
            continue
        return child
    return None


def cdp_to_semantic_node(nodes: Iterable[Union[AXNode, dict[str, Any]]]) -> Optional[SemanticNode]:
    """
    Convert a CDP AXNode list into a semantic tree.

    Root is the first node without ``parentId`` (else the first node).
    Ignored children are dropped. A node reachable twice is kept only at its
    first position, which also cuts ``childIds`` cycles.
    """
    ax_nodes = parse_ax_nodes(nodes)
    if not ax_nodes:
        return None

    by_id: dict[str, AXNode] = {}
    for ax in ax_nodes:
        by_id.setdefault(ax.node_id, ax)
    root = next((ax for ax in ax_nodes if not ax.parent_id), ax_nodes[0])

    seen = {root.node_id}
    stack: list[tuple[AXNode, Iterator[str], list[SemanticNode]]] = [
        (root, iter(root.child_ids or ()), [])
    ]
    result: Optional[SemanticNode] = None
    while stack:
        ax, pending, built = stack[-1]
        child = _next_child(pending, by_id, seen)
        if child is not None:
            seen.add(child.node_id)
            stack.append((child, iter(child.child_ids or ()), []))
            continue
        stack.pop()
        node = _convert(ax, built)
        if stack:
            stack[-1][2].append(node)
        else:
            result = node

    logger.info(f"CDP: converted {len(seen)} of {len(ax_nodes)} nodes")
    return result
