"""
Element tree -> semantic tree.

Works with ``xml.etree.ElementTree.Element`` and anything shaped like it:
a string ``tag``, an ``attrib`` mapping, iteration over child elements and
an optional ``text``. Declarative ``ElementSpec`` trees go through the same
attribute and name handling.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union

from loguru import logger

from ..models.contracts import ElementSpec
from ..models.semantic_node import SemanticNode
from .sanitize import clean_name, sanitize_type, split_role

NAME_ATTRIBUTES = ("aria-label", "title", "alt")


def _is_element(value: Any) -> bool:
    # ElementTree comments and processing instructions carry a callable tag
    return isinstance(getattr(value, "tag", None), str)


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag


def parse_attribute_value(name: str, value: str) -> Any:
    if name == "aria-level":
        try:
            return int(value.strip())
        except ValueError:
            return value
    if value == "":
        return True
    return value


def collect_attributes(element: Any) -> dict[str, Any]:
    attrib: Mapping[str, Any] = getattr(element, "attrib", None) or {}
    return {
        _local_name(str(key)): parse_attribute_value(_local_name(str(key)), str(value))
        for key, value in attrib.items()
    }


def derive_name(props: Mapping[str, Any], text: Any) -> Optional[str]:
    for key in NAME_ATTRIBUTES:
        value = props.get(key)
        if isinstance(value, str) and value.strip():
            return clean_name(value)
    if isinstance(text, str):
        return clean_name(text)
    return None


def _convert(tag: str, props: dict[str, Any], text: Any, children: list[SemanticNode]) -> SemanticNode:
    role, foreign_role = split_role(props.get("role"))
    if foreign_role is not None:
        logger.debug(f"DOM: non-ARIA role {foreign_role!r} on <{tag}> ignored")

    return SemanticNode(
        type=sanitize_type(tag),
        name=derive_name(props, text),
        role=role,
        props=props,
        children=tuple(children),
    )


def _build(
    root: Any,
    children_of: Callable[[Any], Iterable[Any]],
    convert: Callable[[Any, list[SemanticNode]], SemanticNode],
) -> SemanticNode:
    # Post-order: a node is converted once all of its children are built
    stack: list[tuple[Any, Iterator[Any], list[SemanticNode]]] = [(root, iter(children_of(root)), [])]
    while True:
        current, pending, built = stack[-1]
        child = next(pending, None)
        if child is not None:
            stack.append((child, iter(children_of(child)), []))
            continue
        stack.pop()
        node = convert(current, built)
        if not stack:
            return node
        stack[-1][2].append(node)


def _element_children(element: Any) -> Iterator[Any]:
    return (child for child in element if _is_element(child))


def _convert_element(element: Any, children: list[SemanticNode]) -> SemanticNode:
    tag = _local_name(element.tag).lower()
    return _convert(tag, collect_attributes(element), getattr(element, "text", None), children)


def _convert_spec(spec: ElementSpec, children: list[SemanticNode]) -> SemanticNode:
    props = {key: parse_attribute_value(key, value) for key, value in spec.attrs.items()}
    return _convert(spec.tag, props, spec.text, children)


def element_to_semantic_node(element: Any) -> Optional[SemanticNode]:
    """Convert an element and its element descendants; non-elements yield None."""
    if not _is_element(element):
        return None
    return _build(element, _element_children, _convert_element)


def element_spec_to_semantic_node(spec: Union[ElementSpec, dict[str, Any]]) -> SemanticNode:
    """
    Convert an ``ElementSpec`` (or a mapping accepted by it) into a tree.

    Attribute and name handling is the same as for ``element_to_semantic_node``.
    Raises ``pydantic.ValidationError`` when a mapping does not satisfy the
    element contract.
    """
    if not isinstance(spec, ElementSpec):
        spec = ElementSpec.model_validate(spec)
    return _build(spec, lambda item: item.children, _convert_spec)
