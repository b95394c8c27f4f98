"""Tree traversal with path accumulation."""

from __future__ import annotations

from typing import Iterator

from ..models.semantic_node import SemanticNode

ROOT_PATH = "$"


def child_path(path: str, index: int) -> str:
    return f"{path}.children[{index}]"


def walk(root: SemanticNode, path: str = ROOT_PATH) -> Iterator[tuple[SemanticNode, str]]:
    """
    Yield ``(node, path)`` pairs in document order (pre-order).

    Uses an explicit stack, so tree depth is not bounded by the recursion limit.
    """
    stack: list[tuple[SemanticNode, str]] = [(root, path)]
    while stack:
        node, current = stack.pop()
        yield node, current
        children = node.children or ()
        for index in range(len(children) - 1, -1, -1):
            stack.append((children[index], child_path(current, index)))
