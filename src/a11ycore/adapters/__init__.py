from .cdp import AXNode, AXProperty, AXValue, cdp_to_semantic_node, parse_ax_nodes
from .dom import element_spec_to_semantic_node, element_to_semantic_node

__all__ = [
    "AXNode",
    "AXProperty",
    "AXValue",
    "cdp_to_semantic_node",
    "parse_ax_nodes",
    "element_spec_to_semantic_node",
    "element_to_semantic_node",
]
