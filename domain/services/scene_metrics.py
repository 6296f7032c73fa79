from __future__ import annotations

from domain.models import (
    MAP_NODE_CHILDREN_DISTANCE,
    FloatNode,
    GridArrayNode,
    LinearArrayNode,
    MapNode,
    Node,
)


def node_width(node: Node) -> int:
    if isinstance(node, FloatNode):
        return 1
    if isinstance(node, LinearArrayNode):
        return node_width(node.element) * node.size
    if isinstance(node, GridArrayNode):
        return node_width(node.element) * node.width
    if isinstance(node, MapNode):
        return max(
            node_width(node.input_element) + node.size,
            node_width(node.output_element) + node.size,
        )
    msg = f"Unknown scene node: {type(node).__name__}"
    raise TypeError(msg)


def node_height(node: Node) -> int:
    if isinstance(node, FloatNode):
        return 1
    if isinstance(node, LinearArrayNode):
        return node_height(node.element)
    if isinstance(node, GridArrayNode):
        return node_height(node.element) * node.height
    if isinstance(node, MapNode):
        return (
            node_height(node.input_element)
            + MAP_NODE_CHILDREN_DISTANCE
            + node_height(node.output_element)
        )
    msg = f"Unknown scene node: {type(node).__name__}"
    raise TypeError(msg)
