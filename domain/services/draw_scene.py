from __future__ import annotations

from typing import Dict, Iterable, List

from domain.errors import InvalidAlignmentInput
from domain.models import (
    MAP_NODE_CHILDREN_DISTANCE,
    Arrow,
    Box,
    FloatNode,
    GraphicalPrimitive,
    GridArrayNode,
    LinearArrayNode,
    MapNode,
    Node,
    OperationNode,
    Rectangle,
    TypeNode,
)
from domain.services.scene_metrics import node_height, node_width


def translate_all(
    primitives: Iterable[GraphicalPrimitive], dx: int = 0, dy: int = 0
) -> List[GraphicalPrimitive]:
    return [primitive.translated(dx, dy) for primitive in primitives]


def draw_type(node: TypeNode) -> List[GraphicalPrimitive]:
    if isinstance(node, FloatNode):
        return [Rectangle(0, 0, 1, 1)]
    if isinstance(node, LinearArrayNode):
        elem_width = node_width(node.element)
        elem_height = node_height(node.element)
        element_prims = draw_type(node.element)
        # One copy of the element per position, then the container box.
        primitives: List[GraphicalPrimitive] = []
        for pos in range(node.size):
            primitives.extend(translate_all(element_prims, dx=pos * elem_width, dy=0))
        primitives.append(Box(0, 0, node.size * elem_width, elem_height))
        return primitives
    if isinstance(node, GridArrayNode):
        elem_width = node_width(node.element)
        elem_height = node_height(node.element)
        element_prims = draw_type(node.element)
        positions = [
            (x * elem_width, y * elem_height)
            for x in range(node.width)
            for y in range(node.height)
        ]
        primitives = []
        for x, y in positions:
            primitives.extend(translate_all(element_prims, dx=x, dy=y))
        primitives.append(Box(0, 0, node.width * elem_width, node.height * elem_height))
        return primitives
    msg = f"Unknown type node: {type(node).__name__}"
    raise TypeError(msg)


def draw_operation(node: OperationNode) -> List[GraphicalPrimitive]:
    if isinstance(node, MapNode):
        input_array = LinearArrayNode(node.input_element, node.size)
        output_array = LinearArrayNode(node.output_element, node.size)
        input_prims = draw_type(input_array)
        # Output array goes under the input array, separated by the children distance.
        output_prims = translate_all(
            draw_type(output_array),
            dx=0,
            dy=node_height(input_array) + MAP_NODE_CHILDREN_DISTANCE,
        )
        arrow_x = max(node_width(input_array), node_width(output_array)) // 2
        arrow_start_y = node_height(input_array)
        arrow_end_y = arrow_start_y + MAP_NODE_CHILDREN_DISTANCE
        arrow = Arrow(arrow_x, arrow_start_y, arrow_x, arrow_end_y)

        alignments = horizontal_alignment([input_array, output_array])
        centered_input = translate_all(input_prims, dx=alignments[input_array], dy=0)
        centered_output = translate_all(output_prims, dx=alignments[output_array], dy=0)
        return [*centered_input, *centered_output, arrow]
    msg = f"Unknown operation node: {type(node).__name__}"
    raise TypeError(msg)


def draw_node(node: Node) -> List[GraphicalPrimitive]:
    if isinstance(node, TypeNode):
        return draw_type(node)
    if isinstance(node, OperationNode):
        return draw_operation(node)
    msg = f"Unknown scene node: {type(node).__name__}"
    raise TypeError(msg)


def horizontal_alignment(nodes: Iterable[Node]) -> Dict[Node, int]:
    """Compute the horizontal shift that centers each node on a common axis.

    Every node is translated by ``(max_width - node_width) // 2`` where
    ``max_width`` is the widest node of the set. Structurally equal nodes share
    one entry.
    """
    widths = {node: node_width(node) for node in nodes}
    if not widths:
        msg = "Horizontal alignment requires at least one node"
        raise InvalidAlignmentInput(msg)
    max_width = max(widths.values())
    return {node: (max_width - width) // 2 for node, width in widths.items()}
