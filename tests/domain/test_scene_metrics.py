from __future__ import annotations

import pytest

from domain.models import MAP_NODE_CHILDREN_DISTANCE, FloatNode, GridArrayNode, LinearArrayNode, MapNode
from domain.services.scene_metrics import node_height, node_width

ELEMENTS = [
    FloatNode(),
    LinearArrayNode(FloatNode(), 3),
    GridArrayNode(FloatNode(), 2, 4),
    GridArrayNode(LinearArrayNode(FloatNode(), 2), 3, 2),
]


def test_float_is_one_unit() -> None:
    assert node_width(FloatNode()) == 1
    assert node_height(FloatNode()) == 1


@pytest.mark.parametrize("element", ELEMENTS)
@pytest.mark.parametrize("size", [1, 2, 5])
def test_linear_array_multiplies_width_only(element, size: int) -> None:
    node = LinearArrayNode(element, size)
    assert node_width(node) == node_width(element) * size
    assert node_height(node) == node_height(element)


@pytest.mark.parametrize("element", ELEMENTS)
@pytest.mark.parametrize(("width", "height"), [(1, 1), (2, 3), (4, 2)])
def test_grid_array_multiplies_both_axes(element, width: int, height: int) -> None:
    node = GridArrayNode(element, width, height)
    assert node_width(node) == node_width(element) * width
    assert node_height(node) == node_height(element) * height


@pytest.mark.parametrize("input_element", ELEMENTS)
@pytest.mark.parametrize("output_element", ELEMENTS)
def test_map_height_stacks_children_with_gap(input_element, output_element) -> None:
    node = MapNode(input_element, output_element, 3)
    assert node_height(node) == (
        node_height(input_element) + MAP_NODE_CHILDREN_DISTANCE + node_height(output_element)
    )
    assert MAP_NODE_CHILDREN_DISTANCE == 5


def test_map_width_fits_wider_child() -> None:
    node = MapNode(LinearArrayNode(FloatNode(), 3), FloatNode(), 4)
    assert node_width(node) == 7


def test_unknown_node_is_rejected() -> None:
    with pytest.raises(TypeError):
        node_width(object())  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        node_height(object())  # type: ignore[arg-type]
