from __future__ import annotations

import pytest
from pydantic import ValidationError

from domain.errors import UnsupportedDimensionGrouping, UnsupportedTypeKind
from domain.models import (
    Arrow,
    Box,
    FloatNode,
    GridArrayNode,
    LinearArrayNode,
    MapNode,
    Rectangle,
    RenderRequest,
)
from domain.services.build_scene import SceneBuilder
from domain.services.render_scene import SceneRenderer
from tests.helpers.ir_fixtures import (
    function,
    load_ir_fixture,
    map_operation,
    nested_array,
    scalar,
)


def test_render_type_request_reports_bounding_size() -> None:
    request = RenderRequest.model_validate({"name": "vec", "type": nested_array(3)})
    scene = SceneRenderer().render(request)
    assert scene.name == "vec"
    assert (scene.width, scene.height) == (3, 1)
    assert scene.primitives[-1] == Box(0, 0, 3, 1)


def test_render_operation_request_ends_with_arrow() -> None:
    request = RenderRequest.model_validate(
        {"operation": map_operation(scalar(), scalar(), 4)}
    )
    scene = SceneRenderer().render(request)
    assert isinstance(scene.primitives[-1], Arrow)
    assert scene.height == 1 + 5 + 1
    assert scene.width == 5


def test_render_example_fixtures() -> None:
    tensor = SceneRenderer().render(load_ir_fixture("tensor3d.json"))
    assert (tensor.width, tensor.height) == (8, 3)
    assert sum(isinstance(p, Rectangle) for p in tensor.primitives) == 24

    mapped = SceneRenderer().build_node(load_ir_fixture("map_rows.json"))
    assert mapped == MapNode(LinearArrayNode(FloatNode(), 2), FloatNode(), 4)


def test_render_function_type_fails_without_partial_result() -> None:
    request = RenderRequest.model_validate({"type": function(scalar(), scalar())})
    with pytest.raises(UnsupportedTypeKind):
        SceneRenderer().render(request)


def test_renderer_uses_custom_builder() -> None:
    renderer = SceneRenderer(SceneBuilder(dimension_splits=lambda n: [n]))
    request = RenderRequest.model_validate({"type": nested_array(2, 3)})
    assert renderer.build_node(request) == GridArrayNode(FloatNode(), 2, 3)
    with pytest.raises(UnsupportedDimensionGrouping):
        renderer.render(RenderRequest.model_validate({"type": nested_array(2, 3, 4)}))


def test_scene_document_serializes_primitives() -> None:
    scene = SceneRenderer().render(RenderRequest.model_validate({"type": scalar()}))
    assert scene.to_dict() == {
        "type": "lift-scene",
        "version": 1,
        "name": "scene",
        "width": 1,
        "height": 1,
        "drawn_width": 1,
        "drawn_height": 1,
        "primitives": [{"kind": "rectangle", "x": 0, "y": 0, "width": 1, "height": 1}],
    }


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"type": scalar(), "operation": map_operation(scalar(), scalar(), 1)},
        {"type": nested_array(0)},
        {"operation": map_operation(scalar(), scalar(), 0)},
        {"type": {"kind": "tensor"}},
    ],
)
def test_invalid_requests_are_rejected(payload: dict) -> None:
    with pytest.raises(ValidationError):
        RenderRequest.model_validate(payload)


def test_map_scene_reports_drawn_extent_beside_node_size() -> None:
    request = RenderRequest.model_validate(
        {"operation": map_operation(nested_array(3), scalar(), 2)}
    )
    scene = SceneRenderer().render(request)
    assert (scene.width, scene.height) == (5, 7)
    assert scene.drawn_extent() == (6, 7)
    payload = scene.to_dict()
    assert (payload["drawn_width"], payload["drawn_height"]) == (6, 7)
