from __future__ import annotations

import logging

from domain.models import Node, RenderRequest, SceneDocument
from domain.services.build_scene import SceneBuilder
from domain.services.draw_scene import draw_node
from domain.services.scene_metrics import node_height, node_width

logger = logging.getLogger(__name__)


class SceneRenderer:
    def __init__(self, builder: SceneBuilder | None = None) -> None:
        self.builder = builder or SceneBuilder()

    def build_node(self, request: RenderRequest) -> Node:
        if request.operation is not None:
            return self.builder.operation_node(request.operation)
        return self.builder.type_node(request.type)

    def render(self, request: RenderRequest) -> SceneDocument:
        node = self.build_node(request)
        primitives = draw_node(node)
        width, height = node_width(node), node_height(node)
        logger.debug(
            "Rendered scene %s: %d primitives in %dx%d units",
            request.name,
            len(primitives),
            width,
            height,
        )
        return SceneDocument(
            name=request.name,
            primitives=primitives,
            width=width,
            height=height,
        )
