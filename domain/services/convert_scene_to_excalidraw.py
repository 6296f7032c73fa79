from __future__ import annotations

import random
import uuid
from typing import List

from domain.models import (
    CUSTOM_DATA_KEY,
    Arrow,
    Box,
    ExcalidrawDocument,
    GraphicalPrimitive,
    Rectangle,
    SceneDocument,
)

ELEMENT_FILL_COLOR = "#cce5ff"
STROKE_COLOR = "#1e1e1e"


class SceneToExcalidrawConverter:
    def __init__(self, unit_size: int = 20) -> None:
        if unit_size <= 0:
            msg = f"unit_size must be positive, got {unit_size}"
            raise ValueError(msg)
        self.unit_size = unit_size
        self.namespace = uuid.uuid5(uuid.NAMESPACE_DNS, "lift-scene")

    def convert(self, scene: SceneDocument) -> ExcalidrawDocument:
        elements: List[dict] = []
        for index, primitive in enumerate(scene.primitives):
            elements.append(self._element(scene.name, index, primitive))
        app_state = {
            "viewBackgroundColor": "#ffffff",
            "gridSize": self.unit_size,
            "currentItemStrokeColor": STROKE_COLOR,
        }
        return ExcalidrawDocument(elements=elements, app_state=app_state, files={})

    def _element(self, scene_name: str, index: int, primitive: GraphicalPrimitive) -> dict:
        element_id = self._stable_id(scene_name, primitive.kind, str(index))
        metadata = {"scene": scene_name, "index": index, **primitive.to_dict()}
        if isinstance(primitive, Rectangle):
            return self._rectangle_element(
                element_id, primitive, metadata, background_color=ELEMENT_FILL_COLOR
            )
        if isinstance(primitive, Box):
            return self._rectangle_element(
                element_id, primitive, metadata, background_color="transparent"
            )
        if isinstance(primitive, Arrow):
            return self._arrow_element(element_id, primitive, metadata)
        msg = f"Unknown primitive: {type(primitive).__name__}"
        raise TypeError(msg)

    def _rectangle_element(
        self,
        element_id: str,
        primitive: Rectangle | Box,
        metadata: dict,
        background_color: str,
    ) -> dict:
        return self._base_shape(
            element_id=element_id,
            type_name="rectangle",
            x=primitive.x * self.unit_size,
            y=primitive.y * self.unit_size,
            width=primitive.width * self.unit_size,
            height=primitive.height * self.unit_size,
            metadata=metadata,
            extra={
                "strokeColor": STROKE_COLOR,
                "backgroundColor": background_color,
                "fillStyle": "solid",
                "strokeWidth": 2 if isinstance(primitive, Box) else 1,
            },
        )

    def _arrow_element(self, element_id: str, arrow: Arrow, metadata: dict) -> dict:
        dx = (arrow.x2 - arrow.x1) * self.unit_size
        dy = (arrow.y2 - arrow.y1) * self.unit_size
        return self._base_shape(
            element_id=element_id,
            type_name="arrow",
            x=arrow.x1 * self.unit_size,
            y=arrow.y1 * self.unit_size,
            width=abs(dx),
            height=abs(dy),
            metadata=metadata,
            extra={
                "strokeColor": STROKE_COLOR,
                "backgroundColor": "transparent",
                "fillStyle": "solid",
                "roundness": {"type": 2},
                "points": [[0, 0], [dx, dy]],
                "startBinding": None,
                "endBinding": None,
                "startArrowhead": None,
                "endArrowhead": "arrow",
            },
        )

    def _base_shape(
        self,
        element_id: str,
        type_name: str,
        x: int,
        y: int,
        width: int,
        height: int,
        metadata: dict,
        extra: dict | None = None,
    ) -> dict:
        return {
            "id": element_id,
            "type": type_name,
            "x": x,
            "y": y,
            "width": width,
            "height": height,
            "angle": 0,
            "strokeWidth": 1,
            "strokeStyle": "solid",
            "roughness": 0,
            "opacity": 100,
            "groupIds": [],
            "roundness": None,
            "seed": self._rand_seed(),
            "version": 1,
            "versionNonce": self._rand_seed(),
            "isDeleted": False,
            "boundElements": [],
            "locked": False,
            "frameId": None,
            "customData": {CUSTOM_DATA_KEY: metadata},
            **(extra or {}),
        }

    def _stable_id(self, *parts: str) -> str:
        return str(uuid.uuid5(self.namespace, "|".join(parts)))

    def _rand_seed(self) -> int:
        return random.randint(1, 2**31 - 1)
