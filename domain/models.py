from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

SCENE_SCHEMA_VERSION = 1
CUSTOM_DATA_KEY = "lift_scene"

# Vertical distance between the input and output arrays of a map node.
MAP_NODE_CHILDREN_DISTANCE = 5


class ScalarType(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["float"] = "float"


class ArrayType(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    element: SourceType
    size: PositiveInt


class FunctionType(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["function"] = "function"
    input_type: SourceType
    output_type: SourceType


SourceType = Annotated[
    Union[ScalarType, ArrayType, FunctionType],
    Field(discriminator="kind"),
]

ArrayType.model_rebuild()
FunctionType.model_rebuild()


class MapOperation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["map"] = "map"
    function: FunctionType
    size: PositiveInt


SourceOperation = MapOperation


class RenderRequest(BaseModel):
    name: str = Field(default="scene", min_length=1)
    type: Optional[SourceType] = None
    operation: Optional[SourceOperation] = None

    @model_validator(mode="after")
    def ensure_single_subject(self) -> RenderRequest:
        if (self.type is None) == (self.operation is None):
            msg = "Render request must define exactly one of 'type' or 'operation'"
            raise ValueError(msg)
        return self


class Node:
    """A conceptual element of a rendered expression.

    Variants are closed: every consumer handles ``FloatNode``,
    ``LinearArrayNode``, ``GridArrayNode`` and ``MapNode``.
    """

    __slots__ = ()


class TypeNode(Node):
    __slots__ = ()


class OperationNode(Node):
    __slots__ = ()


@dataclass(frozen=True)
class FloatNode(TypeNode):
    pass


@dataclass(frozen=True)
class LinearArrayNode(TypeNode):
    element: TypeNode
    size: int


@dataclass(frozen=True)
class GridArrayNode(TypeNode):
    element: TypeNode
    width: int
    height: int


@dataclass(frozen=True)
class MapNode(OperationNode):
    input_element: TypeNode
    output_element: TypeNode
    size: int


class GraphicalPrimitive(ABC):
    __slots__ = ()

    kind: str = ""

    @abstractmethod
    def translated(self, dx: int, dy: int) -> GraphicalPrimitive: ...

    @abstractmethod
    def extent(self) -> Tuple[int, int]:
        """Right and bottom edge of the primitive in grid units."""

    @abstractmethod
    def to_dict(self) -> dict: ...


@dataclass(frozen=True)
class _AreaPrimitive(GraphicalPrimitive):
    x: int
    y: int
    width: int
    height: int

    def translated(self, dx: int, dy: int) -> GraphicalPrimitive:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def extent(self) -> Tuple[int, int]:
        return self.x + self.width, self.y + self.height

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class Rectangle(_AreaPrimitive):
    kind = "rectangle"


@dataclass(frozen=True)
class Box(_AreaPrimitive):
    kind = "box"


@dataclass(frozen=True)
class Arrow(GraphicalPrimitive):
    x1: int
    y1: int
    x2: int
    y2: int

    kind = "arrow"

    def translated(self, dx: int, dy: int) -> GraphicalPrimitive:
        return replace(self, x1=self.x1 + dx, y1=self.y1 + dy, x2=self.x2 + dx, y2=self.y2 + dy)

    def extent(self) -> Tuple[int, int]:
        return max(self.x1, self.x2), max(self.y1, self.y2)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
        }


@dataclass(frozen=True)
class SceneDocument:
    """Primitives of one render.

    ``width`` and ``height`` are the root node sizing result. For map nodes
    this can differ from the space the primitives cover, which
    ``drawn_extent`` reports.
    """

    name: str
    primitives: List[GraphicalPrimitive]
    width: int
    height: int

    def drawn_extent(self) -> Tuple[int, int]:
        edges = [primitive.extent() for primitive in self.primitives]
        return max((x for x, _ in edges), default=0), max((y for _, y in edges), default=0)

    def to_dict(self) -> dict:
        drawn_width, drawn_height = self.drawn_extent()
        return {
            "type": "lift-scene",
            "version": SCENE_SCHEMA_VERSION,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "drawn_width": drawn_width,
            "drawn_height": drawn_height,
            "primitives": [primitive.to_dict() for primitive in self.primitives],
        }


@dataclass(frozen=True)
class ExcalidrawDocument:
    elements: List[dict]
    app_state: dict
    files: dict

    def to_dict(self) -> dict:
        return {
            "type": "excalidraw",
            "version": 2,
            "source": "lift-scene",
            "elements": self.elements,
            "appState": self.app_state,
            "files": self.files,
        }
