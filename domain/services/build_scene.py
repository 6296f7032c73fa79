from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from domain.errors import EmptyDimensionList, UnsupportedDimensionGrouping, UnsupportedTypeKind
from domain.models import (
    ArrayType,
    FloatNode,
    FunctionType,
    GridArrayNode,
    LinearArrayNode,
    MapNode,
    MapOperation,
    ScalarType,
    TypeNode,
)

logger = logging.getLogger(__name__)

DimensionSplitRule = Callable[[int], List[int]]


def default_dimension_splits(n: int) -> List[int]:
    """Pair successive dimensions into grid tiers, leaving one linear tier when n is odd."""
    if n == 0:
        return []
    if n == 1:
        return [1]
    if n == 2:
        return [2]
    return [2, *default_dimension_splits(n - 2)]


def flatten_array_sizes(array: ArrayType) -> List[int]:
    sizes = [array.size]
    element = array.element
    while isinstance(element, ArrayType):
        sizes.append(element.size)
        element = element.element
    return sizes


def array_bottom_element_type(array: ArrayType) -> ScalarType | FunctionType:
    element = array.element
    while isinstance(element, ArrayType):
        element = element.element
    return element


def group_sizes_by_dimensions(splits: Sequence[int], sizes: Sequence[int]) -> List[List[int]]:
    if sum(splits) != len(sizes):
        msg = (
            f"Dimension splits {list(splits)} do not cover {len(sizes)} array sizes. "
            "Try another dimension grouping"
        )
        raise UnsupportedDimensionGrouping(msg)
    groups: List[List[int]] = []
    offset = 0
    for split in splits:
        groups.append(list(sizes[offset : offset + split]))
        offset += split
    return groups


class SceneBuilder:
    """Maps source IR types and operations to scene nodes."""

    def __init__(self, dimension_splits: DimensionSplitRule | None = None) -> None:
        self.dimension_splits = dimension_splits or default_dimension_splits

    def type_node(self, source_type: ScalarType | ArrayType | FunctionType) -> TypeNode:
        if isinstance(source_type, ScalarType):
            return FloatNode()
        if isinstance(source_type, ArrayType):
            sizes = flatten_array_sizes(source_type)
            groups = group_sizes_by_dimensions(self.dimension_splits(len(sizes)), sizes)
            logger.debug("Array sizes %s grouped into tiers %s", sizes, groups)
            return self.array_type_node(array_bottom_element_type(source_type), groups)
        if isinstance(source_type, FunctionType):
            msg = "No support for drawing function types"
            raise UnsupportedTypeKind(msg)
        msg = f"Unknown source type: {type(source_type).__name__}"
        raise TypeError(msg)

    def array_type_node(
        self,
        bottom: ScalarType | ArrayType | FunctionType,
        groups: Sequence[Sequence[int]],
    ) -> TypeNode:
        if not groups:
            msg = "Array type node requested with no dimension groups"
            raise EmptyDimensionList(msg)
        current, inner_groups = groups[0], groups[1:]
        # The contained element is built first; the last group wraps the bottom element.
        if inner_groups:
            inner = self.array_type_node(bottom, inner_groups)
        else:
            inner = self.type_node(bottom)
        if len(current) == 1:
            return LinearArrayNode(inner, current[0])
        if len(current) == 2:
            return GridArrayNode(inner, current[0], current[1])
        msg = (
            f"Unsupported rendering of {len(current)}-dimensional array level. "
            "Try another dimension grouping"
        )
        raise UnsupportedDimensionGrouping(msg)

    def operation_node(self, operation: MapOperation) -> MapNode:
        if isinstance(operation, MapOperation):
            return MapNode(
                self.type_node(operation.function.input_type),
                self.type_node(operation.function.output_type),
                operation.size,
            )
        msg = f"Unknown source operation: {type(operation).__name__}"
        raise TypeError(msg)


_DEFAULT_BUILDER = SceneBuilder()


def type_node(source_type: ScalarType | ArrayType | FunctionType) -> TypeNode:
    return _DEFAULT_BUILDER.type_node(source_type)


def operation_node(operation: MapOperation) -> MapNode:
    return _DEFAULT_BUILDER.operation_node(operation)
