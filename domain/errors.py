from __future__ import annotations


class SceneError(Exception):
    """Base class for scene construction and layout faults."""


class UnsupportedTypeKind(SceneError):
    """Raised when asked to render a function-typed value."""


class EmptyDimensionList(SceneError):
    """Raised when an array tier is built from no dimension groups."""


class UnsupportedDimensionGrouping(SceneError):
    """Raised when a dimension tier holds neither one nor two sizes."""


class InvalidAlignmentInput(SceneError, ValueError):
    """Raised when horizontal alignment is requested for no nodes."""
