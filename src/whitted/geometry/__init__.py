"""Geometric primitives and shape dispatch.

Components:
    shape: Shape base class, ShapeKind tags and the fluent ShapeBuilder
    sphere: Unit sphere
    plane: Infinite xz plane
    dispatch: Kind-tagged intersection and normal functions for kernels
"""

from .dispatch import (
    intersect_shape,
    local_intersect,
    local_normal_at,
    local_roots,
    normal_at,
    normal_at_shape,
    shape_kind,
)
from .plane import Plane, local_intersect_plane, local_normal_at_plane
from .shape import Shape, ShapeBuilder, ShapeKind
from .sphere import Sphere, local_intersect_sphere, local_normal_at_sphere

__all__ = [
    "Plane",
    "Shape",
    "ShapeBuilder",
    "ShapeKind",
    "Sphere",
    "intersect_shape",
    "local_intersect",
    "local_intersect_plane",
    "local_intersect_sphere",
    "local_normal_at",
    "local_normal_at_plane",
    "local_normal_at_sphere",
    "local_roots",
    "normal_at",
    "normal_at_shape",
    "shape_kind",
]
