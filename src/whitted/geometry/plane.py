"""Infinite plane primitive, the xz plane (y = 0) in object space."""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti

from whitted.core.ray import EPSILON, Ray, vec4
from whitted.geometry.shape import Shape, ShapeKind


@dataclass(frozen=True, eq=False)
class Plane(Shape):
    kind: ClassVar[ShapeKind] = ShapeKind.PLANE


@ti.func
def local_intersect_plane(ray: Ray):
    """Intersect an object-space ray with the plane y = 0.

    Rays with |direction.y| < EPSILON are treated as parallel (including
    rays lying in the plane) and miss.

    Returns:
        Tuple of (count, t0, t1) with count 0 or 1; t1 repeats t0.
    """
    count = 0
    t = 0.0
    if ti.abs(ray.direction[1]) >= EPSILON:
        t = -ray.origin[1] / ray.direction[1]
        count = 1
    return count, t, t


@ti.func
def local_normal_at_plane(object_point: vec4) -> vec4:
    return vec4(0.0, 1.0, 0.0, 0.0)
