"""Unit sphere primitive.

In object space the sphere is centred at the origin with radius 1; any other
position or size comes from the shape transform.

Intersection solves ``a*t^2 + b*t + c = 0`` for the ray
``origin + t * direction`` where

    a = direction . direction
    b = 2 * (direction . (origin - center))
    c = |origin - center|^2 - 1

A negative discriminant is a miss; a tangent ray reports the same root twice.
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from whitted.core.ray import Ray, dot, vec4
from whitted.geometry.shape import Shape, ShapeKind


@dataclass(frozen=True, eq=False)
class Sphere(Shape):
    kind: ClassVar[ShapeKind] = ShapeKind.SPHERE


@ti.func
def local_intersect_sphere(ray: Ray):
    """Intersect an object-space ray with the unit sphere.

    Args:
        ray: Ray in object space (direction not necessarily unit length).

    Returns:
        Tuple of (count, t0, t1) with count 0 or 2 and t0 <= t1.
    """
    sphere_to_ray = ray.origin - vec4(0.0, 0.0, 0.0, 1.0)
    a = dot(ray.direction, ray.direction)
    b = 2.0 * dot(ray.direction, sphere_to_ray)
    c = dot(sphere_to_ray, sphere_to_ray) - 1.0
    discriminant = b * b - 4.0 * a * c

    count = 0
    t0 = 0.0
    t1 = 0.0
    if discriminant >= 0.0:
        sqrt_d = tm.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        count = 2
    return count, t0, t1


@ti.func
def local_normal_at_sphere(object_point: vec4) -> vec4:
    """Outward normal of the unit sphere: the point minus the center."""
    return object_point - vec4(0.0, 0.0, 0.0, 1.0)
