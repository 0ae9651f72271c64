"""Ray data structure and homogeneous vector utilities for Taichi kernels.

Rays and all geometry inside kernels use four-component homogeneous vectors
(x, y, z, w) so that 4x4 transforms apply uniformly to points (w = 1) and
directions (w = 0). Every Taichi-side quantity is double precision; callers
must run ``ti.init(arch=ti.cpu, default_fp=ti.f64)`` first.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.core.ray import Ray, ray_at, vec4
    >>> @ti.kernel
    ... def position() -> vec4:
    ...     ray = Ray(origin=vec4(2.0, 3.0, 4.0, 1.0), direction=vec4(1.0, 0.0, 0.0, 0.0))
    ...     return ray_at(ray, 2.5)
    >>> position()  # (4.5, 3, 4, 1)
"""

import taichi as ti
import taichi.math as tm

from whitted.core.tuples import EPSILON

# Scalar, vector and matrix types shared by every kernel
real = ti.f64
vec3 = ti.types.vector(3, real)
vec4 = ti.types.vector(4, real)
mat4 = ti.types.matrix(4, 4, real)

__all__ = [
    "EPSILON",
    "Ray",
    "as_vector",
    "cross",
    "dot",
    "length",
    "make_ray",
    "mat4",
    "normalize",
    "ray_at",
    "real",
    "reflect",
    "transform_ray",
    "vec3",
    "vec4",
    "xyz",
]


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec4, w = 1).
        direction: The direction of the ray (vec4, w = 0). Not normalised:
            transformed rays keep the scale of their transform so that t
            values stay comparable across object spaces.
    """

    origin: vec4
    direction: vec4


@ti.func
def ray_at(ray: Ray, t: real) -> vec4:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec4, direction: vec4) -> Ray:
    """Create a ray from origin and direction inside a kernel."""
    return Ray(origin=origin, direction=direction)


@ti.func
def transform_ray(ray: Ray, m: mat4) -> Ray:
    """Apply a 4x4 transform to both the origin and the direction.

    The direction is deliberately left unnormalised.
    """
    return Ray(origin=m @ ray.origin, direction=m @ ray.direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def xyz(v: vec4) -> vec3:
    """Drop the w component."""
    return vec3(v[0], v[1], v[2])


@ti.func
def as_vector(v: vec4) -> vec4:
    """Force w to 0 so the tuple is treated as a direction."""
    return vec4(v[0], v[1], v[2], 0.0)


@ti.func
def dot(a: vec4, b: vec4) -> real:
    """Four-component dot product."""
    return tm.dot(a, b)


@ti.func
def length(v: vec4) -> real:
    return tm.sqrt(tm.dot(v, v))


@ti.func
def normalize(v: vec4) -> vec4:
    """Scale to unit length over all four components."""
    return v / tm.sqrt(tm.dot(v, v))


@ti.func
def cross(a: vec4, b: vec4) -> vec4:
    """Cross product of the xyz parts; the result is a vector (w = 0)."""
    return vec4(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
        0.0,
    )


@ti.func
def reflect(incident: vec4, normal: vec4) -> vec4:
    """Reflect an incident direction about a unit normal.

    Args:
        incident: The incoming direction.
        normal: The surface normal (unit length).

    Returns:
        incident - normal * 2 * dot(incident, normal).
    """
    return incident - normal * 2.0 * tm.dot(incident, normal)
