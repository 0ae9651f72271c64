"""Tagged-variant dispatch of shape intersection and normals.

Kernels never see Python shape objects. Each shape is reduced to a kind tag,
its inverse transform and an ``invertible`` flag; the functions here map a
world-space ray or point into object space, call the variant's local routine
and map the result back.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.core.matrix import Matrix
    >>> from whitted.core.tuples import point
    >>> from whitted.geometry.dispatch import normal_at
    >>> from whitted.geometry.sphere import Sphere
    >>> sphere = Sphere(transform=Matrix.translation(0.0, 1.0, 0.0))
    >>> normal_at(sphere, point(0.0, 1.70711, -0.70711))  # ~(0, 0.70711, -0.70711, 0)
"""

import numpy as np
import taichi as ti

from whitted.core.ray import Ray, as_vector, mat4, normalize, real, transform_ray, vec3, vec4
from whitted.core.tuples import Tuple4, as_tuple4
from whitted.geometry.plane import local_intersect_plane, local_normal_at_plane
from whitted.geometry.shape import Shape, ShapeKind
from whitted.geometry.sphere import local_intersect_sphere, local_normal_at_sphere


def shape_kind(shape: Shape) -> int:
    """Return the integer kind tag of a shape.

    Raises:
        ValueError: If the shape is not one of the known variants.
    """
    kind = getattr(shape, "kind", None)
    if kind not in tuple(ShapeKind):
        raise ValueError(f"Unknown shape kind for {type(shape).__name__}")
    return int(kind)


# =============================================================================
# Taichi functions
# =============================================================================


@ti.func
def local_intersect(kind: ti.i32, ray: Ray):
    """Dispatch to the variant's object-space intersection.

    Returns:
        Tuple of (count, t0, t1). Unknown kinds report no intersections.
    """
    count = 0
    t0 = 0.0
    t1 = 0.0
    if kind == int(ShapeKind.SPHERE):
        n, a, b = local_intersect_sphere(ray)
        count = n
        t0 = a
        t1 = b
    elif kind == int(ShapeKind.PLANE):
        n, a, b = local_intersect_plane(ray)
        count = n
        t0 = a
        t1 = b
    return count, t0, t1


@ti.func
def local_normal_at(kind: ti.i32, object_point: vec4) -> vec4:
    normal = vec4(0.0, 0.0, 0.0, 0.0)
    if kind == int(ShapeKind.SPHERE):
        normal = local_normal_at_sphere(object_point)
    elif kind == int(ShapeKind.PLANE):
        normal = local_normal_at_plane(object_point)
    return normal


@ti.func
def intersect_shape(kind: ti.i32, inverse: mat4, invertible: ti.i32, ray: Ray):
    """Intersect a world-space ray with one shape.

    Args:
        kind: ShapeKind value.
        inverse: World-to-object transform.
        invertible: Zero if the shape transform is singular.
        ray: World-space ray.

    Returns:
        Tuple of (count, t0, t1); a singular shape reports no intersections.
    """
    count = 0
    t0 = 0.0
    t1 = 0.0
    if invertible != 0:
        n, a, b = local_intersect(kind, transform_ray(ray, inverse))
        count = n
        t0 = a
        t1 = b
    return count, t0, t1


@ti.func
def normal_at_shape(kind: ti.i32, inverse: mat4, world_point: vec4) -> vec4:
    """World-space unit normal of a shape at a point on its surface.

    The object normal is carried back by the inverse transpose so that
    non-uniform scaling keeps it perpendicular to the surface, then w is
    reset to 0 before normalising.
    """
    object_normal = local_normal_at(kind, inverse @ world_point)
    world_normal = inverse.transpose() @ object_normal
    return normalize(as_vector(world_normal))


# =============================================================================
# Python entry points
# =============================================================================


@ti.kernel
def _intersect_kernel(kind: ti.i32, inverse: mat4, origin: vec4, direction: vec4) -> vec3:
    count, t0, t1 = intersect_shape(kind, inverse, 1, Ray(origin=origin, direction=direction))
    return vec3(ti.cast(count, real), t0, t1)


@ti.kernel
def _normal_at_kernel(kind: ti.i32, inverse: mat4, world_point: vec4) -> vec4:
    return normal_at_shape(kind, inverse, world_point)


def local_roots(shape: Shape, origin: Tuple4, direction: Tuple4) -> list[float]:
    """Return the t values at which a world-space ray meets ``shape``.

    Values are in ascending order and include negative t. A singular shape
    transform yields an empty list.
    """
    kind = shape_kind(shape)
    inverse = shape.inverse
    if inverse is None:
        return []
    count, t0, t1 = _intersect_kernel(
        kind, inverse.to_numpy(), as_tuple4(origin), as_tuple4(direction)
    ).to_numpy()
    return [float(t0), float(t1)][: int(count)]


def normal_at(shape: Shape, world_point: Tuple4) -> Tuple4 | None:
    """Return the unit world-space normal of ``shape`` at ``world_point``.

    Returns:
        The normal vector (w = 0), or None if the shape transform is singular.
    """
    kind = shape_kind(shape)
    inverse = shape.inverse
    if inverse is None:
        return None
    normal = _normal_at_kernel(kind, inverse.to_numpy(), as_tuple4(world_point))
    return np.asarray(normal.to_numpy(), dtype=np.float64)
