"""Intersections, hit selection and shading-point precomputation.

An Intersection pairs a ray parameter ``t`` with the shape that was hit.
The hit of a ray is the intersection with the smallest positive ``t``;
intersections at or behind the ray origin never count.

Before shading, a hit is expanded into a set of precomputed values: the
world-space point, the eye vector, the normal (flipped toward the eye when
the ray starts inside the shape), the reflection vector and the over-point,
which sits EPSILON above the surface along the normal so that shadow and
reflection rays do not re-hit the surface they start on.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.geometry.sphere import Sphere
    >>> from whitted.scene.intersection import hit, intersect
    >>> xs = intersect(Sphere(), point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))
    >>> [x.t for x in xs]
    [4.0, 6.0]
    >>> hit(xs).t
    4.0
"""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import taichi as ti

from whitted.core.ray import (
    EPSILON,
    Ray,
    dot,
    mat4,
    ray_at,
    real,
    reflect,
    vec4,
)
from whitted.core.tuples import Tuple4, as_tuple4
from whitted.geometry.dispatch import local_roots, normal_at_shape, shape_kind
from whitted.geometry.shape import Shape


@dataclass(frozen=True)
class Intersection:
    """A ray parameter and the shape hit there.

    Attributes:
        t: Distance along the ray, in units of the ray direction.
        shape: The shape that was intersected. Compared by identity.
    """

    t: float
    shape: Shape


def intersections(*xs: Intersection) -> list[Intersection]:
    """Collect intersections sorted by ascending t."""
    return sorted(xs, key=lambda x: x.t)


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Select the visible intersection.

    Returns:
        The intersection with the smallest t > 0, or None.
    """
    candidates = [x for x in xs if x.t > 0.0]
    if not candidates:
        return None
    return min(candidates, key=lambda x: x.t)


def intersect(shape: Shape, origin: Tuple4, direction: Tuple4) -> list[Intersection]:
    """Intersect a world-space ray with one shape.

    Returns:
        Intersections in ascending t order, including those behind the
        origin. Empty on a miss or when the shape transform is singular.
    """
    return [Intersection(t, shape) for t in local_roots(shape, origin, direction)]


@dataclass(frozen=True, eq=False)
class PreparedHit:
    """Precomputed shading state for one hit.

    Attributes:
        t: Ray parameter of the hit.
        shape: The shape that was hit.
        point: World-space hit point.
        eyev: Vector toward the eye (the negated ray direction).
        normalv: Unit normal, facing the eye.
        inside: True if the ray started inside the shape.
        over_point: ``point`` offset by EPSILON along ``normalv``.
        reflectv: Ray direction reflected about ``normalv``.
    """

    t: float
    shape: Shape
    point: Tuple4
    eyev: Tuple4
    normalv: Tuple4
    inside: bool
    over_point: Tuple4
    reflectv: Tuple4


# =============================================================================
# Taichi-side shading state
# =============================================================================


@ti.dataclass
class Computations:
    """Shading state for one hit inside kernels.

    Attributes:
        t: Ray parameter of the hit.
        point: World-space hit point.
        eyev: Vector toward the eye.
        normalv: Unit normal, facing the eye.
        inside: 1 if the ray started inside the shape.
        over_point: Biased point used as the origin of secondary rays.
        reflectv: Mirror direction for reflection rays.
    """

    t: real
    point: vec4
    eyev: vec4
    normalv: vec4
    inside: ti.i32
    over_point: vec4
    reflectv: vec4


@ti.func
def prepare_computations(ray: Ray, t: real, kind: ti.i32, inverse: mat4) -> Computations:
    """Expand a hit at ``t`` on a shape into shading state.

    Args:
        ray: The world-space ray.
        t: Ray parameter of the hit.
        kind: ShapeKind of the hit shape.
        inverse: World-to-object transform of the hit shape.
    """
    point = ray_at(ray, t)
    eyev = -ray.direction
    normalv = normal_at_shape(kind, inverse, point)
    inside = 0
    if dot(normalv, eyev) < 0.0:
        inside = 1
        normalv = -normalv
    return Computations(
        t=t,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        over_point=point + normalv * EPSILON,
        reflectv=reflect(ray.direction, normalv),
    )


# Rows: point, eyev, normalv, over_point, reflectv, (inside, 0, 0, 0)
_prepared = ti.types.matrix(6, 4, real)


@ti.kernel
def _prepare_kernel(
    t: real, kind: ti.i32, inverse: mat4, origin: vec4, direction: vec4
) -> _prepared:
    comps = prepare_computations(Ray(origin=origin, direction=direction), t, kind, inverse)
    result = ti.Matrix.zero(real, 6, 4)
    for col in ti.static(range(4)):
        result[0, col] = comps.point[col]
        result[1, col] = comps.eyev[col]
        result[2, col] = comps.normalv[col]
        result[3, col] = comps.over_point[col]
        result[4, col] = comps.reflectv[col]
    result[5, 0] = ti.cast(comps.inside, real)
    return result


def prepare_hit(
    intersection: Intersection, origin: Tuple4, direction: Tuple4
) -> PreparedHit | None:
    """Precompute shading state for ``intersection`` along a ray.

    Returns:
        The prepared hit, or None if the shape transform is singular.
    """
    shape = intersection.shape
    inverse = shape.inverse
    if inverse is None:
        return None
    rows = np.asarray(
        _prepare_kernel(
            intersection.t,
            shape_kind(shape),
            inverse.to_numpy(),
            as_tuple4(origin),
            as_tuple4(direction),
        ).to_numpy(),
        dtype=np.float64,
    )
    return PreparedHit(
        t=intersection.t,
        shape=shape,
        point=rows[0],
        eyev=rows[1],
        normalv=rows[2],
        inside=bool(rows[5, 0] != 0.0),
        over_point=rows[3],
        reflectv=rows[4],
    )
