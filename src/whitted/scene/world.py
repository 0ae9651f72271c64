"""World: an ordered collection of shapes lit by a single point light.

The World flattens its shapes into Structure-of-Arrays Taichi fields once, at
construction, and is read-only afterwards. Everything needed to shade a ray
lives here:

1. ``nearest_hit``: linear scan over every shape for the smallest t > 0
2. ``is_shadowed_impl``: any intersection strictly between a point and the light
3. ``shade_surface``: Phong lighting at the hit's over-point (black if shadowed)
4. ``color_at_impl``: local color plus mirror reflections, bounded by a budget

Reflection is evaluated iteratively. Each bounce adds its local color scaled
by the product of the reflectivities seen so far; the walk stops on a miss,
on a non-reflective surface, or once the depth budget reaches zero, so two
facing mirrors terminate after ``remaining`` bounces.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.scene.world import default_world
    >>> world = default_world()
    >>> world.color_at(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))  # ~(0.38066, 0.47583, 0.2855)
"""

from collections.abc import Iterator, Sequence

import numpy as np
import taichi as ti
import taichi.math as tm

from whitted.core.color import Color
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray, length, normalize, real, vec3, vec4
from whitted.core.tuples import Tuple4, as_tuple4, point
from whitted.geometry.dispatch import intersect_shape, shape_kind
from whitted.geometry.dispatch import normal_at as shape_normal_at
from whitted.geometry.shape import Shape
from whitted.geometry.sphere import Sphere
from whitted.materials.lighting import LightData, MaterialData, PointLight, phong_lighting
from whitted.materials.material import Material
from whitted.materials.pattern import pattern_args, surface_color
from whitted.scene.intersection import (
    Intersection,
    PreparedHit,
    prepare_computations,
    prepare_hit,
)

# Default number of reflection bounces
REFLECTION_DEPTH = 5


@ti.data_oriented
class World:
    """A read-only scene: shapes in intersection-test order plus one light.

    Each World allocates its own Taichi fields, which live until Taichi is
    reset, so build scenes once rather than inside a loop. The Python query
    methods (``intersect``, ``is_shadowed``, ``color_at``) share per-World
    result buffers and are not thread-safe; ``Camera.render`` does not use
    them.

    Args:
        shapes: Shapes in the order they are tested.
        light: The point light. A world without a light shades every hit
            black and treats every point as shadowed.

    Raises:
        ValueError: If a shape is not one of the known variants.
    """

    def __init__(self, shapes: Sequence[Shape] = (), light: PointLight | None = None) -> None:
        self._shapes = tuple(shapes)
        self._light = light
        self.num_shapes = len(self._shapes)
        self.has_light = light is not None

        capacity = max(self.num_shapes, 1)

        # Geometry
        self.kinds = ti.field(dtype=ti.i32, shape=capacity)
        self.inverses = ti.Matrix.field(4, 4, dtype=real, shape=capacity)
        self.invertible = ti.field(dtype=ti.i32, shape=capacity)

        # Materials
        self.colors = ti.Vector.field(3, dtype=real, shape=capacity)
        self.ambient = ti.field(dtype=real, shape=capacity)
        self.diffuse = ti.field(dtype=real, shape=capacity)
        self.specular = ti.field(dtype=real, shape=capacity)
        self.shininess = ti.field(dtype=real, shape=capacity)
        self.reflectivity = ti.field(dtype=real, shape=capacity)

        # Patterns
        self.pattern_kinds = ti.field(dtype=ti.i32, shape=capacity)
        self.pattern_a = ti.Vector.field(3, dtype=real, shape=capacity)
        self.pattern_b = ti.Vector.field(3, dtype=real, shape=capacity)
        self.to_pattern = ti.Matrix.field(4, 4, dtype=real, shape=capacity)

        # Light
        self.light_position = ti.Vector.field(4, dtype=real, shape=())
        self.light_intensity = ti.Vector.field(3, dtype=real, shape=())

        # Buffers for Python-side queries
        self._xs_t = ti.field(dtype=real, shape=2 * capacity)
        self._xs_index = ti.field(dtype=ti.i32, shape=2 * capacity)
        self._xs_count = ti.field(dtype=ti.i32, shape=())
        self._query_color = ti.Vector.field(3, dtype=real, shape=())
        self._query_flag = ti.field(dtype=ti.i32, shape=())

        self._upload()

    # =========================================================================
    # Upload
    # =========================================================================

    def _upload(self) -> None:
        capacity = max(self.num_shapes, 1)
        kinds = np.zeros(capacity, dtype=np.int32)
        inverses = np.tile(np.identity(4), (capacity, 1, 1))
        invertible = np.zeros(capacity, dtype=np.int32)
        colors = np.zeros((capacity, 3))
        coefficients = np.zeros((5, capacity))
        pattern_kinds = np.zeros(capacity, dtype=np.int32)
        pattern_a = np.zeros((capacity, 3))
        pattern_b = np.zeros((capacity, 3))
        to_pattern = np.tile(np.identity(4), (capacity, 1, 1))

        for i, shape in enumerate(self._shapes):
            kinds[i] = shape_kind(shape)
            inverse = shape.inverse
            if inverse is not None:
                inverses[i] = inverse.to_numpy()
                invertible[i] = 1
            material = shape.material
            colors[i] = material.color.as_tuple()
            coefficients[:, i] = (
                material.ambient,
                material.diffuse,
                material.specular,
                material.shininess,
                material.reflectivity,
            )
            pattern = pattern_args(material.pattern, inverse)
            pattern_kinds[i] = pattern.kind
            pattern_a[i] = pattern.a
            pattern_b[i] = pattern.b
            to_pattern[i] = pattern.to_pattern

        self.kinds.from_numpy(kinds)
        self.inverses.from_numpy(inverses)
        self.invertible.from_numpy(invertible)
        self.colors.from_numpy(colors)
        self.ambient.from_numpy(coefficients[0])
        self.diffuse.from_numpy(coefficients[1])
        self.specular.from_numpy(coefficients[2])
        self.shininess.from_numpy(coefficients[3])
        self.reflectivity.from_numpy(coefficients[4])
        self.pattern_kinds.from_numpy(pattern_kinds)
        self.pattern_a.from_numpy(pattern_a)
        self.pattern_b.from_numpy(pattern_b)
        self.to_pattern.from_numpy(to_pattern)

        if self._light is not None:
            self.light_position.from_numpy(self._light.position)
            self.light_intensity.from_numpy(np.array(self._light.intensity.as_tuple()))

    # =========================================================================
    # Taichi functions
    # =========================================================================

    @ti.func
    def nearest_hit(self, ray: Ray):
        """Find the visible hit along a world-space ray.

        Returns:
            Tuple of (index, t): the shape index and its smallest t > 0, or
            index -1 when nothing is hit.
        """
        best_index = -1
        best_t = tm.inf
        for i in range(self.num_shapes):
            count, t0, t1 = intersect_shape(self.kinds[i], self.inverses[i], self.invertible[i], ray)
            if count > 0 and t0 > 0.0 and t0 < best_t:
                best_t = t0
                best_index = i
            if count > 1 and t1 > 0.0 and t1 < best_t:
                best_t = t1
                best_index = i
        return best_index, best_t

    @ti.func
    def is_shadowed_impl(self, p: vec4) -> ti.i32:
        """Return 1 if any shape lies strictly between ``p`` and the light."""
        shadowed = 1
        if ti.static(self.has_light):
            shadowed = 0
            to_light = self.light_position[None] - p
            distance = length(to_light)
            ray = Ray(origin=p, direction=normalize(to_light))
            for i in range(self.num_shapes):
                count, t0, t1 = intersect_shape(
                    self.kinds[i], self.inverses[i], self.invertible[i], ray
                )
                if count > 0 and t0 > 0.0 and t0 < distance:
                    shadowed = 1
                if count > 1 and t1 > 0.0 and t1 < distance:
                    shadowed = 1
        return shadowed

    @ti.func
    def shade_surface(self, index: ti.i32, eyev: vec4, normalv: vec4, over_point: vec4) -> vec3:
        """Local Phong color of shape ``index`` at a prepared hit."""
        result = vec3(0.0, 0.0, 0.0)
        if ti.static(self.has_light):
            material = MaterialData(
                color=self.colors[index],
                ambient=self.ambient[index],
                diffuse=self.diffuse[index],
                specular=self.specular[index],
                shininess=self.shininess[index],
                reflectivity=self.reflectivity[index],
            )
            light = LightData(
                position=self.light_position[None], intensity=self.light_intensity[None]
            )
            base = surface_color(
                material.color,
                self.pattern_kinds[index],
                self.pattern_a[index],
                self.pattern_b[index],
                self.to_pattern[index],
                over_point,
            )
            in_shadow = self.is_shadowed_impl(over_point)
            result = phong_lighting(material, base, light, over_point, eyev, normalv, in_shadow)
        return result

    @ti.func
    def color_at_impl(self, ray: Ray, remaining: ti.i32) -> vec3:
        """Color seen along ``ray`` with at most ``remaining`` reflection bounces."""
        color = vec3(0.0, 0.0, 0.0)
        weight = 1.0
        origin = ray.origin
        direction = ray.direction
        budget = remaining
        active = 1
        for _bounce in range(remaining + 1):
            if active == 1:
                current = Ray(origin=origin, direction=direction)
                index, t = self.nearest_hit(current)
                if index < 0:
                    active = 0
                else:
                    comps = prepare_computations(current, t, self.kinds[index], self.inverses[index])
                    color += weight * self.shade_surface(
                        index, comps.eyev, comps.normalv, comps.over_point
                    )
                    reflectivity = self.reflectivity[index]
                    if budget <= 0 or reflectivity == 0.0:
                        active = 0
                    else:
                        weight *= reflectivity
                        origin = comps.over_point
                        direction = comps.reflectv
                        budget -= 1
        return color

    # =========================================================================
    # Kernels backing the Python API
    # =========================================================================

    @ti.kernel
    def _collect_kernel(self, origin: vec4, direction: vec4):
        ray = Ray(origin=origin, direction=direction)
        self._xs_count[None] = 0
        ti.loop_config(serialize=True)
        for i in range(self.num_shapes):
            count, t0, t1 = intersect_shape(self.kinds[i], self.inverses[i], self.invertible[i], ray)
            n = self._xs_count[None]
            if count > 0:
                self._xs_t[n] = t0
                self._xs_index[n] = i
            if count > 1:
                self._xs_t[n + 1] = t1
                self._xs_index[n + 1] = i
            self._xs_count[None] = n + count

    @ti.kernel
    def _is_shadowed_kernel(self, p: vec4):
        # Single outer iteration keeps the shape scan serial
        for _ in range(1):
            self._query_flag[None] = self.is_shadowed_impl(p)

    @ti.kernel
    def _color_at_kernel(self, origin: vec4, direction: vec4, remaining: ti.i32):
        for _ in range(1):
            self._query_color[None] = self.color_at_impl(
                Ray(origin=origin, direction=direction), remaining
            )

    # =========================================================================
    # Python API
    # =========================================================================

    @property
    def shapes(self) -> tuple[Shape, ...]:
        return self._shapes

    @property
    def light(self) -> PointLight | None:
        return self._light

    def __len__(self) -> int:
        return self.num_shapes

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._shapes)

    def __contains__(self, shape: object) -> bool:
        return any(s is shape for s in self._shapes)

    def intersect(self, origin: Tuple4, direction: Tuple4) -> list[Intersection]:
        """Intersect a ray with every shape.

        Returns:
            All intersections sorted by t, including negative t. Ties keep
            shape order.
        """
        self._collect_kernel(as_tuple4(origin), as_tuple4(direction))
        count = int(self._xs_count[None])
        ts = self._xs_t.to_numpy()[:count]
        indices = self._xs_index.to_numpy()[:count]
        xs = [Intersection(float(t), self._shapes[int(i)]) for t, i in zip(ts, indices)]
        return sorted(xs, key=lambda x: x.t)

    def normal_at(self, shape: Shape, world_point: Tuple4) -> Tuple4 | None:
        """World-space normal of ``shape``; None if its transform is singular."""
        return shape_normal_at(shape, world_point)

    def is_shadowed(self, p: Tuple4) -> bool:
        """Whether anything lies strictly between ``p`` and the light."""
        self._is_shadowed_kernel(as_tuple4(p))
        return bool(self._query_flag[None])

    def prepare_computations(
        self, intersection: Intersection, origin: Tuple4, direction: Tuple4
    ) -> PreparedHit | None:
        return prepare_hit(intersection, origin, direction)

    def color_at(
        self, origin: Tuple4, direction: Tuple4, remaining: int = REFLECTION_DEPTH
    ) -> Color:
        """Color seen along a ray.

        Args:
            origin: Ray origin (point).
            direction: Ray direction (vector).
            remaining: Reflection depth budget; 0 disables reflection.

        Returns:
            The unclamped color; black when the ray hits nothing.
        """
        self._color_at_kernel(as_tuple4(origin), as_tuple4(direction), max(int(remaining), 0))
        return Color(*(float(c) for c in self._query_color.to_numpy()))

    def without(self, shape: Shape) -> "World":
        """A new world with ``shape`` removed (matched by identity).

        The result is a separate World with freshly allocated fields.
        """
        return World([s for s in self._shapes if s is not shape], self._light)


def default_world() -> World:
    """Two concentric spheres lit from the upper left front.

    The outer sphere is the unit sphere with a green-yellow diffuse material;
    the inner one is scaled by 0.5 with the default material.
    """
    outer = Sphere(
        material=Material(
            color=Color(0.8, 1.0, 0.6),
            diffuse=0.7,
            specular=0.2,
        )
    )
    inner = Sphere(transform=Matrix.scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0))
    return World([outer, inner], light)
