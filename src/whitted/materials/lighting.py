"""Point light and Phong local illumination.

The Phong model sums three terms for a surface point lit by one point light:

    ambient  = base * intensity * material.ambient
    diffuse  = base * intensity * material.diffuse * (L . N)        if L . N >= 0
    specular = intensity * material.specular * (R . E) ^ shininess  if R . E > 0

where ``base`` is the material color or its pattern color, ``L`` the unit
vector toward the light, ``N`` the surface normal, ``E`` the eye vector and
``R`` the reflection of ``-L`` about ``N``. A shadowed point is black: the
ambient term is dropped as well, both for primary hits and inside reflection
bounces.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.materials.lighting import PointLight, lighting
    >>> from whitted.materials.material import Material
    >>> light = PointLight(point(0.0, 0.0, -10.0))
    >>> lighting(Material(), light, point(0.0, 0.0, 0.0),
    ...          vector(0.0, 0.0, -1.0), vector(0.0, 0.0, -1.0))  # ~(1.9, 1.9, 1.9)
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import taichi as ti

from whitted.core import tuples
from whitted.core.color import WHITE, Color
from whitted.core.matrix import Matrix
from whitted.core.ray import dot as dot4
from whitted.core.ray import mat4, normalize, real, reflect, vec3, vec4
from whitted.core.tuples import Tuple4, as_tuple4
from whitted.materials.material import Material
from whitted.materials.pattern import pattern_args, surface_color

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape


@dataclass(frozen=True, eq=False)
class PointLight:
    """A point light with no size.

    Attributes:
        position: Light position (point).
        intensity: Light color and brightness.
    """

    position: Tuple4 = field(default_factory=lambda: tuples.point(-10.0, 10.0, -10.0))
    intensity: Color = WHITE

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_tuple4(self.position))


# =============================================================================
# Taichi-side data
# =============================================================================


@ti.dataclass
class MaterialData:
    """Phong coefficients of one surface, as seen by kernels.

    Attributes:
        color: Base color (vec3).
        ambient: Ambient coefficient.
        diffuse: Diffuse coefficient.
        specular: Specular coefficient.
        shininess: Specular exponent.
        reflectivity: Mirror reflection weight.
    """

    color: vec3
    ambient: real
    diffuse: real
    specular: real
    shininess: real
    reflectivity: real


@ti.dataclass
class LightData:
    """A point light inside kernels."""

    position: vec4
    intensity: vec3


@ti.func
def phong_lighting(
    material: MaterialData,
    base_color: vec3,
    light: LightData,
    point: vec4,
    eyev: vec4,
    normalv: vec4,
    in_shadow: ti.i32,
) -> vec3:
    """Compute Phong shading for one surface point.

    Args:
        material: Phong coefficients of the surface.
        base_color: Material color or pattern color at ``point``.
        light: The scene light.
        point: Shading point in world space.
        eyev: Unit vector toward the eye.
        normalv: Unit surface normal.
        in_shadow: Non-zero if the light is occluded.

    Returns:
        ambient + diffuse + specular, unclamped. Black when in shadow.
    """
    result = vec3(0.0, 0.0, 0.0)
    if in_shadow == 0:
        effective_color = base_color * light.intensity
        lightv = normalize(light.position - point)
        ambient = effective_color * material.ambient
        diffuse = vec3(0.0, 0.0, 0.0)
        specular = vec3(0.0, 0.0, 0.0)

        light_dot_normal = dot4(lightv, normalv)
        if light_dot_normal >= 0.0:
            diffuse = effective_color * material.diffuse * light_dot_normal
            reflect_dot_eye = dot4(reflect(-lightv, normalv), eyev)
            if reflect_dot_eye > 0.0:
                factor = reflect_dot_eye**material.shininess
                specular = light.intensity * material.specular * factor

        result = ambient + diffuse + specular
    return result


@ti.kernel
def _lighting_kernel(
    color: vec3,
    coefficients: vec4,
    pattern_kind: ti.i32,
    pattern_a: vec3,
    pattern_b: vec3,
    to_pattern: mat4,
    light_position: vec4,
    light_intensity: vec3,
    point: vec4,
    eyev: vec4,
    normalv: vec4,
    in_shadow: ti.i32,
) -> vec3:
    # coefficients = (ambient, diffuse, specular, shininess)
    material = MaterialData(
        color=color,
        ambient=coefficients[0],
        diffuse=coefficients[1],
        specular=coefficients[2],
        shininess=coefficients[3],
        reflectivity=0.0,
    )
    light = LightData(position=light_position, intensity=light_intensity)
    base = surface_color(color, pattern_kind, pattern_a, pattern_b, to_pattern, point)
    return phong_lighting(material, base, light, point, eyev, normalv, in_shadow)


def lighting(
    material: Material,
    light: PointLight,
    point: Tuple4,
    eyev: Tuple4,
    normalv: Tuple4,
    in_shadow: bool = False,
    shape: "Shape | None" = None,
) -> Color:
    """Shade a single point from Python.

    Args:
        material: Surface material.
        light: The light source.
        point: Shading point (world space).
        eyev: Unit vector toward the eye.
        normalv: Unit surface normal.
        in_shadow: Whether the light is occluded.
        shape: Owner of the material. Its inverse transform maps ``point``
            into object space for pattern sampling; when omitted an identity
            object transform is used.

    Returns:
        The shaded color (unclamped).
    """
    shape_inverse = Matrix.identity() if shape is None else shape.inverse
    pattern = pattern_args(material.pattern, shape_inverse)
    rgb = _lighting_kernel(
        material.color.as_tuple(),
        (material.ambient, material.diffuse, material.specular, material.shininess),
        pattern.kind,
        pattern.a,
        pattern.b,
        pattern.to_pattern,
        light.position,
        light.intensity.as_tuple(),
        as_tuple4(point),
        as_tuple4(eyev),
        as_tuple4(normalv),
        int(in_shadow),
    )
    return Color(*(float(c) for c in rgb.to_numpy()))
