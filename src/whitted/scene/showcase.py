"""Showcase scene configuration.

This module provides a factory for a small demonstration scene that
exercises every surface feature of the renderer:

- A reflective checkered floor (plane)
- A striped back wall (plane rotated upright)
- Three spheres: a large mirror-like sphere, a ring-patterned sphere and a
  small glossy sphere
- One white point light above and to the left of the camera

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.scene.showcase import ShowcaseParams, create_showcase_scene
    >>> world, camera = create_showcase_scene(320, 180)
    >>> len(world)
    5
    >>> image = camera.render(world)
"""

import math
from dataclasses import dataclass

from whitted.camera.camera import Camera
from whitted.core.color import Color
from whitted.core.matrix import Matrix, view_transform
from whitted.core.tuples import point, vector
from whitted.geometry.plane import Plane
from whitted.geometry.sphere import Sphere
from whitted.materials.lighting import PointLight
from whitted.materials.material import Material
from whitted.materials.pattern import CheckerPattern, RingPattern, StripePattern
from whitted.scene.world import World

# =============================================================================
# Showcase Parameters
# =============================================================================


@dataclass
class ShowcaseParams:
    """Parameters for configuring the showcase scene.

    Attributes:
        field_of_view: Camera field of view in radians.
        floor_reflectivity: Reflectivity of the checkered floor.
        mirror_reflectivity: Reflectivity of the large center sphere.
        light_position: World-space position of the point light.
        light_color: RGB intensity of the point light.

    Example:
        >>> params = ShowcaseParams(floor_reflectivity=0.0)  # matte floor
    """

    field_of_view: float = math.pi / 3.0
    floor_reflectivity: float = 0.3
    mirror_reflectivity: float = 0.8
    light_position: tuple[float, float, float] = (-10.0, 10.0, -10.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)


# =============================================================================
# Scene Constants
# =============================================================================

# Camera placement
EYE = (0.0, 1.5, -5.0)
LOOK_AT = (0.0, 1.0, 0.0)

# Floor checker colors
FLOOR_LIGHT = Color(0.9, 0.9, 0.9)
FLOOR_DARK = Color(0.15, 0.15, 0.2)

# Back wall stripe colors
WALL_LIGHT = Color(0.85, 0.8, 0.7)
WALL_DARK = Color(0.55, 0.35, 0.3)

# Distance of the back wall from the origin
WALL_DISTANCE = 10.0


# =============================================================================
# Showcase Factory
# =============================================================================


def create_showcase_scene(
    width: int,
    height: int,
    params: ShowcaseParams | None = None,
) -> tuple[World, Camera]:
    """Create the showcase scene and a camera framing it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        params: Optional ShowcaseParams. If None, uses default ShowcaseParams().

    Returns:
        A tuple of (World, Camera).
    """
    if params is None:
        params = ShowcaseParams()

    # =========================================================================
    # Planes
    # =========================================================================

    floor = Plane(
        material=Material(
            specular=0.0,
            reflectivity=params.floor_reflectivity,
            pattern=CheckerPattern(FLOOR_LIGHT, FLOOR_DARK),
        )
    )

    back_wall = Plane(
        transform=Matrix.identity().rotate_x(math.pi / 2.0).translate(0.0, 0.0, WALL_DISTANCE),
        material=Material(
            specular=0.0,
            pattern=StripePattern(
                WALL_LIGHT,
                WALL_DARK,
                Matrix.scaling(0.5, 0.5, 0.5).rotate_y(math.pi / 4.0),
            ),
        ),
    )

    # =========================================================================
    # Spheres
    # =========================================================================

    mirror = Sphere(
        transform=Matrix.translation(-0.5, 1.0, 0.5),
        material=Material(
            color=Color(0.1, 0.1, 0.12),
            diffuse=0.3,
            specular=1.0,
            shininess=300.0,
            reflectivity=params.mirror_reflectivity,
        ),
    )

    ringed = Sphere(
        transform=Matrix.scaling(0.5, 0.5, 0.5).translate(1.5, 0.5, -0.5),
        material=Material(
            diffuse=0.7,
            specular=0.3,
            pattern=RingPattern(
                Color(0.1, 1.0, 0.5),
                Color(0.1, 0.4, 0.3),
                Matrix.scaling(0.2, 0.2, 0.2).rotate_x(math.pi / 3.0),
            ),
        ),
    )

    glossy = Sphere(
        transform=Matrix.scaling(0.33, 0.33, 0.33).translate(-1.5, 0.33, -0.75),
        material=Material(
            color=Color(1.0, 0.8, 0.1),
            diffuse=0.7,
            specular=0.3,
            reflectivity=0.1,
        ),
    )

    # =========================================================================
    # Light and camera
    # =========================================================================

    light = PointLight(point(*params.light_position), Color(*params.light_color))
    world = World([floor, back_wall, mirror, ringed, glossy], light)

    camera = Camera(
        width,
        height,
        params.field_of_view,
        view_transform(point(*EYE), point(*LOOK_AT), vector(0.0, 1.0, 0.0)),
    )

    return world, camera
