"""Scene composition: intersections, the World and demo scenes.

Components:
    intersection: Intersection records, hit selection and shading precomputation
    world: Shapes plus one light, with shadowing and recursive reflection
    showcase: A ready-made demonstration scene (import from whitted.scene.showcase)
"""

from .intersection import (
    Computations,
    Intersection,
    PreparedHit,
    hit,
    intersect,
    intersections,
    prepare_computations,
    prepare_hit,
)
from .world import REFLECTION_DEPTH, World, default_world

__all__ = [
    "REFLECTION_DEPTH",
    "Computations",
    "Intersection",
    "PreparedHit",
    "World",
    "default_world",
    "hit",
    "intersect",
    "intersections",
    "prepare_computations",
    "prepare_hit",
]
