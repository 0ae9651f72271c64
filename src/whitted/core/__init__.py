"""Core data types: tuples, matrices, colors and Taichi rays."""

from .color import BLACK, WHITE, Color
from .matrix import Matrix, view_transform
from .ray import (
    Ray,
    as_vector,
    cross,
    dot,
    length,
    make_ray,
    mat4,
    normalize,
    ray_at,
    real,
    reflect,
    transform_ray,
    vec3,
    vec4,
    xyz,
)
from .tuples import EPSILON, point, vector

__all__ = [
    "BLACK",
    "EPSILON",
    "WHITE",
    "Color",
    "Matrix",
    "Ray",
    "as_vector",
    "cross",
    "dot",
    "length",
    "make_ray",
    "mat4",
    "normalize",
    "point",
    "ray_at",
    "real",
    "reflect",
    "transform_ray",
    "vec3",
    "vec4",
    "vector",
    "xyz",
]
