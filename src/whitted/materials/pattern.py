"""Procedural color patterns.

A pattern maps a point in pattern space to one of two colors (or a blend of
them). Four variants exist, selected by ``PatternKind`` and dispatched inside
Taichi with a plain integer tag:

    STRIPE:   a when floor(x) is even, else b
    GRADIENT: a + (b - a) * (x - floor(x))
    RING:     a when floor(sqrt(x^2 + z^2)) is even, else b
    CHECKER:  a when floor(x) + floor(y) + floor(z) is even, else b

World points reach pattern space through the owning shape's inverse
transform followed by the pattern's own inverse transform.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.core.tuples import point
    >>> from whitted.materials.pattern import StripePattern
    >>> StripePattern().pattern_at(point(1.5, 0.0, 0.0))
    Color(red=0.0, green=0.0, blue=0.0)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from functools import cached_property
from typing import TYPE_CHECKING, ClassVar, NamedTuple

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from whitted.core.color import BLACK, WHITE, Color
from whitted.core.matrix import Matrix
from whitted.core.ray import mat4, real, vec3, vec4
from whitted.core.tuples import Tuple4, as_tuple4

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape


class PatternKind(IntEnum):
    """Enumeration of procedural pattern variants."""

    STRIPE = 0
    GRADIENT = 1
    RING = 2
    CHECKER = 3


# Tag used in kernels for "sample the material color instead"
NO_PATTERN = -1


# =============================================================================
# Python-side pattern descriptions
# =============================================================================


@dataclass(frozen=True)
class Pattern:
    """Base class for two-color patterns.

    Attributes:
        a: First color (even cells, gradient start).
        b: Second color (odd cells, gradient end).
        transform: Pattern-to-object transform.
    """

    a: Color = WHITE
    b: Color = BLACK
    transform: Matrix = field(default_factory=Matrix.identity)

    kind: ClassVar[PatternKind]

    @cached_property
    def inverse(self) -> Matrix | None:
        return self.transform.inverse()

    @classmethod
    def builder(cls) -> "PatternBuilder":
        return PatternBuilder(cls)

    def pattern_at(self, pattern_point: Tuple4) -> Color:
        """Evaluate the pattern at a point already in pattern space."""
        rgb = _pattern_at_kernel(
            int(self.kind), self.a.as_tuple(), self.b.as_tuple(), as_tuple4(pattern_point)
        )
        return Color(*(float(c) for c in rgb.to_numpy()))

    def pattern_at_shape(self, shape: "Shape", world_point: Tuple4) -> Color | None:
        """Evaluate the pattern at a world point on ``shape``.

        Returns:
            The pattern color, or None if the shape or pattern transform is
            singular.
        """
        shape_inverse = shape.inverse
        if shape_inverse is None or self.inverse is None:
            return None
        rgb = _pattern_at_object_kernel(
            int(self.kind),
            self.a.as_tuple(),
            self.b.as_tuple(),
            self.inverse.to_numpy(),
            shape_inverse.to_numpy(),
            as_tuple4(world_point),
        )
        return Color(*(float(c) for c in rgb.to_numpy()))


@dataclass(frozen=True)
class StripePattern(Pattern):
    kind: ClassVar[PatternKind] = PatternKind.STRIPE


@dataclass(frozen=True)
class GradientPattern(Pattern):
    kind: ClassVar[PatternKind] = PatternKind.GRADIENT


@dataclass(frozen=True)
class RingPattern(Pattern):
    kind: ClassVar[PatternKind] = PatternKind.RING


@dataclass(frozen=True)
class CheckerPattern(Pattern):
    kind: ClassVar[PatternKind] = PatternKind.CHECKER


class PatternBuilder:
    """Fluent configuration for a pattern, frozen by ``build()``.

    Example:
        >>> pattern = (
        ...     CheckerPattern.builder()
        ...     .with_colors(Color(1.0, 0.0, 0.0), WHITE)
        ...     .with_transform(Matrix.scaling(0.5, 0.5, 0.5))
        ...     .build()
        ... )
    """

    def __init__(self, pattern_cls: type[Pattern]) -> None:
        if not hasattr(pattern_cls, "kind"):
            raise ValueError(f"{pattern_cls.__name__} is not a concrete pattern variant")
        self._pattern_cls = pattern_cls
        self._a = WHITE
        self._b = BLACK
        self._transform = Matrix.identity()

    def with_colors(self, a: Color, b: Color) -> "PatternBuilder":
        self._a = a
        self._b = b
        return self

    def with_transform(self, transform: Matrix) -> "PatternBuilder":
        self._transform = transform
        return self

    def build(self) -> Pattern:
        return self._pattern_cls(a=self._a, b=self._b, transform=self._transform)


class PatternArgs(NamedTuple):
    """Kernel-ready pattern data for one surface.

    Attributes:
        kind: PatternKind value, or NO_PATTERN.
        a: First color as a length-3 array.
        b: Second color as a length-3 array.
        to_pattern: World-to-pattern transform (pattern inverse times shape
            inverse) as a 4x4 array.
    """

    kind: int
    a: npt.NDArray[np.float64]
    b: npt.NDArray[np.float64]
    to_pattern: npt.NDArray[np.float64]


def pattern_args(pattern: Pattern | None, shape_inverse: Matrix | None) -> PatternArgs:
    """Flatten an optional pattern for upload to Taichi.

    A missing pattern, or a singular pattern or shape transform, yields
    NO_PATTERN so that kernels fall back to the material color.

    Raises:
        ValueError: If ``pattern`` is not one of the known variants.
    """
    if pattern is None or pattern.inverse is None or shape_inverse is None:
        return PatternArgs(NO_PATTERN, np.ones(3), np.zeros(3), np.identity(4))
    kind = getattr(pattern, "kind", None)
    if kind not in tuple(PatternKind):
        raise ValueError(f"Unknown pattern kind for {type(pattern).__name__}")
    return PatternArgs(
        int(kind),
        np.array(pattern.a.as_tuple(), dtype=np.float64),
        np.array(pattern.b.as_tuple(), dtype=np.float64),
        (pattern.inverse @ shape_inverse).to_numpy(),
    )


# =============================================================================
# Taichi functions
# =============================================================================


@ti.func
def _is_odd(value: real) -> ti.i32:
    odd = 0
    if tm.mod(value, 2.0) != 0.0:
        odd = 1
    return odd


@ti.func
def pattern_at(kind: ti.i32, a: vec3, b: vec3, p: vec4) -> vec3:
    """Evaluate a pattern at a point in pattern space.

    Args:
        kind: PatternKind value.
        a: First color.
        b: Second color.
        p: Pattern-space point.

    Returns:
        The pattern color. Unknown kinds return ``a``.
    """
    color = a
    if kind == int(PatternKind.STRIPE):
        if _is_odd(ti.floor(p[0])):
            color = b
    elif kind == int(PatternKind.GRADIENT):
        fraction = p[0] - ti.floor(p[0])
        color = a + (b - a) * fraction
    elif kind == int(PatternKind.RING):
        if _is_odd(ti.floor(tm.sqrt(p[0] * p[0] + p[2] * p[2]))):
            color = b
    elif kind == int(PatternKind.CHECKER):
        if _is_odd(ti.floor(p[0]) + ti.floor(p[1]) + ti.floor(p[2])):
            color = b
    return color


@ti.func
def pattern_at_object(
    kind: ti.i32, a: vec3, b: vec3, pattern_inverse: mat4, shape_inverse: mat4, world_point: vec4
) -> vec3:
    """Map a world point through shape then pattern space and evaluate."""
    object_point = shape_inverse @ world_point
    pattern_point = pattern_inverse @ object_point
    return pattern_at(kind, a, b, pattern_point)


@ti.func
def surface_color(
    color: vec3, kind: ti.i32, a: vec3, b: vec3, to_pattern: mat4, world_point: vec4
) -> vec3:
    """Effective base color of a surface: its pattern if any, else ``color``.

    ``to_pattern`` is the combined world-to-pattern transform
    (pattern inverse times shape inverse).
    """
    result = color
    if kind != NO_PATTERN:
        result = pattern_at(kind, a, b, to_pattern @ world_point)
    return result


@ti.kernel
def _pattern_at_kernel(kind: ti.i32, a: vec3, b: vec3, p: vec4) -> vec3:
    return pattern_at(kind, a, b, p)


@ti.kernel
def _pattern_at_object_kernel(
    kind: ti.i32, a: vec3, b: vec3, pattern_inverse: mat4, shape_inverse: mat4, world_point: vec4
) -> vec3:
    return pattern_at_object(kind, a, b, pattern_inverse, shape_inverse, world_point)
