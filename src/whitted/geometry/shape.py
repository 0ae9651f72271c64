"""Shape base class and fluent builder.

Shapes form a closed family tagged by ``ShapeKind``. Each shape owns an
object-to-world transform and a material and is immutable once built.
Identity is by handle: every shape receives a fresh integer from a
process-wide counter, so two geometrically identical shapes stay distinct.

Example:
    >>> from whitted.core.matrix import Matrix
    >>> from whitted.geometry.sphere import Sphere
    >>> a = Sphere.builder().with_transform(Matrix.scaling(2.0, 2.0, 2.0)).build()
    >>> b = Sphere(transform=Matrix.scaling(2.0, 2.0, 2.0))
    >>> a == b
    False
"""

import itertools
from dataclasses import dataclass, field
from enum import IntEnum
from functools import cached_property
from typing import ClassVar

from whitted.core.matrix import Matrix
from whitted.materials.material import Material


class ShapeKind(IntEnum):
    """Enumeration of supported shape variants.

    Used inside kernels to dispatch local intersection and normal routines.
    """

    SPHERE = 0
    PLANE = 1


_handles = itertools.count()


@dataclass(frozen=True, eq=False)
class Shape:
    """Base class for all shapes.

    Attributes:
        transform: Object-to-world transform.
        material: Surface material.
        handle: Unique identity issued at construction.
    """

    transform: Matrix = field(default_factory=Matrix.identity)
    material: Material = field(default_factory=Material)
    handle: int = field(init=False, default_factory=lambda: next(_handles))

    kind: ClassVar[ShapeKind]

    @cached_property
    def inverse(self) -> Matrix | None:
        """World-to-object transform, or None if the transform is singular."""
        return self.transform.inverse()

    @classmethod
    def builder(cls) -> "ShapeBuilder":
        return ShapeBuilder(cls)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handle={self.handle})"


class ShapeBuilder:
    """Fluent configuration for a shape, frozen by ``build()``."""

    def __init__(self, shape_cls: type[Shape]) -> None:
        if not hasattr(shape_cls, "kind"):
            raise ValueError(f"{shape_cls.__name__} is not a concrete shape variant")
        self._shape_cls = shape_cls
        self._transform = Matrix.identity()
        self._material = Material()

    def with_transform(self, transform: Matrix) -> "ShapeBuilder":
        self._transform = transform
        return self

    def with_material(self, material: Material) -> "ShapeBuilder":
        self._material = material
        return self

    def build(self) -> Shape:
        return self._shape_cls(transform=self._transform, material=self._material)
