"""Phong surface materials.

A Material bundles the Phong coefficients, a base color, a reflectivity and
an optional procedural pattern. Materials are immutable; use
``Material.builder()`` for fluent construction.

Example:
    >>> from whitted.core.color import Color
    >>> from whitted.materials.material import Material
    >>> glossy = (
    ...     Material.builder()
    ...     .with_color(Color(0.8, 1.0, 0.6))
    ...     .with_diffuse(0.7)
    ...     .with_specular(0.2)
    ...     .build()
    ... )
    >>> glossy.ambient
    0.1
"""

from dataclasses import dataclass, fields
from typing import Any

from whitted.core.color import WHITE, Color
from whitted.materials.pattern import Pattern

# Coefficients that must be non-negative
_COEFFICIENTS = ("ambient", "diffuse", "specular", "shininess", "reflectivity")


@dataclass(frozen=True)
class Material:
    """Shading parameters for a surface.

    Attributes:
        color: Base color, used when no pattern is set.
        ambient: Ambient reflection coefficient.
        diffuse: Diffuse reflection coefficient.
        specular: Specular reflection coefficient.
        shininess: Phong specular exponent.
        reflectivity: Fraction of the mirror-reflected color added on top of
            the local shading (0 disables reflection rays).
        pattern: Optional procedural pattern overriding ``color``.
    """

    color: Color = WHITE
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflectivity: float = 0.0
    pattern: Pattern | None = None

    def __post_init__(self) -> None:
        for name in _COEFFICIENTS:
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} must be non-negative, got {value}")

    @classmethod
    def builder(cls) -> "MaterialBuilder":
        return MaterialBuilder()


class MaterialBuilder:
    """Fluent configuration for a Material, frozen by ``build()``.

    Starts from the Material defaults; validation happens in ``build()``.
    """

    def __init__(self) -> None:
        self._params: dict[str, Any] = {f.name: f.default for f in fields(Material)}

    def with_color(self, color: Color) -> "MaterialBuilder":
        self._params["color"] = color
        return self

    def with_ambient(self, ambient: float) -> "MaterialBuilder":
        self._params["ambient"] = ambient
        return self

    def with_diffuse(self, diffuse: float) -> "MaterialBuilder":
        self._params["diffuse"] = diffuse
        return self

    def with_specular(self, specular: float) -> "MaterialBuilder":
        self._params["specular"] = specular
        return self

    def with_shininess(self, shininess: float) -> "MaterialBuilder":
        self._params["shininess"] = shininess
        return self

    def with_reflectivity(self, reflectivity: float) -> "MaterialBuilder":
        self._params["reflectivity"] = reflectivity
        return self

    def with_pattern(self, pattern: Pattern | None) -> "MaterialBuilder":
        self._params["pattern"] = pattern
        return self

    def build(self) -> Material:
        return Material(**self._params)
