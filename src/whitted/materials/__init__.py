"""Surface materials, procedural patterns and Phong lighting.

Components:
    pattern: Stripe, gradient, ring and checker patterns
    material: Phong material parameters and builder
    lighting: Point light and the Phong illumination function
"""

from .lighting import LightData, MaterialData, PointLight, lighting, phong_lighting
from .material import Material, MaterialBuilder
from .pattern import (
    NO_PATTERN,
    CheckerPattern,
    GradientPattern,
    Pattern,
    PatternBuilder,
    PatternKind,
    RingPattern,
    StripePattern,
    pattern_at,
    pattern_at_object,
    surface_color,
)

__all__ = [
    "NO_PATTERN",
    "CheckerPattern",
    "GradientPattern",
    "LightData",
    "Material",
    "MaterialBuilder",
    "MaterialData",
    "Pattern",
    "PatternBuilder",
    "PatternKind",
    "PointLight",
    "RingPattern",
    "StripePattern",
    "lighting",
    "pattern_at",
    "pattern_at_object",
    "phong_lighting",
    "surface_color",
]
