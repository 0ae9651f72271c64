"""RGB colors on the Python side.

Components are unbounded floats: values above 1 are legal during shading and
are only clamped when an image is quantised for output.

Example:
    >>> from whitted.core.color import Color
    >>> Color(0.5, 0.25, 1.0) + Color(0.5, 0.25, 0.0)
    Color(red=1.0, green=0.5, blue=1.0)
"""

from dataclasses import dataclass

from whitted.core.tuples import EPSILON


@dataclass(frozen=True)
class Color:
    """An RGB triple.

    Attributes:
        red: Red component.
        green: Green component.
        blue: Blue component.
    """

    red: float
    green: float
    blue: float

    def __add__(self, other: "Color") -> "Color":
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: "Color") -> "Color":
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: "Color | float") -> "Color":
        # Color * Color is the Hadamard (component-wise) product
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, other: float) -> "Color":
        return self * other

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def approx_eq(self, other: "Color", tolerance: float = EPSILON) -> bool:
        """Compare component-wise within ``tolerance``."""
        return (
            abs(self.red - other.red) <= tolerance
            and abs(self.green - other.green) <= tolerance
            and abs(self.blue - other.blue) <= tolerance
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
