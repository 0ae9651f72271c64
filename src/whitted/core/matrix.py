"""Square matrices and affine transform construction.

The Matrix class is an immutable NumPy-backed square matrix used to build
object, pattern and camera transforms while a scene is assembled. Transforms
are uploaded to Taichi fields as plain 4x4 arrays once the World is built.

Composition follows the builder convention: calling ``m.translate(...)``
returns ``translation(...) @ m``, so a chain reads in the order the
transforms are applied to a point:

    >>> from math import pi
    >>> from whitted.core.matrix import Matrix
    >>> from whitted.core.tuples import point
    >>> m = Matrix.identity().rotate_x(pi / 2).scale(5, 5, 5).translate(10, 5, 7)
    >>> m.mul_tup(point(1, 0, 1)).round(5)
    array([15.,  0.,  7.,  1.])

Inversion uses cofactor expansion and returns ``None`` when the determinant
is exactly zero. Callers treat a missing inverse as "no contribution".
"""

import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from whitted.core.tuples import EPSILON, Tuple4, cross, normalize


class Matrix:
    """An immutable square matrix of floats.

    Attributes:
        size: Number of rows (and columns).
    """

    __slots__ = ("_m",)

    def __init__(self, rows: Sequence[Sequence[float]] | npt.NDArray[np.float64]) -> None:
        """Create a matrix from nested rows.

        Args:
            rows: A square grid of numbers (any size >= 1).

        Raises:
            ValueError: If ``rows`` is not a non-empty square grid.
        """
        m = np.array(rows, dtype=np.float64)
        if m.ndim != 2 or m.shape[0] != m.shape[1] or m.shape[0] == 0:
            raise ValueError(f"Matrix must be a non-empty square grid, got shape {m.shape}")
        m.setflags(write=False)
        self._m = m

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def identity(cls, size: int = 4) -> "Matrix":
        return cls(np.identity(size))

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> "Matrix":
        return cls(
            [
                [1.0, 0.0, 0.0, x],
                [0.0, 1.0, 0.0, y],
                [0.0, 0.0, 1.0, z],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def scaling(cls, x: float, y: float, z: float) -> "Matrix":
        return cls(
            [
                [x, 0.0, 0.0, 0.0],
                [0.0, y, 0.0, 0.0],
                [0.0, 0.0, z, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def rotation_x(cls, radians: float) -> "Matrix":
        c, s = math.cos(radians), math.sin(radians)
        return cls(
            [
                [1.0, 0.0, 0.0, 0.0],
                [0.0, c, -s, 0.0],
                [0.0, s, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def rotation_y(cls, radians: float) -> "Matrix":
        c, s = math.cos(radians), math.sin(radians)
        return cls(
            [
                [c, 0.0, s, 0.0],
                [0.0, 1.0, 0.0, 0.0],
                [-s, 0.0, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def rotation_z(cls, radians: float) -> "Matrix":
        c, s = math.cos(radians), math.sin(radians)
        return cls(
            [
                [c, -s, 0.0, 0.0],
                [s, c, 0.0, 0.0],
                [0.0, 0.0, 1.0, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def shearing(
        cls, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float
    ) -> "Matrix":
        """Shear each axis in proportion to the other two.

        ``xy`` moves x in proportion to y, ``xz`` moves x in proportion to z,
        and so on.
        """
        return cls(
            [
                [1.0, xy, xz, 0.0],
                [yx, 1.0, yz, 0.0],
                [zx, zy, 1.0, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    # =========================================================================
    # Fluent builders (each applies the new transform after this one)
    # =========================================================================

    def translate(self, x: float, y: float, z: float) -> "Matrix":
        return Matrix.translation(x, y, z) @ self

    def scale(self, x: float, y: float, z: float) -> "Matrix":
        return Matrix.scaling(x, y, z) @ self

    def rotate_x(self, radians: float) -> "Matrix":
        return Matrix.rotation_x(radians) @ self

    def rotate_y(self, radians: float) -> "Matrix":
        return Matrix.rotation_y(radians) @ self

    def rotate_z(self, radians: float) -> "Matrix":
        return Matrix.rotation_z(radians) @ self

    def shear(self, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> "Matrix":
        return Matrix.shearing(xy, xz, yx, yz, zx, zy) @ self

    # =========================================================================
    # Element access and comparison
    # =========================================================================

    @property
    def size(self) -> int:
        return int(self._m.shape[0])

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._m[row, col])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    def __hash__(self) -> int:
        # Adding 0.0 folds -0.0 into 0.0 so equal matrices hash alike
        return hash((self._m.shape, (self._m + 0.0).tobytes()))

    def __repr__(self) -> str:
        rows = ", ".join(str(list(map(float, row))) for row in self._m)
        return f"Matrix([{rows}])"

    def approx_eq(self, other: "Matrix", tolerance: float = EPSILON) -> bool:
        """Compare element-wise within ``tolerance``."""
        return self.size == other.size and bool(
            np.all(np.abs(self._m - other._m) <= tolerance)
        )

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the underlying array."""
        return self._m.copy()

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __matmul__(self, other: "Matrix | Tuple4") -> "Matrix | Tuple4":
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
            return Matrix(self._m @ other._m)
        return self.mul_tup(other)

    def mul_tup(self, t: Tuple4) -> Tuple4:
        """Apply this 4x4 transform to a homogeneous tuple."""
        return self._m @ np.asarray(t, dtype=np.float64)

    def transpose(self) -> "Matrix":
        return Matrix(self._m.T)

    # =========================================================================
    # Cofactor expansion
    # =========================================================================

    def submatrix(self, row: int, col: int) -> "Matrix":
        """Remove one row and one column."""
        m = np.delete(np.delete(self._m, row, axis=0), col, axis=1)
        return Matrix(m)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return minor if (row + col) % 2 == 0 else -minor

    def determinant(self) -> float:
        m = self._m
        if self.size == 1:
            return float(m[0, 0])
        if self.size == 2:
            return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
        return float(sum(m[0, col] * self.cofactor(0, col) for col in range(self.size)))

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> "Matrix | None":
        """Invert by cofactor expansion.

        Returns:
            The inverse matrix, or None when the determinant is exactly zero.
        """
        det = self.determinant()
        if det == 0.0:
            return None
        n = self.size
        cofactors = np.array(
            [[self.cofactor(row, col) for col in range(n)] for row in range(n)],
            dtype=np.float64,
        )
        return Matrix(cofactors.T / det)


def view_transform(from_point: Tuple4, to_point: Tuple4, up: Tuple4) -> Matrix:
    """Build the world-to-camera transform for an eye looking at a target.

    Args:
        from_point: Eye position (point).
        to_point: Point the eye looks at.
        up: Approximate up direction (vector); need not be normalised or
            exactly perpendicular to the view direction.

    Returns:
        Orientation followed by a translation moving the eye to the origin.
        From the origin toward (0, 0, -1) with up +y this is the identity.
    """
    forward = normalize(np.asarray(to_point, dtype=np.float64) - from_point)
    left = cross(forward, normalize(np.asarray(up, dtype=np.float64)))
    true_up = cross(left, forward)
    orientation = Matrix(
        [
            [left[0], left[1], left[2], 0.0],
            [true_up[0], true_up[1], true_up[2], 0.0],
            [-forward[0], -forward[1], -forward[2], 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ Matrix.translation(-from_point[0], -from_point[1], -from_point[2])

