"""Homogeneous points and vectors on the Python side.

A tuple is a NumPy array of four floats (x, y, z, w). ``w == 1`` marks a
point and ``w == 0`` a vector; the distinction is a convention carried by the
data, not a separate type. These helpers are used while building scenes and
when reading results back from Taichi kernels.

Example:
    >>> from whitted.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 0.0, 1.0)
    >>> p + v
    array([1., 2., 4., 1.])
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

# Shading-point bias, plane parallel tolerance and approximate-equality tolerance
EPSILON = 1e-5

# Four-component homogeneous tuple
Tuple4 = npt.NDArray[np.float64]


def tuple4(x: float, y: float, z: float, w: float) -> Tuple4:
    """Create a homogeneous tuple from its four components."""
    return np.array([x, y, z, w], dtype=np.float64)


def point(x: float, y: float, z: float) -> Tuple4:
    """Create a point (w = 1)."""
    return tuple4(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple4:
    """Create a vector (w = 0)."""
    return tuple4(x, y, z, 0.0)


def as_tuple4(values: Sequence[float] | Tuple4) -> Tuple4:
    """Coerce a length-4 sequence into a float64 tuple.

    Raises:
        ValueError: If ``values`` does not have exactly four components.
    """
    result = np.asarray(values, dtype=np.float64)
    if result.shape != (4,):
        raise ValueError(f"Expected 4 components (x, y, z, w), got shape {result.shape}")
    return result


def is_point(t: Tuple4) -> bool:
    return bool(t[3] == 1.0)


def is_vector(t: Tuple4) -> bool:
    return bool(t[3] == 0.0)


def magnitude(t: Tuple4) -> float:
    """Euclidean length over all four components."""
    return float(np.sqrt(np.dot(t, t)))


def normalize(t: Tuple4) -> Tuple4:
    """Scale a tuple to unit length."""
    return t / magnitude(t)


def dot(a: Tuple4, b: Tuple4) -> float:
    return float(np.dot(a, b))


def cross(a: Tuple4, b: Tuple4) -> Tuple4:
    """Cross product of the xyz parts; the result is always a vector."""
    return vector(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def reflect(incident: Tuple4, normal: Tuple4) -> Tuple4:
    """Reflect ``incident`` about ``normal`` (normal should be unit length)."""
    return incident - normal * 2.0 * dot(incident, normal)
