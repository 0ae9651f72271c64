"""Unit tests for homogeneous points and vectors.

Tests cover:
- Point/vector construction and the w convention
- Arithmetic on the shared representation
- Magnitude, normalisation, dot and cross products
- Reflection about a normal
"""

import math

import numpy as np
import pytest

from whitted.core.tuples import (
    as_tuple4,
    cross,
    dot,
    is_point,
    is_vector,
    magnitude,
    normalize,
    point,
    reflect,
    tuple4,
    vector,
)


class TestConstruction:
    """Tests for tuple constructors."""

    def test_tuple_with_w_one_is_point(self):
        """A tuple with w = 1 is a point."""
        a = tuple4(4.3, -4.2, 3.1, 1.0)
        assert is_point(a)
        assert not is_vector(a)

    def test_tuple_with_w_zero_is_vector(self):
        """A tuple with w = 0 is a vector."""
        a = tuple4(4.3, -4.2, 3.1, 0.0)
        assert is_vector(a)
        assert not is_point(a)

    def test_point_and_vector_set_w(self):
        """point() and vector() fill in w."""
        np.testing.assert_array_equal(point(4.0, -4.0, 3.0), [4.0, -4.0, 3.0, 1.0])
        np.testing.assert_array_equal(vector(4.0, -4.0, 3.0), [4.0, -4.0, 3.0, 0.0])

    def test_as_tuple4_rejects_wrong_length(self):
        """as_tuple4 insists on exactly four components."""
        with pytest.raises(ValueError, match="4 components"):
            as_tuple4([1.0, 2.0, 3.0])


class TestArithmetic:
    """Tests for arithmetic preserving the point/vector convention."""

    def test_point_plus_vector_is_point(self):
        result = point(3.0, -2.0, 5.0) + vector(-2.0, 3.0, 1.0)
        np.testing.assert_array_equal(result, point(1.0, 1.0, 6.0))

    def test_point_minus_point_is_vector(self):
        result = point(3.0, 2.0, 1.0) - point(5.0, 6.0, 7.0)
        np.testing.assert_array_equal(result, vector(-2.0, -4.0, -6.0))

    def test_point_minus_vector_is_point(self):
        result = point(3.0, 2.0, 1.0) - vector(5.0, 6.0, 7.0)
        np.testing.assert_array_equal(result, point(-2.0, -4.0, -6.0))

    def test_negate_and_scale(self):
        a = tuple4(1.0, -2.0, 3.0, -4.0)
        np.testing.assert_array_equal(-a, [-1.0, 2.0, -3.0, 4.0])
        np.testing.assert_array_equal(a * 0.5, [0.5, -1.0, 1.5, -2.0])
        np.testing.assert_array_equal(a / 2.0, [0.5, -1.0, 1.5, -2.0])


class TestVectorOperations:
    """Tests for magnitude, normalize, dot and cross."""

    @pytest.mark.parametrize(
        "v,expected",
        [
            (vector(1.0, 0.0, 0.0), 1.0),
            (vector(0.0, 0.0, 1.0), 1.0),
            (vector(1.0, 2.0, 3.0), math.sqrt(14.0)),
            (vector(-1.0, -2.0, -3.0), math.sqrt(14.0)),
        ],
    )
    def test_magnitude(self, v, expected):
        assert abs(magnitude(v) - expected) < 1e-12

    def test_normalize(self):
        n = normalize(vector(1.0, 2.0, 3.0))
        root = math.sqrt(14.0)
        np.testing.assert_allclose(n, [1.0 / root, 2.0 / root, 3.0 / root, 0.0])
        assert abs(magnitude(n) - 1.0) < 1e-12

    def test_dot(self):
        assert dot(vector(1.0, 2.0, 3.0), vector(2.0, 3.0, 4.0)) == 20.0

    def test_cross_is_anticommutative(self):
        a = vector(1.0, 2.0, 3.0)
        b = vector(2.0, 3.0, 4.0)
        np.testing.assert_array_equal(cross(a, b), vector(-1.0, 2.0, -1.0))
        np.testing.assert_array_equal(cross(b, a), vector(1.0, -2.0, 1.0))


class TestReflect:
    """Tests for reflecting a vector about a normal."""

    def test_reflect_at_45_degrees(self):
        """A vector approaching at 45 degrees bounces straight back up."""
        r = reflect(vector(1.0, -1.0, 0.0), vector(0.0, 1.0, 0.0))
        np.testing.assert_allclose(r, vector(1.0, 1.0, 0.0))

    def test_reflect_off_slanted_surface(self):
        half = math.sqrt(2.0) / 2.0
        r = reflect(vector(0.0, -1.0, 0.0), vector(half, half, 0.0))
        np.testing.assert_allclose(r, vector(1.0, 0.0, 0.0), atol=1e-12)
