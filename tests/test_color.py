"""Unit tests for the Python-side Color type."""

import dataclasses

import pytest

from whitted.core.color import BLACK, WHITE, Color


class TestColor:
    """Tests for Color arithmetic and comparison."""

    def test_components(self):
        c = Color(-0.5, 0.4, 1.7)
        assert c.red == -0.5
        assert c.green == 0.4
        assert c.blue == 1.7
        assert c.as_tuple() == (-0.5, 0.4, 1.7)

    def test_add_and_subtract(self):
        c1 = Color(0.9, 0.6, 0.75)
        c2 = Color(0.7, 0.1, 0.25)
        assert (c1 + c2).approx_eq(Color(1.6, 0.7, 1.0))
        assert (c1 - c2).approx_eq(Color(0.2, 0.5, 0.5))

    def test_scalar_multiply_both_sides(self):
        c = Color(0.2, 0.3, 0.4)
        assert (c * 2).approx_eq(Color(0.4, 0.6, 0.8))
        assert (2 * c).approx_eq(Color(0.4, 0.6, 0.8))

    def test_hadamard_product(self):
        result = Color(1.0, 0.2, 0.4) * Color(0.9, 1.0, 0.1)
        assert result.approx_eq(Color(0.9, 0.2, 0.04))

    def test_components_are_unbounded(self):
        """Values outside [0, 1] survive arithmetic untouched."""
        c = Color(1.5, -0.5, 3.0) * 2
        assert c == Color(3.0, -1.0, 6.0)

    def test_approx_eq_tolerance(self):
        assert Color(0.5, 0.5, 0.5).approx_eq(Color(0.500001, 0.5, 0.499999))
        assert not Color(0.5, 0.5, 0.5).approx_eq(Color(0.5001, 0.5, 0.5))

    def test_constants(self):
        assert BLACK == Color(0.0, 0.0, 0.0)
        assert WHITE == Color(1.0, 1.0, 1.0)

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            WHITE.red = 0.0  # type: ignore[misc]
