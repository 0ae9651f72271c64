"""Unit tests for intersections, hits and shading precomputation.

Tests cover:
- Intersection records and aggregation
- Hit selection with positive, negative and mixed t values
- prepare_hit: point, eye, normal, inside flag, over-point and reflection
"""

import math

import numpy as np
import pytest


class TestIntersections:
    """Tests for Intersection and intersections()."""

    def test_intersection_holds_t_and_shape(self):
        """Test an intersection records t and the shape."""
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection

        s = Sphere()
        i = Intersection(3.5, s)
        assert i.t == 3.5
        assert i.shape is s

    def test_aggregate_sorted(self):
        """Test intersections() orders records by t."""
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, intersections

        s = Sphere()
        xs = intersections(Intersection(2.0, s), Intersection(-1.0, s), Intersection(1.0, s))
        assert [x.t for x in xs] == [-1.0, 1.0, 2.0]


class TestHit:
    """Tests for hit selection."""

    def test_all_positive(self):
        """Test the lowest positive t wins."""
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, hit, intersections

        s = Sphere()
        i1 = Intersection(1.0, s)
        i2 = Intersection(2.0, s)
        assert hit(intersections(i2, i1)) is i1

    def test_some_negative(self):
        """Test negative t values are ignored."""
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, hit, intersections

        s = Sphere()
        i1 = Intersection(-1.0, s)
        i2 = Intersection(1.0, s)
        assert hit(intersections(i2, i1)) is i2

    def test_all_negative(self):
        """Test no hit when everything is behind the ray."""
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, hit, intersections

        s = Sphere()
        assert hit(intersections(Intersection(-2.0, s), Intersection(-1.0, s))) is None

    def test_zero_is_not_a_hit(self):
        """Test t = 0 does not count as visible."""
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, hit

        s = Sphere()
        assert hit([Intersection(0.0, s)]) is None

    def test_lowest_nonnegative_regardless_of_order(self):
        """Test hit works on unsorted input."""
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, hit

        s = Sphere()
        i4 = Intersection(2.0, s)
        xs = [Intersection(5.0, s), Intersection(7.0, s), Intersection(-3.0, s), i4]
        assert hit(xs) is i4

    def test_empty(self):
        """Test an empty list has no hit."""
        from whitted.scene.intersection import hit

        assert hit([]) is None


class TestPrepareHit:
    """Tests for shading-state precomputation."""

    def test_outside_hit(self):
        """Test precomputed state for a hit from outside."""
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, prepare_hit

        shape = Sphere()
        comps = prepare_hit(
            Intersection(4.0, shape), point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0)
        )
        assert comps.t == 4.0
        assert comps.shape is shape
        np.testing.assert_allclose(comps.point, point(0.0, 0.0, -1.0), atol=1e-12)
        np.testing.assert_allclose(comps.eyev, vector(0.0, 0.0, -1.0), atol=1e-12)
        np.testing.assert_allclose(comps.normalv, vector(0.0, 0.0, -1.0), atol=1e-12)
        assert comps.inside is False

    def test_inside_hit_flips_normal(self):
        """Test the normal is inverted when the ray starts inside."""
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, prepare_hit

        comps = prepare_hit(
            Intersection(1.0, Sphere()), point(0.0, 0.0, 0.0), vector(0.0, 0.0, 1.0)
        )
        np.testing.assert_allclose(comps.point, point(0.0, 0.0, 1.0), atol=1e-12)
        np.testing.assert_allclose(comps.eyev, vector(0.0, 0.0, -1.0), atol=1e-12)
        np.testing.assert_allclose(comps.normalv, vector(0.0, 0.0, -1.0), atol=1e-12)
        assert comps.inside is True

    def test_over_point_is_offset(self):
        """Test the over-point sits just above the surface."""
        from whitted.core.matrix import Matrix
        from whitted.core.ray import EPSILON
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, prepare_hit

        shape = Sphere(transform=Matrix.translation(0.0, 0.0, 1.0))
        comps = prepare_hit(
            Intersection(5.0, shape), point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0)
        )
        assert comps.over_point[2] < -EPSILON / 2
        assert comps.point[2] > comps.over_point[2]
        assert comps.over_point[2] == pytest.approx(-EPSILON)

    def test_reflection_vector(self):
        """Test the reflection vector off a plane at 45 degrees."""
        from whitted.core.tuples import point, vector
        from whitted.geometry.plane import Plane
        from whitted.scene.intersection import Intersection, prepare_hit

        half = math.sqrt(2.0) / 2.0
        comps = prepare_hit(
            Intersection(math.sqrt(2.0), Plane()),
            point(0.0, 1.0, -1.0),
            vector(0.0, -half, half),
        )
        np.testing.assert_allclose(comps.reflectv, vector(0.0, half, half), atol=1e-12)

    def test_singular_shape(self):
        """Test a shape with a singular transform cannot be prepared."""
        from whitted.core.matrix import Matrix
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere
        from whitted.scene.intersection import Intersection, prepare_hit

        shape = Sphere(transform=Matrix.scaling(0.0, 0.0, 0.0))
        assert (
            prepare_hit(Intersection(1.0, shape), point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))
            is None
        )
