"""Unit tests for the primitive value types.

Tests cover:
- Construction from coordinates, from other entities and the NaN sentinel
- Kind predicates and degrees
- Degeneracy tests
- Per-primitive algebra (lengths, areas, barycentric coordinates, ...)
- In-place translation and affine transformation
"""

import numpy as np
import pytest

from geokernel import (EntityType, NoneEntity, Point, Line, Ray, Plane, Segment,
                       Triangle, Circle)
from geokernel.transformations import rotation_affine, translation_affine


class TestEntityKinds:
    """Tests for the shared capability interface."""

    def test_degrees_are_distinct(self):
        """Every kind has its own degree."""
        values = [t.value for t in EntityType]
        assert len(values) == len(set(values))
        assert EntityType.LINE.value == 3
        assert EntityType.CIRCLE.value == 8

    def test_exactly_one_predicate(self, primitives):
        """Exactly one is_<kind> predicate holds per instance."""
        names = ['is_none', 'is_point', 'is_line', 'is_ray', 'is_plane',
                 'is_segment', 'is_triangle', 'is_circle']
        for entity in primitives + [NoneEntity()]:
            flags = [getattr(entity, name)() for name in names]
            assert sum(flags) == 1, entity

    def test_type_name(self):
        assert Segment([0, 0, 0], [1, 0, 0]).type_name == "segment"
        assert NoneEntity().type_name == "none"

    def test_set_rejects_other_kind(self):
        """Assigning across kinds raises TypeError."""
        with pytest.raises(TypeError):
            Line([0, 0, 0], [1, 0, 0]).set(Plane([0, 0, 0], [0, 0, 1]))

    def test_copy_is_independent(self, primitives):
        for entity in primitives:
            clone = entity.copy()
            assert clone.is_approx(entity)
            clone.translate([1, 0, 0])
            assert not clone.is_approx(entity)


class TestPoint:
    """Tests for Point."""

    def test_default_is_nan(self):
        p = Point()
        assert np.all(np.isnan(p.origin))
        assert p.is_degenerate()

    def test_constructors(self):
        a = Point(1, 2, 3)
        b = Point([1, 2, 3])
        c = Point(a)
        d = Point(origin=[1, 2, 3])
        for p in (a, b, c, d):
            assert (p.x, p.y, p.z) == (1.0, 2.0, 3.0)
        c.x = 5
        assert a.x == 1.0

    def test_wrong_arity(self):
        with pytest.raises(ValueError):
            Point(1, 2)

    def test_distance_and_inside(self):
        p = Point(0, 0, 0)
        assert p.distance([3, 4, 0]) == pytest.approx(5.0)
        assert p.is_inside([0, 0, 1e-12])
        assert not p.is_inside([0, 0, 1e-3])

    def test_set_from_coordinates(self):
        p = Point()
        p.set([1, 1, 1])
        assert not p.is_degenerate()


class TestLineAndRay:
    """Tests for Line and Ray."""

    def test_degenerate_direction(self):
        assert Line([0, 0, 0], [0, 0, 0]).is_degenerate()
        assert not Line([0, 0, 0], [0, 0, 1]).is_degenerate()

    def test_line_inside(self, x_axis):
        assert x_axis.is_inside([-5, 0, 0])
        assert not x_axis.is_inside([0, 1, 0])

    def test_ray_inside_is_half_line(self):
        ray = Ray([0, 0, 0], [2, 0, 0])
        assert ray.is_inside([0, 0, 0])
        assert ray.is_inside([3, 0, 0])
        assert not ray.is_inside([-1, 0, 0])

    def test_to_point_and_reverse(self):
        line = Line([1, 0, 0], [0, 2, 0])
        np.testing.assert_allclose(line.to_point(0.5), [1, 1, 0])
        line.reverse()
        np.testing.assert_allclose(line.direction, [0, -2, 0])

    def test_ray_to_line(self):
        line = Ray([0, 0, 0], [1, 0, 0]).to_line()
        assert line.is_line()
        assert line.is_inside([-1, 0, 0])

    def test_rotate(self):
        """A quarter turn about z maps the x direction onto y."""
        line = Line([1, 0, 0], [1, 0, 0])
        line.transform(rotation_affine([0, 0, 90], degrees=True))
        np.testing.assert_allclose(line.origin, [0, 1, 0], atol=1e-12)
        np.testing.assert_allclose(line.direction, [0, 1, 0], atol=1e-12)


class TestPlane:
    """Tests for Plane."""

    def test_normal_is_normalized(self):
        plane = Plane([0, 0, 1], [0, 0, 2])
        np.testing.assert_allclose(plane.normal, [0, 0, 1])
        assert plane.d == pytest.approx(-1.0)

    def test_signed_distance_and_projection(self):
        plane = Plane([0, 0, 1], [0, 0, 1])
        assert plane.signed_distance([4, 4, 3]) == pytest.approx(2.0)
        assert plane.signed_distance([0, 0, -1]) == pytest.approx(-2.0)
        np.testing.assert_allclose(plane.project([4, 4, 3]), [4, 4, 1])

    def test_from_points(self):
        plane = Plane.from_points([0, 0, 0], [1, 0, 0], [0, 1, 0])
        np.testing.assert_allclose(plane.normal, [0, 0, 1])

    def test_degenerate(self):
        assert Plane([0, 0, 0], [0, 0, 0]).is_degenerate()

    def test_translate(self, xy_plane):
        xy_plane.translate([0, 0, 2])
        assert xy_plane.is_inside([5, -3, 2])


class TestSegment:
    """Tests for Segment."""

    def test_basic_algebra(self):
        seg = Segment([0, 0, 0], [3, 4, 0])
        assert seg.length() == pytest.approx(5.0)
        np.testing.assert_allclose(seg.centroid().origin, [1.5, 2, 0])
        np.testing.assert_allclose(seg.to_normalized_vector(), [0.6, 0.8, 0])
        assert seg.vertex(1).is_approx(Point(3, 4, 0))

    def test_inside(self):
        seg = Segment([0, 0, 0], [1, 0, 0])
        assert seg.is_inside([0.5, 0, 0])
        assert seg.is_inside([1, 0, 0])
        assert not seg.is_inside([1.5, 0, 0])

    def test_degenerate(self):
        assert Segment([1, 1, 1], [1, 1, 1]).is_degenerate()
        assert Segment().is_degenerate()

    def test_reverse(self):
        seg = Segment([0, 0, 0], [1, 0, 0])
        seg.reverse()
        np.testing.assert_allclose(seg.vertices, [[1, 0, 0], [0, 0, 0]])

    def test_translate(self):
        seg = Segment([0, 0, 0], [1, 0, 0])
        seg.transform(translation_affine([0, 0, 1]))
        np.testing.assert_allclose(seg.vertices[:, 2], [1, 1])


class TestTriangle:
    """Tests for Triangle."""

    def test_area_normal_perimeter(self, flat_triangle):
        assert flat_triangle.area() == pytest.approx(2.0)
        np.testing.assert_allclose(flat_triangle.normal(), [0, 0, 1])
        assert flat_triangle.perimeter() == pytest.approx(4 + 2 * np.sqrt(2))

    def test_barycentric_of_centroid(self, corner_triangle):
        u, v, w = corner_triangle.barycentric(corner_triangle.centroid())
        assert u == pytest.approx(1 / 3)
        assert v == pytest.approx(1 / 3)
        assert w == pytest.approx(1 / 3)

    def test_inside(self, flat_triangle):
        assert flat_triangle.is_inside([0.5, 0.5, 0])
        assert flat_triangle.is_inside([1, 1, 0])
        assert not flat_triangle.is_inside([1.5, 1.5, 0])
        assert not flat_triangle.is_inside([0.5, 0.5, 0.1])

    def test_collinear_vertices_are_degenerate(self):
        assert Triangle([0, 0, 0], [1, 0, 0], [2, 0, 0]).is_degenerate()

    def test_edge_and_swap(self, flat_triangle):
        edge = flat_triangle.edge(1, 2)
        np.testing.assert_allclose(edge.vertices, [[2, 0, 0], [0, 2, 0]])
        flat_triangle.swap(1, 2)
        np.testing.assert_allclose(flat_triangle.normal(), [0, 0, -1])

    def test_bounding_box(self, corner_triangle):
        box = corner_triangle.bounding_box()
        np.testing.assert_allclose(box.min, [0, 0, 0])
        np.testing.assert_allclose(box.max, [1, 1, 1])


class TestCircle:
    """Tests for Circle."""

    def test_area_perimeter(self, unit_disk):
        assert unit_disk.area() == pytest.approx(np.pi)
        assert unit_disk.perimeter() == pytest.approx(2 * np.pi)

    def test_inside_disk(self, unit_disk):
        assert unit_disk.is_inside([0, 0, 0])
        assert unit_disk.is_inside([1, 0, 0])
        assert not unit_disk.is_inside([1.1, 0, 0])
        assert not unit_disk.is_inside([0, 0, 0.5])

    def test_degenerate(self):
        assert Circle([0, 0, 0], [0, 0, 1], 0.0).is_degenerate()
        assert Circle([0, 0, 0], [0, 0, 0], 1.0).is_degenerate()

    def test_bounding_box(self, unit_disk):
        box = unit_disk.bounding_box()
        np.testing.assert_allclose(box.min, [-1, -1, 0])
        np.testing.assert_allclose(box.max, [1, 1, 0])

    def test_laying_plane(self, unit_disk):
        plane = unit_disk.laying_plane()
        assert plane.is_plane()
        assert plane.is_inside([3, 3, 0])


class TestNoneEntity:
    """Tests for the empty result."""

    def test_always_degenerate(self):
        assert NoneEntity().is_degenerate()

    def test_equality(self):
        assert NoneEntity() == NoneEntity()
        assert NoneEntity().is_approx(NoneEntity())
        assert not NoneEntity().is_approx(Point(0, 0, 0))
