"""Unit tests for the polymorphic intersect() dispatcher.

Tests cover:
- The reference scenarios (parallel lines, collinear overlap, ray/plane,
  line/circle chord, ray/triangle, box overlap and merge)
- Argument order symmetry and self intersection
- Degenerate and empty inputs
- Unhandled combinations, logged or raised
"""

import logging

import numpy as np
import pytest

from geokernel import (intersect, config, NoneEntity, Point, Line, Ray, Plane, Segment,
                       Triangle, Circle, Aabb, UnhandledIntersectionError,
                       DegenerateEntityError, InconsistentGeometryError)
from geokernel import dispatch
from geokernel import intersection as isx
from conftest import assert_same_vertices


class TestScenarios:
    """Reference configurations with known results."""

    def test_parallel_lines(self):
        result = intersect(Line([0, 0, 0], [1, 0, 0]), Line([0, 1, 0], [1, 0, 0]))
        assert result.is_none()

    def test_collinear_overlap(self):
        result = intersect(Segment([0, 0, 0], [2, 0, 0]), Segment([1, 0, 0], [3, 0, 0]))
        assert result.is_segment()
        assert_same_vertices(result, [[1, 0, 0], [2, 0, 0]])

    def test_ray_plane(self):
        result = intersect(Ray([0, 0, 0], [0, 0, 1]), Plane([0, 0, 5], [0, 0, 1]))
        assert result.is_point()
        np.testing.assert_allclose(result.origin, [0, 0, 5], atol=1e-12)

    def test_line_circle(self, unit_disk):
        result = intersect(Line([-2, 0, 0], [1, 0, 0]), unit_disk)
        assert result.is_segment()
        assert_same_vertices(result, [[-1, 0, 0], [1, 0, 0]])

    def test_ray_triangle(self, corner_triangle):
        result = intersect(Ray([0, 0, 0], [1, 1, 1]), corner_triangle)
        assert result.is_point()
        np.testing.assert_allclose(result.origin, [1 / 3, 1 / 3, 1 / 3], atol=1e-9)

    def test_boxes(self, unit_box):
        other = Aabb([0.5, 0.5, 0.5], [2, 2, 2])
        overlap = intersect(unit_box, other)
        assert overlap.is_approx(Aabb([0.5, 0.5, 0.5], [1, 1, 1]))
        merged = Aabb.from_boxes([unit_box, other])
        assert merged.is_approx(Aabb([0, 0, 0], [2, 2, 2]))

    def test_disjoint_boxes(self, unit_box):
        assert intersect(unit_box, Aabb([3, 3, 3], [4, 4, 4])).is_none()


class TestDispatch:
    """Tests for classification routing and result kinds."""

    def test_plane_plane_line(self, xy_plane):
        result = intersect(xy_plane, Plane([1, 0, 0], [1, 0, 0]))
        assert result.is_line()
        assert result.is_inside([1, 7, 0])

    def test_skew_lines(self, x_axis):
        assert intersect(x_axis, Line([0, 0, 1], [0, 1, 0])).is_none()

    def test_collinear_rays(self):
        same = intersect(Ray([0, 0, 0], [1, 0, 0]), Ray([2, 0, 0], [1, 0, 0]))
        assert same.is_ray()
        np.testing.assert_allclose(same.origin, [2, 0, 0])
        facing = intersect(Ray([0, 0, 0], [1, 0, 0]), Ray([2, 0, 0], [-1, 0, 0]))
        assert facing.is_segment()
        apart = intersect(Ray([0, 0, 0], [-1, 0, 0]), Ray([2, 0, 0], [1, 0, 0]))
        assert apart.is_none()

    def test_line_in_plane(self, x_axis, xy_plane):
        result = intersect(xy_plane, x_axis)
        assert result.is_line()
        assert result.is_approx(x_axis)

    def test_point_queries(self, flat_triangle):
        hit = intersect(Point(0.5, 0.5, 0), flat_triangle)
        assert hit.is_point()
        assert hit.is_approx(Point(0.5, 0.5, 0))
        assert intersect(flat_triangle, Point(0.5, 0.5, 1)).is_none()
        assert intersect(Point(1, 1, 1), Point(1, 1, 1)).is_point()

    def test_results_are_fresh(self, x_axis):
        result = intersect(x_axis, x_axis)
        result.translate([0, 1, 0])
        np.testing.assert_allclose(x_axis.origin, [0, 0, 0])

    def test_inputs_untouched(self, corner_triangle):
        ray = Ray([0, 0, 0], [1, 1, 1])
        intersect(ray, corner_triangle)
        np.testing.assert_allclose(ray.direction, [1, 1, 1])
        np.testing.assert_allclose(corner_triangle.vertices, np.eye(3))

    def test_pair_code(self, x_axis, unit_disk):
        assert dispatch.pair_code(x_axis, unit_disk) == 308
        assert dispatch.pair_code(unit_disk, x_axis) == 803


@pytest.mark.parametrize("a, b", [
    (Line([0, 0, 0], [1, 0, 0]), Line([2, -1, 0], [0, 1, 0])),
    (Ray([0, 0, 0], [0, 0, 1]), Plane([0, 0, 5], [0, 0, 1])),
    (Segment([-1, 0, 0], [1, 0, 0]), Triangle([0, -1, -1], [0, 1, -1], [0, 0, 1])),
    (Line([-2, 0, 0], [1, 0, 0]), Circle([0, 0, 0], [0, 0, 1], 1.0)),
    (Plane([0, 0, 0], [1, 0, 0]), Circle([0, 0, 0], [0, 0, 1], 1.0)),
    (Segment([0, 0, 0], [2, 0, 0]), Segment([1, 0, 0], [3, 0, 0])),
    (Triangle([0, 0, 0], [2, 0, 0], [0, 2, 0]), Triangle([0.5, -1, -1], [0.5, 3, -1], [0.5, 1, 1])),
    (Line([0, 0, 0], [1, 0, 0]), Ray([5, 0, 0], [-1, 0, 0])),
])
def test_symmetry(a, b):
    """intersect(a, b) and intersect(b, a) agree up to orientation."""
    ab = intersect(a, b)
    ba = intersect(b, a)
    assert ab.entity_type == ba.entity_type
    assert not ab.is_none()
    if ab.is_segment():
        assert_same_vertices(ba, ab.vertices)
    else:
        assert ab.is_approx(ba, 1e-9)


def test_self_intersection(primitives):
    """Every non-degenerate primitive intersected with itself returns itself."""
    for entity in primitives:
        result = intersect(entity, entity.copy())
        assert result.entity_type == entity.entity_type
        assert result.is_approx(entity), entity


class TestDegenerateInput:
    """Tests for empty and degenerate inputs."""

    def test_none_input(self, x_axis):
        assert intersect(NoneEntity(), x_axis).is_none()
        assert intersect(x_axis, NoneEntity(), strict=True).is_none()

    def test_degenerate_triangle_logged(self, x_axis, caplog):
        flat = Triangle([0, 0, 0], [1, 0, 0], [2, 0, 0])
        assert flat.is_degenerate()
        with caplog.at_level(logging.WARNING, logger="geokernel.dispatch"):
            result = intersect(x_axis, flat)
        assert result.is_none()
        assert any("Degenerate triangle" in r.message for r in caplog.records)

    def test_degenerate_triangle_strict(self, x_axis):
        flat = Triangle([0, 0, 0], [1, 0, 0], [2, 0, 0])
        with pytest.raises(DegenerateEntityError):
            intersect(x_axis, flat, strict=True)

    def test_nan_point(self, xy_plane):
        assert intersect(Point(), xy_plane).is_none()


class TestUnhandled:
    """Tests for combinations no routine covers."""

    def test_coplanar_triangle_circle_logged(self, flat_triangle, unit_disk, caplog):
        with caplog.at_level(logging.ERROR, logger="geokernel.dispatch"):
            result = intersect(flat_triangle, unit_disk)
        assert result.is_none()
        assert any("triangle and circle (coplanar) not handled" in r.message for r in caplog.records)

    def test_coplanar_triangle_circle_strict(self, flat_triangle, unit_disk):
        with pytest.raises(UnhandledIntersectionError) as info:
            intersect(unit_disk, flat_triangle, strict=True)
        assert info.value.kind_a == "circle"
        assert info.value.kind_b == "triangle"
        assert info.value.branch == "coplanar"

    def test_overlapping_coplanar_triangles(self, flat_triangle):
        other = Triangle([0.5, 0.5, 0], [3, 0.5, 0], [0.5, 3, 0])
        assert intersect(flat_triangle, other).is_none()
        with pytest.raises(UnhandledIntersectionError):
            intersect(flat_triangle, other, strict=True)

    def test_strict_from_config(self, flat_triangle, unit_disk, monkeypatch):
        monkeypatch.setattr(config, "STRICT", True)
        with pytest.raises(UnhandledIntersectionError):
            intersect(flat_triangle, unit_disk)
        assert intersect(flat_triangle, unit_disk, strict=False).is_none()

    def test_box_against_entity_logged(self, unit_box, caplog):
        with caplog.at_level(logging.ERROR, logger="geokernel.dispatch"):
            result = intersect(unit_box, Point(0.5, 0.5, 0.5))
        assert result.is_none()
        assert any("aabb and point (general) not handled" in r.message for r in caplog.records)

    def test_box_against_entity_strict(self, unit_box, xy_plane):
        with pytest.raises(UnhandledIntersectionError) as info:
            intersect(xy_plane, unit_box, strict=True)
        assert (info.value.kind_a, info.value.kind_b) == ("plane", "aabb")

    def test_unhandled_is_not_implemented(self):
        assert issubclass(UnhandledIntersectionError, NotImplementedError)


def test_rays_overlapping_both_ways(monkeypatch):
    """Both collinear ray outcomes succeeding is an internal inconsistency."""
    def always(ray0, ray1, out, tolerance):
        out.set(Segment(ray0.origin, ray1.origin))
        return True

    monkeypatch.setattr(isx, "ray_ray_to_segment", always)
    with pytest.raises(InconsistentGeometryError):
        intersect(Ray([0, 0, 0], [1, 0, 0]), Ray([2, 0, 0], [1, 0, 0]))
