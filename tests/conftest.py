"""Pytest configuration for geokernel tests.

Shared fixtures build the handful of primitives most test modules reuse.
Entities are value objects, so every fixture hands out a fresh instance.
"""

import numpy as np
import pytest

from geokernel import Point, Line, Ray, Plane, Segment, Triangle, Circle, Aabb


@pytest.fixture
def x_axis():
    return Line([0, 0, 0], [1, 0, 0])


@pytest.fixture
def xy_plane():
    return Plane([0, 0, 0], [0, 0, 1])


@pytest.fixture
def unit_disk():
    """Disk of radius 1 centered at the origin, lying in the xy plane."""
    return Circle([0, 0, 0], [0, 0, 1], 1.0)


@pytest.fixture
def corner_triangle():
    """Triangle cutting the three axes at distance 1."""
    return Triangle([1, 0, 0], [0, 1, 0], [0, 0, 1])


@pytest.fixture
def flat_triangle():
    """Right triangle in the xy plane with legs of length 2."""
    return Triangle([0, 0, 0], [2, 0, 0], [0, 2, 0])


@pytest.fixture
def unit_box():
    return Aabb([0, 0, 0], [1, 1, 1])


@pytest.fixture
def primitives():
    """One non-degenerate instance of every dispatchable kind."""
    return [
        Point(1, 2, 3),
        Line([0, 0, 0], [1, 1, 0]),
        Ray([1, 0, 0], [0, 1, 0]),
        Plane([0, 0, 1], [0, 0, 1]),
        Segment([0, 0, 0], [1, 2, 3]),
        Triangle([0, 0, 0], [1, 0, 0], [0, 1, 0]),
        Circle([1, 1, 1], [0, 1, 0], 0.5),
    ]


def assert_same_vertices(segment, expected, atol=1e-9):
    """Compare segment vertices to `expected` ignoring orientation."""
    got = segment.vertices
    expected = np.asarray(expected, dtype=float)
    if np.allclose(got, expected, atol=atol):
        return
    np.testing.assert_allclose(got[::-1], expected, atol=atol)
