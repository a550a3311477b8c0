"""
pairwise intersection routines.

every routine follows the same contract: f(a, b, out, tolerance) -> bool.
on success the result is written into `out` (an entity of the kind the name
ends with) and True is returned; on failure False is returned and `out` is
left in an unspecified state. arguments are taken in the order the name
gives, the dispatcher takes care of swapping.
"""

import numpy as np
from typing import Optional
from geokernel.config import EPSILON
from geokernel.errors import InconsistentGeometryError
from geokernel.geometry import (EntityBase, Point, Line, Ray, Plane, Segment,
                                Triangle, Circle, Aabb)
from geokernel.geometry.geometry import norm, normalized
from geokernel.classification import is_collinear, is_coplanar


def _support(entity:EntityBase):
    """
    origin and direction of the line carrying a linear entity
    """
    if entity.is_segment():
        return entity.vertices[0], entity.to_vector()
    return entity.origin, entity.direction


def _closest_points(origin0, direction0, origin1, direction1, tolerance:float)->Optional[np.ndarray]:
    """
    meeting point of two lines, None when they are parallel or skew
    """
    u0 = normalized(direction0)
    u1 = normalized(direction1)
    cross = np.cross(u0, u1)
    if np.dot(cross, cross) < tolerance:
        return None
    w = origin0 - origin1
    b = np.dot(u0, u1)
    d = np.dot(u0, w)
    e = np.dot(u1, w)
    den = 1.0 - b * b
    t0 = (b * e - d) / den
    t1 = (e - b * d) / den
    p0 = origin0 + t0 * u0
    p1 = origin1 + t1 * u1
    if norm(p0 - p1) > tolerance:
        return None
    return 0.5 * (p0 + p1)


def _plane_hit(plane:Plane, origin, direction, tolerance:float)->Optional[np.ndarray]:
    """
    point where the line origin + t*direction crosses the plane
    """
    unit = normalized(direction)
    det = np.dot(unit, plane.normal)
    if abs(det) <= tolerance:
        return None
    t = np.dot(plane.origin - origin, plane.normal) / det
    return origin + t * unit


def _moller_trumbore(origin, direction, triangle:Triangle, tolerance:float)->Optional[np.ndarray]:
    v0, v1, v2 = triangle.vertices
    unit = normalized(direction)
    edge1 = v1 - v0
    edge2 = v2 - v0
    h = np.cross(unit, edge2)
    det = np.dot(edge1, h)
    if abs(det) < tolerance:
        return None
    f = 1.0 / det
    s = origin - v0
    u = f * np.dot(s, h)
    if u < -tolerance or u > 1.0 + tolerance:
        return None
    q = np.cross(s, edge1)
    v = f * np.dot(unit, q)
    if v < -tolerance or u + v > 1.0 + tolerance:
        return None
    t = f * np.dot(edge2, q)
    return origin + t * unit


# ---------------------------------------------------------------------------
# collinear


def line_line_to_line(line0:Line, line1:Line, out:Line, tolerance:float=EPSILON)->bool:
    if not is_collinear(line0, line1, tolerance):
        return False
    out.set(line0)
    return True


def line_ray_to_ray(line:Line, ray:Ray, out:Ray, tolerance:float=EPSILON)->bool:
    if not is_collinear(line, ray, tolerance):
        return False
    out.set(ray)
    return True


def line_segment_to_segment(line:Line, segment:Segment, out:Segment, tolerance:float=EPSILON)->bool:
    if not is_collinear(line, segment, tolerance):
        return False
    out.set(segment)
    return True


def ray_ray_to_ray(ray0:Ray, ray1:Ray, out:Ray, tolerance:float=EPSILON)->bool:
    """
    same-direction collinear rays overlap on the ray whose origin is the
    further one along the common direction
    """
    if not is_collinear(ray0, ray1, tolerance) or np.dot(ray0.direction, ray1.direction) <= 0:
        return False
    if ray0.is_inside(ray1.origin, tolerance):
        out.set(ray1)
    elif ray1.is_inside(ray0.origin, tolerance):
        out.set(ray0)
    else:
        return False
    return True


def ray_ray_to_segment(ray0:Ray, ray1:Ray, out:Segment, tolerance:float=EPSILON)->bool:
    """
    opposite collinear rays facing each other overlap between their origins
    """
    if not is_collinear(ray0, ray1, tolerance) or np.dot(ray0.direction, ray1.direction) >= 0:
        return False
    if not (ray0.is_inside(ray1.origin, tolerance) and ray1.is_inside(ray0.origin, tolerance)):
        return False
    out.set(Segment(ray0.origin, ray1.origin))
    return True


def ray_segment_to_segment(ray:Ray, segment:Segment, out:Segment, tolerance:float=EPSILON)->bool:
    if not is_collinear(ray, segment, tolerance):
        return False
    inside0 = ray.is_inside(segment.vertices[0], tolerance)
    inside1 = ray.is_inside(segment.vertices[1], tolerance)
    if inside0 and inside1:
        out.set(segment)
    elif inside0:
        out.set(Segment(ray.origin, segment.vertices[0]))
    elif inside1:
        out.set(Segment(ray.origin, segment.vertices[1]))
    else:
        return False
    return True


def segment_segment_to_segment(segment0:Segment, segment1:Segment, out:Segment, tolerance:float=EPSILON)->bool:
    """
    overlap of two collinear segments, resolved from which endpoints lie in
    the other segment
    """
    if not is_collinear(segment0, segment1, tolerance):
        return False
    s0p0, s0p1 = segment0.vertices
    s1p0, s1p1 = segment1.vertices
    flags = (
        segment1.is_inside(s0p0, tolerance),
        segment1.is_inside(s0p1, tolerance),
        segment0.is_inside(s1p0, tolerance),
        segment0.is_inside(s1p1, tolerance),
    )
    overlaps = {
        # coincident, or an endpoint shared
        (True, True, True, True): (s0p0, s0p1),
        (False, True, True, True): (s1p0, s1p1),
        (True, False, True, True): (s1p0, s1p1),
        (True, True, False, True): (s0p0, s0p1),
        (True, True, True, False): (s0p0, s0p1),
        # partial overlap
        (False, True, False, True): (s0p1, s1p1),
        (False, True, True, False): (s0p1, s1p0),
        (True, False, False, True): (s0p0, s1p1),
        (True, False, True, False): (s0p0, s1p0),
        # nested
        (True, True, False, False): (s0p0, s0p1),
        (False, False, True, True): (s1p0, s1p1),
        # touching at a single endpoint
        (True, False, False, False): (s0p0, s0p0),
        (False, True, False, False): (s0p1, s0p1),
        (False, False, True, False): (s1p0, s1p0),
        (False, False, False, True): (s1p1, s1p1),
    }
    if flags not in overlaps:
        return False
    out.set(Segment(*overlaps[flags]))
    return True


# ---------------------------------------------------------------------------
# point results


def _linear_linear_to_point(entity0:EntityBase, entity1:EntityBase, out:Point, tolerance:float)->bool:
    origin0, direction0 = _support(entity0)
    origin1, direction1 = _support(entity1)
    point = _closest_points(origin0, direction0, origin1, direction1, tolerance)
    if point is None:
        return False
    if not (entity0.is_inside(point, tolerance) and entity1.is_inside(point, tolerance)):
        return False
    out.set(point)
    return True


def line_line_to_point(line0:Line, line1:Line, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_linear_to_point(line0, line1, out, tolerance)


def ray_ray_to_point(ray0:Ray, ray1:Ray, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_linear_to_point(ray0, ray1, out, tolerance)


def line_ray_to_point(line:Line, ray:Ray, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_linear_to_point(line, ray, out, tolerance)


def line_segment_to_point(line:Line, segment:Segment, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_linear_to_point(line, segment, out, tolerance)


def ray_segment_to_point(ray:Ray, segment:Segment, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_linear_to_point(ray, segment, out, tolerance)


def segment_segment_to_point(segment0:Segment, segment1:Segment, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_linear_to_point(segment0, segment1, out, tolerance)


def _linear_plane_to_point(entity:EntityBase, plane:Plane, out:Point, tolerance:float)->bool:
    origin, direction = _support(entity)
    point = _plane_hit(plane, origin, direction, tolerance)
    if point is None or not entity.is_inside(point, tolerance):
        return False
    out.set(point)
    return True


def line_plane_to_point(line:Line, plane:Plane, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_plane_to_point(line, plane, out, tolerance)


def ray_plane_to_point(ray:Ray, plane:Plane, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_plane_to_point(ray, plane, out, tolerance)


def plane_segment_to_point(plane:Plane, segment:Segment, out:Point, tolerance:float=EPSILON)->bool:
    """
    crossing found from the signed distances of the two vertices
    """
    d0 = plane.signed_distance(segment.vertices[0])
    d1 = plane.signed_distance(segment.vertices[1])
    if abs(d0) <= tolerance:
        out.set(segment.vertices[0])
    elif abs(d1) <= tolerance:
        out.set(segment.vertices[1])
    elif d0 * d1 < 0:
        t = d0 / (d0 - d1)
        out.set(segment.to_point(t))
    else:
        return False
    return True


def _linear_triangle_to_point(entity:EntityBase, triangle:Triangle, out:Point, tolerance:float)->bool:
    origin, direction = _support(entity)
    point = _moller_trumbore(origin, direction, triangle, tolerance)
    if point is None or not entity.is_inside(point, tolerance):
        return False
    out.set(point)
    return True


def line_triangle_to_point(line:Line, triangle:Triangle, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_triangle_to_point(line, triangle, out, tolerance)


def ray_triangle_to_point(ray:Ray, triangle:Triangle, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_triangle_to_point(ray, triangle, out, tolerance)


def segment_triangle_to_point(segment:Segment, triangle:Triangle, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_triangle_to_point(segment, triangle, out, tolerance)


def _linear_circle_to_point(entity:EntityBase, circle:Circle, out:Point, tolerance:float)->bool:
    origin, direction = _support(entity)
    point = _plane_hit(circle.laying_plane(), origin, direction, tolerance)
    if point is None:
        return False
    if norm(point - circle.center) > circle.radius + tolerance or not entity.is_inside(point, tolerance):
        return False
    out.set(point)
    return True


def line_circle_to_point(line:Line, circle:Circle, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_circle_to_point(line, circle, out, tolerance)


def ray_circle_to_point(ray:Ray, circle:Circle, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_circle_to_point(ray, circle, out, tolerance)


def segment_circle_to_point(segment:Segment, circle:Circle, out:Point, tolerance:float=EPSILON)->bool:
    return _linear_circle_to_point(segment, circle, out, tolerance)


def plane_plane_plane_to_point(plane0:Plane, plane1:Plane, plane2:Plane, out:Point, tolerance:float=EPSILON)->bool:
    """
    Cramer's rule on the matrix of the three normals
    """
    n0, n1, n2 = plane0.normal, plane1.normal, plane2.normal
    det = np.dot(n0, np.cross(n1, n2))
    if abs(det) <= tolerance:
        return False
    h0 = np.dot(n0, plane0.origin)
    h1 = np.dot(n1, plane1.origin)
    h2 = np.dot(n2, plane2.origin)
    out.set((h0 * np.cross(n1, n2) + h1 * np.cross(n2, n0) + h2 * np.cross(n0, n1)) / det)
    return True


def point_entity_to_point(point:Point, entity:EntityBase, out:Point, tolerance:float=EPSILON)->bool:
    """
    a point meets any entity that contains it
    """
    if not entity.is_inside(point, tolerance):
        return False
    out.set(point)
    return True


# ---------------------------------------------------------------------------
# coplanar


def plane_plane_to_plane(plane0:Plane, plane1:Plane, out:Plane, tolerance:float=EPSILON)->bool:
    if not is_coplanar(plane0, plane1, tolerance):
        return False
    out.set(plane0)
    return True


def line_plane_to_line(line:Line, plane:Plane, out:Line, tolerance:float=EPSILON)->bool:
    if not is_coplanar(line, plane, tolerance):
        return False
    out.set(line)
    return True


def ray_plane_to_ray(ray:Ray, plane:Plane, out:Ray, tolerance:float=EPSILON)->bool:
    if not is_coplanar(ray, plane, tolerance):
        return False
    out.set(ray)
    return True


def plane_segment_to_segment(plane:Plane, segment:Segment, out:Segment, tolerance:float=EPSILON)->bool:
    if not is_coplanar(plane, segment, tolerance):
        return False
    out.set(segment)
    return True


def plane_triangle_to_triangle(plane:Plane, triangle:Triangle, out:Triangle, tolerance:float=EPSILON)->bool:
    if not is_coplanar(plane, triangle, tolerance):
        return False
    out.set(triangle)
    return True


def plane_circle_to_circle(plane:Plane, circle:Circle, out:Circle, tolerance:float=EPSILON)->bool:
    if not is_coplanar(plane, circle, tolerance):
        return False
    out.set(circle)
    return True


def line_triangle_to_segment(line:Line, triangle:Triangle, out:Segment, tolerance:float=EPSILON)->bool:
    """
    clip a line lying in the triangle plane against the three edges
    """
    hits = []
    for i, j in ((0, 1), (1, 2), (2, 0)):
        point = Point()
        found = line_segment_to_point(line, triangle.edge(i, j), point, tolerance)
        hits.append(point.origin if found else None)
    p0, p1, p2 = hits

    if p0 is not None and p1 is not None and p2 is None:
        out.set(Segment(p0, p1))
    elif p0 is None and p1 is not None and p2 is not None:
        out.set(Segment(p1, p2))
    elif p0 is not None and p1 is None and p2 is not None:
        out.set(Segment(p2, p0))
    elif p0 is not None and p1 is not None and p2 is not None:
        # a third edge hit only happens with the line passing by a vertex,
        # the two hits near that vertex may sit up to a few tolerances apart
        if min(line.distance(v) for v in triangle.vertices) > 2 * tolerance:
            raise InconsistentGeometryError(
                f"line crosses all three triangle edges at distinct points {p0}, {p1}, {p2}")
        chord = max(((p0, p1), (p1, p2), (p2, p0)), key=lambda pair: norm(pair[0] - pair[1]))
        out.set(Segment(*chord))
    else:
        return False
    return True


def line_circle_to_segment(line:Line, circle:Circle, out:Segment, tolerance:float=EPSILON)->bool:
    """
    chord cut by a line in the circle plane, from |t*D + P - C|^2 = r^2
    """
    origin, direction = _support(line)
    diff = origin - circle.center
    a2 = np.dot(direction, direction)
    a1 = np.dot(diff, direction)
    a0 = np.dot(diff, diff) - circle.radius * circle.radius

    discriminant = a1 * a1 - a0 * a2
    if discriminant <= -tolerance:
        return False
    inv = 1.0 / a2
    if abs(discriminant) < tolerance:
        # tangent
        touch = origin - (a1 * inv) * direction
        out.set(Segment(touch, touch))
        return True
    root = np.sqrt(discriminant)
    out.set(Segment(origin - ((a1 + root) * inv) * direction,
                    origin - ((a1 - root) * inv) * direction))
    return True


def ray_triangle_to_segment(ray:Ray, triangle:Triangle, out:Segment, tolerance:float=EPSILON)->bool:
    chord = Segment()
    if not line_triangle_to_segment(ray.to_line(), triangle, chord, tolerance):
        return False
    return ray_segment_to_segment(ray, chord, out, tolerance)


def ray_circle_to_segment(ray:Ray, circle:Circle, out:Segment, tolerance:float=EPSILON)->bool:
    chord = Segment()
    if not line_circle_to_segment(ray.to_line(), circle, chord, tolerance):
        return False
    return ray_segment_to_segment(ray, chord, out, tolerance)


def segment_triangle_to_segment(segment:Segment, triangle:Triangle, out:Segment, tolerance:float=EPSILON)->bool:
    if segment.is_degenerate(tolerance):
        if not triangle.is_inside(segment.vertices[0], tolerance):
            return False
        out.set(segment)
        return True
    chord = Segment()
    if not line_triangle_to_segment(segment.to_line(), triangle, chord, tolerance):
        return False
    return segment_segment_to_segment(segment, chord, out, tolerance)


def segment_circle_to_segment(segment:Segment, circle:Circle, out:Segment, tolerance:float=EPSILON)->bool:
    if segment.is_degenerate(tolerance):
        if not circle.is_inside(segment.vertices[0], tolerance):
            return False
        out.set(segment)
        return True
    chord = Segment()
    if not line_circle_to_segment(segment.to_line(), circle, chord, tolerance):
        return False
    return segment_segment_to_segment(segment, chord, out, tolerance)


def triangle_triangle_to_triangle(triangle0:Triangle, triangle1:Triangle, out:Triangle, tolerance:float=EPSILON)->bool:
    """
    only the self intersection is defined: both triangles share their
    vertices, in any order
    """
    same = all(min(norm(v - w) for w in triangle1.vertices) <= tolerance for v in triangle0.vertices) and \
        all(min(norm(v - w) for w in triangle0.vertices) <= tolerance for v in triangle1.vertices)
    if not same:
        return False
    out.set(triangle0)
    return True


def circle_circle_to_circle(circle0:Circle, circle1:Circle, out:Circle, tolerance:float=EPSILON)->bool:
    """
    only the self intersection is defined, normals may be opposite
    """
    same = norm(circle0.center - circle1.center) <= tolerance and \
        abs(circle0.radius - circle1.radius) <= tolerance and \
        norm(np.cross(circle0.normal, circle1.normal)) <= tolerance
    if not same:
        return False
    out.set(circle0)
    return True


# ---------------------------------------------------------------------------
# general position


def plane_plane_to_line(plane0:Plane, plane1:Plane, out:Line, tolerance:float=EPSILON)->bool:
    n0, n1 = plane0.normal, plane1.normal
    direction = np.cross(n0, n1)
    det = np.dot(direction, direction)
    if det <= tolerance:
        return False
    h0 = np.dot(n0, plane0.origin)
    h1 = np.dot(n1, plane1.origin)
    origin = (h0 * np.cross(n1, direction) + h1 * np.cross(direction, n0)) / det
    out.set(Line(origin, direction))
    return True


def plane_triangle_to_segment(plane:Plane, triangle:Triangle, out:Segment, tolerance:float=EPSILON)->bool:
    line = Line()
    if not plane_plane_to_line(plane, triangle.laying_plane(), line, tolerance):
        return False
    return line_triangle_to_segment(line, triangle, out, tolerance)


def plane_circle_to_segment(plane:Plane, circle:Circle, out:Segment, tolerance:float=EPSILON)->bool:
    line = Line()
    if not plane_plane_to_line(plane, circle.laying_plane(), line, tolerance):
        return False
    return line_circle_to_segment(line, circle, out, tolerance)


def triangle_triangle_to_segment(triangle0:Triangle, triangle1:Triangle, out:Segment, tolerance:float=EPSILON)->bool:
    """
    the supporting planes meet on a line; the result is the overlap of the
    two chords that line cuts through the triangles
    """
    line = Line()
    if not plane_plane_to_line(triangle0.laying_plane(), triangle1.laying_plane(), line, tolerance):
        return False
    chord0, chord1 = Segment(), Segment()
    if not line_triangle_to_segment(line, triangle0, chord0, tolerance):
        return False
    if not line_triangle_to_segment(line, triangle1, chord1, tolerance):
        return False
    return segment_segment_to_segment(chord0, chord1, out, tolerance)


def circle_circle_to_segment(circle0:Circle, circle1:Circle, out:Segment, tolerance:float=EPSILON)->bool:
    line = Line()
    if not plane_plane_to_line(circle0.laying_plane(), circle1.laying_plane(), line, tolerance):
        return False
    chord0, chord1 = Segment(), Segment()
    if not line_circle_to_segment(line, circle0, chord0, tolerance):
        return False
    if not line_circle_to_segment(line, circle1, chord1, tolerance):
        return False
    return segment_segment_to_segment(chord0, chord1, out, tolerance)


def triangle_circle_to_segment(triangle:Triangle, circle:Circle, out:Segment, tolerance:float=EPSILON)->bool:
    """
    the circle plane cuts a chord through the triangle, then the chord is
    clipped by the disk
    """
    chord = Segment()
    if not plane_triangle_to_segment(circle.laying_plane(), triangle, chord, tolerance):
        return False
    return segment_circle_to_segment(chord, circle, out, tolerance)


# ---------------------------------------------------------------------------
# boxes


def aabb_aabb_to_aabb(box0:Aabb, box1:Aabb, out:Aabb, tolerance:float=EPSILON)->bool:
    """
    overlap box of two intersecting boxes
    """
    if not box0.intersects(box1):
        return False
    out.min = np.maximum(box0.min, box1.min)
    out.max = np.minimum(box0.max, box1.max)
    return True
