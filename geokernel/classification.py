import numpy as np
from typing import List, Optional
from geokernel.config import EPSILON
from geokernel.geometry import EntityBase, Plane
from geokernel.geometry.geometry import norm, normalized, is_parallel, line_distance


def _linear_points(entity:EntityBase)->List[np.ndarray]:
    """
    two points spanning the supporting line; segments use their vertices
    so a zero-length segment still reports where it is
    """
    if entity.is_segment():
        return [entity.vertices[0], entity.vertices[1]]
    if entity.is_point():
        return [entity.origin]
    return [entity.origin, entity.origin + entity.to_unit_vector()]


def _linear_direction(entity:EntityBase)->np.ndarray:
    if entity.is_segment():
        return entity.to_vector()
    return entity.direction


def supporting_plane(entity:EntityBase)->Optional[Plane]:
    """
    plane a planar primitive lies in, None for anything else
    """
    if entity.is_plane():
        return entity
    if entity.is_triangle() or entity.is_circle():
        return entity.laying_plane()
    return None


def _on_line(points, origin, direction, tolerance)->bool:
    return all(line_distance(p, origin, direction) <= tolerance for p in points)


def is_collinear(entity0:EntityBase, entity1:EntityBase, tolerance:float=EPSILON)->bool:
    """
    true iff both entities lie on a common line. only points, lines, rays and
    segments can be collinear
    """
    kinds_ok = lambda e: e.is_point() or e.is_linear()
    if not (kinds_ok(entity0) and kinds_ok(entity1)):
        return False
    if entity0.is_point() and entity1.is_point():
        return True

    # test the points of one entity against the line of the other, picking as
    # reference an entity with a usable direction
    for ref, other in ((entity0, entity1), (entity1, entity0)):
        if ref.is_point():
            continue
        direction = _linear_direction(ref)
        if norm(direction) > tolerance:
            origin = ref.vertices[0] if ref.is_segment() else ref.origin
            return _on_line(_linear_points(other), origin, direction, tolerance)

    # both are zero-length segments (or a point and one)
    points = _linear_points(entity0) + _linear_points(entity1)
    return all(norm(p - points[0]) <= tolerance for p in points)


def is_coplanar(entity0:EntityBase, entity1:EntityBase, tolerance:float=EPSILON)->bool:
    """
    true iff both entities lie in a common plane
    """
    known = lambda e: e.is_point() or e.is_linear() or e.is_planar()
    if not (known(entity0) and known(entity1)):
        return False
    if is_collinear(entity0, entity1, tolerance):
        return True

    plane0 = supporting_plane(entity0)
    plane1 = supporting_plane(entity1)

    if plane0 is not None and plane1 is not None:
        return is_parallel(plane0.normal, plane1.normal, tolerance) and \
            plane0.distance(plane1.origin) <= tolerance

    if plane0 is None and plane1 is None:
        # points and linear primitives
        if entity0.is_point() or entity1.is_point():
            return True
        d0 = normalized(_linear_direction(entity0))
        d1 = normalized(_linear_direction(entity1))
        cross = np.cross(d0, d1)
        if norm(cross) <= tolerance:
            # parallel supports always share a plane
            return True
        delta = _linear_points(entity1)[0] - _linear_points(entity0)[0]
        return abs(np.dot(normalized(cross), delta)) <= tolerance

    plane, other = (plane0, entity1) if plane0 is not None else (plane1, entity0)
    return all(plane.distance(p) <= tolerance for p in _linear_points(other))
