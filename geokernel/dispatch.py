import logging
from typing import Dict, Optional, Tuple, Union

from geokernel import config
from geokernel.config import EPSILON
from geokernel.errors import (UnhandledIntersectionError, DegenerateEntityError,
                              InconsistentGeometryError)
from geokernel.geometry import (EntityBase, EntityType, NoneEntity, Point, Line, Ray,
                                Plane, Segment, Triangle, Circle, Aabb)
from geokernel.classification import is_collinear, is_coplanar
from geokernel import intersection as isx

logger = logging.getLogger(__name__)

COLLINEAR = "collinear"
COPLANAR = "coplanar"
GENERAL = "general"

# code = 100*degree(a) + degree(b) -> (routine, result class, swap arguments)
collinear_routes = {
    303: (isx.line_line_to_line, Line, False),                # line-line -> line
    304: (isx.line_ray_to_ray, Ray, False),                   # line-ray -> ray
    306: (isx.line_segment_to_segment, Segment, False),       # line-segment -> segment
    403: (isx.line_ray_to_ray, Ray, True),
    406: (isx.ray_segment_to_segment, Segment, False),        # ray-segment -> segment
    603: (isx.line_segment_to_segment, Segment, True),
    604: (isx.ray_segment_to_segment, Segment, True),
    606: (isx.segment_segment_to_segment, Segment, False),    # segment-segment -> segment
}

coplanar_routes = {
    303: (isx.line_line_to_point, Point, False),              # line-line -> point
    304: (isx.line_ray_to_point, Point, False),
    305: (isx.line_plane_to_line, Line, False),               # line in plane -> line
    306: (isx.line_segment_to_point, Point, False),
    307: (isx.line_triangle_to_segment, Segment, False),      # line-triangle -> chord
    308: (isx.line_circle_to_segment, Segment, False),        # line-circle -> chord
    403: (isx.line_ray_to_point, Point, True),
    404: (isx.ray_ray_to_point, Point, False),
    405: (isx.ray_plane_to_ray, Ray, False),
    406: (isx.ray_segment_to_point, Point, False),
    407: (isx.ray_triangle_to_segment, Segment, False),
    408: (isx.ray_circle_to_segment, Segment, False),
    503: (isx.line_plane_to_line, Line, True),
    504: (isx.ray_plane_to_ray, Ray, True),
    505: (isx.plane_plane_to_plane, Plane, False),            # coincident planes -> plane
    506: (isx.plane_segment_to_segment, Segment, False),
    507: (isx.plane_triangle_to_triangle, Triangle, False),
    508: (isx.plane_circle_to_circle, Circle, False),
    603: (isx.line_segment_to_point, Point, True),
    604: (isx.ray_segment_to_point, Point, True),
    605: (isx.plane_segment_to_segment, Segment, True),
    606: (isx.segment_segment_to_point, Point, False),
    607: (isx.segment_triangle_to_segment, Segment, False),
    608: (isx.segment_circle_to_segment, Segment, False),
    703: (isx.line_triangle_to_segment, Segment, True),
    704: (isx.ray_triangle_to_segment, Segment, True),
    705: (isx.plane_triangle_to_triangle, Triangle, True),
    706: (isx.segment_triangle_to_segment, Segment, True),
    707: (isx.triangle_triangle_to_triangle, Triangle, False),  # identical triangles only
    803: (isx.line_circle_to_segment, Segment, True),
    804: (isx.ray_circle_to_segment, Segment, True),
    805: (isx.plane_circle_to_circle, Circle, True),
    806: (isx.segment_circle_to_segment, Segment, True),
    808: (isx.circle_circle_to_circle, Circle, False),        # identical circles only
}

general_routes = {
    303: (isx.line_line_to_point, Point, False),
    304: (isx.line_ray_to_point, Point, False),
    305: (isx.line_plane_to_point, Point, False),             # line-plane -> point
    306: (isx.line_segment_to_point, Point, False),
    307: (isx.line_triangle_to_point, Point, False),
    308: (isx.line_circle_to_point, Point, False),
    403: (isx.line_ray_to_point, Point, True),
    404: (isx.ray_ray_to_point, Point, False),
    405: (isx.ray_plane_to_point, Point, False),
    406: (isx.ray_segment_to_point, Point, False),
    407: (isx.ray_triangle_to_point, Point, False),
    408: (isx.ray_circle_to_point, Point, False),
    503: (isx.line_plane_to_point, Point, True),
    504: (isx.ray_plane_to_point, Point, True),
    505: (isx.plane_plane_to_line, Line, False),              # plane-plane -> line
    506: (isx.plane_segment_to_point, Point, False),
    507: (isx.plane_triangle_to_segment, Segment, False),
    508: (isx.plane_circle_to_segment, Segment, False),
    603: (isx.line_segment_to_point, Point, True),
    604: (isx.ray_segment_to_point, Point, True),
    605: (isx.plane_segment_to_point, Point, True),
    606: (isx.segment_segment_to_point, Point, False),
    607: (isx.segment_triangle_to_point, Point, False),
    608: (isx.segment_circle_to_point, Point, False),
    703: (isx.line_triangle_to_point, Point, True),
    704: (isx.ray_triangle_to_point, Point, True),
    705: (isx.plane_triangle_to_segment, Segment, True),
    706: (isx.segment_triangle_to_point, Point, True),
    707: (isx.triangle_triangle_to_segment, Segment, False),  # triangle-triangle -> segment
    708: (isx.triangle_circle_to_segment, Segment, False),
    803: (isx.line_circle_to_point, Point, True),
    804: (isx.ray_circle_to_point, Point, True),
    805: (isx.plane_circle_to_segment, Segment, True),
    806: (isx.segment_circle_to_point, Point, True),
    807: (isx.triangle_circle_to_segment, Segment, True),
    808: (isx.circle_circle_to_segment, Segment, False),      # circle-circle -> segment
}

# a point meets anything that contains it, whatever the classification
for _kind in (EntityType.POINT, EntityType.LINE, EntityType.RAY, EntityType.PLANE,
              EntityType.SEGMENT, EntityType.TRIANGLE, EntityType.CIRCLE):
    for _routes in (collinear_routes, coplanar_routes, general_routes):
        _routes[200 + _kind.value] = (isx.point_entity_to_point, Point, False)
        if _kind != EntityType.POINT:
            _routes[100 * _kind.value + 2] = (isx.point_entity_to_point, Point, True)

routes: Dict[str, Dict[int, Tuple]] = {
    COLLINEAR: collinear_routes,
    COPLANAR: coplanar_routes,
    GENERAL: general_routes,
}

# entries that only cover the identical configuration, anything else is unhandled
_self_only = {(COPLANAR, 707), (COPLANAR, 808)}


def pair_code(entity0:EntityBase, entity1:EntityBase)->int:
    return 100 * entity0.degree + entity1.degree


def classify(entity0:EntityBase, entity1:EntityBase, tolerance:float=EPSILON)->str:
    """
    collinear takes priority over coplanar, which takes priority over general
    """
    if is_collinear(entity0, entity1, tolerance):
        return COLLINEAR
    if is_coplanar(entity0, entity1, tolerance):
        return COPLANAR
    return GENERAL


def _unhandled(entity0:EntityBase, entity1:EntityBase, branch:str, strict:bool)->NoneEntity:
    if strict:
        raise UnhandledIntersectionError(entity0.type_name, entity1.type_name, branch)
    logger.error(f"Intersection between {entity0.type_name} and {entity1.type_name} ({branch}) not handled")
    return NoneEntity()


def _intersect_rays(ray0:Ray, ray1:Ray, tolerance:float)->EntityBase:
    """
    collinear rays overlap on a ray (same direction) or on a segment
    (facing each other), never both
    """
    as_ray = Ray()
    as_segment = Segment()
    hit_ray = isx.ray_ray_to_ray(ray0, ray1, as_ray, tolerance)
    hit_segment = isx.ray_ray_to_segment(ray0, ray1, as_segment, tolerance)
    if hit_ray and hit_segment:
        raise InconsistentGeometryError("collinear rays overlap both as a ray and as a segment")
    if hit_ray:
        return as_ray
    if hit_segment:
        return as_segment
    return NoneEntity()


def intersect(entity0:Union[EntityBase, Aabb], entity1:Union[EntityBase, Aabb],
              strict:Optional[bool]=None, tolerance:float=EPSILON)->Union[EntityBase, Aabb]:
    """
    intersection of two entities as a fresh entity, NoneEntity when empty.

    strict (default from GEOKERNEL_STRICT) turns unhandled combinations and
    degenerate inputs into exceptions instead of a logged NoneEntity.
    """
    if strict is None:
        strict = config.STRICT

    if isinstance(entity0, Aabb) and isinstance(entity1, Aabb):
        box = Aabb()
        if isx.aabb_aabb_to_aabb(entity0, entity1, box, tolerance):
            return box
        return NoneEntity()
    if isinstance(entity0, Aabb) or isinstance(entity1, Aabb):
        # boxes only meet boxes
        return _unhandled(entity0, entity1, GENERAL, strict)

    if entity0.is_none() or entity1.is_none():
        return NoneEntity()

    for entity in (entity0, entity1):
        if entity.is_degenerate(tolerance):
            if strict:
                raise DegenerateEntityError(entity)
            logger.warning(f"Degenerate {entity.type_name} rejected: {entity!r}")
            return NoneEntity()

    code = pair_code(entity0, entity1)
    branch = classify(entity0, entity1, tolerance)
    logger.debug(f"intersect {entity0.type_name}-{entity1.type_name} code={code} branch={branch}")

    if branch == COLLINEAR and code == 404:
        return _intersect_rays(entity0, entity1, tolerance)

    route = routes[branch].get(code)
    if route is None:
        return _unhandled(entity0, entity1, branch, strict)

    routine, result_class, swap = route
    out = result_class()
    args = (entity1, entity0) if swap else (entity0, entity1)
    if routine(*args, out, tolerance):
        return out
    if (branch, code) in _self_only:
        return _unhandled(entity0, entity1, branch, strict)
    return NoneEntity()
