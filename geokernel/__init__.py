"""
geokernel: intersections between 3D geometric primitives.
"""

from .config import EPSILON
from .errors import GeometryError, UnhandledIntersectionError, DegenerateEntityError, InconsistentGeometryError
from .geometry import (EntityBase, EntityType, NoneEntity, Point, Line, Ray, Plane, Segment,
                       Triangle, Circle, Aabb, create_entity, from_buffer, to_buffer)
from .classification import is_collinear, is_coplanar
from .dispatch import intersect
from .survey import IntersectionSurvey, IntersectionPair

__all__ = [
    'EPSILON',
    'GeometryError',
    'UnhandledIntersectionError',
    'DegenerateEntityError',
    'InconsistentGeometryError',
    'EntityBase',
    'EntityType',
    'NoneEntity',
    'Point',
    'Line',
    'Ray',
    'Plane',
    'Segment',
    'Triangle',
    'Circle',
    'Aabb',
    'create_entity',
    'from_buffer',
    'to_buffer',
    'is_collinear',
    'is_coplanar',
    'intersect',
    'IntersectionSurvey',
    'IntersectionPair',
]
