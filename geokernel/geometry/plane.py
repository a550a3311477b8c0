import numpy as np
from geokernel.config import EPSILON
from geokernel.transformations import apply_point, apply_normal
from .geometry import EntityBase, EntityType, as_vector, nan_vector, norm, normalized, is_approx


class Plane(EntityBase):
    """
    Represents an infinite plane in 3D space.

    A plane is defined by:
    - origin: a point on the plane
    - normal: the unit normal (normalized on construction)

    The implicit form is normal.x + d = 0 with d = -normal.origin.
    """

    entity_type = EntityType.PLANE

    def __init__(self, origin=None, normal=None):
        self.origin = nan_vector() if origin is None else as_vector(origin)
        self.normal = nan_vector() if normal is None else normalized(as_vector(normal))

    @classmethod
    def from_points(cls, point0, point1, point2)->'Plane':
        """
        plane through three points, normal by the right-hand rule
        """
        p0, p1, p2 = as_vector(point0), as_vector(point1), as_vector(point2)
        return cls(p0, np.cross(p1 - p0, p2 - p0))

    @property
    def d(self)->float:
        return float(-np.dot(self.normal, self.origin))

    def set(self, other:'EntityBase')->None:
        self._check_same_kind(other)
        self.origin = other.origin.copy()
        self.normal = other.normal.copy()

    def signed_distance(self, point)->float:
        """
        positive on the side the normal points to
        """
        return float(np.dot(self.normal, as_vector(point) - self.origin))

    def distance(self, point)->float:
        return abs(self.signed_distance(point))

    def project(self, point)->np.ndarray:
        point = as_vector(point)
        return point - self.signed_distance(point) * self.normal

    def is_inside(self, point, tolerance:float=EPSILON)->bool:
        """
        true if the point lies on the plane
        """
        return self.distance(point) <= tolerance

    def reverse(self)->None:
        self.normal = -self.normal

    def translate(self, vector)->None:
        self.origin = self.origin + as_vector(vector)

    def transform(self, affine)->None:
        self.origin = apply_point(affine, self.origin)
        self.normal = apply_normal(affine, self.normal)

    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        return not norm(self.normal) > tolerance or not bool(np.all(np.isfinite(self.origin)))

    def is_approx(self, other:'EntityBase', tolerance:float=EPSILON)->bool:
        if not other.is_plane():
            return False
        return is_approx(self.origin, other.origin, tolerance) and is_approx(self.normal, other.normal, tolerance)

    def copy(self)->'Plane':
        return type(self)(self.origin, self.normal)

    def __repr__(self):
        return f"Plane(origin={self._format(self.origin)},normal={self._format(self.normal)})"
