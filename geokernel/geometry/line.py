import numpy as np
from geokernel.config import EPSILON
from geokernel.transformations import apply_point, apply_vector
from .geometry import EntityBase, EntityType, as_vector, nan_vector, norm, normalized, is_approx, line_distance


class Line(EntityBase):
    """
    Represents an infinite line in 3D space.

    A line is defined by:
    - origin: a point on the line
    - direction: a non-zero vector along the line (not normalized)
    """

    entity_type = EntityType.LINE

    def __init__(self, origin=None, direction=None):
        self.origin = nan_vector() if origin is None else as_vector(origin)
        self.direction = nan_vector() if direction is None else as_vector(direction)

    def set(self, other:'EntityBase')->None:
        self._check_same_kind(other)
        self.origin = other.origin.copy()
        self.direction = other.direction.copy()

    def to_point(self, t:float)->np.ndarray:
        """
        point at parameter t along the line
        """
        return self.origin + t * self.direction

    def to_unit_vector(self)->np.ndarray:
        return normalized(self.direction)

    def reverse(self)->None:
        self.direction = -self.direction

    def normalize(self)->None:
        self.direction = normalized(self.direction)

    def distance(self, point)->float:
        return line_distance(as_vector(point), self.origin, self.direction)

    def is_inside(self, point, tolerance:float=EPSILON)->bool:
        """
        true if the point lies on the line
        """
        return self.distance(point) <= tolerance

    def translate(self, vector)->None:
        self.origin = self.origin + as_vector(vector)

    def transform(self, affine)->None:
        self.origin = apply_point(affine, self.origin)
        self.direction = apply_vector(affine, self.direction)

    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        return not norm(self.direction) > tolerance or not bool(np.all(np.isfinite(self.origin)))

    def is_approx(self, other:'EntityBase', tolerance:float=EPSILON)->bool:
        if other.entity_type != self.entity_type:
            return False
        return is_approx(self.origin, other.origin, tolerance) and is_approx(self.direction, other.direction, tolerance)

    def copy(self)->'Line':
        return type(self)(self.origin, self.direction)

    def __repr__(self):
        return f"{type(self).__name__}(origin={self._format(self.origin)},direction={self._format(self.direction)})"
