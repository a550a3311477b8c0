import numpy as np
from typing import TYPE_CHECKING
from geokernel.config import EPSILON
from geokernel.transformations import apply_point
from .geometry import EntityBase, EntityType, as_vector, nan_vector, norm, normalized, is_approx
from .point import Point
from .line import Line

if TYPE_CHECKING:
    from .aabb import Aabb


class Segment(EntityBase):
    """
    Bounded piece of a line between two vertices.

    The parametrization is vertex(0) + t*(vertex(1) - vertex(0)), t in [0, 1].
    """

    entity_type = EntityType.SEGMENT

    def __init__(self, vertex0=None, vertex1=None):
        self.vertices = np.vstack((
            nan_vector() if vertex0 is None else as_vector(vertex0),
            nan_vector() if vertex1 is None else as_vector(vertex1),
        ))

    def vertex(self, i:int)->Point:
        return Point(self.vertices[i])

    def set_vertex(self, i:int, value)->None:
        self.vertices[i] = as_vector(value)

    def set(self, other:'EntityBase')->None:
        self._check_same_kind(other)
        self.vertices = other.vertices.copy()

    def to_vector(self)->np.ndarray:
        return self.vertices[1] - self.vertices[0]

    def to_normalized_vector(self)->np.ndarray:
        return normalized(self.to_vector())

    def to_line(self)->Line:
        return Line(self.vertices[0], self.to_normalized_vector())

    def to_point(self, t:float)->np.ndarray:
        return self.vertices[0] + t * self.to_vector()

    def length(self)->float:
        return norm(self.to_vector())

    def centroid(self)->Point:
        return Point(self.vertices.mean(axis=0))

    def reverse(self)->None:
        self.vertices = self.vertices[::-1].copy()

    def closest_point(self, point)->np.ndarray:
        point = as_vector(point)
        vector = self.to_vector()
        length2 = np.dot(vector, vector)
        if length2 == 0:
            return self.vertices[0].copy()
        t = np.clip(np.dot(point - self.vertices[0], vector) / length2, 0.0, 1.0)
        return self.vertices[0] + t * vector

    def distance(self, point)->float:
        return norm(self.closest_point(point) - as_vector(point))

    def is_inside(self, point, tolerance:float=EPSILON)->bool:
        """
        true if the point lies on the segment, vertices included
        """
        return self.distance(point) <= tolerance

    def translate(self, vector)->None:
        self.vertices = self.vertices + as_vector(vector)

    def transform(self, affine)->None:
        self.vertices = np.vstack([apply_point(affine, v) for v in self.vertices])

    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        return not self.length() > tolerance

    def is_approx(self, other:'EntityBase', tolerance:float=EPSILON)->bool:
        if not other.is_segment():
            return False
        return is_approx(self.vertices, other.vertices, tolerance)

    def copy(self)->'Segment':
        return type(self)(self.vertices[0], self.vertices[1])

    def bounding_box(self)->'Aabb':
        from .aabb import Aabb
        return Aabb(self.vertices.min(axis=0), self.vertices.max(axis=0))

    def __repr__(self):
        return f"Segment({self._format(self.vertices[0])},{self._format(self.vertices[1])})"
