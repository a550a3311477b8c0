import numpy as np
from typing import Tuple, TYPE_CHECKING
from geokernel.config import EPSILON
from geokernel.transformations import apply_point
from .geometry import EntityBase, EntityType, as_vector, nan_vector, norm, normalized, is_approx
from .point import Point
from .plane import Plane
from .segment import Segment

if TYPE_CHECKING:
    from .aabb import Aabb


class Triangle(EntityBase):
    """
    Triangle in 3D space defined by three arbitrary vertices.

    The face normal follows the right-hand rule over vertex(0), vertex(1),
    vertex(2).
    """

    entity_type = EntityType.TRIANGLE

    def __init__(self, vertex0=None, vertex1=None, vertex2=None):
        self.vertices = np.vstack([
            nan_vector() if v is None else as_vector(v) for v in (vertex0, vertex1, vertex2)
        ])

    def vertex(self, i:int)->Point:
        return Point(self.vertices[i])

    def set_vertex(self, i:int, value)->None:
        self.vertices[i] = as_vector(value)

    def set(self, other:'EntityBase')->None:
        self._check_same_kind(other)
        self.vertices = other.vertices.copy()

    def edge(self, i:int, j:int)->Segment:
        """
        segment from vertex i to vertex j
        """
        return Segment(self.vertices[i], self.vertices[j])

    def centroid(self)->Point:
        return Point(self.vertices.mean(axis=0))

    def _cross(self)->np.ndarray:
        v0, v1, v2 = self.vertices
        return np.cross(v1 - v0, v2 - v0)

    def normal(self)->np.ndarray:
        return normalized(self._cross())

    def area(self)->float:
        return 0.5 * norm(self._cross())

    def perimeter(self)->float:
        v0, v1, v2 = self.vertices
        return norm(v1 - v0) + norm(v2 - v1) + norm(v0 - v2)

    def swap(self, i:int, j:int)->None:
        self.vertices[[i, j]] = self.vertices[[j, i]]

    def barycentric(self, point)->Tuple[float, float, float]:
        """
        barycentric coordinates (u, v, w) of the projection of `point` on the
        triangle plane, with point = u*v0 + v*v1 + w*v2
        """
        v0, v1, v2 = self.vertices
        e0 = v1 - v0
        e1 = v2 - v0
        e2 = as_vector(point) - v0
        d00 = np.dot(e0, e0)
        d01 = np.dot(e0, e1)
        d11 = np.dot(e1, e1)
        d20 = np.dot(e2, e0)
        d21 = np.dot(e2, e1)
        denom = d00 * d11 - d01 * d01
        v = (d11 * d20 - d01 * d21) / denom
        w = (d00 * d21 - d01 * d20) / denom
        return float(1.0 - v - w), float(v), float(w)

    def laying_plane(self)->Plane:
        return Plane(self.vertices[0], self._cross())

    def is_inside(self, point, tolerance:float=EPSILON)->bool:
        """
        true if the point lies on the triangle face, boundary included
        """
        point = as_vector(point)
        if not self.laying_plane().is_inside(point, tolerance):
            return False
        u, v, w = self.barycentric(point)
        return u >= -tolerance and v >= -tolerance and w >= -tolerance

    def translate(self, vector)->None:
        self.vertices = self.vertices + as_vector(vector)

    def transform(self, affine)->None:
        self.vertices = np.vstack([apply_point(affine, v) for v in self.vertices])

    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        return not self.area() > tolerance

    def is_approx(self, other:'EntityBase', tolerance:float=EPSILON)->bool:
        if not other.is_triangle():
            return False
        return is_approx(self.vertices, other.vertices, tolerance)

    def copy(self)->'Triangle':
        return type(self)(*self.vertices)

    def bounding_box(self)->'Aabb':
        from .aabb import Aabb
        return Aabb(self.vertices.min(axis=0), self.vertices.max(axis=0))

    def __repr__(self):
        vstr = ','.join([self._format(v) for v in self.vertices])
        return f"Triangle({vstr})"
