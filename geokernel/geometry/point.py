import numpy as np
from typing import TYPE_CHECKING
from geokernel.config import EPSILON
from geokernel.transformations import apply_point
from .geometry import EntityBase, EntityType, as_vector, nan_vector, norm

if TYPE_CHECKING:
    from .aabb import Aabb


class Point(EntityBase):
    """
    A point in 3D space.

    Point() is the not-a-number sentinel; Point(x, y, z), Point([x, y, z]) and
    Point(other_point) copy the given coordinates. The `origin` keyword is
    accepted for keyword construction through the factory.
    """

    entity_type = EntityType.POINT

    def __init__(self, *coords, origin=None):
        if origin is not None:
            coords = (origin,)
        if len(coords) == 0:
            self.origin = nan_vector()
        elif len(coords) == 1:
            self.origin = as_vector(coords[0])
        elif len(coords) == 3:
            self.origin = as_vector(coords)
        else:
            raise ValueError(f"Point expects 0, 1 or 3 arguments, got {len(coords)}")

    @property
    def x(self)->float:
        return float(self.origin[0])

    @x.setter
    def x(self, value:float):
        self.origin[0] = value

    @property
    def y(self)->float:
        return float(self.origin[1])

    @y.setter
    def y(self, value:float):
        self.origin[1] = value

    @property
    def z(self)->float:
        return float(self.origin[2])

    @z.setter
    def z(self, value:float):
        self.origin[2] = value

    def set(self, other)->None:
        """
        accepts another point or raw coordinates
        """
        if isinstance(other, EntityBase):
            self._check_same_kind(other)
        self.origin = as_vector(other)

    def distance(self, other)->float:
        return norm(self.origin - as_vector(other))

    def is_inside(self, other, tolerance:float=EPSILON)->bool:
        return self.distance(other) <= tolerance

    def translate(self, vector)->None:
        self.origin = self.origin + as_vector(vector)

    def transform(self, affine)->None:
        self.origin = apply_point(affine, self.origin)

    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        return not bool(np.all(np.isfinite(self.origin)))

    def is_approx(self, other:'EntityBase', tolerance:float=EPSILON)->bool:
        if not other.is_point():
            return False
        return self.distance(other) <= tolerance

    def copy(self)->'Point':
        return type(self)(self.origin)

    def bounding_box(self)->'Aabb':
        from .aabb import Aabb
        return Aabb(self.origin, self.origin)

    def __iter__(self):
        return iter(self.origin.tolist())

    def __array__(self, dtype=None, copy=None):
        return np.array(self.origin, dtype=dtype)

    def __repr__(self):
        return f"Point({self.x:0.6g},{self.y:0.6g},{self.z:0.6g})"
