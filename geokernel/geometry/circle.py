import numpy as np
from typing import TYPE_CHECKING
from geokernel.config import EPSILON
from geokernel.transformations import apply_point, apply_normal
from .geometry import EntityBase, EntityType, as_vector, nan_vector, norm, normalized, is_approx
from .plane import Plane

if TYPE_CHECKING:
    from .aabb import Aabb


class Circle(EntityBase):
    """
    Represents a circle (filled disk) in 3D space.

    A circle is defined by:
    - center: the center point
    - normal: unit normal of the supporting plane
    - radius: the radius
    """

    entity_type = EntityType.CIRCLE

    def __init__(self, center=None, normal=None, radius:float=np.nan):
        self.center = nan_vector() if center is None else as_vector(center)
        self.normal = nan_vector() if normal is None else normalized(as_vector(normal))
        self.radius = float(radius)

    @property
    def origin(self)->np.ndarray:
        return self.center

    def set(self, other:'EntityBase')->None:
        self._check_same_kind(other)
        self.center = other.center.copy()
        self.normal = other.normal.copy()
        self.radius = other.radius

    def laying_plane(self)->Plane:
        return Plane(self.center, self.normal)

    def area(self)->float:
        return float(np.pi * self.radius ** 2)

    def perimeter(self)->float:
        return float(2.0 * np.pi * self.radius)

    def is_inside(self, point, tolerance:float=EPSILON)->bool:
        """
        true if the point lies on the disk, rim included
        """
        point = as_vector(point)
        if not self.laying_plane().is_inside(point, tolerance):
            return False
        return norm(point - self.center) <= self.radius + tolerance

    def translate(self, vector)->None:
        self.center = self.center + as_vector(vector)

    def transform(self, affine)->None:
        # radius is kept: only rigid transforms map a circle onto a circle
        self.center = apply_point(affine, self.center)
        self.normal = apply_normal(affine, self.normal)

    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        return not self.radius > tolerance or not norm(self.normal) > tolerance \
            or not bool(np.all(np.isfinite(self.center)))

    def is_approx(self, other:'EntityBase', tolerance:float=EPSILON)->bool:
        if not other.is_circle():
            return False
        return (is_approx(self.center, other.center, tolerance)
                and is_approx(self.normal, other.normal, tolerance)
                and abs(self.radius - other.radius) <= tolerance)

    def copy(self)->'Circle':
        return type(self)(self.center, self.normal, self.radius)

    def bounding_box(self)->'Aabb':
        """
        tight box: the half extent along axis i is radius*sqrt(1 - normal_i^2)
        """
        from .aabb import Aabb
        half = self.radius * np.sqrt(np.clip(1.0 - self.normal ** 2, 0.0, 1.0))
        return Aabb(self.center - half, self.center + half)

    def __repr__(self):
        return f"Circle(center={self._format(self.center)},normal={self._format(self.normal)},radius={self.radius:0.6g})"
