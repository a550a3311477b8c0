import numpy as np
from typing import Iterable
from geokernel.config import EPSILON
from .geometry import as_vector, nan_vector, norm, is_approx


class Aabb:
    """
    Axis-aligned bounding box.

    `id` and `pos` are opaque integer tags carried for external algorithms
    (a box id and a rank), they take no part in the geometry.
    """

    type_name = "aabb"

    def __init__(self, min=None, max=None, id:int=0, pos:int=0):
        self.min = nan_vector() if min is None else as_vector(min)
        self.max = nan_vector() if max is None else as_vector(max)
        self.id = int(id)
        self.pos = int(pos)

    @classmethod
    def from_boxes(cls, boxes:Iterable['Aabb'], id:int=0, pos:int=0)->'Aabb':
        box = cls(id=id, pos=pos)
        box.merged(boxes)
        return box

    def clear(self)->None:
        self.min = nan_vector()
        self.max = nan_vector()

    def set(self, other:'Aabb')->None:
        self.min = other.min.copy()
        self.max = other.max.copy()
        self.id = other.id
        self.pos = other.pos

    def copy(self)->'Aabb':
        return type(self)(self.min, self.max, self.id, self.pos)

    def check_max_min(self)->bool:
        """
        true if min <= max on every axis
        """
        return bool(np.all(self.min <= self.max))

    def update_max_min(self)->bool:
        """
        reorder min/max per axis, then report whether the box is well formed
        """
        lo = np.minimum(self.min, self.max)
        hi = np.maximum(self.min, self.max)
        self.min, self.max = lo, hi
        return self.check_max_min()

    def intersects(self, other:'Aabb')->bool:
        return bool(np.all(self.min <= other.max) and np.all(other.min <= self.max))

    def merged(self, boxes:Iterable['Aabb'])->None:
        """
        resize in place to the tight union of `boxes`
        """
        boxes = list(boxes)
        if not boxes:
            self.clear()
            return
        self.min = np.min([b.min for b in boxes], axis=0)
        self.max = np.max([b.max for b in boxes], axis=0)

    def overlap(self, other:'Aabb')->'Aabb':
        return Aabb(np.maximum(self.min, other.min), np.minimum(self.max, other.max))

    def center(self)->np.ndarray:
        return 0.5 * (self.min + self.max)

    def center_distance(self, point)->float:
        return norm(as_vector(point) - self.center())

    def exterior_distance(self, point)->float:
        """
        maximum distance of a point to the box, i.e. to its farthest corner.
        an upper bound on the distance to anything the box holds
        """
        point = as_vector(point)
        reach = np.maximum(np.abs(point - self.min), np.abs(point - self.max))
        return norm(reach)

    def clamp(self, *points)->None:
        """
        resize to the smallest box holding the given points, either passed
        one by one or as a single sequence
        """
        if len(points) == 1:
            points = points[0]
        coords = np.vstack([as_vector(p) for p in points])
        self.min = coords.min(axis=0)
        self.max = coords.max(axis=0)

    def translate(self, vector)->None:
        vector = as_vector(vector)
        self.min = self.min + vector
        self.max = self.max + vector

    def is_inside(self, point, tolerance:float=EPSILON)->bool:
        point = as_vector(point)
        return bool(np.all(point >= self.min - tolerance) and np.all(point <= self.max + tolerance))

    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        if not np.all(np.isfinite(self.min)) or not np.all(np.isfinite(self.max)):
            return True
        return bool(np.any(self.max - self.min <= tolerance))

    def is_approx(self, other:'Aabb', tolerance:float=EPSILON)->bool:
        return is_approx(self.min, other.min, tolerance) and is_approx(self.max, other.max, tolerance)

    def __repr__(self):
        fmt = lambda v: '[' + ','.join([format(a, '0.6g') for a in v]) + ']'
        return f"Aabb(min={fmt(self.min)},max={fmt(self.max)},id={self.id},pos={self.pos})"
