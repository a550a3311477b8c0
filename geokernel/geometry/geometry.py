

from enum import Enum
from abc import ABC, abstractmethod
import numpy as np

from geokernel.config import EPSILON


class EntityType(Enum):
    """
    closed set of primitive kinds. the value is the degree used as dispatch key,
    SPHERE and BALL are reserved and never dispatched
    """
    NONE=1
    POINT=2
    LINE=3
    RAY=4
    PLANE=5
    SEGMENT=6
    TRIANGLE=7
    CIRCLE=8
    SPHERE=9
    BALL=10


def as_vector(value)->np.ndarray:
    """
    coerce a point entity or a 3-sequence into a fresh float64 array
    """
    if isinstance(value, EntityBase):
        value = value.origin
    out = np.array(value, dtype='float64').reshape(-1)
    if out.shape != (3,):
        raise ValueError(f"expected 3 coordinates, got {out.shape[0]}")
    return out


def nan_vector()->np.ndarray:
    return np.full(3, np.nan)


def norm(vector:np.ndarray)->float:
    return float(np.linalg.norm(vector))


def normalized(vector:np.ndarray)->np.ndarray:
    """
    unit vector along `vector`; a zero vector is returned unchanged
    """
    n = np.linalg.norm(vector)
    if n == 0:
        return np.array(vector, dtype='float64')
    return vector / n


def is_approx(a, b, tolerance:float=EPSILON)->bool:
    return bool(np.all(np.abs(np.asarray(a) - np.asarray(b)) <= tolerance))


def is_parallel(u:np.ndarray, v:np.ndarray, tolerance:float=EPSILON)->bool:
    """
    true when two direction vectors are parallel or anti-parallel
    """
    return norm(np.cross(normalized(u), normalized(v))) <= tolerance


def is_orthogonal(u:np.ndarray, v:np.ndarray, tolerance:float=EPSILON)->bool:
    return abs(np.dot(normalized(u), normalized(v))) <= tolerance


def line_distance(point:np.ndarray, origin:np.ndarray, direction:np.ndarray)->float:
    """
    distance from a point to the infinite line origin + t*direction
    """
    delta = point - origin
    unit = normalized(direction)
    return norm(delta - np.dot(delta, unit) * unit)


class EntityBase(ABC):
    """
    shared capability interface of every primitive.

    entities are value objects: construction copies the input coordinates, the
    accessors return copies, and translate/transform mutate in place.
    """

    entity_type:EntityType = EntityType.NONE

    @property
    def degree(self)->int:
        return self.entity_type.value

    @property
    def type_name(self)->str:
        return self.entity_type.name.lower()

    def is_none(self)->bool:
        return self.entity_type == EntityType.NONE

    def is_point(self)->bool:
        return self.entity_type == EntityType.POINT

    def is_line(self)->bool:
        return self.entity_type == EntityType.LINE

    def is_ray(self)->bool:
        return self.entity_type == EntityType.RAY

    def is_plane(self)->bool:
        return self.entity_type == EntityType.PLANE

    def is_segment(self)->bool:
        return self.entity_type == EntityType.SEGMENT

    def is_triangle(self)->bool:
        return self.entity_type == EntityType.TRIANGLE

    def is_circle(self)->bool:
        return self.entity_type == EntityType.CIRCLE

    def is_linear(self)->bool:
        return self.entity_type in (EntityType.LINE, EntityType.RAY, EntityType.SEGMENT)

    def is_planar(self)->bool:
        return self.entity_type in (EntityType.PLANE, EntityType.TRIANGLE, EntityType.CIRCLE)

    @abstractmethod
    def translate(self, vector)->None:
        """
        move the entity by `vector` in place
        """

    @abstractmethod
    def transform(self, affine)->None:
        """
        apply a 4x4 affine transformation in place
        """

    @abstractmethod
    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        """
        true if the entity collapsed to a lower dimensional or empty shape
        """

    @abstractmethod
    def is_approx(self, other:'EntityBase', tolerance:float=EPSILON)->bool:
        pass

    @abstractmethod
    def copy(self)->'EntityBase':
        pass

    @abstractmethod
    def set(self, other:'EntityBase')->None:
        """
        overwrite this entity's data with a copy of `other`'s (same kind only)
        """

    def _check_same_kind(self, other:'EntityBase'):
        if other.entity_type != self.entity_type:
            raise TypeError(f"cannot assign {other.type_name} to {self.type_name}")

    @staticmethod
    def _format(vector:np.ndarray)->str:
        return '[' + ','.join([format(a, '0.6g') for a in vector]) + ']'


class NoneEntity(EntityBase):
    """
    the empty set; the result of every intersection that does not exist
    """

    entity_type = EntityType.NONE

    def translate(self, vector)->None:
        pass

    def transform(self, affine)->None:
        pass

    def is_degenerate(self, tolerance:float=EPSILON)->bool:
        return True

    def is_approx(self, other:'EntityBase', tolerance:float=EPSILON)->bool:
        return other.is_none()

    def copy(self)->'NoneEntity':
        return type(self)()

    def set(self, other:'EntityBase')->None:
        self._check_same_kind(other)

    def __eq__(self, other):
        return isinstance(other, NoneEntity)

    def __hash__(self):
        return hash(EntityType.NONE)

    def __repr__(self):
        return "NoneEntity()"

