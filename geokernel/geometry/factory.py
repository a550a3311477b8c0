# Entity factory, registry and flat-buffer marshaling for binding layers
from typing import Dict, Type, Union
import numpy as np
from .geometry import EntityBase, EntityType, NoneEntity
from .aabb import Aabb

# Registry is populated at package import
_entity_registry: Dict[EntityType, Type[EntityBase]] = {}

# flat buffer length per kind, aabb is carried as min then max
_BUFFER_SIZES = {
    'none': 0,
    'point': 3,
    'line': 6,
    'ray': 6,
    'plane': 6,
    'segment': 6,
    'triangle': 9,
    'circle': 7,
    'aabb': 6,
}


def _as_entity_type(kind:Union[EntityType, str])->EntityType:
    if isinstance(kind, EntityType):
        return kind
    try:
        return EntityType[str(kind).upper()]
    except KeyError:
        raise ValueError(f"Unknown entity type {kind}") from None


def register_entity(entity_type:EntityType, entity_class:Type[EntityBase]):
    """Register an entity class with its type"""
    _entity_registry[entity_type] = entity_class


def get_entity_class(kind:Union[EntityType, str])->Type[EntityBase]:
    """Get entity class by type or type name"""
    entity_type = _as_entity_type(kind)
    if entity_type not in _entity_registry:
        raise ValueError(f"Entity type {entity_type.name.lower()} not registered")
    return _entity_registry[entity_type]


def create_entity(kind:Union[EntityType, str], **params)->EntityBase:
    """Create an entity instance by type"""
    return get_entity_class(kind)(**params)


def from_buffer(kind:Union[EntityType, str], values)->Union[EntityBase, Aabb]:
    """
    build an entity from a flat numeric buffer:
    point x,y,z / line,ray origin,direction / plane origin,normal /
    segment and triangle vertices / circle center,normal,radius / aabb min,max
    """
    name = kind.name.lower() if isinstance(kind, EntityType) else str(kind).lower()
    if name not in _BUFFER_SIZES:
        raise ValueError(f"Unknown entity type {kind}")
    values = np.asarray(values, dtype='float64').reshape(-1)
    if values.size != _BUFFER_SIZES[name]:
        raise ValueError(f"{name} expects {_BUFFER_SIZES[name]} values, got {values.size}")

    if name == 'aabb':
        return Aabb(values[:3], values[3:])
    if name == 'none':
        return NoneEntity()
    cls = get_entity_class(name)
    if name == 'point':
        return cls(values)
    if name == 'circle':
        return cls(values[:3], values[3:6], values[6])
    return cls(*values.reshape(-1, 3))


def to_buffer(entity:Union[EntityBase, Aabb])->np.ndarray:
    """
    inverse of from_buffer
    """
    if isinstance(entity, Aabb):
        return np.concatenate([entity.min, entity.max])
    if entity.is_none():
        return np.zeros(0)
    if entity.is_point():
        return entity.origin.copy()
    if entity.is_line() or entity.is_ray():
        return np.concatenate([entity.origin, entity.direction])
    if entity.is_plane():
        return np.concatenate([entity.origin, entity.normal])
    if entity.is_segment() or entity.is_triangle():
        return entity.vertices.reshape(-1).copy()
    if entity.is_circle():
        return np.concatenate([entity.center, entity.normal, [entity.radius]])
    raise ValueError(f"Entity type {entity.type_name} has no buffer layout")
