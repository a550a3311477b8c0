from .geometry import EntityBase,NoneEntity,EntityType
from .point import Point
from .line import Line
from .ray import Ray
from .plane import Plane
from .segment import Segment
from .triangle import Triangle
from .circle import Circle
from .aabb import Aabb
from .factory import register_entity,get_entity_class,create_entity,from_buffer,to_buffer

for _cls in (NoneEntity, Point, Line, Ray, Plane, Segment, Triangle, Circle):
    register_entity(_cls.entity_type, _cls)


__all__ = ['EntityBase','NoneEntity','EntityType','Point','Line','Ray','Plane','Segment','Triangle','Circle','Aabb',
           'register_entity','get_entity_class','create_entity','from_buffer','to_buffer']
