import numpy as np
from geokernel.config import EPSILON
from .geometry import EntityType, as_vector
from .line import Line


class Ray(Line):
    """
    Half-line origin + t*direction with t >= 0.
    """

    entity_type = EntityType.RAY

    def is_inside(self, point, tolerance:float=EPSILON)->bool:
        """
        true if the point lies on the ray, origin included
        """
        point = as_vector(point)
        if not super().is_inside(point, tolerance):
            return False
        return np.dot(point - self.origin, self.to_unit_vector()) >= -tolerance

    def to_line(self)->Line:
        return Line(self.origin, self.direction)
