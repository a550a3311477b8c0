"""
Exceptions raised by the intersection engine.
"""


class GeometryError(Exception):
    """Base class for every error raised by geokernel."""


class UnhandledIntersectionError(GeometryError, NotImplementedError):
    """No intersection routine exists for a (kind pair, classification) tuple."""

    def __init__(self, kind_a: str, kind_b: str, branch: str):
        self.kind_a = kind_a
        self.kind_b = kind_b
        self.branch = branch
        super().__init__(f"Intersection between {kind_a} and {kind_b} ({branch}) not handled")


class DegenerateEntityError(GeometryError, ValueError):
    """An input primitive has collapsed below its nominal dimension."""

    def __init__(self, entity):
        self.entity = entity
        super().__init__(f"Degenerate {entity.type_name} cannot be intersected: {entity!r}")


class InconsistentGeometryError(GeometryError, RuntimeError):
    """A routine reached a configuration its geometry rules out."""
