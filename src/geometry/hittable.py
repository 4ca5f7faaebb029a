# geometry/hittable.py
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB

class HitRecord:
    """
    Records details of a ray-object intersection. Built once per hit and
    treated as read-only afterwards.
    """
    __slots__ = ("t", "p", "normal", "material")

    def __init__(self, t: float, p: Vector3, normal: Vector3, material=None):
        self.t = t                # Ray parameter at intersection
        self.p = p                # Intersection point
        self.normal = normal      # Unit normal, pointing away from the center for positive radii
        self.material = material  # Shared, never mutated by a render

    def __repr__(self) -> str:
        return f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r})"

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, t0: float, t1: float) -> Optional[AABB]:
        """
        Box enclosing the object for every time in [t0, t1], or None if the
        object is unbounded.
        """
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")
