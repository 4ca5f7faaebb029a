# geometry/sphere.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from core.errors import ConfigurationError
from geometry.hittable import Hittable, HitRecord

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    A negative radius keeps the same surface but flips the normal inward,
    which is how hollow glass shells are built.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if radius == 0:
            raise ConfigurationError("sphere radius must be non-zero")
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.hit_at(self.center, ray, t_min, t_max)

    def hit_at(self, center: Vector3, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """
        Intersects the ray with this sphere as if it were centered at `center`.
        Only roots strictly inside (t_min, t_max) count.
        """
        oc = ray.origin - center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Nearest root first, then the far one
        root = (-half_b - sqrt_disc) / a
        if not (t_min < root < t_max):
            root = (-half_b + sqrt_disc) / a
            if not (t_min < root < t_max):
                return None

        p = ray.at(root)
        return HitRecord(root, p, (p - center) / self.radius, self.material)

    def bounding_box(self, t0: float = 0.0, t1: float = 0.0) -> AABB:
        # The bounding box of a sphere is center ± radius
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        return AABB(self.center - offset, self.center + offset)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius})"

class MovingSphere(Hittable):
    """
    A sphere whose center moves linearly with time: at time t the center is
    sphere.center + t * motion.
    """
    def __init__(self, sphere: Sphere, motion: Vector3):
        self.sphere = sphere
        self.motion = motion

    def center(self, time: float) -> Vector3:
        return self.sphere.center + self.motion * time

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.sphere.hit_at(self.center(ray.time), ray, t_min, t_max)

    def bounding_box(self, t0: float, t1: float) -> AABB:
        r = abs(self.sphere.radius)
        offset = Vector3(r, r, r)
        c0 = self.center(t0)
        c1 = self.center(t1)
        return AABB.surrounding_box(AABB(c0 - offset, c0 + offset),
                                    AABB(c1 - offset, c1 + offset))

    def __repr__(self) -> str:
        return f"MovingSphere({self.sphere!r}, motion={self.motion!r})"
