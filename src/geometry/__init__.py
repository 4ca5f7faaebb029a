from geometry.hittable import Hittable, HitRecord
from geometry.sphere import Sphere, MovingSphere
from geometry.world import HittableList

__all__ = [
    "Hittable",
    "HitRecord",
    "Sphere",
    "MovingSphere",
    "HittableList",
]
