# materials/lambertian.py
from random import Random
from core.ray import Ray
from core.vector import Vector3
from core.utils import random_in_unit_sphere
from geometry.hittable import HitRecord
from materials.material import Material, ScatterResult

class Lambertian(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: Random) -> ScatterResult:
        # Aim at a random point in the unit sphere tangent to the hit point.
        target = rec.p + rec.normal + random_in_unit_sphere(rng)
        scattered = Ray(rec.p, target - rec.p, ray_in.time)
        return self.albedo, scattered

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
