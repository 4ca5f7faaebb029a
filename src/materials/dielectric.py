# src/materials/dielectric.py
import math
from random import Random
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, refract
from geometry.hittable import HitRecord
from materials.material import Material, ScatterResult

class Dielectric(Material):
    """
    Clear refractive material (glass, water, diamond). The ray is either
    reflected or refracted, picked at random with Schlick's reflectance as
    the probability of reflecting.
    """
    def __init__(self, ref_idx: float):
        self.ref_idx = ref_idx

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: Random) -> ScatterResult:
        attenuation = Vector3(1.0, 1.0, 1.0)  # Glass doesn't absorb light
        direction = ray_in.direction
        d_dot_n = direction.dot(rec.normal)

        # Determine if we're entering or exiting the material
        if d_dot_n > 0:
            outward_normal = -rec.normal
            ni_over_nt = self.ref_idx
            cosine = self.ref_idx * d_dot_n / direction.length()
        else:
            outward_normal = rec.normal
            ni_over_nt = 1.0 / self.ref_idx
            cosine = -d_dot_n / direction.length()

        refracted = refract(direction, outward_normal, ni_over_nt)
        if refracted is not None and rng.random() >= schlick(cosine, self.ref_idx):
            return attenuation, Ray(rec.p, refracted, ray_in.time)

        reflected = reflect(direction, rec.normal)
        return attenuation, Ray(rec.p, reflected, ray_in.time)

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx})"

def schlick(cosine: float, ref_idx: float) -> float:
    """
    Schlick's approximation of the Fresnel reflectance: the probability
    that a ray hitting the surface at this angle is reflected.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cosine), 5)
