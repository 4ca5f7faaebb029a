# materials/normal.py
from random import Random
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material, ScatterResult

class NormalMaterial(Material):
    """
    Debug material that colors a surface by its normal and stops the ray.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: Random) -> ScatterResult:
        n = rec.normal
        return Vector3(n.x + 1.0, n.y + 1.0, n.z + 1.0) * 0.5, None

    def __repr__(self) -> str:
        return "NormalMaterial()"
