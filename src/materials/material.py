# materials/material.py
from random import Random
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord

# (attenuation, scattered ray or None when the ray stops at this surface)
ScatterResult = Tuple[Vector3, Optional[Ray]]

class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    Materials are shared by every tile being rendered and must not keep
    per-call state; randomness comes from the caller's rng.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: Random) -> ScatterResult:
        """
        Computes the attenuation and the scattered ray.
        Returns (attenuation, None) if the ray is not scattered further.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
