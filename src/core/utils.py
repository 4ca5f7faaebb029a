# core/utils.py
import math
from random import Random
from typing import Optional
from core.vector import Vector3

# Refraction discriminants at or below this are treated as grazing, i.e. total
# internal reflection.
GRAZING_EPSILON = 1e-9

def random_in_unit_sphere(rng: Random) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p

def random_in_unit_disk(rng: Random) -> Vector3:
    """
    Returns a random point inside the unit disk in the z=0 plane.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.dot(p) < 1.0:
            return p

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(v: Vector3, n: Vector3, ni_over_nt: float) -> Optional[Vector3]:
    """
    Bends v through a surface with normal n following Snell's law.

    v need not be unit length; n must be, and must face against v.
    Returns None on total internal reflection.
    """
    uv = v.normalize()
    dt = uv.dot(n)
    discriminant = 1.0 - ni_over_nt * ni_over_nt * (1.0 - dt * dt)
    if discriminant <= GRAZING_EPSILON:
        return None
    return (uv - n * dt) * ni_over_nt - n * math.sqrt(discriminant)
