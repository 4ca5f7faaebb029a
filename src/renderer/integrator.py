# renderer/integrator.py
from random import Random
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hittable

MAX_DEPTH = 50

# Hits past the bounce budget are painted magenta so runaway paths stand out.
RUNAWAY_COLOR = Vector3(1.0, 0.0, 1.0)

# Smallest accepted hit distance; keeps scattered rays off their own surface.
T_MIN = 0.001

WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)

def sky_color(ray: Ray) -> Vector3:
    """
    Background seen by rays that escape the scene: a vertical blend from
    white at the horizon to sky blue overhead.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t

def color(ray: Ray, world: Hittable, depth: int, rng: Random,
          max_depth: int = MAX_DEPTH) -> Vector3:
    """
    Radiance carried back along `ray`, following scattered rays until they
    escape, get absorbed or exhaust the bounce budget.
    """
    rec = world.hit(ray, T_MIN, float("inf"))
    if rec is None:
        return sky_color(ray)

    if depth >= max_depth:
        return RUNAWAY_COLOR

    attenuation, scattered = rec.material.scatter(ray, rec, rng)
    if scattered is None:
        return attenuation
    return attenuation * color(scattered, world, depth + 1, rng, max_depth)
