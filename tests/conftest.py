"""Shared fixtures for the ray tracer tests."""

from random import Random

import pytest

from camera.camera import Camera
from core.vector import Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian


class FixedRng:
    """Stand-in for random.Random that replays scripted values.

    uniform() and random() each cycle through their own list, which makes
    sampling routines deterministic without depending on a seed's stream.
    """

    def __init__(self, uniforms=(0.0,), randoms=(0.5,)):
        self._uniforms = list(uniforms)
        self._randoms = list(randoms)
        self._u = 0
        self._r = 0

    def uniform(self, a, b):
        value = self._uniforms[self._u % len(self._uniforms)]
        self._u += 1
        return value

    def random(self):
        value = self._randoms[self._r % len(self._randoms)]
        self._r += 1
        return value


@pytest.fixture
def rng():
    """Seeded generator so sampled tests are repeatable."""
    return Random(42)


@pytest.fixture
def fixed_rng():
    """Factory for scripted generators."""
    return FixedRng


@pytest.fixture
def two_sphere_world():
    """A diffuse sphere at (0, 0, -1) resting on a large ground sphere."""
    return HittableList([
        Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.5, 0.5, 0.5))),
        Sphere(Vector3(0, -100.5, -1), 100, Lambertian(Vector3(0.5, 0.5, 0.5))),
    ])


@pytest.fixture
def front_camera():
    """Pinhole camera at the origin looking down -z, 2:1 aspect, 90 degree vfov."""
    return Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 90, 2.0,
                  aperture=0.0, focus_dist=1.0)
