# camera/camera.py
import math
from random import Random
from core.vector import Vector3
from core.ray import Ray
from core.errors import ConfigurationError
from core.utils import random_in_unit_disk

class Camera:
    """
    Thin-lens camera placed at `lookfrom` and aimed at `lookat`.

    vfov is the vertical field of view in degrees. Rays start on a lens disk
    of diameter `aperture` and converge on the plane `focus_dist` away, so
    anything off that plane is blurred. Each ray is stamped with a random
    time in [time0, time1] for motion blur.
    """
    def __init__(self, lookfrom: Vector3, lookat: Vector3, up: Vector3,
                 vfov: float, aspect: float, aperture: float = 0.0,
                 focus_dist: float = 1.0, time0: float = 0.0, time1: float = 0.0):
        self.lookfrom = lookfrom
        self.lookat = lookat
        self.vup = up
        self.vfov = vfov
        self.aspect = aspect
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.time0 = time0
        self.time1 = time1
        self.lens_radius = aperture / 2.0
        self.update_camera()

    def update_camera(self):
        """Computes the camera basis and the viewport in the focus plane."""
        if not 0 < self.vfov < 180:
            raise ConfigurationError(f"camera vfov must be between 0 and 180 degrees, got {self.vfov}")
        if self.aspect <= 0:
            raise ConfigurationError(f"camera aspect must be positive, got {self.aspect}")
        if self.focus_dist <= 0:
            raise ConfigurationError(f"camera focus distance must be positive, got {self.focus_dist}")
        view = self.lookfrom - self.lookat
        if view.length_squared() == 0:
            raise ConfigurationError("camera lookfrom and lookat must differ")
        side = self.vup.cross(view)
        if side.length_squared() == 0:
            raise ConfigurationError("camera up vector is parallel to the view direction")

        theta = self.vfov * math.pi / 180
        half_height = math.tan(theta / 2)
        half_width = self.aspect * half_height

        self.origin = self.lookfrom
        self.w = view.normalize()
        self.u = side.normalize()
        self.v = self.w.cross(self.u)

        self.horizontal = self.u * (2 * self.focus_dist * half_width)
        self.vertical = self.v * (2 * self.focus_dist * half_height)
        self.lower_left_corner = (self.origin -
                                  (self.u * half_width + self.v * half_height + self.w) * self.focus_dist)

    def get_ray(self, s: float, t: float, rng: Random) -> Ray:
        """
        Ray through the normalized screen point (s, t); (0, 0) is the lower
        left corner of the image, (1, 1) the upper right.
        """
        if self.lens_radius > 0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vector3(0.0, 0.0, 0.0)

        if self.time1 > self.time0:
            time = self.time0 + rng.random() * (self.time1 - self.time0)
        else:
            time = self.time0

        ray_origin = self.origin + offset
        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     ray_origin)
        return Ray(ray_origin, direction, time)
