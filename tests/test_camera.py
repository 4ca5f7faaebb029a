"""Unit tests for the thin-lens camera."""

import math
from random import Random

import pytest

from camera.camera import Camera
from core.errors import ConfigurationError
from core.vector import Vector3


class TestCameraBasis:
    """Tests for the viewport construction."""

    def test_classic_viewport(self, front_camera):
        """A 90 degree, 2:1 camera at the origin spans x in [-2, 2], y in [-1, 1] at z=-1."""
        assert front_camera.lower_left_corner.to_tuple() == pytest.approx((-2, -1, -1))
        assert front_camera.horizontal.to_tuple() == pytest.approx((4, 0, 0))
        assert front_camera.vertical.to_tuple() == pytest.approx((0, 2, 0))

    def test_basis_is_orthonormal(self):
        """u, v, w are unit length and mutually perpendicular."""
        cam = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), 20, 1.5)
        for a in (cam.u, cam.v, cam.w):
            assert math.isclose(a.length(), 1.0)
        assert abs(cam.u.dot(cam.v)) < 1e-12
        assert abs(cam.u.dot(cam.w)) < 1e-12
        assert abs(cam.v.dot(cam.w)) < 1e-12

    def test_lookfrom_equals_lookat(self):
        """A camera with no viewing direction is rejected."""
        with pytest.raises(ConfigurationError):
            Camera(Vector3(1, 1, 1), Vector3(1, 1, 1), Vector3(0, 1, 0), 45, 1.0)

    def test_up_parallel_to_view(self):
        """An up vector along the view direction leaves the basis undefined."""
        with pytest.raises(ConfigurationError):
            Camera(Vector3(0, 5, 0), Vector3(0, 0, 0), Vector3(0, 1, 0), 45, 1.0)

    @pytest.mark.parametrize("focus_dist", [0.0, -1.0])
    def test_focus_distance_must_be_positive(self, focus_dist):
        """A focus plane at or behind the lens collapses the viewport."""
        with pytest.raises(ConfigurationError):
            Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 90, 2.0,
                   aperture=0.0, focus_dist=focus_dist)

    @pytest.mark.parametrize("vfov", [0, 180, -10, 200])
    def test_vfov_out_of_range(self, vfov):
        """The vertical field of view must lie strictly between 0 and 180 degrees."""
        with pytest.raises(ConfigurationError):
            Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), vfov, 2.0)

    def test_aspect_must_be_positive(self):
        """A zero aspect ratio gives an empty viewport."""
        with pytest.raises(ConfigurationError):
            Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 90, 0.0)


class TestCameraRays:
    """Tests for ray generation."""

    def test_center_ray_points_at_lookat(self):
        """With a pinhole, the screen center looks straight at the target."""
        lookfrom = Vector3(3, 3, 2)
        lookat = Vector3(0, 0, -1)
        cam = Camera(lookfrom, lookat, Vector3(0, 1, 0), 20, 2.0,
                     focus_dist=(lookfrom - lookat).length())
        ray = cam.get_ray(0.5, 0.5, Random(0))
        expected = (lookat - lookfrom).normalize()
        got = ray.direction.normalize()
        assert got.to_tuple() == pytest.approx(expected.to_tuple())
        assert ray.origin.to_tuple() == (3, 3, 2)

    def test_corner_ray(self, front_camera):
        """(0, 0) maps to the lower-left corner of the viewport."""
        ray = front_camera.get_ray(0.0, 0.0, Random(0))
        assert ray.direction.to_tuple() == pytest.approx((-2, -1, -1))

    def test_aperture_jitters_origin_within_lens(self):
        """Ray origins spread over a disk of radius aperture / 2 in the lens plane."""
        cam = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 60, 1.0,
                     aperture=2.0, focus_dist=4.0)
        rng = Random(5)
        for _ in range(200):
            ray = cam.get_ray(0.5, 0.5, rng)
            assert ray.origin.length() < 1.0
            assert ray.origin.z == pytest.approx(0.0)

    def test_aperture_keeps_focus_plane_sharp(self):
        """Every lens sample for a pixel converges on the same focus-plane point."""
        cam = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 60, 1.0,
                     aperture=1.0, focus_dist=4.0)
        rng = Random(9)
        for _ in range(20):
            ray = cam.get_ray(0.25, 0.75, rng)
            p = ray.at(1.0)
            target = cam.lower_left_corner + cam.horizontal * 0.25 + cam.vertical * 0.75
            assert p.to_tuple() == pytest.approx(target.to_tuple())

    def test_time_within_exposure(self):
        """Ray times are drawn from the shutter interval."""
        cam = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 60, 1.0,
                     time0=0.25, time1=0.75)
        rng = Random(1)
        times = [cam.get_ray(0.5, 0.5, rng).time for _ in range(200)]
        assert all(0.25 <= t <= 0.75 for t in times)
        assert min(times) < 0.35 and max(times) > 0.65

    def test_static_shutter(self, front_camera):
        """Without an exposure interval every ray is at time0."""
        assert front_camera.get_ray(0.3, 0.3, Random(0)).time == 0.0
