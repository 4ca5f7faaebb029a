"""Unit tests for Vector3 arithmetic and products."""

import math

import pytest

from core.vector import Vector3


def assert_vec_close(v, expected, tol=1e-9):
    assert abs(v.x - expected[0]) < tol
    assert abs(v.y - expected[1]) < tol
    assert abs(v.z - expected[2]) < tol


class TestVector3Arithmetic:
    """Tests for component-wise operators."""

    def test_add_sub(self):
        """Addition and subtraction act per component."""
        a = Vector3(1, 2, 3)
        b = Vector3(4, -5, 6)
        assert_vec_close(a + b, (5, -3, 9))
        assert_vec_close(a - b, (-3, 7, -3))

    def test_negate(self):
        """Negation flips every component."""
        assert_vec_close(-Vector3(1, -2, 3), (-1, 2, -3))

    def test_scale_both_sides(self):
        """Scalars multiply from either side and divide."""
        v = Vector3(1, 2, 3)
        assert_vec_close(v * 2, (2, 4, 6))
        assert_vec_close(2 * v, (2, 4, 6))
        assert_vec_close(v / 2, (0.5, 1, 1.5))

    def test_elementwise_product(self):
        """Multiplying two vectors modulates colors channel by channel."""
        assert_vec_close(Vector3(0.5, 1, 0) * Vector3(0.2, 0.3, 0.9), (0.1, 0.3, 0))

    def test_min_max(self):
        """Component-wise min and max pick per axis."""
        a = Vector3(1, 5, -2)
        b = Vector3(3, 0, -4)
        assert_vec_close(a.minimum(b), (1, 0, -4))
        assert_vec_close(a.maximum(b), (3, 5, -2))


class TestVector3Products:
    """Tests for dot and cross products."""

    def test_dot(self):
        """Dot product sums the component products."""
        assert Vector3(1, 2, 3).dot(Vector3(4, -5, 6)) == 12

    def test_cross_basis(self):
        """The standard basis follows the right-hand rule cyclically."""
        i, j, k = Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1)
        assert_vec_close(i.cross(j), (0, 0, 1))
        assert_vec_close(j.cross(k), (1, 0, 0))
        assert_vec_close(k.cross(i), (0, 1, 0))

    @pytest.mark.parametrize("a,b", [
        ((1, 2, 3), (4, 5, 6)),
        ((-1.5, 0.25, 7), (3, -2, 0.5)),
        ((0, 0, 1), (1, 1, 1)),
    ])
    def test_cross_anticommutative(self, a, b):
        """Swapping the operands flips the sign."""
        va, vb = Vector3(*a), Vector3(*b)
        assert_vec_close(va.cross(vb), (-vb.cross(va)).to_tuple())

    def test_cross_self_is_zero(self):
        """A vector crossed with itself vanishes."""
        assert_vec_close(Vector3(3, -1, 2).cross(Vector3(3, -1, 2)), (0, 0, 0))


class TestVector3Length:
    """Tests for length and normalization."""

    def test_length(self):
        """3-4-12 has length 13."""
        v = Vector3(3, 4, 12)
        assert v.length_squared() == 169
        assert v.length() == 13

    def test_normalize(self):
        """Normalized vectors have unit length and keep their direction."""
        n = Vector3(0, 3, 4).normalize()
        assert math.isclose(n.length(), 1.0)
        assert_vec_close(n, (0, 0.6, 0.8))

    def test_normalize_zero_vector(self):
        """Normalizing the zero vector is a defect and trips an assertion."""
        with pytest.raises(AssertionError):
            Vector3(0, 0, 0).normalize()
