"""Unit tests for rays and axis-aligned bounding boxes."""

import math

import pytest

from whitted.core.aabb import AABB, INFINITY, check_axis
from whitted.core.matrix import rotation_y, scaling, translation
from whitted.core.ray import Ray
from whitted.core.vector import point, vector


class TestRay:

    def test_position(self):
        r = Ray(point(2, 3, 4), vector(1, 0, 0))
        assert r.at(0) == point(2, 3, 4)
        assert r.at(1) == point(3, 3, 4)
        assert r.at(-1) == point(1, 3, 4)
        assert r.at(2.5) == point(4.5, 3, 4)

    def test_translate(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r2 = r.transform(translation(3, 4, 5))
        assert r2.origin == point(4, 6, 8)
        assert r2.direction == vector(0, 1, 0)

    def test_scale_does_not_renormalize(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r2 = r.transform(scaling(2, 3, 4))
        assert r2.origin == point(2, 6, 12)
        assert r2.direction == vector(0, 3, 0)

    def test_transform_returns_new_ray(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r.transform(translation(3, 4, 5))
        assert r.origin == point(1, 2, 3)


class TestCheckAxis:

    def test_interval_is_ordered(self):
        assert check_axis(5, -1, -1, 1) == (4, 6)

    def test_parallel_inside_slab(self):
        assert check_axis(0, 0, -1, 1) == (-INFINITY, INFINITY)

    def test_parallel_outside_slab(self):
        tmin, tmax = check_axis(2, 0, -1, 1)
        assert tmin > tmax or math.isinf(tmin)


class TestAABB:

    def test_empty_box(self):
        box = AABB.empty()
        assert box.is_empty()
        assert not box.hit(Ray(point(0, 0, 0), vector(0, 0, 1)))

    def test_surrounding_box(self):
        a = AABB(point(-5, -2, 0), point(7, 4, 4))
        b = AABB(point(8, -7, -2), point(14, 2, 8))
        box = AABB.surrounding_box(a, b)
        assert box.minimum == point(-5, -7, -2)
        assert box.maximum == point(14, 4, 8)

    def test_surrounding_empty_box_is_identity(self):
        a = AABB(point(-1, -2, -3), point(1, 2, 3))
        box = AABB.surrounding_box(AABB.empty(), a)
        assert box.minimum == a.minimum
        assert box.maximum == a.maximum

    def test_contains_point(self):
        box = AABB(point(5, -2, 0), point(11, 4, 7))
        assert box.contains_point(point(5, -2, 0))
        assert box.contains_point(point(8, 1, 3))
        assert not box.contains_point(point(3, 0, 3))
        assert not box.contains_point(point(8, 1, 8))

    def test_transform_rotated_box(self):
        box = AABB(point(-1, -1, -1), point(1, 1, 1))
        box2 = box.transform(rotation_y(math.pi / 4))
        assert box2.minimum == point(-math.sqrt(2), -1, -math.sqrt(2))
        assert box2.maximum == point(math.sqrt(2), 1, math.sqrt(2))

    def test_transform_unbounded_box(self):
        box = AABB(point(-INFINITY, 0, -INFINITY), point(INFINITY, 0, INFINITY))
        box2 = box.transform(rotation_y(0.5))
        assert box2.minimum.x == -INFINITY
        assert box2.maximum.z == INFINITY
        assert box2.minimum.y == pytest.approx(0)

    @pytest.mark.parametrize("origin, direction, expected", [
        (point(5, 0.5, 0), vector(-1, 0, 0), True),
        (point(-5, 0.5, 0), vector(1, 0, 0), True),
        (point(0.5, 5, 0), vector(0, -1, 0), True),
        (point(0, 0.5, 0), vector(0, 0, 1), True),
        (point(-2, 0, 0), vector(2, 4, 6), False),
        (point(0, -2, 0), vector(6, 2, 4), False),
        (point(2, 0, 2), vector(0, 0, -1), False),
        (point(0, 2, 2), vector(0, -1, 0), False),
    ])
    def test_hit_unit_box(self, origin, direction, expected):
        box = AABB(point(-1, -1, -1), point(1, 1, 1))
        assert box.hit(Ray(origin, direction.normalize())) is expected
