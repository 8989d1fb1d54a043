"""Pytest configuration for whitted tests.

Shared fixtures for scenes and helpers used across test modules.
"""

import math

import pytest

from whitted.core.aabb import AABB
from whitted.core.color import Color
from whitted.core.vector import Vector4, point
from whitted.geometry.hittable import Shape
from whitted.geometry.world import default_world
from whitted.materials.patterns import Pattern

SQRT2_2 = math.sqrt(2) / 2


class RecordingShape(Shape):
    """Shape that records the last local ray it was intersected with."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.saved_ray = None
        self.calls = 0

    def local_intersect(self, ray):
        self.saved_ray = ray
        self.calls += 1
        return []

    def local_normal_at(self, local_point):
        return Vector4(local_point.x, local_point.y, local_point.z, 0.0)

    def bounds(self):
        return AABB(point(-1, -1, -1), point(1, 1, 1))


class CoordinatePattern(Pattern):
    """Pattern whose color is the pattern-space point itself."""

    def pattern_at(self, local_point):
        return Color(local_point.x, local_point.y, local_point.z)


def assert_color(actual, expected, abs_tol=1e-4):
    assert actual.red == pytest.approx(expected[0], abs=abs_tol)
    assert actual.green == pytest.approx(expected[1], abs=abs_tol)
    assert actual.blue == pytest.approx(expected[2], abs=abs_tol)


def assert_tuple(actual, expected, abs_tol=1e-4):
    assert list(actual) == pytest.approx(list(expected), abs=abs_tol)


@pytest.fixture
def world():
    """The default two-sphere world."""
    return default_world()


@pytest.fixture
def recording_shape():
    return RecordingShape()
