# core/aabb.py
import math
from typing import Iterable, Tuple

from whitted.core.matrix import Matrix4
from whitted.core.utils import EPSILON
from whitted.core.vector import Vector4, point

INFINITY = math.inf


def check_axis(origin: float, direction: float, minimum: float, maximum: float) -> Tuple[float, float]:
    """
    Returns the ordered (t_enter, t_exit) interval of a ray against the slab
    minimum <= coordinate <= maximum along one axis.

    A direction component within EPSILON of zero falls back to signed
    infinities, so a ray parallel to the slab gets (-inf, inf) when it runs
    inside the slab and an interval that can never overlap otherwise.
    """
    tmin_numerator = minimum - origin
    tmax_numerator = maximum - origin
    if abs(direction) >= EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        tmin = -INFINITY if tmin_numerator <= 0 else INFINITY
        tmax = INFINITY if tmax_numerator >= 0 else -INFINITY
    if tmin > tmax:
        return tmax, tmin
    return tmin, tmax


def _transform_coords(matrix: Matrix4, coords: Tuple[float, float, float]) -> Tuple[float, ...]:
    # Zero matrix entries are skipped so that 0 * inf does not become NaN.
    result = []
    for row in range(3):
        total = matrix[row, 3]
        for col in range(3):
            factor = matrix[row, col]
            if factor != 0.0:
                total += factor * coords[col]
        result.append(total)
    return tuple(result)


class AABB:
    """
    An axis-aligned bounding box. Unbounded axes use infinite extents; an
    empty box has minimum > maximum on every axis.
    """

    def __init__(self, minimum: Vector4, maximum: Vector4):
        self.minimum = minimum
        self.maximum = maximum

    @classmethod
    def empty(cls) -> "AABB":
        return cls(point(INFINITY, INFINITY, INFINITY), point(-INFINITY, -INFINITY, -INFINITY))

    def is_empty(self) -> bool:
        return (self.minimum.x > self.maximum.x or self.minimum.y > self.maximum.y
                or self.minimum.z > self.maximum.z)

    def corners(self) -> Iterable[Tuple[float, float, float]]:
        lo, hi = self.minimum, self.maximum
        for x in (lo.x, hi.x):
            for y in (lo.y, hi.y):
                for z in (lo.z, hi.z):
                    yield x, y, z

    def contains_point(self, p: Vector4) -> bool:
        return (self.minimum.x <= p.x <= self.maximum.x
                and self.minimum.y <= p.y <= self.maximum.y
                and self.minimum.z <= p.z <= self.maximum.z)

    def transform(self, matrix: Matrix4) -> "AABB":
        """
        Returns the box enclosing all eight corners after transformation.
        """
        if self.is_empty():
            return AABB.empty()
        lows = [INFINITY, INFINITY, INFINITY]
        highs = [-INFINITY, -INFINITY, -INFINITY]
        unbounded = [False, False, False]
        for corner in self.corners():
            for axis, value in enumerate(_transform_coords(matrix, corner)):
                if math.isnan(value):
                    # inf - inf: the axis mixes opposite unbounded extents.
                    unbounded[axis] = True
                    continue
                lows[axis] = min(lows[axis], value)
                highs[axis] = max(highs[axis], value)
        for axis in range(3):
            if unbounded[axis]:
                lows[axis], highs[axis] = -INFINITY, INFINITY
        return AABB(point(*lows), point(*highs))

    def hit(self, ray) -> bool:
        # Slab method: intersect the per-axis intervals.
        if self.is_empty():
            return False
        xmin, xmax = check_axis(ray.origin.x, ray.direction.x, self.minimum.x, self.maximum.x)
        ymin, ymax = check_axis(ray.origin.y, ray.direction.y, self.minimum.y, self.maximum.y)
        zmin, zmax = check_axis(ray.origin.z, ray.direction.z, self.minimum.z, self.maximum.z)
        return max(xmin, ymin, zmin) <= min(xmax, ymax, zmax)

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        small = point(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z)
        )
        big = point(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"
