# geometry/cube.py
import math
from typing import List

from whitted.core.aabb import AABB, check_axis
from whitted.core.ray import Ray
from whitted.core.vector import Vector4, point, vector
from whitted.geometry.hittable import Shape
from whitted.geometry.intersection import Intersection


class Cube(Shape):
    """
    The axis-aligned cube spanning -1..1 on every local axis.
    """

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        xtmin, xtmax = check_axis(ray.origin.x, ray.direction.x, -1.0, 1.0)
        ytmin, ytmax = check_axis(ray.origin.y, ray.direction.y, -1.0, 1.0)
        ztmin, ztmax = check_axis(ray.origin.z, ray.direction.z, -1.0, 1.0)

        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)
        # A zero-length direction leaves every axis unbounded.
        if tmin > tmax or math.isinf(tmin) or math.isinf(tmax):
            return []
        return [Intersection(tmin, self), Intersection(tmax, self)]

    def local_normal_at(self, local_point: Vector4) -> Vector4:
        x, y, z = local_point.x, local_point.y, local_point.z
        ax, ay, az = abs(x), abs(y), abs(z)
        maxc = max(ax, ay, az)
        if maxc == ax:
            return vector(x, 0, 0)
        if maxc == ay:
            return vector(0, y, 0)
        return vector(0, 0, z)

    def bounds(self) -> AABB:
        return AABB(point(-1, -1, -1), point(1, 1, 1))
