# geometry/plane.py
from typing import List

from whitted.core.aabb import AABB, INFINITY
from whitted.core.ray import Ray
from whitted.core.utils import EPSILON
from whitted.core.vector import Vector4, point, vector
from whitted.geometry.hittable import Shape
from whitted.geometry.intersection import Intersection


class Plane(Shape):
    """
    The infinite x-z plane of its local space, facing +y.
    """

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        # Parallel or coplanar rays never hit.
        if abs(ray.direction.y) < EPSILON:
            return []
        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self)]

    def local_normal_at(self, local_point: Vector4) -> Vector4:
        return vector(0, 1, 0)

    def bounds(self) -> AABB:
        return AABB(point(-INFINITY, 0, -INFINITY), point(INFINITY, 0, INFINITY))
