# geometry/cylinder.py
import math
from typing import List

from whitted.core.aabb import AABB, INFINITY
from whitted.core.matrix import IDENTITY, Matrix4
from whitted.core.ray import Ray
from whitted.core.utils import EPSILON
from whitted.core.vector import Vector4, point, vector
from whitted.geometry.hittable import Shape
from whitted.geometry.intersection import Intersection
from whitted.materials.material import Material


class Cylinder(Shape):
    """
    A unit-radius cylinder around the local y axis.

    The cylinder is infinite unless minimum/maximum truncate it; the
    bounds themselves are exclusive for the side surface. When closed,
    disks of radius 1 cap both ends.
    """

    def __init__(self, transform: Matrix4 = IDENTITY, material: Material = None,
                 minimum: float = -INFINITY, maximum: float = INFINITY, closed: bool = False):
        super().__init__(transform, material)
        self._minimum = minimum
        self._maximum = maximum
        self._closed = closed

    @property
    def minimum(self) -> float:
        return self._minimum

    @minimum.setter
    def minimum(self, value: float):
        self._minimum = value
        self._bounds_changed()

    @property
    def maximum(self) -> float:
        return self._maximum

    @maximum.setter
    def maximum(self, value: float):
        self._maximum = value
        self._bounds_changed()

    @property
    def closed(self) -> bool:
        return self._closed

    @closed.setter
    def closed(self, value: bool):
        self._closed = value
        self._bounds_changed()

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        xs = []
        o, d = ray.origin, ray.direction
        a = d.x * d.x + d.z * d.z

        # Rays parallel to the y axis can only hit the caps.
        if abs(a) >= EPSILON:
            b = 2.0 * o.x * d.x + 2.0 * o.z * d.z
            c = o.x * o.x + o.z * o.z - 1.0
            disc = b * b - 4.0 * a * c
            if disc < 0:
                return []
            sqrt_disc = math.sqrt(disc)
            t0 = (-b - sqrt_disc) / (2.0 * a)
            t1 = (-b + sqrt_disc) / (2.0 * a)
            if t0 > t1:
                t0, t1 = t1, t0
            for t in (t0, t1):
                y = o.y + t * d.y
                if self.minimum < y < self.maximum:
                    xs.append(Intersection(t, self))

        self._intersect_caps(ray, xs)
        return xs

    @staticmethod
    def _check_cap(ray: Ray, t: float) -> bool:
        # Is the point at t within the unit radius of the y axis?
        x = ray.origin.x + t * ray.direction.x
        z = ray.origin.z + t * ray.direction.z
        return x * x + z * z <= 1.0

    def _intersect_caps(self, ray: Ray, xs: List[Intersection]):
        if not self.closed or abs(ray.direction.y) < EPSILON:
            return
        for cap_y in (self.minimum, self.maximum):
            if math.isinf(cap_y):
                continue
            t = (cap_y - ray.origin.y) / ray.direction.y
            if self._check_cap(ray, t):
                xs.append(Intersection(t, self))

    def local_normal_at(self, local_point: Vector4) -> Vector4:
        dist = local_point.x * local_point.x + local_point.z * local_point.z
        if dist < 1.0 and local_point.y >= self.maximum - EPSILON:
            return vector(0, 1, 0)
        if dist < 1.0 and local_point.y <= self.minimum + EPSILON:
            return vector(0, -1, 0)
        return vector(local_point.x, 0, local_point.z)

    def bounds(self) -> AABB:
        return AABB(point(-1, self.minimum, -1), point(1, self.maximum, 1))
