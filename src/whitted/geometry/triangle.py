# geometry/triangle.py
from typing import List

from whitted.core.aabb import AABB
from whitted.core.matrix import IDENTITY, Matrix4
from whitted.core.ray import Ray
from whitted.core.utils import EPSILON
from whitted.core.vector import Vector4, point
from whitted.geometry.hittable import Shape
from whitted.geometry.intersection import Intersection
from whitted.materials.material import Material


class Triangle(Shape):
    """
    A flat triangle. Edge vectors and the face normal are computed once at
    construction.
    """

    def __init__(self, p1: Vector4, p2: Vector4, p3: Vector4,
                 transform: Matrix4 = IDENTITY, material: Material = None):
        super().__init__(transform, material)
        self.set_points(p1, p2, p3)

    @property
    def p1(self) -> Vector4:
        return self._p1

    @p1.setter
    def p1(self, value: Vector4):
        self.set_points(value, self._p2, self._p3)

    @property
    def p2(self) -> Vector4:
        return self._p2

    @p2.setter
    def p2(self, value: Vector4):
        self.set_points(self._p1, value, self._p3)

    @property
    def p3(self) -> Vector4:
        return self._p3

    @p3.setter
    def p3(self, value: Vector4):
        self.set_points(self._p1, self._p2, value)

    def set_points(self, p1: Vector4, p2: Vector4, p3: Vector4):
        """Moves the vertices and recomputes the edges and face normal."""
        self._p1, self._p2, self._p3 = p1, p2, p3
        self.e1 = p2 - p1
        self.e2 = p3 - p1
        self.normal = self.e2.cross(self.e1).normalize()
        self._bounds_changed()

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        # Möller–Trumbore intersection algorithm
        dir_cross_e2 = ray.direction.cross(self.e2)
        det = self.e1.dot(dir_cross_e2)

        # Ray is parallel to the triangle, or the triangle is degenerate.
        if abs(det) < EPSILON:
            return []

        f = 1.0 / det
        p1_to_origin = ray.origin - self.p1
        u = f * p1_to_origin.dot(dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return []

        origin_cross_e1 = p1_to_origin.cross(self.e1)
        v = f * ray.direction.dot(origin_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return []

        t = f * self.e2.dot(origin_cross_e1)
        return [Intersection(t, self)]

    def local_normal_at(self, local_point: Vector4) -> Vector4:
        return self.normal

    def bounds(self) -> AABB:
        """Compute the bounding box for the triangle."""
        min_x = min(self.p1.x, self.p2.x, self.p3.x)
        min_y = min(self.p1.y, self.p2.y, self.p3.y)
        min_z = min(self.p1.z, self.p2.z, self.p3.z)
        max_x = max(self.p1.x, self.p2.x, self.p3.x)
        max_y = max(self.p1.y, self.p2.y, self.p3.y)
        max_z = max(self.p1.z, self.p2.z, self.p3.z)
        return AABB(point(min_x, min_y, min_z), point(max_x, max_y, max_z))

    def __repr__(self) -> str:
        return f"Triangle({self.p1!r}, {self.p2!r}, {self.p3!r})"
