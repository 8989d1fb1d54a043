# geometry/sphere.py
import math
from typing import List

from whitted.core.aabb import AABB
from whitted.core.ray import Ray
from whitted.core.vector import Vector4, point, vector
from whitted.geometry.hittable import Shape
from whitted.geometry.intersection import Intersection


class Sphere(Shape):
    """
    A unit sphere centered at the origin of its local space. Position and
    radius come from the transform.
    """

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        # Vector from the sphere's center to the ray origin.
        oc = vector(ray.origin.x, ray.origin.y, ray.origin.z)
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(oc)
        c = oc.dot(oc) - 1.0
        discriminant = b * b - 4.0 * a * c

        if a == 0 or discriminant < 0:
            return []

        sqrt_disc = math.sqrt(discriminant)
        t1 = (-b - sqrt_disc) / (2.0 * a)
        t2 = (-b + sqrt_disc) / (2.0 * a)
        return [Intersection(t1, self), Intersection(t2, self)]

    def local_normal_at(self, local_point: Vector4) -> Vector4:
        return vector(local_point.x, local_point.y, local_point.z)

    def bounds(self) -> AABB:
        return AABB(point(-1, -1, -1), point(1, 1, 1))


def glass_sphere(**kwargs) -> Sphere:
    """
    A fully transparent sphere with a refractive index of 1.5.
    """
    s = Sphere(**kwargs)
    s.material.transparency = 1.0
    s.material.refractive_index = 1.5
    return s
