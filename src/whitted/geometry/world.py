# geometry/world.py
"""
The illumination engine.

A World is built once before rendering and only read afterwards, so one
instance can be shared by any number of rendering threads. All recursion
depth bookkeeping is passed explicitly through color_at(); nothing here
keeps per-ray state.
"""
import logging
import math
from typing import Iterable, List, Optional

from whitted.core.color import BLACK, Color
from whitted.core.matrix import scaling
from whitted.core.ray import Ray
from whitted.core.vector import Vector4, point
from whitted.geometry.group import Group
from whitted.geometry.hittable import SceneGraphError, Shape
from whitted.geometry.intersection import (
    Computations,
    Intersection,
    hit,
    prepare_computations,
    schlick,
    sort_intersections,
)
from whitted.geometry.sphere import Sphere
from whitted.materials.light import PointLight
from whitted.materials.material import Material, lighting
from whitted.materials.patterns import SolidPattern

logger = logging.getLogger(__name__)

# Conventional bound on reflection/refraction bounces per camera ray.
MAX_RECURSION_DEPTH = 5

BACKGROUND = BLACK


class World:
    """
    An ordered list of top-level shapes lit by a single point light.
    """

    def __init__(self, objects: Optional[Iterable[Shape]] = None,
                 light: Optional[PointLight] = None):
        self.objects: List[Shape] = []
        self.light = light
        for obj in objects or ():
            self.add(obj)

    def add(self, obj: Shape) -> Shape:
        if obj.parent is not None:
            raise SceneGraphError(f"{obj!r} belongs to a group; add the group instead")
        if any(existing is obj for existing in self.objects):
            raise SceneGraphError(f"{obj!r} is already in the world")
        self.objects.append(obj)
        logger.debug("Added %r to world (%d objects)", obj, len(self.objects))
        return obj

    def prepare(self):
        """
        Fills the bounding-box cache of every group so that rendering only
        reads the scene.
        """
        for obj in self.objects:
            if isinstance(obj, Group):
                obj.bounds()

    def intersect(self, ray: Ray) -> List[Intersection]:
        """
        Every intersection of ray with every object, sorted by t.
        """
        xs = []
        for obj in self.objects:
            xs.extend(obj.intersect(ray))
        return sort_intersections(xs)

    def is_shadowed(self, p: Vector4) -> bool:
        """
        True when an object sits between p and the light. Objects beyond
        the light do not cast shadows.
        """
        if self.light is None:
            return True
        to_light = self.light.position - p
        distance = to_light.magnitude()
        h = hit(self.intersect(Ray(p, to_light.normalize())))
        return h is not None and h.t < distance

    def shade_hit(self, comps: Computations, remaining: int = MAX_RECURSION_DEPTH) -> Color:
        material = comps.object.material
        if self.light is None:
            surface = BLACK
        else:
            surface = lighting(material, comps.object, self.light, comps.over_point,
                               comps.eyev, comps.normalv, self.is_shadowed(comps.over_point))

        reflected = self.reflected_color(comps, remaining)
        refracted = self.refracted_color(comps, remaining)

        if material.reflective > 0 and material.transparency > 0:
            reflectance = schlick(comps)
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)
        return surface + reflected + refracted

    def reflected_color(self, comps: Computations, remaining: int = MAX_RECURSION_DEPTH) -> Color:
        reflective = comps.object.material.reflective
        if reflective == 0 or remaining <= 0:
            return BLACK
        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * reflective

    def refracted_color(self, comps: Computations, remaining: int = MAX_RECURSION_DEPTH) -> Color:
        transparency = comps.object.material.transparency
        if transparency == 0 or remaining <= 0:
            return BLACK

        # Snell's law in vector form.
        n_ratio = comps.n1 / comps.n2
        cos_i = comps.eyev.dot(comps.normalv)
        sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            # Total internal reflection: no refracted ray exists.
            return BLACK

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
        refract_ray = Ray(comps.under_point, direction)
        return self.color_at(refract_ray, remaining - 1) * transparency

    def color_at(self, ray: Ray, remaining: int = MAX_RECURSION_DEPTH) -> Color:
        """
        The color seen along ray. remaining bounds how many more
        reflective or refractive bounces may be traced.
        """
        xs = self.intersect(ray)
        h = hit(xs)
        if h is None:
            return BACKGROUND
        return self.shade_hit(prepare_computations(h, ray, xs), remaining)


def default_world() -> World:
    """
    Two concentric spheres lit from the upper left, front.
    """
    outer = Sphere(material=Material(
        pattern=SolidPattern(Color(0.8, 1.0, 0.6)),
        diffuse=0.7,
        specular=0.2,
    ))
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
    return World([outer, inner], PointLight(point(-10, 10, -10), Color(1, 1, 1)))
