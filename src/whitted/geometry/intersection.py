# geometry/intersection.py
"""
Intersection records and per-hit shading geometry.

A raw list of intersections carries no ordering guarantee; hit() picks the
visible one and prepare_computations() derives everything the shading code
needs from it (hit point, eye and normal vectors, biased points, and the
refractive indices on either side of the surface).
"""
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from whitted.core.ray import Ray
from whitted.core.utils import EPSILON, equal
from whitted.core.vector import Vector4

if TYPE_CHECKING:
    from whitted.geometry.hittable import Shape

VACUUM_INDEX = 1.0


class Intersection:
    """
    A ray parameter t paired with the primitive that produced it.
    """
    __slots__ = ("t", "object")

    def __init__(self, t: float, obj: "Shape"):
        self.t = t
        self.object = obj

    def __eq__(self, other) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.object is other.object and equal(self.t, other.t)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Intersection(t={self.t}, object={type(self.object).__name__})"


def intersections(*xs: Intersection) -> List[Intersection]:
    return list(xs)


def sort_intersections(xs: Iterable[Intersection]) -> List[Intersection]:
    """
    Sorts ascending by t.

    Raises:
        ValueError: if any t is NaN, since NaN breaks the total order.
    """
    xs = list(xs)
    for i in xs:
        if math.isnan(i.t):
            raise ValueError(f"NaN intersection from {i.object!r}")
    xs.sort(key=lambda i: i.t)
    return xs


def hit(xs: Iterable[Intersection]) -> Optional[Intersection]:
    """
    Returns the intersection with the smallest positive t, or None.
    Intersections at or behind the ray origin are never visible.
    """
    best = None
    for i in xs:
        if i.t > 0 and (best is None or i.t < best.t):
            best = i
    return best


@dataclass
class Computations:
    """
    Shading geometry derived from one intersection of one ray.
    """
    t: float
    object: "Shape"
    point: Vector4
    eyev: Vector4
    normalv: Vector4
    inside: bool
    over_point: Vector4
    under_point: Vector4
    reflectv: Vector4
    n1: float = VACUUM_INDEX
    n2: float = VACUUM_INDEX


def _refractive_indices(target: Intersection, xs: Sequence[Intersection]):
    # Replays the ray's intersections with a stack of the shapes the ray is
    # currently inside. The stack lives only for this call.
    by_identity = any(i is target for i in xs)
    containers: List["Shape"] = []
    n1 = n2 = VACUUM_INDEX
    for i in xs:
        is_target = i is target if by_identity else i == target
        if is_target:
            n1 = containers[-1].material.refractive_index if containers else VACUUM_INDEX

        for index, shape in enumerate(containers):
            if shape is i.object:
                del containers[index]
                break
        else:
            containers.append(i.object)

        if is_target:
            n2 = containers[-1].material.refractive_index if containers else VACUUM_INDEX
            break
    return n1, n2


def prepare_computations(target: Intersection, ray: Ray,
                         xs: Optional[Sequence[Intersection]] = None) -> Computations:
    """
    Precomputes the shading state for target.

    Args:
        target: The intersection being shaded (usually the hit).
        ray: The ray that produced it.
        xs: Every intersection of the ray, sorted by t. Needed to resolve
            n1/n2 for nested transparent objects; defaults to [target].
    """
    if xs is None:
        xs = [target]
    p = ray.at(target.t)
    normalv = target.object.normal_at(p)
    eyev = -ray.direction
    inside = normalv.dot(eyev) < 0
    if inside:
        normalv = -normalv
    n1, n2 = _refractive_indices(target, xs)
    return Computations(
        t=target.t,
        object=target.object,
        point=p,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        over_point=p + normalv * EPSILON,
        under_point=p - normalv * EPSILON,
        reflectv=ray.direction.reflect(normalv),
        n1=n1,
        n2=n2,
    )


def schlick(comps: Computations) -> float:
    """
    Schlick's approximation of the Fresnel reflectance at the surface.
    Returns 1.0 under total internal reflection.
    """
    cos = comps.eyev.dot(comps.normalv)
    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)
    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5
