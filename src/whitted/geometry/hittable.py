# geometry/hittable.py
import weakref
from typing import TYPE_CHECKING, List, Optional

from whitted.core.aabb import AABB
from whitted.core.matrix import IDENTITY, Matrix4
from whitted.core.ray import Ray
from whitted.core.vector import Vector4
from whitted.geometry.intersection import Intersection
from whitted.materials.material import Material

if TYPE_CHECKING:
    from whitted.geometry.group import Group


class SceneGraphError(ValueError):
    """Raised when a shape would end up with two parents or inside itself."""


class Shape:
    """
    Abstract base for everything that can be hit by a ray.

    A shape carries a transform relative to its parent, a material and a
    weak back-reference to the group that owns it. The back-reference is
    only used to convert between world and object space; ownership flows
    from groups to their children.

    Subclasses implement local_intersect(), local_normal_at() and bounds()
    in their own untransformed coordinate frame.
    """

    def __init__(self, transform: Matrix4 = IDENTITY, material: Optional[Material] = None):
        self._parent_ref = None
        self.transform = transform
        self.material = material if material is not None else Material()

    @property
    def transform(self) -> Matrix4:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix4):
        # Inverting here makes a degenerate transform fail at scene
        # construction instead of in the middle of a render.
        self._inverse = value.inverse()
        self._inverse_transpose = self._inverse.transpose()
        self._transform = value
        self._bounds_changed()

    def _bounds_changed(self):
        # Enclosing groups cache the union of their children's boxes.
        parent = self.parent
        if parent is not None:
            parent._invalidate_bounds()

    @property
    def inverse(self) -> Matrix4:
        return self._inverse

    @property
    def parent(self) -> Optional["Group"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _attach(self, group: "Group"):
        if self.parent is not None:
            raise SceneGraphError(f"{self!r} already belongs to {self.parent!r}")
        self._parent_ref = weakref.ref(group)

    def _detach(self):
        self._parent_ref = None

    def intersect(self, ray: Ray) -> List[Intersection]:
        """
        Intersects a world (or parent) space ray with this shape.
        """
        return self.local_intersect(ray.transform(self._inverse))

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        raise NotImplementedError("local_intersect() must be implemented by subclasses.")

    def local_normal_at(self, local_point: Vector4) -> Vector4:
        raise NotImplementedError("local_normal_at() must be implemented by subclasses.")

    def bounds(self) -> AABB:
        raise NotImplementedError("bounds() must be implemented by subclasses.")

    def parent_space_bounds(self) -> AABB:
        return self.bounds().transform(self._transform)

    def world_to_object(self, world_point: Vector4) -> Vector4:
        parent = self.parent
        if parent is not None:
            world_point = parent.world_to_object(world_point)
        return self._inverse.multiply_tuple(world_point)

    def normal_to_world(self, normal: Vector4) -> Vector4:
        n = self._inverse_transpose.multiply_tuple(normal)
        # Normals are directions: drop whatever translation leaked into w.
        n = Vector4(n.x, n.y, n.z, 0.0).normalize()
        parent = self.parent
        if parent is not None:
            n = parent.normal_to_world(n).normalize()
        return n

    def normal_at(self, world_point: Vector4) -> Vector4:
        local_point = self.world_to_object(world_point)
        local_normal = self.local_normal_at(local_point)
        return self.normal_to_world(local_normal)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transform={self._transform!r})"
