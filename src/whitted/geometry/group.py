# geometry/group.py
from typing import Iterable, List, Optional

from whitted.core.aabb import AABB
from whitted.core.matrix import IDENTITY, Matrix4
from whitted.core.ray import Ray
from whitted.core.vector import Vector4
from whitted.geometry.hittable import SceneGraphError, Shape
from whitted.geometry.intersection import Intersection
from whitted.materials.material import Material


class Group(Shape):
    """
    An ordered collection of child shapes sharing one transform.

    The group owns its children; each child holds only a weak reference
    back to the group. Rays that miss the union of the children's bounding
    boxes skip the whole subtree.
    """

    def __init__(self, transform: Matrix4 = IDENTITY, material: Optional[Material] = None,
                 children: Iterable[Shape] = ()):
        super().__init__(transform, material)
        self.children: List[Shape] = []
        self._bounds: Optional[AABB] = None
        for child in children:
            self.add_child(child)

    def add_child(self, shape: Shape) -> Shape:
        """
        Appends shape and makes this group its parent.

        Raises:
            SceneGraphError: if shape already has a parent, or if adding it
                would make a group contain itself.
        """
        ancestor = self
        while ancestor is not None:
            if ancestor is shape:
                raise SceneGraphError("a group cannot contain itself")
            ancestor = ancestor.parent
        shape._attach(self)
        self.children.append(shape)
        self._invalidate_bounds()
        return shape

    def extend(self, shapes: Iterable[Shape]):
        for shape in shapes:
            self.add_child(shape)

    def remove_child(self, shape: Shape):
        for index, child in enumerate(self.children):
            if child is shape:
                del self.children[index]
                shape._detach()
                self._invalidate_bounds()
                return
        raise SceneGraphError(f"{shape!r} is not a child of this group")

    def _invalidate_bounds(self):
        group = self
        while group is not None:
            group._bounds = None
            group = group.parent

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self):
        return iter(self.children)

    def bounds(self) -> AABB:
        if self._bounds is None:
            box = AABB.empty()
            for child in self.children:
                box = AABB.surrounding_box(box, child.parent_space_bounds())
            self._bounds = box
        return self._bounds

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        if not self.bounds().hit(ray):
            return []
        xs = []
        for child in self.children:
            xs.extend(child.intersect(ray))
        return xs

    def local_normal_at(self, local_point: Vector4) -> Vector4:
        raise NotImplementedError("groups have no surface; normals come from their children")

    def __repr__(self) -> str:
        return f"Group({len(self.children)} children)"
