"""Unit tests for groups and the scene graph.

Tests cover:
- Parenting rules (single parent, no cycles)
- Intersecting through nested transforms
- world_to_object / normal_to_world through parent chains
- Bounding-box culling
"""

import gc
import math

import pytest

from conftest import RecordingShape, assert_tuple
from whitted.core.matrix import IDENTITY, rotation_y, scaling, translation
from whitted.core.ray import Ray
from whitted.core.vector import point, vector
from whitted.geometry.cylinder import Cylinder
from whitted.geometry.group import Group
from whitted.geometry.hittable import SceneGraphError
from whitted.geometry.intersection import sort_intersections
from whitted.geometry.sphere import Sphere
from whitted.geometry.triangle import Triangle
from whitted.geometry.world import World


class TestParenting:

    def test_new_group_is_empty(self):
        g = Group()
        assert g.transform == IDENTITY
        assert len(g) == 0

    def test_add_child(self):
        g = Group()
        s = RecordingShape()
        g.add_child(s)
        assert list(g) == [s]
        assert s.parent is g

    def test_shape_without_parent(self):
        assert Sphere().parent is None

    def test_child_cannot_have_two_parents(self):
        s = Sphere()
        g = Group(children=[s])
        other = Group()
        with pytest.raises(SceneGraphError):
            other.add_child(s)
        assert s.parent is g
        assert len(other) == 0

    def test_group_cannot_contain_itself(self):
        g = Group()
        with pytest.raises(SceneGraphError):
            g.add_child(g)

    def test_cycle_through_ancestor_is_rejected(self):
        outer = Group()
        inner = Group()
        outer.add_child(inner)
        with pytest.raises(SceneGraphError):
            inner.add_child(outer)

    def test_remove_child(self):
        g = Group()
        s = g.add_child(Sphere())
        g.remove_child(s)
        assert len(g) == 0
        assert s.parent is None
        Group().add_child(s)

    def test_remove_unknown_child(self):
        with pytest.raises(SceneGraphError):
            Group().remove_child(Sphere())

    def test_parent_reference_is_weak(self):
        s = Sphere()
        Group(children=[s])
        gc.collect()
        assert s.parent is None
        Group().add_child(s)

    def test_world_rejects_grouped_shapes(self):
        s = Sphere()
        g = Group(children=[s])
        with pytest.raises(SceneGraphError):
            World([s])
        World([g])

    def test_world_rejects_duplicates(self):
        s = Sphere()
        with pytest.raises(SceneGraphError):
            World([s, s])


class TestGroupIntersection:

    def test_empty_group(self):
        assert Group().local_intersect(Ray(point(0, 0, 0), vector(0, 0, 1))) == []

    def test_nonempty_group(self):
        s1 = Sphere()
        s2 = Sphere(transform=translation(0, 0, -3))
        s3 = Sphere(transform=translation(5, 0, 0))
        g = Group(children=[s1, s2, s3])
        xs = sort_intersections(g.local_intersect(Ray(point(0, 0, -5), vector(0, 0, 1))))
        assert [i.object for i in xs] == [s2, s2, s1, s1]

    def test_transformed_group(self):
        s = Sphere(transform=translation(5, 0, 0))
        g = Group(transform=scaling(2, 2, 2), children=[s])
        xs = g.intersect(Ray(point(10, 0, -10), vector(0, 0, 1)))
        assert len(xs) == 2

    def test_culling_skips_children_when_bounds_miss(self):
        child = RecordingShape()
        g = Group(children=[child])
        g.intersect(Ray(point(0, 0, -5), vector(0, 1, 0)))
        assert child.calls == 0

    def test_children_tested_when_bounds_hit(self):
        child = RecordingShape()
        g = Group(children=[child])
        g.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert child.calls == 1


class TestGroupBounds:

    def test_bounds_of_children(self):
        s = Sphere(transform=translation(2, 5, -3) @ scaling(2, 2, 2))
        c = Cylinder(transform=translation(-4, -1, 4) @ scaling(0.5, 1, 0.5), minimum=-2, maximum=2)
        g = Group(children=[s, c])
        box = g.bounds()
        assert box.minimum == point(-4.5, -3, -5)
        assert box.maximum == point(4, 7, 4.5)

    def test_bounds_follow_child_transform_changes(self):
        s = Sphere()
        g = Group(children=[s])
        assert g.bounds().maximum == point(1, 1, 1)
        s.transform = translation(10, 0, 0)
        assert g.bounds().maximum == point(11, 1, 1)

    def test_nested_bounds_invalidate_upwards(self):
        s = Sphere()
        inner = Group(children=[s])
        outer = Group(children=[inner])
        assert outer.bounds().maximum == point(1, 1, 1)
        inner.add_child(Sphere(transform=translation(0, 5, 0)))
        assert outer.bounds().maximum == point(1, 6, 1)

    def test_extending_a_cylinder_reaches_rays_above_old_bounds(self):
        cyl = Cylinder(minimum=0, maximum=1, closed=True)
        g = Group(children=[cyl])
        r = Ray(point(0, 3, -5), vector(0, 0, 1))
        assert g.intersect(r) == []
        cyl.maximum = 5.0
        xs = g.intersect(r)
        assert len(xs) == 2
        assert all(i.object is cyl for i in xs)

    def test_lowering_cylinder_minimum_grows_group_bounds(self):
        cyl = Cylinder(minimum=0, maximum=1)
        g = Group(children=[cyl])
        assert g.bounds().minimum == point(-1, 0, -1)
        cyl.minimum = -2.0
        assert g.bounds().minimum == point(-1, -2, -1)

    def test_moving_triangle_vertex_updates_group(self):
        t = Triangle(point(0, 1, 0), point(-1, 0, 0), point(1, 0, 0))
        g = Group(children=[t])
        r = Ray(point(0, 3, -2), vector(0, 0, 1))
        assert g.bounds().maximum == point(1, 1, 0)
        assert g.intersect(r) == []

        t.p1 = point(0, 4, 0)
        assert t.e1 == vector(-1, -4, 0)
        assert t.e2 == vector(1, -4, 0)
        assert t.normal == vector(0, 0, -1)
        assert g.bounds().maximum == point(1, 4, 0)
        xs = g.intersect(r)
        assert len(xs) == 1
        assert xs[0].t == pytest.approx(2.0)

    def test_world_prepare_fills_nested_bounds(self):
        inner = Group(children=[Sphere()])
        outer = Group(children=[inner])
        World([outer]).prepare()
        assert outer._bounds is not None
        assert inner._bounds is not None

    def test_group_has_no_surface_normal(self):
        with pytest.raises(NotImplementedError):
            Group().local_normal_at(point(0, 0, 0))


class TestSpaceConversion:

    def build(self):
        g1 = Group(transform=rotation_y(math.pi / 2))
        g2 = Group(transform=scaling(1, 2, 3))
        g1.add_child(g2)
        s = Sphere(transform=translation(5, 0, 0))
        g2.add_child(s)
        return g1, g2, s

    def test_world_to_object(self):
        g1 = Group(transform=rotation_y(math.pi / 2))
        g2 = Group(transform=scaling(2, 2, 2))
        g1.add_child(g2)
        s = Sphere(transform=translation(5, 0, 0))
        g2.add_child(s)
        assert s.world_to_object(point(-2, 0, -10)) == point(0, 0, -1)

    def test_normal_to_world(self):
        g1, g2, s = self.build()
        r = math.sqrt(3) / 3
        n = s.normal_to_world(vector(r, r, r))
        assert_tuple(n, (0.2857, 0.4286, -0.8571, 0))

    def test_normal_on_child(self):
        g1, g2, s = self.build()
        n = s.normal_at(point(1.7321, 1.1547, -5.5774))
        assert_tuple(n, (0.2857, 0.4286, -0.8571, 0))
        assert n.magnitude() == pytest.approx(1.0)

    @pytest.mark.parametrize("p", [point(0, 0, 0), point(1.5, -2, 7), point(-3, 4, -5)])
    def test_translation_round_trip(self, p):
        g = Group(transform=translation(1, 2, 3))
        s = Sphere(transform=translation(-4, 0.5, 2))
        g.add_child(s)
        local = s.world_to_object(p)
        assert g.transform.multiply_tuple(s.transform.multiply_tuple(local)) == p
