import math

import pytest

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.primitives import (
    AABB,
    Cylinder,
    CylinderSurface,
    Ray3,
    RaySphereRelation,
    Sphere,
    SphereRelation,
    aabb_aabb_intersection,
    point_in_aabb,
    ray_aabb_intersection,
    ray_cylinder_intersection,
    ray_sphere_intersection,
    sphere_sphere_intersection,
)
from vecgeom.vector import Vector3, vclose


class TestConstruction:

    def test_sphere(self):
        s = Sphere((1, 2, 3), 4)
        assert s.center == Vector3(1, 2, 3)
        assert s.radius == 4.0
        with pytest.raises(InvalidArgument):
            Sphere((0, 0, 0), -1)

    def test_cylinder(self):
        c = Cylinder((0, 0, 0), (0, 0, 2), 1, 5)
        assert c.unit_axis() == Vector3(0, 0, 1)
        assert c.top_center() == Vector3(0, 0, 5)
        with pytest.raises(InvalidArgument):
            Cylinder((0, 0, 0), (0, 0, 1), 1, -5)
        with pytest.raises(DegenerateInputError):
            Cylinder((0, 0, 0), (0, 0, 0), 1, 5)

    def test_aabb(self):
        box = AABB((0, 0, 0), (2, 4, 6))
        assert box.center() == Vector3(1, 2, 3)
        assert box.dimensions() == Vector3(2, 4, 6)
        assert box.volume() == 48.0
        assert AABB((1, 1, 1), (1, 2, 3)).volume() == 0.0
        with pytest.raises(InvalidArgument):
            AABB((0, 3, 0), (1, 2, 1))

    def test_point_in_aabb(self):
        box = AABB((0, 0, 0), (1, 1, 1))
        assert point_in_aabb(box, (0.5, 0.5, 0.5))
        assert point_in_aabb(box, (1, 1, 1))
        assert not point_in_aabb(box, (1.5, 0.5, 0.5))

    def test_zero_ray_direction(self):
        with pytest.raises(DegenerateInputError):
            ray_sphere_intersection(Ray3((0, 0, 0), (0, 0, 0)), Sphere((0, 0, 0), 1))


class TestRaySphere:

    def test_secant(self):
        r = ray_sphere_intersection(Ray3((-5, 0, 0), (1, 0, 0)), Sphere((0, 0, 0), 2))
        assert r.kind is RaySphereRelation.SECANT
        assert r.intersects
        assert [h.distance for h in r.hits] == pytest.approx([3.0, 7.0])
        assert vclose(r.hits[0].point, Vector3(-2, 0, 0))
        assert vclose(r.hits[1].point, Vector3(2, 0, 0))
        assert vclose(r.hits[0].normal, Vector3(-1, 0, 0))
        assert vclose(r.hits[1].normal, Vector3(1, 0, 0))

    def test_unnormalized_direction(self):
        r = ray_sphere_intersection(Ray3((-5, 0, 0), (10, 0, 0)), Sphere((0, 0, 0), 2))
        assert [h.distance for h in r.hits] == pytest.approx([3.0, 7.0])

    def test_tangent(self):
        r = ray_sphere_intersection(Ray3((-5, 2, 0), (1, 0, 0)), Sphere((0, 0, 0), 2))
        assert r.kind is RaySphereRelation.TANGENT
        assert len(r.hits) == 1
        assert vclose(r.hits[0].point, Vector3(0, 2, 0))
        assert vclose(r.hits[0].normal, Vector3(0, 1, 0))

    def test_miss(self):
        r = ray_sphere_intersection(Ray3((-5, 3, 0), (1, 0, 0)), Sphere((0, 0, 0), 2))
        assert r.kind is RaySphereRelation.MISS
        assert r.hits == ()
        assert not r.intersects

    def test_origin_inside(self):
        r = ray_sphere_intersection(Ray3((0, 0, 0), (0, 1, 0)), Sphere((0, 0, 0), 2))
        assert r.kind is RaySphereRelation.SECANT
        assert len(r.hits) == 1
        assert math.isclose(r.hits[0].distance, 2.0)

    def test_sphere_behind(self):
        r = ray_sphere_intersection(Ray3((5, 0, 0), (1, 0, 0)), Sphere((0, 0, 0), 2))
        assert r.kind is RaySphereRelation.SECANT
        assert not r.intersects

    def test_zero_radius_normal(self):
        r = ray_sphere_intersection(Ray3((-1, 0, 0), (1, 0, 0)), Sphere((0, 0, 0), 0))
        assert r.kind is RaySphereRelation.TANGENT
        assert r.hits[0].normal == Vector3(0, 0, 0)

    def test_as_dict(self):
        r = ray_sphere_intersection(Ray3((-5, 0, 0), (1, 0, 0)), Sphere((0, 0, 0), 2))
        d = r.as_dict()
        assert d['kind'] == 'secant'
        assert d['hits'][0]['point'] == {'x': -2.0, 'y': 0.0, 'z': 0.0}


class TestSphereSphere:

    def test_separate(self):
        r = sphere_sphere_intersection(Sphere((0, 0, 0), 1), Sphere((5, 0, 0), 1))
        assert r.kind is SphereRelation.SEPARATE
        assert math.isclose(r.center_distance, 5.0)
        assert r.circle is None

    def test_external_tangent(self):
        r = sphere_sphere_intersection(Sphere((0, 0, 0), 1), Sphere((3, 0, 0), 2))
        assert r.kind is SphereRelation.EXTERNAL_TANGENT
        assert vclose(r.contact_point, Vector3(1, 0, 0))

    def test_internal_tangent(self):
        r = sphere_sphere_intersection(Sphere((0, 0, 0), 3), Sphere((1, 0, 0), 2))
        assert r.kind is SphereRelation.INTERNAL_TANGENT
        assert vclose(r.contact_point, Vector3(3, 0, 0))

        r = sphere_sphere_intersection(Sphere((1, 0, 0), 2), Sphere((0, 0, 0), 3))
        assert r.kind is SphereRelation.INTERNAL_TANGENT
        assert vclose(r.contact_point, Vector3(3, 0, 0))

    def test_one_inside_other(self):
        r = sphere_sphere_intersection(Sphere((0, 0, 0), 5), Sphere((1, 0, 0), 1))
        assert r.kind is SphereRelation.ONE_INSIDE_OTHER
        r = sphere_sphere_intersection(Sphere((0, 0, 0), 1), Sphere((0, 0, 0), 5))
        assert r.kind is SphereRelation.ONE_INSIDE_OTHER

    def test_identical(self):
        r = sphere_sphere_intersection(Sphere((1, 1, 1), 2), Sphere((1, 1, 1), 2))
        assert r.kind is SphereRelation.INTERNAL_TANGENT
        assert r.contact_point is None

    def test_intersecting(self):
        r = sphere_sphere_intersection(Sphere((0, 0, 0), 5), Sphere((8, 0, 0), 5))
        assert r.kind is SphereRelation.INTERSECTING
        assert vclose(r.circle.center, Vector3(4, 0, 0))
        assert math.isclose(r.circle.radius, 3.0)
        assert vclose(r.circle.normal, Vector3(1, 0, 0))


class TestRayCylinder:

    cyl = Cylinder((0, 0, 0), (0, 0, 1), 1, 4)

    def test_side_hits(self):
        r = ray_cylinder_intersection(Ray3((-5, 0, 2), (1, 0, 0)), self.cyl)
        assert r.intersects
        assert [h.surface for h in r.hits] == [CylinderSurface.SIDE, CylinderSurface.SIDE]
        assert [h.distance for h in r.hits] == pytest.approx([4.0, 6.0])
        assert vclose(r.nearest.point, Vector3(-1, 0, 2))
        assert vclose(r.nearest.normal, Vector3(-1, 0, 0))

    def test_cap_hits_along_axis(self):
        r = ray_cylinder_intersection(Ray3((0.5, 0, -3), (0, 0, 1)), self.cyl)
        assert [h.surface for h in r.hits] == [CylinderSurface.BASE_CAP, CylinderSurface.TOP_CAP]
        assert [h.distance for h in r.hits] == pytest.approx([3.0, 7.0])
        assert r.hits[0].normal == Vector3(0, 0, -1)
        assert r.hits[1].normal == Vector3(0, 0, 1)

    def test_side_then_cap(self):
        r = ray_cylinder_intersection(Ray3((-2, 0, 2), (1, 0, 1)), self.cyl)
        assert [h.surface for h in r.hits] == [CylinderSurface.SIDE, CylinderSurface.TOP_CAP]
        assert vclose(r.hits[0].point, Vector3(-1, 0, 3))
        assert vclose(r.hits[1].point, Vector3(0, 0, 4))

    def test_passes_above(self):
        r = ray_cylinder_intersection(Ray3((-5, 0, 5), (1, 0, 0)), self.cyl)
        assert not r.intersects
        assert r.nearest is None

    def test_parallel_outside(self):
        r = ray_cylinder_intersection(Ray3((3, 0, -1), (0, 0, 1)), self.cyl)
        assert r.hits == ()

    def test_tilted_axis(self):
        cyl = Cylinder((0, 0, 0), (1, 0, 0), 2, 10)
        r = ray_cylinder_intersection(Ray3((5, 0, 10), (0, 0, -1)), cyl)
        assert [h.distance for h in r.hits] == pytest.approx([8.0, 12.0])
        assert vclose(r.nearest.normal, Vector3(0, 0, 1))


class TestRayBox:

    box = AABB((0, 0, 0), (2, 2, 2))

    def test_through(self):
        r = ray_aabb_intersection(Ray3((-1, 1, 1), (1, 0, 0)), self.box)
        assert r.intersects
        assert not r.origin_inside
        assert math.isclose(r.t_enter, 1.0)
        assert math.isclose(r.t_exit, 3.0)
        assert r.hits[0].normal == Vector3(-1, 0, 0)
        assert r.hits[1].normal == Vector3(1, 0, 0)
        assert vclose(r.hits[1].point, Vector3(2, 1, 1))

    def test_negative_direction(self):
        r = ray_aabb_intersection(Ray3((1, 5, 1), (0, -1, 0)), self.box)
        assert math.isclose(r.t_enter, 3.0)
        assert r.hits[0].normal == Vector3(0, 1, 0)
        assert r.hits[1].normal == Vector3(0, -1, 0)

    def test_diagonal(self):
        r = ray_aabb_intersection(Ray3((-1, -1, -1), (1, 1, 1)), self.box)
        assert math.isclose(r.t_enter, math.sqrt(3))
        assert math.isclose(r.t_exit, 3 * math.sqrt(3))

    def test_origin_inside(self):
        r = ray_aabb_intersection(Ray3((1, 1, 1), (0, 0, 1)), self.box)
        assert r.intersects
        assert r.origin_inside
        assert r.t_enter < 0
        assert len(r.hits) == 1
        assert math.isclose(r.hits[0].distance, 1.0)
        assert r.hits[0].normal == Vector3(0, 0, 1)

    def test_parallel_miss(self):
        r = ray_aabb_intersection(Ray3((-1, 3, 1), (1, 0, 0)), self.box)
        assert not r.intersects
        assert r.t_enter is None
        assert r.hits == ()

    def test_miss(self):
        r = ray_aabb_intersection(Ray3((-1, -1, 1), (1, -1, 0)), self.box)
        assert not r.intersects

    def test_box_behind(self):
        r = ray_aabb_intersection(Ray3((5, 1, 1), (1, 0, 0)), self.box)
        assert not r.intersects


class TestBoxBox:

    def test_overlap(self):
        r = aabb_aabb_intersection(AABB((0, 0, 0), (2, 2, 2)), AABB((1, 1, 1), (3, 3, 3)))
        assert r.intersects
        assert r.separating_axis is None
        assert r.overlap == AABB((1, 1, 1), (2, 2, 2))

    def test_touching(self):
        r = aabb_aabb_intersection(AABB((0, 0, 0), (1, 1, 1)), AABB((1, 0, 0), (2, 1, 1)))
        assert r.intersects
        assert r.overlap.volume() == 0.0

    def test_separated(self):
        r = aabb_aabb_intersection(AABB((0, 0, 0), (1, 1, 1)), AABB((0, 0, 3), (1, 1, 4)))
        assert not r.intersects
        assert r.overlap is None
        assert r.separating_axis == 'z'
        assert r.as_dict()['separating_axis'] == 'z'

    def test_contained(self):
        inner = AABB((1, 1, 1), (2, 2, 2))
        r = aabb_aabb_intersection(AABB((0, 0, 0), (5, 5, 5)), inner)
        assert r.overlap == inner
