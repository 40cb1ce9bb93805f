import itertools
import logging
import math

import pytest

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.primitives import AABB
from vecgeom.vector import Vector3, are_parallel
from vecgeom.volume import (
    aabb_volume,
    bounding_box,
    cylinder_volume,
    fit_plane,
    polygon_area,
    pyramid_volume,
    scalar_triple_product,
    sphere_volume,
    tetrahedron_volume,
)


def test_scalar_triple_product():
    assert scalar_triple_product((1, 0, 0), (0, 1, 0), (0, 0, 1)) == 1.0
    assert scalar_triple_product((0, 1, 0), (1, 0, 0), (0, 0, 1)) == -1.0


def test_unit_tetrahedron():
    v = tetrahedron_volume((0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1))
    assert math.isclose(v, 1 / 6)


def test_tetrahedron_orientation_does_not_matter():
    pts = [(1, 2, 0), (4, 0, 1), (0, 3, 3), (2, 2, 5)]
    expected = tetrahedron_volume(*pts)
    assert expected > 0
    for p in itertools.permutations(pts):
        assert math.isclose(tetrahedron_volume(*p), expected)


def test_flat_tetrahedron():
    assert tetrahedron_volume((0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)) == 0.0


def test_sphere_volume():
    assert math.isclose(sphere_volume(5), 523.5988, abs_tol=1e-4)
    assert sphere_volume(0) == 0.0
    with pytest.raises(InvalidArgument):
        sphere_volume(-1)


def test_cylinder_volume():
    assert math.isclose(cylinder_volume(2, 3), 12 * math.pi)
    assert cylinder_volume(2, 0) == 0.0
    with pytest.raises(InvalidArgument):
        cylinder_volume(-2, 3)
    with pytest.raises(InvalidArgument):
        cylinder_volume(2, -3)
    with pytest.raises(InvalidArgument):
        cylinder_volume(float('nan'), 3)


class TestBoundingBox:

    pts = [Vector3(1, 5, -2), Vector3(-3, 2, 4), Vector3(0, 0, 0), Vector3(2, -1, 1)]

    def test_box(self):
        box = bounding_box(self.pts)
        assert isinstance(box, AABB)
        assert box.min == Vector3(-3, -1, -2)
        assert box.max == Vector3(2, 5, 4)

    def test_volume(self):
        r = aabb_volume(self.pts)
        assert r.dimensions == Vector3(5, 6, 6)
        assert math.isclose(r.volume, 180.0)

    def test_permutation_invariant(self):
        vols = {aabb_volume(list(p)).volume for p in itertools.permutations(self.pts)}
        assert vols == {180.0}

    def test_coincident_points(self):
        r = aabb_volume([(1, 1, 1), (1, 1, 1), (1, 1, 1)])
        assert r.volume == 0.0
        assert r.min_point == r.max_point == Vector3(1, 1, 1)

    def test_single_point_and_empty(self):
        assert aabb_volume([(4, 5, 6)]).volume == 0.0
        with pytest.raises(InvalidArgument):
            bounding_box([])


class TestPolygons:

    square = [(0, 0, 0), (2, 0, 0), (2, 2, 0), (0, 2, 0)]

    def test_square_area(self):
        assert math.isclose(polygon_area(self.square), 4.0)

    def test_tilted_triangle_area(self):
        tri = [(1, 0, 0), (0, 1, 0), (0, 0, 1)]
        assert math.isclose(polygon_area(tri), math.sqrt(3) / 2)

    def test_concave_polygon(self):
        # L shape, area 3
        poly = [(0, 0, 5), (2, 0, 5), (2, 1, 5), (1, 1, 5), (1, 2, 5), (0, 2, 5)]
        assert math.isclose(polygon_area(poly), 3.0)

    def test_collinear_polygon(self):
        assert polygon_area([(0, 0, 0), (1, 1, 1), (2, 2, 2)]) == 0.0
        assert polygon_area([(1, 1, 1)] * 4) == 0.0

    def test_too_few_points(self):
        with pytest.raises(InvalidArgument):
            polygon_area([(0, 0, 0), (1, 0, 0)])

    def test_generator_input(self):
        assert math.isclose(polygon_area(p for p in self.square), 4.0)
        plane = fit_plane(p for p in self.square)
        assert are_parallel(plane.normal, Vector3(0, 0, 1))

    def test_fit_plane(self):
        plane = fit_plane(self.square)
        assert are_parallel(plane.normal, Vector3(0, 0, 1))
        assert math.isclose(plane.point.x, 1.0)
        assert math.isclose(plane.point.y, 1.0)
        with pytest.raises(DegenerateInputError):
            fit_plane([(0, 0, 0), (1, 0, 0), (2, 0, 0)])


class TestPyramid:

    def test_square_pyramid(self):
        base = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
        r = pyramid_volume(base, (0.5, 0.5, 3))
        assert math.isclose(r.base_area, 1.0)
        assert math.isclose(r.height, 3.0)
        assert math.isclose(r.volume, 1.0)
        assert r.base_plane is not None

    def test_apex_off_center(self):
        base = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
        r = pyramid_volume(base, (10, -4, -3))
        assert math.isclose(r.volume, 1.0)

    def test_tetrahedron_as_pyramid(self):
        r = pyramid_volume([(0, 0, 0), (1, 0, 0), (0, 1, 0)], (0, 0, 1))
        assert math.isclose(r.volume, 1 / 6)

    def test_generator_base(self):
        base = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
        r = pyramid_volume((p for p in base), (0.5, 0.5, 3))
        assert math.isclose(r.base_area, 1.0)
        assert math.isclose(r.volume, 1.0)
        assert r.base_plane is not None

    def test_degenerate_base(self):
        r = pyramid_volume([(0, 0, 0), (1, 0, 0), (2, 0, 0)], (0, 0, 1))
        assert r.volume == 0.0
        assert r.base_area == 0.0
        assert r.base_plane is None


def test_degenerate_base_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger='vecgeom.volume'):
        pyramid_volume([(0, 0, 0), (1, 1, 0), (2, 2, 0)], (0, 0, 1))
    assert 'degenerate base' in caplog.text
