import math

import pytest

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.vector import (
    Vector3,
    angle,
    angle_report,
    are_parallel,
    are_perpendicular,
    cross,
    cross_product_report,
    dist,
    dot,
    dot_product_report,
    mag,
    magnitude,
    magnitude_report,
    normalize,
    vclose,
    vec,
)


class TestVector3:
    """construction and arithmetic on Vector3"""

    def test_components_are_floats(self):
        v = Vector3(1, 2, 3)
        assert v == Vector3(1.0, 2.0, 3.0)
        assert all(isinstance(c, float) for c in v)
        x, y, z = v
        assert (x, y, z) == (1.0, 2.0, 3.0)
        assert len(v) == 3
        assert v[2] == 3.0

    @pytest.mark.parametrize("bad", [float('nan'), float('inf'), -float('inf'), True, 'a', None])
    def test_rejects_bad_components(self, bad):
        with pytest.raises(InvalidArgument):
            Vector3(0, bad, 0)

    def test_arithmetic(self):
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        assert a + b == Vector3(5, 7, 9)
        assert b - a == Vector3(3, 3, 3)
        assert -a == Vector3(-1, -2, -3)
        assert a * 2 == Vector3(2, 4, 6)
        assert 2 * a == Vector3(2, 4, 6)
        assert b / 2 == Vector3(2, 2.5, 3)

    def test_vec(self):
        assert vec((1, 2, 3)) == Vector3(1, 2, 3)
        assert vec([1, 2, 3]) == Vector3(1, 2, 3)
        v = Vector3(1, 2, 3)
        assert vec(v) is v
        with pytest.raises(InvalidArgument):
            vec((1, 2))
        with pytest.raises(InvalidArgument):
            vec("abc")

    def test_immutable(self):
        v = Vector3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5


def test_dot_is_symmetric():
    a = Vector3(1, -2, 3.5)
    b = Vector3(-4, 0.5, 2)
    assert dot(a, b) == dot(b, a)
    assert math.isclose(dot(a, b), -4 - 1 + 7)


def test_cross_is_anticommutative():
    a = Vector3(1, 2, 3)
    b = Vector3(-2, 0.5, 4)
    assert cross(a, b) == -cross(b, a)
    assert cross(Vector3(1, 0, 0), Vector3(0, 1, 0)) == Vector3(0, 0, 1)


def test_cross_magnitude_matches_sine_of_angle():
    a = Vector3(1, 2, 3)
    b = Vector3(-2, 0.5, 4)
    expected = mag(a) * mag(b) * math.sin(angle(a, b))
    assert math.isclose(mag(cross(a, b)), expected, rel_tol=1e-9)


def test_normalize():
    n = normalize(Vector3(3, 4, 12))
    assert math.isclose(mag(n), 1.0)
    assert vclose(n, Vector3(3 / 13, 4 / 13, 12 / 13))
    with pytest.raises(DegenerateInputError):
        normalize(Vector3(0, 0, 0))


def test_large_components_do_not_overflow():
    assert math.isclose(mag(normalize(Vector3(1e200, 0, 0))), 1.0)
    assert vclose(normalize(Vector3(1e200, 1e200, 0)),
                  Vector3(math.sqrt(0.5), math.sqrt(0.5), 0), 1e-12)
    assert math.isclose(mag(Vector3(3e200, 4e200, 0)), 5e200)
    assert math.isclose(dist(Vector3(-1e200, 0, 0), Vector3(1e200, 0, 0)), 2e200)


def test_normalize_custom_tolerance():
    tiny = Vector3(1e-6, 0, 0)
    assert math.isclose(mag(normalize(tiny)), 1.0)
    with pytest.raises(DegenerateInputError):
        normalize(tiny, tol=1e-3)


def test_angle_is_clamped():
    a = Vector3(1, 1e-17, 0)
    assert angle(a, a) == 0.0
    assert math.isclose(angle(Vector3(1, 0, 0), Vector3(-1, 0, 0)), math.pi)
    assert math.isclose(angle(Vector3(1, 0, 0), Vector3(0, 3, 0)), math.pi / 2)
    with pytest.raises(DegenerateInputError):
        angle(Vector3(0, 0, 0), Vector3(1, 0, 0))


def test_dist():
    assert math.isclose(dist(Vector3(1, 1, 1), Vector3(4, 5, 1)), 5.0)
    assert magnitude(Vector3(0, 3, 4)) == 5.0


def test_parallel_and_perpendicular():
    x = Vector3(1, 0, 0)
    assert are_parallel(x, Vector3(-3, 0, 0))
    assert not are_parallel(x, Vector3(1, 1, 0))
    assert are_perpendicular(x, Vector3(0, 2, 5))
    assert not are_perpendicular(x, Vector3(1, 1, 0))


def test_zero_vector_is_parallel_and_perpendicular():
    zero = Vector3(0, 0, 0)
    v = Vector3(1, 2, 3)
    assert are_parallel(zero, v)
    assert are_perpendicular(zero, v)


def test_dot_product_report():
    r = dot_product_report(Vector3(1, 0, 0), Vector3(0, 1, 0))
    assert r.dot_product == 0.0
    assert math.isclose(r.angle_degrees, 90.0)
    assert r.are_perpendicular
    assert not r.are_parallel

    r = dot_product_report(Vector3(0, 0, 0), Vector3(0, 1, 0))
    assert r.angle_radians == 0.0


def test_cross_product_report():
    r = cross_product_report(Vector3(2, 0, 0), Vector3(0, 3, 0))
    assert r.cross_product == Vector3(0, 0, 6)
    assert math.isclose(r.area_parallelogram, 6.0)
    assert not r.are_parallel
    assert r.as_dict()['cross_product'] == {'x': 0.0, 'y': 0.0, 'z': 6.0}


def test_magnitude_report():
    r = magnitude_report(Vector3(0, 3, 4))
    assert math.isclose(r.magnitude, 5.0)
    assert vclose(r.unit_vector, Vector3(0, 0.6, 0.8))
    assert not r.is_zero_vector

    r = magnitude_report(Vector3(0, 0, 0))
    assert r.is_zero_vector
    assert r.unit_vector == Vector3(0, 0, 0)


def test_angle_report():
    r = angle_report(Vector3(1, 0, 0), Vector3(0, 2, 0))
    assert math.isclose(r.angle_radians, math.pi / 2)
    assert math.isclose(r.angle_degrees, 90.0)
    assert math.isclose(r.cos_angle, 0.0, abs_tol=1e-15)

    r = angle_report(Vector3(0, 0, 2), Vector3(0, 0, -3))
    assert math.isclose(r.angle_degrees, 180.0)
    assert r.cos_angle == -1.0
    assert r.as_dict()['angle_degrees'] == r.angle_degrees


def test_angle_report_zero_vector():
    with pytest.raises(DegenerateInputError):
        angle_report(Vector3(0, 0, 0), Vector3(1, 0, 0))
    with pytest.raises(DegenerateInputError):
        angle_report(Vector3(1, 0, 0), Vector3(0, 0, 0))
