import math

import pytest

from hlabgfx.geometry import Hit, Light, Ray, Vec2, Vec3


def test_add_then_subtract_round_trips():
    a = Vec3(1.5, -2.0, 3.25)
    b = Vec3(0.5, 4.0, -1.0)
    assert (a + b) - b == a


def test_scalar_multiplication_commutes():
    a = Vec3(1.0, 2.0, 3.0)
    assert 2.0 * a == a * 2.0
    assert a * 2.0 / 2.0 == a


def test_componentwise_multiplication():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(4.0, 5.0, 6.0)
    assert tuple(a * b) == (a.x * b.x, a.y * b.y, a.z * b.z)


def test_negation_sums_to_zero():
    a = Vec3(1.0, -2.0, 3.0)
    assert a + (-a) == Vec3()


def test_dot_is_symmetric_and_matches_length():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(-4.0, 0.5, 2.0)
    assert a.dot(b) == b.dot(a)
    assert a.dot(a) == pytest.approx(a.length() ** 2)


def test_cross_is_orthogonal_and_anticommutative():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(-4.0, 0.5, 2.0)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0)
    assert c.dot(b) == pytest.approx(0.0)
    assert b.cross(a) == -c


def test_cross_of_axes_gives_third_axis():
    assert Vec3(1.0, 0.0, 0.0).cross(Vec3(0.0, 1.0, 0.0)) == Vec3(0.0, 0.0, 1.0)


def test_length_of_three_four_zero():
    assert Vec3(3.0, 4.0, 0.0).length() == pytest.approx(5.0)


def test_normalized_has_unit_length_and_same_direction():
    a = Vec3(2.0, -3.0, 6.0)
    n = a.normalized()
    assert n.length() == pytest.approx(1.0)
    assert n.cross(a).length() == pytest.approx(0.0)
    assert n.dot(a) > 0.0


def test_normalizing_zero_vector_raises():
    with pytest.raises(ValueError):
        Vec3().normalized()


def test_vec2_operations_round_trip():
    a = Vec2(0.25, 0.75)
    b = Vec2(1.0, -2.0)
    assert (a + b) - b == a
    assert 3.0 * a == a * 3.0
    assert tuple(a * b) == (a.x * b.x, a.y * b.y)


def test_default_hit_is_a_miss():
    hit = Hit()
    assert hit.d == -1.0
    assert hit.is_hit is False
    assert hit.obj is None


def test_hit_with_positive_distance_is_a_hit():
    hit = Hit(d=2.0, point=Vec3(0.0, 0.0, 2.0))
    assert hit.is_hit is True
    assert hit.point.z == 2.0


def test_ray_and_light_keep_their_fields():
    ray = Ray(Vec3(0.0, 0.0, -1.5), Vec3(0.0, 0.0, 1.0))
    light = Light(Vec3(0.0, 2.0, -1.2))
    assert ray.start.z == -1.5
    assert ray.direction == Vec3(0.0, 0.0, 1.0)
    assert light.pos.y == 2.0
    assert math.isclose(ray.direction.length(), 1.0)