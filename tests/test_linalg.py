import math

import pytest

from softraster.linalg import (Mat4, Vec3, Vec4, look_at, perspective, rotate_y,
                               scale, translate, vec3_to_vec4)


def _apply(m, p):
    return m.mul_vec4(vec3_to_vec4(p))


def test_identity_is_neutral():
    m = translate(1.0, 2.0, 3.0)
    assert Mat4.identity() @ m == m
    assert m @ Mat4.identity() == m


def test_translate_then_scale_order():
    # column vectors: the right-hand matrix is applied first
    m = scale(2.0, 2.0, 2.0) @ translate(1.0, 0.0, 0.0)
    p = _apply(m, Vec3(0.0, 1.0, 0.0))
    assert (p.x, p.y, p.z, p.w) == (2.0, 2.0, 0.0, 1.0)


def test_rotate_y_quarter_turn():
    p = _apply(rotate_y(math.pi / 2), Vec3(1.0, 0.0, 0.0))
    assert p.x == pytest.approx(0.0, abs=1e-12)
    assert p.z == pytest.approx(-1.0)


def test_vec3_normalize_zero_length():
    assert Vec3(0.0, 0.0, 0.0).normalize() == Vec3(0.0, 0.0, 0.0)
    assert Vec3(3.0, 0.0, 4.0).normalize().norm() == pytest.approx(1.0)


def test_vec4_xyz_drops_w():
    assert Vec4(1.0, 2.0, 3.0, 4.0).xyz() == Vec3(1.0, 2.0, 3.0)


def test_look_at_puts_target_on_negative_z():
    view = look_at(Vec3(0.0, 0.0, -5.0), Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
    origin = _apply(view, Vec3(0.0, 0.0, 0.0))
    assert (origin.x, origin.y) == pytest.approx((0.0, 0.0))
    assert origin.z == pytest.approx(-5.0)

    near_face = _apply(view, Vec3(0.0, 0.0, -1.0))
    assert near_face.z == pytest.approx(-4.0)

    # looking down +Z from behind, world +X ends up on the left
    right = _apply(view, Vec3(1.0, 0.0, -1.0))
    assert right.x == pytest.approx(-1.0)
    up = _apply(view, Vec3(0.0, 1.0, -1.0))
    assert up.y == pytest.approx(1.0)


def test_perspective_maps_near_and_far_planes():
    near, far = 0.1, 100.0
    proj = perspective(math.radians(45.0), 1.0, near, far)

    c = _apply(proj, Vec3(0.0, 0.0, -near))
    assert c.w == pytest.approx(near)
    assert c.z / c.w == pytest.approx(-1.0)

    c = _apply(proj, Vec3(0.0, 0.0, -far))
    assert c.z / c.w == pytest.approx(1.0)


def test_perspective_nearer_point_has_smaller_depth():
    proj = perspective(math.radians(60.0), 1.5, 0.1, 50.0)
    a = _apply(proj, Vec3(0.0, 0.0, -2.0))
    b = _apply(proj, Vec3(0.0, 0.0, -3.0))
    assert a.z / a.w < b.z / b.w
