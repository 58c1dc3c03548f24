import math

import pytest

from devbits.aabb import Vec3
from devbits.frustum import Frustum, FrustumPlane
from devbits.perspective import FovY, Perspective

POS = Vec3(1.0, 2.0, 3.0)
DIR = Vec3(0.0, 0.0, -1.0)
UP = Vec3(0.0, 1.0, 0.0)
ASPECT = 1.5


@pytest.fixture
def persp():
    return Perspective(fov_y=FovY.from_degrees(60), z_near=1.0, z_far=10.0)


@pytest.fixture
def frustum(persp):
    f = Frustum()
    f.update_ratio(persp, ASPECT)
    f.update_axes_coords_planes(persp, POS, DIR, UP, None)
    return f


def dist(plane, p):
    return plane.x * p.x + plane.y * p.y + plane.z * p.z + plane.w


def test_axes_orthonormal(frustum):
    ax = frustum.axes
    assert ax.z == -DIR
    for v in (ax.x, ax.y, ax.z):
        assert v.magnitude() == pytest.approx(1.0)
    assert ax.x.dot(ax.y) == pytest.approx(0.0)
    assert ax.x.dot(ax.z) == pytest.approx(0.0)
    assert ax.y.dot(ax.z) == pytest.approx(0.0)


def test_explicit_up_axis_kept():
    f = Frustum()
    up_axis = Vec3(0.0, 2.0, 0.0)
    f.update_axes(DIR, UP, up_axis)
    assert f.axes.y == up_axis


def test_ratio_proportions(frustum, persp):
    assert frustum.near.x / frustum.near.y == pytest.approx(ASPECT)
    assert frustum.far.x / frustum.far.y == pytest.approx(ASPECT)
    assert frustum.far.y / frustum.near.y == pytest.approx(persp.z_far / persp.z_near)


def test_coords_geometry(frustum, persp):
    near = frustum.near
    assert near.c == POS - frustum.axes.z * persp.z_near
    mid = (near.tl + near.br) * 0.5
    assert mid.distance(near.c) == pytest.approx(0.0)
    assert near.tl.distance(near.tr) == pytest.approx(2 * near.x)
    assert near.tl.distance(near.bl) == pytest.approx(2 * near.y)
    assert frustum.far.c.distance(POS) == pytest.approx(persp.z_far)


def test_planes_unit_and_contain_inside(frustum):
    inside = (frustum.near.c + frustum.far.c) * 0.5
    behind = POS + frustum.axes.z * 5
    for plane in frustum.planes:
        assert math.sqrt(plane.x ** 2 + plane.y ** 2 + plane.z ** 2) == pytest.approx(1.0)
        assert dist(plane, inside) > 0
    assert dist(frustum.planes[4], behind) < 0


def test_near_plane_contains_near_corners(frustum):
    near_plane = frustum.planes[4]
    for corner in (frustum.near.tl, frustum.near.tr, frustum.near.bl, frustum.near.br):
        assert dist(near_plane, corner) == pytest.approx(0.0, abs=1e-9)


def test_has_point(frustum, persp):
    z = frustum.axes.z
    assert frustum.has_point(POS, POS + z * 5, persp.z_near, persp.z_far)
    assert not frustum.has_point(POS, POS + z * 20, persp.z_near, persp.z_far)
    assert not frustum.has_point(POS, POS + z * 5 + frustum.axes.x * 100, persp.z_near, persp.z_far)


def test_has_sphere(frustum, persp):
    z = frustum.axes.z
    zn, zf = persp.z_near, persp.z_far
    assert frustum.has_sphere(POS, POS + z * 5, 0.5, zn, zf) == (True, False)
    assert frustum.has_sphere(POS, POS + z * 1, 0.5, zn, zf) == (False, True)
    assert frustum.has_sphere(POS, POS + z * 50, 0.5, zn, zf) == (False, False)
    assert frustum.has_sphere(POS, POS + z * 5, 0, zn, zf) == (
        frustum.has_point(POS, POS + z * 5, zn, zf),
        False,
    )


def test_plane_normalize():
    plane = FrustumPlane(3.0, 0.0, 4.0, 10.0)
    ratio = plane.w / plane.x
    plane.normalize()
    assert math.sqrt(plane.x ** 2 + plane.y ** 2 + plane.z ** 2) == pytest.approx(1.0)
    assert plane.w / plane.x == pytest.approx(ratio)


def test_planes_gh_identity_mirrored():
    f = Frustum()
    identity = [1.0 if i % 5 == 0 else 0.0 for i in range(16)]
    f.update_planes_gh(identity, False)
    for a, b in ((0, 1), (2, 3), (4, 5)):
        pa, pb = f.planes[a], f.planes[b]
        assert (pa.x, pa.y, pa.z) == (-pb.x, -pb.y, -pb.z)
        assert pa.w == pb.w


def test_planes_gh_normalized():
    f = Frustum()
    f.update_planes_gh([float(i + 1) for i in range(16)], True)
    for plane in f.planes:
        assert math.sqrt(plane.x ** 2 + plane.y ** 2 + plane.z ** 2) == pytest.approx(1.0)


def test_planes_gh_wrong_size():
    with pytest.raises(ValueError):
        Frustum().update_planes_gh([1.0] * 9, False)