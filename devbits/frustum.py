"""View frustums: axes, corner coordinates, clipping planes and containment tests."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from devbits.aabb import Vec3
from devbits.bounds import Bounds
from devbits.perspective import Perspective


@dataclass
class FrustumCoords:
    """Half-width (x), half-height (y), center and corners of a near or far plane."""

    x: float = 0.0
    y: float = 0.0
    c: Vec3 = field(default_factory=Vec3)
    tl: Vec3 = field(default_factory=Vec3)
    tr: Vec3 = field(default_factory=Vec3)
    bl: Vec3 = field(default_factory=Vec3)
    br: Vec3 = field(default_factory=Vec3)
    _x_vec: Vec3 = field(default_factory=Vec3, init=False, repr=False)
    _y_vec: Vec3 = field(default_factory=Vec3, init=False, repr=False)


@dataclass
class FrustumPlane:
    """A plane as normal (x, y, z) and distance term w."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def _set_from(self, p1: Vec3, p2: Vec3, p3: Vec3) -> None:
        normal = p3.sub(p2).cross(p1.sub(p2)).normalized()
        self.x, self.y, self.z = normal.x, normal.y, normal.z
        self.w = -normal.dot(p2)

    def normalize(self) -> None:
        """Scale all four components so the normal has unit length."""
        mag = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)
        if mag == 0:
            return
        self.x, self.y, self.z, self.w = self.x / mag, self.y / mag, self.z / mag, self.w / mag


@dataclass
class FrustumAxes:
    x: Vec3 = field(default_factory=Vec3)
    y: Vec3 = field(default_factory=Vec3)
    z: Vec3 = field(default_factory=Vec3)


@dataclass
class Frustum:
    """A camera view frustum."""

    bounding: Bounds = field(default_factory=Bounds)
    planes: list[FrustumPlane] = field(default_factory=lambda: [FrustumPlane() for _ in range(6)])
    axes: FrustumAxes = field(default_factory=FrustumAxes)
    near: FrustumCoords = field(default_factory=FrustumCoords)
    far: FrustumCoords = field(default_factory=FrustumCoords)
    _sphere_factor_x: float = field(default=0.0, init=False, repr=False)
    _sphere_factor_y: float = field(default=0.0, init=False, repr=False)
    _aspect_ratio: float = field(default=0.0, init=False, repr=False)
    _tan_rad_half: float = field(default=0.0, init=False, repr=False)
    _tan_rad_half_aspect: float = field(default=0.0, init=False, repr=False)

    def has_point(self, pos: Vec3, point: Vec3, z_near: float, z_far: float) -> bool:
        """Whether `point` lies within the frustum placed at `pos`."""
        pp = point.sub(pos)
        axis_pos = pp.dot(self.axes.z)
        if axis_pos > z_far or axis_pos < z_near:
            return False
        half_height = axis_pos * self._tan_rad_half
        axis_pos = pp.dot(self.axes.y)
        if -half_height > axis_pos or axis_pos > half_height:
            return False
        half_width = half_height * self._aspect_ratio
        axis_pos = pp.dot(self.axes.x)
        if -half_width > axis_pos or axis_pos > half_width:
            return False
        return True

    def has_sphere(
        self, pos: Vec3, center: Vec3, radius: float, z_near: float, z_far: float
    ) -> tuple[bool, bool]:
        """Return (fully_inside, intersects) for a sphere against the frustum at `pos`."""
        if radius == 0:
            return self.has_point(pos, center, z_near, z_far), False
        intersect = False
        cp = center.sub(pos)
        ax_pos = cp.dot(self.axes.z)
        if ax_pos > z_far + radius or ax_pos < z_near - radius:
            return False, False
        if ax_pos > z_far - radius or ax_pos < z_near + radius:
            intersect = True

        z, d = ax_pos * self._tan_rad_half_aspect, self._sphere_factor_x * radius
        ax_pos = cp.dot(self.axes.x)
        if ax_pos > z + d or ax_pos < -z - d:
            return False, False
        if ax_pos > z - d or ax_pos < -z + d:
            intersect = True

        z, d = z / self._aspect_ratio, self._sphere_factor_y * radius
        ax_pos = cp.dot(self.axes.y)
        if ax_pos > z + d or ax_pos < -z - d:
            return False, False
        if ax_pos > z - d or ax_pos < -z + d:
            intersect = True
        return not intersect, intersect

    def update_axes(self, dir: Vec3, up_vector: Vec3, up_axis: Optional[Vec3]) -> None:
        """Derive the frustum's axes from a view direction and an up vector."""
        self.axes.z = -dir
        self.axes.x = up_vector.cross(self.axes.z).normalized()
        self.axes.y = self.axes.z.cross(self.axes.x) if up_axis is None else up_axis

    def update_axes_coords_planes(
        self,
        persp: Perspective,
        pos: Vec3,
        dir: Vec3,
        up_vector: Vec3,
        up_axis: Optional[Vec3],
    ) -> None:
        self.update_axes(dir, up_vector, up_axis)
        self.update_coords(persp, pos)
        self.update_planes()

    def update_coords(self, persp: Perspective, pos: Vec3) -> None:
        """Compute the centers and corners of the near and far planes."""
        self.near.c = pos.sub(self.axes.z.scaled(persp.z_near))
        self.far.c = pos.sub(self.axes.z.scaled(persp.z_far))
        for coords in (self.near, self.far):
            yv = self.axes.y.scaled(coords.y)
            xv = self.axes.x.scaled(coords.x)
            coords._y_vec, coords._x_vec = yv, xv
            coords.tl = coords.c + yv - xv
            coords.tr = coords.c + yv + xv
            coords.bl = coords.c - yv - xv
            coords.br = coords.c - yv + xv

    def update_planes(self) -> None:
        """Compute the left, right, bottom, top, near and far planes from the corners."""
        n, f = self.near, self.far
        self.planes[0]._set_from(n.tl, n.bl, f.bl)
        self.planes[1]._set_from(n.br, n.tr, f.br)
        self.planes[2]._set_from(n.bl, n.br, f.br)
        self.planes[3]._set_from(n.tr, n.tl, f.tl)
        self.planes[4]._set_from(n.tl, n.tr, n.br)
        self.planes[5]._set_from(f.tr, f.tl, f.bl)

    def update_planes_gh(self, mat: Sequence[float], normalize: bool) -> None:
        """Extract the six planes from a 16-element world-view-projection matrix."""
        m = [float(v) for v in mat]
        if len(m) != 16:
            raise ValueError(f"expected a 4x4 matrix of 16 values, got {len(m)}")
        row = m[12:16]
        for i, (offset, sign) in enumerate(
            ((0, 1), (0, -1), (4, 1), (4, -1), (8, 1), (8, -1))
        ):
            plane = self.planes[i]
            plane.x, plane.y, plane.z, plane.w = (
                row[k] + sign * m[offset + k] for k in range(4)
            )
        if normalize:
            for plane in self.planes:
                plane.normalize()

    def update_ratio(self, persp: Perspective, aspect_ratio: float) -> None:
        """Recompute the size-dependent values for a field of view and aspect ratio."""
        self._aspect_ratio = aspect_ratio
        self._tan_rad_half = math.tan(persp.fov_y.rad_half)
        self._tan_rad_half_aspect = self._tan_rad_half * aspect_ratio
        self._sphere_factor_y = 1 / math.cos(persp.fov_y.rad_half)
        self._sphere_factor_x = 1 / math.cos(math.atan(self._tan_rad_half_aspect))
        self.near.y = persp.z_near * self._tan_rad_half
        self.near.x = self.near.y * aspect_ratio
        self.far.y = persp.z_far * self._tan_rad_half
        self.far.x = self.far.y * aspect_ratio