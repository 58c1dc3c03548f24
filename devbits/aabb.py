"""3D vectors and axis-aligned bounding boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def add(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scaled(self, factor: float) -> "Vec3":
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vec3":
        """Return the unit vector in this direction; the zero vector stays zero."""
        mag = self.magnitude()
        if mag == 0:
            return Vec3()
        return self.scaled(1.0 / mag)

    def distance(self, other: "Vec3") -> float:
        return self.sub(other).magnitude()

    def __add__(self, other: "Vec3") -> "Vec3":
        return self.add(other)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return self.sub(other)

    def __mul__(self, factor: float) -> "Vec3":
        return self.scaled(factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)


@dataclass
class AaBb:
    """An axis-aligned bounding box, kept both as min/max and as center/extent."""

    min: Vec3 = field(default_factory=Vec3)
    max: Vec3 = field(default_factory=Vec3)
    center: Vec3 = field(default_factory=Vec3)
    extent: Vec3 = field(default_factory=Vec3)

    def bounding_sphere(self, center: Vec3) -> float:
        """Radius of a sphere around `center` that reaches both box corners."""
        return max(self.min.distance(center), self.max.distance(center))

    def clear(self) -> None:
        self.min = Vec3()
        self.max = Vec3()
        self.center = Vec3()
        self.extent = Vec3()

    def reset_min_max(self) -> None:
        """Make the box empty, ready to be grown point by point."""
        self.max = Vec3(-math.inf, -math.inf, -math.inf)
        self.min = Vec3(math.inf, math.inf, math.inf)

    def set_center_extent(self) -> None:
        """Derive center and extent from min and max."""
        self.center = self.max.add(self.min).scaled(0.5)
        self.extent = self.max.sub(self.min).scaled(0.5)

    def set_min_max(self) -> None:
        """Derive min and max from center and extent."""
        self.min = self.center.sub(self.extent)
        self.max = self.center.add(self.extent)