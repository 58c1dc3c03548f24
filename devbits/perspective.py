"""Perspective-projection camera settings."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

DEFAULT_FOV_Y_DEG = 37.8493


@dataclass
class FovY:
    """A vertical field-of-view angle, in degrees and as half of it in radians."""

    deg: float = 0.0
    rad_half: float = 0.0

    @classmethod
    def from_degrees(cls, deg: float) -> "FovY":
        return cls(deg=deg, rad_half=math.radians(deg) * 0.5)


@dataclass
class Perspective:
    """Whether projection applies, the vertical field of view, and the clip planes."""

    enabled: bool = True
    fov_y: FovY = field(default_factory=lambda: FovY.from_degrees(DEFAULT_FOV_Y_DEG))
    z_far: float = 0.0
    z_near: float = 0.0