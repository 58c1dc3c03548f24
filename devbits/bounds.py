"""Bounding volumes: a sphere radius together with an axis-aligned box."""

from __future__ import annotations

from dataclasses import dataclass, field

from devbits.aabb import AaBb


@dataclass
class Bounds:
    sphere: float = 0.0
    aa_box: AaBb = field(default_factory=AaBb)

    def clear(self) -> None:
        """Zero the sphere radius and all box values."""
        self.sphere = 0.0
        self.aa_box.clear()

    def reset(self) -> None:
        """Zero the sphere radius and empty the box's min/max."""
        self.sphere = 0.0
        self.aa_box.reset_min_max()