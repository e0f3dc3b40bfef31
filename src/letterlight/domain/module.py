"""Placed LED module type."""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Module:
    """A placed rectangular LED module.

    Positions use the same coordinate frame as the outline they fill.

    Attributes:
        x: Centre X coordinate
        y: Centre Y coordinate
        rotation: Rotation in degrees
        w: Module length along its rotated axis
        h: Module thickness
    """

    x: float
    y: float
    rotation: float
    w: float
    h: float

    def distance_to(self, other: "Module") -> float:
        """Centre-to-centre distance."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
            "w": self.w,
            "h": self.h,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Module":
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            rotation=float(data.get("rotation", 0.0)),
            w=float(data.get("w", 12.0)),
            h=float(data.get("h", 5.0)),
        )
