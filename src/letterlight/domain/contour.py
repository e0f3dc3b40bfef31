"""Core geometric types for outline representation.

This module defines the fundamental geometric types used throughout letterlight:
- Point: A 2D plane coordinate
- Contour: A flattened subpath (polyline) produced by the parser
- Bounds: An axis-aligned rectangle supplied by callers
"""

import math
from dataclasses import dataclass, field

from letterlight.domain.segment import Segment


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in outline units
        y: Y coordinate in outline units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class Contour:
    """A flattened subpath of an outline.

    Contours are a derived, read-only sampling of the path segments. Curves
    have already been replaced by sampled line points, and consecutive
    duplicate points were collapsed when the contour was built.

    Attributes:
        points: Ordered polyline points
        closed: True if the subpath ended with a close command
    """

    points: list[Point]
    closed: bool = False

    def __len__(self) -> int:
        return len(self.points)

    def edges(self) -> list[tuple[Point, Point]]:
        """Consecutive point pairs, plus the closing edge when closed.

        Returns:
            List of (start, end) point pairs
        """
        pts = self.points
        result = [(pts[i], pts[i + 1]) for i in range(len(pts) - 1)]
        if self.closed and len(pts) > 2:
            result.append((pts[-1], pts[0]))
        return result


@dataclass(frozen=True)
class Bounds:
    """An axis-aligned rectangle.

    Used as the allowed region for the bounding-box escape check, and as the
    bounding box of outlines.

    Attributes:
        x: Left edge
        y: Top edge (smallest y)
        width: Horizontal extent
        height: Vertical extent
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    def is_finite(self) -> bool:
        """Check that every field is a finite number."""
        return all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height))

    def expanded(self, margin: float) -> "Bounds":
        """Return bounds grown by margin on every side."""
        return Bounds(
            x=self.x - margin,
            y=self.y - margin,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )

    def contains_bounds(self, other: "Bounds") -> bool:
        """Check if other lies entirely within these bounds."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    @classmethod
    def from_extents(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> "Bounds":
        """Build bounds from (min_x, min_y, max_x, max_y) extents."""
        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


@dataclass
class ContourRecord:
    """One subpath extracted from a path string.

    Unlike Contour, a record keeps the subpath's own path data, its absolute
    segments and only the end points of its drawing commands (no curve
    sampling).

    Attributes:
        path_data: Serialized absolute path data of this subpath alone
        segments: Absolute segments of this subpath, starting with its move
        points: Command end points, starting with the move point
        closed: True if the subpath ended with a close command
    """

    path_data: str
    segments: list[Segment] = field(default_factory=list)
    points: list[Point] = field(default_factory=list)
    closed: bool = False
