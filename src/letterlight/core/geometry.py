"""Geometric operations shared by validation, editing and placement.

This module provides core mathematical utilities for:
- Orientation and segment intersection tests
- Self-intersection detection on flattened contours
- Bounding boxes
- Arc-length walking along polylines
- Perpendicular vector computation

All functions are pure and stateless.
"""

import math
from collections.abc import Iterable

from fontTools.misc.arrayTools import calcBounds

from letterlight.domain import Contour, Point

COLLINEAR_EPSILON = 1e-9
SHARED_ENDPOINT_TOLERANCE = 1e-6


def orientation(a: Point, b: Point, c: Point, eps: float = COLLINEAR_EPSILON) -> int:
    """Classify the turn a -> b -> c.

    Args:
        a: First point
        b: Second point
        c: Third point
        eps: Cross products smaller than this count as collinear

    Returns:
        0 for collinear, 1 for clockwise, 2 for counter-clockwise (in a
        y-up frame)
    """
    value = (b.y - a.y) * (c.x - b.x) - (b.x - a.x) * (c.y - b.y)
    if abs(value) < eps:
        return 0
    return 1 if value > 0 else 2


def on_segment(a: Point, b: Point, c: Point, eps: float = COLLINEAR_EPSILON) -> bool:
    """Check if b lies within the bounding box of segment a-c.

    Only meaningful when a, b and c are already known to be collinear.
    """
    return (
        b.x <= max(a.x, c.x) + eps
        and b.x + eps >= min(a.x, c.x)
        and b.y <= max(a.y, c.y) + eps
        and b.y + eps >= min(a.y, c.y)
    )


def segments_intersect(
    a1: Point,
    a2: Point,
    b1: Point,
    b2: Point,
    eps: float = COLLINEAR_EPSILON,
) -> bool:
    """Test whether segments a1-a2 and b1-b2 touch or cross.

    Uses the orientation test with a collinearity epsilon, falling back to
    on-segment checks for the collinear cases.

    Examples:
        >>> segments_intersect(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        True
        >>> segments_intersect(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1))
        False
    """
    o1 = orientation(a1, a2, b1, eps)
    o2 = orientation(a1, a2, b2, eps)
    o3 = orientation(b1, b2, a1, eps)
    o4 = orientation(b1, b2, a2, eps)

    if o1 != o2 and o3 != o4:
        return True
    if o1 == 0 and on_segment(a1, b1, a2, eps):
        return True
    if o2 == 0 and on_segment(a1, b2, a2, eps):
        return True
    if o3 == 0 and on_segment(b1, a1, b2, eps):
        return True
    if o4 == 0 and on_segment(b1, a2, b2, eps):
        return True
    return False


def same_point(a: Point, b: Point, tolerance: float = SHARED_ENDPOINT_TOLERANCE) -> bool:
    """Check if two points coincide within tolerance on both axes."""
    return abs(a.x - b.x) <= tolerance and abs(a.y - b.y) <= tolerance


def shares_endpoint(
    e1: tuple[Point, Point],
    e2: tuple[Point, Point],
    tolerance: float = SHARED_ENDPOINT_TOLERANCE,
) -> bool:
    """Check if two edges have a common end point."""
    return any(same_point(p, q, tolerance) for p in e1 for q in e2)


def has_self_intersection(
    contour: Contour,
    eps: float = COLLINEAR_EPSILON,
    shared_tolerance: float | None = SHARED_ENDPOINT_TOLERANCE,
) -> bool:
    """Detect a crossing between non-adjacent edges of one contour.

    Edge pairs one index apart, and the wrap-around pair of a closed
    contour, are adjacent and never compared. This is O(edges^2), which is
    fine for the tens to low hundreds of points a letter outline has.

    Args:
        contour: Flattened contour to test
        eps: Collinearity epsilon for the orientation test
        shared_tolerance: If set, touching edges that share an end point
            within this distance are not counted as crossing. None counts
            every touch.

    Returns:
        True if any two non-adjacent edges intersect
    """
    edges = contour.edges()
    n = len(edges)
    for i in range(n):
        a1, a2 = edges[i]
        for j in range(i + 2, n):
            if contour.closed and i == 0 and j == n - 1:
                continue
            b1, b2 = edges[j]
            if not segments_intersect(a1, a2, b1, b2, eps):
                continue
            if shared_tolerance is not None and shares_endpoint(edges[i], edges[j], shared_tolerance):
                continue
            return True
    return False


def bounds_of(contours: Iterable[Contour]) -> tuple[float, float, float, float] | None:
    """Union bounding box of all contour points.

    Returns:
        (min_x, min_y, max_x, max_y), or None when there are no points
    """
    coords = [p.to_tuple() for contour in contours for p in contour.points]
    if not coords:
        return None
    return calcBounds(coords)


def median(values: list[float]) -> float:
    """Upper median of values, 0.0 when empty."""
    if not values:
        return 0.0
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def polyline_vertices(contour: Contour) -> list[Point]:
    """Vertices of a contour in walking order, repeating the start when closed."""
    points = list(contour.points)
    if contour.closed and len(points) > 2:
        points.append(points[0])
    return points


def polyline_length(points: list[Point]) -> float:
    """Length of an open polyline."""
    return sum(points[i].distance_to(points[i + 1]) for i in range(len(points) - 1))


def point_at_length(points: list[Point], distance: float) -> Point:
    """Point reached after walking `distance` along an open polyline.

    The distance is clamped to the polyline's extent.

    Args:
        points: Polyline vertices
        distance: Arc length from the first vertex

    Returns:
        Interpolated point
    """
    if not points:
        raise ValueError("Cannot walk an empty polyline")
    if distance <= 0 or len(points) == 1:
        return points[0]

    walked = 0.0
    for i in range(len(points) - 1):
        a, b = points[i], points[i + 1]
        seg = a.distance_to(b)
        if walked + seg >= distance and seg > 0:
            t = (distance - walked) / seg
            return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)
        walked += seg
    return points[-1]


def perpendicular_direction(p1: Point, p2: Point) -> tuple[float, float]:
    """Calculate the unit perpendicular vector to a line from p1 to p2.

    The perpendicular is rotated 90 degrees counter-clockwise from the
    direction vector (p2 - p1).

    Raises:
        ValueError: If p1 and p2 are the same point (zero-length line)

    Examples:
        >>> perpendicular_direction(Point(0.0, 0.0), Point(1.0, 0.0))
        (-0.0, 1.0)
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y

    length = math.hypot(dx, dy)
    if length < 1e-10:
        raise ValueError("Cannot calculate perpendicular of zero-length line")

    dx /= length
    dy /= length

    # Rotate 90 degrees counter-clockwise: (x, y) -> (-y, x)
    return -dy, dx
