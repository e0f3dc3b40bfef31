"""Containment primitives over letter outlines.

The actual fill test is delegated to a geometry provider. The default
provider draws the outline into fontTools' PointInsidePen, which computes
the winding number of the real curves (non-zero rule, every subpath closed
implicitly, the same way a renderer fills the glyph). This module frames the
queries on top of that:

- point_inside: one fill query
- capsule_inside: a module's medial axis through (cx, cy) at a rotation,
  tested at both end-cap centres and the middle
- distance_to_edge: ray march to the first outside sample, then bisection

Every query fails closed: a provider error is logged and reported as
"outside", which is the conservative answer for placement.
"""

import math
from dataclasses import dataclass, field
from typing import Protocol

import structlog
from fontTools.pens.pointInsidePen import PointInsidePen

from letterlight.config import ParserConfig
from letterlight.core.geometry import bounds_of
from letterlight.core.parser import flatten_segments, parse_segments
from letterlight.domain import Bounds, Contour, Point, Segment, SegmentKind

logger = structlog.get_logger(__name__)


class GeometryProvider(Protocol):
    """Answers fill-containment queries for one outline.

    Providers raise GeometryProviderError when a query cannot be answered.
    """

    def contains(self, x: float, y: float) -> bool: ...


class PenFillProvider:
    """Fill test backed by fontTools' PointInsidePen.

    Arcs are drawn as straight lines, matching the parser's approximation.
    """

    def __init__(self, segments: list[Segment], even_odd: bool = False) -> None:
        self.segments = segments
        self.even_odd = even_odd

    def contains(self, x: float, y: float) -> bool:
        pen = PointInsidePen(None, (x, y), evenOdd=self.even_odd)
        self.draw(pen)
        return bool(pen.getResult())

    def draw(self, pen: PointInsidePen) -> None:
        """Replay the segments into a pen, closing every subpath.

        Drawing segments outside a subpath are ignored, as when flattening.
        """
        is_open = False
        for segment in self.segments:
            v = segment.values
            if segment.kind is SegmentKind.MOVE:
                if is_open:
                    pen.closePath()
                pen.moveTo((v[0], v[1]))
                is_open = True
                continue
            if segment.kind is SegmentKind.CLOSE:
                if is_open:
                    pen.closePath()
                    is_open = False
                continue
            if not is_open:
                continue
            if segment.kind is SegmentKind.LINE:
                pen.lineTo((v[0], v[1]))
            elif segment.kind is SegmentKind.CUBIC:
                pen.curveTo((v[0], v[1]), (v[2], v[3]), (v[4], v[5]))
            elif segment.kind is SegmentKind.QUADRATIC:
                pen.qCurveTo((v[0], v[1]), (v[2], v[3]))
            elif segment.kind is SegmentKind.ARC:
                pen.lineTo((v[5], v[6]))
        if is_open:
            pen.closePath()


@dataclass
class Outline:
    """A parsed outline ready for containment queries.

    Attributes:
        path_data: Source path description
        segments: Absolute segments
        contours: Flattened contours
        provider: Fill-containment provider
    """

    path_data: str
    segments: list[Segment]
    contours: list[Contour]
    provider: GeometryProvider = field(repr=False)

    @classmethod
    def from_path(
        cls,
        path_data: str,
        parser_config: ParserConfig | None = None,
        even_odd: bool = False,
    ) -> "Outline":
        """Parse path data and attach the default pen-based provider.

        Args:
            path_data: Outline path description
            parser_config: Curve sampling used for the flattened contours
            even_odd: Use the even-odd fill rule instead of non-zero

        Returns:
            Outline instance
        """
        segments = parse_segments(path_data)
        contours = flatten_segments(segments, parser_config)
        return cls(
            path_data=path_data,
            segments=segments,
            contours=contours,
            provider=PenFillProvider(segments, even_odd=even_odd),
        )

    @property
    def bounds(self) -> Bounds | None:
        """Bounding box of the flattened contours, None when empty."""
        extents = bounds_of(self.contours)
        if extents is None:
            return None
        return Bounds.from_extents(*extents)

    def is_empty(self) -> bool:
        return not self.contours


def point_inside(outline: Outline, x: float, y: float) -> bool:
    """Check if (x, y) lies in the outline's fill.

    Returns:
        True if inside; False if outside or if the provider failed
    """
    try:
        return bool(outline.provider.contains(x, y))
    except Exception as e:
        logger.warning(
            "Containment query failed",
            x=x,
            y=y,
            error=str(e),
            error_type=type(e).__name__,
        )
        return False


def capsule_endpoints(
    cx: float, cy: float, rotation_deg: float, half_length: float
) -> tuple[Point, Point]:
    """End-cap centres of a rotated medial axis through (cx, cy)."""
    angle = math.radians(rotation_deg)
    ox = half_length * math.cos(angle)
    oy = half_length * math.sin(angle)
    return Point(cx - ox, cy - oy), Point(cx + ox, cy + oy)


def capsule_inside(
    outline: Outline,
    cx: float,
    cy: float,
    rotation_deg: float,
    half_length: float,
) -> bool:
    """Check if a module's capsule lies inside the outline.

    The module body is approximated by its medial axis: both end-cap centres
    and the centre must be inside. Testing the outer corners instead would
    reject modules whose rounded tip merely grazes a curved edge.

    Args:
        outline: Outline to test against
        cx: Capsule centre X
        cy: Capsule centre Y
        rotation_deg: Axis rotation in degrees
        half_length: Distance from the centre to each end-cap centre

    Returns:
        True if every sampled point is inside
    """
    if not point_inside(outline, cx, cy):
        return False
    if half_length <= 0:
        return True
    start, end = capsule_endpoints(cx, cy, rotation_deg, half_length)
    return point_inside(outline, start.x, start.y) and point_inside(outline, end.x, end.y)


def distance_to_edge(
    outline: Outline,
    x: float,
    y: float,
    dx: float,
    dy: float,
    max_dist: float = 1000.0,
    step: float = 10.0,
    iterations: int = 10,
) -> float:
    """Distance from (x, y) to the first outline edge along a direction.

    Marches linearly so that concave shapes are not skipped over, then
    refines the exit between the last inside and first outside sample by
    bisection.

    Args:
        outline: Outline to measure
        x: Start X
        y: Start Y
        dx: Unit direction X
        dy: Unit direction Y
        max_dist: Distance reported when no exit is found
        step: Linear march step
        iterations: Bisection iterations

    Returns:
        Approximate distance to the edge; 0.0 when the start is outside
    """
    if not point_inside(outline, x, y):
        return 0.0

    first_outside = -1.0
    d = step
    while d <= max_dist:
        if not point_inside(outline, x + dx * d, y + dy * d):
            first_outside = d
            break
        d += step

    if first_outside < 0:
        return max_dist

    low = first_outside - step
    high = first_outside
    for _ in range(iterations):
        mid = (low + high) / 2
        if point_inside(outline, x + dx * mid, y + dy * mid):
            low = mid
        else:
            high = mid
    return high


@dataclass(frozen=True)
class StrokeMetric:
    """Stroke width measured across a point.

    Attributes:
        center: Point the measurement was taken from
        width: Sum of both edge distances
        left_dist: Distance against the normal
        right_dist: Distance along the normal
    """

    center: Point
    width: float
    left_dist: float
    right_dist: float


def measure_stroke_width(
    outline: Outline,
    point: Point,
    normal: tuple[float, float],
    max_dist: float = 1000.0,
) -> StrokeMetric:
    """Measure the stroke width through a point along a normal line."""
    nx, ny = normal
    forward = distance_to_edge(outline, point.x, point.y, nx, ny, max_dist)
    backward = distance_to_edge(outline, point.x, point.y, -nx, -ny, max_dist)
    return StrokeMetric(
        center=point,
        width=forward + backward,
        left_dist=backward,
        right_dist=forward,
    )
