"""Path description parsing, flattening and serialization.

This module reads the SVG path mini-language used for letter outlines:

- M/m, L/l, H/h, V/v: move and straight lines
- C/c, S/s: cubic Bezier curves (S reflects the previous cubic control)
- Q/q, T/t: quadratic Bezier curves (T reflects the previous quadratic control)
- A/a: elliptical arc (approximated by a straight line when flattened)
- Z/z: close the current subpath

Parsing is permissive. Partial path strings are expected while a user is
dragging, so unknown letters and incomplete trailing argument groups are
dropped instead of raising. Strictness lives in the validator.

Two representations come out of a path:
- Segments: absolute, order-preserving drawing instructions (editable)
- Contours: flattened polylines used by geometry tests (read-only)
"""

import math
import re
from collections.abc import Iterable

from fontTools.misc.bezierTools import segmentPointAtT

from letterlight.config import ParserConfig
from letterlight.domain import Contour, ContourRecord, Point, Segment, SegmentKind

_TOKEN_RE = re.compile(r"([A-Za-z])|([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

# Number of arguments consumed by one repetition of each command
COMMAND_ARITY: dict[str, int] = {
    "M": 2,
    "L": 2,
    "T": 2,
    "H": 1,
    "V": 1,
    "Q": 4,
    "S": 4,
    "C": 6,
    "A": 7,
    "Z": 0,
}

_DEFAULT_CONFIG = ParserConfig()


def tokenize(path_data: str) -> list[str | float]:
    """Split path data into command letters and numbers.

    Whitespace and commas are separators; anything else that is neither a
    letter nor a number is ignored.

    Args:
        path_data: Raw path description

    Returns:
        List of single-letter strings and floats, in order
    """
    tokens: list[str | float] = []
    for match in _TOKEN_RE.finditer(path_data):
        letter, number = match.groups()
        if letter is not None:
            tokens.append(letter)
        else:
            tokens.append(float(number))
    return tokens


def _command_groups(tokens: Iterable[str | float]) -> list[tuple[str, list[float]]]:
    """Group each command letter with the numbers that follow it.

    Numbers appearing before the first letter are dropped.
    """
    groups: list[tuple[str, list[float]]] = []
    for token in tokens:
        if isinstance(token, str):
            groups.append((token, []))
        elif groups:
            groups[-1][1].append(token)
    return groups


class _PathScanner:
    """Left-to-right scan that converts commands into absolute segments.

    Tracks the current point, the start of the current subpath and the last
    control point of each curve family so that shorthand commands can
    reflect it.

    Drawing only happens inside a subpath: commands before the first move
    are dropped, and a drawing command right after a close opens a new
    subpath at the closed one's start with an explicit move.
    """

    def __init__(self) -> None:
        self.segments: list[Segment] = []
        self.cx = 0.0
        self.cy = 0.0
        self.sx = 0.0
        self.sy = 0.0
        self.prev_cubic: tuple[float, float] | None = None
        self.prev_quad: tuple[float, float] | None = None
        self.started = False
        self.closed = False

    def _reset_controls(self) -> None:
        self.prev_cubic = None
        self.prev_quad = None

    def _abs(self, relative: bool, x: float, y: float) -> tuple[float, float]:
        if relative:
            return self.cx + x, self.cy + y
        return x, y

    def _reflect(self, control: tuple[float, float] | None) -> tuple[float, float]:
        if control is None:
            return self.cx, self.cy
        return self.cx + (self.cx - control[0]), self.cy + (self.cy - control[1])

    def scan(self, groups: list[tuple[str, list[float]]]) -> list[Segment]:
        for letter, numbers in groups:
            upper = letter.upper()
            if upper not in COMMAND_ARITY:
                continue
            if upper == "Z":
                if not self.started:
                    continue
                self.closed = True
                self.segments.append(Segment(SegmentKind.CLOSE, []))
                self.cx, self.cy = self.sx, self.sy
                self._reset_controls()
                continue

            relative = letter != upper
            arity = COMMAND_ARITY[upper]
            command = upper
            for start in range(0, len(numbers) - arity + 1, arity):
                values = numbers[start:start + arity]
                if command != "M" and not self._in_subpath():
                    continue
                self._apply(command, relative, values)
                # Extra pairs after a move are implicit line commands
                if command == "M":
                    command = "L"
        return self.segments

    def _in_subpath(self) -> bool:
        """Reopen a closed subpath at its start; False before the first move."""
        if not self.started:
            return False
        if self.closed:
            self.segments.append(Segment(SegmentKind.MOVE, [self.sx, self.sy]))
            self.closed = False
        return True

    def _apply(self, command: str, relative: bool, v: list[float]) -> None:
        if command == "M":
            x, y = self._abs(relative, v[0], v[1])
            self.segments.append(Segment(SegmentKind.MOVE, [x, y]))
            self.started = True
            self.closed = False
            self.cx, self.cy = x, y
            self.sx, self.sy = x, y
            self._reset_controls()
        elif command == "L":
            x, y = self._abs(relative, v[0], v[1])
            self._line_to(x, y)
        elif command == "H":
            x = self.cx + v[0] if relative else v[0]
            self._line_to(x, self.cy)
        elif command == "V":
            y = self.cy + v[0] if relative else v[0]
            self._line_to(self.cx, y)
        elif command == "C":
            c1 = self._abs(relative, v[0], v[1])
            c2 = self._abs(relative, v[2], v[3])
            end = self._abs(relative, v[4], v[5])
            self._cubic_to(c1, c2, end)
        elif command == "S":
            c1 = self._reflect(self.prev_cubic)
            c2 = self._abs(relative, v[0], v[1])
            end = self._abs(relative, v[2], v[3])
            self._cubic_to(c1, c2, end)
        elif command == "Q":
            c1 = self._abs(relative, v[0], v[1])
            end = self._abs(relative, v[2], v[3])
            self._quad_to(c1, end)
        elif command == "T":
            c1 = self._reflect(self.prev_quad)
            end = self._abs(relative, v[0], v[1])
            self._quad_to(c1, end)
        elif command == "A":
            x, y = self._abs(relative, v[5], v[6])
            self.segments.append(Segment(SegmentKind.ARC, [v[0], v[1], v[2], v[3], v[4], x, y]))
            self.cx, self.cy = x, y
            self._reset_controls()

    def _line_to(self, x: float, y: float) -> None:
        self.segments.append(Segment(SegmentKind.LINE, [x, y]))
        self.cx, self.cy = x, y
        self._reset_controls()

    def _cubic_to(
        self,
        c1: tuple[float, float],
        c2: tuple[float, float],
        end: tuple[float, float],
    ) -> None:
        self.segments.append(Segment(SegmentKind.CUBIC, [*c1, *c2, *end]))
        self.cx, self.cy = end
        self.prev_cubic = c2
        self.prev_quad = None

    def _quad_to(self, c1: tuple[float, float], end: tuple[float, float]) -> None:
        self.segments.append(Segment(SegmentKind.QUADRATIC, [*c1, *end]))
        self.cx, self.cy = end
        self.prev_quad = c1
        self.prev_cubic = None


def parse_segments(path_data: str) -> list[Segment]:
    """Parse path data into absolute segments.

    Relative commands become absolute, H/V become L, S becomes C and T
    becomes Q with the reflected control point made explicit. Every drawing
    segment follows a move: commands before the first M are dropped, and
    drawing after Z without a new M gets an explicit move to the closed
    subpath's start.

    Args:
        path_data: Raw path description

    Returns:
        Ordered list of absolute segments (possibly empty)
    """
    return _PathScanner().scan(_command_groups(tokenize(path_data)))


def _sample_curve(
    start: tuple[float, float],
    controls: list[tuple[float, float]],
    steps: int,
) -> list[Point]:
    """Uniform parametric samples of a line or Bezier, excluding t=0."""
    curve = (start, *controls)
    samples = []
    for i in range(1, steps + 1):
        x, y = segmentPointAtT(curve, i / steps)
        samples.append(Point(x, y))
    return samples


def flatten_segments(
    segments: list[Segment],
    config: ParserConfig | None = None,
) -> list[Contour]:
    """Flatten absolute segments into contours.

    Each move starts a new contour and a close ends it; drawing outside a
    contour is ignored. Curves are replaced by uniformly sampled
    points; arcs are approximated by points interpolated along the straight
    line to their end point. Contours with fewer than two distinct points are
    dropped.

    Args:
        segments: Absolute segments from parse_segments
        config: Sampling configuration

    Returns:
        List of contours
    """
    cfg = config or _DEFAULT_CONFIG
    steps = cfg.curve_sample_steps
    eps = cfg.dedup_epsilon

    contours: list[Contour] = []
    current: Contour | None = None
    cx = cy = 0.0
    sx = sy = 0.0

    def push(point: Point) -> None:
        if current is None:
            return
        if current.points:
            last = current.points[-1]
            if math.hypot(last.x - point.x, last.y - point.y) <= eps:
                return
        current.points.append(point)

    for segment in segments:
        v = segment.values
        kind = segment.kind
        if kind is SegmentKind.MOVE:
            current = Contour(points=[Point(v[0], v[1])])
            contours.append(current)
            cx, cy = sx, sy = v[0], v[1]
            continue
        if kind is SegmentKind.CLOSE:
            if current is not None:
                current.closed = True
                current = None
            cx, cy = sx, sy
            continue
        if kind is SegmentKind.LINE:
            push(Point(v[0], v[1]))
        elif kind is SegmentKind.CUBIC:
            for p in _sample_curve((cx, cy), [(v[0], v[1]), (v[2], v[3]), (v[4], v[5])], steps):
                push(p)
        elif kind is SegmentKind.QUADRATIC:
            for p in _sample_curve((cx, cy), [(v[0], v[1]), (v[2], v[3])], steps):
                push(p)
        elif kind is SegmentKind.ARC:
            for p in _sample_curve((cx, cy), [(v[5], v[6])], steps):
                push(p)
        end = segment.end_point
        if end is not None:
            cx, cy = end

    return [c for c in contours if len(c.points) > 1]


def parse(path_data: str, config: ParserConfig | None = None) -> list[Contour]:
    """Parse path data into flattened contours.

    Args:
        path_data: Raw path description
        config: Sampling configuration

    Returns:
        List of contours, one per non-degenerate subpath

    Examples:
        >>> [len(c) for c in parse("M 0 0 L 10 0 L 10 10 Z")]
        [3]
        >>> parse("M 5 5")
        []
    """
    return flatten_segments(parse_segments(path_data), config)


def fmt(value: float, precision: int = 2) -> str:
    """Format a coordinate with at most `precision` decimals.

    Trailing zeros and a dangling decimal point are removed, and negative
    zero is written as "0".

    Examples:
        >>> fmt(10.0)
        '10'
        >>> fmt(3.14159)
        '3.14'
        >>> fmt(-0.001)
        '0'
    """
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def serialize(segments: Iterable[Segment], precision: int = 2) -> str:
    """Serialize absolute segments back into path data.

    Args:
        segments: Segments to write
        precision: Decimal digits kept per coordinate

    Returns:
        Space separated path data using only M, L, C, Q, A and Z
    """
    parts: list[str] = []
    for segment in segments:
        if segment.kind is SegmentKind.CLOSE:
            parts.append("Z")
            continue
        values = " ".join(fmt(v, precision) for v in segment.values)
        parts.append(f"{segment.kind.value} {values}")
    return " ".join(parts)


def extract_contours(path_data: str, precision: int = 2) -> list[ContourRecord]:
    """Split path data into per-subpath records.

    Each record carries its own serialized path data, its segments and the
    end points of its commands, without curve sampling. The edit policy
    flattens records one by one so that a subpath too small to draw still
    counts as a contour.

    Args:
        path_data: Raw path description
        precision: Decimal digits kept when serializing each subpath

    Returns:
        One record per subpath, in path order
    """
    records: list[ContourRecord] = []
    current: list[Segment] = []
    points: list[Point] = []
    closed = False

    def flush() -> None:
        if current:
            records.append(
                ContourRecord(
                    path_data=serialize(current, precision),
                    segments=list(current),
                    points=list(points),
                    closed=closed,
                )
            )

    for segment in parse_segments(path_data):
        if segment.kind is SegmentKind.MOVE:
            flush()
            current, points, closed = [], [], False
        current.append(segment)
        if segment.kind is SegmentKind.CLOSE:
            closed = True
        end = segment.end_point
        if end is not None:
            points.append(Point(*end))
    flush()
    return records
