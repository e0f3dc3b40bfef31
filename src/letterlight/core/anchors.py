"""Editable anchor model for interactive outline editing.

Editable points are re-derived from the path string on every call; nothing
is cached between calls. A point id encodes the owning segment index and the
value slots of its coordinates, so ids stay valid while segment order is
unchanged and must be treated as invalid after any structural edit.

The safe move protocol is:
1. Locate the anchor and compute the move delta
2. Collect linked anchors (same contour, coincident before the move)
3. Move every linked anchor with its adjacent control handles
4. Serialize the candidate path
5. Ask the edit validator, then commit, warn or revert

A rejected move returns the input path string unchanged, so the caller's
last accepted geometry is never replaced by an invalid one.
"""

import math

import structlog

from letterlight.config import AnchorConfig
from letterlight.core.edit_policy import EditValidator, OutlineEditValidator
from letterlight.core.parser import parse_segments, serialize
from letterlight.domain import (
    ANCHOR_SLOTS,
    AnchorGroup,
    Bounds,
    EditablePoint,
    EditRejectReason,
    MoveResult,
    Point,
    PointKind,
    Segment,
    SegmentKind,
    Severity,
)
from letterlight.exceptions import PointNotFoundError

logger = structlog.get_logger(__name__)

# Control handle slots emitted for each curve kind, in order
_CONTROL_SLOTS: dict[SegmentKind, list[tuple[PointKind, int, int]]] = {
    SegmentKind.QUADRATIC: [(PointKind.CONTROL1, 0, 1)],
    SegmentKind.CUBIC: [(PointKind.CONTROL1, 0, 1), (PointKind.CONTROL2, 2, 3)],
}


def points_from_segments(segments: list[Segment]) -> list[EditablePoint]:
    """Emit one editable point per anchor and control coordinate pair.

    Args:
        segments: Absolute segments

    Returns:
        Every handle in segment order, controls before their anchor
    """
    points: list[EditablePoint] = []
    contour_index = -1
    for segment_index, segment in enumerate(segments):
        if segment.kind is SegmentKind.MOVE:
            contour_index += 1
        owner = max(0, contour_index)

        for kind, x_slot, y_slot in _CONTROL_SLOTS.get(segment.kind, []):
            points.append(_make_point(segment, segment_index, owner, kind, x_slot, y_slot))

        slots = ANCHOR_SLOTS.get(segment.kind)
        if slots is not None:
            points.append(
                _make_point(segment, segment_index, owner, PointKind.ANCHOR, slots[0], slots[1])
            )
    return points


def _make_point(
    segment: Segment,
    segment_index: int,
    contour_index: int,
    kind: PointKind,
    x_slot: int,
    y_slot: int,
) -> EditablePoint:
    return EditablePoint(
        id=EditablePoint.make_id(segment_index, kind, x_slot, y_slot),
        kind=kind,
        x=segment.values[x_slot],
        y=segment.values[y_slot],
        contour_index=contour_index,
        segment_index=segment_index,
        x_slot=x_slot,
        y_slot=y_slot,
    )


class AnchorModel:
    """Builds editable points and applies safe anchor moves.

    Example:
        model = AnchorModel()
        points = model.build_anchor_points(path)
        result = model.move_anchor_safe(path, points[0].id, Point(12, 4))
        if result.accepted:
            path = result.path_data
    """

    def __init__(
        self,
        config: AnchorConfig | None = None,
        validator: EditValidator | None = None,
    ) -> None:
        """Initialize the anchor model.

        Args:
            config: Link tolerance and serialization precision
            validator: Default edit validator (strict outline validation
                when omitted)
        """
        self.config = config or AnchorConfig()
        self.validator: EditValidator = validator or OutlineEditValidator()

    def _coincident(self, a: EditablePoint, b: EditablePoint) -> bool:
        return (
            a.contour_index == b.contour_index
            and math.hypot(a.x - b.x, a.y - b.y) <= self.config.link_tolerance
        )

    def _dedupe_anchors(self, points: list[EditablePoint]) -> list[EditablePoint]:
        kept: list[EditablePoint] = []
        for point in points:
            if not point.is_anchor:
                continue
            if any(self._coincident(point, other) for other in kept):
                continue
            kept.append(point)
        return kept

    def build_points(self, path_data: str) -> list[EditablePoint]:
        """Build every editable handle, with coincident anchors merged.

        Control handles are all reported. Anchors of one contour lying
        within the link tolerance of an earlier anchor are omitted, so a
        closing join shows up as a single logical point.

        Args:
            path_data: Outline path description

        Returns:
            Editable points in segment order
        """
        all_points = points_from_segments(parse_segments(path_data))
        anchors = {p.id for p in self._dedupe_anchors(all_points)}
        return [p for p in all_points if not p.is_anchor or p.id in anchors]

    def build_anchor_points(self, path_data: str) -> list[EditablePoint]:
        """Build the deduplicated anchor points of a path."""
        return self._dedupe_anchors(points_from_segments(parse_segments(path_data)))

    def build_anchor_groups(self, path_data: str) -> list[AnchorGroup]:
        """Group coincident anchors of each contour.

        Args:
            path_data: Outline path description

        Returns:
            One group per logical anchor, with every member id
        """
        groups: list[tuple[EditablePoint, list[str]]] = []
        for point in points_from_segments(parse_segments(path_data)):
            if not point.is_anchor:
                continue
            for representative, members in groups:
                if self._coincident(point, representative):
                    members.append(point.id)
                    break
            else:
                groups.append((point, [point.id]))

        return [
            AnchorGroup(
                representative_id=rep.id,
                contour_index=rep.contour_index,
                x=rep.x,
                y=rep.y,
                member_ids=tuple(members),
            )
            for rep, members in groups
        ]

    def move_point(self, path_data: str, point_id: str, target: Point) -> tuple[str, list[EditablePoint]]:
        """Move a single handle without validation or linking.

        Args:
            path_data: Outline path description
            point_id: Id of an anchor or control handle
            target: New position

        Returns:
            Tuple of (new path data, every editable handle of the new path)

        Raises:
            PointNotFoundError: If no handle has the given id
        """
        segments = parse_segments(path_data)
        point = next((p for p in points_from_segments(segments) if p.id == point_id), None)
        if point is None:
            raise PointNotFoundError(point_id)

        segment = segments[point.segment_index]
        segment.values[point.x_slot] = target.x
        segment.values[point.y_slot] = target.y

        updated = serialize(segments, self.config.precision)
        return updated, points_from_segments(parse_segments(updated))

    def move_anchor_safe(
        self,
        path_data: str,
        point_id: str,
        target: Point,
        bounds: Bounds | None = None,
        validator: EditValidator | None = None,
    ) -> MoveResult:
        """Move an anchor, its linked partners and adjacent controls safely.

        Args:
            path_data: Last accepted outline path description
            point_id: Id of the anchor being dragged
            target: New anchor position
            bounds: Optional allowed region passed to the validator
            validator: Edit validator overriding the model's default

        Returns:
            MoveResult. When not accepted, path_data is the input string
            unchanged.
        """
        segments = parse_segments(path_data)
        points = points_from_segments(segments)
        point = next((p for p in points if p.id == point_id), None)
        if point is None or not point.is_anchor:
            logger.debug("Anchor move ignored", point_id=point_id, reason="unknown anchor")
            return MoveResult(
                accepted=False,
                severity=Severity.ERROR,
                path_data=path_data,
                points=self.build_anchor_points(path_data),
                reason=EditRejectReason.DEGENERATE_SEGMENT,
            )

        dx = target.x - point.x
        dy = target.y - point.y
        linked = [p for p in points if p.is_anchor and self._coincident(p, point)]

        moved: set[tuple[int, int, int]] = set()
        for anchor in linked:
            key = (anchor.segment_index, anchor.x_slot, anchor.y_slot)
            if key in moved:
                continue
            moved.add(key)

            owner = segments[anchor.segment_index]
            self._translate_incoming_control(owner, anchor, dx, dy)
            if anchor.id == point.id:
                owner.values[anchor.x_slot] = target.x
                owner.values[anchor.y_slot] = target.y
            else:
                owner.values[anchor.x_slot] += dx
                owner.values[anchor.y_slot] += dy
            if anchor.segment_index + 1 < len(segments):
                self._translate_outgoing_control(segments[anchor.segment_index + 1], dx, dy)

        candidate = serialize(segments, self.config.precision)
        verdict = (validator or self.validator)(path_data, candidate, bounds)

        if not verdict.ok:
            logger.debug(
                "Anchor move rejected",
                point_id=point_id,
                reason=verdict.reason.value if verdict.reason else None,
            )
            return MoveResult(
                accepted=False,
                severity=verdict.severity,
                path_data=path_data,
                points=self.build_anchor_points(path_data),
                reason=verdict.reason,
            )

        if verdict.severity is Severity.WARN:
            return MoveResult(
                accepted=True,
                severity=Severity.WARN,
                path_data=candidate,
                points=self.build_anchor_points(candidate),
                warning_reason=verdict.reason,
            )

        return MoveResult(
            accepted=True,
            severity=Severity.OK,
            path_data=candidate,
            points=self.build_anchor_points(candidate),
        )

    @staticmethod
    def _translate_incoming_control(
        segment: Segment, anchor: EditablePoint, dx: float, dy: float
    ) -> None:
        """Shift the control of the curve that ends at this anchor."""
        if segment.kind is SegmentKind.CUBIC and (anchor.x_slot, anchor.y_slot) == (4, 5):
            segment.values[2] += dx
            segment.values[3] += dy
        elif segment.kind is SegmentKind.QUADRATIC and (anchor.x_slot, anchor.y_slot) == (2, 3):
            segment.values[0] += dx
            segment.values[1] += dy

    @staticmethod
    def _translate_outgoing_control(segment: Segment, dx: float, dy: float) -> None:
        """Shift the leading control of the curve that starts at the anchor."""
        if segment.kind in (SegmentKind.CUBIC, SegmentKind.QUADRATIC):
            segment.values[0] += dx
            segment.values[1] += dy


_default_model = AnchorModel()


def build_points(path_data: str) -> list[EditablePoint]:
    """Build editable points with the default anchor model."""
    return _default_model.build_points(path_data)


def move_anchor_safe(
    path_data: str,
    point_id: str,
    target: Point,
    bounds: Bounds | None = None,
    validator: EditValidator | None = None,
) -> MoveResult:
    """Safe anchor move with the default anchor model."""
    return _default_model.move_anchor_safe(path_data, point_id, target, bounds, validator)
