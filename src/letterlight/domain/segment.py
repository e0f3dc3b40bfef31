"""Segment and editable point types for anchor editing.

Segments are the authoritative, order-preserving representation of a path:
one absolute drawing instruction each. Editable points are handles derived
from segments with back-references so that a move can be written back into
the segment values without loss.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SegmentKind(str, Enum):
    """Absolute drawing instruction kind.

    Shorthand and relative commands are normalised during parsing, so only
    these six kinds exist after a path has been read.
    """

    MOVE = "M"
    LINE = "L"
    CUBIC = "C"
    QUADRATIC = "Q"
    ARC = "A"
    CLOSE = "Z"


# Value slots holding the end point (anchor) of each kind
ANCHOR_SLOTS: dict[SegmentKind, tuple[int, int]] = {
    SegmentKind.MOVE: (0, 1),
    SegmentKind.LINE: (0, 1),
    SegmentKind.CUBIC: (4, 5),
    SegmentKind.QUADRATIC: (2, 3),
    SegmentKind.ARC: (5, 6),
}


@dataclass
class Segment:
    """A single absolute-coordinate drawing instruction.

    Attributes:
        kind: Instruction kind
        values: Coordinate values in SVG argument order. Arcs keep their
            radii, rotation and flags in slots 0-4 and the end point in 5-6.
    """

    kind: SegmentKind
    values: list[float] = field(default_factory=list)

    @property
    def end_point(self) -> tuple[float, float] | None:
        """The anchor this segment ends at, None for close."""
        slots = ANCHOR_SLOTS.get(self.kind)
        if slots is None:
            return None
        return (self.values[slots[0]], self.values[slots[1]])


class PointKind(str, Enum):
    """Role of an editable point within its segment."""

    ANCHOR = "anchor"
    CONTROL1 = "control1"
    CONTROL2 = "control2"


@dataclass(frozen=True)
class EditablePoint:
    """One manipulable handle derived from a segment.

    The id encodes the structural position (segment index and value slots)
    and is stable across re-serialization as long as segment order does not
    change.

    Attributes:
        id: Opaque identifier, "{segment}:{kind}:{x_slot}:{y_slot}"
        kind: Anchor or control handle
        x: Current X coordinate
        y: Current Y coordinate
        contour_index: Index of the owning subpath
        segment_index: Index of the owning segment
        x_slot: Value index holding x
        y_slot: Value index holding y
    """

    id: str
    kind: PointKind
    x: float
    y: float
    contour_index: int
    segment_index: int
    x_slot: int
    y_slot: int

    @staticmethod
    def make_id(segment_index: int, kind: PointKind, x_slot: int, y_slot: int) -> str:
        """Build the identifier for a handle."""
        return f"{segment_index}:{kind.value}:{x_slot}:{y_slot}"

    @property
    def is_anchor(self) -> bool:
        return self.kind is PointKind.ANCHOR

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "x": self.x,
            "y": self.y,
            "contour_index": self.contour_index,
            "segment_index": self.segment_index,
            "x_slot": self.x_slot,
            "y_slot": self.y_slot,
        }


@dataclass(frozen=True)
class AnchorGroup:
    """Anchors of one contour that coincide and act as one logical joint.

    Attributes:
        representative_id: Id of the first anchor of the group
        contour_index: Owning subpath
        x: Representative X coordinate
        y: Representative Y coordinate
        member_ids: Ids of every anchor in the group
    """

    representative_id: str
    contour_index: int
    x: float
    y: float
    member_ids: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "representative_id": self.representative_id,
            "contour_index": self.contour_index,
            "x": self.x,
            "y": self.y,
            "member_ids": list(self.member_ids),
        }
