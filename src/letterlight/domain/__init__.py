"""Domain models for letterlight.

This module contains the core domain models representing outlines, their
editable structure, placed modules and the verdicts returned by the geometry
core. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries where the CLI emits them
- Independent of any rendering or UI layer

Key classes:
- Point, Contour, Bounds: Plane geometry
- Segment, EditablePoint: Editable path structure
- Module: A placed LED module
- ValidationResult, EditVerdict, MoveResult: Verdicts
- QualityReport, GradeResult: Placement assessment
"""

from letterlight.domain.contour import Bounds, Contour, ContourRecord, Point
from letterlight.domain.module import Module
from letterlight.domain.quality import GradeResult, QualityReport
from letterlight.domain.segment import (
    ANCHOR_SLOTS,
    AnchorGroup,
    EditablePoint,
    PointKind,
    Segment,
    SegmentKind,
)
from letterlight.domain.verdict import (
    EditRejectReason,
    EditVerdict,
    MoveResult,
    RejectCode,
    Severity,
    ValidationResult,
)

__all__: list[str] = [
    # Enums
    "EditRejectReason",
    "PointKind",
    "RejectCode",
    "SegmentKind",
    "Severity",
    # Core types
    "ANCHOR_SLOTS",
    "AnchorGroup",
    "Bounds",
    "Contour",
    "ContourRecord",
    "EditVerdict",
    "EditablePoint",
    "GradeResult",
    "Module",
    "MoveResult",
    "Point",
    "QualityReport",
    "Segment",
    "ValidationResult",
]
