"""Geometry core for letterlight.

This module contains the algorithms for:

- Path parsing, flattening and serialization
- Outline validation (degenerate, self-intersection, spikes, bbox escape)
- Anchor editing with linked joins, validation callbacks and rollback
- Containment queries (point, capsule, ray distance to edge)
- LED module placement (grid autofill, stroke following)
- Placement quality evaluation and grading

All operations are synchronous and pure with respect to their inputs. Path
strings are never mutated in place; edits return a new string.

Key classes:
- OutlineValidator: Strict outline checks returning typed verdicts
- AnchorModel: Editable points and safe anchor moves
- PathEditPolicy, OutlineEditValidator: Edit validation callbacks
- Outline: Parsed outline with a fill-containment provider
- PlacementEngine: Grid autofill, count estimate and stroke following
"""

from letterlight.core.anchors import (
    AnchorModel,
    build_points,
    move_anchor_safe,
    points_from_segments,
)
from letterlight.core.containment import (
    GeometryProvider,
    Outline,
    PenFillProvider,
    StrokeMetric,
    capsule_inside,
    distance_to_edge,
    measure_stroke_width,
    point_inside,
)
from letterlight.core.edit_policy import (
    EditValidator,
    OutlineEditValidator,
    PathEditPolicy,
    validate_path_edit,
)
from letterlight.core.parser import (
    extract_contours,
    flatten_segments,
    fmt,
    parse,
    parse_segments,
    serialize,
    tokenize,
)
from letterlight.core.placement import (
    GridLayout,
    PlacementEngine,
    autofill,
    estimate_count,
)
from letterlight.core.quality import evaluate, grade, nearest_neighbor_distances
from letterlight.core.spacing import select_well_spaced
from letterlight.core.validator import OutlineValidator, validate_outline

__all__ = [
    # Anchor editing
    "AnchorModel",
    "EditValidator",
    "OutlineEditValidator",
    "PathEditPolicy",
    "build_points",
    "move_anchor_safe",
    "points_from_segments",
    "validate_path_edit",
    # Containment
    "GeometryProvider",
    "Outline",
    "PenFillProvider",
    "StrokeMetric",
    "capsule_inside",
    "distance_to_edge",
    "measure_stroke_width",
    "point_inside",
    # Parsing
    "extract_contours",
    "flatten_segments",
    "fmt",
    "parse",
    "parse_segments",
    "serialize",
    "tokenize",
    # Placement
    "GridLayout",
    "PlacementEngine",
    "autofill",
    "estimate_count",
    "evaluate",
    "grade",
    "nearest_neighbor_distances",
    "select_well_spaced",
    # Validation
    "OutlineValidator",
    "validate_outline",
]
