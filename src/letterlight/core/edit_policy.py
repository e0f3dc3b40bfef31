"""Validation policies for interactive outline edits.

The anchor model does not decide on its own whether an edited outline is
acceptable. It calls an EditValidator with the previous and the candidate
path strings and commits, warns or reverts based on the verdict. Two
policies are provided:

- PathEditPolicy: graded policy comparing candidate against previous path
  (bbox escape and self-intersection warn, severe spikes and degenerate
  geometry are errors). Strict mode turns every warning into an error.
- OutlineEditValidator: maps the strict OutlineValidator onto the callback
  shape; every rejection is an error.
"""

import math
from typing import Protocol

from letterlight.config import EditPolicyConfig, ParserConfig, ValidatorConfig
from letterlight.core.geometry import bounds_of, has_self_intersection, median
from letterlight.core.parser import extract_contours, flatten_segments
from letterlight.core.validator import OutlineValidator
from letterlight.domain import (
    Bounds,
    Contour,
    EditRejectReason,
    EditVerdict,
    RejectCode,
    Severity,
)


class EditValidator(Protocol):
    """Callback deciding the fate of a candidate edit."""

    def __call__(
        self,
        previous_path: str,
        candidate_path: str,
        bounds: Bounds | None = None,
    ) -> EditVerdict: ...


def _contour_stats(contour: Contour) -> tuple[float, float, float]:
    """Return (total length, longest edge, median edge) of a contour."""
    lengths = [a.distance_to(b) for a, b in contour.edges()]
    if not lengths:
        return 0.0, 0.0, 0.0
    return sum(lengths), max(lengths), median(lengths)


def _subpath_contours(path_data: str, parser_config: ParserConfig | None) -> list[Contour]:
    """Flatten each subpath on its own.

    A subpath with no drawable extent stays in the list as an empty contour
    so that it fails the minimum point count instead of disappearing.
    """
    contours = []
    for record in extract_contours(path_data):
        flattened = flatten_segments(record.segments, parser_config)
        contours.append(flattened[0] if flattened else Contour(points=[], closed=record.closed))
    return contours


def _escapes(candidate: Bounds, base: Bounds, cfg: EditPolicyConfig) -> bool:
    tolerance = max(cfg.bbox_min_tolerance, base.diagonal * cfg.bbox_tolerance_ratio)
    return not base.expanded(tolerance).contains_bounds(candidate)


def validate_path_edit(
    previous_path: str,
    candidate_path: str,
    bounds: Bounds | None = None,
    config: EditPolicyConfig | None = None,
    parser_config: ParserConfig | None = None,
) -> EditVerdict:
    """Grade a candidate outline against the one it replaces.

    Args:
        previous_path: Last accepted path data
        candidate_path: Path data produced by the edit
        bounds: Optional allowed region
        config: Policy thresholds
        parser_config: Curve sampling configuration

    Returns:
        EditVerdict with severity ok, warn or error
    """
    cfg = config or EditPolicyConfig()
    soft = Severity.ERROR if cfg.strict else Severity.WARN

    if not candidate_path.strip():
        return EditVerdict.of(Severity.ERROR, EditRejectReason.DEGENERATE_SEGMENT)

    candidate_contours = _subpath_contours(candidate_path, parser_config)
    extents = bounds_of(candidate_contours)
    candidate_bbox = Bounds.from_extents(*extents) if extents else bounds
    if candidate_bbox is None:
        return EditVerdict.of(Severity.ERROR, EditRejectReason.DEGENERATE_SEGMENT)
    if (
        not math.isfinite(candidate_bbox.width)
        or not math.isfinite(candidate_bbox.height)
        or candidate_bbox.width < 1e-3
        or candidate_bbox.height < 1e-3
    ):
        return EditVerdict.of(Severity.ERROR, EditRejectReason.DEGENERATE_SEGMENT)
    if bounds is not None and _escapes(candidate_bbox, bounds, cfg):
        return EditVerdict.of(soft, EditRejectReason.BBOX_ESCAPE)

    if not candidate_contours:
        return EditVerdict.of(Severity.ERROR, EditRejectReason.DEGENERATE_SEGMENT)
    previous_contours = _subpath_contours(previous_path, parser_config)

    candidate_total = 0.0
    previous_total = 0.0
    candidate_max = 0.0
    previous_median = 0.0
    for i, contour in enumerate(candidate_contours):
        if len(contour.points) < 3:
            return EditVerdict.of(Severity.ERROR, EditRejectReason.DEGENERATE_SEGMENT)
        if has_self_intersection(contour):
            return EditVerdict.of(
                soft,
                EditRejectReason.SELF_INTERSECTION,
                {"contour_count": float(len(candidate_contours))},
            )
        total, longest, _ = _contour_stats(contour)
        candidate_total += total
        candidate_max = max(candidate_max, longest)

        if i < len(previous_contours):
            prev_total, _, prev_median = _contour_stats(previous_contours[i])
            previous_total += prev_total
            previous_median = max(previous_median, prev_median)

    metrics = {
        "candidate_length": candidate_total,
        "previous_length": previous_total,
        "max_segment": candidate_max,
        "previous_median_segment": previous_median,
        "contour_count": float(len(candidate_contours)),
    }

    if previous_total > 0 and candidate_total > previous_total * cfg.length_growth_limit:
        return EditVerdict.of(soft, EditRejectReason.CURVATURE_SPIKE, metrics)

    threshold = max(
        previous_median * cfg.median_segment_factor,
        candidate_bbox.diagonal * cfg.diagonal_segment_factor,
    )
    if candidate_max > threshold:
        ratio = candidate_max / threshold if threshold > 0 else 0.0
        severity = Severity.ERROR if ratio > cfg.hard_spike_ratio else soft
        return EditVerdict.of(severity, EditRejectReason.CURVATURE_SPIKE, metrics)

    return EditVerdict.of(Severity.OK, None, metrics)


class PathEditPolicy:
    """Graded edit policy as a reusable callback."""

    def __init__(
        self,
        config: EditPolicyConfig | None = None,
        parser_config: ParserConfig | None = None,
    ) -> None:
        self.config = config or EditPolicyConfig()
        self.parser_config = parser_config

    def __call__(
        self,
        previous_path: str,
        candidate_path: str,
        bounds: Bounds | None = None,
    ) -> EditVerdict:
        return validate_path_edit(
            previous_path, candidate_path, bounds, self.config, self.parser_config
        )


_REASON_BY_CODE: dict[RejectCode, EditRejectReason] = {
    RejectCode.DEGENERATE: EditRejectReason.DEGENERATE_SEGMENT,
    RejectCode.SELF_INTERSECTION: EditRejectReason.SELF_INTERSECTION,
    RejectCode.BBOX_ESCAPE: EditRejectReason.BBOX_ESCAPE,
    RejectCode.CURVATURE_SPIKE: EditRejectReason.CURVATURE_SPIKE,
}


class OutlineEditValidator:
    """Edit callback backed by the strict outline validator.

    The previous path is ignored; the candidate must pass on its own.
    """

    def __init__(self, validator: OutlineValidator | None = None) -> None:
        self.validator = validator or OutlineValidator(ValidatorConfig())

    def __call__(
        self,
        previous_path: str,  # noqa: ARG002
        candidate_path: str,
        bounds: Bounds | None = None,
    ) -> EditVerdict:
        result = self.validator.validate(candidate_path, bounds)
        if result.ok or result.code is None:
            return EditVerdict.of(Severity.OK)
        return EditVerdict.of(Severity.ERROR, _REASON_BY_CODE[result.code])
