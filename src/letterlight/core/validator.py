"""Outline validation.

The validator is the strict counterpart of the permissive parser: any path
string can be parsed, but only outlines that pass every check here should be
committed. Checks run in a fixed priority order and stop at the first
failure:

1. Size guard (raw string length)
2. Degenerate (no contours)
3. Self-intersection (per contour)
4. Dimension sanity (bbox width/height)
5. Curvature spike (longest edge vs. bbox diagonal)
6. Bounding-box escape (only when allowed bounds are supplied)
"""

import math

import structlog

from letterlight.config import ParserConfig, ValidatorConfig
from letterlight.core.geometry import has_self_intersection
from letterlight.core.parser import parse
from letterlight.domain import Bounds, RejectCode, ValidationResult

logger = structlog.get_logger(__name__)


class OutlineValidator:
    """Validates outline path strings.

    The validator is stateless apart from its configuration and never
    raises for malformed input; it returns a ValidationResult instead.
    """

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        parser_config: ParserConfig | None = None,
    ) -> None:
        """Initialize validator with configuration.

        Args:
            config: Validation tolerances
            parser_config: Curve sampling used when flattening the outline
        """
        self.config = config or ValidatorConfig()
        self.parser_config = parser_config or ParserConfig()

    def validate(self, path_data: str, bounds: Bounds | None = None) -> ValidationResult:
        """Validate an outline.

        Args:
            path_data: Outline path description
            bounds: Optional allowed region (e.g. the character's nominal box)

        Returns:
            ValidationResult with ok=True, or the first failing check's code
        """
        result = self._run_checks(path_data, bounds)
        if not result.ok:
            logger.debug(
                "Outline rejected",
                code=result.code.value if result.code else None,
                path_length=len(path_data),
            )
        return result

    def _run_checks(self, path_data: str, bounds: Bounds | None) -> ValidationResult:
        cfg = self.config

        if len(path_data) > cfg.max_path_length:
            return ValidationResult.reject(RejectCode.DEGENERATE, "Shape path is too large.")

        contours = parse(path_data, self.parser_config)
        if not contours:
            return ValidationResult.reject(RejectCode.DEGENERATE, "Shape path appears degenerate.")

        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        max_edge = 0.0
        for contour in contours:
            if has_self_intersection(
                contour,
                eps=cfg.intersection_epsilon,
                shared_tolerance=cfg.shared_endpoint_tolerance,
            ):
                return ValidationResult.reject(
                    RejectCode.SELF_INTERSECTION, "Shape contour self-intersects."
                )
            points = contour.points
            for i, p in enumerate(points):
                min_x = min(min_x, p.x)
                min_y = min(min_y, p.y)
                max_x = max(max_x, p.x)
                max_y = max(max_y, p.y)
                if i > 0:
                    max_edge = max(max_edge, p.distance_to(points[i - 1]))

        width = max_x - min_x
        height = max_y - min_y
        if (
            not math.isfinite(width)
            or not math.isfinite(height)
            or width <= cfg.min_dimension
            or height <= cfg.min_dimension
        ):
            return ValidationResult.reject(
                RejectCode.DEGENERATE, "Shape path has invalid dimensions."
            )

        diagonal = math.hypot(width, height)
        if diagonal > 0 and max_edge > diagonal * cfg.spike_ratio:
            return ValidationResult.reject(
                RejectCode.CURVATURE_SPIKE, "Shape path has extreme spikes."
            )

        if bounds is not None:
            tolerance = max(cfg.bbox_min_tolerance, bounds.diagonal * cfg.bbox_tolerance_ratio)
            allowed = bounds.expanded(tolerance)
            outline = Bounds.from_extents(min_x, min_y, max_x, max_y)
            if not bounds.is_finite() or not allowed.contains_bounds(outline):
                return ValidationResult.reject(
                    RejectCode.BBOX_ESCAPE, "Shape path escapes allowed bounds."
                )

        return ValidationResult.accept()


def validate_outline(
    path_data: str,
    bounds: Bounds | None = None,
    config: ValidatorConfig | None = None,
) -> ValidationResult:
    """Validate an outline with a one-off validator.

    Args:
        path_data: Outline path description
        bounds: Optional allowed region
        config: Validation tolerances

    Returns:
        ValidationResult
    """
    return OutlineValidator(config).validate(path_data, bounds)
