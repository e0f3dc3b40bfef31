"""LED module placement inside letter outlines.

Two strategies are supported:

- Grid autofill: overlay a lattice sized by the module footprint, spacing
  and inset on the outline's bounding box and keep every cell whose module
  capsule lies inside the fill.
- Stroke following: walk the outline at even arc-length intervals and
  place modules offset inward from the stroke, rotated along the normal.

Output size is bounded. estimate_count gives a cheap pre-check, and the
engine refuses to emit more modules than the configured ceiling, returning
an empty result instead of unbounded output.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass

import structlog

from letterlight.config import AutofillConfig, Orientation, StrokeFollowConfig
from letterlight.core.containment import Outline, capsule_inside, point_inside
from letterlight.core.geometry import (
    perpendicular_direction,
    point_at_length,
    polyline_length,
    polyline_vertices,
)
from letterlight.core.spacing import select_well_spaced
from letterlight.domain import Bounds, Module, Point

logger = structlog.get_logger(__name__)

MIN_SCALE = 0.1


@dataclass(frozen=True)
class GridLayout:
    """Lattice of candidate module centres over an outline's bounding box.

    Attributes:
        start_x: First column centre
        start_y: First row centre
        end_x: Last allowed centre X
        end_y: Last allowed centre Y
        step_x: Column pitch
        step_y: Row pitch
        rotation: Module rotation in degrees (0 or 90)
        module_w: Scaled module length
        module_h: Scaled module thickness
    """

    start_x: float
    start_y: float
    end_x: float
    end_y: float
    step_x: float
    step_y: float
    rotation: float
    module_w: float
    module_h: float

    @classmethod
    def build(cls, bounds: Bounds, config: AutofillConfig, spacing: float) -> "GridLayout":
        """Lay out the lattice for a bounding box.

        Args:
            bounds: Outline bounding box
            config: Module style
            spacing: Gap between neighbouring modules

        Returns:
            GridLayout instance
        """
        scale = max(MIN_SCALE, config.scale)
        module_w = config.module_width * scale
        module_h = config.module_height * scale
        cell_w = module_w + spacing
        cell_h = module_h + spacing

        # A vertical module is rotated 90 degrees, so its footprint swaps axes
        if config.orientation is Orientation.VERTICAL:
            step_x, step_y = cell_h, cell_w
        else:
            step_x, step_y = cell_w, cell_h

        inset = max(0.0, config.inset)
        return cls(
            start_x=bounds.x + inset + step_x / 2,
            start_y=bounds.y + inset + step_y / 2,
            end_x=bounds.max_x - inset,
            end_y=bounds.max_y - inset,
            step_x=step_x,
            step_y=step_y,
            rotation=config.orientation.rotation,
            module_w=module_w,
            module_h=module_h,
        )

    @property
    def cell_area(self) -> float:
        return self.step_x * self.step_y

    @property
    def capsule_half_length(self) -> float:
        """Distance from the module centre to each end-cap centre."""
        return max(0.0, self.module_w / 2 - self.module_h / 2)

    def centres(self) -> Iterator[tuple[float, float]]:
        """Yield lattice centres row by row."""
        rows = math.floor((self.end_y - self.start_y) / self.step_y) + 1
        cols = math.floor((self.end_x - self.start_x) / self.step_x) + 1
        for row in range(max(0, rows)):
            cy = self.start_y + row * self.step_y
            for col in range(max(0, cols)):
                yield self.start_x + col * self.step_x, cy


class PlacementEngine:
    """Generates LED module layouts for outlines.

    Example:
        engine = PlacementEngine()
        outline = Outline.from_path("M 0 0 L 100 0 L 100 40 L 0 40 Z")
        if engine.estimate_count(outline) <= 500:
            modules = engine.autofill(outline)
    """

    def __init__(
        self,
        config: AutofillConfig | None = None,
        stroke_config: StrokeFollowConfig | None = None,
    ) -> None:
        """Initialize placement engine.

        Args:
            config: Default module style for grid autofill
            stroke_config: Default stroke-following configuration
        """
        self.config = config or AutofillConfig()
        self.stroke_config = stroke_config or StrokeFollowConfig()

    def _layout(self, outline: Outline, config: AutofillConfig, spacing: float) -> GridLayout | None:
        bounds = outline.bounds
        if bounds is None or not bounds.is_finite():
            return None
        layout = GridLayout.build(bounds, config, spacing)
        if layout.step_x <= 0 or layout.step_y <= 0:
            return None
        return layout

    def estimate_count(self, outline: Outline, config: AutofillConfig | None = None) -> int:
        """Estimate how many modules autofill would place.

        Samples the spacing-free lattice (cells the size of one module
        footprint) with plain point tests, then scales the inside count by
        the ratio of footprint area to the configured cell area. No capsule
        tests are run and no modules are built. Because the sampling lattice
        does not depend on spacing, the estimate never decreases as spacing
        decreases.

        Args:
            outline: Outline to fill
            config: Module style (engine default when omitted)

        Returns:
            Estimated module count
        """
        cfg = config or self.config
        sample = self._layout(outline, cfg, 0.0)
        target = self._layout(outline, cfg, cfg.spacing)
        if sample is None or target is None:
            return 0

        inside = sum(1 for cx, cy in sample.centres() if point_inside(outline, cx, cy))
        return math.ceil(inside * sample.cell_area / target.cell_area - 1e-9)

    def autofill(self, outline: Outline, config: AutofillConfig | None = None) -> list[Module]:
        """Fill an outline with a grid of modules.

        Args:
            outline: Outline to fill
            config: Module style (engine default when omitted)

        Returns:
            Placed modules, never more than config.max_modules. An empty list
            is returned when the estimate already exceeds the ceiling.
        """
        cfg = config or self.config
        layout = self._layout(outline, cfg, cfg.spacing)
        if layout is None:
            return []

        estimate = self.estimate_count(outline, cfg)
        if estimate > cfg.max_modules:
            logger.warning(
                "Autofill refused",
                estimate=estimate,
                max_modules=cfg.max_modules,
            )
            return []

        half_length = layout.capsule_half_length
        candidates: list[Point] = []
        for cx, cy in layout.centres():
            if not capsule_inside(outline, cx, cy, layout.rotation, half_length):
                continue
            candidates.append(Point(cx, cy))

        min_distance = min(layout.module_w, layout.module_h) * cfg.packing_factor
        kept = select_well_spaced(candidates, min_distance)

        if len(kept) > cfg.max_modules:
            logger.warning(
                "Autofill truncated",
                generated=len(kept),
                max_modules=cfg.max_modules,
            )
            kept = kept[: cfg.max_modules]

        modules = [
            Module(
                x=candidates[i].x,
                y=candidates[i].y,
                rotation=layout.rotation,
                w=layout.module_w,
                h=layout.module_h,
            )
            for i in kept
        ]
        logger.debug(
            "Autofill complete",
            candidates=len(candidates),
            modules=len(modules),
            orientation=cfg.orientation.value,
        )
        return modules

    def follow_stroke(
        self, outline: Outline, config: StrokeFollowConfig | None = None
    ) -> list[Module]:
        """Place modules along the outline, offset inward from the stroke.

        Samples sit at the midpoints of `count` equal arc-length intervals
        over all contours. At each sample the tangent comes from a finite
        difference, the normal is the tangent rotated 90 degrees (flipped if
        it does not point into the fill), and the module is pushed inward by
        min(desired_inset, module_size * 0.8). Samples whose module capsule
        does not fit inside the outline are skipped, so a stroke thinner than
        the inset yields fewer modules than `count`.

        Args:
            outline: Outline to follow
            config: Stroke configuration (engine default when omitted)

        Returns:
            Placed modules, rotated along the local normal
        """
        cfg = config or self.stroke_config
        if cfg.count > cfg.max_modules:
            logger.warning(
                "Stroke placement refused",
                count=cfg.count,
                max_modules=cfg.max_modules,
            )
            return []

        polylines = [polyline_vertices(contour) for contour in outline.contours]
        lengths = [polyline_length(points) for points in polylines]
        total = sum(lengths)
        if total <= 0:
            return []

        interval = total / cfg.count
        offset = min(cfg.desired_inset, cfg.module_size * 0.8)
        half_length = max(0.0, cfg.module_size / 2 - cfg.module_height / 2)
        modules: list[Module] = []

        for i in range(cfg.count):
            index, local = _locate(lengths, (i + 0.5) * interval)
            points = polylines[index]
            point = point_at_length(points, local)
            before = point_at_length(points, max(0.0, local - cfg.tangent_delta))
            after = point_at_length(points, min(lengths[index], local + cfg.tangent_delta))
            try:
                nx, ny = perpendicular_direction(before, after)
            except ValueError:
                logger.debug("Skipping sample with no tangent", distance=local, contour=index)
                continue

            x, y = point.x + nx * offset, point.y + ny * offset
            if not point_inside(outline, x, y):
                nx, ny = -nx, -ny
                x, y = point.x + nx * offset, point.y + ny * offset
            rotation = math.degrees(math.atan2(ny, nx))
            if not capsule_inside(outline, x, y, rotation, half_length):
                # Stroke thinner than the inset on both sides
                logger.debug("Skipping sample outside the fill", distance=local, contour=index)
                continue

            modules.append(
                Module(
                    x=x,
                    y=y,
                    rotation=rotation,
                    w=cfg.module_size,
                    h=cfg.module_height,
                )
            )
        return modules


def _locate(lengths: list[float], distance: float) -> tuple[int, float]:
    """Map a distance along all contours to (contour index, local distance)."""
    walked = 0.0
    for i, length in enumerate(lengths):
        if distance < walked + length:
            return i, distance - walked
        walked += length
    last = max(i for i, length in enumerate(lengths) if length > 0)
    return last, lengths[last]


def autofill(outline: Outline, config: AutofillConfig | None = None) -> list[Module]:
    """Grid autofill with a default engine."""
    return PlacementEngine().autofill(outline, config)


def estimate_count(outline: Outline, config: AutofillConfig | None = None) -> int:
    """Module count estimate with a default engine."""
    return PlacementEngine().estimate_count(outline, config)
