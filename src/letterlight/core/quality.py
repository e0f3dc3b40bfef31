"""Placement quality evaluation.

Scores a finished module layout against its outline:
- Inside rate: fraction of modules whose capsule lies inside the fill
- Clearance: distance to the nearest edge along the four axis rays
- Symmetry: how centred each module sits between opposite edges
- Spacing regularity: nearest-neighbour mean and coefficient of variation
"""

import math

import structlog

from letterlight.config import QualityConfig, QualityThresholds
from letterlight.core.containment import Outline, capsule_inside, distance_to_edge
from letterlight.domain import GradeResult, Module, QualityReport

logger = structlog.get_logger(__name__)

_DIRECTIONS = ((1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0))


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _std_dev(values: list[float], mean: float) -> float:
    """Population standard deviation."""
    if not values:
        return 0.0
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


def _axis_symmetry(positive: float, negative: float) -> float:
    total = positive + negative
    if total <= 0:
        return 0.0
    return 1.0 - abs(positive - negative) / total


def nearest_neighbor_distances(modules: list[Module]) -> list[float]:
    """Distance from each module to its closest other module.

    Returns an empty list for fewer than two modules.
    """
    distances: list[float] = []
    for i, module in enumerate(modules):
        best = math.inf
        for j, other in enumerate(modules):
            if i != j:
                best = min(best, module.distance_to(other))
        if math.isfinite(best):
            distances.append(best)
    return distances


def evaluate(
    outline: Outline,
    modules: list[Module],
    config: QualityConfig | None = None,
) -> QualityReport:
    """Measure the quality of a module layout.

    Args:
        outline: Outline the modules were placed in
        modules: Placed modules
        config: Module length and ray-march parameters

    Returns:
        QualityReport; all zeros for an empty layout
    """
    cfg = config or QualityConfig()
    if not modules:
        return QualityReport()

    bounds = outline.bounds
    extent = max(bounds.width, bounds.height) if bounds is not None else 0.0
    max_dist = extent * 1.5 + 20

    inside_count = 0
    clearances: list[float] = []
    symmetries: list[float] = []

    for module in modules:
        if capsule_inside(outline, module.x, module.y, module.rotation, cfg.module_length / 2):
            inside_count += 1

        dxp, dxn, dyp, dyn = (
            distance_to_edge(
                outline,
                module.x,
                module.y,
                dx,
                dy,
                max_dist,
                step=cfg.march_step,
                iterations=cfg.refine_iterations,
            )
            for dx, dy in _DIRECTIONS
        )
        clearances.append(min(dxp, dxn, dyp, dyn))
        symmetries.append(max(_axis_symmetry(dxp, dxn), _axis_symmetry(dyp, dyn)))

    nn = nearest_neighbor_distances(modules)
    nn_mean = _mean(nn)
    nn_std = _std_dev(nn, nn_mean)

    report = QualityReport(
        inside_rate=inside_count / len(modules),
        min_clearance=min(clearances),
        mean_clearance=_mean(clearances),
        symmetry_mean=_mean(symmetries),
        nn_mean=nn_mean,
        nn_cv=nn_std / nn_mean if nn_mean > 0 else 0.0,
        count=len(modules),
    )
    logger.debug("Placement evaluated", **report.to_dict())
    return report


def grade(report: QualityReport, thresholds: QualityThresholds | None = None) -> GradeResult:
    """Compare a quality report against thresholds.

    Args:
        report: Report produced by evaluate()
        thresholds: Pass thresholds (defaults when omitted)

    Returns:
        GradeResult listing every failed threshold, e.g. "nn_cv > 0.45"
    """
    t = thresholds or QualityThresholds()
    failures: list[str] = []

    if report.inside_rate < t.inside_rate:
        failures.append(f"inside_rate < {t.inside_rate:.2f}")
    if report.min_clearance < t.min_clearance:
        failures.append(f"min_clearance < {t.min_clearance:.2f}")
    if report.symmetry_mean < t.symmetry_mean:
        failures.append(f"symmetry_mean < {t.symmetry_mean:.2f}")
    if report.nn_cv > t.nn_cv:
        failures.append(f"nn_cv > {t.nn_cv:.2f}")

    return GradeResult(passed=not failures, failures=failures)
