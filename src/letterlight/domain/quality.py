"""Placement quality report types."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class QualityReport:
    """Aggregate quality metrics of a finished placement.

    Attributes:
        inside_rate: Fraction of modules whose capsule lies inside the outline
        min_clearance: Smallest four-direction edge distance of any module
        mean_clearance: Mean four-direction edge distance
        symmetry_mean: Mean per-module centring score (0..1)
        nn_mean: Mean nearest-neighbour distance
        nn_cv: Coefficient of variation of nearest-neighbour distances
        count: Number of modules evaluated
    """

    inside_rate: float = 0.0
    min_clearance: float = 0.0
    mean_clearance: float = 0.0
    symmetry_mean: float = 0.0
    nn_mean: float = 0.0
    nn_cv: float = 0.0
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GradeResult:
    """Pass/fail grade of a quality report.

    Attributes:
        passed: True if no threshold failed
        failures: Human readable description of each failed threshold
    """

    passed: bool
    failures: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"pass": self.passed, "failures": list(self.failures)}
