"""Configuration settings for Letterlight."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class Orientation(str, Enum):
    """Module orientation for grid autofill."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def rotation(self) -> float:
        """Module rotation in degrees for this orientation."""
        return 90.0 if self is Orientation.VERTICAL else 0.0


class ParserConfig(BaseModel):
    """Configuration for path parsing and curve flattening."""

    curve_sample_steps: int = Field(
        default=12,
        ge=1,
        le=256,
        description="Uniform parametric samples per curve or arc command",
    )
    dedup_epsilon: float = Field(
        default=1e-6,
        ge=0.0,
        le=1.0,
        description="Consecutive points closer than this are collapsed",
    )


class ValidatorConfig(BaseModel):
    """Configuration for the outline validator.

    The tolerances were tuned against the straight-line arc approximation
    used by the parser.
    """

    max_path_length: int = Field(
        default=120_000,
        ge=1,
        description="Longest accepted raw path string",
    )
    intersection_epsilon: float = Field(
        default=1e-9,
        ge=0.0,
        le=1e-3,
        description="Collinearity epsilon for the orientation test",
    )
    shared_endpoint_tolerance: float = Field(
        default=1e-6,
        ge=0.0,
        le=1.0,
        description="Edges touching within this distance share a vertex",
    )
    min_dimension: float = Field(
        default=0.001,
        ge=0.0,
        description="Minimum outline width and height",
    )
    spike_ratio: float = Field(
        default=20.0,
        gt=0.0,
        description="Longest edge may not exceed this multiple of the bbox diagonal",
    )
    bbox_min_tolerance: float = Field(
        default=3.0,
        ge=0.0,
        description="Minimum slack around the allowed bounds",
    )
    bbox_tolerance_ratio: float = Field(
        default=0.08,
        ge=0.0,
        le=1.0,
        description="Slack around the allowed bounds as a fraction of its diagonal",
    )


class AnchorConfig(BaseModel):
    """Configuration for anchor editing."""

    link_tolerance: float = Field(
        default=0.01,
        ge=0.0,
        le=1.0,
        description="Anchors of one contour closer than this move together",
    )
    precision: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Decimal digits kept when serializing coordinates",
    )


class EditPolicyConfig(BaseModel):
    """Configuration for the interactive edit validation policy."""

    strict: bool = Field(
        default=False,
        description="Escalate every warning to an error",
    )
    bbox_min_tolerance: float = Field(default=3.0, ge=0.0)
    bbox_tolerance_ratio: float = Field(default=0.06, ge=0.0, le=1.0)
    length_growth_limit: float = Field(
        default=3.5,
        gt=1.0,
        description="Total outline length may grow at most this factor in one edit",
    )
    median_segment_factor: float = Field(default=14.0, gt=0.0)
    diagonal_segment_factor: float = Field(default=2.2, gt=0.0)
    hard_spike_ratio: float = Field(
        default=2.5,
        gt=1.0,
        description="Spike ratio above which a spike warning becomes an error",
    )


class AutofillConfig(BaseModel):
    """Module style configuration for grid autofill."""

    orientation: Orientation = Field(default=Orientation.HORIZONTAL)
    scale: float = Field(
        default=1.0,
        gt=0.0,
        le=20.0,
        description="Module scale factor (clamped to at least 0.1)",
    )
    spacing: float = Field(
        default=2.0,
        ge=0.0,
        description="Gap between neighbouring modules",
    )
    inset: float = Field(
        default=1.0,
        ge=0.0,
        description="Distance kept from the outline bounding box",
    )
    module_width: float = Field(default=12.0, gt=0.0)
    module_height: float = Field(default=5.0, gt=0.0)
    max_modules: int = Field(
        default=2000,
        ge=1,
        description="Hard ceiling on emitted modules",
    )
    packing_factor: float = Field(
        default=0.9,
        gt=0.0,
        le=1.0,
        description="Minimum centre distance as a fraction of the shorter module side",
    )


class StrokeFollowConfig(BaseModel):
    """Configuration for stroke-following placement."""

    count: int = Field(default=20, ge=1, le=10_000)
    desired_inset: float = Field(default=6.0, ge=0.0)
    module_size: float = Field(default=12.0, gt=0.0, description="Module length")
    module_height: float = Field(default=5.0, gt=0.0)
    tangent_delta: float = Field(default=0.1, gt=0.0)
    max_modules: int = Field(default=2000, ge=1)


class QualityThresholds(BaseModel):
    """Pass/fail thresholds for a placement quality report."""

    inside_rate: float = Field(default=0.98, ge=0.0, le=1.0)
    min_clearance: float = Field(default=0.6, ge=0.0)
    symmetry_mean: float = Field(default=0.45, ge=0.0, le=1.0)
    nn_cv: float = Field(default=0.45, ge=0.0)


class QualityConfig(BaseModel):
    """Configuration for placement quality evaluation."""

    module_length: float = Field(
        default=12.0,
        gt=0.0,
        description="Rendered module length used for the inside test",
    )
    march_step: float = Field(default=10.0, gt=0.0)
    refine_iterations: int = Field(default=10, ge=0, le=64)
    thresholds: QualityThresholds = Field(default_factory=QualityThresholds)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class LetterlightSettings(BaseModel):
    """Main application settings."""

    parser: ParserConfig = Field(default_factory=ParserConfig)
    validator: ValidatorConfig = Field(default_factory=ValidatorConfig)
    anchors: AnchorConfig = Field(default_factory=AnchorConfig)
    edit_policy: EditPolicyConfig = Field(default_factory=EditPolicyConfig)
    autofill: AutofillConfig = Field(default_factory=AutofillConfig)
    quality: QualityConfig = Field(default_factory=QualityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> LetterlightSettings:
    """Get default application settings."""
    return LetterlightSettings()
