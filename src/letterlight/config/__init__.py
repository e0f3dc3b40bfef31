"""Configuration management for letterlight.

This module provides configuration management using Pydantic models.
Every tolerance and threshold used by the geometry core has a default here
and can be overridden by callers or CLI options.

Key classes:
- ParserConfig: Curve flattening settings
- ValidatorConfig: Outline validation tolerances
- AnchorConfig: Anchor linking and serialization precision
- EditPolicyConfig: Interactive edit validation policy
- AutofillConfig: Module style for grid autofill
- StrokeFollowConfig: Stroke-following placement
- QualityConfig: Placement quality evaluation
- LetterlightSettings: Main application settings
"""

from letterlight.config.settings import (
    AnchorConfig,
    AutofillConfig,
    EditPolicyConfig,
    LetterlightSettings,
    LoggingConfig,
    Orientation,
    ParserConfig,
    QualityConfig,
    QualityThresholds,
    StrokeFollowConfig,
    ValidatorConfig,
    get_default_settings,
)

__all__ = [
    "AnchorConfig",
    "AutofillConfig",
    "EditPolicyConfig",
    "LetterlightSettings",
    "LoggingConfig",
    "Orientation",
    "ParserConfig",
    "QualityConfig",
    "QualityThresholds",
    "StrokeFollowConfig",
    "ValidatorConfig",
    "get_default_settings",
]
