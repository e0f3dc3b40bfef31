"""Utility functions for letterlight.

This module provides utility functions including:

- Logging setup and configuration
- Edit session statistics
"""

from letterlight.utils.logging import (
    EditSessionLogger,
    EditSessionStats,
    configure_logging,
)

__all__ = [
    "EditSessionLogger",
    "EditSessionStats",
    "configure_logging",
]
