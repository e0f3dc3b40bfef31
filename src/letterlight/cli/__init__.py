"""Command-line interface for letterlight.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Outline validation with typed rejection codes
- Anchor listing and safe drag replay
- Grid and stroke-following module placement
- Placement quality grading
- JSON output for scripting
"""

from letterlight.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
