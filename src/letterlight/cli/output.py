"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables, verdict lines and JSON dumps for scripting.
"""

import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from letterlight.domain import (
    AnchorGroup,
    EditablePoint,
    GradeResult,
    Module,
    MoveResult,
    QualityReport,
    Severity,
    ValidationResult,
)
from letterlight.utils import EditSessionStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_WARN = "!"  # Committed with notice
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_json(data: Any) -> None:
    """Print data as plain JSON for machine consumption."""
    typer.echo(json.dumps(data, indent=2))


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_validation(result: ValidationResult) -> None:
    """Print an outline validation verdict."""
    if result.ok:
        console.print(f"[bold green]{SYM_OK} Valid outline[/bold green]")
        return
    code = result.code.value if result.code else "UNKNOWN"
    console.print(f"[bold red]{SYM_ERR} {code}[/bold red]")
    if result.message:
        console.print(f"  {result.message}")


def print_points(points: list[EditablePoint]) -> None:
    """Print editable points as a table.

    Args:
        points: Points to list, in segment order
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("id")
    table.add_column("kind")
    table.add_column("contour", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for point in points:
        table.add_row(
            point.id,
            point.kind.value,
            str(point.contour_index),
            f"{point.x:g}",
            f"{point.y:g}",
        )
    console.print(table)
    console.print(f"  {len(points)} points")


def print_groups(groups: list[AnchorGroup]) -> None:
    """Print linked anchor groups, one line each."""
    for group in groups:
        line = Text(f"  {group.representative_id} ")
        line.append(f"({group.x:g}, {group.y:g})", style="bold")
        if len(group.member_ids) > 1:
            line.append(f" {SYM_DOT} linked: {', '.join(group.member_ids[1:])}")
        console.print(line)


def print_move(point_id: str, result: MoveResult) -> None:
    """Print the outcome of one anchor move."""
    if not result.accepted:
        reason = result.reason.value if result.reason else "unknown"
        console.print(f"  [red]{SYM_ERR}[/red] {point_id} reverted {SYM_DOT} {reason}")
    elif result.severity is Severity.WARN:
        warning = result.warning_reason.value if result.warning_reason else "warning"
        console.print(f"  [yellow]{SYM_WARN}[/yellow] {point_id} committed {SYM_DOT} {warning}")
    else:
        console.print(f"  [green]{SYM_OK}[/green] {point_id} committed")


def print_session_summary(stats: EditSessionStats, path_data: str) -> None:
    """Print the result of a sequence of moves.

    Args:
        stats: Tallied session statistics
        path_data: Final committed path data
    """
    rejected_style = "red" if stats.rejected_count > 0 else "green"
    console.print(
        f"\n  {stats.accepted_count} committed {SYM_DOT} {stats.warned_count} warnings "
        f"{SYM_DOT} [{rejected_style}]{stats.rejected_count} reverted[/{rejected_style}] "
        f"{SYM_DOT} {stats.duration_seconds * 1000:.1f} ms"
    )
    line = Text("  ")
    line.append(path_data, style="bold")
    console.print(line, soft_wrap=True)


def print_modules(modules: list[Module], estimate: int | None = None) -> None:
    """Print placed modules as a table.

    Args:
        modules: Placed modules
        estimate: Optional count estimate shown in the summary
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("rotation", justify="right")
    for i, module in enumerate(modules):
        table.add_row(str(i), f"{module.x:.2f}", f"{module.y:.2f}", f"{module.rotation:.1f}")
    if modules:
        console.print(table)

    summary = f"  {len(modules)} modules"
    if estimate is not None:
        summary += f" {SYM_DOT} estimate {estimate}"
    console.print(summary)


def print_quality(report: QualityReport, result: GradeResult) -> None:
    """Print a quality report with its grade.

    Args:
        report: Measured placement quality
        result: Grade against thresholds
    """
    console.print(f"  Modules           {report.count}")
    console.print(f"  Inside rate       {report.inside_rate:.3f}")
    console.print(f"  Min clearance     {report.min_clearance:.2f}")
    console.print(f"  Mean clearance    {report.mean_clearance:.2f}")
    console.print(f"  Symmetry mean     {report.symmetry_mean:.3f}")
    console.print(f"  NN mean {SYM_DOT} cv      {report.nn_mean:.2f} {SYM_DOT} {report.nn_cv:.3f}")

    if result.passed:
        console.print(f"\n[bold green]{SYM_OK} Pass[/bold green]")
    else:
        console.print(f"\n[bold red]{SYM_ERR} Fail[/bold red]")
        for failure in result.failures:
            console.print(f"  {failure}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
