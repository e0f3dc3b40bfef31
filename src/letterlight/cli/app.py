"""CLI application entry point for letterlight.

This module provides the main CLI interface using Typer. Every command reads
an outline path from its argument or from --file and prints either rich text
or, with --json, a JSON document on stdout.
"""

import json
import time
from enum import Enum
from pathlib import Path
from typing import Annotated

import structlog
import typer
from pydantic import ValidationError

from letterlight import __version__
from letterlight.cli.output import (
    SYM_DOT,
    console,
    print_error,
    print_groups,
    print_json,
    print_modules,
    print_move,
    print_points,
    print_quality,
    print_session_summary,
    print_step,
    print_validation,
)
from letterlight.config import (
    AutofillConfig,
    LetterlightSettings,
    LoggingConfig,
    Orientation,
    StrokeFollowConfig,
    get_default_settings,
)
from letterlight.core import (
    AnchorModel,
    EditValidator,
    Outline,
    OutlineEditValidator,
    OutlineValidator,
    PathEditPolicy,
    PlacementEngine,
    evaluate as evaluate_quality,
    grade,
)
from letterlight.domain import Bounds, Module, Point
from letterlight.exceptions import (
    ConfigurationError,
    LetterlightError,
    ModuleInputError,
    PathInputError,
)
from letterlight.utils import EditSessionLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="letterlight",
    help="Validate, edit and fill channel-letter outlines with LED modules.",
    add_completion=False,
    no_args_is_help=True,
)


class EditPolicyName(str, Enum):
    """Edit validation callback used by the move command."""

    STRICT = "strict"
    GRADED = "graded"


class Strategy(str, Enum):
    """Placement strategy used by the autofill command."""

    GRID = "grid"
    STROKE = "stroke"


PathArgument = Annotated[
    str | None,
    typer.Argument(help="Outline path data (e.g. 'M 0 0 L 10 0 L 10 10 Z')", show_default=False),
]
FileOption = Annotated[
    Path | None,
    typer.Option("--file", "-f", help="Read the outline path data from a file"),
]
BoundsOption = Annotated[
    str | None,
    typer.Option("--bounds", "-b", help="Allowed region as x,y,width,height"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print a JSON document instead of rich text"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Letterlight[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Echo log events to stderr",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Letterlight outline and LED placement tools."""
    logging_config = LoggingConfig(log_file=log_file, log_level=log_level)
    configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=not verbose,
    )


def _load_path(path_data: str | None, file: Path | None) -> str:
    """Resolve the outline path from the argument or --file."""
    if file is not None:
        try:
            return file.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise PathInputError(str(file), e.strerror or str(e)) from e
    if path_data is None:
        raise PathInputError("<argument>", "no path data given (pass PATH or --file)")
    return path_data


def _parse_numbers(value: str, count: int, name: str) -> list[float]:
    parts = [p for p in value.replace(" ", ",").split(",") if p]
    try:
        numbers = [float(p) for p in parts]
    except ValueError:
        numbers = []
    if len(numbers) != count:
        raise typer.BadParameter(f"expected {count} comma-separated numbers, got '{value}'", param_hint=name)
    return numbers


def _parse_bounds(value: str | None) -> Bounds | None:
    if value is None:
        return None
    x, y, width, height = _parse_numbers(value, 4, "--bounds")
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"bounds must have a positive size, got {width} x {height}")
    return Bounds(x=x, y=y, width=width, height=height)


def _load_modules(file: Path) -> list[Module]:
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except OSError as e:
        raise ModuleInputError(str(file), e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise ModuleInputError(str(file), f"invalid JSON: {e.msg}") from e

    items = data.get("modules") if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ModuleInputError(str(file), "expected a list of modules")
    try:
        return [Module.from_dict(item) for item in items]
    except (KeyError, TypeError, ValueError) as e:
        raise ModuleInputError(str(file), f"invalid module entry: {e}") from e


def _fail(e: LetterlightError) -> typer.Exit:
    if isinstance(e, (PathInputError, ModuleInputError)):
        print_error(f"Could not read input: {e.reason}")
    else:
        print_error(str(e))
    return typer.Exit(code=2)


@app.command()
def validate(
    path_data: PathArgument = None,
    file: FileOption = None,
    bounds: BoundsOption = None,
    as_json: JsonOption = False,
) -> None:
    """Validate an outline. Exits with code 1 when the outline is rejected.

    Example:
        letterlight validate "M 0 0 L 10 0 L 10 10 L 0 10 Z" --bounds 0,0,10,10
    """
    try:
        data = _load_path(path_data, file)
        allowed = _parse_bounds(bounds)
    except LetterlightError as e:
        raise _fail(e) from None

    settings = get_default_settings()
    validator = OutlineValidator(settings.validator, settings.parser)
    result = validator.validate(data, allowed)

    if as_json:
        print_json(result.to_dict())
    else:
        print_validation(result)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def points(
    path_data: PathArgument = None,
    file: FileOption = None,
    include_controls: Annotated[
        bool,
        typer.Option("--all", "-a", help="Include Bezier control handles"),
    ] = False,
    groups: Annotated[
        bool,
        typer.Option("--groups", "-g", help="Show linked anchor groups"),
    ] = False,
    as_json: JsonOption = False,
) -> None:
    """List the editable points of an outline."""
    try:
        data = _load_path(path_data, file)
    except LetterlightError as e:
        raise _fail(e) from None

    model = AnchorModel(get_default_settings().anchors)
    listed = model.build_points(data) if include_controls else model.build_anchor_points(data)
    anchor_groups = model.build_anchor_groups(data) if groups else []

    if as_json:
        document: dict[str, object] = {"points": [p.to_dict() for p in listed]}
        if groups:
            document["groups"] = [g.to_dict() for g in anchor_groups]
        print_json(document)
        return

    print_points(listed)
    if groups:
        print_step("Anchor groups")
        print_groups(anchor_groups)


@app.command()
def move(
    point_id: Annotated[
        str,
        typer.Option("--point", "-p", help="Id of the anchor to drag", show_default=False),
    ],
    targets: Annotated[
        list[str],
        typer.Option(
            "--to",
            "-t",
            help="Target x,y; repeat to replay a drag sample by sample",
            show_default=False,
        ),
    ],
    path_data: PathArgument = None,
    file: FileOption = None,
    bounds: BoundsOption = None,
    policy: Annotated[
        EditPolicyName,
        typer.Option("--policy", help="Edit validation: strict outline checks or graded policy"),
    ] = EditPolicyName.STRICT,
    as_json: JsonOption = False,
) -> None:
    """Move an anchor safely, reverting any move that breaks the outline.

    Each --to target is applied to the last committed path, the way pointer
    samples arrive during a drag. Exits with code 1 if any move was reverted.

    Example:
        letterlight move "M 0 0 L 10 0 L 10 10 L 0 10 Z" -p 1:anchor:0:1 -t 12,0
    """
    try:
        data = _load_path(path_data, file)
        allowed = _parse_bounds(bounds)
    except LetterlightError as e:
        raise _fail(e) from None

    moves = [Point(*_parse_numbers(target, 2, "--to")) for target in targets]

    settings = get_default_settings()
    validator: EditValidator
    if policy is EditPolicyName.GRADED:
        validator = PathEditPolicy(settings.edit_policy, settings.parser)
    else:
        validator = OutlineEditValidator(OutlineValidator(settings.validator, settings.parser))
    model = AnchorModel(settings.anchors, validator)

    session = EditSessionLogger(structlog.get_logger("letterlight.session"))
    session.stats.start_time = time.time()
    results = []
    for target in moves:
        started = time.perf_counter()
        result = model.move_anchor_safe(data, point_id, target, allowed)
        session.log_move(point_id, result, (time.perf_counter() - started) * 1000)
        results.append(result)
        data = result.path_data
    session.stats.end_time = time.time()

    stats = session.stats
    if as_json:
        print_json(
            {
                "path_data": data,
                "moves": [r.to_dict() for r in results],
                "committed": stats.accepted_count,
                "warnings": stats.warned_count,
                "reverted": stats.rejected_count,
            }
        )
    else:
        print_step(f"Dragging {point_id} {SYM_DOT} {len(moves)} samples")
        for result in results:
            print_move(point_id, result)
        print_session_summary(stats, data)

    if stats.rejected_count:
        raise typer.Exit(code=1)


def _build_settings(
    orientation: Orientation,
    scale: float,
    spacing: float,
    inset: float,
    max_modules: int,
) -> LetterlightSettings:
    return LetterlightSettings(
        autofill=AutofillConfig(
            orientation=orientation,
            scale=scale,
            spacing=spacing,
            inset=inset,
            max_modules=max_modules,
        )
    )


@app.command()
def autofill(
    path_data: PathArgument = None,
    file: FileOption = None,
    orientation: Annotated[
        Orientation,
        typer.Option("--orientation", "-o", help="Module orientation"),
    ] = Orientation.HORIZONTAL,
    scale: Annotated[
        float,
        typer.Option("--scale", "-s", help="Module scale factor", min=0.1, max=20.0),
    ] = 1.0,
    spacing: Annotated[
        float,
        typer.Option("--spacing", help="Gap between neighbouring modules", min=0.0),
    ] = 2.0,
    inset: Annotated[
        float,
        typer.Option("--inset", help="Distance kept from the outline bounding box", min=0.0),
    ] = 1.0,
    max_modules: Annotated[
        int,
        typer.Option("--max-modules", help="Hard ceiling on placed modules", min=1),
    ] = 2000,
    strategy: Annotated[
        Strategy,
        typer.Option("--strategy", help="Grid autofill or stroke following"),
    ] = Strategy.GRID,
    count: Annotated[
        int,
        typer.Option("--count", "-n", help="Module count for stroke following", min=1),
    ] = 20,
    estimate_only: Annotated[
        bool,
        typer.Option("--estimate", help="Only print the grid count estimate"),
    ] = False,
    as_json: JsonOption = False,
) -> None:
    """Place LED modules inside an outline.

    Example:
        letterlight autofill "M 0 0 L 100 0 L 100 60 L 0 60 Z" --spacing 4
    """
    try:
        data = _load_path(path_data, file)
        settings = _build_settings(orientation, scale, spacing, inset, max_modules)
        stroke = StrokeFollowConfig(count=count, max_modules=max_modules)
    except LetterlightError as e:
        raise _fail(e) from None
    except ValidationError as e:
        print_error("Invalid placement configuration", details=str(e))
        raise typer.Exit(code=2) from None

    outline = Outline.from_path(data, settings.parser)
    engine = PlacementEngine(settings.autofill, stroke)

    estimate = engine.estimate_count(outline) if strategy is Strategy.GRID or estimate_only else None
    if estimate_only:
        if as_json:
            print_json({"estimate": estimate})
        else:
            console.print(f"  estimate {estimate}")
        return

    if strategy is Strategy.STROKE:
        modules = engine.follow_stroke(outline)
    else:
        modules = engine.autofill(outline)

    if as_json:
        print_json({"estimate": estimate, "modules": [m.to_dict() for m in modules]})
    else:
        print_modules(modules, estimate)


@app.command()
def evaluate(
    path_data: PathArgument = None,
    file: FileOption = None,
    modules_file: Annotated[
        Path | None,
        typer.Option(
            "--modules",
            "-m",
            help="JSON file with the modules to score (default: run grid autofill)",
        ),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Score a module layout against its outline. Exits with code 1 on a failing grade."""
    try:
        data = _load_path(path_data, file)
        layout = _load_modules(modules_file) if modules_file is not None else None
    except LetterlightError as e:
        raise _fail(e) from None

    settings = get_default_settings()
    outline = Outline.from_path(data, settings.parser)
    if layout is None:
        layout = PlacementEngine(settings.autofill).autofill(outline)

    report = evaluate_quality(outline, layout, settings.quality)
    result = grade(report, settings.quality.thresholds)

    if as_json:
        print_json({"report": report.to_dict(), "grade": result.to_dict()})
    else:
        print_quality(report, result)

    if not result.passed:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
