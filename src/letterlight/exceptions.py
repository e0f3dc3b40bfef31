"""Exception hierarchy for Letterlight.

Malformed geometry never raises: the parser drops what it cannot read and the
validators return typed verdicts. The exceptions below cover programmer
errors, geometry provider failures and CLI input problems.
"""


class LetterlightError(Exception):
    """Base exception for all Letterlight errors."""

    pass


class ConfigurationError(LetterlightError):
    """Invalid combination of configuration values."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")


class PathError(LetterlightError):
    """Errors related to path data or its editable points."""

    pass


class PathInputError(PathError):
    """Path data could not be read from its source."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to read path data from '{source}': {reason}")


class PointNotFoundError(PathError):
    """Requested editable point does not exist in the path."""

    def __init__(self, point_id: str) -> None:
        self.point_id = point_id
        super().__init__(f"Editable point '{point_id}' not found in path")


class GeometryError(LetterlightError):
    """Errors in geometric calculations."""

    pass


class GeometryProviderError(GeometryError):
    """The fill-containment provider could not answer a query."""

    def __init__(self, x: float, y: float, reason: str) -> None:
        self.x = x
        self.y = y
        self.reason = reason
        super().__init__(f"Containment query failed at ({x}, {y}): {reason}")


class ModuleInputError(LetterlightError):
    """Module layout could not be read from its source."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to read modules from '{source}': {reason}")
