"""Logging utilities for Letterlight."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from letterlight.domain import MoveResult, Severity


@dataclass
class EditSessionStats:
    """Statistics from an interactive edit session (one or more drags)."""

    accepted_count: int = 0
    warned_count: int = 0
    rejected_count: int = 0
    rejections: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def move_count(self) -> int:
        return self.accepted_count + self.rejected_count

    @property
    def duration_seconds(self) -> float:
        """Calculate session duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to stderr and an optional file.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("letterlight")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class EditSessionLogger:
    """Logger tallying the outcome of anchor moves during a drag."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = EditSessionStats()

    def log_move(self, point_id: str, result: MoveResult, duration_ms: float = 0.0) -> None:
        """Record one anchor move result."""
        if not result.accepted:
            reason = result.reason.value if result.reason else "unknown"
            self._logger.info(
                "Anchor move reverted",
                point_id=point_id,
                reason=reason,
                duration_ms=round(duration_ms, 2),
            )
            self._stats.rejected_count += 1
            self._stats.rejections.append((point_id, reason))
            return

        if result.severity is Severity.WARN:
            self._logger.info(
                "Anchor move committed with warning",
                point_id=point_id,
                warning=result.warning_reason.value if result.warning_reason else None,
                duration_ms=round(duration_ms, 2),
            )
            self._stats.warned_count += 1
        else:
            self._logger.debug(
                "Anchor move committed",
                point_id=point_id,
                duration_ms=round(duration_ms, 2),
            )
        self._stats.accepted_count += 1

    @property
    def stats(self) -> EditSessionStats:
        """Get current session statistics."""
        return self._stats
