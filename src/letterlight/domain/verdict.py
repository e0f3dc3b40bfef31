"""Verdict types returned by validation and editing.

Validators and the anchor model never raise for malformed geometry. They
return one of these values instead, so that every caller follows the same
"validate, then use or keep the prior state" flow.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from letterlight.domain.segment import EditablePoint


class RejectCode(str, Enum):
    """Closed set of outline rejection codes."""

    DEGENERATE = "SHAPE_INVALID_DEGENERATE"
    SELF_INTERSECTION = "SHAPE_INVALID_SELF_INTERSECTION"
    BBOX_ESCAPE = "SHAPE_INVALID_BBOX_ESCAPE"
    CURVATURE_SPIKE = "SHAPE_INVALID_CURVATURE_SPIKE"


@dataclass(frozen=True)
class ValidationResult:
    """Terminal verdict of the outline validator.

    Attributes:
        ok: True if the outline passed every check
        code: Rejection code (None when ok)
        message: Human readable reason (None when ok)
    """

    ok: bool
    code: RejectCode | None = None
    message: str | None = None

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def reject(cls, code: RejectCode, message: str) -> "ValidationResult":
        return cls(ok=False, code=code, message=message)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"ok": self.ok}
        if self.code is not None:
            data["code"] = self.code.value
        if self.message is not None:
            data["message"] = self.message
        return data


class Severity(str, Enum):
    """Verdict strength of an edit validation.

    - OK: commit the candidate
    - WARN: commit the candidate and surface a notice
    - ERROR: revert to the previous path
    """

    OK = "ok"
    WARN = "warn"
    ERROR = "error"


class EditRejectReason(str, Enum):
    """Reasons reported by edit validation callbacks."""

    SELF_INTERSECTION = "self_intersection"
    CURVATURE_SPIKE = "curvature_spike"
    BBOX_ESCAPE = "bbox_escape"
    DEGENERATE_SEGMENT = "degenerate_segment"


@dataclass(frozen=True)
class EditVerdict:
    """Result of an edit validation callback.

    The verdict is ok unless its severity is ERROR.

    Attributes:
        severity: Verdict strength
        reason: Why the edit was flagged (None for a clean pass)
        metrics: Optional measurements that led to the verdict
    """

    severity: Severity
    reason: EditRejectReason | None = None
    metrics: dict[str, float] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.severity is not Severity.ERROR

    @classmethod
    def of(
        cls,
        severity: Severity,
        reason: EditRejectReason | None = None,
        metrics: dict[str, float] | None = None,
    ) -> "EditVerdict":
        return cls(severity=severity, reason=reason, metrics=dict(metrics or {}))


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a safe anchor move.

    Attributes:
        accepted: False if the candidate was rejected and reverted
        severity: Verdict strength
        path_data: The committed path (the input path when rejected)
        points: Deduplicated anchor points of path_data
        reason: Rejection reason when not accepted
        warning_reason: Non-blocking notice when accepted with a warning
    """

    accepted: bool
    severity: Severity
    path_data: str
    points: list[EditablePoint]
    reason: EditRejectReason | None = None
    warning_reason: EditRejectReason | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "accepted": self.accepted,
            "severity": self.severity.value,
            "reason": self.reason.value if self.reason else None,
            "warning_reason": self.warning_reason.value if self.warning_reason else None,
            "path_data": self.path_data,
            "points": [p.to_dict() for p in self.points],
        }
