"""Tests for domain models to verify they work correctly."""

import math

import pytest
from pydantic import ValidationError

from letterlight.config import (
    AutofillConfig,
    Orientation,
    QualityThresholds,
    get_default_settings,
)
from letterlight.domain import (
    AnchorGroup,
    Bounds,
    Contour,
    EditablePoint,
    EditRejectReason,
    EditVerdict,
    GradeResult,
    Module,
    MoveResult,
    Point,
    PointKind,
    QualityReport,
    RejectCode,
    Segment,
    SegmentKind,
    Severity,
    ValidationResult,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(1.5, -2.0).to_tuple() == (1.5, -2.0)

    def test_distance(self) -> None:
        assert Point(0, 0).distance_to(Point(3, 4)) == pytest.approx(5.0)

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore


class TestContour:
    """Tests for Contour class."""

    def test_open_contour_edges(self) -> None:
        """Open contours have no closing edge."""
        contour = Contour(points=[Point(0, 0), Point(10, 0), Point(10, 10)])
        assert len(contour.edges()) == 2

    def test_closed_contour_edges(self) -> None:
        """Closed contours get an edge back to the first point."""
        contour = Contour(points=[Point(0, 0), Point(10, 0), Point(10, 10)], closed=True)
        edges = contour.edges()
        assert len(edges) == 3
        assert edges[-1] == (Point(10, 10), Point(0, 0))

    def test_two_point_contour_never_closes(self) -> None:
        contour = Contour(points=[Point(0, 0), Point(10, 0)], closed=True)
        assert len(contour.edges()) == 1

    def test_closed_square_edge_lengths(self) -> None:
        """Every edge of a closed square, including the closing one, is 10 long."""
        contour = Contour(
            points=[Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)],
            closed=True,
        )
        assert [a.distance_to(b) for a, b in contour.edges()] == [10.0, 10.0, 10.0, 10.0]


class TestBounds:
    """Tests for Bounds class."""

    def test_extents(self) -> None:
        bounds = Bounds.from_extents(-1, 2, 9, 7)
        assert bounds.width == 10
        assert bounds.height == 5
        assert bounds.max_x == 9
        assert bounds.max_y == 7

    def test_expanded_contains(self) -> None:
        """Expanded bounds contain the original and a slightly larger box."""
        bounds = Bounds(0, 0, 10, 10)
        grown = bounds.expanded(3)
        assert grown.contains_bounds(bounds)
        assert grown.contains_bounds(Bounds(-3, -3, 16, 16))
        assert not grown.contains_bounds(Bounds(-3.1, 0, 5, 5))

    def test_is_finite(self) -> None:
        assert Bounds(0, 0, 1, 1).is_finite()
        assert not Bounds(0, 0, math.inf, 1).is_finite()
        assert not Bounds(math.nan, 0, 1, 1).is_finite()

    def test_diagonal(self) -> None:
        assert Bounds(0, 0, 3, 4).diagonal == pytest.approx(5.0)


class TestSegments:
    """Tests for Segment and EditablePoint types."""

    def test_end_point_by_kind(self) -> None:
        """Each kind reports its anchor slots as the end point."""
        assert Segment(SegmentKind.LINE, [3, 4]).end_point == (3, 4)
        assert Segment(SegmentKind.CUBIC, [0, 1, 2, 3, 4, 5]).end_point == (4, 5)
        assert Segment(SegmentKind.QUADRATIC, [0, 1, 2, 3]).end_point == (2, 3)
        assert Segment(SegmentKind.ARC, [5, 5, 0, 0, 1, 10, 0]).end_point == (10, 0)
        assert Segment(SegmentKind.CLOSE, []).end_point is None

    def test_point_id_format(self) -> None:
        assert EditablePoint.make_id(3, PointKind.CONTROL2, 2, 3) == "3:control2:2:3"

    def test_anchor_group_to_dict(self) -> None:
        group = AnchorGroup(
            representative_id="0:anchor:0:1",
            contour_index=0,
            x=0.0,
            y=0.0,
            member_ids=("0:anchor:0:1", "4:anchor:0:1"),
        )
        assert group.to_dict()["member_ids"] == ["0:anchor:0:1", "4:anchor:0:1"]


class TestVerdicts:
    """Tests for validation and edit verdicts."""

    def test_accept_to_dict(self) -> None:
        assert ValidationResult.accept().to_dict() == {"ok": True}

    def test_reject_to_dict(self) -> None:
        """Rejections carry the wire code and message."""
        result = ValidationResult.reject(RejectCode.BBOX_ESCAPE, "Shape path escapes allowed bounds.")
        data = result.to_dict()
        assert data["ok"] is False
        assert data["code"] == "SHAPE_INVALID_BBOX_ESCAPE"
        assert data["message"] == "Shape path escapes allowed bounds."

    @pytest.mark.parametrize(
        ("severity", "ok"),
        [(Severity.OK, True), (Severity.WARN, True), (Severity.ERROR, False)],
    )
    def test_edit_verdict_ok(self, severity: Severity, ok: bool) -> None:
        assert EditVerdict.of(severity).ok is ok

    def test_move_result_to_dict(self) -> None:
        result = MoveResult(
            accepted=False,
            severity=Severity.ERROR,
            path_data="M 0 0",
            points=[],
            reason=EditRejectReason.SELF_INTERSECTION,
        )
        data = result.to_dict()
        assert data["accepted"] is False
        assert data["severity"] == "error"
        assert data["reason"] == "self_intersection"
        assert data["warning_reason"] is None


class TestModuleAndQuality:
    """Tests for Module and quality report types."""

    def test_module_round_trip(self) -> None:
        module = Module(x=10, y=20, rotation=90, w=12, h=5)
        assert Module.from_dict(module.to_dict()) == module

    def test_module_defaults(self) -> None:
        module = Module.from_dict({"x": 1, "y": 2})
        assert module.rotation == 0.0
        assert (module.w, module.h) == (12.0, 5.0)

    def test_empty_report(self) -> None:
        report = QualityReport()
        assert report.count == 0
        assert report.to_dict()["inside_rate"] == 0.0

    def test_grade_to_dict_uses_pass_key(self) -> None:
        assert GradeResult(passed=False, failures=["nn_cv > 0.45"]).to_dict() == {
            "pass": False,
            "failures": ["nn_cv > 0.45"],
        }


class TestSettings:
    """Tests for pydantic configuration models."""

    def test_defaults(self) -> None:
        """Test default thresholds."""
        settings = get_default_settings()
        assert settings.validator.max_path_length == 120_000
        assert settings.anchors.link_tolerance == 0.01
        assert settings.autofill.module_width == 12.0
        assert settings.quality.thresholds == QualityThresholds()

    def test_orientation_from_string(self) -> None:
        config = AutofillConfig(orientation="vertical")
        assert config.orientation is Orientation.VERTICAL
        assert config.orientation.rotation == 90.0

    @pytest.mark.parametrize("field", ["scale", "max_modules"])
    def test_rejects_non_positive(self, field: str) -> None:
        with pytest.raises(ValidationError):
            AutofillConfig(**{field: 0})
