"""Tests for outline validation."""

import math

import pytest

from letterlight.config import ValidatorConfig
from letterlight.core.validator import OutlineValidator, validate_outline
from letterlight.domain import Bounds, RejectCode

SQUARE = "M 0 0 L 10 0 L 10 10 L 0 10 Z"
BOWTIE = "M 0 0 L 10 10 L 10 0 L 0 10 Z"


class TestOutlineValidator:
    """Tests for OutlineValidator checks and their priority order."""

    @pytest.fixture
    def validator(self) -> OutlineValidator:
        return OutlineValidator()

    def test_convex_polygon_passes(self, validator: OutlineValidator) -> None:
        result = validator.validate(SQUARE)
        assert result.ok
        assert result.code is None

    def test_curved_outline_passes(self, validator: OutlineValidator) -> None:
        circle = (
            "M 0 50 C 0 22 22 0 50 0 C 78 0 100 22 100 50 "
            "C 100 78 78 100 50 100 C 22 100 0 78 0 50 Z"
        )
        assert validator.validate(circle).ok

    @pytest.mark.parametrize("path", ["", "   ", "M 5 5"])
    def test_degenerate(self, validator: OutlineValidator, path: str) -> None:
        """Empty, whitespace-only and single-point paths are degenerate."""
        result = validator.validate(path)
        assert not result.ok
        assert result.code is RejectCode.DEGENERATE
        assert result.message == "Shape path appears degenerate."

    def test_self_intersection(self, validator: OutlineValidator) -> None:
        result = validator.validate(BOWTIE)
        assert result.code is RejectCode.SELF_INTERSECTION
        assert result.message == "Shape contour self-intersects."

    def test_self_intersection_in_second_contour(self, validator: OutlineValidator) -> None:
        result = validator.validate(f"{SQUARE} M 20 20 L 30 30 L 30 20 L 20 30 Z")
        assert result.code is RejectCode.SELF_INTERSECTION

    def test_explicit_closing_join_passes(self, validator: OutlineValidator) -> None:
        """Repeating the start point before Z is not a self-intersection."""
        assert validator.validate("M 0 0 L 10 0 L 10 10 L 0 10 L 0 0 Z").ok

    def test_size_guard(self, validator: OutlineValidator) -> None:
        """Oversized path strings are rejected before parsing."""
        huge = "M 0 0 " + "L 1 1 " * 30_000
        result = validator.validate(huge)
        assert result.code is RejectCode.DEGENERATE
        assert result.message == "Shape path is too large."

    def test_flat_outline(self, validator: OutlineValidator) -> None:
        """A zero-height outline has invalid dimensions."""
        result = validator.validate("M 0 0 L 10 0 L 20 0")
        assert result.code is RejectCode.DEGENERATE
        assert result.message == "Shape path has invalid dimensions."

    def test_curvature_spike(self) -> None:
        """An edge longer than diagonal * spike_ratio is a spike."""
        validator = OutlineValidator(ValidatorConfig(spike_ratio=0.5))
        result = validator.validate(SQUARE)
        assert result.code is RejectCode.CURVATURE_SPIKE
        assert result.message == "Shape path has extreme spikes."

    def test_self_intersection_checked_before_spike(self) -> None:
        validator = OutlineValidator(ValidatorConfig(spike_ratio=0.5))
        assert validator.validate(BOWTIE).code is RejectCode.SELF_INTERSECTION


class TestBoundsEscape:
    """Tests for the bounding-box escape check."""

    def test_escapes_small_bounds(self) -> None:
        """A 10x10 square does not fit 5x5 bounds even with the 3 unit slack."""
        result = validate_outline(SQUARE, Bounds(0, 0, 5, 5))
        assert result.code is RejectCode.BBOX_ESCAPE
        assert result.message == "Shape path escapes allowed bounds."

    def test_fits_larger_bounds(self) -> None:
        assert validate_outline(SQUARE, Bounds(-1, -1, 12, 12)).ok

    def test_minimum_tolerance(self) -> None:
        """Outlines up to 3 units outside small bounds are tolerated."""
        assert validate_outline(SQUARE, Bounds(0, 0, 7, 7)).ok
        assert not validate_outline(SQUARE, Bounds(0, 0, 6.9, 6.9)).ok

    def test_relative_tolerance(self) -> None:
        """Large bounds allow 8% of their diagonal."""
        bounds = Bounds(0, 0, 300, 400)
        assert validate_outline("M 0 0 L 339 0 L 339 10 Z", bounds).ok
        assert not validate_outline("M 0 0 L 341 0 L 341 10 Z", bounds).ok

    def test_non_finite_bounds(self) -> None:
        result = validate_outline(SQUARE, Bounds(0, 0, math.inf, 10))
        assert result.code is RejectCode.BBOX_ESCAPE

    def test_without_bounds_no_escape(self) -> None:
        assert validate_outline("M -500 -500 L 500 -500 L 500 500 Z").ok
