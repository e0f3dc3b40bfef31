"""Tests for containment primitives."""

import pytest

from letterlight.core.containment import (
    Outline,
    capsule_endpoints,
    capsule_inside,
    distance_to_edge,
    measure_stroke_width,
    point_inside,
)
from letterlight.domain import Bounds, Point
from letterlight.exceptions import GeometryProviderError

SQUARE = "M 0 0 L 100 0 L 100 100 L 0 100 Z"
CIRCLE = (
    "M 0 50 C 0 22 22 0 50 0 C 78 0 100 22 100 50 "
    "C 100 78 78 100 50 100 C 22 100 0 78 0 50 Z"
)
BAR = "M 0 0 L 100 0 L 100 20 L 0 20 Z"


class ExplodingProvider:
    """Provider that fails on every query."""

    def contains(self, x: float, y: float) -> bool:
        raise GeometryProviderError(x, y, "provider unavailable")


@pytest.fixture
def square() -> Outline:
    return Outline.from_path(SQUARE)


@pytest.fixture
def bar() -> Outline:
    return Outline.from_path(BAR)


class TestOutline:
    """Tests for the parsed outline wrapper."""

    def test_bounds(self, square: Outline) -> None:
        assert square.bounds == Bounds(0, 0, 100, 100)
        assert not square.is_empty()

    def test_empty(self) -> None:
        outline = Outline.from_path("")
        assert outline.is_empty()
        assert outline.bounds is None
        assert not point_inside(outline, 0, 0)


class TestPointInside:
    """Tests for single fill queries."""

    @pytest.mark.parametrize(("x", "y"), [(50, 50), (1, 1), (99, 50)])
    def test_inside_square(self, square: Outline, x: float, y: float) -> None:
        assert point_inside(square, x, y)

    @pytest.mark.parametrize(("x", "y"), [(-1, 50), (150, 150), (50, 101)])
    def test_outside_square(self, square: Outline, x: float, y: float) -> None:
        assert not point_inside(square, x, y)

    def test_curves_are_exact(self) -> None:
        """Curved edges are tested against the real curve, not the bounds."""
        circle = Outline.from_path(CIRCLE)
        assert point_inside(circle, 50, 50)
        assert not point_inside(circle, 3, 3)

    def test_unclosed_subpath_is_filled(self) -> None:
        outline = Outline.from_path("M 0 0 L 100 0 L 100 100 L 0 100")
        assert point_inside(outline, 50, 50)

    def test_counter_wound_hole(self) -> None:
        """An inner contour wound the other way is a hole."""
        outline = Outline.from_path(f"{SQUARE} M 30 30 L 30 70 L 70 70 L 70 30 Z")
        assert not point_inside(outline, 50, 50)
        assert point_inside(outline, 10, 10)

    def test_same_wound_inner_contour(self) -> None:
        """Non-zero fills a same-wound inner contour, even-odd does not."""
        path = f"{SQUARE} M 30 30 L 70 30 L 70 70 L 30 70 Z"
        assert point_inside(Outline.from_path(path), 50, 50)
        assert not point_inside(Outline.from_path(path, even_odd=True), 50, 50)

    def test_drawing_after_close_matches_contours(self) -> None:
        """Fill and flattened contours agree on a subpath drawn after Z without M."""
        outline = Outline.from_path("M 0 0 L 10 0 L 10 10 L 0 10 Z L 50 0 L 50 10 Z")
        assert point_inside(outline, 40, 5)
        assert len(outline.contours) == 2
        assert outline.contours[1].points == [Point(0, 0), Point(50, 0), Point(50, 10)]

    def test_drawing_before_first_move_is_ignored(self) -> None:
        outline = Outline.from_path("L 50 50 L 0 50 M 0 0 L 10 0 L 10 10 L 0 10 Z")
        assert not point_inside(outline, 10, 40)
        assert len(outline.contours) == 1

    def test_provider_failure_is_outside(self) -> None:
        outline = Outline(path_data="", segments=[], contours=[], provider=ExplodingProvider())
        assert not point_inside(outline, 0, 0)
        assert not capsule_inside(outline, 0, 0, 0, 5)


class TestCapsuleInside:
    """Tests for module capsule containment."""

    def test_endpoints(self) -> None:
        start, end = capsule_endpoints(10, 10, 90, 5)
        assert start.x == pytest.approx(10)
        assert start.y == pytest.approx(5)
        assert end.x == pytest.approx(10)
        assert end.y == pytest.approx(15)

    def test_zero_length_is_point_test(self, bar: Outline) -> None:
        assert capsule_inside(bar, 50, 10, 0, 0) == point_inside(bar, 50, 10)
        assert capsule_inside(bar, 50, 30, 0, 0) == point_inside(bar, 50, 30)

    def test_along_bar(self, bar: Outline) -> None:
        assert capsule_inside(bar, 50, 10, 0, 30)

    def test_across_bar(self, bar: Outline) -> None:
        """Rotated across a 20 unit bar, the end caps stick out."""
        assert not capsule_inside(bar, 50, 10, 90, 30)

    def test_end_cap_outside(self, bar: Outline) -> None:
        assert not capsule_inside(bar, 90, 10, 0, 20)


class TestDistanceToEdge:
    """Tests for ray marching to the outline edge."""

    def test_refined_distance(self, square: Outline) -> None:
        assert distance_to_edge(square, 45, 50, 1, 0) == pytest.approx(55, abs=0.05)

    def test_start_outside(self, square: Outline) -> None:
        assert distance_to_edge(square, -10, 50, 1, 0) == 0.0

    def test_capped_at_max_dist(self, square: Outline) -> None:
        assert distance_to_edge(square, 45, 50, 1, 0, max_dist=20) == 20

    def test_concave_gap_not_skipped(self) -> None:
        """A thin notch narrower than the far wall distance is still found."""
        u_shape = "M 0 0 L 100 0 L 100 100 L 60 100 L 60 20 L 40 20 L 40 100 L 0 100 Z"
        outline = Outline.from_path(u_shape)
        assert distance_to_edge(outline, 20, 50, 1, 0) == pytest.approx(20, abs=0.05)


class TestStrokeWidth:
    """Tests for stroke width measurement."""

    def test_width_across_bar(self, bar: Outline) -> None:
        metric = measure_stroke_width(bar, Point(50, 8), (0, 1))
        assert metric.width == pytest.approx(20, abs=0.05)
        assert metric.right_dist == pytest.approx(12, abs=0.05)
        assert metric.left_dist == pytest.approx(8, abs=0.05)
        assert metric.center == Point(50, 8)
