"""Tests for module placement."""

import pytest

from letterlight.config import AutofillConfig, Orientation, StrokeFollowConfig
from letterlight.core.containment import Outline, capsule_inside, point_inside
from letterlight.core.placement import GridLayout, PlacementEngine, autofill, estimate_count
from letterlight.core.spacing import select_well_spaced
from letterlight.domain import Bounds, Point

RECT = "M 0 0 L 100 0 L 100 60 L 0 60 Z"
THIN_BAR = "M 0 0 L 200 0 L 200 4 L 0 4 Z"


@pytest.fixture
def rect() -> Outline:
    return Outline.from_path(RECT)


@pytest.fixture
def engine() -> PlacementEngine:
    return PlacementEngine()


class TestGridLayout:
    """Tests for lattice construction."""

    def test_horizontal(self) -> None:
        layout = GridLayout.build(Bounds(0, 0, 100, 60), AutofillConfig(), spacing=2.0)
        assert (layout.step_x, layout.step_y) == (14.0, 7.0)
        assert (layout.start_x, layout.start_y) == (8.0, 4.5)
        assert layout.rotation == 0.0
        assert layout.capsule_half_length == pytest.approx(3.5)
        assert len(list(layout.centres())) == 56

    def test_vertical_swaps_pitch(self) -> None:
        config = AutofillConfig(orientation=Orientation.VERTICAL)
        layout = GridLayout.build(Bounds(0, 0, 100, 60), config, spacing=2.0)
        assert (layout.step_x, layout.step_y) == (7.0, 14.0)
        assert layout.rotation == 90.0

    def test_scale_is_clamped(self) -> None:
        config = AutofillConfig(scale=0.01)
        layout = GridLayout.build(Bounds(0, 0, 100, 60), config, spacing=0.0)
        assert layout.module_w == pytest.approx(1.2)

    def test_no_centres_when_inset_too_large(self) -> None:
        config = AutofillConfig(inset=40.0)
        layout = GridLayout.build(Bounds(0, 0, 60, 60), config, spacing=2.0)
        assert list(layout.centres()) == []


class TestAutofill:
    """Tests for grid autofill."""

    def test_rectangle(self, engine: PlacementEngine, rect: Outline) -> None:
        modules = engine.autofill(rect)
        assert len(modules) == 56
        assert all(m.rotation == 0.0 for m in modules)
        assert all((m.w, m.h) == (12.0, 5.0) for m in modules)

    def test_modules_are_inside(self, engine: PlacementEngine) -> None:
        """Every placed capsule lies in the fill of a non-convex letter."""
        letter_l = Outline.from_path("M 0 0 L 20 0 L 20 80 L 60 80 L 60 100 L 0 100 Z")
        modules = engine.autofill(letter_l)
        assert modules
        for m in modules:
            assert capsule_inside(letter_l, m.x, m.y, m.rotation, m.w / 2 - m.h / 2)

    def test_vertical(self, engine: PlacementEngine, rect: Outline) -> None:
        modules = engine.autofill(rect, AutofillConfig(orientation=Orientation.VERTICAL))
        assert modules
        assert all(m.rotation == 90.0 for m in modules)

    def test_hole_is_skipped(self, engine: PlacementEngine) -> None:
        ring = Outline.from_path(
            "M 0 0 L 100 0 L 100 100 L 0 100 Z M 30 30 L 30 70 L 70 70 L 70 30 Z"
        )
        modules = engine.autofill(ring)
        assert modules
        assert not any(30 < m.x < 70 and 30 < m.y < 70 for m in modules)

    def test_refused_over_ceiling(self, engine: PlacementEngine, rect: Outline) -> None:
        """An estimate above max_modules yields no modules at all."""
        assert engine.autofill(rect, AutofillConfig(max_modules=10)) == []

    def test_empty_outline(self, engine: PlacementEngine) -> None:
        outline = Outline.from_path("")
        assert engine.autofill(outline) == []
        assert engine.estimate_count(outline) == 0

    def test_module_level_helpers(self, rect: Outline) -> None:
        assert len(autofill(rect)) == 56
        assert estimate_count(rect) == 59


class TestEstimateCount:
    """Tests for the placement count estimate."""

    def test_rectangle(self, engine: PlacementEngine, rect: Outline) -> None:
        assert engine.estimate_count(rect) == 59

    def test_monotone_in_spacing(self, engine: PlacementEngine, rect: Outline) -> None:
        """Reducing spacing never reduces the estimate."""
        estimates = [
            engine.estimate_count(rect, AutofillConfig(spacing=spacing))
            for spacing in (8.0, 6.0, 4.0, 2.0, 1.0, 0.0)
        ]
        assert estimates == sorted(estimates)
        assert estimates[-1] == 96

    def test_tracks_autofill(self, engine: PlacementEngine, rect: Outline) -> None:
        estimate = engine.estimate_count(rect)
        placed = len(engine.autofill(rect))
        assert abs(estimate - placed) <= 0.1 * placed


class TestFollowStroke:
    """Tests for stroke-following placement."""

    def test_modules_inside(self, engine: PlacementEngine, rect: Outline) -> None:
        modules = engine.follow_stroke(rect, StrokeFollowConfig(count=16))
        assert len(modules) == 16
        assert all(point_inside(rect, m.x, m.y) for m in modules)
        assert all(capsule_inside(rect, m.x, m.y, m.rotation, 3.5) for m in modules)

    def test_offset_and_rotation(self, engine: PlacementEngine, rect: Outline) -> None:
        """The first sample sits on the bottom edge and is pushed up by the inset."""
        first = engine.follow_stroke(rect, StrokeFollowConfig(count=16))[0]
        assert first.x == pytest.approx(10.0)
        assert first.y == pytest.approx(6.0)
        assert first.rotation == pytest.approx(90.0)

    def test_inset_limited_by_module_size(self, engine: PlacementEngine, rect: Outline) -> None:
        config = StrokeFollowConfig(count=16, desired_inset=20.0, module_size=10.0)
        first = engine.follow_stroke(rect, config)[0]
        assert first.y == pytest.approx(8.0)
        assert first.w == 10.0

    def test_stroke_thinner_than_inset(self, engine: PlacementEngine) -> None:
        """No normal lands inside a 4-unit bar with a 6-unit inset, so nothing is placed."""
        bar = Outline.from_path(THIN_BAR)
        assert engine.follow_stroke(bar, StrokeFollowConfig(count=20)) == []

    def test_thin_stroke_with_small_inset(self, engine: PlacementEngine) -> None:
        bar = Outline.from_path(THIN_BAR)
        config = StrokeFollowConfig(count=20, desired_inset=2.0, module_size=4.0, module_height=4.0)
        modules = engine.follow_stroke(bar, config)
        assert len(modules) == 20
        assert all(m.y == pytest.approx(2.0) for m in modules)
        assert all(point_inside(bar, m.x, m.y) for m in modules)

    def test_refused_over_ceiling(self, engine: PlacementEngine, rect: Outline) -> None:
        assert engine.follow_stroke(rect, StrokeFollowConfig(count=16, max_modules=10)) == []

    def test_empty_outline(self, engine: PlacementEngine) -> None:
        assert engine.follow_stroke(Outline.from_path("")) == []


class TestSelectWellSpaced:
    """Tests for greedy maximin selection."""

    def test_first_always_kept(self) -> None:
        assert select_well_spaced([Point(0, 0)], 100.0) == [0]

    def test_empty(self) -> None:
        assert select_well_spaced([], 1.0) == []

    def test_loop_back_collision(self) -> None:
        """A candidate close to an early pick is dropped even after a long walk."""
        candidates = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10), Point(0.5, 0.5)]
        assert select_well_spaced(candidates, 5.0) == [0, 1, 2, 3]

    def test_spacing_respected(self) -> None:
        candidates = [Point(x * 1.5, 0) for x in range(10)]
        kept = select_well_spaced(candidates, 4.0)
        xs = [candidates[i].x for i in kept]
        assert all(b - a >= 4.0 for a, b in zip(xs, xs[1:]))
