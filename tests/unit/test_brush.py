"""Tests for end-to-end stroke computation with TactileBrush."""

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from tactilebrush import (
    InvalidTimingError,
    OffGridLineError,
    OutOfRangeError,
    Stroke,
    TactileBrush,
)
from tactilebrush.core.geometry import EPSILON, Point


class TestStroke:
    """Stroke request validation."""

    def test_coerces_points(self):
        stroke = Stroke((0, 1), [2, 1], 200, 1)
        assert stroke.start == Point(0.0, 1.0)
        assert stroke.end == Point(2.0, 1.0)
        assert stroke.length == pytest.approx(2.0)
        assert stroke.speed == pytest.approx(0.01)

    @pytest.mark.parametrize(
        "duration, intensity",
        [
            (0.0, 1.0),
            (-5.0, 1.0),
            (math.inf, 1.0),
            (math.nan, 1.0),
            (100.0, -0.1),
            (100.0, 1.2),
        ],
    )
    def test_invalid_scalars(self, duration, intensity):
        with pytest.raises(ValueError):
            Stroke((0.0, 0.0), (1.0, 0.0), duration, intensity)

    def test_zero_length(self):
        with pytest.raises(ValueError, match="coincide"):
            Stroke((1.0, 1.0), (1.0, 1.0), 100.0)

    def test_from_grid_units(self):
        stroke = Stroke.from_grid_units((1, 0), (3, 2), 300.0, 0.5, inter_dist=2.5)
        assert stroke.start == Point(2.5, 0.0)
        assert stroke.end == Point(7.5, 5.0)


class TestTactileBrushScenarios:
    """Reference strokes."""

    def test_horizontal_stroke_3x3(self, brush_3x3):
        schedule = brush_3x3.compute((0.0, 1.0), (2.0, 1.0), duration=200, intensity=1.0)
        steps = list(schedule.steps())
        assert len(steps) == 3
        assert [(s.line, s.column) for _, s in steps] == [(1, 0), (1, 1), (1, 2)]
        assert all(s.intensity == 1.0 for _, s in steps)
        onsets = [onset for onset, _ in steps]
        assert onsets[0] == 0.0
        assert onsets[0] < onsets[1] < onsets[2]

    def test_diagonal_stroke_uses_corners_only(self, brush_3x3):
        schedule = brush_3x3.compute((0.0, 0.0), (2.0, 2.0), duration=500, intensity=0.8)
        cells = [(s.line, s.column) for _, s in schedule.steps()]
        assert cells == [(0, 0), (1, 1), (2, 2)]
        assert all(s.intensity == 0.8 for _, s in schedule.steps())

    def test_shallow_stroke_splits_phantom(self, brush_3x3):
        schedule = brush_3x3.compute((0.0, 0.0), (2.0, 0.5), duration=400, intensity=1.0)
        middle = schedule[schedule.onsets[1]]
        assert [(s.line, s.column) for s in middle] == [(0, 1), (1, 1)]
        ratio = 0.25
        assert middle[0].intensity == pytest.approx(math.sqrt(1 - ratio))
        assert middle[1].intensity == pytest.approx(math.sqrt(ratio))
        assert middle[0].duration == middle[1].duration

    def test_steep_stroke_down_and_right(self):
        brush = TactileBrush(lines=20, columns=2, inter_dist=1.0)
        schedule = brush.compute((0.0, 19.0), (0.01, 0.0), duration=5000)
        first = schedule[schedule.onsets[0]]
        last = schedule[schedule.onsets[-1]]
        assert schedule.onsets[0] == 0.0
        assert [(s.line, s.column) for s in first] == [(19, 0)]
        assert all(s.line == 0 for s in last)
        assert len(schedule) == 20

    def test_phantom_energy_conserved_everywhere(self, brush_4x6):
        schedule = brush_4x6.compute((0.0, 0.0), (12.5, 5.0), duration=1500, intensity=0.6)
        for onset in schedule:
            assert sum(s.intensity**2 for s in schedule[onset]) == pytest.approx(0.36)

    def test_last_activation_ends_at_stroke_duration(self, brush_4x6):
        schedule = brush_4x6.compute((0.0, 1.25), (12.5, 7.5), duration=1200)
        last_onset = schedule.onsets[-1]
        assert last_onset + schedule[last_onset][-1].duration == pytest.approx(1200.0)
        assert schedule.end_time >= last_onset

    def test_stroke_against_travel_direction(self, brush_3x3):
        schedule = brush_3x3.compute((2.0, 1.0), (0.0, 1.0), duration=200)
        assert [s.column for _, s in schedule.steps()] == [2, 1, 0]

    def test_virtual_points_are_timed(self, brush_3x3):
        points = brush_3x3.virtual_points(Stroke((0.0, 1.0), (2.0, 1.0), 200.0))
        assert points[0].position == Point(0.0, 1.0)
        assert points[-1].position == Point(2.0, 1.0)
        assert points[-1].timer_max_intensity == pytest.approx(200.0)
        assert points[-1].onset + points[-1].duration_before == pytest.approx(200.0)


class TestTactileBrushErrors:
    """Error reporting."""

    def test_start_outside_grid(self, brush_3x3):
        with pytest.raises(OutOfRangeError):
            brush_3x3.compute((-1.0, 0.0), (2.0, 0.0), duration=300)

    def test_end_outside_grid(self, brush_3x3):
        with pytest.raises(OutOfRangeError):
            brush_3x3.compute((0.0, 0.0), (3.0, 0.0), duration=300)

    def test_endpoint_off_grid_lines(self, brush_3x3):
        with pytest.raises(OffGridLineError):
            brush_3x3.compute((0.5, 0.5), (2.0, 2.0), duration=300)

    def test_endpoint_within_epsilon_of_bound(self, brush_3x3):
        schedule = brush_3x3.compute((0.0, 1.0), (2.0 + EPSILON / 2, 1.0), duration=200)
        assert [(s.line, s.column) for _, s in schedule.steps()] == [(1, 0), (1, 1), (1, 2)]

    def test_infinite_duration(self, brush_3x3):
        with pytest.raises(ValueError, match="finite"):
            brush_3x3.compute((0.0, 1.0), (2.0, 1.0), duration=math.inf)

    def test_duration_too_short(self, brush_3x3):
        with pytest.raises(InvalidTimingError) as excinfo:
            brush_3x3.compute((0.0, 1.0), (2.0, 1.0), duration=60)
        assert excinfo.value.minimum_duration == pytest.approx(94.6, abs=1e-6)

    def test_errors_are_value_errors(self, brush_3x3):
        with pytest.raises(ValueError):
            brush_3x3.compute((-1.0, 0.0), (2.0, 0.0), duration=300)

    def test_invalid_grid(self):
        with pytest.raises(ValueError):
            TactileBrush(lines=1, columns=3, inter_dist=1.0)


class TestTactileBrushApi:

    def test_minimum_duration(self, brush_3x3):
        assert brush_3x3.minimum_duration((0.0, 1.0), (2.0, 1.0)) == pytest.approx(94.6, abs=1e-6)

    def test_minimum_duration_is_valid(self, brush_4x6):
        start, end = (0.0, 0.0), (12.5, 5.0)
        minimum = brush_4x6.minimum_duration(start, end)
        brush_4x6.compute(start, end, duration=minimum + 1e-6)
        with pytest.raises(InvalidTimingError):
            brush_4x6.compute(start, end, duration=minimum - 1.0)

    def test_from_config(self):
        brush = TactileBrush.from_config({"grid": {"lines": 3, "columns": 4, "inter_dist": 2.0}})
        assert brush.grid.shape == (3, 4)
        assert TactileBrush.from_config({"lines": 2, "columns": 2, "inter_dist": 1.0}).grid.lines == 2

    def test_repeated_calls_are_independent(self, brush_3x3):
        first = brush_3x3.compute((0.0, 1.0), (2.0, 1.0), duration=200)
        brush_3x3.compute((0.0, 0.0), (2.0, 2.0), duration=500)
        again = brush_3x3.compute((0.0, 1.0), (2.0, 1.0), duration=200)
        assert first == again

    def test_concurrent_strokes(self, brush_4x6):
        strokes = [((0.0, 0.0), (12.5, 5.0), 1500), ((0.0, 7.5), (12.5, 0.0), 1500)] * 4
        expected = [brush_4x6.compute(*args) for args in strokes]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda args: brush_4x6.compute(*args), strokes))
        assert results == expected

    def test_debug_logging(self, brush_3x3, caplog):
        with caplog.at_level(logging.DEBUG, logger="tactilebrush"):
            brush_3x3.compute((0.0, 1.0), (2.0, 1.0), duration=200)
        assert "3 virtual points" in caplog.text
