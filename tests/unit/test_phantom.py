"""Tests for phantom-actuator mapping of virtual points."""

import math

import pytest

from tactilebrush.core.geometry import Point, VirtualPoint
from tactilebrush.core.grid import ActuatorGrid
from tactilebrush.core.phantom import (
    map_to_actuators,
    map_virtual_point,
    phantom_intensities,
)
from tactilebrush.core.schedule import ActuatorStep, Schedule
from tactilebrush.errors import InternalConsistencyError


def _point(x, y, onset=0.0, before=10.0, after=30.0):
    return VirtualPoint(
        Point(x, y), onset=onset, duration_before=before, duration_after=after
    )


class TestPhantomIntensities:
    """Energy summation split between two actuators."""

    @pytest.mark.parametrize("ratio", [0.0, 0.25, 0.5, 0.8, 1.0])
    def test_energy_is_conserved(self, ratio):
        first, second = phantom_intensities(ratio, 0.7)
        assert first**2 + second**2 == pytest.approx(0.7**2)

    def test_extremes(self):
        assert phantom_intensities(0.0, 1.0) == (1.0, 0.0)
        assert phantom_intensities(1.0, 1.0) == (0.0, 1.0)

    def test_midpoint_is_symmetric(self):
        first, second = phantom_intensities(0.5, 1.0)
        assert first == pytest.approx(second)
        assert first == pytest.approx(math.sqrt(0.5))

    def test_invalid_ratio(self):
        with pytest.raises(ValueError):
            phantom_intensities(1.5, 1.0)


class TestMapVirtualPoint:
    """Single-point mapping onto physical actuators."""

    def test_physical_actuator(self, grid_3x3):
        steps = map_virtual_point(_point(2.0, 1.0), grid_3x3, 0.9)
        assert steps == [ActuatorStep(line=1, column=2, intensity=0.9, duration=40.0)]

    def test_rounding_noise_still_hits_actuator(self, grid_3x3):
        steps = map_virtual_point(_point(0.99995, 1.00002), grid_3x3, 1.0)
        assert len(steps) == 1
        assert (steps[0].line, steps[0].column) == (1, 1)

    def test_phantom_on_column_line(self, grid_3x3):
        """Point on column 1 between lines 0 and 1."""
        steps = map_virtual_point(_point(1.0, 0.25), grid_3x3, 1.0)
        assert [(s.line, s.column) for s in steps] == [(0, 1), (1, 1)]
        assert steps[0].intensity == pytest.approx(math.sqrt(0.75))
        assert steps[1].intensity == pytest.approx(math.sqrt(0.25))
        assert all(s.duration == 40.0 for s in steps)

    def test_phantom_on_line(self, grid_3x3):
        """Point on line 2 between columns 1 and 2."""
        steps = map_virtual_point(_point(1.6, 2.0), grid_3x3, 0.5)
        assert [(s.line, s.column) for s in steps] == [(2, 1), (2, 2)]
        assert steps[0].intensity == pytest.approx(math.sqrt(0.4) * 0.5)
        assert steps[1].intensity == pytest.approx(math.sqrt(0.6) * 0.5)

    def test_phantom_respects_spacing(self):
        grid = ActuatorGrid(lines=3, columns=3, inter_dist=2.0)
        steps = map_virtual_point(_point(2.0, 3.0), grid, 1.0)
        assert [(s.line, s.column) for s in steps] == [(1, 1), (2, 1)]
        assert steps[0].intensity == pytest.approx(math.sqrt(0.5))

    def test_phantom_energy(self, grid_3x3):
        steps = map_virtual_point(_point(1.0, 1.37), grid_3x3, 0.6)
        assert sum(s.intensity**2 for s in steps) == pytest.approx(0.6**2)

    def test_point_off_grid_lines_is_internal_error(self, grid_3x3):
        with pytest.raises(InternalConsistencyError):
            map_virtual_point(_point(0.5, 0.5), grid_3x3, 1.0)


class TestMapToActuators:
    """Filling a schedule from timed virtual points."""

    def test_steps_keyed_by_onset(self, grid_3x3):
        points = [
            _point(0.0, 0.0, onset=0.0),
            _point(1.0, 0.5, onset=50.0),
            _point(2.0, 1.0, onset=120.0, after=0.0),
        ]
        schedule = map_to_actuators(points, grid_3x3, 1.0)
        assert schedule.onsets == [0.0, 50.0, 120.0]
        assert len(schedule[0.0]) == 1
        assert len(schedule[50.0]) == 2
        assert schedule[120.0][0].duration == 10.0

    def test_extends_existing_schedule(self, grid_3x3):
        schedule = Schedule()
        schedule.add(0.0, ActuatorStep(0, 0, 1.0, 5.0))
        result = map_to_actuators([_point(0.0, 0.0)], grid_3x3, 0.5, schedule)
        assert result is schedule
        assert len(schedule[0.0]) == 2
