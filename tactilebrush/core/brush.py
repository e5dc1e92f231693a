"""Tactile Brush: straight strokes to actuator schedules.

:class:`TactileBrush` chains the three stages of the algorithm for a fixed
actuator grid:

1. :func:`~tactilebrush.core.geometry.compute_virtual_points` places virtual
   actuators where the stroke crosses grid lines,
2. :mod:`~tactilebrush.core.timing` times them with the SOA law,
3. :func:`~tactilebrush.core.phantom.map_to_actuators` renders them on
   physical actuators.

The brush holds no per-stroke state, so a single instance can compute any
number of strokes, from several threads if needed.

Example:
    >>> brush = TactileBrush(lines=3, columns=4, inter_dist=2.0)
    >>> schedule = brush.compute((0.0, 2.0), (6.0, 2.0), duration=400, intensity=0.8)
    >>> [step.column for _, step in schedule.steps()]
    [0, 1, 2, 3]
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from tactilebrush.errors import OffGridLineError, OutOfRangeError

from .geometry import VirtualPoint, as_point, compute_virtual_points, distances_from_start
from .grid import ActuatorGrid
from .phantom import map_to_actuators
from .schedule import Schedule
from .stroke import Stroke
from .timing import (
    compute_durations_and_soas,
    compute_max_intensity_timers,
    minimum_stroke_duration,
)

logger = logging.getLogger(__name__)


class TactileBrush:
    """Compute actuator schedules for strokes on one actuator grid.

    Attributes:
        grid: The physical actuator grid.
    """

    def __init__(self, lines: int, columns: int, inter_dist: float) -> None:
        """Initialise the brush for a grid.

        Args:
            lines: Number of actuator rows (``>= 2``).
            columns: Number of actuator columns (``>= 2``).
            inter_dist: Distance between adjacent actuators in cm.
        """
        self.grid = ActuatorGrid(lines=lines, columns=columns, inter_dist=inter_dist)

    @classmethod
    def from_grid(cls, grid: ActuatorGrid) -> "TactileBrush":
        return cls(grid.lines, grid.columns, grid.inter_dist)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "TactileBrush":
        """Create a brush from a grid config dict (or a full config with ``grid``)."""
        grid_config = config.get("grid", config)
        return cls.from_grid(ActuatorGrid.from_config(grid_config))

    def __repr__(self) -> str:
        return (
            f"TactileBrush(lines={self.grid.lines}, columns={self.grid.columns}, "
            f"inter_dist={self.grid.inter_dist})"
        )

    def _check_endpoints(self, start: Sequence[float], end: Sequence[float]) -> None:
        for label, point in (("start", start), ("end", end)):
            if not self.grid.contains(point):
                raise OutOfRangeError(
                    f"Stroke {label} point {tuple(point)} out of the grid range "
                    f"{tuple(self.grid.min_coord)}-{tuple(self.grid.max_coord)}"
                )
        for label, point in (("start", start), ("end", end)):
            if not self.grid.is_on_grid_line(point):
                raise OffGridLineError(
                    f"Stroke {label} point {tuple(point)} lies on no actuator "
                    f"row or column line (spacing {self.grid.inter_dist} cm)"
                )

    def virtual_points(self, stroke: Stroke) -> List[VirtualPoint]:
        """Timed virtual points of a stroke.

        Raises:
            OutOfRangeError: If an endpoint lies outside the grid.
            OffGridLineError: If an endpoint lies on no grid line.
            InvalidTimingError: If the stroke duration is too short.
        """
        self._check_endpoints(stroke.start, stroke.end)
        points = compute_virtual_points(stroke.start, stroke.end, self.grid)
        logger.debug(
            "Stroke %s -> %s crosses %d virtual points",
            tuple(stroke.start),
            tuple(stroke.end),
            len(points),
        )
        compute_max_intensity_timers(points, stroke.duration)
        compute_durations_and_soas(points, stroke.duration)
        return points

    def compute_stroke(self, stroke: Stroke) -> Schedule:
        """Compute the physical activation schedule of a stroke.

        Either the whole schedule is returned or an error is raised; no
        partial result is produced.
        """
        points = self.virtual_points(stroke)
        schedule = map_to_actuators(points, self.grid, stroke.intensity)
        logger.debug(
            "Stroke scheduled as %d activations at %d onsets",
            schedule.num_steps,
            len(schedule),
        )
        return schedule

    def compute(
        self,
        start: Sequence[float],
        end: Sequence[float],
        duration: float,
        intensity: float = 1.0,
    ) -> Schedule:
        """Shorthand for :meth:`compute_stroke` with a freshly built stroke."""
        return self.compute_stroke(Stroke(start, end, duration, intensity))

    def minimum_duration(self, start: Sequence[float], end: Sequence[float]) -> float:
        """Shortest stroke duration (ms) that yields a valid schedule.

        Raises:
            OutOfRangeError: If an endpoint lies outside the grid.
            OffGridLineError: If an endpoint lies on no grid line.
        """
        start = as_point(start)
        end = as_point(end)
        self._check_endpoints(start, end)
        points = compute_virtual_points(start, end, self.grid)
        return minimum_stroke_duration(distances_from_start(points))
