"""Rendering virtual points on physical actuators.

A virtual point that coincides with a physical actuator simply drives that
actuator. A point lying between two actuators on the same grid line is
rendered as a *phantom* sensation: both neighbours vibrate at once and the
perceived location follows the energy split between them. With ``beta`` the
relative distance of the phantom from the first actuator, the energy
summation model gives

    A1 = sqrt(1 - beta) * A,    A2 = sqrt(beta) * A

so that ``A1**2 + A2**2 == A**2`` wherever the phantom sits.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple

from tactilebrush.errors import InternalConsistencyError

from .geometry import VirtualPoint, distance
from .grid import ActuatorGrid
from .schedule import ActuatorStep, Schedule


def phantom_intensities(ratio: float, intensity: float) -> Tuple[float, float]:
    """Split ``intensity`` between two actuators bracketing a phantom.

    Args:
        ratio: Distance of the phantom from the first actuator, relative to
            the distance between both actuators. Must lie in [0, 1].
        intensity: Desired perceived intensity.

    Returns:
        ``(first, second)`` actuator intensities.
    """
    if not 0.0 <= ratio <= 1.0:
        raise ValueError(f"ratio must be within [0, 1], got {ratio}")
    return math.sqrt(1.0 - ratio) * intensity, math.sqrt(ratio) * intensity


def map_virtual_point(
    point: VirtualPoint,
    grid: ActuatorGrid,
    intensity: float,
) -> List[ActuatorStep]:
    """Physical activations rendering one timed virtual point.

    Returns:
        One step when the point is a physical actuator, two for a phantom.

    Raises:
        InternalConsistencyError: If the point lies on no grid line.
    """
    x, y = point.position
    duration = point.total_duration
    x_aligned = grid.is_aligned(x)
    y_aligned = grid.is_aligned(y)

    if x_aligned and y_aligned:
        return [
            ActuatorStep(
                line=grid.nearest_index(y),
                column=grid.nearest_index(x),
                intensity=intensity,
                duration=duration,
            )
        ]

    if x_aligned:
        column = grid.nearest_index(x)
        first = (math.floor(y / grid.inter_dist), column)
        second = (math.ceil(y / grid.inter_dist), column)
    elif y_aligned:
        line = grid.nearest_index(y)
        first = (line, math.floor(x / grid.inter_dist))
        second = (line, math.ceil(x / grid.inter_dist))
    else:
        raise InternalConsistencyError(
            f"Virtual point ({x:.4f}, {y:.4f}) lies on no grid line"
        )

    phys1 = grid.actuator_position(*first)
    phys2 = grid.actuator_position(*second)
    ratio = min(1.0, distance(phys1, point.position) / distance(phys1, phys2))
    intensity1, intensity2 = phantom_intensities(ratio, intensity)

    return [
        ActuatorStep(line=first[0], column=first[1], intensity=intensity1, duration=duration),
        ActuatorStep(line=second[0], column=second[1], intensity=intensity2, duration=duration),
    ]


def map_to_actuators(
    points: Iterable[VirtualPoint],
    grid: ActuatorGrid,
    intensity: float,
    schedule: Optional[Schedule] = None,
) -> Schedule:
    """Add the activations of every timed virtual point to a schedule.

    Args:
        points: Timed virtual points of a stroke.
        grid: Physical actuator grid.
        intensity: Global stroke intensity in [0, 1].
        schedule: Schedule to extend; a new one is created when omitted.

    Returns:
        The extended schedule.
    """
    if schedule is None:
        schedule = Schedule()
    for point in points:
        for step in map_virtual_point(point, grid, intensity):
            schedule.add(point.onset, step)
    return schedule
