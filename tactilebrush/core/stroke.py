"""Stroke request: a straight haptic motion across the grid."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Sequence

from .geometry import Point, as_point, distance, points_coincide


@dataclass(frozen=True)
class Stroke:
    """Straight-line stroke from ``start`` to ``end``.

    Attributes:
        start: Start position in cm.
        end: End position in cm.
        duration: Requested total stroke duration in ms.
        intensity: Global target intensity on the scale [0, 1].

    Raises:
        ValueError: If ``duration`` is not positive and finite, ``intensity`` falls
            outside [0, 1], or ``start`` and ``end`` coincide.
    """

    start: Point
    end: Point
    duration: float
    intensity: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_point(self.start))
        object.__setattr__(self, "end", as_point(self.end))
        if not (math.isfinite(self.duration) and self.duration > 0):
            raise ValueError(f"duration must be positive and finite, got {self.duration}")
        if not 0.0 <= self.intensity <= 1.0:
            raise ValueError(f"intensity must be within [0, 1], got {self.intensity}")
        if points_coincide(self.start, self.end):
            raise ValueError(
                f"Stroke start {tuple(self.start)} and end {tuple(self.end)} coincide"
            )
        object.__setattr__(self, "duration", float(self.duration))
        object.__setattr__(self, "intensity", float(self.intensity))

    @property
    def length(self) -> float:
        """Straight-line distance from start to end in cm."""
        return distance(self.start, self.end)

    @property
    def speed(self) -> float:
        """Constant apparent speed in cm/ms."""
        return self.length / self.duration

    @classmethod
    def from_grid_units(
        cls,
        start: Sequence[float],
        end: Sequence[float],
        duration: float,
        intensity: float,
        inter_dist: float,
    ) -> "Stroke":
        """Build a stroke whose endpoints are given in actuator spacings.

        ``start=(1, 0)`` with ``inter_dist=2.5`` becomes ``(2.5, 0.0)`` cm.
        """
        return cls(
            start=Point(start[0] * inter_dist, start[1] * inter_dist),
            end=Point(end[0] * inter_dist, end[1] * inter_dist),
            duration=duration,
            intensity=intensity,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": list(self.start),
            "end": list(self.end),
            "duration": self.duration,
            "intensity": self.intensity,
        }
