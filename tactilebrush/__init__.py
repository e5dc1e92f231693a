"""Tactile Brush: straight haptic strokes on vibrotactile actuator grids.

Tactile Brush turns a desired stroke (a perceived straight motion from a
start point to an end point, with a duration and an intensity) into a
schedule of physical actuator activations that produce the illusion of
continuous motion.

Key Components:
    - core.geometry: Virtual actuators at the stroke's grid-line crossings
    - core.timing: Onsets and durations from the SOA law (SOA = 0.32 d + 47.3)
    - core.phantom: Phantom-actuator rendering with energy-conserving split
    - core.schedule: Time-ordered activation schedule for the hardware driver
    - core.brush: End-to-end stroke computation
    - config: YAML configuration of grids and strokes
    - cli: Command-line interface

Example:
    >>> from tactilebrush import TactileBrush
    >>> brush = TactileBrush(lines=3, columns=3, inter_dist=1.0)
    >>> schedule = brush.compute((0.0, 1.0), (2.0, 1.0), duration=200, intensity=1.0)
    >>> schedule.num_steps
    3
"""

__version__ = "0.1.0"
__license__ = "MIT"

from tactilebrush.core.brush import TactileBrush
from tactilebrush.core.geometry import EPSILON, Point, VirtualPoint
from tactilebrush.core.grid import ActuatorGrid
from tactilebrush.core.schedule import ActuatorStep, Schedule
from tactilebrush.core.stroke import Stroke
from tactilebrush.errors import (
    InternalConsistencyError,
    InvalidTimingError,
    OffGridLineError,
    OutOfRangeError,
    TactileBrushError,
)

__all__ = [
    "__version__",
    "__license__",
    "TactileBrush",
    "ActuatorGrid",
    "Stroke",
    "Point",
    "VirtualPoint",
    "ActuatorStep",
    "Schedule",
    "EPSILON",
    "TactileBrushError",
    "OutOfRangeError",
    "OffGridLineError",
    "InvalidTimingError",
    "InternalConsistencyError",
]
