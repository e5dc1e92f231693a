"""Core stroke computation.

Modules:
    geometry: Points, virtual points and grid-line crossings of a stroke
    grid: Physical actuator grid
    stroke: Stroke request
    timing: SOA timing model
    phantom: Virtual to physical actuator mapping
    schedule: Actuator activation schedule
    brush: End-to-end stroke computation
    visualization: Matplotlib figures (import explicitly)
"""

from .geometry import (
    EPSILON,
    Point,
    VirtualPoint,
    compute_virtual_points,
    is_point_on_segment,
)
from .grid import ActuatorGrid, create_actuator_grid_torch
from .stroke import Stroke
from .timing import (
    SOA_INTERCEPT,
    SOA_SLOPE,
    compute_durations_and_soas,
    compute_max_intensity_timers,
    minimum_stroke_duration,
)
from .schedule import ActuatorStep, Schedule
from .phantom import map_to_actuators, map_virtual_point, phantom_intensities
from .brush import TactileBrush

__all__ = [
    # Geometry
    "EPSILON",
    "Point",
    "VirtualPoint",
    "compute_virtual_points",
    "is_point_on_segment",
    # Grid
    "ActuatorGrid",
    "create_actuator_grid_torch",
    "Stroke",
    # Timing
    "SOA_SLOPE",
    "SOA_INTERCEPT",
    "compute_max_intensity_timers",
    "compute_durations_and_soas",
    "minimum_stroke_duration",
    # Mapping and output
    "ActuatorStep",
    "Schedule",
    "map_virtual_point",
    "map_to_actuators",
    "phantom_intensities",
    "TactileBrush",
]
