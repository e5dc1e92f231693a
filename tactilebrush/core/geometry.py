"""Stroke geometry: virtual control points along a straight stroke.

The Tactile Brush algorithm places a *virtual actuator* wherever the stroke
segment crosses a row or column line of the physical actuator grid. Each of
those crossings lies on a grid line, so it can later be rendered either by a
single physical actuator (when it hits one exactly) or by a phantom sensation
between the two actuators bracketing it on that line.

Coordinates are in centimetres throughout. Comparisons tolerate floating
point noise of up to :data:`EPSILON`.

Example:
    >>> from tactilebrush.core.grid import ActuatorGrid
    >>> grid = ActuatorGrid(lines=3, columns=3, inter_dist=1.0)
    >>> points = compute_virtual_points(Point(0.0, 0.0), Point(2.0, 2.0), grid)
    >>> [p.position for p in points]
    [Point(x=0.0, y=0.0), Point(x=1.0, y=1.0), Point(x=2.0, y=2.0)]
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, NamedTuple, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    from .grid import ActuatorGrid

# Tolerance on coordinates, in cm
EPSILON = 1e-3


class Point(NamedTuple):
    """Immutable 2D position in centimetres."""

    x: float
    y: float


@dataclass
class VirtualPoint:
    """Control point of a stroke together with its activation timing.

    Attributes:
        position: Location of the virtual actuator in cm.
        timer_max_intensity: Ideal time (ms from stroke start) at which the
            point reaches its peak intensity under constant-speed motion.
        onset: Scheduled trigger time in ms from stroke start.
        duration_before: Time in ms spent ramping up to the peak.
        duration_after: Time in ms spent after the peak.
    """

    position: Point
    timer_max_intensity: float = 0.0
    onset: float = 0.0
    duration_before: float = 0.0
    duration_after: float = 0.0

    @property
    def total_duration(self) -> float:
        """Full activation duration in ms."""
        return self.duration_before + self.duration_after


def as_point(value: Sequence[float]) -> Point:
    """Coerce a 2-sequence into a :class:`Point` of plain floats."""
    if len(value) != 2:
        raise ValueError(f"Expected an (x, y) pair, got {value!r}")
    return Point(float(value[0]), float(value[1]))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def is_point_on_segment(
    point: Sequence[float],
    start: Sequence[float],
    end: Sequence[float],
) -> bool:
    """Return True if ``point`` lies on the segment ``[start, end]``.

    Off the segment the three points form a triangle, so the two partial
    distances exceed the segment length by more than :data:`EPSILON`.
    """
    return distance(start, point) + distance(point, end) - distance(start, end) < EPSILON


def compare_points(a: Sequence[float], b: Sequence[float]) -> int:
    """Order points by x, then y, treating differences below EPSILON as ties.

    Returns:
        -1 if ``a`` sorts before ``b``, 1 if after, 0 if they coincide.
    """
    dx = b[0] - a[0]
    if dx > EPSILON:
        return -1
    if dx < -EPSILON:
        return 1
    dy = b[1] - a[1]
    if dy > EPSILON:
        return -1
    if dy < -EPSILON:
        return 1
    return 0


def points_coincide(a: Sequence[float], b: Sequence[float]) -> bool:
    """True when both coordinates differ by at most EPSILON."""
    return compare_points(a, b) == 0


def grid_line_crossings(start: Point, end: Point, grid: "ActuatorGrid") -> np.ndarray:
    """Intersections of the stroke's supporting line with every grid line.

    Rows are ``y = l * inter_dist`` for ``l`` in ``[0, lines)`` and columns
    ``x = c * inter_dist`` for ``c`` in ``[0, columns)``. A vertical stroke
    only crosses rows and a horizontal one only crosses columns.

    Returns:
        Array ``[N, 2]`` of candidate points. They lie on the infinite line,
        not necessarily on the segment.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    rows = np.arange(grid.lines, dtype=np.float64) * grid.inter_dist
    columns = np.arange(grid.columns, dtype=np.float64) * grid.inter_dist

    parts = []
    if abs(dx) < EPSILON:
        parts.append(np.column_stack([np.full_like(rows, start.x), rows]))
    else:
        slope = dy / dx
        origin = start.y - slope * start.x
        if abs(dy) >= EPSILON:
            parts.append(np.column_stack([(rows - origin) / slope, rows]))
        parts.append(np.column_stack([columns, slope * columns + origin]))
    return np.concatenate(parts, axis=0)


def _on_segment_mask(candidates: np.ndarray, start: Point, end: Point) -> np.ndarray:
    """Vectorised :func:`is_point_on_segment` over ``[N, 2]`` candidates."""
    segment = distance(start, end)
    to_start = np.hypot(candidates[:, 0] - start.x, candidates[:, 1] - start.y)
    to_end = np.hypot(candidates[:, 0] - end.x, candidates[:, 1] - end.y)
    return to_start + to_end - segment < EPSILON


def _deduplicate(points: List[Point]) -> List[Point]:
    """Drop adjacent points that coincide within EPSILON, keeping the first."""
    unique: List[Point] = []
    for point in points:
        if unique and points_coincide(unique[-1], point):
            continue
        unique.append(point)
    return unique


def compute_virtual_points(
    start: Sequence[float],
    end: Sequence[float],
    grid: "ActuatorGrid",
) -> List[VirtualPoint]:
    """Build the ordered control points of a straight stroke.

    The result always starts with ``start`` and ends with ``end`` (exactly,
    never a crossing that merely rounds to them) and holds every grid-line
    crossing of the segment in between, in direction of travel, with no two
    points closer than EPSILON on both axes.

    Args:
        start: Stroke start in cm. Must lie within the grid bounds.
        end: Stroke end in cm. Must lie within the grid bounds.
        grid: Physical actuator grid.

    Returns:
        Virtual points with zeroed timing fields.
    """
    start = as_point(start)
    end = as_point(end)

    candidates = grid_line_crossings(start, end, grid)
    candidates = candidates[_on_segment_mask(candidates, start, end)]

    crossings = [
        Point(float(x), float(y))
        for x, y in candidates
        if not (points_coincide((x, y), start) or points_coincide((x, y), end))
    ]
    # Projection onto the travel direction orders points from start to end
    direction = (end.x - start.x, end.y - start.y)
    crossings.sort(
        key=lambda p: (p.x - start.x) * direction[0] + (p.y - start.y) * direction[1]
    )
    ordered = _deduplicate([start] + crossings + [end])

    return [VirtualPoint(position=p) for p in ordered]


def distances_from_start(points: Sequence[VirtualPoint]) -> Tuple[float, ...]:
    """Euclidean distance of each virtual point from the first one."""
    if not points:
        return ()
    origin = points[0].position
    return tuple(distance(origin, p.position) for p in points)
