"""Exception hierarchy for stroke computation.

Every error raised while turning a stroke into an actuator schedule derives
from :class:`TactileBrushError`. Input problems additionally derive from
``ValueError`` so callers that only guard against bad arguments keep working;
:class:`InternalConsistencyError` derives from ``RuntimeError`` because it
signals a defect rather than bad input.
"""

from __future__ import annotations

from typing import Optional


class TactileBrushError(Exception):
    """Base class for all tactile brush errors."""


class OutOfRangeError(TactileBrushError, ValueError):
    """Stroke start or end point lies outside the actuator grid."""


class OffGridLineError(TactileBrushError, ValueError):
    """Stroke endpoint is inside the grid but on neither a row nor a column line."""


class InvalidTimingError(TactileBrushError, ValueError):
    """The SOA recurrence produced a negative activation duration.

    Attributes:
        index: Index of the virtual point whose duration went negative.
        value: The offending duration in ms.
        minimum_duration: Smallest stroke duration (ms) for which every
            activation duration is non-negative, or ``math.inf`` if none is.
    """

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        value: Optional[float] = None,
        minimum_duration: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.value = value
        self.minimum_duration = minimum_duration


class InternalConsistencyError(TactileBrushError, RuntimeError):
    """A virtual point reached the phantom mapping without lying on a grid line."""
