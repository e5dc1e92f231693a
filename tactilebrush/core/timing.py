"""Activation timing of virtual actuators.

Apparent tactile motion between two successive actuators is perceived as
continuous when the stimulus onset asynchrony (SOA) between them follows the
empirical relation

    SOA = 0.32 * d + 47.3

where ``d`` is the activation duration of the first actuator (ms). Each
virtual point is first given the time at which it should feel strongest
under constant-speed motion (:func:`compute_max_intensity_timers`); the SOA
law then fixes when each one starts and how long it lasts
(:func:`compute_durations_and_soas`).

Writing ``S`` for the accumulated SOA, the duration of the current point is
``d = before + (t_next - S - SOA)``, so solving the SOA law for ``SOA`` gives
the increment used below:

    SOA = (0.32 * (before - S + t_next) + 47.3) / 1.32
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

from tactilebrush.errors import InvalidTimingError

from .geometry import VirtualPoint, distance, distances_from_start

logger = logging.getLogger(__name__)

SOA_SLOPE = 0.32
SOA_INTERCEPT = 47.3  # ms

# Rounding noise tolerated on durations before they count as negative, in ms
DURATION_TOLERANCE = 1e-9


def soa_increment(duration_before: float, sum_soa: float, next_timer: float) -> float:
    """SOA between the current virtual point and the next one, in ms.

    Args:
        duration_before: Ramp-up duration of the current point.
        sum_soa: Onset of the current point (SOA accumulated so far).
        next_timer: Peak-intensity time of the next point.
    """
    return (SOA_SLOPE * (duration_before - sum_soa + next_timer) + SOA_INTERCEPT) / (
        1.0 + SOA_SLOPE
    )


def soa_recurrence(
    timers: Sequence[float],
    duration: float,
) -> Tuple[List[float], List[float], List[float]]:
    """Run the SOA recurrence over peak-intensity times.

    Args:
        timers: Peak-intensity time of every virtual point, in order. At
            least two entries (start and end).
        duration: Requested stroke duration in ms.

    Returns:
        ``(onsets, before, after)`` lists, one entry per point.
    """
    n = len(timers)
    if n < 2:
        raise ValueError(f"A stroke needs at least 2 virtual points, got {n}")

    onsets = [0.0] * n
    before = [0.0] * n
    after = [0.0] * n

    sum_soa = 0.0
    for i in range(n - 1):
        sum_soa += soa_increment(before[i], sum_soa, timers[i + 1])
        onsets[i + 1] = sum_soa
        before[i + 1] = after[i] = timers[i + 1] - sum_soa

    # The last actuator runs until the requested stroke duration elapses
    before[-1] = duration - sum_soa
    after[-1] = 0.0
    return onsets, before, after


def compute_max_intensity_timers(
    points: Sequence[VirtualPoint],
    duration: float,
) -> None:
    """Fill ``timer_max_intensity`` assuming constant-velocity motion.

    The first point is the stroke start and the last one the stroke end; the
    time of every point is its distance from the start divided by the speed.
    """
    start = points[0].position
    end = points[-1].position
    speed = distance(start, end) / duration

    for point in points:
        point.timer_max_intensity = distance(start, point.position) / speed


def compute_durations_and_soas(
    points: Sequence[VirtualPoint],
    duration: float,
) -> float:
    """Fill onset and durations of every virtual point.

    Requires :func:`compute_max_intensity_timers` to have run.

    Args:
        points: Ordered virtual points of the stroke.
        duration: Requested stroke duration in ms.

    Returns:
        Onset of the last virtual point (total accumulated SOA) in ms.

    Raises:
        InvalidTimingError: If the stroke is too short for its number of
            virtual points and a duration comes out negative.
    """
    timers = [p.timer_max_intensity for p in points]
    onsets, before, after = soa_recurrence(timers, duration)

    for index, (b, a) in enumerate(zip(before, after)):
        for value in (b, a):
            if value < -DURATION_TOLERANCE:
                minimum = minimum_stroke_duration(distances_from_start(points))
                raise InvalidTimingError(
                    f"Stroke duration {duration:g} ms is too short: virtual point "
                    f"{index} gets a negative activation duration ({value:.3f} ms). "
                    f"Minimum duration for this stroke is {minimum:.3f} ms.",
                    index=index,
                    value=value,
                    minimum_duration=minimum,
                )

    for point, onset, b, a in zip(points, onsets, before, after):
        point.onset = onset
        point.duration_before = max(b, 0.0)
        point.duration_after = max(a, 0.0)

    logger.debug(
        "Timed %d virtual points, accumulated SOA %.3f ms of %.3f ms",
        len(points),
        onsets[-1],
        duration,
    )
    return onsets[-1]


def _duration_terms(fractions: Sequence[float], duration: float) -> List[float]:
    """Every ramp-up/ramp-down duration of a stroke lasting ``duration`` ms."""
    timers = [f * duration for f in fractions]
    _, before, after = soa_recurrence(timers, duration)
    return before + after


def minimum_stroke_duration(distances: Sequence[float]) -> float:
    """Smallest stroke duration for which no activation duration is negative.

    Each quantity of :func:`soa_recurrence` is affine in the stroke duration
    ``T`` (peak times scale with ``T``, the recurrence is linear), so every
    duration reads ``a + b * T``. The bound is the largest ``-a / b`` over the
    terms with ``b > 0``; a term with ``b <= 0`` and ``a < 0`` can never be
    satisfied.

    Args:
        distances: Distance of every virtual point from the stroke start, in
            order; the last one is the stroke length.

    Returns:
        The minimum duration in ms, or ``math.inf`` if no duration works.
    """
    if len(distances) < 2:
        raise ValueError(f"A stroke needs at least 2 virtual points, got {len(distances)}")
    length = distances[-1]
    if not length > 0:
        raise ValueError(f"Stroke length must be positive, got {length}")
    fractions = [d / length for d in distances]

    # Affine in T: sample at two durations to recover offset and slope
    sample = 1000.0
    offsets = _duration_terms(fractions, 0.0)
    slopes = [(v - a) / sample for v, a in zip(_duration_terms(fractions, sample), offsets)]

    bound = 0.0
    for a, b in zip(offsets, slopes):
        if b > DURATION_TOLERANCE:
            bound = max(bound, -a / b)
        elif a < -DURATION_TOLERANCE:
            return math.inf
    return bound
