"""Actuator activation schedule produced for one stroke.

A :class:`Schedule` maps onset times (ms from stroke start) to the physical
actuator activations triggered at that time. It is the hand-off point to the
hardware driver, which fires each :class:`ActuatorStep` at ``(line, column)``
with ``intensity`` for ``duration`` ms once ``onset`` ms have elapsed.
"""

from __future__ import annotations

import bisect
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Tuple

import torch

from .grid import ActuatorGrid


@dataclass(frozen=True)
class ActuatorStep:
    """Activation of one physical actuator.

    Attributes:
        line: Row index of the actuator (not centimetres).
        column: Column index of the actuator (not centimetres).
        intensity: Drive intensity on the scale [0, 1].
        duration: Activation duration in ms.
    """

    line: int
    column: int
    intensity: float
    duration: float

    def __str__(self) -> str:
        return (
            f"Actuator at position ({self.column},{self.line}) "
            f"triggered during {self.duration:g}msec "
            f"with intensity {self.intensity:g}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Schedule:
    """Time-ordered mapping ``onset -> [ActuatorStep, ...]``.

    Steps are only ever appended. Iterating yields onsets in ascending order
    and steps sharing an onset keep their insertion order.
    """

    def __init__(self) -> None:
        self._onsets: List[float] = []
        self._steps: Dict[float, List[ActuatorStep]] = {}

    def add(self, onset: float, step: ActuatorStep) -> None:
        """Append ``step`` to the bucket of ``onset``, creating it if needed."""
        onset = float(onset)
        bucket = self._steps.get(onset)
        if bucket is None:
            bisect.insort(self._onsets, onset)
            bucket = self._steps[onset] = []
        bucket.append(step)

    def __getitem__(self, onset: float) -> List[ActuatorStep]:
        return list(self._steps[float(onset)])

    def __contains__(self, onset: object) -> bool:
        return onset in self._steps

    def __len__(self) -> int:
        return len(self._onsets)

    def __iter__(self) -> Iterator[float]:
        return iter(list(self._onsets))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self._onsets == other._onsets and self._steps == other._steps

    def __repr__(self) -> str:
        return f"Schedule(onsets={len(self)}, steps={self.num_steps})"

    @property
    def onsets(self) -> List[float]:
        return list(self._onsets)

    @property
    def num_steps(self) -> int:
        return sum(len(bucket) for bucket in self._steps.values())

    @property
    def end_time(self) -> float:
        """Time in ms at which the last activation stops (0 when empty)."""
        return max(
            (onset + step.duration for onset, step in self.steps()),
            default=0.0,
        )

    def items(self) -> Iterator[Tuple[float, List[ActuatorStep]]]:
        for onset in self._onsets:
            yield onset, list(self._steps[onset])

    def steps(self) -> Iterator[Tuple[float, ActuatorStep]]:
        """Flattened ``(onset, step)`` pairs in schedule order."""
        for onset in self._onsets:
            for step in self._steps[onset]:
                yield onset, step

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form suitable for ``yaml.dump``."""
        return {
            "steps": [
                {"onset": onset, **step.to_dict()} for onset, step in self.steps()
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Schedule":
        schedule = cls()
        for entry in data.get("steps", []):
            schedule.add(
                entry["onset"],
                ActuatorStep(
                    line=int(entry["line"]),
                    column=int(entry["column"]),
                    intensity=float(entry["intensity"]),
                    duration=float(entry["duration"]),
                ),
            )
        return schedule

    def format(self) -> str:
        """Human-readable listing, one activation per line."""
        lines = []
        for onset, step in self.steps():
            lines.append(f"t={onset:8.2f} ms  {step}")
        return "\n".join(lines)

    def to_tensor(
        self,
        grid: ActuatorGrid,
        dt: float = 1.0,
        device: torch.device | str = "cpu",
    ) -> torch.Tensor:
        """Rasterise the schedule into drive intensities per time frame.

        Frame ``k`` covers ``[k * dt, (k + 1) * dt)``. An actuator is driven in
        every frame its activation overlaps; overlapping activations of the
        same actuator keep the larger intensity.

        Args:
            grid: Grid the schedule was computed for.
            dt: Frame length in ms.
            device: Torch device for the returned tensor.

        Returns:
            Tensor ``[n_frames, lines, columns]`` with values in [0, 1].
        """
        if not dt > 0:
            raise ValueError(f"dt must be positive, got {dt}")
        n_frames = max(1, math.ceil(self.end_time / dt))
        frames = torch.zeros(n_frames, grid.lines, grid.columns, device=device)

        for onset, step in self.steps():
            if not (0 <= step.line < grid.lines and 0 <= step.column < grid.columns):
                raise IndexError(
                    f"Step at ({step.line}, {step.column}) outside "
                    f"{grid.lines}x{grid.columns} grid"
                )
            first = int(math.floor(onset / dt))
            last = min(n_frames, int(math.ceil((onset + step.duration) / dt)))
            if last <= first:
                continue
            window = frames[first:last, step.line, step.column]
            frames[first:last, step.line, step.column] = window.clamp(min=step.intensity)
        return frames
