"""Physical actuator grid description."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import torch

from .geometry import EPSILON, Point


def create_actuator_grid_torch(
    lines: int,
    columns: int,
    inter_dist: float,
    device: torch.device | str = "cpu",
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor, torch.Tensor]:
    """Create the actuator lattice as PyTorch tensors.

    The first actuator sits at the origin; lines run along y and columns
    along x.

    Args:
        lines: Number of actuator rows.
        columns: Number of actuator columns.
        inter_dist: Distance between neighbouring actuators in cm.
        device: Torch device identifier for the returned tensors.

    Returns:
        Tuple ``xx``, ``yy`` meshgrids of shape ``[lines, columns]`` plus the
        ``x`` (per column) and ``y`` (per line) 1D vectors.
    """
    x = torch.arange(columns, dtype=torch.float64, device=device) * inter_dist
    y = torch.arange(lines, dtype=torch.float64, device=device) * inter_dist
    yy, xx = torch.meshgrid(y, x, indexing="ij")
    return xx, yy, x, y


@dataclass(frozen=True)
class ActuatorGrid:
    """Rectangular lattice of vibrotactile actuators.

    Attributes:
        lines: Number of actuator rows (``>= 2``).
        columns: Number of actuator columns (``>= 2``).
        inter_dist: Spacing between adjacent actuators in cm (``> 0``).
    """

    lines: int
    columns: int
    inter_dist: float

    def __post_init__(self) -> None:
        for name in ("lines", "columns"):
            value = getattr(self, name)
            if isinstance(value, bool) or int(value) != value:
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 2:
                raise ValueError(f"{name} must be at least 2, got {value}")
            object.__setattr__(self, name, int(value))
        if not self.inter_dist > 0:
            raise ValueError(f"inter_dist must be positive, got {self.inter_dist}")
        object.__setattr__(self, "inter_dist", float(self.inter_dist))

    @property
    def shape(self) -> Tuple[int, int]:
        """``(lines, columns)``."""
        return self.lines, self.columns

    @property
    def num_actuators(self) -> int:
        return self.lines * self.columns

    @property
    def min_coord(self) -> Point:
        return Point(0.0, 0.0)

    @property
    def max_coord(self) -> Point:
        return Point(
            (self.columns - 1) * self.inter_dist,
            (self.lines - 1) * self.inter_dist,
        )

    def contains(self, point: Sequence[float]) -> bool:
        """True if ``point`` lies within ``[min_coord, max_coord]``, up to EPSILON."""
        lo, hi = self.min_coord, self.max_coord
        return (
            lo.x - EPSILON <= point[0] <= hi.x + EPSILON
            and lo.y - EPSILON <= point[1] <= hi.y + EPSILON
        )

    def is_aligned(self, value: float) -> bool:
        """True if a coordinate sits on a grid line, within EPSILON."""
        return abs(value - round(value / self.inter_dist) * self.inter_dist) < EPSILON

    def is_on_grid_line(self, point: Sequence[float]) -> bool:
        """True if ``point`` lies on a row line, a column line, or both."""
        return self.is_aligned(point[0]) or self.is_aligned(point[1])

    def nearest_index(self, value: float) -> int:
        """Index of the grid line closest to a coordinate."""
        return int(round(value / self.inter_dist))

    def actuator_position(self, line: int, column: int) -> Point:
        """Position in cm of the physical actuator at ``(line, column)``.

        Raises:
            IndexError: If the indices fall outside the grid.
        """
        if not (0 <= line < self.lines and 0 <= column < self.columns):
            raise IndexError(
                f"Actuator ({line}, {column}) outside {self.lines}x{self.columns} grid"
            )
        return Point(column * self.inter_dist, line * self.inter_dist)

    def actuator_coordinates(self, device: torch.device | str = "cpu") -> torch.Tensor:
        """All actuator positions as a ``[lines * columns, 2]`` tensor, row-major."""
        xx, yy, _, _ = create_actuator_grid_torch(
            self.lines, self.columns, self.inter_dist, device
        )
        return torch.stack([xx.flatten(), yy.flatten()], dim=1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines": self.lines,
            "columns": self.columns,
            "inter_dist": self.inter_dist,
        }

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ActuatorGrid":
        """Create a grid from a config dict with ``lines``, ``columns``, ``inter_dist``."""
        missing = [k for k in ("lines", "columns", "inter_dist") if k not in config]
        if missing:
            raise ValueError(f"Grid config missing required keys: {missing}")
        return cls(
            lines=config["lines"],
            columns=config["columns"],
            inter_dist=config["inter_dist"],
        )
