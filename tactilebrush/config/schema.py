"""Configuration schema for stroke computation.

A config file describes one actuator grid and any number of strokes to
compute on it:

    grid:
      lines: 3
      columns: 4
      inter_dist: 2.0      # cm
    strokes:
      - name: swipe
        start: [0.0, 2.0]  # cm
        end: [6.0, 2.0]
        duration: 400      # ms
        intensity: 0.8
      - name: diagonal
        units: grid        # start/end given in actuator spacings
        start: [0, 0]
        end: [2, 2]
        duration: 500

Example:
    >>> from tactilebrush.config.schema import TactileBrushConfig
    >>> config = TactileBrushConfig.from_yaml(yaml_text)
    >>> strokes = config.build_strokes()
"""

from __future__ import annotations

import warnings
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

from tactilebrush.core.grid import ActuatorGrid
from tactilebrush.core.stroke import Stroke

from .yaml_utils import dump_yaml, load_yaml, load_yaml_file

STROKE_UNITS = ("cm", "grid")


def _known_kwargs(cls: type, data: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Keep the keys ``cls`` declares, warning about the rest."""
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - names)
    if unknown:
        warnings.warn(
            f"Ignoring unknown {section} config keys: {unknown}",
            UserWarning,
            stacklevel=3,
        )
    return {k: v for k, v in data.items() if k in names}


@dataclass
class GridConfig:
    """Configuration of the physical actuator grid.

    Attributes:
        lines: Number of actuator rows.
        columns: Number of actuator columns.
        inter_dist: Spacing between adjacent actuators in cm.
    """

    lines: int = 3
    columns: int = 3
    inter_dist: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GridConfig:
        return cls(**_known_kwargs(cls, data, "grid"))

    def build(self) -> ActuatorGrid:
        return ActuatorGrid(lines=self.lines, columns=self.columns, inter_dist=self.inter_dist)


@dataclass
class StrokeConfig:
    """Configuration of a single stroke.

    Attributes:
        name: Identifier used in reports.
        start: ``[x, y]`` start position.
        end: ``[x, y]`` end position.
        duration: Stroke duration in ms.
        intensity: Global intensity in [0, 1].
        units: ``cm`` (default) or ``grid`` for positions counted in
            actuator spacings.
    """

    name: str = "stroke"
    start: List[float] = field(default_factory=lambda: [0.0, 0.0])
    end: List[float] = field(default_factory=lambda: [1.0, 0.0])
    duration: float = 500.0  # ms
    intensity: float = 1.0
    units: str = "cm"

    def __post_init__(self) -> None:
        if self.units not in STROKE_UNITS:
            raise ValueError(f"Stroke '{self.name}': units must be one of {STROKE_UNITS}, got '{self.units}'")
        for label in ("start", "end"):
            value = getattr(self, label)
            if not isinstance(value, (list, tuple)) or len(value) != 2:
                raise ValueError(f"Stroke '{self.name}': {label} must be an [x, y] pair, got {value!r}")
            setattr(self, label, [float(value[0]), float(value[1])])

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StrokeConfig:
        return cls(**_known_kwargs(cls, data, "stroke"))

    def build(self, grid: ActuatorGrid) -> Stroke:
        """Create the :class:`Stroke`, converting grid units to cm if needed."""
        if self.units == "grid":
            return Stroke.from_grid_units(
                self.start, self.end, self.duration, self.intensity, grid.inter_dist
            )
        return Stroke(self.start, self.end, self.duration, self.intensity)


@dataclass
class TactileBrushConfig:
    """Top-level configuration: one grid, a list of strokes.

    Attributes:
        grid: Actuator grid configuration.
        strokes: Strokes to compute on the grid.
        metadata: Free-form metadata carried through round trips.
    """

    grid: GridConfig = field(default_factory=GridConfig)
    strokes: List[StrokeConfig] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata,
            "grid": self.grid.to_dict(),
            "strokes": [s.to_dict() for s in self.strokes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TactileBrushConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
        _known_kwargs(cls, data, "top-level")
        grid_data = data.get("grid", {})
        if not isinstance(grid_data, dict):
            raise ValueError("'grid' must be a mapping")
        stroke_data = data.get("strokes") or []
        if not isinstance(stroke_data, list):
            raise ValueError("'strokes' must be a list")
        for i, entry in enumerate(stroke_data):
            if not isinstance(entry, dict):
                raise ValueError(f"Stroke {i} must be a mapping")
        return cls(
            grid=GridConfig.from_dict(grid_data),
            strokes=[StrokeConfig.from_dict(s) for s in stroke_data],
            metadata=dict(data.get("metadata") or {}),
        )

    def to_yaml(self) -> str:
        return dump_yaml(self.to_dict())

    @classmethod
    def from_yaml(cls, yaml_str: str) -> TactileBrushConfig:
        return cls.from_dict(load_yaml(yaml_str))

    @classmethod
    def from_file(cls, path: str) -> TactileBrushConfig:
        data = load_yaml_file(path)
        if not data:
            raise ValueError(f"Empty or invalid config file: {path}")
        return cls.from_dict(data)

    def build_grid(self) -> ActuatorGrid:
        return self.grid.build()

    def build_strokes(self, grid: Optional[ActuatorGrid] = None) -> List[Stroke]:
        grid = grid or self.build_grid()
        return [s.build(grid) for s in self.strokes]
