"""Configuration loading for stroke computation."""

from .schema import GridConfig, StrokeConfig, TactileBrushConfig
from .yaml_utils import dump_yaml, load_yaml, load_yaml_file

__all__ = [
    "GridConfig",
    "StrokeConfig",
    "TactileBrushConfig",
    "load_yaml",
    "load_yaml_file",
    "dump_yaml",
]
