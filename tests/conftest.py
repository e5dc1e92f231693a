"""
Test configuration and fixtures for the tactile brush project.
"""
import os
import sys
from pathlib import Path

import pytest
import torch

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("OMP_NUM_THREADS", "1")
os.environ.setdefault("MKL_NUM_THREADS", "1")
os.environ.setdefault("MPLBACKEND", "Agg")

torch.set_num_threads(1)

from tactilebrush.core.brush import TactileBrush  # noqa: E402
from tactilebrush.core.grid import ActuatorGrid  # noqa: E402


@pytest.fixture
def grid_3x3():
    """3x3 grid with 1 cm spacing."""
    return ActuatorGrid(lines=3, columns=3, inter_dist=1.0)


@pytest.fixture
def brush_3x3():
    """Brush on a 3x3 grid with 1 cm spacing."""
    return TactileBrush(lines=3, columns=3, inter_dist=1.0)


@pytest.fixture
def brush_4x6():
    """Brush on a 4-line, 6-column grid with 2.5 cm spacing."""
    return TactileBrush(lines=4, columns=6, inter_dist=2.5)


@pytest.fixture
def stroke_config_dict():
    """Minimal valid stroke configuration."""
    return {
        "grid": {"lines": 3, "columns": 4, "inter_dist": 2.0},
        "strokes": [
            {
                "name": "swipe",
                "start": [0.0, 2.0],
                "end": [6.0, 2.0],
                "duration": 400,
                "intensity": 0.8,
            },
            {
                "name": "diagonal",
                "units": "grid",
                "start": [0, 0],
                "end": [2, 2],
                "duration": 600,
            },
        ],
    }
