"""Matplotlib figures for inspecting stroke schedules.

Figures are built on :class:`matplotlib.figure.Figure` directly so that no
GUI backend is required; save them with ``fig.savefig(path)``.
"""

from __future__ import annotations

from typing import Optional, Sequence

from matplotlib.figure import Figure

from .geometry import VirtualPoint
from .grid import ActuatorGrid
from .schedule import Schedule

ACTIVATION_COLOR = (0.2, 0.4, 0.8)


def plot_schedule(
    schedule: Schedule,
    grid: ActuatorGrid,
    virtual_points: Optional[Sequence[VirtualPoint]] = None,
    title: Optional[str] = None,
) -> Figure:
    """Timeline and grid view of a schedule.

    The left axes shows one row per actuator with a bar for each activation
    (length = duration, opacity = intensity). The right axes shows the
    physical grid, the actuators used by the schedule and, when given, the
    virtual points of the stroke.

    Args:
        schedule: Schedule to draw.
        grid: Grid the schedule was computed for.
        virtual_points: Optional virtual points of the stroke.
        title: Optional figure title.

    Returns:
        The matplotlib figure.
    """
    fig = Figure(figsize=(11, 4.5))
    ax_time, ax_grid = fig.subplots(1, 2, gridspec_kw={"width_ratios": [3, 2]})

    actuators = sorted({(step.line, step.column) for _, step in schedule.steps()})
    rows = {actuator: i for i, actuator in enumerate(actuators)}
    for onset, step in schedule.steps():
        ax_time.broken_barh(
            [(onset, step.duration)],
            (rows[(step.line, step.column)] - 0.4, 0.8),
            facecolors=[(*ACTIVATION_COLOR, max(0.05, step.intensity))],
            edgecolors=[ACTIVATION_COLOR],
        )
    ax_time.set_yticks(range(len(actuators)))
    ax_time.set_yticklabels([f"L{line} C{column}" for line, column in actuators])
    ax_time.set_xlabel("Time (ms)")
    ax_time.set_xlim(0.0, max(schedule.end_time, 1.0))
    ax_time.set_title("Activations")

    coords = grid.actuator_coordinates().numpy()
    ax_grid.scatter(coords[:, 0], coords[:, 1], s=60, facecolors="none", edgecolors="gray")
    if actuators:
        used = [grid.actuator_position(line, column) for line, column in actuators]
        ax_grid.scatter(
            [p.x for p in used], [p.y for p in used], s=60, color=ACTIVATION_COLOR
        )
    if virtual_points:
        xs = [p.position.x for p in virtual_points]
        ys = [p.position.y for p in virtual_points]
        ax_grid.plot(xs, ys, "-", color="black", linewidth=1)
        ax_grid.scatter(xs, ys, marker="x", color="red", zorder=3)
    margin = grid.inter_dist * 0.5
    ax_grid.set_xlim(-margin, grid.max_coord.x + margin)
    ax_grid.set_ylim(-margin, grid.max_coord.y + margin)
    ax_grid.set_aspect("equal")
    ax_grid.set_xlabel("x (cm)")
    ax_grid.set_ylabel("y (cm)")
    ax_grid.set_title("Grid")

    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig
