"""Command-line interface for Tactile Brush.

Example:
    $ tactilebrush compute strokes.yml --output schedules.yml
    $ tactilebrush validate strokes.yml
    $ tactilebrush min-duration --lines 3 --columns 4 --inter-dist 2 0 0 6 4
"""

from __future__ import annotations

import argparse
import logging
import math
import re
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from tactilebrush.config.schema import TactileBrushConfig
from tactilebrush.config.yaml_utils import dump_yaml
from tactilebrush.core.brush import TactileBrush
from tactilebrush.core.phantom import map_to_actuators
from tactilebrush.errors import TactileBrushError
from tactilebrush.logging_config import setup_logging

logger = logging.getLogger(__name__)

CONFIG_ERRORS = (FileNotFoundError, ValueError, yaml.YAMLError)


def load_config(config_path: str) -> TactileBrushConfig:
    """Load and parse a YAML stroke configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is empty or structurally invalid.
        yaml.YAMLError: If YAML parsing fails.
    """
    logger.info("Loading configuration from %s", config_path)
    return TactileBrushConfig.from_file(config_path)


def plot_filename(index: int, name: str) -> str:
    """File name for a stroke plot, safe to join under the plot directory."""
    safe = re.sub(r"[^A-Za-z0-9_.-]+", "_", str(name)).strip("._") or "stroke"
    return f"{index:02d}_{safe}.png"


def cmd_compute(args: argparse.Namespace) -> int:
    """Compute the schedule of every configured stroke.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        config = load_config(args.config)
        brush = TactileBrush.from_grid(config.build_grid())
        strokes = config.build_strokes(brush.grid)
    except CONFIG_ERRORS as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if not strokes:
        print(f"No strokes defined in {args.config}", file=sys.stderr)
        return 1

    results = []
    for index, (stroke_config, stroke) in enumerate(zip(config.strokes, strokes)):
        try:
            points = brush.virtual_points(stroke)
            schedule = map_to_actuators(points, brush.grid, stroke.intensity)
        except TactileBrushError as e:
            print(f"Error computing stroke '{stroke_config.name}': {e}", file=sys.stderr)
            return 1

        print(f"\nStroke '{stroke_config.name}' ({schedule.num_steps} activations)")
        print("=" * 60)
        print(schedule.format())
        results.append({"name": stroke_config.name, **schedule.to_dict()})

        if args.plot_dir:
            from tactilebrush.core.visualization import plot_schedule

            plot_dir = Path(args.plot_dir)
            plot_dir.mkdir(parents=True, exist_ok=True)
            fig = plot_schedule(schedule, brush.grid, points, title=stroke_config.name)
            plot_path = plot_dir / plot_filename(index, stroke_config.name)
            fig.savefig(plot_path)
            logger.info("Saved plot to %s", plot_path)

    if args.output:
        output_path = Path(args.output)
        output = {"grid": brush.grid.to_dict(), "schedules": results}
        output_path.write_text(dump_yaml(output), encoding="utf-8")
        logger.info("Saved %d schedules to %s", len(results), output_path)

    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Check a configuration and report each stroke's minimum duration.

    Returns:
        Exit code (0 for valid, 1 for invalid).
    """
    try:
        config = load_config(args.config)
        brush = TactileBrush.from_grid(config.build_grid())
        strokes = config.build_strokes(brush.grid)
    except CONFIG_ERRORS as e:
        print(f"Configuration invalid: {e}", file=sys.stderr)
        return 1

    print(f"Grid: {brush.grid.lines} lines x {brush.grid.columns} columns, "
          f"{brush.grid.inter_dist} cm spacing")

    failures = 0
    for stroke_config, stroke in zip(config.strokes, strokes):
        try:
            minimum = brush.minimum_duration(stroke.start, stroke.end)
            brush.compute_stroke(stroke)
        except TactileBrushError as e:
            failures += 1
            print(f"  ✗ {stroke_config.name}: {e}", file=sys.stderr)
            continue
        print(f"  ✓ {stroke_config.name}: {stroke.duration:g} ms "
              f"(minimum {minimum:.1f} ms)")

    if failures:
        print(f"{failures} of {len(strokes)} strokes invalid", file=sys.stderr)
        return 1
    print("Configuration is valid")
    return 0


def cmd_min_duration(args: argparse.Namespace) -> int:
    """Print the minimum duration of a single stroke.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        brush = TactileBrush(args.lines, args.columns, args.inter_dist)
        minimum = brush.minimum_duration(
            (args.start_x, args.start_y), (args.end_x, args.end_y)
        )
    except (TactileBrushError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if math.isinf(minimum):
        print("No duration yields a valid schedule for this stroke")
        return 1
    print(f"{minimum:.3f}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="tactilebrush",
        description="Tactile Brush: haptic strokes to actuator schedules",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write log records to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    compute_parser = subparsers.add_parser(
        "compute",
        help="Compute actuator schedules for the strokes of a YAML config",
    )
    compute_parser.add_argument("config", help="Path to YAML configuration file")
    compute_parser.add_argument("--output", help="Write schedules to this YAML file")
    compute_parser.add_argument(
        "--plot-dir",
        help="Save one PNG timeline per stroke into this directory",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a YAML config and report minimum stroke durations",
    )
    validate_parser.add_argument("config", help="Path to YAML configuration file")

    min_parser = subparsers.add_parser(
        "min-duration",
        help="Minimum valid duration (ms) of a stroke",
    )
    min_parser.add_argument("--lines", type=int, required=True, help="Actuator rows")
    min_parser.add_argument("--columns", type=int, required=True, help="Actuator columns")
    min_parser.add_argument(
        "--inter-dist", type=float, required=True, help="Actuator spacing in cm"
    )
    min_parser.add_argument("start_x", type=float)
    min_parser.add_argument("start_y", type=float)
    min_parser.add_argument("end_x", type=float)
    min_parser.add_argument("end_y", type=float)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    commands = {
        "compute": cmd_compute,
        "validate": cmd_validate,
        "min-duration": cmd_min_duration,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
