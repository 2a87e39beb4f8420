"""CLI main module with subcommands for inspect, transform, and relative.

Usage:
    python -m homtran.cli inspect --config frames.yaml
    python -m homtran.cli transform --config frames.yaml --frame camera --point 1 0 0
    python -m homtran.cli relative --config frames.yaml --frame camera --to base
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

from ..core.config import load_config
from ..core.errors import ConfigError, HomtranError
from ..core.frames import from_world, relative_to, to_world
from ..core.logging import get_logger, setup_logging
from ..core.transform import Transform

logger = get_logger(__name__)


def _format_matrix(m: np.ndarray) -> str:
    return np.array2string(m, precision=6, suppress_small=True, floatmode="fixed")


def _load_frames(path: Path) -> dict[str, Transform]:
    return load_config(path).build()


def _lookup(frames: dict[str, Transform], name: str) -> Transform:
    if name not in frames:
        raise ConfigError(f"Unknown frame '{name}' (known: {', '.join(frames) or 'none'})")
    return frames[name]


def cmd_inspect(args: argparse.Namespace) -> int:
    """Print the global 4x4 matrix of every frame."""
    frames = _load_frames(args.config)
    logger.info("Inspecting frames", {"config": str(args.config), "frames": len(frames)})

    if args.json:
        print(json.dumps({name: tf.get_matrix().tolist() for name, tf in frames.items()}, indent=2))
        return 0

    for name, tf in frames.items():
        print(f"{name}:")
        print(_format_matrix(tf.get_matrix()))
        print()
    return 0


def cmd_transform(args: argparse.Namespace) -> int:
    """Map a point between a frame and the global frame."""
    tf = _lookup(_load_frames(args.config), args.frame)
    if args.inverse:
        result = from_world(args.point, tf)
    else:
        result = to_world(args.point, tf)
    logger.debug(
        "Transformed point",
        {"frame": args.frame, "inverse": args.inverse, "point": args.point},
    )
    print(" ".join(f"{value:.9g}" for value in result))
    return 0


def cmd_relative(args: argparse.Namespace) -> int:
    """Print the pose of one frame relative to another."""
    frames = _load_frames(args.config)
    pose = relative_to(_lookup(frames, args.frame), _lookup(frames, args.to))
    print(_format_matrix(pose.get_matrix()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="homtran.cli",
        description="Inspect frame trees built from homogeneous transformations",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional JSON lines log file",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # Inspect subcommand
    parser_inspect = subparsers.add_parser(
        "inspect",
        help="Print the global 4x4 matrix of every frame",
    )
    parser_inspect.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON frame config",
    )
    parser_inspect.add_argument(
        "--json",
        action="store_true",
        help="Emit matrices as JSON",
    )
    parser_inspect.set_defaults(func=cmd_inspect)

    # Transform subcommand
    parser_transform = subparsers.add_parser(
        "transform",
        help="Map a point from a frame to the global frame",
    )
    parser_transform.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON frame config",
    )
    parser_transform.add_argument(
        "--frame",
        "-f",
        required=True,
        help="Frame the point is expressed in",
    )
    parser_transform.add_argument(
        "--point",
        "-p",
        type=float,
        nargs=3,
        required=True,
        metavar=("X", "Y", "Z"),
        help="Point coordinates",
    )
    parser_transform.add_argument(
        "--inverse",
        action="store_true",
        help="Map from the global frame into the frame instead",
    )
    parser_transform.set_defaults(func=cmd_transform)

    # Relative subcommand
    parser_relative = subparsers.add_parser(
        "relative",
        help="Print the pose of one frame relative to another",
    )
    parser_relative.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON frame config",
    )
    parser_relative.add_argument(
        "--frame",
        "-f",
        required=True,
        help="Frame whose pose is printed",
    )
    parser_relative.add_argument(
        "--to",
        "-t",
        required=True,
        help="Reference frame",
    )
    parser_relative.set_defaults(func=cmd_relative)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return int(args.func(args) or 0)
    except (HomtranError, FileNotFoundError) as e:
        logger.error("Command failed", {"command": args.command, "error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
