#!/usr/bin/env python3
"""
Command-line driver for the crane unloading solvers.

Loads or generates a grid, runs one or both solvers, and prints each
solution with its timing.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from ascii_render import describe_path, render_grid
from crane_types import (
    DEFAULT_BUILDING_PROBABILITY,
    DEFAULT_CRANE_PROBABILITY,
    Grid,
    random_grid,
)
from cranes import MAX_EXHAUSTIVE_STEPS, SOLVERS, get_solver
from grid_parser import load_grid, parse_grid

logger = logging.getLogger(__name__)

# Above this many steps the exhaustive search takes minutes
EXHAUSTIVE_STEP_LIMIT = 24

LAYOUTS = dict(
    small=".c.|..c|c..",
    corridor="....c",
    walled="c.c.|XXXX|cccc",
    boxed_in=".X|X.",
    sample="""
        .c..X...
        ..X..c..
        c...X..c
        .X.c....
        ...X..c.
        c.....X.
    """,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve the crane unloading problem")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--file", help="Read the grid from a file")
    source.add_argument("--layout", choices=sorted(LAYOUTS), help="Use a built-in grid")
    parser.add_argument("--rows", type=int, default=6, help="Rows of a random grid")
    parser.add_argument("--columns", type=int, default=8, help="Columns of a random grid")
    parser.add_argument("--seed", type=int, default=None, help="Random grid seed")
    parser.add_argument(
        "--crane-probability", type=float, default=DEFAULT_CRANE_PROBABILITY,
        help="Chance that a random cell holds a crane",
    )
    parser.add_argument(
        "--building-probability", type=float, default=DEFAULT_BUILDING_PROBABILITY,
        help="Chance that a random cell holds a building",
    )
    parser.add_argument(
        "--algorithm", choices=[*sorted(SOLVERS), "both"], default="both",
        help="Solver to run",
    )
    parser.add_argument(
        "--force", action="store_true",
        help=f"Run the exhaustive solver beyond {EXHAUSTIVE_STEP_LIMIT} steps",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_setting(args: argparse.Namespace) -> Grid:
    """Build the grid selected on the command line."""
    if args.file:
        return load_grid(args.file)
    if args.layout:
        return parse_grid(LAYOUTS[args.layout])
    return random_grid(
        args.rows,
        args.columns,
        crane_probability=args.crane_probability,
        building_probability=args.building_probability,
        seed=args.seed,
    )


def exhaustive_allowed(grid: Grid, force: bool) -> bool:
    max_steps = grid.rows + grid.columns - 2
    if max_steps > MAX_EXHAUSTIVE_STEPS:
        logger.warning(
            "Skipping exhaustive solver: %d steps exceeds the hard limit of %d",
            max_steps,
            MAX_EXHAUSTIVE_STEPS,
        )
        return False
    if max_steps > EXHAUSTIVE_STEP_LIMIT and not force:
        logger.warning(
            "Skipping exhaustive solver: %d steps exceeds %d (use --force)",
            max_steps,
            EXHAUSTIVE_STEP_LIMIT,
        )
        return False
    return True


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        grid = load_setting(args)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if grid.is_building(0, 0):
        print("error: the top-left cell is a building, no path can start there", file=sys.stderr)
        return 2

    color = not args.no_color
    names = sorted(SOLVERS) if args.algorithm == "both" else [args.algorithm]
    if "exhaustive" in names and not exhaustive_allowed(grid, args.force):
        names.remove("exhaustive")
    if not names:
        print("error: no solver can run on this grid (try --force or --algorithm dyn_prog)", file=sys.stderr)
        return 2

    print("=" * 40)
    print(f"Grid: {grid.rows}x{grid.columns}")
    print("=" * 40)
    print(render_grid(grid, color=color))
    print()

    results: dict[str, int] = {}
    for name in names:
        solver = get_solver(name)
        start = time.perf_counter()
        path = solver(grid)
        elapsed = time.perf_counter() - start
        results[name] = path.total_cranes()

        print("=" * 40)
        print(f"{name}: {elapsed:.6f} s")
        print("=" * 40)
        print(render_grid(grid, path, color=color))
        print()
        print(describe_path(path))
        print()

    if len(set(results.values())) > 1:
        print(f"MISMATCH: solvers disagree on crane counts {results}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
