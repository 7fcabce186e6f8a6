"""
Algorithms that solve the crane unloading problem.

Two solvers compute the same optimum, the maximum number of crane cells a
south/east path from the top-left cell can visit:

- crane_unloading_exhaustive: tries every monotone path, exponential time.
- crane_unloading_dyn_prog: dynamic programming, O(rows * columns).
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable

from crane_types import (
    CellState,
    Grid,
    GridTooLargeError,
    Path,
    StepDirection,
)

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_EXHAUSTIVE_STEPS",
    "SOLVERS",
    "Solver",
    "crane_unloading_dyn_prog",
    "crane_unloading_exhaustive",
    "get_solver",
]

# 2**max_steps candidates of each length must fit in a 64-bit count
MAX_EXHAUSTIVE_STEPS = 63

Solver = Callable[[Grid], Path]


def _replay(grid: Grid, steps: tuple[StepDirection, ...]) -> Path | None:
    """Build a path from a step sequence, or None if any step is invalid."""
    candidate = Path(grid)
    for step in steps:
        if not candidate.is_step_valid(step):
            return None
        candidate.add_step(step)
    return candidate


def crane_unloading_exhaustive(grid: Grid) -> Path:
    """
    Solve the crane unloading problem by exhaustive search.

    Every sequence of south/east steps of every length from 0 to
    rows + columns - 2 is replayed from the origin; sequences that leave the
    grid or enter a building are discarded. The first path found with the
    highest crane count wins.

    Raises:
        GridTooLargeError: If rows + columns - 2 exceeds MAX_EXHAUSTIVE_STEPS
    """
    assert grid.rows > 0 and grid.columns > 0

    max_steps = grid.rows + grid.columns - 2
    if max_steps > MAX_EXHAUSTIVE_STEPS:
        raise GridTooLargeError(
            f"Exhaustive search needs rows + columns - 2 <= {MAX_EXHAUSTIVE_STEPS}, "
            f"got {max_steps} for a {grid.rows}x{grid.columns} grid"
        )

    best = Path(grid)
    tried = 0
    valid = 0

    for length in range(max_steps + 1):
        for steps in itertools.product((StepDirection.SOUTH, StepDirection.EAST), repeat=length):
            tried += 1
            candidate = _replay(grid, steps)
            if candidate is None:
                continue
            valid += 1
            if candidate.total_cranes() > best.total_cranes():
                best = candidate

    logger.info(
        "exhaustive: %dx%d grid, %d candidates (%d valid), best=%d cranes",
        grid.rows,
        grid.columns,
        tried,
        valid,
        best.total_cranes(),
    )
    return best


def crane_unloading_dyn_prog(grid: Grid) -> Path:
    """
    Solve the crane unloading problem by dynamic programming.

    A[r][c] holds the best path ending at (r, c), or None when no path can
    reach that cell. Each cell extends the better of its northern and
    western neighbours, preferring the northern one on ties. The result is
    the best entry in the table, first in row-major order on ties.
    """
    assert grid.rows > 0 and grid.columns > 0

    table: list[list[Path | None]] = [[None] * grid.columns for _ in range(grid.rows)]
    table[0][0] = Path(grid)

    for r in range(grid.rows):
        for c in range(grid.columns):
            if (r, c) == (0, 0):
                continue
            if grid.get(r, c) is CellState.BUILDING:
                continue  # Unreachable

            from_above: Path | None = None
            from_left: Path | None = None

            above = table[r - 1][c] if r > 0 else None
            if above is not None and not grid.is_building(r - 1, c):
                from_above = above.copy()
                from_above.add_step(StepDirection.SOUTH)

            left = table[r][c - 1] if c > 0 else None
            if left is not None and not grid.is_building(r, c - 1):
                from_left = left.copy()
                from_left.add_step(StepDirection.EAST)

            if from_above is not None and from_left is not None:
                if from_above.total_cranes() >= from_left.total_cranes():
                    table[r][c] = from_above
                else:
                    table[r][c] = from_left
            else:
                table[r][c] = from_above if from_above is not None else from_left

    best = table[0][0]
    assert best is not None
    reachable = 0
    for row in table:
        for cell in row:
            if cell is None:
                continue
            reachable += 1
            if cell.total_cranes() > best.total_cranes():
                best = cell

    logger.info(
        "dyn_prog: %dx%d grid, %d reachable cells, best=%d cranes",
        grid.rows,
        grid.columns,
        reachable,
        best.total_cranes(),
    )
    return best.copy()


SOLVERS: dict[str, Solver] = {
    "exhaustive": crane_unloading_exhaustive,
    "dyn_prog": crane_unloading_dyn_prog,
}


def get_solver(name: str) -> Solver:
    """Look up a solver by name."""
    try:
        return SOLVERS[name]
    except KeyError:
        raise KeyError(
            f"Unknown solver '{name}'; available: {', '.join(sorted(SOLVERS))}"
        ) from None
