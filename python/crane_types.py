"""
Shared type definitions for the crane unloading problem.

A Grid is an immutable table of cells; a Path is a monotone walk over a
grid starting at the top-left corner, moving only south or east.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

DEFAULT_CRANE_PROBABILITY = 0.2
DEFAULT_BUILDING_PROBABILITY = 0.15


class CellState(Enum):
    """State of a single grid cell. The value is the cell's text character."""

    OPEN = "."
    CRANE = "c"
    BUILDING = "X"  # Impassable


class StepDirection(Enum):
    """Direction of a single path step."""

    SOUTH = "south"  # Down (increasing row)
    EAST = "east"  # Right (increasing column)


# =============================================================================
# Errors
# =============================================================================


class CraneError(Exception):
    """Base class for crane unloading errors."""


class OutOfBoundsError(CraneError, IndexError):
    """Raised when a cell outside the grid is accessed."""


class InvalidStateError(CraneError, ValueError):
    """Raised when a path cannot start on the given grid."""


class GridTooLargeError(CraneError, ValueError):
    """Raised when a grid is too large for the exhaustive search."""


# =============================================================================
# Grid
# =============================================================================


@dataclass(frozen=True)
class Grid:
    """A 2D grid of cell states, fixed at construction."""

    cells: tuple[tuple[CellState, ...], ...]

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise ValueError("Grid must have at least one row and one column")
        columns = len(self.cells[0])
        mismatched = [i for i, row in enumerate(self.cells) if len(row) != columns]
        if mismatched:
            raise ValueError(
                f"All rows must have {columns} cells; mismatched rows: {mismatched}"
            )

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[CellState]]) -> Grid:
        return cls(tuple(tuple(row) for row in rows))

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def columns(self) -> int:
        return len(self.cells[0])

    def get(self, row: int, column: int) -> CellState:
        """Return the state at (row, column), or raise OutOfBoundsError."""
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise OutOfBoundsError(
                f"Cell ({row}, {column}) is outside a {self.rows}x{self.columns} grid"
            )
        return self.cells[row][column]

    def is_building(self, row: int, column: int) -> bool:
        return self.get(row, column) is CellState.BUILDING

    def count(self, state: CellState) -> int:
        """Count cells in the given state."""
        return sum(row.count(state) for row in self.cells)


def random_grid(
    rows: int,
    columns: int,
    *,
    crane_probability: float = DEFAULT_CRANE_PROBABILITY,
    building_probability: float = DEFAULT_BUILDING_PROBABILITY,
    seed: int | None = None,
) -> Grid:
    """
    Generate a random grid.

    Each cell is independently a crane with probability crane_probability,
    a building with probability building_probability, and open otherwise.
    The origin is never a building, so every generated grid is solvable.

    Args:
        rows: Number of rows (at least 1)
        columns: Number of columns (at least 1)
        crane_probability: Chance that a cell holds a crane
        building_probability: Chance that a cell holds a building
        seed: Seed for reproducible grids

    Returns:
        A new Grid
    """
    if rows < 1 or columns < 1:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{columns}")
    for name, p in (("crane", crane_probability), ("building", building_probability)):
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"{name} probability must be in [0, 1], got {p}")
    if crane_probability + building_probability > 1.0:
        raise ValueError(
            f"crane and building probabilities sum to "
            f"{crane_probability + building_probability}, which exceeds 1"
        )

    rng = random.Random(seed)
    cells: list[list[CellState]] = []
    for r in range(rows):
        row: list[CellState] = []
        for c in range(columns):
            roll = rng.random()
            if roll < crane_probability:
                row.append(CellState.CRANE)
            elif roll < crane_probability + building_probability and (r, c) != (0, 0):
                row.append(CellState.BUILDING)
            else:
                row.append(CellState.OPEN)
        cells.append(row)

    grid = Grid.from_rows(cells)
    logger.debug(
        "random_grid: %dx%d seed=%s cranes=%d buildings=%d",
        rows,
        columns,
        seed,
        grid.count(CellState.CRANE),
        grid.count(CellState.BUILDING),
    )
    return grid


# =============================================================================
# Path
# =============================================================================


class Path:
    """
    A monotone walk over a grid, starting at (0, 0).

    The grid is shared and never modified. Steps must be checked with
    is_step_valid() before add_step() is called.
    """

    def __init__(self, grid: Grid) -> None:
        if grid.is_building(0, 0):
            raise InvalidStateError("Path cannot start on a building at (0, 0)")
        self._grid = grid
        self._row = 0
        self._column = 0
        self._steps: list[StepDirection] = []
        self._cranes = 1 if grid.get(0, 0) is CellState.CRANE else 0

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def final_row(self) -> int:
        return self._row

    @property
    def final_column(self) -> int:
        return self._column

    @property
    def steps(self) -> tuple[StepDirection, ...]:
        return tuple(self._steps)

    def total_cranes(self) -> int:
        return self._cranes

    def _destination(self, direction: StepDirection) -> tuple[int, int]:
        if direction is StepDirection.SOUTH:
            return (self._row + 1, self._column)
        return (self._row, self._column + 1)

    def is_step_valid(self, direction: StepDirection) -> bool:
        """True if the step stays inside the grid and does not enter a building."""
        row, column = self._destination(direction)
        return (
            row < self._grid.rows
            and column < self._grid.columns
            and not self._grid.is_building(row, column)
        )

    def add_step(self, direction: StepDirection) -> None:
        assert self.is_step_valid(direction), f"invalid step {direction.value} from ({self._row}, {self._column})"
        self._row, self._column = self._destination(direction)
        self._steps.append(direction)
        if self._grid.get(self._row, self._column) is CellState.CRANE:
            self._cranes += 1

    def positions(self) -> Iterator[tuple[int, int]]:
        """Yield every visited (row, column), origin first."""
        row, column = 0, 0
        yield (row, column)
        for step in self._steps:
            if step is StepDirection.SOUTH:
                row += 1
            else:
                column += 1
            yield (row, column)

    def copy(self) -> Path:
        clone = Path.__new__(Path)
        clone._grid = self._grid
        clone._row = self._row
        clone._column = self._column
        clone._steps = list(self._steps)
        clone._cranes = self._cranes
        return clone

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> Path:
        # The grid is immutable and shared between copies
        return self.copy()

    def __len__(self) -> int:
        return len(self._steps)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._grid == other._grid and self._steps == other._steps

    def __repr__(self) -> str:
        moves = ", ".join(step.value for step in self._steps)
        return (
            f"Path(end=({self._row}, {self._column}), "
            f"cranes={self._cranes}, steps=[{moves}])"
        )
