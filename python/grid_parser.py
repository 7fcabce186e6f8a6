"""
Grid parsing utilities for crane unloading grids.

One character per cell:
  . open cell
  c crane (case-insensitive)
  X building (case-insensitive)

Rows are separated by newlines or |. Blank lines and lines starting with #
are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path as FilePath

from crane_types import CellState, Grid

logger = logging.getLogger(__name__)

__all__ = ["format_grid", "load_grid", "parse_grid"]

_CHARACTERS = {
    ".": CellState.OPEN,
    "c": CellState.CRANE,
    "C": CellState.CRANE,
    "x": CellState.BUILDING,
    "X": CellState.BUILDING,
}


def parse_grid(definition: str) -> Grid:
    """
    Parse a grid from its text form.

    Example:
        parse_grid("..c|.X.|c..")
        Creates a 3x3 grid with cranes at (0, 2) and (2, 0) and a building
        in the centre.

    Args:
        definition: Grid text, rows separated by newlines or |

    Returns:
        The parsed Grid

    Raises:
        ValueError: If the text is empty, holds an invalid character, or
            its rows differ in length
    """
    row_strings: list[str] = []
    for line in definition.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        row_strings.extend(part.strip() for part in line.split("|"))

    if not row_strings or not any(row_strings):
        raise ValueError("Empty grid definition")

    rows: list[tuple[CellState, ...]] = []
    for row_idx, row_str in enumerate(row_strings):
        cells: list[CellState] = []
        for col_idx, char in enumerate(row_str):
            state = _CHARACTERS.get(char)
            if state is None:
                raise ValueError(
                    f"Invalid character '{char}'\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: '.' (open), 'c' (crane), 'X' (building)"
                )
            cells.append(state)
        rows.append(tuple(cells))

    columns = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != columns]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {columns} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual in mismatched:
            error_msg += f"    Row {row_idx}: {actual} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    return Grid(tuple(rows))


def format_grid(grid: Grid) -> str:
    """Format a grid in the text form accepted by parse_grid()."""
    return "\n".join("".join(cell.value for cell in row) for row in grid.cells)


def load_grid(path: str | FilePath) -> Grid:
    """Read and parse a grid file."""
    path = FilePath(path)
    grid = parse_grid(path.read_text(encoding="utf-8"))
    logger.info("Loaded %dx%d grid from %s", grid.rows, grid.columns, path)
    return grid
