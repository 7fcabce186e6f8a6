"""
ASCII rendering for crane unloading grids and paths.
"""

from __future__ import annotations

from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from crane_types import CellState, Grid, Path

__all__ = ["PATH_CHAR", "PATH_CRANE_CHAR", "describe_path", "render_grid"]

PATH_CHAR = "*"
PATH_CRANE_CHAR = "C"


def _plain(s: str) -> str:
    return s


def _cell_color(state: CellState, on_path: bool, is_current: bool) -> Callable[[str], str]:
    if is_current:
        return chalk.greenBright
    if on_path:
        return chalk.yellowBright if state is CellState.CRANE else chalk.green
    match state:
        case CellState.BUILDING:
            return chalk.red
        case CellState.CRANE:
            return chalk.yellow
        case _:
            return _plain


def render_grid(
    grid: Grid,
    path: Path | None = None,
    color: bool = True,
    visible_steps: int | None = None,
) -> str:
    """
    Render a grid, optionally overlaid with a path.

    Cells on the path are drawn as '*' (open) or 'C' (crane); every other
    cell uses its text-format character.

    Args:
        grid: Grid to draw
        path: Optional path to overlay
        color: Colorize characters for a terminal
        visible_steps: Only overlay the first N steps of the path (default: all)

    Returns:
        One line of text per grid row
    """
    visited: list[tuple[int, int]] = []
    if path is not None:
        visited = list(path.positions())
        if visible_steps is not None:
            visited = visited[: max(visible_steps, 0) + 1]
    on_path = set(visited)
    current = visited[-1] if visited else None

    lines: list[str] = []
    for r, row in enumerate(grid.cells):
        chars: list[str] = []
        for c, state in enumerate(row):
            pos = (r, c)
            if pos in on_path:
                char = PATH_CRANE_CHAR if state is CellState.CRANE else PATH_CHAR
            else:
                char = state.value
            if color:
                char = _cell_color(state, pos in on_path, pos == current)(char)
            chars.append(char)
        lines.append("".join(chars))
    return "\n".join(lines)


def describe_path(path: Path) -> str:
    """
    List a path's steps, one per line, followed by its crane count.

    Example:
        start (0, 0)
        step 1: east to (0, 1)
        step 2: south to (1, 1)
        total cranes: 2
    """
    positions = list(path.positions())
    lines = [f"start {positions[0]}"]
    for i, (step, pos) in enumerate(zip(path.steps, positions[1:]), start=1):
        lines.append(f"step {i}: {step.value} to {pos}")
    lines.append(f"total cranes: {path.total_cranes()}")
    return "\n".join(lines)
