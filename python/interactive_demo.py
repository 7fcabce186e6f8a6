"""
Interactive demo for the crane unloading solvers.
Display a solved grid and step through the path with keyboard commands.
"""

import logging

import readchar, sys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_grid
from crane_types import CellState, Grid, Path, random_grid
from cranes import SOLVERS, get_solver
from demo import EXHAUSTIVE_STEP_LIMIT, LAYOUTS
from grid_parser import parse_grid


class InteractiveDemo:
    """Step through a solver's path one move at a time."""

    def __init__(self, grid: Grid, algorithm: str = "dyn_prog", seed: int | None = None) -> None:
        self.grid = grid
        self.algorithm = algorithm
        self.seed = seed
        self.console = Console()
        self.status_message = "Ready"
        self.path: Path
        self.shown_steps = 0
        self.solve()

    def solve(self) -> None:
        """Re-run the current solver on the current grid."""
        if self.algorithm == "exhaustive" and self.grid.rows + self.grid.columns - 2 > EXHAUSTIVE_STEP_LIMIT:
            self.status_message = "✗ Grid too large for the exhaustive solver"
            self.algorithm = "dyn_prog"
        self.path = get_solver(self.algorithm)(self.grid)
        self.shown_steps = 0

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        grid_text = render_grid(self.grid, self.path, visible_steps=self.shown_steps)

        positions = list(self.path.positions())[: self.shown_steps + 1]
        row, column = positions[-1]
        cranes_so_far = sum(1 for pos in positions if self.grid.get(*pos) is CellState.CRANE)

        status = Text()
        status.append("Algorithm: ", style="bold")
        status.append(f"{self.algorithm}\n")
        status.append("Position: ", style="bold")
        status.append(f"({row}, {column})  step {self.shown_steps}/{len(self.path)}\n")
        status.append("Cranes: ", style="bold")
        status.append(f"{cranes_so_far} of {self.path.total_cranes()}\n\n")

        # Convert ANSI-colored grid text to Rich Text
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N / D - Next step\n")
        status.append("  P / A - Previous step\n")
        status.append("  S - Switch algorithm\n")
        status.append("  G - Generate a new random grid\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Crane Unloading", border_style="green", width=80)

    def next_step(self) -> None:
        if self.shown_steps < len(self.path):
            self.shown_steps += 1
            step = self.path.steps[self.shown_steps - 1]
            self.status_message = f"✓ Moved {step.value}"
        else:
            self.status_message = "End of path"

    def previous_step(self) -> None:
        if self.shown_steps > 0:
            self.shown_steps -= 1
            self.status_message = "Stepped back"
        else:
            self.status_message = "Already at the start"

    def switch_algorithm(self) -> None:
        names = sorted(SOLVERS)
        self.algorithm = names[(names.index(self.algorithm) + 1) % len(names)]
        self.status_message = f"Switched to {self.algorithm}"
        self.solve()

    def regenerate(self) -> None:
        self.seed = None if self.seed is None else self.seed + 1
        self.grid = random_grid(self.grid.rows, self.grid.columns, seed=self.seed)
        self.status_message = "Generated a new grid"
        self.solve()

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() in ('n', 'd'):
                        self.next_step()
                    elif key.lower() in ('p', 'a'):
                        self.previous_step()
                    elif key.lower() == 's':
                        self.switch_algorithm()
                    elif key.lower() == 'g':
                        self.regenerate()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'sublime':
        # Running from IDE - just print the solved grid
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
        grid = parse_grid(LAYOUTS['sample'])
        demo = InteractiveDemo(grid)
        print(render_grid(grid, demo.path))
    elif len(sys.argv) > 1 and sys.argv[1] in LAYOUTS:
        InteractiveDemo(parse_grid(LAYOUTS[sys.argv[1]])).run()
    else:
        InteractiveDemo(random_grid(8, 12, seed=0), seed=0).run()
