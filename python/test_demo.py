"""Tests for the command-line driver."""

import pytest

from crane_types import random_grid
from demo import EXHAUSTIVE_STEP_LIMIT, LAYOUTS, exhaustive_allowed, main
from grid_parser import parse_grid


class TestMain:
    """Tests for demo.main()."""

    @pytest.mark.parametrize("layout", sorted(LAYOUTS))
    def test_layouts(self, layout: str, capsys) -> None:
        assert main(["--layout", layout, "--no-color"]) == 0

        out = capsys.readouterr().out
        assert "exhaustive:" in out
        assert "dyn_prog:" in out
        assert "total cranes:" in out

    def test_single_algorithm(self, capsys) -> None:
        assert main(["--layout", "corridor", "--algorithm", "dyn_prog", "--no-color"]) == 0

        out = capsys.readouterr().out
        assert "exhaustive:" not in out
        assert "****C" in out
        assert "total cranes: 1" in out

    def test_grid_file(self, tmp_path, capsys) -> None:
        grid_file = tmp_path / "grid.txt"
        grid_file.write_text("c.\n.c\n", encoding="utf-8")

        assert main(["--file", str(grid_file), "--no-color"]) == 0
        assert "total cranes: 2" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys) -> None:
        assert main(["--file", str(tmp_path / "missing.txt")]) == 2
        assert "error:" in capsys.readouterr().err

    def test_bad_grid_file(self, tmp_path, capsys) -> None:
        grid_file = tmp_path / "grid.txt"
        grid_file.write_text("..\n.\n", encoding="utf-8")

        assert main(["--file", str(grid_file)]) == 2
        assert "Inconsistent row lengths" in capsys.readouterr().err

    def test_building_at_origin(self, tmp_path, capsys) -> None:
        grid_file = tmp_path / "grid.txt"
        grid_file.write_text("X.\n..\n", encoding="utf-8")

        assert main(["--file", str(grid_file), "--no-color"]) == 2
        captured = capsys.readouterr()
        assert "top-left cell is a building" in captured.err
        assert "Grid:" not in captured.out

    def test_only_solver_skipped(self, capsys) -> None:
        argv = ["--rows", "20", "--columns", "20", "--seed", "1", "--algorithm", "exhaustive"]
        assert main(argv) == 2
        captured = capsys.readouterr()
        assert "no solver can run" in captured.err
        assert "total cranes" not in captured.out

    def test_random_grid_skips_exhaustive(self, capsys) -> None:
        assert main(["--rows", "20", "--columns", "20", "--seed", "1", "--no-color"]) == 0

        out = capsys.readouterr().out
        assert "exhaustive:" not in out
        assert "dyn_prog:" in out


class TestExhaustiveAllowed:
    """Tests for the exhaustive solver size guard."""

    def test_small_grid(self) -> None:
        assert exhaustive_allowed(parse_grid("..|.."), force=False)

    def test_above_practical_limit(self) -> None:
        grid = random_grid(EXHAUSTIVE_STEP_LIMIT, 3, seed=0)
        assert not exhaustive_allowed(grid, force=False)
        assert exhaustive_allowed(grid, force=True)

    def test_above_hard_limit(self) -> None:
        grid = random_grid(40, 40, seed=0)
        assert not exhaustive_allowed(grid, force=True)
