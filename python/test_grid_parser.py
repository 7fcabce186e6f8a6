"""Tests for grid_parser module."""

import pytest

from crane_types import CellState
from grid_parser import format_grid, load_grid, parse_grid


class TestParseGrid:
    """Tests for the text grid parser."""

    def test_simple_grid(self) -> None:
        """Parse a grid with every kind of cell."""
        grid = parse_grid(".c|X.")

        assert grid.rows == 2
        assert grid.columns == 2
        assert grid.get(0, 0) is CellState.OPEN
        assert grid.get(0, 1) is CellState.CRANE
        assert grid.get(1, 0) is CellState.BUILDING
        assert grid.get(1, 1) is CellState.OPEN

    def test_case_insensitive(self) -> None:
        grid = parse_grid("cC|xX")
        assert grid.cells == (
            (CellState.CRANE, CellState.CRANE),
            (CellState.BUILDING, CellState.BUILDING),
        )

    def test_multiline(self) -> None:
        """Rows may be given on separate lines, with indentation and blank lines."""
        definition = """
            ..c

            .X.
            c..
        """
        grid = parse_grid(definition)
        assert grid.rows == 3
        assert grid.columns == 3
        assert grid.get(2, 0) is CellState.CRANE

    def test_comments_ignored(self) -> None:
        grid = parse_grid("# harbour\n.c\n# more\nX.")
        assert grid.rows == 2

    def test_single_row(self) -> None:
        grid = parse_grid("....c")
        assert grid.rows == 1
        assert grid.columns == 5

    def test_single_column(self) -> None:
        grid = parse_grid(".|c|X")
        assert grid.rows == 3
        assert grid.columns == 1

    def test_invalid_character(self) -> None:
        with pytest.raises(ValueError, match="Invalid character '7'"):
            parse_grid("..|.7")

    def test_invalid_character_details(self) -> None:
        with pytest.raises(ValueError) as exc_info:
            parse_grid("...|.c.|..?")

        error_msg = str(exc_info.value)
        assert "Row 2" in error_msg
        assert "column 2" in error_msg
        assert "Valid characters" in error_msg

    def test_inconsistent_row_lengths(self) -> None:
        with pytest.raises(ValueError, match="same number of cells"):
            parse_grid("...|..|...")

    def test_inconsistent_row_length_details(self) -> None:
        with pytest.raises(ValueError) as exc_info:
            parse_grid("...|..|....")

        error_msg = str(exc_info.value)
        assert "Expected: 3 columns" in error_msg
        assert "Row 1: 2 columns" in error_msg
        assert "Row 2: 4 columns" in error_msg

    @pytest.mark.parametrize("definition", ["", "   \n  ", "# only a comment", "|"])
    def test_empty_definition(self, definition: str) -> None:
        with pytest.raises(ValueError, match="Empty grid definition"):
            parse_grid(definition)


class TestFormatGrid:
    """Tests for formatting grids back to text."""

    def test_format(self) -> None:
        assert format_grid(parse_grid("c.X|...")) == "c.X\n..."

    def test_format_normalises_case(self) -> None:
        assert format_grid(parse_grid("Cx")) == "cX"


class TestLoadGrid:
    """Tests for loading grids from files."""

    def test_load(self, tmp_path) -> None:
        grid_file = tmp_path / "harbour.txt"
        grid_file.write_text("# sample\n.c.\nX.c\n", encoding="utf-8")

        grid = load_grid(grid_file)
        assert grid == parse_grid(".c.|X.c")

    def test_load_accepts_str(self, tmp_path) -> None:
        grid_file = tmp_path / "harbour.txt"
        grid_file.write_text("c", encoding="utf-8")
        assert load_grid(str(grid_file)).get(0, 0) is CellState.CRANE

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_grid(tmp_path / "missing.txt")
