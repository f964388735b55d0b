"""Unit tests for the pipe-table parser."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from creditbanc.report.tables import _parse_pipe_row, parse_table, table_lines


class TestParsePipeRow:

    def test_basic_row(self):
        assert _parse_pipe_row("| Experian | 720 | 300-850 |") == ["Experian", "720", "300-850"]

    def test_cells_trimmed(self):
        assert _parse_pipe_row("|   Experian   |720|") == ["Experian", "720"]

    def test_empty_inner_cell_kept(self):
        assert _parse_pipe_row("| a |  | c |") == ["a", "", "c"]

    def test_empty_last_cell_kept(self):
        assert _parse_pipe_row("| a |  |") == ["a", ""]

    def test_missing_trailing_pipe_keeps_last_cell(self):
        assert _parse_pipe_row("| a | b") == ["a", "b"]

    def test_surrounding_whitespace(self):
        assert _parse_pipe_row("   | a | b |   ") == ["a", "b"]


class TestTableLines:

    def test_keeps_only_pipe_lines(self):
        section = "Scores below:\n| a |\n|---|\n| 1 |\nNote: estimates"
        assert table_lines(section) == ["| a |", "|---|", "| 1 |"]

    def test_indented_pipe_lines_kept(self):
        assert table_lines("  | a |\n\t| b |") == ["  | a |", "\t| b |"]


class TestParseTable:

    def test_single_data_row(self):
        section = "| Bureau | Score | Range |\n|---|---|---|\n| Experian | 720 | 300-850 |"
        assert parse_table(section) == [["Experian", "720", "300-850"]]

    def test_one_row_per_data_line(self):
        section = "| h1 | h2 |\n|---|---|\n| a | b |\n| c | d |\n| e | f |"
        assert parse_table(section) == [["a", "b"], ["c", "d"], ["e", "f"]]

    def test_header_and_separator_only_returns_empty(self):
        """A table with no data rows is treated as no table at all (not [[]])."""
        assert parse_table("| Bureau | Score |\n|---|---|") == []

    def test_single_line_returns_empty(self):
        assert parse_table("| Bureau | Score |") == []

    def test_empty_section(self):
        assert parse_table("") == []

    def test_no_pipe_lines(self):
        assert parse_table("No accounts reported.") == []

    def test_ragged_rows_pass_through(self):
        section = "| a | b | c |\n|---|---|---|\n| 1 | 2 |\n| 1 | 2 | 3 | 4 |"
        assert parse_table(section) == [["1", "2"], ["1", "2", "3", "4"]]

    def test_non_table_lines_between_rows_ignored(self):
        section = "| a | b |\n|---|---|\n| 1 | 2 |\n(continued)\n| 3 | 4 |"
        assert parse_table(section) == [["1", "2"], ["3", "4"]]

    def test_first_two_pipe_lines_dropped_positionally(self):
        """Without a separator row the first data row is consumed as the separator."""
        section = "| a | b |\n| 1 | 2 |\n| 3 | 4 |"
        assert parse_table(section) == [["3", "4"]]
