"""Pipe-table parser for credit-report sections.

Expected format (as produced by the credit assistant):

    | Bureau | Score | Range |
    |---|---|---|
    | Experian | 720 | 300-850 |

The first two pipe lines are the header and the separator and are dropped.
A table with no data row is treated as no table at all.  Rows are not
width-checked: a ragged row comes back exactly as written.
"""

from creditbanc.report.patterns import MIN_TABLE_LINES, TABLE_ROW_PREFIX


def _parse_pipe_row(line: str) -> list[str]:
    """Split a pipe-delimited row into trimmed cells.

    Only the single empty field produced by the leading pipe and the one
    produced by the trailing pipe are removed, so empty cells in the middle
    or at the edges of the row survive: '| a |  |' -> ['a', ''].
    """
    cells = line.strip().split("|")
    if cells and not cells[0].strip():
        cells = cells[1:]
    if cells and not cells[-1].strip():
        cells = cells[:-1]
    return [cell.strip() for cell in cells]


def table_lines(section: str) -> list[str]:
    """Return the lines of *section* that belong to a pipe table."""
    return [line for line in section.splitlines() if line.strip().startswith(TABLE_ROW_PREFIX)]


def parse_table(section: str) -> list[list[str]]:
    """Convert a section's pipe table into a list of data rows (header and separator skipped)."""
    lines = table_lines(section)
    if len(lines) < MIN_TABLE_LINES:
        return []
    return [_parse_pipe_row(line) for line in lines[2:]]
