"""Pipe table parsing: split rows, detect the header separator, size columns."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from rich.cells import cell_len

from chat_markdown.inline import strip_bold_markers

PIPE = "|"
MIN_COLUMN_WIDTH = 3
CELL_PADDING = 2

_SEPARATOR_RE = re.compile(r"-+|=+")


@dataclass(frozen=True)
class TableModel:
    """Collected table rows.

    Rows keep the length they were collected with; use ``padded_rows`` when
    every row needs ``column_count`` cells.
    """

    rows: tuple[tuple[str, ...], ...] = field(default_factory=tuple)
    has_header_separator: bool = False

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def padded_rows(self) -> list[tuple[str, ...]]:
        """Return rows padded with empty cells up to ``column_count``."""
        width = self.column_count
        return [row + ("",) * (width - len(row)) for row in self.rows]


def is_table_line(line: str) -> bool:
    """Return True if *line* can belong to a table run."""
    return PIPE in line


def split_row(line: str) -> list[str]:
    """Split a pipe-delimited line into trimmed cells.

    One leading and one trailing pipe are dropped before splitting.
    """
    row = line.strip()
    if row.startswith(PIPE):
        row = row[1:]
    if row.endswith(PIPE):
        row = row[:-1]
    return [cell.strip() for cell in row.split(PIPE)]


def is_separator_row(line: str) -> bool:
    """Return True if *line* looks like a header separator (``|---|---|``)."""
    return _SEPARATOR_RE.search(line) is not None


def parse_table(lines: list[str]) -> TableModel:
    """Parse collected table lines into a TableModel.

    The second line is treated as the header separator when it contains a run
    of ``-`` or ``=``; it is then left out of the data rows.
    """
    has_header = len(lines) >= 2 and is_separator_row(lines[1])
    rows: list[tuple[str, ...]] = []
    for index, line in enumerate(lines):
        if has_header and index == 1:
            continue
        rows.append(tuple(split_row(line)))
    return TableModel(rows=tuple(rows), has_header_separator=has_header)


def column_widths(
    model: TableModel, *, minimum: int = MIN_COLUMN_WIDTH, padding: int = CELL_PADDING
) -> list[int]:
    """Estimate a display width for each column, in terminal cells."""
    widths = [minimum] * model.column_count
    for row in model.rows:
        for col, cell in enumerate(row):
            widths[col] = max(widths[col], cell_len(strip_bold_markers(cell)) + padding)
    return widths
