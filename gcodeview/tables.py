"""Table data for the G-code program view and the height map editor."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum


class ItemState(IntEnum):
    """Progress of one program line."""

    IN_QUEUE = 0
    SENT = 1
    PROCESSED = 2
    SKIPPED = 3


_STATE_TEXT = {
    ItemState.IN_QUEUE: "In queue",
    ItemState.SENT: "Sent",
    ItemState.PROCESSED: "Processed",
    ItemState.SKIPPED: "Skipped",
}


@dataclass
class GCodeItem:
    """One program line with its controller response."""

    command: str = ""
    response: str = ""
    args: list[str] = field(default_factory=list)
    line: int = 0
    state: ItemState = ItemState.IN_QUEUE


class GCodeTableModel:
    """Rows of program lines shown in six columns.

    The last row is the blank line for new input: its number and state
    columns show as empty text.
    """

    HEADERS = ("#", "Command", "State", "Response", "Line", "Args")

    def __init__(self) -> None:
        self.items: list[GCodeItem] = []

    def data(self, row: int, column: int) -> object:
        """Display value of a cell, or None outside the table."""
        if not 0 <= row < len(self.items) or not 0 <= column < len(self.HEADERS):
            return None
        item = self.items[row]
        is_last = row == self.row_count() - 1
        if column == 0:
            return "" if is_last else str(row + 1)
        if column == 1:
            return item.command
        if column == 2:
            if is_last:
                return ""
            return _STATE_TEXT.get(item.state, "Unknown")
        if column == 3:
            return item.response
        if column == 4:
            return item.line
        return item.args

    def set_data(self, row: int, column: int, value: object) -> bool:
        """Change a cell; the number column cannot be changed."""
        if not 0 <= row < len(self.items) or not 0 <= column < len(self.HEADERS):
            return False
        if column == 0:
            return False
        item = self.items[row]
        if column == 1:
            item.command = str(value)
        elif column == 2:
            item.state = ItemState(int(value))
        elif column == 3:
            item.response = str(value)
        elif column == 4:
            item.line = int(value)
        else:
            item.args = list(value)
        return True

    def insert_row(self, row: int) -> bool:
        """Insert an empty item before ``row``; False if ``row`` is past the end."""
        if row < 0 or row > self.row_count():
            return False
        self.items.insert(row, GCodeItem())
        return True

    def remove_row(self, row: int) -> bool:
        """Remove one row; raises IndexError if it does not exist."""
        if not 0 <= row < len(self.items):
            raise IndexError(f"row {row} is outside the table")
        self.items.pop(row)
        return True

    def remove_rows(self, row: int, count: int) -> bool:
        """Remove ``count`` rows starting at ``row``; raises IndexError if out of range."""
        if count < 0 or row < 0 or row + count > len(self.items):
            raise IndexError(f"rows {row}..{row + count - 1} are outside the table")
        self.items = self.items[:row] + self.items[row + count:]
        return True

    def clear(self) -> None:
        """Remove every row."""
        self.items.clear()

    def row_count(self) -> int:
        """Number of rows."""
        return len(self.items)

    def column_count(self) -> int:
        """Number of columns."""
        return len(self.HEADERS)

    def header_data(self, section: int, horizontal: bool) -> str:
        """Column title, or the one-based row number for a vertical header."""
        if horizontal:
            return self.HEADERS[section]
        return str(section + 1)

    def is_editable(self, column: int) -> bool:
        """Only the command column can be edited."""
        return column == 1


class HeightMapTableModel:
    """Grid of probed heights.

    Values are stored with row 0 at the bottom (lowest Y); displayed rows
    and user edits count from the top. Callables in ``user_input_listeners``
    are called after every user edit.
    """

    def __init__(self) -> None:
        self._data: list[list[float]] = [[]]
        self.user_input_listeners: list[Callable[[], None]] = []

    def resize(self, cols: int, rows: int) -> None:
        """Replace the grid with ``rows`` x ``cols`` unknown (NaN) heights."""
        self._data = [[math.nan] * cols for _ in range(rows)]

    def _in_range(self, row: int, column: int) -> bool:
        return 0 <= row < len(self._data) and 0 <= column < self.column_count()

    def display(self, row: int, column: int) -> str | None:
        """Height shown at a displayed cell, with three decimals, or None outside."""
        if not self._in_range(row, column):
            return None
        return f"{self._data[len(self._data) - 1 - row][column]:.3f}"

    def value(self, row: int, column: int) -> float:
        """Stored height, row 0 being the bottom row."""
        if not self._in_range(row, column):
            raise IndexError(f"cell ({row}, {column}) is outside the height map")
        return self._data[row][column]

    def set_value(self, row: int, column: int, value: float, user_input: bool = False) -> bool:
        """Store a height; ``user_input`` counts rows from the top and notifies listeners."""
        target = len(self._data) - 1 - row if user_input else row
        self._data[target][column] = float(value)
        if user_input:
            for listener in self.user_input_listeners:
                listener()
        return True

    def insert_row(self, row: int) -> bool:
        """Insert an empty row before ``row``."""
        self._data.insert(row, [])
        return True

    def remove_row(self, row: int) -> bool:
        """Remove one row; raises IndexError if it does not exist."""
        if not 0 <= row < len(self._data):
            raise IndexError(f"row {row} is outside the height map")
        self._data.pop(row)
        return True

    def clear(self) -> None:
        """Remove every row."""
        self._data.clear()

    def row_count(self) -> int:
        """Number of rows."""
        return len(self._data)

    def column_count(self) -> int:
        """Number of columns, taken from the first row."""
        return len(self._data[0]) if self._data else 0

    def header_data(self, section: int) -> str:
        """One-based number of a row or column."""
        return str(section + 1)