"""Candidate zero cells collected while scanning rows and columns.

Cells are grouped in "sets": one set per scanned row (a column set: the row is
fixed and columns are added) or per rescanned column (a row set). Only the most
recent set can be dropped, which is what a row scan needs when a strictly
smaller minimum shows up after some ties were already recorded.
"""
from __future__ import annotations

from typing import Iterator, List, NamedTuple

from .errors import InvalidOperationError


class CellCoords(NamedTuple):
    """Compacted ``(row, column)`` coordinates of an active cell."""
    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.row}; {self.column}"


class ZeroCellSet:
    def __init__(self):
        self._cells: List[CellCoords] = []
        self._set_index = -1
        self._set_start = 0
        self._is_column_set = False

    @property
    def last_set_count(self) -> int:
        return len(self._cells) - self._set_start if self._set_index >= 0 else 0

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> CellCoords:
        return self._cells[index]

    def __iter__(self) -> Iterator[CellCoords]:
        return iter(self._cells)

    def start_column_set(self, row: int) -> None:
        self._is_column_set = True
        self._set_index = row
        self._set_start = len(self._cells)

    def start_row_set(self, column: int) -> None:
        self._is_column_set = False
        self._set_index = column
        self._set_start = len(self._cells)

    def add_column(self, column: int) -> None:
        if self._set_index < 0:
            raise InvalidOperationError("A column set is not started.")
        if not self._is_column_set:
            raise InvalidOperationError("A column may not be added to the row set.")
        self._cells.append(CellCoords(self._set_index, column))

    def add_row(self, row: int) -> None:
        if self._set_index < 0:
            raise InvalidOperationError("A row set is not started.")
        if self._is_column_set:
            raise InvalidOperationError("A row may not be added to the column set.")
        self._cells.append(CellCoords(row, self._set_index))

    def clear_last_set(self) -> None:
        del self._cells[self._set_start:]

    def clear(self) -> None:
        self._cells.clear()
        self._set_index = -1
        self._set_start = 0
