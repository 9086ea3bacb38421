"""Per-row and per-column reduction statistics over a compacted index space.

Slot ``i`` of the row list is the ``i``-th *active* row; ``Stat.mx_index``
maps it back to the row of the cost matrix. Removing a row overwrites its slot
with the last active slot and shrinks the active count, so the matrix itself is
never reshaped. Columns work the same way.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .candidates import CellCoords
from .no_path import NoPathMatrix

UNSET = float('nan')


@dataclass
class Stat:
    mx_index: int
    min: float = UNSET
    min2: float = UNSET
    min_count: int = 0
    term: float = UNSET
    no_path_cell_count: int = 0

    def reset(self) -> None:
        self.min = UNSET
        self.min2 = UNSET
        self.min_count = 0
        self.term = UNSET
        self.no_path_cell_count = 0

    def update_term(self) -> float:
        """Penalty for not using this row's (column's) cheapest cell.

        Zero when the minimum is tied: another zero cell stays available.
        Without a second candidate the term stays NaN, and a NaN sum never
        wins the selection against the cell picked before it.
        """
        if self.min_count > 1:
            self.term = 0.0
        else:
            self.term = self.min2 - self.min
        return self.term


@dataclass(frozen=True)
class StatSnapshot:
    """Copy of the active statistics handed to log sinks."""
    mx_index: Tuple[int, ...]
    min: Tuple[float, ...]
    min_count: Tuple[int, ...]
    min2: Tuple[float, ...]
    term: Tuple[float, ...]


class StatList:
    def __init__(self, size: int, no_path: NoPathMatrix):
        self.no_path = no_path
        self._rows: List[Stat] = [Stat(i) for i in range(size)]
        self._columns: List[Stat] = [Stat(i) for i in range(size)]
        self._row_count = size
        self._column_count = size

    @property
    def row_count(self) -> int:
        return self._row_count

    @property
    def column_count(self) -> int:
        return self._column_count

    def get_row(self, row_index: int) -> Stat:
        return self._rows[row_index]

    def get_column(self, column_index: int) -> Stat:
        return self._columns[column_index]

    def get_sum(self, coord: CellCoords) -> float:
        return self._rows[coord.row].term + self._columns[coord.column].term

    def reset(self) -> None:
        for stat in self._rows[:self._row_count]:
            stat.reset()
        for stat in self._columns[:self._column_count]:
            stat.reset()

    def commit_edge(self, coord: CellCoords) -> Tuple[int, int]:
        """Commit the cell at ``coord`` and return it as ``(src, dst)``.

        Both directions are forbidden afterwards. A row (column) slot is only
        compacted away when its scan hit at least one forbidden cell in this
        iteration; otherwise it stays active.
        """
        row = self._rows[coord.row]
        column = self._columns[coord.column]
        src, dst = row.mx_index, column.mx_index
        self.no_path.forbid(src, dst)
        self.no_path.forbid(dst, src)

        if row.no_path_cell_count > 0:
            last = self._row_count - 1
            if coord.row < last:
                row.mx_index = self._rows[last].mx_index
            self._row_count -= 1
        if column.no_path_cell_count > 0:
            last = self._column_count - 1
            if coord.column < last:
                column.mx_index = self._columns[last].mx_index
            self._column_count -= 1

        self.reset()
        return src, dst

    def row_snapshot(self) -> StatSnapshot:
        return _snapshot(self._rows[:self._row_count])

    def column_snapshot(self) -> StatSnapshot:
        return _snapshot(self._columns[:self._column_count])


def _snapshot(stats: List[Stat]) -> StatSnapshot:
    return StatSnapshot(
        mx_index=tuple(s.mx_index for s in stats),
        min=tuple(s.min for s in stats),
        min_count=tuple(s.min_count for s in stats),
        min2=tuple(s.min2 for s in stats),
        term=tuple(s.term for s in stats),
    )
