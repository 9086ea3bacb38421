"""Diagnostic snapshots of the solver state.

The solver hands a ``MatrixSnapshot`` to its log sink after every phase. Sinks
only read it; ``NullLogSink`` is the default and ignores everything.
``TableLogSink`` prints the active sub-matrix as a table:

                0    2    3 min count min2 term
        0       M    2  >3<   9     1   11    2
        ...

Forbidden cells show as ``M``; after reduction the zero cells show their
combined penalty as ``>sum<``.
"""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

import numpy as np
import pandas as pd

from .stat_list import StatSnapshot

PHASE_INITIAL = 'initial'
PHASE_REDUCED = 'reduced'
PHASE_COMMITTED = 'committed'

STAT_LABELS = ('min', 'count', 'min2', 'term')


def pretty(value: float) -> str:
    if math.isnan(value):
        return '?'
    if value == math.inf:
        return '∞'
    if value == -math.inf:
        return '-∞'
    text = f"{value:.6f}".rstrip('0').rstrip('.')
    return '0' if text in ('-0', '') else text


@dataclass(frozen=True)
class MatrixSnapshot:
    phase: str
    iteration: int
    rows: StatSnapshot
    columns: StatSnapshot
    matrix: np.ndarray         # full read-only cost matrix
    no_path: np.ndarray        # full read-only forbidden-edge matrix
    edge: Optional[Tuple[int, int]] = None
    eps: float = 1e-6

    @property
    def values(self) -> np.ndarray:
        return self.matrix[np.ix_(self.rows.mx_index, self.columns.mx_index)]

    @property
    def forbidden(self) -> np.ndarray:
        return self.no_path[np.ix_(self.rows.mx_index, self.columns.mx_index)]


class LogSink:
    def log(self, snapshot: MatrixSnapshot) -> None:
        raise NotImplementedError


class NullLogSink(LogSink):
    def log(self, snapshot: MatrixSnapshot) -> None:
        pass


class TableLogSink(LogSink):
    """Writes every snapshot as a text table to ``writer`` (stdout by default)."""

    def __init__(self, writer: Optional[TextIO] = None, phases: Tuple[str, ...] = (PHASE_INITIAL, PHASE_REDUCED, PHASE_COMMITTED)):
        self._writer = writer
        self.phases = phases

    def log(self, snapshot: MatrixSnapshot) -> None:
        if snapshot.phase not in self.phases:
            return
        out = self._writer or sys.stdout
        header = f"[{snapshot.phase}] iteration {snapshot.iteration}"
        if snapshot.edge is not None:
            header += f" edge {snapshot.edge[0]} -> {snapshot.edge[1]}"
        out.write('\n' + header + '\n')
        out.write(render_table(snapshot) + '\n')


def render_table(snapshot: MatrixSnapshot) -> str:
    rows, cols = snapshot.rows, snapshot.columns
    values = snapshot.values
    forbidden = snapshot.forbidden
    with_stats = snapshot.phase == PHASE_REDUCED
    # display in original index order, not slot order
    row_order = np.argsort(rows.mx_index, kind='stable')
    col_order = np.argsort(cols.mx_index, kind='stable')

    body: List[List[str]] = []
    for i in row_order:
        cells = []
        for j in col_order:
            if forbidden[i, j]:
                cells.append('M')
            elif with_stats:
                reduced = values[i, j] - (rows.min[i] + cols.min[j])
                if abs(reduced) < snapshot.eps:
                    cells.append(f">{pretty(rows.term[i] + cols.term[j])}<")
                else:
                    cells.append(pretty(reduced))
            else:
                cells.append(pretty(values[i, j]))
        if with_stats:
            cells += [pretty(rows.min[i]), str(rows.min_count[i]), pretty(rows.min2[i]), pretty(rows.term[i])]
        body.append(cells)

    index = [str(rows.mx_index[i]) for i in row_order]
    columns = [str(cols.mx_index[j]) for j in col_order]
    if with_stats:
        blank = [''] * len(STAT_LABELS)
        body.append([pretty(cols.min[j]) for j in col_order] + blank)
        body.append([str(cols.min_count[j]) for j in col_order] + blank)
        body.append([pretty(cols.min2[j]) for j in col_order] + blank)
        body.append([pretty(cols.term[j]) for j in col_order] + blank)
        index += list(STAT_LABELS)
        columns += list(STAT_LABELS)
    return pd.DataFrame(body, index=index, columns=columns).to_string()
