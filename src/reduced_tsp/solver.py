"""Reduced-matrix greedy TSP engine.

Every iteration reduces the active rows and columns, scores each zero cell by
the penalty of *not* using it (row term + column term) and commits the
best-scored cell as a tour edge. ``N - 1`` edges are committed; the last one is
implied and left to the path consumer.

Usage:
    builder = TourBuilder(len(dist))
    solve(dist, builder)
    tour = builder.tour()
"""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from .candidates import CellCoords, ZeroCellSet
from .consumer import PathConsumer
from .cost_matrix import as_cost_matrix, check_reachable, no_edge_mask
from .errors import DeadEndError
from .log_sink import (PHASE_COMMITTED, PHASE_INITIAL, PHASE_REDUCED, LogSink,
                       MatrixSnapshot, NullLogSink)
from .no_path import NoPathMatrix
from .stat_list import StatList

EPS = 1e-6

logger = logging.getLogger(__name__)


class ReducedMatrixSolver:
    def __init__(self, matrix: np.ndarray, log_sink: Optional[LogSink] = None, eps: float = EPS):
        self._mx = matrix
        self._eps = eps
        self._log_sink = log_sink or NullLogSink()
        size = matrix.shape[0]
        self._no_path = NoPathMatrix(size, initial=no_edge_mask(matrix))
        self._stat_list = StatList(size, self._no_path)
        self._cells = ZeroCellSet()
        self._iteration = 0

    def run(self, consumer: PathConsumer) -> None:
        self._log(PHASE_INITIAL)
        stats = self._stat_list
        for iteration in range(1, self._mx.shape[0]):
            self._iteration = iteration
            if stats.row_count != stats.column_count:
                logger.warning(f"iteration {iteration}: {stats.row_count} active rows "
                               f"vs {stats.column_count} active columns")
            for i in range(stats.row_count):
                self.process_row(i)
            for j in range(stats.column_count):
                self.process_column(j)
            self.set_rows_term()
            self._log(PHASE_REDUCED)

            coord = self.select_cell()
            edge = stats.commit_edge(coord)
            logger.debug(f"iteration {iteration}: committed {edge[0]} -> {edge[1]}")
            consumer.accept(edge)
            self._cells.clear()
            self._log(PHASE_COMMITTED, edge)

    def process_row(self, row_index: int) -> None:
        """Row minimum, second minimum and ties; then reduce the row.

        The reduced values feed the running minimum of every column so the
        column pass can often skip its own scan.
        """
        eps = self._eps
        stats = self._stat_list
        column_count = stats.column_count
        row = stats.get_row(row_index)
        matrix_row = self._mx[row.mx_index]
        no_path_row = self._no_path.row(row.mx_index)
        self._cells.start_column_set(row_index)

        value_min = math.nan
        value_min2 = math.nan
        for column_index in range(column_count):
            column = stats.get_column(column_index)
            if no_path_row[column.mx_index]:
                row.no_path_cell_count += 1
                column.no_path_cell_count += 1
                continue
            v = matrix_row[column.mx_index]
            if math.isnan(value_min):
                value_min = v
                self._cells.add_column(column_index)
            elif abs(v - value_min) < eps:
                self._cells.add_column(column_index)
            elif v < value_min:
                value_min2 = value_min
                value_min = v
                self._cells.clear_last_set()
                self._cells.add_column(column_index)
            elif math.isnan(value_min2) or v < value_min2:
                value_min2 = v

        row.min = value_min
        row.min_count = self._cells.last_set_count
        row.min2 = value_min2

        for column_index in range(column_count):
            column = stats.get_column(column_index)
            if no_path_row[column.mx_index]:
                continue
            v = matrix_row[column.mx_index] - value_min
            if math.isnan(column.min):
                column.min = 0.0 if v < eps else v
                column.min_count = 1
            elif abs(v - column.min) < eps:
                column.min_count += 1
            elif v < column.min:
                column.min2 = column.min
                column.min = v
                column.min_count = 1
            elif math.isnan(column.min2) or v < column.min2:
                column.min2 = v

    def process_column(self, column_index: int) -> None:
        stats = self._stat_list
        column = stats.get_column(column_index)
        if abs(column.min) < self._eps:
            # already has a zero from the row pass
            column.update_term()
            return
        no_path_column = self._no_path.column(column.mx_index)
        self._cells.start_row_set(column_index)
        for row_index in range(stats.row_count):
            row = stats.get_row(row_index)
            if no_path_column[row.mx_index]:
                continue
            v = self._mx[row.mx_index, column.mx_index] - (row.min + column.min)
            if v < self._eps:
                row.min_count += 1
                self._cells.add_row(row_index)
        column.update_term()

    def set_rows_term(self) -> None:
        stats = self._stat_list
        for row_index in range(stats.row_count):
            stats.get_row(row_index).update_term()

    def select_cell(self) -> CellCoords:
        """Zero cell with the largest penalty sum; the first one wins ties."""
        if not len(self._cells):
            raise DeadEndError(f"No admissible cell left at iteration {self._iteration}.")
        best = self._cells[0]
        best_sum = self._stat_list.get_sum(best)
        for coord in self._cells:
            value = self._stat_list.get_sum(coord)
            if value > best_sum:
                best_sum = value
                best = coord
        return best

    def _log(self, phase: str, edge=None) -> None:
        stats = self._stat_list
        self._log_sink.log(MatrixSnapshot(
            phase=phase,
            iteration=self._iteration,
            rows=stats.row_snapshot(),
            columns=stats.column_snapshot(),
            matrix=self._mx,
            no_path=self._no_path.as_array(),
            edge=edge,
            eps=self._eps,
        ))


def solve(matrix, consumer: PathConsumer, log_sink: Optional[LogSink] = None, eps: float = EPS) -> None:
    """Commit ``N - 1`` tour edges of ``matrix`` to ``consumer``.

    Raises InvalidInputError before any edge is emitted when the matrix is not
    square, smaller than 2x2, or has a node without admissible edges.
    """
    mx = as_cost_matrix(matrix)
    check_reachable(mx)
    ReducedMatrixSolver(mx, log_sink=log_sink, eps=eps).run(consumer)
