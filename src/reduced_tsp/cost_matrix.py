"""Read-only cost matrix view.

The engine never writes to the caller's matrix: it works on a float copy
whose ``writeable`` flag is cleared. Any non-finite cell (``nan``, ``inf``)
is a missing edge, and the diagonal is always a missing edge.
"""
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .errors import InvalidInputError

NO_EDGE = float('nan')
MIN_SIZE = 2


def as_cost_matrix(matrix, big_m: Optional[float] = None) -> np.ndarray:
    """Validate ``matrix`` and return a read-only float copy of it.

    ``big_m`` turns every cost ``>= big_m`` into a missing edge; TSPLIB
    instances use such sentinels (9999, 100000000) instead of NaN.
    """
    try:
        arr = np.array(matrix, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"The distance matrix is not numeric: {e}") from e
    if arr.ndim != 2:
        raise InvalidInputError(f"The distance matrix must be 2-D, got {arr.ndim} dimension(s).")
    height, width = arr.shape
    if width != height:
        raise InvalidInputError(f"The distance matrix must be square. Width ({width}) != Height ({height})")
    if width < MIN_SIZE:
        raise InvalidInputError("The size of the distance matrix must be greater than 1.")
    if big_m is not None:
        arr[arr >= big_m] = NO_EDGE
    arr.flags.writeable = False
    return arr


def no_edge_mask(matrix: np.ndarray) -> np.ndarray:
    """Boolean mask of cells that can never be part of a tour."""
    mask = ~np.isfinite(matrix)
    np.fill_diagonal(mask, True)
    return mask


def check_reachable(matrix: np.ndarray) -> None:
    """Every node needs at least one admissible outgoing and incoming edge."""
    mask = no_edge_mask(matrix)
    dead_rows = np.flatnonzero(mask.all(axis=1))
    if dead_rows.size:
        raise InvalidInputError(f"Node(s) {dead_rows.tolist()} have no outgoing edge.")
    dead_cols = np.flatnonzero(mask.all(axis=0))
    if dead_cols.size:
        raise InvalidInputError(f"Node(s) {dead_cols.tolist()} have no incoming edge.")


def reduce_matrix(matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Classic row-then-column reduction.

    Returns ``(reduced, row_mins, column_mins)``; missing edges stay NaN and
    ``row_mins.sum() + column_mins.sum()`` is a lower bound on any tour.
    """
    reduced = np.where(no_edge_mask(matrix), np.nan, matrix)
    row_mins = np.nanmin(reduced, axis=1)
    reduced = reduced - row_mins[:, None]
    column_mins = np.nanmin(reduced, axis=0)
    reduced = reduced - column_mins[None, :]
    return reduced, row_mins, column_mins
