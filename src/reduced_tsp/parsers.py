"""Instance readers.

 - AMPL ``.dat`` with ``set NODES`` and a ``param dist :`` matrix; ``.`` (AMPL's
   "no value") marks a missing edge
 - TSPLIB ``EDGE_WEIGHT_TYPE: EXPLICIT`` (``.tsp`` / ``.atsp``) in FULL_MATRIX,
   LOWER_DIAG_ROW, UPPER_DIAG_ROW or UPPER_ROW layout; triangular layouts are
   mirrored
"""
from __future__ import annotations

import os
from typing import List, Optional

import numpy as np

from .cost_matrix import NO_EDGE, as_cost_matrix
from .errors import InvalidInputError

TSPLIB_EXTENSIONS = ('.tsp', '.atsp')


def _number(tok: str) -> float:
    if tok == '.':
        return NO_EDGE
    try:
        return float(tok)
    except ValueError as e:
        raise InvalidInputError(f"Bad distance value {tok!r}") from e


def parse_tsp_dat(path: str) -> np.ndarray:
    """Parse AMPL .dat with 'set NODES' and 'param dist :' matrix."""
    with open(path, 'r') as f:
        content = f.read().splitlines()
    rows: List[List[float]] = []
    in_matrix = False
    header_consumed = False
    for line in content:
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('param dist'):
            in_matrix = True
            # header may share the line: "param dist : 1 2 3 :="
            header_consumed = ':=' in line
            continue
        if in_matrix:
            if line.startswith(';'):
                break
            parts = line.split()
            # column header line: "1 2 3 ... :="
            if not header_consumed:
                header_consumed = True
                continue
            numeric_tokens = []
            for tok in parts[1:]:
                if tok.startswith('#') or tok == ';':
                    break
                numeric_tokens.append(tok.rstrip(';'))
            rows.append([_number(x) for x in numeric_tokens if x])
            if parts[-1].endswith(';'):
                break
    if not rows:
        raise InvalidInputError(f"No 'param dist' matrix found in {path}")
    if any(len(r) != len(rows) for r in rows):
        raise InvalidInputError(f"Distance matrix not square in {path}")
    return np.array(rows, dtype=float)


def parse_tsplib(path: str) -> np.ndarray:
    """Parse a TSPLIB file with an explicit edge weight section."""
    with open(path, 'r') as f:
        lines = f.readlines()

    dimension = None
    edge_weight_type = None
    edge_weight_format = 'FULL_MATRIX'
    weights: List[float] = []
    in_weight_section = False
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if in_weight_section:
            if line == 'EOF' or line.endswith('_SECTION'):
                break
            weights.extend(_number(tok) for tok in line.split())
            continue
        if line == 'EDGE_WEIGHT_SECTION':
            in_weight_section = True
        elif ':' in line:
            key, _, value = line.partition(':')
            key, value = key.strip(), value.strip()
            if key == 'DIMENSION':
                dimension = int(value)
            elif key == 'EDGE_WEIGHT_TYPE':
                edge_weight_type = value
            elif key == 'EDGE_WEIGHT_FORMAT':
                edge_weight_format = value

    if dimension is None:
        raise InvalidInputError(f"Could not find DIMENSION in {path}")
    if edge_weight_type != 'EXPLICIT':
        raise InvalidInputError(f"Unsupported EDGE_WEIGHT_TYPE: {edge_weight_type}")

    n = dimension
    if edge_weight_format == 'FULL_MATRIX':
        cells = [(i, j) for i in range(n) for j in range(n)]
    elif edge_weight_format == 'LOWER_DIAG_ROW':
        cells = [(i, j) for i in range(n) for j in range(i + 1)]
    elif edge_weight_format == 'UPPER_DIAG_ROW':
        cells = [(i, j) for i in range(n) for j in range(i, n)]
    elif edge_weight_format == 'UPPER_ROW':
        cells = [(i, j) for i in range(n) for j in range(i + 1, n)]
    else:
        raise InvalidInputError(f"Unsupported EDGE_WEIGHT_FORMAT: {edge_weight_format}")
    if len(weights) < len(cells):
        raise InvalidInputError(f"Expected {len(cells)} weights in {path}, found {len(weights)}")

    dist = np.full((n, n), NO_EDGE)
    for (i, j), value in zip(cells, weights):
        dist[i, j] = value
        if edge_weight_format != 'FULL_MATRIX':
            dist[j, i] = value
    return dist


def load_instance(path: str, big_m: Optional[float] = None) -> np.ndarray:
    """Read ``path`` by extension and return a validated read-only cost matrix."""
    ext = os.path.splitext(path)[1].lower()
    if ext in TSPLIB_EXTENSIONS:
        dist = parse_tsplib(path)
    else:
        dist = parse_tsp_dat(path)
    return as_cost_matrix(dist, big_m=big_m)
