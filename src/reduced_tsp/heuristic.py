"""Tour-level API around the reduced-matrix engine.

Features:
 - ``solve_tsp_reduction``: reduced-matrix construction, optionally polished by 2-opt
 - nearest-neighbor construction as a baseline
 - numpy 2-opt (first improvement) that also handles asymmetric matrices
 - ``solve_tsp_heuristic``: one entry point keyed by method / local search names
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .consumer import TourBuilder
from .cost_matrix import as_cost_matrix
from .log_sink import LogSink
from .solver import EPS, solve

logger = logging.getLogger(__name__)

METHODS = ('reduction', 'nearest')
LOCAL_SEARCHES = ('none', '2opt')


@dataclass
class TSPSolution:
    tour: List[int]            # sequence of node indices (0-based) ending w/o repeat
    cost: float
    runtime: float
    method: str
    improvements: int = 0


def tour_cost(tour: List[int], dist: np.ndarray) -> float:
    return float(sum(dist[tour[i], tour[(i + 1) % len(tour)]] for i in range(len(tour))))


def reduction_tour(dist: np.ndarray, log_sink: Optional[LogSink] = None, eps: float = EPS) -> List[int]:
    builder = TourBuilder(dist.shape[0], dist)
    solve(dist, builder, log_sink=log_sink, eps=eps)
    return builder.tour()


def nearest_neighbor_tour(dist: np.ndarray, start: int = 0) -> List[int]:
    n = dist.shape[0]
    unused = set(range(n))
    current = start
    tour = [current]
    unused.remove(current)
    while unused:
        nxt = min(unused, key=lambda j: dist[current, j] if math.isfinite(dist[current, j]) else math.inf)
        tour.append(nxt)
        unused.remove(nxt)
        current = nxt
    return tour


def two_opt_numpy(tour: List[int], dist: np.ndarray, max_iters: int = 2000) -> Tuple[List[int], float, int]:
    """First-improvement 2-opt; returns (tour, cost, passes).

    Reversing a segment flips the direction of its inner edges, which only
    costs nothing when the matrix is symmetric.
    """
    n = len(tour)
    symmetric = np.allclose(dist, dist.T, equal_nan=True)
    best = tour[:]
    best_cost = tour_cost(best, dist)
    improved = True
    iters = 0
    while improved and iters < max_iters:
        improved = False
        iters += 1
        for i in range(1, n - 2):
            bi = best[i - 1]
            ci = best[i]
            for k in range(i + 1, n - 1):
                dj = best[k]
                ej = best[(k + 1) % n]
                delta = (dist[bi, dj] + dist[ci, ej]) - (dist[bi, ci] + dist[dj, ej])
                if not symmetric:
                    seg = np.array(best[i:k + 1])
                    delta += dist[seg[1:], seg[:-1]].sum() - dist[seg[:-1], seg[1:]].sum()
                if delta < -1e-9:
                    best[i:k + 1] = reversed(best[i:k + 1])
                    best_cost += delta
                    improved = True
                    break
            if improved:
                break
    return best, float(best_cost), iters


def solve_tsp_reduction(dist, *, ls: str = 'none', big_m: Optional[float] = None,
                        log_sink: Optional[LogSink] = None) -> TSPSolution:
    """Reduced-matrix construction, with an optional 2-opt polish."""
    return solve_tsp_heuristic(dist, method='reduction', ls=ls, big_m=big_m, log_sink=log_sink)


def solve_tsp_heuristic(dist, *, method: str = 'reduction', ls: str = 'none', big_m: Optional[float] = None,
                        log_sink: Optional[LogSink] = None) -> TSPSolution:
    """Programmatic API to obtain a heuristic TSP solution.

    Parameters:
      dist: square matrix of distances (NaN / inf for missing edges)
      method: 'reduction' | 'nearest'
      ls: 'none' | '2opt'
      big_m: costs >= big_m count as missing edges
      log_sink: receives solver snapshots (reduction only)
    """
    if method not in METHODS:
        raise ValueError(f"Unknown construction method: {method}")
    if ls not in LOCAL_SEARCHES:
        raise ValueError(f"Unknown local search method: {ls}")
    mx = as_cost_matrix(dist, big_m=big_m)
    start_t = time.time()
    if method == 'reduction':
        base_tour = reduction_tour(mx, log_sink=log_sink)
    else:
        base_tour = nearest_neighbor_tour(mx)
    name = 'reduction' if method == 'reduction' else 'nearest_neighbor'
    if ls == '2opt':
        best, best_cost, iters = two_opt_numpy(base_tour, mx)
        runtime = time.time() - start_t
        logger.debug(f"{name}_2opt: {tour_cost(base_tour, mx):.2f} -> {best_cost:.2f} in {iters} passes")
        return TSPSolution(tour=best, cost=best_cost, runtime=runtime, method=f"{name}_2opt", improvements=iters)
    runtime = time.time() - start_t
    return TSPSolution(tour=base_tour, cost=tour_cost(base_tour, mx), runtime=runtime, method=name)
