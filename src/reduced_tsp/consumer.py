"""Path consumers: receivers of the edges committed by the solver.

``TourBuilder`` closes the ``N - 1`` committed edges into a cycle: the missing
edge runs from the only node that never was a source to the only node that
never was a destination.
"""
from __future__ import annotations

from typing import List, Optional, TextIO, Tuple

import networkx as nx
import numpy as np

from .errors import TourAssemblyError
from .log_sink import pretty

Edge = Tuple[int, int]


class PathConsumer:
    def accept(self, edge: Edge) -> None:
        raise NotImplementedError


class EdgeRecorder(PathConsumer):
    """Keeps the committed edges in commit order."""

    def __init__(self):
        self.edges: List[Edge] = []

    def accept(self, edge: Edge) -> None:
        self.edges.append((int(edge[0]), int(edge[1])))


class TourBuilder(EdgeRecorder):
    def __init__(self, size: int, matrix: Optional[np.ndarray] = None, writer: Optional[TextIO] = None):
        super().__init__()
        self.size = size
        self._mx = matrix
        self._writer = writer

    def accept(self, edge: Edge) -> None:
        super().accept(edge)
        if self._writer is not None:
            src, dst = self.edges[-1]
            cost = pretty(self._mx[src, dst]) if self._mx is not None else '?'
            self._writer.write(f"{src} --[{cost}]--> {dst}\n")

    def closing_edge(self) -> Edge:
        if len(self.edges) != self.size - 1:
            raise TourAssemblyError(f"Expected {self.size - 1} edges, got {len(self.edges)}.")
        free_src = set(range(self.size)) - {e[0] for e in self.edges}
        free_dst = set(range(self.size)) - {e[1] for e in self.edges}
        if len(free_src) != 1 or len(free_dst) != 1:
            raise TourAssemblyError(
                f"Edges reuse an endpoint: free sources {sorted(free_src)}, "
                f"free destinations {sorted(free_dst)}.")
        return free_src.pop(), free_dst.pop()

    def get_full_path(self) -> List[int]:
        """Successor array: ``path[i]`` is the node visited after ``i``."""
        path = [-1] * self.size
        for src, dst in self.edges + [self.closing_edge()]:
            path[src] = dst
        return path

    def subtours(self) -> List[List[int]]:
        """Cycles of the closed successor map, smallest node first.

        A single cycle covering all nodes is a valid tour; anything else is a
        subtour the greedy commit order let through.
        """
        graph = nx.DiGraph()
        graph.add_nodes_from(range(self.size))
        graph.add_edges_from(enumerate(self.get_full_path()))
        cycles = []
        for component in nx.weakly_connected_components(graph):
            start = min(component)
            cycle = [start]
            node = next(iter(graph.successors(start)))
            while node != start:
                cycle.append(node)
                node = next(iter(graph.successors(node)))
            cycles.append(cycle)
        return sorted(cycles)

    def tour(self, start: int = 0) -> List[int]:
        cycles = self.subtours()
        if len(cycles) != 1:
            raise TourAssemblyError(f"Committed edges form {len(cycles)} subtours: {cycles}", cycles)
        path = self.get_full_path()
        order = [start]
        node = path[start]
        while node != start:
            order.append(node)
            node = path[node]
        return order


def format_path(path: List[int], matrix: np.ndarray, start: int = 0) -> Tuple[str, float]:
    """Render a successor array as ``0 --[d]--> a --[d]--> ... --> 0``."""
    total = 0.0
    parts = [str(start)]
    node = start
    while True:
        nxt = path[node]
        distance = float(matrix[node, nxt])
        total += distance
        parts.append(f" --[{pretty(distance)}]--> {nxt}")
        node = nxt
        if node == start:
            break
    return ''.join(parts), total
