"""Exception types raised by the reduced-matrix TSP engine."""
from __future__ import annotations

from typing import List, Optional


class TSPError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(TSPError, ValueError):
    """The cost matrix (or an instance file) cannot be solved as given."""


class InvalidOperationError(TSPError, RuntimeError):
    """The candidate cell set was driven in an order it does not support."""


class DeadEndError(TSPError, RuntimeError):
    """An iteration ended without a single admissible zero cell."""


class TourAssemblyError(TSPError, ValueError):
    """Committed edges do not close into one Hamiltonian cycle."""

    def __init__(self, message: str, cycles: Optional[List[List[int]]] = None):
        super().__init__(message)
        self.cycles = cycles or []
