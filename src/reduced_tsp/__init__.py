"""Reduced-matrix greedy heuristic for the (asymmetric) travelling salesman problem."""
from .consumer import EdgeRecorder, PathConsumer, TourBuilder, format_path
from .cost_matrix import NO_EDGE, as_cost_matrix, reduce_matrix
from .errors import (DeadEndError, InvalidInputError, InvalidOperationError, TourAssemblyError,
                     TSPError)
from .heuristic import TSPSolution, solve_tsp_heuristic, solve_tsp_reduction
from .log_sink import LogSink, MatrixSnapshot, NullLogSink, TableLogSink
from .parsers import load_instance
from .solver import EPS, ReducedMatrixSolver, solve

__all__ = [
    'EPS', 'NO_EDGE',
    'ReducedMatrixSolver', 'solve',
    'PathConsumer', 'EdgeRecorder', 'TourBuilder', 'format_path',
    'LogSink', 'NullLogSink', 'TableLogSink', 'MatrixSnapshot',
    'TSPSolution', 'solve_tsp_reduction', 'solve_tsp_heuristic',
    'as_cost_matrix', 'reduce_matrix', 'load_instance',
    'TSPError', 'InvalidInputError', 'InvalidOperationError', 'DeadEndError', 'TourAssemblyError',
]
