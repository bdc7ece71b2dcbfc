"""GaussSolver — exact step-by-step Gaussian elimination."""

from solver.engine import (
    RowOperation,
    SolutionType,
    SolverResult,
    SolverStep,
    normal_form,
    replay,
    solve,
    solve_cells,
)
from solver.errors import (
    DivideByZeroError,
    MalformedNumberError,
    ShapeMismatchError,
    SolverError,
)
from solver.rational import Rational, parse_cell

__all__ = [
    "DivideByZeroError",
    "MalformedNumberError",
    "Rational",
    "RowOperation",
    "ShapeMismatchError",
    "SolutionType",
    "SolverError",
    "SolverResult",
    "SolverStep",
    "normal_form",
    "parse_cell",
    "replay",
    "solve",
    "solve_cells",
]
