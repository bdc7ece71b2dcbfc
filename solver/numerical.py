"""Decimal (approximate) view of exact elimination results using NumPy."""

import numpy as np

from solver.engine import SolutionType, SolverResult
from solver.rational import Rational


def _fmt_num(value: float, max_decimals: int = 10) -> str:
    """Format a float into a clean decimal string.

    - Removes trailing zeros after the decimal point.
    - Uses up to *max_decimals* digits of precision.
    - Returns integers without a decimal point (e.g. ``7`` not ``7.0``).
    """
    if abs(value - round(value)) < 1e-12:
        return str(int(round(value)))
    formatted = f"{value:.{max_decimals}f}".rstrip("0").rstrip(".")
    return formatted


def to_array(matrix) -> np.ndarray:
    """Convert a snapshot of Rationals to a float64 array."""
    return np.array([[float(v) for v in row] for row in matrix], dtype=np.float64)


def _decimal_magnitude(value: Rational, standalone: bool) -> str:
    text = _fmt_num(float(value))
    if standalone or value.is_integer():
        return text
    return f"{text}·"


def decimal_solution_text(result: SolverResult) -> tuple:
    """Solution lines with constants and coefficients shown as decimals."""
    if result.solution_type == SolutionType.NONE:
        return result.solution_text

    lines = []
    for j, (expr, exact_line) in enumerate(zip(result.solution, result.solution_text)):
        if j in result.free_columns:
            lines.append(exact_line)
        else:
            lines.append(f"x_{j + 1} = {expr.format(_decimal_magnitude)}")
    return tuple(lines)


def residual_norm(result: SolverResult) -> float:
    """Euclidean norm of ``A·x - b`` for a unique solution, in floats.

    ``[A|b]`` is taken from the first recorded step, before any row operation.
    """
    if result.solution_type != SolutionType.UNIQUE:
        raise ValueError("A residual is only defined for a unique solution.")
    augmented = to_array(result.steps[0].matrix)
    A_np, b_np = augmented[:, :-1], augmented[:, -1]
    x_np = np.array([float(expr.constant) for expr in result.solution], dtype=np.float64)
    return float(np.linalg.norm(A_np @ x_np - b_np))
