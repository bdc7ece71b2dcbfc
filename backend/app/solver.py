"""
Turn grid input into a step-by-step elimination result dict.

Parses the text cells, runs the exact elimination engine, verifies the
solution with SymPy, and packs everything into plain JSON-ready values.
"""

import time
from datetime import datetime

import sympy

from solver import SolutionType, ShapeMismatchError, solve
from solver.formatting import format_matrix_latex
from solver.numerical import decimal_solution_text, residual_norm
from solver.rational import parse_cell
from solver.verification import verify_solution


def _matrix_strings(matrix) -> list:
    return [[v.to_display_string() for v in row] for row in matrix]


def _step_dict(number: int, step) -> dict:
    return {
        "step_number": number,
        "description": step.description,
        "explanation": step.explanation,
        "matrix": _matrix_strings(step.matrix),
        "latex": format_matrix_latex(step.matrix),
        "highlight_row": step.highlight_row,
        "highlight_col": step.highlight_col,
    }


def solve_grid(matrix_cells: list, vector_cells: list, reduce_to_normal_form: bool = False,
               strict: bool = False, display: str = "exact", max_size: int = 4) -> dict:
    """
    Solve the system typed into a grid of text cells.

    Returns a dict with:
      - steps: list of {step_number, description, explanation, matrix, latex, highlight_*}
      - solution_type / solution_text / rank_a / rank_aug / final_matrix
      - verification_steps: SymPy substitution check
      - summary: runtime, library information and, for a unique solution,
        the floating-point residual ||A·x - b||
    """
    t_start = time.perf_counter()

    n = len(matrix_cells)
    if n > max_size:
        raise ShapeMismatchError(f"Systems larger than {max_size}×{max_size} are not supported.")

    A = [[parse_cell(cell, strict=strict) for cell in row] for row in matrix_cells]
    b = [parse_cell(cell, strict=strict) for cell in vector_cells]
    result = solve(A, b, reduce_to_normal_form)

    verification_steps, status = verify_solution(A, b, result)
    residual = residual_norm(result) if result.solution_type == SolutionType.UNIQUE else None
    if display == "decimal":
        solution_text = list(decimal_solution_text(result))
    else:
        solution_text = list(result.solution_text)

    steps = [_step_dict(i, step) for i, step in enumerate(result.steps, 1)]

    t_end = time.perf_counter()
    runtime_ms = round((t_end - t_start) * 1000, 2)

    return {
        "size": n,
        "steps": steps,
        "solution_type": result.solution_type.value,
        "solution_text": solution_text,
        "parameters": list(result.parameters),
        "rank_a": result.rank_a,
        "rank_aug": result.rank_aug,
        "final_matrix": _matrix_strings(result.final_matrix),
        "verification_steps": verification_steps,
        "summary": {
            "runtime_ms": runtime_ms,
            "total_steps": len(steps),
            "verification_steps": len(verification_steps),
            "validation_status": status,
            "reduced": result.reduced,
            "consistent": result.solution_type != SolutionType.NONE,
            "residual": residual,
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "library": f"SymPy {sympy.__version__}",
        },
    }
