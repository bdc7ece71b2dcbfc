"""Step-by-step Gaussian elimination over exact fractions.

Builds the augmented matrix ``[A|b]``, eliminates forward with
first-nonzero pivoting, optionally reduces to normal form (RREF), then
classifies the system by rank and extracts either the point solution or a
parametric family.  Every row operation is recorded as a
:class:`SolverStep` holding an immutable snapshot of the matrix, so the
transcript can be rendered or replayed independently of the solve.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional

from solver.errors import ShapeMismatchError
from solver.expression import LinearExpression, Parameter, parameter_name
from solver.rational import Rational, parse_cell

LOG = logging.getLogger(__name__)


class SolutionType(str, enum.Enum):
    UNIQUE = "unique"
    INFINITE = "infinite"
    NONE = "none"


@dataclass(frozen=True)
class RowOperation:
    """One elementary row operation, enough to re-apply it.

    ``eliminate`` means ``R[target] -= factor * R[source]`` and
    ``normalize`` means ``R[target] *= factor``.
    """

    kind: str
    target: Optional[int] = None
    source: Optional[int] = None
    factor: Optional[Rational] = None


@dataclass(frozen=True)
class SolverStep:
    description: str
    matrix: tuple
    highlight_row: Optional[int] = None
    highlight_col: Optional[int] = None
    operation: RowOperation = field(default_factory=lambda: RowOperation("marker"))
    explanation: str = ""


@dataclass(frozen=True)
class SolverResult:
    steps: tuple
    final_matrix: tuple
    rank_a: int
    rank_aug: int
    solution_type: SolutionType
    solution_text: tuple
    solution: tuple = ()
    parameters: tuple = ()
    free_columns: tuple = ()
    reduced: bool = False

    @property
    def size(self) -> int:
        return len(self.final_matrix)


# ── Matrix helpers ──────────────────────────────────────────────────────

def snapshot(matrix) -> tuple:
    """Deep, immutable copy of *matrix* (Rationals are immutable)."""
    return tuple(tuple(row) for row in matrix)


def build_augmented(A, b) -> list:
    """Return a fresh N×(N+1) working matrix ``[A|b]``.

    Raises ShapeMismatchError unless A is square with side ≥ 1 and
    ``len(b) == N``.
    """
    n = len(A)
    if n < 1:
        raise ShapeMismatchError("The coefficient matrix must have at least one row.")
    for i, row in enumerate(A):
        if len(row) != n:
            raise ShapeMismatchError(
                f"The coefficient matrix must be square: row {i + 1} has "
                f"{len(row)} entries, expected {n}."
            )
    if len(b) != n:
        raise ShapeMismatchError(
            f"The right-hand side has {len(b)} entries, expected {n}."
        )
    return [list(row) + [b[i]] for i, row in enumerate(A)]


def _pivot_col(row, n: int) -> int:
    """Index of the first non-zero entry among the first *n* columns, or -1."""
    for j in range(n):
        if not row[j].is_zero():
            return j
    return -1


def _record(steps, matrix, description, operation, explanation="",
            highlight_row=None, highlight_col=None) -> None:
    if steps is None:
        return
    step = SolverStep(
        description=description,
        matrix=snapshot(matrix),
        highlight_row=highlight_row,
        highlight_col=highlight_col,
        operation=operation,
        explanation=explanation,
    )
    steps.append(step)
    LOG.debug("Step %d: %s", len(steps), description)


# ── Phase 2: forward elimination ────────────────────────────────────────

def forward_eliminate(matrix, steps=None) -> list:
    """Reduce *matrix* (N×(N+1), modified in place) to row-echelon form.

    The pivot of each column is the first non-zero entry at or below the
    current pivot row.  Returns the list of pivot columns.
    """
    n = len(matrix)
    pivot_cols = []
    p = 0
    for col in range(n):
        if p >= n:
            break
        pivot_row = next((i for i in range(p, n) if not matrix[i][col].is_zero()), None)
        if pivot_row is None:
            continue

        if pivot_row != p:
            matrix[p], matrix[pivot_row] = matrix[pivot_row], matrix[p]
            _record(
                steps, matrix,
                f"Swap R{p + 1} ↔ R{pivot_row + 1}",
                RowOperation("swap", target=p, source=pivot_row),
                f"R{p + 1} has a zero in column {col + 1}, so bring up the "
                f"first row with a non-zero entry there.",
                highlight_row=p, highlight_col=col,
            )

        pivot = matrix[p][col]
        for i in range(p + 1, n):
            entry = matrix[i][col]
            if entry.is_zero():
                continue
            factor = entry.div(pivot)
            for j in range(n + 1):
                matrix[i][j] = matrix[i][j].sub(factor.mul(matrix[p][j]))
            _record(
                steps, matrix,
                f"R{i + 1} → R{i + 1} - ({factor})R{p + 1}",
                RowOperation("eliminate", target=i, source=p, factor=factor),
                f"Clear the entry below the pivot {pivot} in column {col + 1}.",
                highlight_row=i, highlight_col=col,
            )
        pivot_cols.append(col)
        p += 1
    return pivot_cols


# ── Phase 3: normal form ────────────────────────────────────────────────

def normal_form(matrix, steps=None) -> list:
    """Turn a row-echelon *matrix* (modified in place) into normal form.

    Works from the last row up: each pivot is scaled to one and cleared
    from every row above it.  Running it on a matrix already in normal
    form records nothing and changes nothing.
    """
    n = len(matrix)
    for i in range(n - 1, -1, -1):
        pivot_col = _pivot_col(matrix[i], n)
        if pivot_col == -1:
            continue

        pivot = matrix[i][pivot_col]
        if not pivot.is_one():
            scale = pivot.reciprocal()
            for j in range(n + 1):
                matrix[i][j] = matrix[i][j].div(pivot)
            _record(
                steps, matrix,
                f"R{i + 1} → ({scale})R{i + 1} (Normalize pivot)",
                RowOperation("normalize", target=i, factor=scale),
                f"Divide R{i + 1} by {pivot} so its pivot becomes 1.",
                highlight_row=i, highlight_col=pivot_col,
            )

        for k in range(i - 1, -1, -1):
            factor = matrix[k][pivot_col]
            if factor.is_zero():
                continue
            for j in range(n + 1):
                matrix[k][j] = matrix[k][j].sub(factor.mul(matrix[i][j]))
            _record(
                steps, matrix,
                f"R{k + 1} → R{k + 1} - ({factor})R{i + 1}",
                RowOperation("eliminate", target=k, source=i, factor=factor),
                f"Clear the entry above the pivot in column {pivot_col + 1}.",
                highlight_row=k, highlight_col=pivot_col,
            )
    return matrix


# ── Phases 4 & 5: rank and classification ───────────────────────────────

def compute_ranks(matrix) -> tuple:
    """Return ``(rank_a, rank_aug)`` of a row-echelon augmented matrix."""
    n = len(matrix)
    rank_a = 0
    rank_aug = 0
    for row in matrix:
        zero_in_a = all(v.is_zero() for v in row[:n])
        if not zero_in_a:
            rank_a += 1
        if not zero_in_a or not row[n].is_zero():
            rank_aug += 1
    return rank_a, rank_aug


def classify(rank_a: int, rank_aug: int, n: int) -> SolutionType:
    if rank_a < rank_aug:
        return SolutionType.NONE
    if rank_a < n:
        return SolutionType.INFINITE
    return SolutionType.UNIQUE


# ── Phase 6: solution extraction ────────────────────────────────────────

def _var(j: int) -> str:
    return f"x_{j + 1}"


def _back_substitute(matrix, reduced: bool) -> list:
    n = len(matrix)
    if reduced:
        # Normal form with full rank is the identity: read the last column.
        return [matrix[i][n] for i in range(n)]
    x = [None] * n
    for i in range(n - 1, -1, -1):
        total = Rational.zero()
        for j in range(i + 1, n):
            total = total.add(matrix[i][j].mul(x[j]))
        x[i] = matrix[i][n].sub(total).div(matrix[i][i])
    return x


def _parametric(matrix) -> tuple:
    """Express every variable in terms of the free-variable parameters.

    Rows are resolved bottom-up, substituting already derived pivot
    expressions, so the result is exact for any row-echelon matrix, reduced
    or not.
    """
    n = len(matrix)
    pivot_cols = {c for c in (_pivot_col(row, n) for row in matrix) if c != -1}

    assignment = [None] * n
    lines = []
    parameters = []
    for j in range(n):
        if j in pivot_cols:
            continue
        param = Parameter(len(parameters), parameter_name(len(parameters)))
        parameters.append(param.name)
        assignment[j] = LinearExpression.of_parameter(param)
        lines.append((j, f"{_var(j)} = {param.name} (free)"))

    for i in range(n - 1, -1, -1):
        pivot_col = _pivot_col(matrix[i], n)
        if pivot_col == -1:
            continue
        pivot = matrix[i][pivot_col]
        expr = LinearExpression.of_constant(matrix[i][n].div(pivot))
        for j in range(pivot_col + 1, n):
            coeff = matrix[i][j]
            if coeff.is_zero():
                continue
            expr = expr.sub(assignment[j].scale(coeff.div(pivot)))
        assignment[pivot_col] = expr
        lines.append((pivot_col, f"{_var(pivot_col)} = {expr.format()}"))

    lines.sort(key=lambda item: item[0])
    free_columns = tuple(j for j in range(n) if j not in pivot_cols)
    return (tuple(line for _, line in lines), tuple(assignment),
            tuple(parameters), free_columns)


def _inconsistent_row(matrix) -> int:
    n = len(matrix)
    for i, row in enumerate(matrix):
        if _pivot_col(row, n) == -1 and not row[n].is_zero():
            return i
    return -1


def extract_solution(matrix, solution_type: SolutionType, reduced: bool = False) -> tuple:
    """Return ``(solution_text, solution, parameters, free_columns)`` for a
    classified matrix; only an infinite family has free columns.
    """
    n = len(matrix)
    if solution_type == SolutionType.NONE:
        i = _inconsistent_row(matrix)
        text = (
            f"System is inconsistent: R{i + 1} reduces to "
            f"0 = {matrix[i][n]}, which is never true."
        )
        return (text,), (), (), ()

    if solution_type == SolutionType.UNIQUE:
        x = _back_substitute(matrix, reduced)
        text = tuple(f"{_var(j)} = {v}" for j, v in enumerate(x))
        return text, tuple(LinearExpression.of_constant(v) for v in x), (), ()

    return _parametric(matrix)


# ── Public entry points ─────────────────────────────────────────────────

def solve(A, b, reduce_to_normal_form: bool = False) -> SolverResult:
    """Solve ``A·x = b`` exactly and return the full elimination transcript.

    *A* is an N×N grid and *b* a length-N sequence of :class:`Rational`.
    Raises ShapeMismatchError for a bad shape; a DivideByZeroError from the
    arithmetic aborts the solve without a partial result.
    """
    matrix = build_augmented(A, b)
    n = len(matrix)
    steps = []

    _record(
        steps, matrix, "Initial Augmented Matrix [A|b]",
        RowOperation("initial"),
        f"Write the {n}×{n} coefficients with the right-hand side "
        f"appended as column {n + 1}.",
    )

    forward_eliminate(matrix, steps)

    if reduce_to_normal_form:
        _record(
            steps, matrix, "Beginning reduction to RREF...",
            RowOperation("marker"),
            "Work upward from the last pivot, scaling each pivot to 1 and "
            "clearing the entries above it.",
        )
        normal_form(matrix, steps)

    rank_a, rank_aug = compute_ranks(matrix)
    solution_type = classify(rank_a, rank_aug, n)
    solution_text, solution, parameters, free_columns = extract_solution(
        matrix, solution_type, reduce_to_normal_form
    )

    LOG.info("Solved %dx%d system: %s (rank A = %d, rank [A|b] = %d, %d steps)",
             n, n, solution_type.value, rank_a, rank_aug, len(steps))

    return SolverResult(
        steps=tuple(steps),
        final_matrix=snapshot(matrix),
        rank_a=rank_a,
        rank_aug=rank_aug,
        solution_type=solution_type,
        solution_text=solution_text,
        solution=solution,
        parameters=parameters,
        free_columns=free_columns,
        reduced=reduce_to_normal_form,
    )


def solve_cells(matrix_cells, vector_cells, reduce_to_normal_form: bool = False,
                strict: bool = False) -> SolverResult:
    """Parse text cells (as typed into a grid) and solve the system."""
    A = [[parse_cell(cell, strict=strict) for cell in row] for row in matrix_cells]
    b = [parse_cell(cell, strict=strict) for cell in vector_cells]
    return solve(A, b, reduce_to_normal_form)


# ── Replay ──────────────────────────────────────────────────────────────

def apply_operation(matrix, operation: RowOperation) -> tuple:
    """Apply *operation* to a snapshot and return the new snapshot."""
    rows = [list(row) for row in matrix]
    kind = operation.kind
    if kind == "swap":
        t, s = operation.target, operation.source
        rows[t], rows[s] = rows[s], rows[t]
    elif kind == "eliminate":
        t, s, f = operation.target, operation.source, operation.factor
        rows[t] = [v.sub(f.mul(w)) for v, w in zip(rows[t], rows[s])]
    elif kind == "normalize":
        t, f = operation.target, operation.factor
        rows[t] = [v.mul(f) for v in rows[t]]
    elif kind not in ("initial", "marker"):
        raise ValueError(f"Unknown row operation: {kind!r}")
    return snapshot(rows)


def replay(steps) -> bool:
    """True if re-applying each step's operation reproduces its snapshot."""
    if not steps:
        return True
    current = steps[0].matrix
    for step in steps[1:]:
        current = apply_operation(current, step.operation)
        if current != step.matrix:
            return False
    return True
