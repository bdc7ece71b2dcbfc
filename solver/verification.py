"""Check an extracted solution against the original system using SymPy."""

import sympy
from sympy import simplify

from solver.engine import SolutionType, SolverResult


def _sympy_system(A, b):
    A_sym = sympy.Matrix([[v.to_sympy() for v in row] for row in A])
    b_sym = sympy.Matrix([v.to_sympy() for v in b])
    return A_sym, b_sym


def verify_solution(A, b, result: SolverResult) -> tuple:
    """Substitute *result*'s solution into ``A·x = b``.

    Free-variable parameters become SymPy symbols, so a parametric family
    passes only if every equation holds identically.  Returns
    ``(verification_steps, status)`` where status is ``"pass"``, ``"fail"``
    or ``"skipped"`` (inconsistent systems have nothing to check).
    """
    if result.solution_type == SolutionType.NONE:
        return [], "skipped"

    A_sym, b_sym = _sympy_system(A, b)
    params = {name: sympy.Symbol(name) for name in result.parameters}
    x = sympy.Matrix([expr.to_sympy(params) for expr in result.solution])

    verification_steps = []
    verification_steps.append({
        "description": "Substitute into every equation",
        "expression": ", ".join(
            f"x_{j + 1} = {expr}" for j, expr in enumerate(result.solution)
        ),
        "explanation": "We plug the solution back into each original equation.",
    })

    all_ok = True
    for i in range(A_sym.rows):
        lhs = simplify((A_sym.row(i) * x)[0])
        rhs = b_sym[i]
        ok = simplify(lhs - rhs) == 0
        all_ok = all_ok and ok
        verification_steps.append({
            "description": f"Equation ({i + 1})",
            "expression": f"LHS = {lhs},  RHS = {rhs}  →  {'✓' if ok else '✗'}",
            "explanation": (
                f"Both sides equal {rhs}."
                if ok else "Sides differ — the solution does not satisfy this row."
            ),
        })

    if all_ok:
        verification_steps.append({
            "description": "All equations verified",
            "expression": "All equations satisfied  ✓",
            "explanation": (
                "The solution holds for every value of the parameters."
                if result.parameters else "The solution is correct."
            ),
        })

    for i, s in enumerate(verification_steps, 1):
        s["step_number"] = i
    return verification_steps, "pass" if all_ok else "fail"
