import dataclasses

from solver.engine import solve
from solver.expression import LinearExpression
from solver.rational import Rational
from solver.verification import verify_solution


def grid(rows):
    return [[Rational(v) for v in row] for row in rows]


def vec(*values):
    return [Rational(v) for v in values]


def test_unique_solution_passes():
    A, b = grid([[2, 1, -1], [-3, -1, 2], [-2, 1, 2]]), vec(8, -11, -3)
    steps, status = verify_solution(A, b, solve(A, b))
    assert status == "pass"
    assert steps[0]["description"] == "Substitute into every equation"
    assert steps[-1]["expression"] == "All equations satisfied  ✓"
    assert [s["step_number"] for s in steps] == list(range(1, len(steps) + 1))


def test_parametric_family_passes_for_every_parameter():
    A, b = grid([[1, 1, 1], [0, 1, 1], [0, 0, 0]]), vec(3, 1, 0)
    for reduce in (False, True):
        steps, status = verify_solution(A, b, solve(A, b, reduce_to_normal_form=reduce))
        assert status == "pass"
        assert "parameters" in steps[-1]["explanation"]


def test_inconsistent_system_is_skipped():
    A, b = grid([[1, 1], [2, 2]]), vec(3, 7)
    assert verify_solution(A, b, solve(A, b)) == ([], "skipped")


def test_wrong_solution_fails():
    A, b = grid([[1, 0], [0, 1]]), vec(5, 7)
    result = solve(A, b)
    wrong = dataclasses.replace(
        result,
        solution=(LinearExpression.of_constant(Rational(5)),
                  LinearExpression.of_constant(Rational(8))),
    )
    steps, status = verify_solution(A, b, wrong)
    assert status == "fail"
    assert "✗" in steps[2]["expression"]
