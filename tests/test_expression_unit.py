import pytest

from solver.expression import LinearExpression, Parameter, parameter_name
from solver.rational import Rational

T = Parameter(0, "t")
S = Parameter(1, "s")


def _expr(constant, *terms):
    return LinearExpression(Rational(*constant), tuple((p, Rational(*c)) for p, c in terms))


@pytest.mark.parametrize(
    "index,name",
    [(0, "t"), (1, "s"), (2, "r"), (3, "q"), (4, "t5"), (9, "t10")],
)
def test_parameter_names_are_unbounded(index, name):
    assert parameter_name(index) == name


@pytest.mark.parametrize(
    "expr,text",
    [
        (_expr((0,)), "0"),
        (_expr((7,)), "7"),
        (_expr((-1, 2)), "-1/2"),
        (_expr((3,), (T, (-1,))), "3 - t"),
        (_expr((0,), (T, (1,))), "t"),
        (_expr((0,), (T, (-2,))), "-2t"),
        (_expr((0,), (T, (1, 2))), "(1/2)t"),
        (_expr((-1, 2), (T, (1,)), (S, (-3,))), "-1/2 + t - 3s"),
        (_expr((2,), (T, (-3, 4))), "2 - (3/4)t"),
    ],
)
def test_format(expr, text):
    assert expr.format() == text
    assert str(expr) == text


def test_add_merges_terms_and_drops_zeros():
    a = _expr((1,), (T, (1,)), (S, (2,)))
    b = _expr((2,), (T, (-1,)))
    total = a.add(b)
    assert total.constant == Rational(3)
    assert total.coefficient(T) == Rational(0)
    assert total.terms == ((S, Rational(2)),)


def test_terms_stay_in_parameter_order():
    a = LinearExpression.of_parameter(S)
    b = LinearExpression.of_parameter(T)
    assert [p.name for p, _ in a.add(b).terms] == ["t", "s"]


def test_scale_and_sub():
    a = _expr((2,), (T, (1,)))
    assert a.scale(Rational(-3, 2)) == _expr((-3,), (T, (-3, 2)))
    assert a.scale(Rational(0)).is_constant()
    assert a.sub(a) == LinearExpression.of_constant(Rational(0))


def test_to_sympy():
    import sympy

    t = sympy.Symbol("t")
    expr = _expr((3,), (T, (-1, 2)))
    assert sympy.simplify(expr.to_sympy({"t": t}) - (3 - t / 2)) == 0
