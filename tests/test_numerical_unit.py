"""Tests for the decimal (NumPy) view of exact results."""

import numpy as np
import pytest

from solver.engine import solve
from solver.numerical import _fmt_num, decimal_solution_text, residual_norm, to_array
from solver.rational import Rational


def grid(rows):
    return [[Rational(v) for v in row] for row in rows]


def vec(*values):
    return [Rational(v) for v in values]


# ── _fmt_num helper ──────────────────────────────────────────────────────

class TestFmtNum:
    def test_integer(self):
        assert _fmt_num(7.0) == "7"

    def test_clean_decimal(self):
        assert _fmt_num(2.5) == "2.5"

    def test_trailing_zeros_stripped(self):
        assert _fmt_num(1.50000) == "1.5"

    def test_very_small_rounds_to_int(self):
        assert _fmt_num(3.0000000000001) == "3"


class TestDecimalView:
    def test_to_array(self):
        arr = to_array(((Rational(1, 2), Rational(-3)), (Rational(0), Rational(1, 4))))
        assert arr.dtype == np.float64
        assert np.allclose(arr, [[0.5, -3.0], [0.0, 0.25]])

    def test_unique_solution_in_decimals(self):
        result = solve(grid([[2, 0], [0, 2]]), vec(1, 1))
        assert decimal_solution_text(result) == ("x_1 = 0.5", "x_2 = 0.5")

    def test_parametric_solution_in_decimals(self):
        result = solve(grid([[2, 1], [4, 2]]), vec(1, 2))
        assert decimal_solution_text(result) == ("x_1 = 0.5 - 0.5·t", "x_2 = t (free)")

    def test_inconsistent_text_unchanged(self):
        result = solve(grid([[1, 1], [2, 2]]), vec(3, 7))
        assert decimal_solution_text(result) == result.solution_text

    def test_free_variable_line_found_by_column(self):
        # x_1 = t ends in a bare parameter, x_2 is the free column.
        result = solve(grid([[1, -1], [0, 0]]), vec(0, 0))
        assert result.free_columns == (1,)
        assert decimal_solution_text(result) == ("x_1 = t", "x_2 = t (free)")

    def test_residual_of_exact_solution_is_tiny(self):
        result = solve(grid([[1, 2], [3, 4]]), vec(5, 6))
        assert residual_norm(result) < 1e-12

    def test_residual_uses_the_original_system(self):
        A = [[Rational(1, 3), Rational(1)], [Rational(2), Rational(-1, 7)]]
        b = [Rational(1, 10), Rational(5)]
        result = solve(A, b, reduce_to_normal_form=True)
        assert residual_norm(result) < 1e-12

    @pytest.mark.parametrize("rhs", [(3, 6), (3, 7)])
    def test_residual_needs_unique_solution(self, rhs):
        with pytest.raises(ValueError):
            residual_norm(solve(grid([[1, 1], [2, 2]]), vec(*rhs)))
