"""
GaussSolver — Entry point.

Solve a system from the command line and print the elimination trace::

    python main.py "1,1;2,2" "3,6" --rref
"""

import argparse
import logging
import sys

from solver import SolutionType, SolverError, solve_cells
from solver import settings as settings_store
from solver.formatting import format_matrix_latex, format_trace
from solver.numerical import _fmt_num, decimal_solution_text, residual_norm


def _split_matrix(text: str) -> list:
    return [[cell.strip() for cell in row.split(",")] for row in text.split(";")]


def _split_vector(text: str) -> list:
    return [cell.strip() for cell in text.replace(";", ",").split(",")]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve A·x = b exactly by Gaussian elimination.",
    )
    parser.add_argument("matrix", help='rows separated by ";", cells by ",", e.g. "1,1;2,2"')
    parser.add_argument("vector", help='right-hand side, e.g. "3,6"')
    parser.add_argument("--rref", action="store_true", default=None,
                        help="reduce to normal form before extracting the solution")
    parser.add_argument("--decimal", action="store_true",
                        help="show the solution with decimal numbers")
    parser.add_argument("--latex", action="store_true",
                        help="also print the final matrix as LaTeX")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="reject unreadable cells instead of reading them as 0")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log every recorded step")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    defaults = settings_store.get_settings()
    reduce = defaults["reduce_to_normal_form"] if args.rref is None else args.rref
    strict = defaults["strict_parsing"] if args.strict is None else args.strict

    try:
        result = solve_cells(_split_matrix(args.matrix), _split_vector(args.vector),
                             reduce_to_normal_form=reduce, strict=strict)
    except SolverError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    lines = None
    decimal = args.decimal or defaults["display"] == "decimal"
    if decimal:
        lines = decimal_solution_text(result)
    print(format_trace(result, lines))
    if decimal and result.solution_type == SolutionType.UNIQUE:
        print(f"residual ||A·x - b|| = {_fmt_num(residual_norm(result))}")
    if args.latex:
        print()
        print(format_matrix_latex(result.final_matrix))
    return 0


if __name__ == "__main__":
    sys.exit(main())
