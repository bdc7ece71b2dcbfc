"""Linear expressions over free-variable parameters.

A parametric solution line such as ``x_1 = 3 - 2t + (1/2)s`` is held as a
:class:`LinearExpression` (a constant plus one coefficient per parameter)
and only turned into text by :meth:`LinearExpression.format`.
"""

from dataclasses import dataclass

from solver.rational import Rational

_BASE_NAMES = ("t", "s", "r", "q")


def parameter_name(index: int) -> str:
    """Name of the *index*-th free variable (0-based): t, s, r, q, t5, t6, …"""
    if index < len(_BASE_NAMES):
        return _BASE_NAMES[index]
    return f"t{index + 1}"


@dataclass(frozen=True)
class Parameter:
    index: int
    name: str


@dataclass(frozen=True)
class LinearExpression:
    """``constant + Σ coefficient·parameter`` with exact coefficients.

    ``terms`` is kept sorted by parameter index and never holds a zero
    coefficient.
    """

    constant: Rational
    terms: tuple = ()

    @classmethod
    def of_constant(cls, value: Rational) -> "LinearExpression":
        return cls(value, ())

    @classmethod
    def of_parameter(cls, parameter: Parameter) -> "LinearExpression":
        return cls(Rational.zero(), ((parameter, Rational.one()),))

    def is_constant(self) -> bool:
        return not self.terms

    def coefficient(self, parameter: Parameter) -> Rational:
        for p, c in self.terms:
            if p == parameter:
                return c
        return Rational.zero()

    def add(self, other: "LinearExpression") -> "LinearExpression":
        merged = dict(self.terms)
        for p, c in other.terms:
            merged[p] = merged.get(p, Rational.zero()).add(c)
        terms = tuple(
            (p, c) for p, c in sorted(merged.items(), key=lambda item: item[0].index)
            if not c.is_zero()
        )
        return LinearExpression(self.constant.add(other.constant), terms)

    def scale(self, factor: Rational) -> "LinearExpression":
        if factor.is_zero():
            return LinearExpression.of_constant(Rational.zero())
        return LinearExpression(
            self.constant.mul(factor),
            tuple((p, c.mul(factor)) for p, c in self.terms),
        )

    def sub(self, other: "LinearExpression") -> "LinearExpression":
        return self.add(other.scale(Rational(-1)))

    def to_sympy(self, symbols: dict):
        """Build the SymPy expression, *symbols* mapping parameter name → Symbol."""
        expr = self.constant.to_sympy()
        for p, c in self.terms:
            expr += c.to_sympy() * symbols[p.name]
        return expr

    def format(self, number=None) -> str:
        """Render as ``"3 - 2t + (1/2)s"``.

        The constant is omitted when zero, a term's printed sign is the sign
        of its coefficient, and a bare ``"0"`` is returned for the zero
        expression.  *number* overrides how magnitudes are printed.
        """
        fmt = number or _fmt_magnitude
        parts = []
        if not self.constant.is_zero():
            parts.append(fmt(self.constant, standalone=True))
        for p, c in self.terms:
            magnitude = c.abs()
            if magnitude.is_one():
                core = p.name
            else:
                core = f"{fmt(magnitude, standalone=False)}{p.name}"
            if not parts:
                parts.append(core if c.sign() > 0 else f"-{core}")
            else:
                parts.append(("+ " if c.sign() > 0 else "- ") + core)
        return " ".join(parts) if parts else "0"

    def __str__(self):
        return self.format()


def _fmt_magnitude(value: Rational, standalone: bool) -> str:
    if standalone or value.is_integer():
        return value.to_display_string()
    return f"({value.to_display_string()})"
