"""Exact fractions for the elimination engine.

A :class:`Rational` is always stored in lowest terms with a positive
denominator, so two instances are equal exactly when their
``(numerator, denominator)`` pairs are equal.
"""

import re
from math import gcd

import sympy

from solver.errors import DivideByZeroError, MalformedNumberError

# Optional sign, integer digits, optional fractional part and exponent
# ("5.", ".5", "-1.25", "2.5e-1").
_DECIMAL_RE = re.compile(r'^([+-]?)(\d*)(?:\.(\d*))?(?:[eE]([+-]?\d+))?$')

# Larger exponents are rejected rather than expanded into huge integers.
_MAX_EXPONENT = 1000


class Rational:
    """Immutable exact fraction ``numerator / denominator``."""

    __slots__ = ("_num", "_den")

    def __init__(self, numerator: int = 0, denominator: int = 1):
        if not isinstance(numerator, int) or not isinstance(denominator, int):
            raise TypeError(
                f"Rational needs integer parts, got {type(numerator).__name__} "
                f"and {type(denominator).__name__}."
            )
        if denominator == 0:
            raise DivideByZeroError("Denominator cannot be zero.")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        common = gcd(numerator, denominator)
        object.__setattr__(self, "_num", numerator // common)
        object.__setattr__(self, "_den", denominator // common)

    def __setattr__(self, name, value):
        raise AttributeError("Rational is immutable")

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    # ── Constructors ─────────────────────────────────────────────────────

    @classmethod
    def from_integer_pair(cls, numerator: int, denominator: int = 1) -> "Rational":
        return cls(numerator, denominator)

    @classmethod
    def from_decimal_string(cls, text: str) -> "Rational":
        """Parse ``"3"``, ``"-1.25"``, ``".5"``, ``"2.5e-1"`` or ``"3/4"``.

        Empty or unparseable decimal text yields zero so half-typed cells
        never break a solve.  Text containing ``/`` must be exactly two
        integers: anything else raises :class:`MalformedNumberError`, and a
        zero denominator raises :class:`DivideByZeroError`.
        """
        return parse_cell(text)

    @classmethod
    def zero(cls) -> "Rational":
        return cls(0)

    @classmethod
    def one(cls) -> "Rational":
        return cls(1)

    # ── Arithmetic ───────────────────────────────────────────────────────

    def add(self, other: "Rational") -> "Rational":
        return Rational(self._num * other._den + other._num * self._den,
                        self._den * other._den)

    def sub(self, other: "Rational") -> "Rational":
        return Rational(self._num * other._den - other._num * self._den,
                        self._den * other._den)

    def mul(self, other: "Rational") -> "Rational":
        return Rational(self._num * other._num, self._den * other._den)

    def div(self, other: "Rational") -> "Rational":
        if other._num == 0:
            raise DivideByZeroError("Division by zero.")
        return Rational(self._num * other._den, self._den * other._num)

    def abs(self) -> "Rational":
        return Rational(abs(self._num), self._den)

    def negate(self) -> "Rational":
        return Rational(-self._num, self._den)

    def reciprocal(self) -> "Rational":
        return Rational.one().div(self)

    def sign(self) -> int:
        return (self._num > 0) - (self._num < 0)

    # ── Predicates ───────────────────────────────────────────────────────

    def equals(self, other: "Rational") -> bool:
        return self._num == other._num and self._den == other._den

    def is_zero(self) -> bool:
        return self._num == 0

    def is_one(self) -> bool:
        return self._num == 1 and self._den == 1

    def is_integer(self) -> bool:
        return self._den == 1

    # ── Rendering ────────────────────────────────────────────────────────

    def to_display_string(self) -> str:
        if self._den == 1:
            return f"{self._num}"
        return f"{self._num}/{self._den}"

    def to_latex(self) -> str:
        if self._den == 1:
            return f"{self._num}"
        if self._num < 0:
            return f"-\\frac{{{-self._num}}}{{{self._den}}}"
        return f"\\frac{{{self._num}}}{{{self._den}}}"

    def to_sympy(self) -> sympy.Rational:
        return sympy.Rational(self._num, self._den)

    # ── Python protocol ──────────────────────────────────────────────────

    def __add__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.div(other)

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.abs()

    def __eq__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash((self._num, self._den))

    def __float__(self):
        return self._num / self._den

    def __bool__(self):
        return self._num != 0

    def __str__(self):
        return self.to_display_string()

    def __repr__(self):
        return f"Rational({self._num}, {self._den})"


def _parse_int(part: str, text: str) -> int:
    try:
        return int(part.strip())
    except ValueError:
        raise MalformedNumberError(text, "fraction parts must be integers") from None


def parse_cell(text, strict: bool = False) -> Rational:
    """Convert one free-form cell into a :class:`Rational`.

    With ``strict=False`` (the interactive default) empty or unreadable
    decimal text becomes zero.  With ``strict=True`` it raises
    :class:`MalformedNumberError` instead.
    """
    if text is None:
        text = ""
    s = str(text).strip()
    if not s:
        if strict:
            raise MalformedNumberError(s, "empty cell")
        return Rational.zero()

    if "/" in s:
        parts = s.split("/")
        if len(parts) != 2:
            raise MalformedNumberError(s, "expected exactly one '/'")
        numerator = _parse_int(parts[0], s)
        denominator = _parse_int(parts[1], s)
        return Rational(numerator, denominator)

    m = _DECIMAL_RE.match(s)
    if m is None or not (m.group(2) or m.group(3)):
        if strict:
            raise MalformedNumberError(s)
        return Rational.zero()

    sign, whole, frac = m.group(1), m.group(2), m.group(3) or ""
    exponent = int(m.group(4) or 0)
    if abs(exponent) > _MAX_EXPONENT:
        raise MalformedNumberError(s, f"exponent beyond ±{_MAX_EXPONENT}")
    # k digits after the point give the denominator 10**k; the exponent
    # then shifts the point on whichever side it lands.
    numerator = int(f"{sign}{whole or '0'}{frac}")
    denominator = 10 ** len(frac)
    if exponent >= 0:
        numerator *= 10 ** exponent
    else:
        denominator *= 10 ** -exponent
    return Rational(numerator, denominator)
