"""Error types raised by the GaussSolver core.

All of them derive from ``ValueError`` so callers that only know about
"bad input" keep working.
"""


class SolverError(ValueError):
    """Base class for every error the solver raises on bad input."""


class MalformedNumberError(SolverError):
    """A cell could not be read as an integer, decimal, or fraction."""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        message = f"Could not parse number: '{text}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class DivideByZeroError(SolverError, ZeroDivisionError):
    """A fraction with a zero denominator, or a division by zero."""


class ShapeMismatchError(SolverError):
    """The coefficient grid is not square or b does not match it."""
