"""exprcalc: arithmetic expression evaluator.

Evaluates single-line expressions made of numbers, + - * /, unary minus and
parentheses with a hand-written recursive-descent parser. No eval().

Usage:
    >>> from exprcalc import evaluate, calculate
    >>> evaluate("2 + 3 * 4")
    14.0
    >>> calculate("10 / (5 - 5)").error
    <ErrorKind.DIVISION_BY_ZERO: 'DivisionByZero'>

    python -m exprcalc eval "(2 + 3) * 4"
"""

from exprcalc.errors import DivisionByZeroError, ErrorKind, EvaluationError
from exprcalc.evaluator import evaluate
from exprcalc.models import BatchReport, EvaluationResult, calculate
from exprcalc.settings import Settings

__all__ = [
    "BatchReport",
    "DivisionByZeroError",
    "ErrorKind",
    "EvaluationError",
    "EvaluationResult",
    "Settings",
    "calculate",
    "evaluate",
]
