"""Error taxonomy for exprcalc.

ErrorKind enum, the message each kind reports, and the EvaluationError
hierarchy raised by the evaluator. Every error is terminal: evaluation stops
at the first one.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Why an expression could not be evaluated."""

    EMPTY_EXPRESSION = "EmptyExpression"
    UNEXPECTED_TOKEN = "UnexpectedToken"
    UNTERMINATED_PARENTHESIS = "UnterminatedParenthesis"
    DIVISION_BY_ZERO = "DivisionByZero"
    INVALID_NUMBER = "InvalidNumber"
    TRAILING_INPUT = "TrailingInput"
    NESTING_TOO_DEEP = "NestingTooDeep"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


# Existing callers match on these strings; keep them stable.
_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.EMPTY_EXPRESSION: "Empty expression",
    ErrorKind.UNEXPECTED_TOKEN: "Unexpected token or end of expression",
    ErrorKind.UNTERMINATED_PARENTHESIS: "Missing closing parenthesis",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero",
    ErrorKind.INVALID_NUMBER: "Invalid number",
    ErrorKind.TRAILING_INPUT: "Unexpected trailing input",
    ErrorKind.NESTING_TOO_DEEP: "Expression nested too deeply",
}


class EvaluationError(ValueError):
    """An expression failed to parse or evaluate.

    Attributes:
        kind: Which ErrorKind stopped evaluation.
        position: 0-based column in the caller's original string, or None
            when the error is not tied to a character (empty input).
        expression: The original input.
    """

    def __init__(
        self,
        kind: ErrorKind,
        position: Optional[int] = None,
        expression: str = "",
    ) -> None:
        self.kind = kind
        self.position = position
        self.expression = expression
        text = kind.message
        if position is not None:
            text = f"{text} at position {position}"
        super().__init__(text)


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    """Right-hand side of '/' evaluated to exactly zero."""


def make_error(
    kind: ErrorKind,
    position: Optional[int] = None,
    expression: str = "",
) -> EvaluationError:
    """Build the exception class matching ``kind``."""
    cls = DivisionByZeroError if kind is ErrorKind.DIVISION_BY_ZERO else EvaluationError
    return cls(kind, position=position, expression=expression)
