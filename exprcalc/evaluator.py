"""Recursive-descent evaluator for single-line arithmetic expressions.

Parsing and evaluation are fused: each grammar rule returns the float value
of what it consumed, so no token list or tree is ever built.

Grammar:
    Expression := Term (('+' | '-') Term)*
    Term       := Factor (('*' | '/') Factor)*
    Factor     := '(' Expression ')' | '-' Factor | Number
    Number     := digits with at most one '.'
"""

from __future__ import annotations

import logging
from typing import Optional

from exprcalc.cursor import Cursor
from exprcalc.errors import ErrorKind, EvaluationError, make_error
from exprcalc.settings import DEFAULT_MAX_DEPTH, validate_max_depth

log = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")


class Evaluator:
    """Evaluates one expression. Create a fresh instance per call."""

    def __init__(self, expression: str, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.expression = expression
        self.max_depth = validate_max_depth(max_depth)
        self.cursor = Cursor(expression)
        self.depth = 0

    def _fail(self, kind: ErrorKind, position: Optional[int] = None) -> EvaluationError:
        if position is None:
            position = self.cursor.column
        return make_error(kind, position=position, expression=self.expression)

    def run(self) -> float:
        if self.cursor.at_end:
            raise make_error(ErrorKind.EMPTY_EXPRESSION, expression=self.expression)

        value = self._expression()

        # Also rejects a stray ')' at the top level
        if not self.cursor.at_end:
            raise self._fail(ErrorKind.TRAILING_INPUT)
        return value

    def _expression(self) -> float:
        result = self._term()
        while True:
            op = self.cursor.peek()
            if op == "+":
                self.cursor.advance()
                result += self._term()
            elif op == "-":
                self.cursor.advance()
                result -= self._term()
            else:
                return result

    def _term(self) -> float:
        result = self._factor()
        while True:
            op = self.cursor.peek()
            if op == "*":
                self.cursor.advance()
                result *= self._factor()
            elif op == "/":
                self.cursor.advance()
                start = self.cursor.column
                divisor = self._factor()
                if divisor == 0.0:
                    raise self._fail(ErrorKind.DIVISION_BY_ZERO, start)
                result /= divisor
            else:
                return result

    def _factor(self) -> float:
        ch = self.cursor.peek()

        if ch == "(":
            self._enter()
            self.cursor.advance()
            value = self._expression()
            if self.cursor.peek() != ")":
                raise self._fail(ErrorKind.UNTERMINATED_PARENTHESIS)
            self.cursor.advance()
            self.depth -= 1
            return value

        if ch == "-":
            self._enter()
            self.cursor.advance()
            value = -self._factor()
            self.depth -= 1
            return value

        if ch is not None and (ch in _DIGITS or ch == "."):
            return self._number()

        raise self._fail(ErrorKind.UNEXPECTED_TOKEN)

    def _enter(self) -> None:
        if self.depth >= self.max_depth:
            raise self._fail(ErrorKind.NESTING_TOO_DEEP)
        self.depth += 1

    def _number(self) -> float:
        start = self.cursor.column
        chars = []
        seen_dot = False
        while True:
            ch = self.cursor.peek()
            if ch is not None and ch in _DIGITS:
                chars.append(ch)
            elif ch == "." and not seen_dot:
                seen_dot = True
                chars.append(ch)
            else:
                # A second '.' stays unconsumed for the enclosing rule
                break
            self.cursor.advance()

        text = "".join(chars)
        try:
            return float(text)
        except ValueError:
            raise self._fail(ErrorKind.INVALID_NUMBER, start) from None


def evaluate(expression: str, max_depth: Optional[int] = None) -> float:
    """Evaluate an arithmetic expression and return its value.

    Args:
        expression: Numbers, ``+ - * /``, unary minus and parentheses.
            Whitespace anywhere is ignored.
        max_depth: Limit on nested parentheses and unary minus.
            Defaults to DEFAULT_MAX_DEPTH; at most MAX_ALLOWED_DEPTH.

    Returns:
        The value as a float.

    Raises:
        EvaluationError: On the first syntax or arithmetic error. Division by
            zero raises DivisionByZeroError, which is also a ZeroDivisionError.
        ValueError: max_depth is outside 1..MAX_ALLOWED_DEPTH.
    """
    evaluator = Evaluator(
        expression,
        max_depth=DEFAULT_MAX_DEPTH if max_depth is None else max_depth,
    )
    log.debug("evaluating %r", evaluator.cursor.text)
    try:
        return evaluator.run()
    except EvaluationError as e:
        log.debug("evaluation of %r failed: %s", expression, e)
        raise
