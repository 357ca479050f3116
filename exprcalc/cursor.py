"""Single-position cursor over a whitespace-stripped expression."""

from __future__ import annotations

from typing import Optional


class Cursor:
    """Peek/advance scanner over the non-whitespace characters of an input.

    Whitespace is removed up front. ``column`` maps the current position back
    to the caller's original string so errors can point at the right place.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self._columns = [i for i, ch in enumerate(source) if not ch.isspace()]
        self.text = "".join(source[i] for i in self._columns)
        self.pos = 0

    def __repr__(self) -> str:
        return f"Cursor(text={self.text!r}, pos={self.pos})"

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def remaining(self) -> str:
        return self.text[self.pos:]

    def peek(self) -> Optional[str]:
        """Current character, or None at end of input."""
        if self.at_end:
            return None
        return self.text[self.pos]

    def advance(self) -> Optional[str]:
        """Consume and return the current character (None at end of input)."""
        ch = self.peek()
        if ch is not None:
            self.pos += 1
        return ch

    @property
    def column(self) -> int:
        """Column of the current position in the original source.

        At end of input this is one past the last non-whitespace character.
        """
        if self.at_end:
            return self._columns[-1] + 1 if self._columns else 0
        return self._columns[self.pos]
