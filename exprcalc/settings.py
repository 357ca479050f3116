"""Runtime configuration for exprcalc.

Settings are read from EXPRCALC_* environment variables. Self-contained, no
config files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_DEPTH = 200

# Each '(' costs three Python frames (factor -> expression -> term). This
# ceiling keeps the deepest accepted input under the default interpreter
# recursion limit of 1000, with room for the caller's own frames.
MAX_ALLOWED_DEPTH = 250

ENV_MAX_DEPTH = "EXPRCALC_MAX_DEPTH"


def validate_max_depth(max_depth: int) -> int:
    """Return ``max_depth`` if it lies in 1..MAX_ALLOWED_DEPTH.

    Raises:
        ValueError: Out of range.
    """
    if not 1 <= max_depth <= MAX_ALLOWED_DEPTH:
        raise ValueError(
            f"max_depth must be between 1 and {MAX_ALLOWED_DEPTH}, got {max_depth}"
        )
    return max_depth


@dataclass(frozen=True)
class Settings:
    """Evaluator limits."""

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        validate_max_depth(self.max_depth)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Settings:
        """Build settings from the environment (os.environ by default).

        Raises:
            ValueError: EXPRCALC_MAX_DEPTH is set but not an integer in
                1..MAX_ALLOWED_DEPTH.
        """
        env = os.environ if env is None else env
        raw = env.get(ENV_MAX_DEPTH, "").strip()
        if not raw:
            return cls()
        try:
            depth = int(raw)
        except ValueError:
            raise ValueError(f"{ENV_MAX_DEPTH} must be an integer, got {raw!r}") from None
        return cls(max_depth=depth)

    def with_overrides(self, max_depth: Optional[int] = None) -> Settings:
        """Return a copy with CLI-style overrides applied (None keeps current)."""
        if max_depth is None:
            return self
        return Settings(max_depth=max_depth)
