"""Data models for exprcalc.

EvaluationResult, BatchReport and calculate(): the typed, non-raising
structures that flow through batch -> render -> CLI.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from exprcalc.errors import ErrorKind, EvaluationError
from exprcalc.evaluator import evaluate


@dataclass
class EvaluationResult:
    """Outcome of evaluating a single expression."""

    expression: str
    value: Optional[float] = None
    error: Optional[ErrorKind] = None
    message: str = ""
    position: Optional[int] = None
    line: Optional[int] = None  # source line, for batch runs

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def verdict(self) -> str:
        return "ok" if self.ok else "error"

    @classmethod
    def from_error(cls, expression: str, err: EvaluationError) -> EvaluationResult:
        return cls(
            expression=expression,
            error=err.kind,
            message=str(err),
            position=err.position,
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        d = {
            "expression": self.expression,
            "verdict": self.verdict,
            "value": self.value,
        }
        if self.error:
            d["error"] = {
                "kind": self.error.value,
                "message": self.message,
                "position": self.position,
            }
        if self.line is not None:
            d["line"] = self.line
        return d

    @classmethod
    def from_dict(cls, d: dict) -> EvaluationResult:
        """Deserialize from a dict produced by to_dict()."""
        err = d.get("error") or {}
        kind = err.get("kind")
        return cls(
            expression=d.get("expression", ""),
            value=d.get("value"),
            error=ErrorKind(kind) if kind else None,
            message=err.get("message", ""),
            position=err.get("position"),
            line=d.get("line"),
        )


def calculate(expression: str, *, max_depth: Optional[int] = None) -> EvaluationResult:
    """Evaluate ``expression`` and report the outcome as a value, never raising
    for malformed input or division by zero.

    Raises:
        ValueError: max_depth is outside 1..MAX_ALLOWED_DEPTH.
    """
    try:
        value = evaluate(expression, max_depth=max_depth)
    except EvaluationError as e:
        return EvaluationResult.from_error(expression, e)
    return EvaluationResult(expression=expression, value=value)


@dataclass
class BatchReport:
    """Results of evaluating every expression in one file."""

    source: str
    timestamp: str
    results: list[EvaluationResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def total(self) -> int:
        return len(self.results)

    def error_counts(self) -> dict[ErrorKind, int]:
        """How often each error kind occurred, in taxonomy order."""
        counts: dict[ErrorKind, int] = {}
        for kind in ErrorKind:
            n = sum(1 for r in self.results if r.error is kind)
            if n:
                counts[kind] = n
        return counts

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "timestamp": self.timestamp,
            "passed": self.passed,
            "failed": self.failed,
            "total": self.total,
            "errors": {k.value: n for k, n in self.error_counts().items()},
            "results": [r.to_dict() for r in self.results],
        }

    @classmethod
    def from_dict(cls, d: dict) -> BatchReport:
        return cls(
            source=d.get("source", ""),
            timestamp=d.get("timestamp", ""),
            results=[EvaluationResult.from_dict(r) for r in d.get("results", [])],
        )

    def save(self, path: Path) -> None:
        """Write the report as JSON, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> Optional[BatchReport]:
        """Load a saved report; None if missing, unreadable or malformed."""
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                return None
            return cls.from_dict(data)
        except (ValueError, TypeError, AttributeError, OSError):
            return None
