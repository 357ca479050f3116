"""Batch evaluation: read an expression file, evaluate each line, report.

Data flow per run:
1. Read the file, skipping blank lines and '#' comments
2. Evaluate each expression with calculate() (errors become results)
3. Assemble a BatchReport stamped with the UTC start time
4. Optionally save it as JSON
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from exprcalc.models import BatchReport, calculate
from exprcalc.settings import Settings

log = logging.getLogger(__name__)


def read_expressions(path: Path) -> list[tuple[int, str]]:
    """Return (line_number, expression) pairs from a text file.

    Line numbers are 1-based. Blank lines and lines whose first
    non-whitespace character is '#' are skipped.
    """
    entries = []
    text = path.read_text(encoding="utf-8")
    for lineno, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        entries.append((lineno, raw.rstrip("\n")))
    return entries


def run_batch(path: Path, settings: Optional[Settings] = None) -> BatchReport:
    """Evaluate every expression in ``path``.

    Raises:
        OSError: The file cannot be read.
    """
    settings = settings or Settings()
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    report = BatchReport(source=str(path), timestamp=timestamp)

    for lineno, expression in read_expressions(path):
        result = calculate(expression, max_depth=settings.max_depth)
        result.line = lineno
        report.results.append(result)

    log.debug(
        "batch %s: %d passed, %d failed", path, report.passed, report.failed
    )
    return report
