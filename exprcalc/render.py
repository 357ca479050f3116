"""Rich rendering for exprcalc: single results, batch tables, error kinds.

Values go to whichever console the caller passes; the CLI keeps values on
stdout and diagnostics on stderr.
"""

from __future__ import annotations

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exprcalc.errors import ErrorKind
from exprcalc.models import BatchReport, EvaluationResult


def format_value(value: Optional[float]) -> str:
    """Format a result for display.

    Integral values print without a trailing '.0'; everything else uses up to
    15 significant digits.
    """
    if value is None:
        return "--"
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.15g}"


def caret_line(expression: str, position: Optional[int]) -> str:
    """Return a line with '^' under ``position`` of ``expression``."""
    if position is None:
        return ""
    # Keep tabs so the caret lines up under tab-indented input
    pad = "".join(ch if ch == "\t" else " " for ch in expression[:position])
    return pad + "^"


def render_error(result: EvaluationResult, console: Console) -> None:
    """Print a failed result: message, expression, caret."""
    console.print(f"[red]Error:[/red] {escape(result.message)}")
    if result.position is not None and result.expression.strip():
        console.print(f"  {escape(result.expression)}", highlight=False)
        console.print(f"  [red]{caret_line(result.expression, result.position)}[/red]")


def _verdict(r: EvaluationResult) -> str:
    if r.ok:
        return "[green]ok[/green]"
    return "[red]error[/red]"


def render_report(report: BatchReport, console: Console) -> None:
    """Render a Rich table for a batch report, followed by a summary."""
    if not report.results:
        console.print(f"[yellow]No expressions found in {escape(report.source)}[/yellow]")
        return

    table = Table(
        title=f"Batch: {escape(report.source)}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Line", style="dim", justify="right")
    table.add_column("Expression", min_width=20)
    table.add_column("Verdict")
    table.add_column("Result", justify="right", min_width=12)

    for r in report.results:
        if r.ok:
            outcome = format_value(r.value)
        else:
            outcome = f"[red]{escape(r.message)}[/red]"
        table.add_row(
            str(r.line) if r.line is not None else "--",
            escape(r.expression.strip()),
            _verdict(r),
            outcome,
        )

    console.print()
    console.print(table)
    render_summary(report, console)


def render_summary(report: BatchReport, console: Console) -> None:
    color = "green" if report.failed == 0 else "red"
    console.print(
        f"[{color}]{report.passed}/{report.total} evaluated[/{color}]"
        + (f", {report.failed} failed" if report.failed else "")
    )
    for kind, n in report.error_counts().items():
        console.print(f"  [dim]{kind.value}:[/dim] {n}")
    console.print()


def render_history(results: Iterable[EvaluationResult], console: Console) -> None:
    """Render an interactive session's expressions and outcomes."""
    results = list(results)
    if not results:
        return

    table = Table(title="Session", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Expression", min_width=20)
    table.add_column("Result", justify="right", min_width=12)

    for i, r in enumerate(results, 1):
        outcome = format_value(r.value) if r.ok else f"[red]{r.error.value}[/red]"
        table.add_row(str(i), escape(r.expression.strip()), outcome)

    console.print()
    console.print(table)
    console.print()


def render_error_kinds(console: Console) -> None:
    """Table of every ErrorKind and its message."""
    table = Table(title="Error Kinds", show_header=True, header_style="bold")
    table.add_column("Kind", style="red", min_width=24)
    table.add_column("Message", min_width=30)

    for kind in ErrorKind:
        table.add_row(kind.value, kind.message)

    console.print()
    console.print(table)
    console.print()
