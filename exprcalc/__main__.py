"""CLI for exprcalc.

Usage:
    python -m exprcalc eval "2 + 3 * 4"           # Print 14
    python -m exprcalc eval "1 / 0" --json        # Structured result
    python -m exprcalc batch exprs.txt -o r.json  # Evaluate a file, save report
    python -m exprcalc repl                       # Interactive prompt
    python -m exprcalc errors                     # List error kinds
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from exprcalc.batch import run_batch
from exprcalc.models import EvaluationResult, calculate
from exprcalc.render import format_value, render_error, render_error_kinds, render_history, render_report
from exprcalc.settings import Settings

app = typer.Typer(
    name="exprcalc",
    help="Evaluate arithmetic expressions",
    no_args_is_help=True,
)
console = Console(stderr=True)

_EXIT_WORDS = ("exit", "quit")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Evaluate arithmetic expressions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _settings(max_depth: Optional[int]) -> Settings:
    """Environment settings with CLI overrides; exits on bad values."""
    try:
        return Settings.from_env().with_overrides(max_depth=max_depth)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '(2 + 3) * 4'"),
    as_json: bool = typer.Option(False, "--json", help="Print the structured result as JSON"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Nesting limit (overrides EXPRCALC_MAX_DEPTH)"),
) -> None:
    """Evaluate a single expression."""
    settings = _settings(max_depth)
    result = calculate(expression, max_depth=settings.max_depth)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif result.ok:
        typer.echo(format_value(result.value))
    else:
        render_error(result, console)

    if not result.ok:
        raise typer.Exit(1)


@app.command("batch")
def cmd_batch(
    file: Path = typer.Argument(help="Text file with one expression per line"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write a JSON report here"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Nesting limit (overrides EXPRCALC_MAX_DEPTH)"),
) -> None:
    """Evaluate every expression in a file."""
    settings = _settings(max_depth)
    try:
        report = run_batch(file, settings)
    except (OSError, UnicodeDecodeError) as e:
        reason = getattr(e, "strerror", None) or e
        console.print(f"[red]Cannot read {escape(str(file))}: {escape(str(reason))}[/red]")
        raise typer.Exit(1)

    render_report(report, console)

    if output:
        report.save(output)
        console.print(f"Report written to {output}")

    if report.failed:
        raise typer.Exit(1)


@app.command("repl")
def cmd_repl(
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Nesting limit (overrides EXPRCALC_MAX_DEPTH)"),
) -> None:
    """Evaluate expressions interactively until 'exit', 'quit' or EOF."""
    settings = _settings(max_depth)
    history: list[EvaluationResult] = []

    while True:
        try:
            line = console.input("[bold cyan]>[/bold cyan] ")
        except (EOFError, KeyboardInterrupt):
            break

        stripped = line.strip()
        if stripped.lower() in _EXIT_WORDS:
            break
        if not stripped:
            continue

        result = calculate(line, max_depth=settings.max_depth)
        history.append(result)
        if result.ok:
            typer.echo(format_value(result.value))
        else:
            render_error(result, console)

    render_history(history, console)


@app.command("errors")
def cmd_errors() -> None:
    """List the error kinds an evaluation can report."""
    render_error_kinds(console)


if __name__ == "__main__":
    app()
