"""Tests for batch evaluation, rendering helpers and the Typer CLI."""

import io
import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from exprcalc.__main__ import app
from exprcalc.batch import read_expressions, run_batch
from exprcalc.errors import ErrorKind
from exprcalc.models import calculate
from exprcalc.render import caret_line, format_value, render_error, render_report
from exprcalc.settings import ENV_MAX_DEPTH, MAX_ALLOWED_DEPTH, Settings

runner = CliRunner()


@pytest.fixture
def exprs_file(tmp_path):
    path = tmp_path / "exprs.txt"
    path.write_text(
        "# sample\n"
        "2 + 3 * 4\n"
        "\n"
        "(2 + 3) * 4\n"
        "   # indented comment\n"
        "10 / (5 - 5)\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv(ENV_MAX_DEPTH, raising=False)


# --- Batch ---

def test_read_expressions_skips_comments_and_blanks(exprs_file):
    assert read_expressions(exprs_file) == [
        (2, "2 + 3 * 4"),
        (4, "(2 + 3) * 4"),
        (6, "10 / (5 - 5)"),
    ]


def test_run_batch(exprs_file):
    report = run_batch(exprs_file)
    assert report.source == str(exprs_file)
    assert [r.line for r in report.results] == [2, 4, 6]
    assert [r.value for r in report.results] == [14.0, 20.0, None]
    assert report.results[2].error is ErrorKind.DIVISION_BY_ZERO


def test_run_batch_uses_settings(tmp_path):
    path = tmp_path / "deep.txt"
    path.write_text("((1))\n", encoding="utf-8")
    report = run_batch(path, Settings(max_depth=1))
    assert report.results[0].error is ErrorKind.NESTING_TOO_DEEP


def test_run_batch_missing_file(tmp_path):
    with pytest.raises(OSError):
        run_batch(tmp_path / "missing.txt")


# --- Rendering ---

@pytest.mark.parametrize("value, text", [
    (14.0, "14"),
    (-2.0, "-2"),
    (3.75, "3.75"),
    (0.1 + 0.2, "0.3"),
    (None, "--"),
    (1e20, "1e+20"),
])
def test_format_value(value, text):
    assert format_value(value) == text


def test_caret_line():
    assert caret_line("2 + a", 4) == "    ^"
    assert caret_line("\t1 +", 4) == "\t   ^"
    assert caret_line("", None) == ""


def _capture(fn, *args) -> str:
    buf = io.StringIO()
    fn(*args, Console(file=buf, width=120))
    return buf.getvalue()


def test_render_error_shows_caret():
    text = _capture(render_error, calculate("2 + a"))
    assert "Unexpected token or end of expression at position 4" in text
    assert "    ^" in text


def test_render_report_summary(exprs_file):
    text = _capture(render_report, run_batch(exprs_file))
    assert "2/3 evaluated" in text
    assert "DivisionByZero: 1" in text


# --- CLI ---

def test_cli_eval():
    result = runner.invoke(app, ["eval", "2 + 3 * 4"])
    assert result.exit_code == 0
    assert result.output.strip() == "14"


def test_cli_eval_negative_expression():
    result = runner.invoke(app, ["eval", "--", "-5 + 3"])
    assert result.exit_code == 0
    assert result.output.strip() == "-2"


def test_cli_eval_error_exits_1():
    result = runner.invoke(app, ["eval", "2 + (3"])
    assert result.exit_code == 1
    assert "Missing closing parenthesis" in result.output


def test_cli_eval_json():
    result = runner.invoke(app, ["eval", "1 / 0", "--json"])
    assert result.exit_code == 1
    data = json.loads(result.output)
    assert data["error"]["kind"] == "DivisionByZero"


def test_cli_eval_max_depth_option():
    result = runner.invoke(app, ["eval", "((1))", "--max-depth", "1"])
    assert result.exit_code == 1
    assert "nested too deeply" in result.output


def test_cli_eval_max_depth_above_ceiling():
    expr = "(" * 600 + "1" + ")" * 600
    result = runner.invoke(app, ["eval", expr, "--max-depth", "1000"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, RecursionError)
    assert "Invalid configuration" in result.output


def test_cli_eval_deep_input_at_ceiling():
    expr = "(" * 600 + "1" + ")" * 600
    result = runner.invoke(app, ["eval", expr, "--max-depth", str(MAX_ALLOWED_DEPTH)])
    assert result.exit_code == 1
    assert "nested too deeply" in result.output


def test_cli_eval_invalid_env(monkeypatch):
    monkeypatch.setenv(ENV_MAX_DEPTH, "lots")
    result = runner.invoke(app, ["eval", "1"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_cli_batch_writes_report(exprs_file, tmp_path):
    out = tmp_path / "report.json"
    result = runner.invoke(app, ["batch", str(exprs_file), "--output", str(out)])
    assert result.exit_code == 1  # one line divides by zero
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["total"] == 3
    assert data["failed"] == 1


def test_cli_batch_all_ok(tmp_path):
    path = tmp_path / "ok.txt"
    path.write_text("1 + 1\n2 * 2\n", encoding="utf-8")
    result = runner.invoke(app, ["batch", str(path)])
    assert result.exit_code == 0
    assert "2/2 evaluated" in result.output


def test_cli_batch_missing_file(tmp_path):
    result = runner.invoke(app, ["batch", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "Cannot read" in result.output


def test_cli_batch_non_utf8_file(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1+1\n\xff\xfe\n")
    result = runner.invoke(app, ["batch", str(path)])
    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert "Cannot read" in result.output


def test_cli_repl():
    result = runner.invoke(app, ["repl"], input="2 + 2\n\n1 / 0\nquit\n")
    assert result.exit_code == 0
    assert "4" in result.output
    assert "Division by zero" in result.output
    assert "Session" in result.output


def test_cli_repl_ends_on_eof():
    result = runner.invoke(app, ["repl"], input="3 * 3\n")
    assert result.exit_code == 0
    assert "9" in result.output


def test_cli_errors_lists_kinds():
    result = runner.invoke(app, ["errors"])
    assert result.exit_code == 0
    for kind in ErrorKind:
        assert kind.value in result.output
