from __future__ import annotations

import io
from pathlib import Path

import pytest

from tests.support.harness import BrkInt
from brook.runner import USAGE, main, render, run_lines
from brook.runtime import Env


def test_main_runs_inline_source(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-c", "let a = 2\na * 21"]) == 0
    assert capsys.readouterr().out == "42\n"


def test_main_prints_strings_quoted(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-c", '"hi" + "!"']) == 0
    assert capsys.readouterr().out == '"hi!"\n'


def test_main_runs_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    script = tmp_path / "sum.brook"
    script.write_text(
        "let sum = 0\nfor let i = 1; i <= 4; i = i + 1 { sum = sum + i }\nsum\n",
        encoding="utf-8",
    )

    assert main([str(script)]) == 0
    assert capsys.readouterr().out == "10\n"


def test_main_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "nope.brook")]) == 1
    assert "Error: cannot read" in capsys.readouterr().err


def test_main_reports_runtime_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-c", "let x = 1\nx + true"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == (
        "Error: Operator '+' does not support operands of type Integer and Bool (line 2)\n"
    )


def test_main_reports_parse_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-c", "1 +"]) == 1
    assert capsys.readouterr().err.startswith("Error: No prefix parse rule for EOF")


def test_main_reports_lex_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-c", "@"]) == 1
    assert capsys.readouterr().err.startswith("Error: Unexpected character '@'")


@pytest.mark.parametrize(
    "argv",
    [
        pytest.param(["-c"], id="c-without-source"),
        pytest.param(["a.brook", "b.brook"], id="two-paths"),
        pytest.param(["-c", "1", "extra"], id="source-and-path"),
        pytest.param(["a.brook", "-c", "1"], id="path-and-source"),
        pytest.param(["-c", "1", "-c", "2"], id="two-sources"),
    ],
)
def test_main_usage_errors(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(argv) == 2
    assert capsys.readouterr().err


def test_main_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--help"]) == 0
    assert capsys.readouterr().out.strip() == USAGE


def test_main_tokens_mode(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--tokens", "-c", "x + 1"]) == 0
    out = capsys.readouterr().out.splitlines()

    assert len(out) == 4
    assert "IDENT" in out[0]
    assert "PLUS" in out[1]
    assert "INTEGER" in out[2]
    assert "EOF" in out[3]


def test_main_ast_mode(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--ast", "-c", "let a = 1 + 2"]) == 0
    out = capsys.readouterr().out

    assert out.startswith("program")
    assert "letstmt" in out
    assert "binary" in out


def test_main_canonical_mode(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--canonical", "-c", "let a = 1 + 2 * 3\na"]) == 0
    assert capsys.readouterr().out == "let a = (1 + (2 * 3))\na\n"


def test_main_canonical_from_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("-x"))

    assert main(["--canonical"]) == 0
    assert capsys.readouterr().out == "(-x)\n"


def test_main_line_loop_from_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("let a = 1\na + 1\n"))

    assert main([]) == 0
    assert capsys.readouterr().out == "2\n"


def test_render_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        render("1", "bytecode")


def test_run_lines_shares_environment(capsys: pytest.CaptureFixture[str]) -> None:
    lines = io.StringIO("let a = 1\n\na = a + 1\nb\na * 10\n")
    out = io.StringIO()
    env = Env.root()

    status = run_lines(lines, env, out)

    assert status == 1
    assert out.getvalue() == "2\n20\n"
    assert "Undefined variable 'b'" in capsys.readouterr().err
    assert env.get("a") == BrkInt(2)


def test_run_lines_clean_exit() -> None:
    out = io.StringIO()
    assert run_lines(io.StringIO("1 < 2\nlet x\n"), out=out) == 0
    assert out.getvalue() == "true\n"


DEEP_SOURCE = "(" * 3000 + "1" + ")" * 3000


def test_main_reports_deep_nesting(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-c", DEEP_SOURCE]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Error: Nesting too deep\n"


def test_run_lines_survives_deep_nesting(capsys: pytest.CaptureFixture[str]) -> None:
    out = io.StringIO()
    lines = io.StringIO(f"{DEEP_SOURCE}\n1 + 1\n")

    assert run_lines(lines, out=out) == 1
    assert out.getvalue() == "2\n"
    assert "Error: Nesting too deep" in capsys.readouterr().err
