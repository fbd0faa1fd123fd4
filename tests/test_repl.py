import io
import runpy

import pytest

from calcline import repl


def _run(lines: list[str]) -> tuple[int, list[str]]:
    stdout = io.StringIO()
    evaluated = repl.run_session(lines, stdout)
    return evaluated, stdout.getvalue().splitlines()


def test_prints_results_and_errors_per_line() -> None:
    evaluated, output = _run(["1+2*3", "(1+2", "2%3", "1/0", "8-3-2"])
    assert evaluated == 5
    assert output == ["7.0", "unmatched bracket", "invalid expression", "inf", "3.0"]


def test_blank_line_ends_session() -> None:
    evaluated, output = _run(["1", "   ", "2"])
    assert evaluated == 1
    assert output == ["1.0"]


def test_tokenizer_error_does_not_end_session() -> None:
    evaluated, output = _run(["1 + a", "4"])
    assert evaluated == 2
    assert output[0] == "[Tokenizer error] Unexpected character: 'a'"
    assert output[-1] == "4.0"


def test_read_lines_strips_newlines_and_stops_at_eof() -> None:
    stdout = io.StringIO()
    lines = list(repl.read_lines(io.StringIO("1+1\n2\r\n3"), prompt="> ", stdout=stdout))
    assert lines == ["1+1", "2", "3"]
    assert stdout.getvalue() == "> " * 4


def test_main(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("2 * (3 + 4)\n-2*3\n\n99\n"))
    assert repl.main([]) == 0
    assert capsys.readouterr().out.splitlines() == ["14.0", "-6.0"]


def test_main_without_trailing_blank_line(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("5/2\n"))
    assert repl.main(["--prompt", ""]) == 0
    assert capsys.readouterr().out == "2.5\n"


def test_run_as_module(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("8-3-2\n"))
    monkeypatch.setattr("sys.argv", ["calcline"])
    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("calcline", run_name="__main__")
    assert exc_info.value.code == 0
    assert capsys.readouterr().out == "3.0\n"


def test_importing_main_module_does_not_run_session() -> None:
    runpy.run_module("calcline.__main__", run_name="calcline.__main__")
