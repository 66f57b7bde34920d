import json
import sys
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from monkey import monkey_cli
from monkey.monkey_errors import UnhandledPrefix
from monkey.monkey_lexer import Token


def test_run_monkey_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    errors = monkey_cli.run_monkey(source="let x = 1 + 2 * 3;", is_string=True)
    assert errors == []
    assert capsys.readouterr().out.strip() == "let x = (1 + (2 * 3));"


def test_run_monkey_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "input.monkey"
    file_path.write_text("a + b + c")
    monkey_cli.run_monkey(source=str(file_path))
    assert capsys.readouterr().out.strip() == "((a + b) + c)"


def test_run_monkey_rejects_other_extensions() -> None:
    with pytest.raises(ValueError, match="Only .monkey files are supported."):
        monkey_cli.run_monkey("example.txt", is_string=False)


def test_run_monkey_reports_errors_on_stderr(
    capsys: pytest.CaptureFixture[str],
) -> None:
    errors = monkey_cli.run_monkey(source="let = 5; 7", is_string=True)
    assert len(errors) == 2
    captured = capsys.readouterr()
    assert "[error] >>> 1:5: Expected next token to be IDENT, got ASSIGN instead" in captured.err
    assert "No prefix parse function for ASSIGN" in captured.err
    assert captured.out.strip() == "5\n7"


def test_run_monkey_json(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="-x;", is_string=True, as_json=True)
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "Program"
    expr = data["statements"][0]["expression"]
    assert expr == {
        "kind": "PrefixExpression",
        "operator": "-",
        "right": {"kind": "Identifier", "value": "x"},
    }


def test_run_monkey_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="x;", is_string=True, show_tokens=True, pretty=True)
    out = capsys.readouterr().out
    assert "Tokens" in out
    assert "1:1\tToken(IDENT, x)" in out
    assert "1:2\tToken(SEMICOLON, ;)" in out
    assert "Syntax tree" in out


def test_run_monkey_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output_path = tmp_path / "out.txt"
    monkey_cli.run_monkey(
        source="if (a) { b }", is_string=True, out=str(output_path), pretty=True
    )
    assert output_path.read_text().strip() == "if (a) { b }"
    assert "(wrote to" in capsys.readouterr().out


def test_format_error() -> None:
    located = UnhandledPrefix(Token("ASSIGN", "=", 3, 4))
    assert monkey_cli.format_error(located) == "3:4: No prefix parse function for ASSIGN"
    bare = UnhandledPrefix(Token("ASSIGN"))
    assert monkey_cli.format_error(bare) == "No prefix parse function for ASSIGN"


def test_main_cli_parses(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "let x = 5;", "--json"])
    called: dict[str, Any] = {}

    def dummy_run(**kwargs: Any) -> list[Any]:
        called.update(kwargs)
        return []

    monkeypatch.setattr(monkey_cli, "run_monkey", dummy_run)
    monkey_cli.main()
    assert called["source"] == "let x = 5;"
    assert called["is_string"] is True
    assert called["as_json"] is True
    assert called["show_tokens"] is False


def test_main_exits_nonzero_on_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "let 5;"])
    with pytest.raises(SystemExit) as e:
        monkey_cli.main()
    assert e.value.code == 1


def test_run_monkey_deep_nesting_reports_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    result = monkey_cli.run_monkey(source="-" * 5000 + "x", is_string=True)
    assert result is None
    captured = capsys.readouterr()
    assert "[error] >>> RecursionError" in captured.err
    assert captured.out == ""


def test_main_exits_nonzero_on_deep_nesting(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "(" * 5000 + "x" + ")" * 5000])
    with pytest.raises(SystemExit) as e:
        monkey_cli.main()
    assert e.value.code == 1
    assert "[error] >>> RecursionError" in capsys.readouterr().err


def test_main_exits_zero_on_clean_parse(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "let x = 5;"])
    monkey_cli.main()
    assert capsys.readouterr().out.strip() == "let x = 5;"


def test_main_without_args_starts_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey"])
    started: list[bool] = []
    monkeypatch.setattr(
        "monkey.monkey_repl.start_repl", lambda verbose=False: started.append(verbose)
    )
    monkey_cli.main()
    assert started == [False]


def test_main_repl_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "--repl", "--verbose"])
    started: list[bool] = []
    monkeypatch.setattr(
        "monkey.monkey_repl.start_repl", lambda verbose=False: started.append(verbose)
    )
    monkey_cli.main()
    assert started == [True]


def test_main_unknown_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "--target", "c", "-s", "x"])
    with pytest.raises(SystemExit) as e:
        monkey_cli.main()
    assert e.value.code == 2


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=50)  # type: ignore[misc]
@given(source=st.text(max_size=100))  # type: ignore[misc]
def test_run_monkey_random_input_does_not_crash(
    source: str, capsys: pytest.CaptureFixture[str]
) -> None:
    try:
        monkey_cli.run_monkey(source=source, is_string=True)
    except Exception:
        pytest.fail("Should not crash on random input")
    finally:
        capsys.readouterr()
