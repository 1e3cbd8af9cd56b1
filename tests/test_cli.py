import pytest

import boxscript


def write_program(tmp_path, text="ab\nc"):
    path = tmp_path / "program.bs"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_prints_grid(tmp_path, capsys):
    boxscript.main([write_program(tmp_path)])
    assert capsys.readouterr().out.splitlines() == ["ab", "c "]


def test_evaluates_expressions(tmp_path, capsys):
    boxscript.main(
        [
            write_program(tmp_path),
            "--memory", "0=48",
            "--eval", "▭◇▀",
            "--eval", "▄▀ ◈ ▄▀▄",
            "--postfix",
        ]
    )
    lines = capsys.readouterr().out.splitlines()
    assert lines[2:] == [
        "postfix: ▄ ◇ ▭",
        "result: 48",
        "postfix: ▄▀ ▄▀▄ ◈",
        "result: 2",
        "output: 0",
    ]


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit, match="no file exists"):
        boxscript.main([str(tmp_path / "missing.bs")])


def test_core_error_exits(tmp_path):
    with pytest.raises(SystemExit, match="DivisionByZero"):
        boxscript.main([write_program(tmp_path), "--eval", "▄▀ ▞ ▄"])


def test_parse_memory():
    assert boxscript.parse_memory(["1=2", "-3=4"]) == {1: 2, -3: 4}
    with pytest.raises(SystemExit):
        boxscript.parse_memory(["12"])


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "run.log"
    boxscript.main(
        [write_program(tmp_path), "--log-level", "debug", "--log-file", str(log_file)]
    )
    assert "loaded" in log_file.read_text(encoding="utf-8")


def test_log_level_choices(tmp_path, capsys):
    with pytest.raises(SystemExit):
        boxscript.main([write_program(tmp_path), "--log-level", "basic_format"])
    assert "invalid choice" in capsys.readouterr().err
    boxscript.main([write_program(tmp_path), "--log-level", "info"])
