"""
Tests for the `gridpath` command (gridpath/app/cli.py)
"""

import contextlib
import logging

import pytest

from gridpath.app.cli import build_parser, main
from gridpath.core.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GRIDPATH_HEURISTIC", "GRIDPATH_LOG_LEVEL", "GRIDPATH_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


def write(tmp_path, text):
    p = tmp_path / "input.txt"
    p.write_text(text)
    return str(p)


def test_prints_path_one_step_per_line(tmp_path, capsys):
    path = write(tmp_path, "5,5\n1,1\n3,1\n2,1\n")
    assert main([path]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["(1, 2)", "(2, 2)", "(3, 2)", "(3, 1)"]


def test_unreachable_is_not_an_error(tmp_path, capsys):
    path = write(tmp_path, "3,3\n1,1\n3,3\n2,3-3,2\n")
    assert main([path, "--heuristic", "manhattan"]) == 0
    assert capsys.readouterr().out == "No path found\n"


def test_start_equals_goal_prints_nothing(tmp_path, capsys):
    path = write(tmp_path, "3,3\n2,2\n2,2\n")
    assert main([path]) == 0
    assert capsys.readouterr().out == ""


def test_missing_file_exits_1(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert capsys.readouterr().out == ""


def test_malformed_file_exits_1(tmp_path, capsys):
    path = write(tmp_path, "5,5\n1,1\n")
    assert main([path]) == 1
    assert capsys.readouterr().out == ""


def test_bad_environment_exits_1(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("GRIDPATH_HEURISTIC", "bogus")
    path = write(tmp_path, "5,5\n1,1\n3,1\n")
    assert main([path]) == 1
    assert "bogus" in capsys.readouterr().err


def test_parser_defaults_come_from_settings():
    parser = build_parser(Settings(heuristic="manhattan", log_level="INFO"))
    args = parser.parse_args(["grid.txt"])
    assert args.heuristic == "manhattan"
    assert args.log_level == "INFO"
    assert parser.parse_args(["grid.txt", "--log-level", "debug"]).log_level == "DEBUG"


def test_parser_rejects_unknown_heuristic():
    with pytest.raises(SystemExit):
        build_parser(Settings()).parse_args(["grid.txt", "--heuristic", "bfs"])


def test_non_utf8_file_exits_1(tmp_path, capsys):
    p = tmp_path / "input.txt"
    p.write_bytes(b"5,5\n1,1\n3,1\n\xff\xfe,1\n")
    assert main([str(p)]) == 1
    assert capsys.readouterr().out == ""


@contextlib.contextmanager
def bare_root_logger():
    """Empty the root logger so basicConfig takes effect; put everything back afterwards."""
    root = logging.getLogger()
    saved, level = root.handlers[:], root.level
    root.handlers.clear()
    try:
        yield root
    finally:
        for h in root.handlers:
            h.close()
        root.handlers[:] = saved
        root.setLevel(level)


def test_log_file_receives_records(tmp_path, capsys):
    path = write(tmp_path, "5,5\n1,1\n3,1\n2,1\n")
    log = tmp_path / "run.log"
    with bare_root_logger():
        assert main([path, "--log-file", str(log), "--log-level", "DEBUG"]) == 0
    text = log.read_text()
    assert "Searching 5x5 grid" in text
    assert "Grid as read:\n5,5\n1,1\n3,1\n2,1" in text, "the parsed grid is echoed at DEBUG"
    assert capsys.readouterr().out.splitlines()[-1] == "(3, 1)"


def test_unwritable_log_file_exits_1(tmp_path, capsys):
    path = write(tmp_path, "5,5\n1,1\n3,1\n")
    assert main([path, "--log-file", str(tmp_path / "missing" / "run.log")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "cannot open log file" in captured.err
