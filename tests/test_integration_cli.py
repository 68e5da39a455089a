"""Integration tests for CLI functionality."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from polycalc_pkg.cli import main_entry

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _run_cli(*args, input_text=None):
    return subprocess.run(
        [sys.executable, "-m", "polycalc_pkg", *args],
        input=input_text,
        capture_output=True,
        text=True,
        timeout=30,
        cwd=PROJECT_ROOT,
    )


def test_cli_version():
    """Test --version flag."""
    result = _run_cli("--version")
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_stdin_session():
    """Test a program piped through standard input."""
    result = _run_cli(input_text="(1,1)\nAT 4\nPRINT\n")
    assert result.returncode == 0
    assert result.stdout == "4\n"
    assert result.stderr == ""


def test_cli_errors_go_to_stderr():
    """Test that diagnostics do not change the exit code."""
    result = _run_cli(input_text="FOO\nZERO\nPRINT\n")
    assert result.returncode == 0
    assert result.stdout == "0\n"
    assert "ERROR 1 WRONG COMMAND" in result.stderr


def test_cli_eval():
    """Test inline program evaluation."""
    result = _run_cli("-e", "(1,2)+(3,0)\nPRINT")
    assert result.returncode == 0
    assert result.stdout == "(3,0)+(1,2)\n"


def test_cli_eval_json():
    """Test CLI evaluation with JSON output."""
    result = _run_cli("--eval", "ZERO\nDEG\nADD", "--format", "json")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["ok"] is False
    assert data["output"] == ["-1"]
    assert data["errors"] == ["ERROR 3 STACK UNDERFLOW"]
    assert data["stack_size"] == 1


def test_cli_file_argument(tmp_path):
    """Test reading commands from a file."""
    program = tmp_path / "program.txt"
    program.write_text("7\n(1,1)\nCOMPOSE 1\nPRINT\n", encoding="utf-8")
    result = _run_cli(str(program))
    assert result.returncode == 0
    assert result.stdout == "7\n"


def test_cli_file_with_undecodable_bytes(tmp_path):
    """Bytes that are not UTF-8 are a malformed literal, not a crash."""
    program = tmp_path / "program.txt"
    program.write_bytes(b"5\n\xff\xfe\nPRINT\n")
    result = _run_cli(str(program))
    assert result.returncode == 0
    assert result.stdout == "5\n"
    assert "ERROR 2 1" in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_stdin_with_undecodable_bytes():
    result = subprocess.run(
        [sys.executable, "-m", "polycalc_pkg"],
        input=b"(1,1)\n(\xc3,1)\nDEG\n",
        capture_output=True,
        timeout=30,
        cwd=PROJECT_ROOT,
    )
    assert result.returncode == 0
    assert result.stdout.splitlines() == [b"1"]
    assert b"ERROR 2 2" in result.stderr


def test_cli_deep_literal_session():
    depth = 20000
    text = "(" * depth + "1" + ",1)" * depth
    result = _run_cli(input_text=f"{text}\n{text}\nADD\nDEG\n")
    assert result.returncode == 0
    assert result.stdout == f"{depth}\n"
    assert "ERROR 3 NESTING TOO DEEP" in result.stderr.splitlines()


def test_cli_missing_file(tmp_path):
    result = _run_cli(str(tmp_path / "missing.txt"))
    assert result.returncode == 1
    assert "cannot read" in result.stderr


def test_cli_log_file(tmp_path):
    log_file = tmp_path / "polycalc.log"
    result = _run_cli(
        "--log-level", "DEBUG", "--log-file", str(log_file), "-e", "ZERO\nPRINT"
    )
    assert result.returncode == 0
    assert result.stdout == "0\n"
    log_text = log_file.read_text(encoding="utf-8")
    assert "Session started" in log_text
    assert "[INFO] polycalc.commands" in log_text


class TestMainEntry:
    """Test the entry point in-process."""

    def test_eval(self, capsys):
        assert main_entry(["-e", "5\nNEG\nPRINT"]) == 0
        captured = capsys.readouterr()
        assert captured.out == "-5\n"

    def test_eval_reports_errors(self, capsys):
        assert main_entry(["-e", "POP"]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "ERROR 1 STACK UNDERFLOW" in captured.err

    def test_json(self, capsys):
        assert main_entry(["-e", "(1,1)\nCLONE\nMUL\nPRINT", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {"ok": True, "output": ["(1,2)"], "errors": [], "stack_size": 1}

    def test_version(self, capsys):
        assert main_entry(["--version"]) == 0
        assert capsys.readouterr().out.strip() != ""

    def test_bad_option(self):
        with pytest.raises(SystemExit) as exc_info:
            main_entry(["--format", "xml"])
        assert exc_info.value.code == 2
