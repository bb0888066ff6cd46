"""Tests for forge.platform.process module."""

from __future__ import annotations

import sys
import time
from pathlib import Path

import pytest

from forge.core.result import Err, Ok
from forge.platform.process import ProcessError, run, stream

PY = sys.executable


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(command=("git", "rev-parse"), returncode=128, stdout="", stderr="")
        assert str(error) == "git rev-parse failed (exit 128)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(("./mach", "build", "faster", "-v"), 2, "", "")
        assert str(error) == "./mach build faster ... failed (exit 2)"

    def test_str_killed(self) -> None:
        error = ProcessError(("./mach", "build"), -9, "", "error: x", killed=True)
        assert str(error) == "./mach build killed on error"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "print('hello')"], cwd=tmp_path)
        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run(
            [PY, "-c", "import sys; sys.stderr.write('bad'); sys.exit(42)"], cwd=tmp_path
        )
        assert isinstance(result, Err)
        assert result.error.returncode == 42
        assert "bad" in result.error.stderr

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)
        assert isinstance(result, Err)
        assert result.error.returncode == -1

    def test_timeout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.2)
        assert isinstance(result, Err)
        assert "timed out" in result.error.stderr


class TestStream:
    def test_relays_lines_from_stdout_and_stderr(self, tmp_path: Path) -> None:
        lines: list[str] = []
        script = (
            "import sys\n"
            "print('one', flush=True)\n"
            "sys.stderr.write('two\\n'); sys.stderr.flush()\n"
            "print('three', flush=True)\n"
        )
        result = stream([PY, "-c", script], cwd=tmp_path, on_line=lines.append)

        assert result == Ok(None)
        assert lines == ["one", "two", "three"]

    def test_nonzero_exit_is_error(self, tmp_path: Path) -> None:
        result = stream([PY, "-c", "raise SystemExit(3)"], cwd=tmp_path, on_line=lambda _: None)
        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert result.error.killed is False

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").write_text("x")
        lines: list[str] = []
        stream([PY, "-c", "import os; print(os.listdir('.'))"], cwd=tmp_path, on_line=lines.append)
        assert "marker.txt" in lines[0]

    def test_kill_on_first_matching_line(self, tmp_path: Path) -> None:
        lines: list[str] = []
        script = (
            "import time\n"
            "print('compiling', flush=True)\n"
            "print('error: boom', flush=True)\n"
            "time.sleep(30)\n"
            "print('never', flush=True)\n"
        )
        started = time.monotonic()
        result = stream(
            [PY, "-c", script],
            cwd=tmp_path,
            on_line=lines.append,
            kill_on=lambda line: line.startswith("error:"),
        )

        assert time.monotonic() - started < 20
        assert isinstance(result, Err)
        assert result.error.killed is True
        assert result.error.stderr == "error: boom"
        assert lines == ["compiling", "error: boom"]

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = stream(["nonexistent_command_12345"], cwd=tmp_path, on_line=lambda _: None)
        assert isinstance(result, Err)
        assert result.error.returncode == -1
