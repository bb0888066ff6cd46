"""Tests for forge.git.repository module."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from forge.core.result import Err, Ok
from forge.git.repository import GitError, Repository
from forge.platform.process import ProcessError

needs_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def test_head_strips_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import forge.git.repository as repository

    calls: list[list[str]] = []

    def fake_run(cmd: list[str], cwd: Path, **_: object) -> Ok[str]:
        calls.append(cmd)
        return Ok("0123abcd\n")

    monkeypatch.setattr(repository, "run_process", fake_run)

    assert Repository(tmp_path).head() == Ok("0123abcd")
    assert calls == [["git", "rev-parse", "HEAD"]]


def test_head_failure_maps_to_git_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import forge.git.repository as repository

    def fake_run(cmd: list[str], cwd: Path, **_: object) -> Err[ProcessError]:
        return Err(ProcessError(tuple(cmd), 128, "", "fatal: not a git repository\n"))

    monkeypatch.setattr(repository, "run_process", fake_run)

    result = Repository(tmp_path).head()
    assert result == Err(
        GitError(command="rev-parse HEAD", message="fatal: not a git repository", returncode=128)
    )


@needs_git
def test_head_of_real_repository(tmp_path: Path) -> None:
    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=tmp_path, check=True, capture_output=True)

    git("init")
    git("-c", "user.name=t", "-c", "user.email=t@example.org", "commit", "--allow-empty", "-m", "x")

    result = Repository(tmp_path).head()
    assert isinstance(result, Ok)
    assert len(result.value) == 40
