"""Subprocess execution with Result-based error handling.

Two flavours:
- `run` captures output (git queries).
- `stream` relays output line by line while the child runs (mach), and can
  kill the child as soon as a line is recognised as fatal.

Usage:
    match run(["git", "rev-parse", "HEAD"], cwd=root):
        case Ok(stdout):
            changeset = stdout.strip()
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from forge.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "stream"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran).
        stdout: Standard output (may be empty).
        stderr: Standard error, or the line that triggered a kill.
        killed: True if the child was terminated on an error line.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    killed: bool = False

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.killed:
            return f"{cmd_str} killed on error"
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def stream(
    cmd: list[str],
    cwd: Path,
    on_line: Callable[[str], None],
    env: dict[str, str] | None = None,
    *,
    kill_on: Callable[[str], bool] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, relaying merged stdout/stderr lines to `on_line`.

    No timeout is applied; the call returns when the child exits.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        on_line: Called with every output line (trailing newline removed).
        env: Environment variables (uses current env if None).
        kill_on: If given, the child is killed as soon as it returns True
            for a line, and the run counts as failed.

    Returns:
        Ok(None) on exit 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.Popen(
            cmd,
            cwd=str(cwd),
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            bufsize=1,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    assert proc.stdout is not None
    with proc:
        for raw in proc.stdout:
            line = raw.rstrip("\r\n")
            on_line(line)
            if kill_on is not None and kill_on(line):
                proc.kill()
                proc.wait()
                return Err(
                    ProcessError(
                        command=tuple(cmd),
                        returncode=proc.returncode,
                        stdout="",
                        stderr=line,
                        killed=True,
                    )
                )
        returncode = proc.wait()

    if returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=returncode,
                stdout="",
                stderr="",
            )
        )

    return Ok(None)
