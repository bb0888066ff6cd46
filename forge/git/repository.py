"""Git repository queries.

forge only needs the current changeset, embedded into the generated
mozconfig. All operations return Result types.

Usage:
    match Repository(project.root).head():
        case Ok(sha):
            print(sha)
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from forge.core.result import Err, Ok, Result
from forge.platform.process import ProcessError
from forge.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code (-1 if git could not be started)
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working tree rooted at `path`."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def head(self) -> Result[str, GitError]:
        """Full SHA of HEAD (`git rev-parse HEAD`)."""
        result = self._run(["rev-parse", "HEAD"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="rev-parse HEAD",
                        message=e.stderr.strip() or "git rev-parse failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(["git", *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS)
