"""Project detection and paths.

A forge project is the directory holding the `forge.json` manifest. The
engine checkout, templates and patch sources all live at fixed locations
below it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "MANIFEST_NAME",
    "PROJECT_ENV_VAR",
    "Project",
    "ProjectError",
    "detect_project",
    "find_project_upward",
    "is_project_root",
]

MANIFEST_NAME = "forge.json"
PROJECT_ENV_VAR = "FORGE_PROJECT_ROOT"


@dataclass(frozen=True)
class ProjectError:
    """Error when the project root cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """A detected forge project.

    The project root contains:
    - forge.json manifest (required)
    - configs/ mozconfig templates
    - src/ patch sources
    - engine/ the Gecko checkout
    - .forge/ local state (gitignored)
    """

    root: Path

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_NAME

    @property
    def state_dir(self) -> Path:
        """Path to local state directory (.forge/)."""
        return self.root / ".forge"

    @property
    def state_path(self) -> Path:
        """Path to the persisted dynamic config (.forge/state.json)."""
        return self.state_dir / "state.json"

    @property
    def patch_count_path(self) -> Path:
        return self.state_dir / "patchCount"

    @property
    def configs_dir(self) -> Path:
        return self.root / "configs"

    @property
    def src_dir(self) -> Path:
        """Path to patch sources."""
        return self.root / "src"

    @property
    def engine_dir(self) -> Path:
        return self.root / "engine"

    @property
    def mach_path(self) -> Path:
        return self.engine_dir / "mach"

    @property
    def mozconfig_path(self) -> Path:
        """Path to the generated merged mozconfig."""
        return self.engine_dir / "mozconfig"

    @property
    def version_files(self) -> tuple[Path, Path]:
        """Files receiving the resolved display version."""
        config_dir = self.engine_dir / "browser" / "config"
        return (config_dir / "version.txt", config_dir / "version_display.txt")

    def template_path(self, section: str) -> Path:
        """Path to a mozconfig template (`common` or a platform name)."""
        return self.configs_dir / section / "mozconfig"

    def __str__(self) -> str:
        return str(self.root)


def is_project_root(path: Path) -> bool:
    """Check if a path holds a forge manifest."""
    return (path / MANIFEST_NAME).is_file()


def find_project_upward(start: Path) -> Path | None:
    """Search upward from start directory for a project root."""
    for parent in (start, *start.parents):
        if is_project_root(parent):
            return parent
    return None


def detect_project(
    *,
    start_dir: Path | None = None,
    env_var: str = PROJECT_ENV_VAR,
) -> Result[Project, ProjectError]:
    """Detect the project root directory.

    Detection order:
    1. FORGE_PROJECT_ROOT environment variable (if set, it must be valid)
    2. Search upward from start_dir (or cwd) for forge.json
    """
    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir() and is_project_root(env_path):
            return Ok(Project(root=env_path))
        return Err(
            ProjectError(
                message=f"${env_var} is set to '{env_value}' but it is not a forge project",
                searched_from=env_path if env_path.is_dir() else None,
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_project_upward(search_start)
    if found is None:
        return Err(
            ProjectError(
                message=f"Could not find a forge project ({MANIFEST_NAME} not found)",
                searched_from=search_start,
            )
        )
    return Ok(Project(root=found))
