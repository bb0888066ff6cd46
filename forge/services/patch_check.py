"""Guard against building with patches that were never imported.

The number of files under `src/` is compared with the count recorded in
`.forge/patchCount` when patches were last imported into the engine.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from forge.core.project import Project
from forge.core.result import Err, Ok, Result
from forge.output.console import ConsoleProtocol
from forge.platform.files import write_text

from .build_errors import PatchesOutOfDate

Confirm = Callable[[str], bool]


def count_patches(src_dir: Path) -> int:
    """Number of files below src_dir (0 if it does not exist)."""
    if not src_dir.is_dir():
        return 0
    return sum(1 for p in src_dir.rglob("*") if p.is_file())


def recorded_patch_count(path: Path) -> int:
    """Read the recorded count, initialising the file to 0 when missing."""
    if not path.exists():
        write_text(path, "0")
        return 0
    try:
        return int(path.read_text(encoding="utf-8").strip() or "0")
    except ValueError:
        return 0


def check_patches(
    project: Project,
    console: ConsoleProtocol,
    confirm: Confirm,
) -> Result[None, PatchesOutOfDate]:
    found = count_patches(project.src_dir)
    recorded = recorded_patch_count(project.patch_count_path)
    if found == recorded:
        return Ok(None)

    console.warning(
        "You have not imported all of your patches. This may lead to unexpected behavior"
    )
    console.debug(f"Recorded {recorded} patches, found {found} in {project.src_dir}")
    if confirm("Continue anyway?"):
        return Ok(None)
    return Err(PatchesOutOfDate(recorded=recorded, found=found))
