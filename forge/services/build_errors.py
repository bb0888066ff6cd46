from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from forge.core.manifest import UnknownBrand


@dataclass(frozen=True, slots=True)
class VcsMissing:
    """`git rev-parse HEAD` failed; a changeset is required for the mozconfig."""

    detail: str
    hint: str = "Run: git init"


@dataclass(frozen=True, slots=True)
class TemplateMissing:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class WriteFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class PatchesOutOfDate:
    """The user declined to build with unimported patches."""

    recorded: int
    found: int
    hint: str = "Re-import your patches, or pass --skip-patch-check"


@dataclass(frozen=True, slots=True)
class MachMissing:
    path: Path
    hint: str = "The engine checkout is expected in engine/"


@dataclass(frozen=True, slots=True)
class CompileFailed:
    returncode: int
    killed: bool = False
    line: str = ""


BuildError = (
    UnknownBrand
    | VcsMissing
    | TemplateMissing
    | WriteFailed
    | PatchesOutOfDate
    | MachMissing
    | CompileFailed
)
