"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from forge.core.errors import ErrorCode
from forge.core.manifest import ManifestError, UnknownBrand
from forge.core.state import StateError
from forge.output.console import Style
from forge.services.build_errors import (
    CompileFailed,
    MachMissing,
    PatchesOutOfDate,
    TemplateMissing,
    VcsMissing,
    WriteFailed,
)
from forge.services.settings import InvalidSetting

if TYPE_CHECKING:
    from forge.output.console import ConsoleProtocol
    from forge.services.build_errors import BuildError
    from forge.services.release import ReleaseError
    from forge.services.settings import SettingsError

    CommandError = BuildError | ReleaseError | SettingsError

__all__ = ["print_error", "error_exit_code"]


def print_error(error: CommandError, console: ConsoleProtocol) -> None:
    """Print a command error to console with appropriate formatting."""
    match error:
        case UnknownBrand() | InvalidSetting():
            console.error(error.message)
            if error.hint:
                console.print(error.hint, Style.DIM)
        case VcsMissing(detail=detail, hint=hint):
            console.error(f"git: {detail}")
            console.print(f"hint: {hint}", Style.DIM)
        case TemplateMissing(path=path, reason=reason):
            console.error(f"Cannot read template {path} ({reason})")
        case WriteFailed(path=path, reason=reason):
            console.error(f"Cannot write {path} ({reason})")
        case PatchesOutOfDate(recorded=recorded, found=found, hint=hint):
            console.error(f"Patches out of date ({found} found, {recorded} imported)")
            console.print(f"hint: {hint}", Style.DIM)
        case MachMissing(path=path, hint=hint):
            console.error(f"mach not found: {path}")
            console.print(f"hint: {hint}", Style.DIM)
        case CompileFailed(killed=True):
            console.error("build failed (killed on error)")
        case CompileFailed(returncode=rc):
            console.error(f"build failed (exit {rc})")
        case ManifestError(message=message) | StateError(message=message):
            console.error(message)


def error_exit_code(error: CommandError) -> int:
    """Get exit code for a command error."""
    match error:
        case UnknownBrand() | InvalidSetting() | PatchesOutOfDate():
            return int(ErrorCode.USER_ERROR)
        case VcsMissing() | MachMissing():
            return int(ErrorCode.ENV_ERROR)
        case CompileFailed():
            return int(ErrorCode.BUILD_ERROR)
        case TemplateMissing() | WriteFailed() | ManifestError() | StateError():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.USER_ERROR)
