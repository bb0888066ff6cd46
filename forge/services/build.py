"""Build service: generate the mozconfig, then run `mach build`.

Flow for `forge build`:
1. Resolve the host platform (unsupported hosts are a silent no-op)
2. Patch check (optional)
3. apply_config: render templates, write engine/mozconfig and version files
4. Run mach with output streamed to the console
5. Report the elapsed time
"""

from __future__ import annotations

import re
import sys
import time
from collections.abc import Callable
from pathlib import Path

from ..core.manifest import Manifest
from ..core.project import Project
from ..core.result import Err, Ok, Result
from ..core.state import DynamicConfig
from ..git.repository import Repository
from ..output.console import ConsoleProtocol, Style
from ..platform.detection import Platform
from ..platform.files import write_text
from ..platform.process import stream
from . import mozconfig
from .base import BaseService
from .build_errors import (
    BuildError,
    CompileFailed,
    MachMissing,
    TemplateMissing,
    VcsMissing,
    WriteFailed,
)
from .patch_check import Confirm, check_patches
from .template import TemplateOptions, render

BRANDING_DIR = "branding/forge"
UNOFFICIAL_BRANDING_DIR = "branding/unofficial"

_MACH_TIMESTAMP_RE = re.compile(r"^\s*\d{1,5}:\d\d\.\d\d ")
_ERROR_LINE_RE = re.compile(
    r"^(?:\S+?:\d+(?::\d+)?:\s*)?(?:fatal\s+)?error(?:\[\w+\])?:",
    re.IGNORECASE,
)


def strip_mach_timestamp(line: str) -> str:
    return _MACH_TIMESTAMP_RE.sub("", line, count=1)


def is_error_line(line: str) -> bool:
    """True for compiler/mach diagnostics such as `foo.cpp:3:1: error: ...`."""
    return _ERROR_LINE_RE.match(strip_mach_timestamp(line).lstrip()) is not None


def format_duration(seconds: float) -> str:
    """Format as "1 hour, 2 minutes, 3 seconds", omitting zero units."""
    total = int(seconds)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)

    parts: list[str] = []
    for value, unit in ((h, "hour"), (m, "minute"), (s, "second")):
        if value > 0:
            parts.append(f"{value} {unit}" + ("" if value == 1 else "s"))
    return ", ".join(parts) or "0 seconds"


class BuildService(BaseService):
    """Generates the engine configuration and drives mach."""

    def __init__(
        self,
        *,
        project: Project,
        manifest: Manifest,
        state: DynamicConfig,
        console: ConsoleProtocol,
        platform: Platform | None,
        invocation_dir: Path,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(project=project, manifest=manifest, state=state, console=console)
        self._platform = platform
        self._invocation_dir = invocation_dir
        self._clock = clock

    def build(
        self,
        *,
        fast: bool = False,
        skip_patch_check: bool = False,
        confirm: Confirm,
    ) -> Result[float | None, BuildError]:
        """Configure and build for the current host.

        Returns:
            Ok(seconds) after a successful build
            Ok(None) when the host platform is unsupported (nothing is done)
            Err(BuildError) on failure
        """
        started = self._clock()

        platform = self._platform
        if platform is None:
            return Ok(None)

        if not skip_patch_check:
            patches = check_patches(self._project, self._console, confirm)
            if isinstance(patches, Err):
                return patches

        configured = self.apply_config(platform)
        if isinstance(configured, Err):
            return configured

        self._console.info("Starting build...")
        built = self.run_mach(platform, fast=fast)
        if isinstance(built, Err):
            return built

        elapsed = self._clock() - started
        self._console.newline()
        self._console.info(f"Total build time: {format_duration(elapsed)}.")
        return Ok(elapsed)

    def apply_config(self, platform: Platform) -> Result[str, BuildError]:
        """Write engine/mozconfig and the version files.

        Returns:
            Ok(version) with the version written to the version files
        """
        self._console.info("Applying mozconfig...")

        brand_key = self._state.brand
        brand = self._manifest.get_brand(brand_key)
        if isinstance(brand, Err):
            return brand

        head = Repository(self._project.root).head()
        if isinstance(head, Err):
            self._console.warning(
                "forge expects that you are building your browser with git as your version control"
            )
            self._console.warning(
                "If you are using some other version control system, please migrate to git"
            )
            self._console.warning("Otherwise, you can setup git in this folder by running:")
            self._console.warning("   |git init|")
            return Err(VcsMissing(detail=head.error.message))

        options = self.template_options(changeset=head.value)

        common = self._read_template(self._project.template_path("common"))
        if isinstance(common, Err):
            return common
        os_config = self._read_template(self._project.template_path(platform.value))
        if isinstance(os_config, Err):
            return os_config

        # A mozconfig in the invocation directory is a local override and is
        # never committed.
        override_path = self._invocation_dir / "mozconfig"
        override = ""
        if override_path.is_file():
            read = self._read_template(override_path)
            if isinstance(read, Err):
                return read
            override = read.value

        merged = mozconfig.merge(
            render(common.value, options),
            render(os_config.value, options),
            render(override, options),
            mozconfig.internal_fragment(brand_key, self._state.build_mode),
        )

        written = self._write(self._project.mozconfig_path, merged)
        if isinstance(written, Err):
            return written

        self._console.info(f"Config for this `{platform}` build:")
        for line in mozconfig.summary_lines(merged):
            self._console.print(f"\t{line}", Style.DIM)

        version = brand.value.resolved_version
        self._console.debug(f"Writing {version} to the browser version files")
        for path in self._project.version_files:
            written = self._write(path, version)
            if isinstance(written, Err):
                return written

        return Ok(version)

    def template_options(self, *, changeset: str) -> TemplateOptions:
        branding = (
            BRANDING_DIR
            if (self._project.engine_dir / BRANDING_DIR).exists()
            else UNOFFICIAL_BRANDING_DIR
        )
        return TemplateOptions(
            name=self._manifest.name,
            vendor=self._manifest.vendor,
            appId=self._manifest.app_id,
            brandingDir=branding,
            binName=self._manifest.binary_name,
            changeset=changeset,
        )

    def mach_command(self, platform: Platform, *, fast: bool = False) -> list[str]:
        args = ["build"]
        if fast:
            args.append("faster")
        if platform.is_windows:
            return [sys.executable, "mach", *args]
        return ["./mach", *args]

    def run_mach(self, platform: Platform, *, fast: bool = False) -> Result[None, BuildError]:
        """Run mach in the engine directory, killing it on the first error line."""
        self._console.info(f'Building for "{platform}"...')
        self._console.warning(
            "If you get any dependency errors, try running |./mach bootstrap| in engine/."
        )

        mach = self._project.mach_path
        if not mach.is_file():
            return Err(MachMissing(path=mach))

        cmd = self.mach_command(platform, fast=fast)
        self._console.debug(f"Running with build options {', '.join(cmd[1:])}")
        self._console.debug(f"Mach path: {mach}")

        result = stream(
            cmd,
            cwd=self._project.engine_dir,
            on_line=lambda line: self._console.print(strip_mach_timestamp(line)),
            kill_on=is_error_line,
        )
        if isinstance(result, Err):
            return Err(
                CompileFailed(
                    returncode=result.error.returncode,
                    killed=result.error.killed,
                    line=result.error.stderr,
                )
            )
        return Ok(None)

    def _read_template(self, path: Path) -> Result[str, BuildError]:
        try:
            return Ok(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return Err(TemplateMissing(path=path, reason="file not found"))
        except (OSError, UnicodeDecodeError) as e:
            return Err(TemplateMissing(path=path, reason=str(e)))

    def _write(self, path: Path, content: str) -> Result[None, BuildError]:
        try:
            write_text(path, content)
        except OSError as e:
            return Err(WriteFailed(path=path, reason=str(e)))
        return Ok(None)
