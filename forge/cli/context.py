from __future__ import annotations

import os
from dataclasses import dataclass

import typer

from forge.core.errors import ErrorCode
from forge.core.manifest import Manifest, load_manifest
from forge.core.project import Project, detect_project
from forge.core.result import Err
from forge.core.state import DynamicConfig, load_state
from forge.output.console import ConsoleProtocol, RichConsole
from forge.platform.detection import Platform, detect_platform

VERBOSE_ENV_VAR = "FORGE_VERBOSE"


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    platform: Platform | None
    manifest: Manifest
    state: DynamicConfig
    console: ConsoleProtocol


def build_context() -> CLIContext:
    project_result = detect_project()
    if isinstance(project_result, Err):
        typer.echo(f"error: {project_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    project = project_result.value

    manifest_result = load_manifest(project.manifest_path)
    if isinstance(manifest_result, Err):
        typer.echo(f"error: {manifest_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    verbose = os.environ.get(VERBOSE_ENV_VAR, "") not in ("", "0")
    return CLIContext(
        project=project,
        platform=detect_platform(),
        manifest=manifest_result.value,
        state=load_state(project.state_path),
        console=RichConsole(verbose=verbose),
    )
