from __future__ import annotations

from pathlib import Path

import typer

from forge.cli.commands._helpers import fail
from forge.cli.context import build_context
from forge.core.result import Err, Ok
from forge.services.build import BuildService


def build(
    ui: bool = typer.Option(False, "--ui", help="Only rebuild the frontend (mach build faster)."),
    skip_patch_check: bool = typer.Option(
        False, "--skip-patch-check", help="Do not check that all patches were imported."
    ),
) -> None:
    """Generate the mozconfig and build the browser."""
    ctx = build_context()
    service = BuildService(
        project=ctx.project,
        manifest=ctx.manifest,
        state=ctx.state,
        console=ctx.console,
        platform=ctx.platform,
        invocation_dir=Path.cwd(),
    )

    match service.build(fast=ui, skip_patch_check=skip_patch_check, confirm=typer.confirm):
        case Ok(_):
            pass
        case Err(error):
            fail(error, ctx)
