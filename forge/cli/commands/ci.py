from __future__ import annotations

import typer

from forge.cli.commands._helpers import fail
from forge.cli.context import build_context
from forge.core.result import Err, Ok
from forge.services.release import ReleaseService
from forge.services.semver import BumpLevel


def ci(
    brand: str | None = typer.Option(None, "--brand", help="Brand to release."),
    bump: BumpLevel | None = typer.Option(
        None, "--bump", help="Semver bump applied to the brand's display version."
    ),
    version: str | None = typer.Option(
        None, "--version", help="Set the display version explicitly."
    ),
) -> None:
    """Prepare the project for a CI release build."""
    ctx = build_context()
    service = ReleaseService(
        project=ctx.project,
        manifest=ctx.manifest,
        state=ctx.state,
        console=ctx.console,
    )
    match service.prepare(brand=brand, bump=bump, version=version):
        case Ok(_):
            pass
        case Err(error):
            fail(error, ctx)
