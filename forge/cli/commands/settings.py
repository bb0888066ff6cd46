from __future__ import annotations

import typer

from forge.cli.commands._helpers import fail
from forge.cli.context import build_context
from forge.core.result import Err, Ok
from forge.core.state import KEYS
from forge.services.settings import SettingsService


def get(
    key: str | None = typer.Argument(None, help=f"One of: {', '.join(KEYS)}"),
) -> None:
    """Show the project's dynamic settings."""
    ctx = build_context()
    service = SettingsService(
        project=ctx.project, manifest=ctx.manifest, state=ctx.state, console=ctx.console
    )
    keys = [key] if key is not None else list(KEYS)
    for k in keys:
        match service.get(k):
            case Ok(value):
                ctx.console.print(f"{k}: {value}")
            case Err(error):
                fail(error, ctx)


def set_(
    key: str = typer.Argument(..., help=f"One of: {', '.join(KEYS)}"),
    value: str = typer.Argument(..., help="New value."),
) -> None:
    """Change a dynamic setting (brand, buildMode)."""
    ctx = build_context()
    service = SettingsService(
        project=ctx.project, manifest=ctx.manifest, state=ctx.state, console=ctx.console
    )
    match service.set(key, value):
        case Ok(_):
            pass
        case Err(error):
            fail(error, ctx)
