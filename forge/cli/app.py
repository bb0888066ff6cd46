from __future__ import annotations

import os
from pathlib import Path

import typer

from forge import __version__
from forge.cli.commands.build import build
from forge.cli.commands.ci import ci
from forge.cli.commands.settings import get, set_
from forge.cli.context import VERBOSE_ENV_VAR
from forge.core.errors import ErrorCode
from forge.core.project import PROJECT_ENV_VAR, is_project_root


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(build)
app.command()(ci)
app.command()(get)
app.command("set")(set_)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Project root (overrides auto detection)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if verbose:
        os.environ[VERBOSE_ENV_VAR] = "1"

    if project is not None:
        try:
            root = project.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --project: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir() or not is_project_root(root):
            typer.echo(
                f"error: --project '{root}' is not a forge project (missing forge.json)",
                err=True,
            )
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[PROJECT_ENV_VAR] = str(root)


def main() -> None:
    app()
