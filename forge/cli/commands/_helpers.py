"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from forge.output.errors import error_exit_code, print_error

if TYPE_CHECKING:
    from forge.cli.context import CLIContext
    from forge.output.errors import CommandError


def fail(error: CommandError, ctx: CLIContext) -> NoReturn:
    """Print a command error and exit with its mapped code."""
    print_error(error, ctx.console)
    raise typer.Exit(code=error_exit_code(error))
