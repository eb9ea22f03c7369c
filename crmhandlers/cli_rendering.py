"""Error rendering for `crmhandlers` commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import HandlerStageError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print the failing stage, detail and hint to stderr, then exit with code 1."""

    if isinstance(exc, HandlerStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc
