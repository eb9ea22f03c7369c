"""Command-line interface for crmhandlers.

Responsibilities:
- Expose the HTML normalizer for inspecting rich-text values outside the host.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .cli_rendering import exit_with_command_error
from .config import ConfigLoader, HandlerConfig
from .errors import HandlerStageError
from .text.html import NORMALIZER_MODE_LEGACY, HtmlNormalizer

app = typer.Typer(
    name="crmhandlers",
    no_args_is_help=True,
    help="CRM plugin handler tools.",
)


def _load_yaml_config(config_path: Path | None) -> HandlerConfig:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return HandlerConfig()

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise HandlerStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise HandlerStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _read_input(path: Path | None) -> str:
    """Read HTML input from a file, or from stdin when no path is given."""

    if path is None:
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise HandlerStageError(
            stage="read",
            detail=f"Cannot read input file `{path}`: {exc.strerror or exc}.",
            hint="Verify the path exists and is readable.",
        ) from exc


@app.command("normalize")
def normalize_command(
    path: Annotated[
        Path | None,
        typer.Argument(help="HTML file to normalize. Reads stdin when omitted."),
    ] = None,
    legacy: Annotated[
        bool,
        typer.Option("--legacy", help="Use the earlier strip-then-decode rules."),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
) -> None:
    """Print the plain-text rendition of rich-text HTML."""

    try:
        config = _load_yaml_config(config_file)
        mode = NORMALIZER_MODE_LEGACY if legacy else config.normalizer_mode
        normalizer = HtmlNormalizer.for_mode(mode)
        text = normalizer.normalize(_read_input(path))
    except Exception as exc:
        exit_with_command_error("normalize", exc)

    typer.echo(text)


@app.command("version")
def version_command() -> None:
    """Print the installed crmhandlers version."""

    typer.echo(__version__)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
