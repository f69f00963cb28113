"""Command-line interface for the stickies client."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_commands import document_commands
from .cli_commands.shared import console, get_config_and_logger
from .exceptions import ConfigurationError

app = typer.Typer(
    name="stickies-sync",
    help="Read and edit sticky-note documents stored on a stickies server.",
    no_args_is_help=True,
)


@app.callback()
def main(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config.yaml", exists=True),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="Stickies server URL, e.g. http://localhost:3000"),
    ] = None,
) -> None:
    """Load configuration before any command runs."""
    try:
        get_config_and_logger(config_path, log_level, base_url)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e.message}")
        if e.suggestion:
            console.print(f"[dim]{e.suggestion}[/dim]")
        raise typer.Exit(code=2) from e


document_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
