"""Shared utilities for CLI commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from stickies_sync.api.client import StickiesApiClient
from stickies_sync.config import Config, load_config, set_config
from stickies_sync.exceptions import StickiesSyncError
from stickies_sync.sync.controller import SyncController
from stickies_sync.sync.identifiers import validate_stickies_id
from stickies_sync.sync.state import SaveStatus
from stickies_sync.utils.logging import configure_logging, get_logger

# Shared console for all commands
console = Console()

# Cached for the lifetime of one CLI invocation
_config: Config | None = None
_logger: Any | None = None


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
    base_url: str | None = None,
) -> tuple[Config, Any]:
    """Load configuration and configure logging once per process."""
    global _config, _logger

    if _config is None:
        overrides: dict[str, Any] = {"api_base_url": base_url}
        if log_level:
            overrides["log_level"] = log_level
        _config = load_config(config_path, **overrides)
        set_config(_config)
        configure_logging(_config.log_level, log_file=_config.log_file)
        _logger = get_logger("cli")

    return _config, _logger


def reset_cli_state() -> None:
    """Forget the cached config and logger (for testing)."""
    global _config, _logger
    _config = None
    _logger = None


def parse_id_or_exit(value: str) -> str:
    try:
        return validate_stickies_id(value)
    except StickiesSyncError as e:
        console.print(f"[red]{e.message}[/red]")
        if e.suggestion:
            console.print(f"[dim]{e.suggestion}[/dim]")
        raise typer.Exit(code=2) from e


def run_with_controller(
    config: Config, action: Callable[[SyncController], Awaitable[None]]
) -> SyncController:
    """Run ``action`` against a fresh controller, then save and shut down."""

    async def _run() -> SyncController:
        async with StickiesApiClient(
            config.api_url, timeout=config.request_timeout
        ) as api:
            controller = SyncController.from_config(config, api=api)
            try:
                await action(controller)
                await controller.flush()
            finally:
                await controller.aclose()
            return controller

    return asyncio.run(_run())


async def load_or_exit(controller: SyncController, stickies_id: str) -> None:
    """Load a document, aborting the command if it is missing or unreachable."""
    found = await controller.load(stickies_id)
    if controller.status is SaveStatus.ERROR:
        console.print(f"[red]Failed to load stickies {stickies_id}[/red]")
        raise typer.Exit(code=1)
    if not found:
        console.print(f"[yellow]No stickies found with id {stickies_id}[/yellow]")
        raise typer.Exit(code=1)


def render_notes(controller: SyncController) -> None:
    table = Table(title=controller.stickies_id or "(unsaved)")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Colour")
    table.add_column("Text")

    for index, note in enumerate(controller.notes):
        table.add_row(
            str(index),
            f"[on {note.color}]  [/] {note.color}",
            note.text or "[dim](blank)[/dim]",
        )
    console.print(table)


def report_status(controller: SyncController, config: Config) -> None:
    """Print the final save status; exit 1 when the save failed."""
    status = controller.status
    if status is SaveStatus.ERROR:
        console.print("[red]Save failed[/red] (see log for details)")
        raise typer.Exit(code=1)

    if controller.stickies_id:
        console.print(
            f"[green]Saved[/green] {controller.stickies_id} "
            f"-> {config.document_url(controller.stickies_id)}"
        )
    else:
        console.print("[green]Saved[/green] (no remote document)")
