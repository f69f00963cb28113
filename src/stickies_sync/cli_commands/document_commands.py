"""Document commands: show, new, add, edit, remove, clear."""

from __future__ import annotations

from typing import Annotated

import typer

from stickies_sync.config import Config
from stickies_sync.sync.controller import SyncController
from stickies_sync.sync.state import SaveStatus

from .shared import (
    console,
    get_config_and_logger,
    load_or_exit,
    parse_id_or_exit,
    render_notes,
    report_status,
    run_with_controller,
)


def register(app: typer.Typer) -> None:
    """Register document commands on the given Typer app."""

    @app.command()
    def show(
        stickies_id: Annotated[str, typer.Argument(help="24-character stickies id")],
    ) -> None:
        """Print the notes of a stickies document."""
        config, _logger = get_config_and_logger()
        stickies_id = parse_id_or_exit(stickies_id)

        async def action(controller: SyncController) -> None:
            await load_or_exit(controller, stickies_id)

        controller = run_with_controller(config, action)
        render_notes(controller)

    @app.command()
    def new(
        texts: Annotated[list[str], typer.Argument(help="Text of each note")],
    ) -> None:
        """Create a new document with one note per TEXT."""
        config, logger = get_config_and_logger()

        async def action(controller: SyncController) -> None:
            controller.edit_text(0, texts[0])
            for text in texts[1:]:
                controller.add_note(text)

        controller = run_with_controller(config, action)
        logger.debug("cli_new_finished", stickies_id=controller.stickies_id)
        if not controller.document.has_content():
            console.print("[yellow]All notes are blank; nothing was saved[/yellow]")
            return
        report_status(controller, config)

    @app.command()
    def add(
        stickies_id: Annotated[str, typer.Argument(help="24-character stickies id")],
        texts: Annotated[list[str], typer.Argument(help="Text of each new note")],
    ) -> None:
        """Append notes to an existing document."""
        config, _logger = get_config_and_logger()
        stickies_id = parse_id_or_exit(stickies_id)

        async def action(controller: SyncController) -> None:
            await load_or_exit(controller, stickies_id)
            for text in texts:
                controller.add_note(text)

        report_status(run_with_controller(config, action), config)

    @app.command()
    def edit(
        stickies_id: Annotated[str, typer.Argument(help="24-character stickies id")],
        index: Annotated[int, typer.Argument(help="Position of the note", min=0)],
        text: Annotated[str, typer.Argument(help="New note text")],
    ) -> None:
        """Replace the text of one note."""
        config, _logger = get_config_and_logger()
        stickies_id = parse_id_or_exit(stickies_id)

        async def action(controller: SyncController) -> None:
            await load_or_exit(controller, stickies_id)
            _check_index(controller, index)
            controller.edit_text(index, text)

        report_status(run_with_controller(config, action), config)

    @app.command()
    def recolor(
        stickies_id: Annotated[str, typer.Argument(help="24-character stickies id")],
        index: Annotated[int, typer.Argument(help="Position of the note", min=0)],
    ) -> None:
        """Cycle one note to the next palette colour."""
        config, _logger = get_config_and_logger()
        stickies_id = parse_id_or_exit(stickies_id)

        async def action(controller: SyncController) -> None:
            await load_or_exit(controller, stickies_id)
            _check_index(controller, index)
            controller.change_color(index)

        report_status(run_with_controller(config, action), config)

    @app.command()
    def move(
        stickies_id: Annotated[str, typer.Argument(help="24-character stickies id")],
        from_index: Annotated[int, typer.Argument(help="Current position", min=0)],
        to_index: Annotated[int, typer.Argument(help="New position", min=0)],
    ) -> None:
        """Move a note to another position."""
        config, _logger = get_config_and_logger()
        stickies_id = parse_id_or_exit(stickies_id)

        async def action(controller: SyncController) -> None:
            await load_or_exit(controller, stickies_id)
            _check_index(controller, from_index)
            _check_index(controller, to_index)
            controller.move_note(from_index, to_index)

        report_status(run_with_controller(config, action), config)

    @app.command()
    def remove(
        stickies_id: Annotated[str, typer.Argument(help="24-character stickies id")],
        index: Annotated[int, typer.Argument(help="Position of the note", min=0)],
    ) -> None:
        """Remove one note; removing the last note deletes the document."""
        config, _logger = get_config_and_logger()
        stickies_id = parse_id_or_exit(stickies_id)

        async def action(controller: SyncController) -> None:
            await load_or_exit(controller, stickies_id)
            _check_index(controller, index)
            _remove_note(controller, index)

        controller = run_with_controller(config, action)
        _report_removal(controller, config, stickies_id)

    @app.command()
    def clear(
        stickies_id: Annotated[str, typer.Argument(help="24-character stickies id")],
    ) -> None:
        """Remove every note, deleting the remote document."""
        config, _logger = get_config_and_logger()
        stickies_id = parse_id_or_exit(stickies_id)

        async def action(controller: SyncController) -> None:
            await load_or_exit(controller, stickies_id)
            for index in reversed(range(len(controller.notes))):
                _remove_note(controller, index)

        controller = run_with_controller(config, action)
        _report_removal(controller, config, stickies_id)


def _check_index(controller: SyncController, index: int) -> None:
    if index >= len(controller.notes):
        console.print(
            f"[red]No note at position {index}[/red] "
            f"(document has {len(controller.notes)})"
        )
        raise typer.Exit(code=2)


def _remove_note(controller: SyncController, index: int) -> None:
    # Only blank notes can be deleted, so blank it first.
    controller.edit_text(index, "")
    controller.delete_note(index)


def _report_removal(
    controller: SyncController, config: Config, stickies_id: str
) -> None:
    if controller.stickies_id is None and controller.status is SaveStatus.SAVED:
        console.print(f"[green]Deleted[/green] stickies {stickies_id}")
        return
    report_status(controller, config)
