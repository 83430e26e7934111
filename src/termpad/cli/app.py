"""Typer CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from termpad.config import DEFAULT_CONFIG_PATH, load_config

console = Console(stderr=True)


def _configure_logging(log_file: Optional[Path], verbose: bool) -> None:
    """Send log records to a file; the terminal belongs to the editor."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="termpad",
        help="A small tabbed text editor for the terminal.",
        add_completion=False,
        rich_markup_mode="rich",
    )

    @app.command()
    def edit(
        path: Annotated[Optional[Path], typer.Argument(help="File to open (created on first save if missing)")] = None,
        config: Annotated[Optional[Path], typer.Option("--config", "-c", help="JSON config file")] = None,
        log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Write a debug log to this file")] = None,
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug messages")] = False,
    ) -> None:
        """Edit PATH, or an untitled document.

        [bold]Keys:[/] ^S save, ^O open, ^N new tab, ^K/^L previous/next tab,
        ^W close tab, ^Q quit.
        """
        from termpad.cli.core.terminal import Terminal
        from termpad.cli.editor import run_editor

        _configure_logging(log_file, verbose)

        try:
            editor_config = load_config(config or DEFAULT_CONFIG_PATH)
        except ValueError as e:
            console.print(f"[red]Invalid configuration:[/] {e}")
            raise typer.Exit(1)

        if path is not None and path.is_dir():
            console.print(f"[red]{path} is a directory[/]")
            raise typer.Exit(1)

        if not Terminal.is_interactive():
            console.print("[red]termpad needs an interactive terminal[/]")
            raise typer.Exit(1)

        try:
            run_editor(path, editor_config)
        except OSError as e:
            console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1)

    return app
