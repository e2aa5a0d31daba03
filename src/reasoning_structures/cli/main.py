"""CLI main module for reasoning-structures.

This module provides the entry point for the reasoning-structures command-line
interface using Typer. It handles configuration loading and logging setup, and
dispatches to subcommands that work on serialized graph snapshots.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from reasoning_structures import __version__
from reasoning_structures.config import Settings, get_settings
from reasoning_structures.logging import setup_logging

if TYPE_CHECKING:
    import logging

app = typer.Typer(
    name="reasoning-structures",
    help="reasoning-structures: inspect and reflect on reasoning graphs.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Global state for CLI context
_cli_context: CLIContext | None = None


class CLIContext:
    """Context object passed to CLI commands.

    Attributes:
        settings: Application settings instance
        logger: Configured logger instance
        verbose: Verbosity level (0=normal, 1+=debug)
    """

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        verbose: int = 0,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.verbose = verbose


def get_cli_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        typer.Exit: If context not initialized.
    """
    if _cli_context is None:
        typer.echo("Error: CLI context not initialized", err=True)
        raise typer.Exit(1)
    return _cli_context


def get_settings_from_config(config_path: str | None) -> Settings:
    """Load settings from a .env-style config file or use defaults.

    Raises:
        typer.Exit: If the config file path is invalid or unreadable.
    """
    if config_path is None:
        return get_settings()

    config_file = Path(config_path)
    if not config_file.is_file():
        typer.echo(f"Error: Config file not found: {config_path}", err=True)
        raise typer.Exit(1)

    try:
        return Settings(_env_file=str(config_file))  # type: ignore[call-arg]
    except ValueError as e:
        typer.echo(f"Error: Failed to load config: {e}", err=True)
        raise typer.Exit(1) from e


def setup_logging_from_verbosity(verbosity: int, settings: Settings) -> logging.Logger:
    """Configure logging; any ``-v`` switches to DEBUG."""
    log_level = settings.log_level if verbosity == 0 else "DEBUG"
    return setup_logging(settings=settings, log_level=log_level)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"reasoning-structures version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase verbosity",
        ),
    ] = 0,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """reasoning-structures: inspect and reflect on reasoning graphs.

    Commands read a graph snapshot written by GraphOfThoughts.serialize().
    """
    global _cli_context

    settings = get_settings_from_config(str(config) if config else None)
    logger = setup_logging_from_verbosity(verbose, settings)

    _cli_context = CLIContext(settings=settings, logger=logger, verbose=verbose)

    if verbose > 0:
        logger.debug("CLI started with verbosity=%d", verbose)
        logger.debug("Config: %s", config or "default")


@app.command()
def inspect(
    snapshot: Annotated[
        Path,
        typer.Argument(help="Path to a serialized graph (JSON)"),
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
    top_k: Annotated[
        int,
        typer.Option("--top", "-k", min=1, help="Number of critical nodes to list"),
    ] = 5,
) -> None:
    """Show statistics, ordering and structure of a graph snapshot.

    Examples:
        reasoning-structures inspect graph.json
        reasoning-structures inspect graph.json --json
    """
    from reasoning_structures.cli.commands.inspect import inspect_snapshot

    ctx = get_cli_context()
    inspect_snapshot(ctx, snapshot, as_json=as_json, top_k=top_k)


@app.command()
def reflect(
    snapshot: Annotated[
        Path,
        typer.Argument(help="Path to a serialized graph (JSON)"),
    ],
    note: Annotated[
        str | None,
        typer.Option("--note", "-n", help="Reflection note to include"),
    ] = None,
) -> None:
    """Print the reflection report for a graph snapshot.

    Examples:
        reasoning-structures reflect graph.json --note "check merge weights"
    """
    from reasoning_structures.cli.commands.inspect import reflect_snapshot

    ctx = get_cli_context()
    reflect_snapshot(ctx, snapshot, note=note)


def main() -> None:
    """Entry point for the CLI application.

    This function is called by the installed console script and handles
    graceful shutdown on interrupts.
    """
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\nInterrupted by user", err=True)
        sys.exit(130)


__all__ = [
    "CLIContext",
    "app",
    "get_cli_context",
    "get_settings_from_config",
    "main",
    "setup_logging_from_verbosity",
]
