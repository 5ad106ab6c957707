"""
restlang CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform
from pathlib import Path

import typer

from restlang._version import get_version
from restlang.core.errors import ConfigError
from restlang.core.manifest import RestlangConfig, find_config, load_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        typer.echo(f"restlang {get_version()}")
        typer.echo(f"Python:  {python_impl} {python_version}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    """Send library logs to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def resolve_config(source: Path, config: Path | None) -> RestlangConfig:
    """
    Load the explicit config file, or the nearest restlang.toml above source.

    Exits with code 1 if the configuration is invalid.
    """
    path = config if config is not None else find_config(source.parent)
    if config is not None and not config.exists():
        typer.echo(f"Config file not found: {config}", err=True)
        raise typer.Exit(code=1)
    try:
        return load_config(path)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(code=1)
