"""hbsite CLI Main Entry Point

hbsite - Handlebars static site builder

Usage:
    hbsite build                   # Compile page templates to HTML
    hbsite build --prod            # Use production asset paths
    hbsite watch                   # Rebuild on every template change
    hbsite dist                    # Copy pages and static assets to dist/
    hbsite verify                  # Check the bundler output
    hbsite -v                      # Show version
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ._version import __version__
from .commands import build_command, dist_command, verify_command, watch_command
from .commands.utils import setup_logging

typer_app = typer.Typer(no_args_is_help=True)

ConfigOption = typer.Option(
    None, "-c", "--config", help="Path to hbsite.yaml (default: search upwards)."
)
VerboseOption = typer.Option(False, "--verbose", help="Show debug output.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hbsite {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Build a static website from Handlebars templates."""


@typer_app.command()
def build(
    config: Optional[Path] = ConfigOption,
    prod: bool = typer.Option(False, "--prod", help="Use production asset paths."),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with code 1 if any page fails."
    ),
    verbose: bool = VerboseOption,
) -> None:
    """Compile page templates to HTML.

    Pages that fail to render are logged and skipped; the exit code stays 0
    unless --strict is given.
    """
    setup_logging(verbose)
    build_command(config_path=config, prod=prod, strict=strict)


@typer_app.command()
def watch(
    config: Optional[Path] = ConfigOption,
    prod: bool = typer.Option(False, "--prod", help="Use production asset paths."),
    verbose: bool = VerboseOption,
) -> None:
    """Build, then rebuild whenever a template changes."""
    setup_logging(verbose)
    watch_command(config_path=config, prod=prod)


@typer_app.command()
def dist(
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Copy built pages and static assets to the dist folder."""
    setup_logging(verbose)
    dist_command(config_path=config)


@typer_app.command()
def verify(
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Check that the bundler produced its expected files."""
    setup_logging(verbose)
    verify_command(config_path=config)


def app() -> None:
    """Entry point for the CLI."""
    # NOTE: Typer runs via Click under the hood and handles sys.exit codes for us.
    typer_app()


if __name__ == "__main__":
    app()
