"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from hbsite.lib.config import SiteConfig
from hbsite.lib.project import load_project

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the hbsite CLI.

    Log levels:
    - Normal: INFO - per-page build progress, warnings and errors
    - Verbose (-v): DEBUG - also partial registration
    - Debug (HBSITE_DEBUG=1): DEBUG with source paths
    """
    debug = bool(os.environ.get("HBSITE_DEBUG"))
    level = logging.DEBUG if (debug or verbose) else logging.INFO

    # Use RichHandler for pretty output
    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    hbsite_logger = logging.getLogger("hbsite")
    hbsite_logger.setLevel(level)
    hbsite_logger.handlers = [handler]
    hbsite_logger.propagate = False


def get_config(config_path: Optional[Path] = None) -> SiteConfig:
    """Load hbsite.yaml from the given path or from cwd upwards."""
    return load_project(config_path=config_path)
