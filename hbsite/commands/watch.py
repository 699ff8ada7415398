"""Watch command - rebuild HTML whenever templates change"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from hbsite.lib.config import CONFIG_FILENAME
from hbsite.lib.data import resolve_mode
from hbsite.lib.errors import HbsiteError, handle_error
from hbsite.services.build import build_site
from hbsite.services.watch import Watcher

from .utils import console, get_config

log = logging.getLogger(__name__)


def watch_command(config_path: Optional[Path] = None, prod: bool = False) -> None:
    """Build once, then rebuild on every change until Ctrl-C."""
    try:
        config = get_config(config_path)
    except (HbsiteError, FileNotFoundError) as e:
        handle_error(e)

    mode = resolve_mode(prod)
    config_file = config_path or config.root / CONFIG_FILENAME

    def rebuild() -> None:
        # Config and data are reloaded so edits to hbsite.yaml apply
        try:
            fresh = get_config(config_path)
        except (HbsiteError, FileNotFoundError) as e:
            log.error(f"Rebuild skipped: {e}")
            return
        report = build_site(fresh, mode=mode)
        if report.attempted and report.clean:
            console.print("[green]HTML rebuilt[/green]\n")

    roots = [
        config.templates_dir,
        config.components_dir,
        config.layouts_dir,
        Path(config_file),
    ]
    watcher = Watcher(
        roots,
        rebuild,
        suffixes=config.watch.suffixes,
        debounce=config.watch.debounce,
        interval=config.watch.interval,
    )

    console.print("[dim]Watching templates for changes...[/dim]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")
    try:
        watcher.run()
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped watching[/dim]")
