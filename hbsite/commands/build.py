"""Build command - compile page templates to HTML"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from hbsite.lib.data import resolve_mode
from hbsite.lib.errors import HbsiteError, handle_error
from hbsite.services.build import BuildReport, build_site

from .utils import console, get_config


def build_command(
    config_path: Optional[Path] = None,
    prod: bool = False,
    strict: bool = False,
) -> BuildReport:
    """Build every page once.

    Page failures are reported but do not change the exit code unless
    `strict` is set.
    """
    try:
        config = get_config(config_path)
    except (HbsiteError, FileNotFoundError) as e:
        handle_error(e)

    mode = resolve_mode(prod)
    console.print(f"\n[bold]Building HTML from Handlebars templates[/bold] ({mode})\n")
    report = build_site(config, mode=mode)

    if report.attempted:
        if report.clean:
            console.print(f"\n[green]Built {report.attempted} template(s)[/green]\n")
        else:
            console.print(
                f"\n[yellow]Built {report.attempted} template(s), "
                f"{len(report.failed)} failed[/yellow]\n"
            )

    if strict and not report.clean:
        raise typer.Exit(1)
    return report
