"""Dist command - copy built pages and static assets to dist"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from hbsite.lib.errors import HbsiteError, handle_error
from hbsite.services.dist import DistReport, assemble_dist

from .utils import console, get_config


def dist_command(config_path: Optional[Path] = None) -> DistReport:
    """Assemble the distributable folder."""
    try:
        config = get_config(config_path)
    except (HbsiteError, FileNotFoundError) as e:
        handle_error(e)

    report = assemble_dist(config)
    console.print(
        f"\n[green]Copied {len(report.pages)} page(s) and "
        f"{len(report.folders)} static folder(s) to {config.dist_dir}[/green]\n"
    )
    return report
