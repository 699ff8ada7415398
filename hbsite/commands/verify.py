"""Verify command - check the bundler output"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from hbsite.lib.errors import HbsiteError, handle_error
from hbsite.services.verify import VerifyReport, verify_bundle

from .utils import console, get_config


def verify_command(config_path: Optional[Path] = None) -> VerifyReport:
    """Print a table of bundle checks; exit 1 if any required check fails."""
    try:
        config = get_config(config_path)
    except (HbsiteError, FileNotFoundError) as e:
        handle_error(e)

    report = verify_bundle(config)

    table = Table(title="Bundle verification")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Detail", style="dim")

    for f in report.files:
        if f.exists:
            table.add_row(f.path, "[green]✓[/green]", f"{f.size_kb:.2f} KB")
        elif f.required:
            table.add_row(f.path, "[red]✗[/red]", "missing")
        else:
            table.add_row(f.path, "[yellow]-[/yellow]", "optional, not found")

    for c in report.contents:
        if c.passed:
            table.add_row(c.description, "[green]✓[/green]", c.path)
        else:
            table.add_row(c.description, "[red]✗[/red]", f"{c.path}: {c.reason}")

    for name in report.unexpected_js:
        table.add_row(name, "[red]✗[/red]", "unexpected chunk (code splitting?)")

    console.print(table)

    if not report.passed:
        console.print("\n[red bold]Some checks failed.[/red bold]\n")
        raise typer.Exit(1)

    console.print("\n[green bold]All checks passed![/green bold]\n")
    return report
