"""Dist service - assembles the distributable folder.

Built pages are copied with their development asset references rewritten
to the bundled ones; static asset folders are copied as-is.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from hbsite.lib.config import SiteConfig

log = logging.getLogger(__name__)


@dataclass
class DistReport:
    pages: list[Path] = field(default_factory=list)
    folders: list[str] = field(default_factory=list)
    missing_folders: list[str] = field(default_factory=list)


def rewrite_asset_paths(html: str, rewrites: Mapping[str, str]) -> str:
    """Replace every source asset path with its built counterpart."""
    for src, dest in rewrites.items():
        html = html.replace(src, dest)
    return html


def copy_pages(
    output_dir: Path, dist_dir: Path, rewrites: Mapping[str, str]
) -> list[Path]:
    """Copy built HTML pages into `dist_dir`, rewriting asset paths."""
    pages = sorted(p for p in output_dir.glob("*.html") if p.is_file())
    if not pages:
        log.warning(f"No HTML files found in {output_dir}")
        return []

    log.info(f"Found {len(pages)} HTML file(s)")
    copied = []
    for page in pages:
        dest = dist_dir / page.name
        content = page.read_text(encoding="utf-8")
        dest.write_text(rewrite_asset_paths(content, rewrites), encoding="utf-8")
        log.info(f"✓ Copied and transformed: {page.name}")
        copied.append(dest)
    return copied


def copy_static_folder(src: Path, dest: Path, exclude: list[str]) -> bool:
    """Recursively copy `src` to `dest`, skipping directories named in `exclude`.

    Returns False when `src` does not exist.
    """
    if not src.is_dir():
        return False

    excluded = set(exclude)

    def ignore(directory: str, names: list[str]) -> set[str]:
        return {n for n in names if n in excluded and (Path(directory) / n).is_dir()}

    shutil.copytree(src, dest, ignore=ignore, dirs_exist_ok=True)
    return True


def assemble_dist(config: SiteConfig) -> DistReport:
    """Copy pages and static folders into the dist directory."""
    dist_dir = config.dist_dir
    dist_dir.mkdir(parents=True, exist_ok=True)
    report = DistReport()

    log.info(f"Copying HTML files to {dist_dir}")
    report.pages = copy_pages(config.output_dir, dist_dir, config.dist.rewrites)

    assets_rel = config.paths.assets
    if assets_rel.is_absolute():
        assets_rel = Path(assets_rel.name)
    for folder in config.dist.static_folders:
        src = config.assets_dir / folder
        dest = dist_dir / assets_rel / folder
        exclude = config.dist.exclude.get(folder, [])

        if copy_static_folder(src, dest, exclude):
            note = f" (excluding: {', '.join(exclude)})" if exclude else ""
            log.info(f"✓ Copied: {assets_rel / folder}/ → {dest}/{note}")
            report.folders.append(folder)
        else:
            log.warning(f"Folder not found: {assets_rel / folder}/")
            report.missing_folders.append(folder)

    return report
