"""Project discovery - locating hbsite.yaml and loading the site config."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from hbsite.lib.config import CONFIG_FILENAME, SiteConfig, load_config


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Search upwards from `start` (or cwd) for `hbsite.yaml`.

    Returns None when the filesystem root is reached without finding one.
    """
    cur = (start or Path.cwd()).resolve()

    for p in [cur] + list(cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None


def load_project(
    config_path: Optional[Path] = None, start: Optional[Path] = None
) -> SiteConfig:
    """Load the project config.

    An explicit `config_path` must exist. Otherwise `hbsite.yaml` is looked up
    from `start`; if there is none, defaults apply with `start` (or cwd) as
    the project root.
    """
    if config_path is not None:
        return load_config(config_path)

    found = find_config_file(start)
    if found is None:
        return SiteConfig(root=(start or Path.cwd()).resolve())
    return load_config(found)
