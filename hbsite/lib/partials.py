"""Partial registry - named template fragments available to every page."""

from __future__ import annotations

import logging
from pathlib import Path

from hbsite.lib.renderer import CompiledTemplate, HandlebarsRenderer

log = logging.getLogger(__name__)


class PartialRegistry:
    """Maps partial names to their raw template text.

    One registry is built per build invocation and dropped afterwards.
    Registering a name twice overwrites the earlier entry (last wins), so two
    ``header.hbs`` files in different component folders resolve to whichever
    was visited last.
    """

    def __init__(self, extension: str = ".hbs"):
        self.extension = extension
        self._sources: dict[str, str] = {}
        self._compiled: dict[str, CompiledTemplate] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    @property
    def names(self) -> list[str]:
        return list(self._sources)

    def get(self, name: str) -> str | None:
        return self._sources.get(name)

    def register(self, name: str, source: str) -> None:
        """Register (or replace) a partial."""
        if name in self._sources:
            log.debug(f"Overwriting partial: {name}")
        self._sources[name] = source
        self._compiled.pop(name, None)
        log.debug(f"Registered partial: {name}")

    def register_directory(self, root: Path) -> int:
        """Recursively register every fragment file under ``root``.

        Entries are visited in sorted order; subdirectories are descended
        into as they are met. A missing ``root`` registers nothing.

        Returns:
            Number of files registered.
        """
        root = Path(root)
        if not root.is_dir():
            return 0

        count = 0
        for entry in sorted(root.iterdir()):
            if entry.is_dir():
                count += self.register_directory(entry)
            elif entry.name.endswith(self.extension):
                name = entry.name[: -len(self.extension)]
                self.register(name, entry.read_text(encoding="utf-8"))
                count += 1
        return count

    def compiled(self, renderer: HandlebarsRenderer) -> dict[str, CompiledTemplate]:
        """Return every partial compiled, compiling each source only once."""
        for name, source in self._sources.items():
            if name not in self._compiled:
                self._compiled[name] = renderer.compile(source, f"partial {name}")
        return dict(self._compiled)
