"""Watch service - rebuilds the site when template sources change.

Polls file modification times. A change (re)starts the debounce timer; when
the timer runs out a full rebuild runs. The rebuild is synchronous, so a
new rebuild can never start while one is still in progress.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterable

log = logging.getLogger(__name__)


def snapshot(roots: Iterable[Path], suffixes: Iterable[str]) -> dict[Path, int]:
    """Map every watched file under `roots` to its mtime (ns).

    A root may be a single file. Missing roots are skipped.
    """
    suffixes = tuple(suffixes)
    state: dict[Path, int] = {}
    for root in roots:
        if root.is_file():
            candidates: Iterable[Path] = [root]
        elif root.is_dir():
            candidates = root.rglob("*")
        else:
            continue
        for path in candidates:
            if path.is_file() and path.name.endswith(suffixes):
                try:
                    state[path] = path.stat().st_mtime_ns
                except FileNotFoundError:
                    # deleted between listing and stat
                    continue
    return state


class Watcher:
    """Debounced polling watcher driving a rebuild callback."""

    def __init__(
        self,
        roots: Iterable[Path],
        rebuild: Callable[[], object],
        suffixes: Iterable[str] = (".hbs",),
        debounce: float = 0.1,
        interval: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.roots = [Path(r) for r in roots]
        self.rebuild = rebuild
        self.suffixes = tuple(suffixes)
        self.debounce = debounce
        self.interval = interval
        self.clock = clock
        self.sleep = sleep
        self.rebuilds = 0
        self._state = snapshot(self.roots, self.suffixes)
        self._deadline: float | None = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def changes(self) -> list[Path]:
        """Files added, removed or modified since the last call."""
        current = snapshot(self.roots, self.suffixes)
        changed = [p for p, mtime in current.items() if self._state.get(p) != mtime]
        changed += [p for p in self._state if p not in current]
        self._state = current
        return sorted(changed)

    def schedule(self) -> None:
        """Replace any pending rebuild with one due after the debounce delay."""
        self._deadline = self.clock() + self.debounce

    def poll(self) -> bool:
        """Check for changes once; returns True if a rebuild ran."""
        changed = self.changes()
        for path in changed:
            log.info(f"Changed: {path}")
        if changed:
            self.schedule()

        if self._deadline is None or self.clock() < self._deadline:
            return False

        self._deadline = None
        log.info("Rebuilding HTML...")
        self.rebuild()
        self.rebuilds += 1
        # changes made during the rebuild are picked up by the next poll
        return True

    def run(self, max_polls: int | None = None) -> None:
        """Build once, then poll until interrupted (or `max_polls` is reached)."""
        self._deadline = self.clock()
        polls = 0
        while max_polls is None or polls < max_polls:
            self.poll()
            polls += 1
            self.sleep(self.interval)
