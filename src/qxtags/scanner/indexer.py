"""Recursive directory indexer that keeps a SourceRegistry in sync with disk."""

from __future__ import annotations

import logging
import os
import stat
from collections import deque
from typing import Callable

from ..config import Config
from ..models import DirectoryEvent
from .registry import SourceRegistry

logger = logging.getLogger(__name__)

Observer = Callable[[DirectoryEvent], None]


def _is_under(path: str, root: str) -> bool:
    """True if ``path`` is ``root`` itself or lies below it."""
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)


class DirectoryIndexer:
    """Walks directory trees and feeds qooxdoo sources to a registry.

    Directories scanned at least once are remembered; a later scan that finds
    one of them gone retracts every file below it and notifies observers with
    a single ``remove`` event.
    """

    def __init__(self, registry: SourceRegistry, config: Config | None = None):
        self.registry = registry
        self.config = config or registry.config
        self._dirs: set[str] = set()
        self._observers: list[Observer] = []

    @property
    def known_dirs(self) -> set[str]:
        return set(self._dirs)

    def subscribe(self, observer: Observer) -> None:
        """Register a callback invoked synchronously for every add/remove event."""
        self._observers.append(observer)

    def scan(self, root: str, observer: Observer | None = None) -> None:
        """Breadth-first scan of ``root``.

        Args:
            root: Absolute directory path.
            observer: Optional callback for events produced by this call only,
                delivered after the subscribed observers.

        Raises:
            ValueError: if ``root`` is not absolute.
            OSError: for listing or stat failures other than a vanished path.
        """
        if not os.path.isabs(root):
            raise ValueError(f"Path must be absolute: {root}")
        root = os.path.normpath(root)

        queue: deque[str] = deque([root])
        visited: set[str] = set()

        while queue:
            path = queue.popleft()
            if path in visited:
                continue

            try:
                names = sorted(os.listdir(path))
            except FileNotFoundError:
                self.remove(path, observer)
                continue

            visited.add(path)
            seen_dirs: set[str] = set()
            seen_files: set[str] = set()

            for name in names:
                child = os.path.join(path, name)
                try:
                    st = os.stat(child)
                except FileNotFoundError:
                    logger.debug("Entry vanished during scan: %s", child)
                    continue

                if stat.S_ISDIR(st.st_mode):
                    if name in self.config.ignored_dirs:
                        continue
                    seen_dirs.add(child)
                    queue.append(child)
                elif stat.S_ISREG(st.st_mode) and name.endswith(self.config.source_extension):
                    seen_files.add(child)
                    self.registry.check_file(child)

            self._prune(path, seen_dirs, seen_files, observer)

            newly_added = path not in self._dirs
            self._dirs.add(path)
            if newly_added:
                self._notify(DirectoryEvent("add", path), observer)

    def remove(self, path: str, observer: Observer | None = None) -> bool:
        """Forget a vanished directory and everything indexed below it.

        Returns:
            False if ``path`` was never scanned, True otherwise.
        """
        if path not in self._dirs:
            return False

        self._dirs = {d for d in self._dirs if not _is_under(d, path)}

        for src_path in [p for p in self.registry.paths if _is_under(p, path)]:
            self.registry.check_file(src_path)

        self._notify(DirectoryEvent("remove", path), observer)
        return True

    def _prune(
        self,
        path: str,
        seen_dirs: set[str],
        seen_files: set[str],
        observer: Observer | None,
    ) -> None:
        """Drop known children of ``path`` that the latest listing no longer shows."""
        gone_dirs = sorted(
            d for d in self._dirs if os.path.dirname(d) == path and d != path and d not in seen_dirs
        )
        for gone in gone_dirs:
            self.remove(gone, observer)

        for src_path in self.registry.paths:
            if (
                os.path.dirname(src_path) == path
                and src_path.endswith(self.config.source_extension)
                and src_path not in seen_files
            ):
                self.registry.retract(src_path)

    def _notify(self, event: DirectoryEvent, observer: Observer | None) -> None:
        logger.debug("Directory %s: %s", event.kind, event.path)
        for callback in self._observers:
            callback(event)
        if observer is not None:
            observer(event)
