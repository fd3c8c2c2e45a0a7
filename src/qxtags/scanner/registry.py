"""Incremental registry of source files and the classes they define."""

from __future__ import annotations

import logging
import os
from typing import Iterator

from ..analyzer.class_extractor import ClassExtractor
from ..backends.parsers import JSParser
from ..config import Config
from ..models import ClassRecord

logger = logging.getLogger(__name__)


class DuplicateClassError(Exception):
    """Raised when two different files define the same class name."""

    def __init__(self, name: str, existing_path: str, path: str):
        self.name = name
        self.existing_path = existing_path
        self.path = path
        super().__init__(
            f"duplicate class name {name!r}: defined in {existing_path} and {path}"
        )


class SourceRegistry:
    """Two-way index between source files and the classes they define.

    ``_sources`` maps each checked file to the ordered class names it owns;
    ``_classes`` maps every class name to its record. Re-checking a file
    always retracts what it contributed before, so a class never outlives
    the file revision that defined it.

    Usage:
        registry = SourceRegistry()
        registry.check_file("/abs/path/source/class/app/Foo.js")
        record = registry.get("app.Foo")
    """

    def __init__(self, config: Config | None = None, extractor: ClassExtractor | None = None):
        self.config = config or Config()
        self._parser = JSParser()
        self._extractor = extractor or ClassExtractor(self._parser, self.config.define_calls)
        self._sources: dict[str, list[str]] = {}
        self._classes: dict[str, ClassRecord] = {}

    @property
    def classes(self) -> dict[str, ClassRecord]:
        """Class name to record, in registration order."""
        return self._classes

    @property
    def paths(self) -> list[str]:
        """Every currently tracked file path."""
        return list(self._sources)

    def owned_classes(self, path: str) -> list[str]:
        return list(self._sources.get(path, []))

    def get(self, name: str) -> ClassRecord | None:
        return self._classes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[ClassRecord]:
        return iter(self._classes.values())

    def check_file(self, path: str) -> bool:
        """(Re-)index one source file.

        Args:
            path: Absolute path of the file.

        Returns:
            True if the file was read and indexed, False if it does not exist
            (any classes it defined before have been retracted).

        Raises:
            ValueError: if ``path`` is not absolute.
            SourceParseError: if the file is not valid JavaScript.
            DuplicateClassError: if another file already defines one of its classes.
            OSError: for read failures other than a missing file.
        """
        if not os.path.isabs(path) or os.path.normpath(path) != path:
            raise ValueError(f"Path must be absolute and normalized: {path}")

        self.retract(path)

        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                source = f.read()
        except FileNotFoundError:
            logger.debug("Source not found, retracted: %s", path)
            return False

        program = self._parser.parse(source, path)
        records = self._extractor.extract_all(path, program)

        # ownership grows with each insert, even if a later record aborts
        names: list[str] = []
        self._sources[path] = names
        for record in records:
            previous = self._classes.get(record.name)
            if previous is not None and previous.path != path:
                raise DuplicateClassError(record.name, previous.path, path)
            self._classes[record.name] = record
            if record.name not in names:
                names.append(record.name)

        logger.debug("Indexed %s: %d class(es)", path, len(names))
        return True

    def retract(self, path: str) -> bool:
        """Drop a file and every class it owns. Returns False if it was not tracked."""
        names = self._sources.pop(path, None)
        if names is None:
            return False
        for name in names:
            self._classes.pop(name, None)
        return True
