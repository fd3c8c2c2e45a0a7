"""Source registry and directory indexer."""

from .registry import DuplicateClassError, SourceRegistry
from .indexer import DirectoryIndexer

__all__ = ["DuplicateClassError", "SourceRegistry", "DirectoryIndexer"]
