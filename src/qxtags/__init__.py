"""qxtags - ctags-style symbol index for qooxdoo class definitions."""

__version__ = "0.1.0"

from .config import Config
from .models import ClassRecord, ClassType, DirectoryEvent, MemberEntry, MemberKind
from .analyzer import ClassExtractor
from .backends import JSParser, SourceParseError
from .scanner import DirectoryIndexer, DuplicateClassError, SourceRegistry
from .generator import TagGenerator, access_level

__all__ = [
    "Config",
    "ClassRecord",
    "ClassType",
    "DirectoryEvent",
    "MemberEntry",
    "MemberKind",
    "ClassExtractor",
    "JSParser",
    "SourceParseError",
    "DirectoryIndexer",
    "DuplicateClassError",
    "SourceRegistry",
    "TagGenerator",
    "access_level",
]
