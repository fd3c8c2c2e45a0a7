"""Language-specific parsers for AST analysis."""

from .js_parser import JSParser, SourceParseError

__all__ = ["JSParser", "SourceParseError"]
