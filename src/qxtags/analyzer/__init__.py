"""Class extraction from parsed qooxdoo sources."""

from .class_extractor import ClassExtractor, Section

__all__ = ["ClassExtractor", "Section"]
