"""Tag-file generation."""

from .tag_generator import TagGenerator, access_level

__all__ = ["TagGenerator", "access_level"]
