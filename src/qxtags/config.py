"""Configuration management for qxtags."""

import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


DEFAULT_DEFINE_CALLS = ["qx.Class.define"]

PROGRAM_NAME = "qxtags"
PROGRAM_VERSION = "0.1"


def _split_list(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [entry.strip() for entry in value.split(",") if entry.strip()]


class Config(BaseModel):
    """Application configuration."""

    # Extraction Settings
    define_calls: list[str] = Field(default_factory=lambda: DEFAULT_DEFINE_CALLS.copy())

    # Indexer Settings
    source_extension: str = Field(default=".js")
    ignored_dirs: list[str] = Field(default_factory=list)

    # Output Settings
    program_name: str = Field(default=PROGRAM_NAME)
    program_version: str = Field(default=PROGRAM_VERSION)
    log_level: str = Field(default="WARNING")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        define_calls = _split_list(os.getenv("QXTAGS_DEFINE_CALLS")) or DEFAULT_DEFINE_CALLS.copy()

        return cls(
            define_calls=define_calls,
            source_extension=os.getenv("QXTAGS_SOURCE_EXTENSION", ".js"),
            ignored_dirs=_split_list(os.getenv("QXTAGS_IGNORED_DIRS")),
            log_level=os.getenv("QXTAGS_LOG_LEVEL", "WARNING").upper(),
        )
