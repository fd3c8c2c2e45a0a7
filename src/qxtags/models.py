"""Core data models for qxtags."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .backends.models import Node


class ClassType(str, Enum):
    """Classification set by a class body's ``type`` section."""

    NONE = "none"
    ABSTRACT = "abstract"
    SINGLETON = "singleton"
    STATIC = "static"


class MemberKind(str, Enum):
    """Tag kinds, valued by their one-letter tag-file code."""

    CLASS = "c"
    EXTENDS = "x"
    INCLUDE = "n"
    IMPLEMENT = "i"
    METHOD = "m"
    PROPERTY = "p"
    STATIC = "s"
    EVENT = "e"


@dataclass
class MemberEntry:
    """A single extracted class member (mixin, method, property, ...)."""

    name: str
    node: Node
    signature: str | None = None

    @property
    def line(self) -> int:
        return self.node.line


@dataclass
class ClassRecord:
    """Everything extracted from one class-definition call."""

    path: str
    name: str
    body: Node
    type: ClassType = ClassType.NONE
    extend: MemberEntry | None = None
    include: list[MemberEntry] = field(default_factory=list)
    implement: list[MemberEntry] = field(default_factory=list)
    methods: list[MemberEntry] = field(default_factory=list)
    properties: list[MemberEntry] = field(default_factory=list)
    statics: list[MemberEntry] = field(default_factory=list)
    events: list[MemberEntry] = field(default_factory=list)

    @property
    def line(self) -> int:
        return self.body.line

    def members(self) -> list[tuple[MemberKind, MemberEntry]]:
        """All members tagged with their kind, grouped in declaration-kind order."""
        groups = (
            (MemberKind.INCLUDE, self.include),
            (MemberKind.IMPLEMENT, self.implement),
            (MemberKind.METHOD, self.methods),
            (MemberKind.PROPERTY, self.properties),
            (MemberKind.STATIC, self.statics),
            (MemberKind.EVENT, self.events),
        )
        return [(kind, entry) for kind, entries in groups for entry in entries]


@dataclass(frozen=True)
class DirectoryEvent:
    """Notification emitted by the directory indexer."""

    kind: str  # "add" or "remove"
    path: str
