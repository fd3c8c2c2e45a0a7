"""Class extraction from qooxdoo class-definition calls."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from ..backends.models import (
    ArrayLiteral,
    CallExpression,
    FunctionLiteral,
    Node,
    ObjectLiteral,
    Program,
    StringLiteral,
    key_name,
)
from ..backends.parsers import JSParser
from ..config import DEFAULT_DEFINE_CALLS
from ..models import ClassRecord, ClassType, MemberEntry

logger = logging.getLogger(__name__)

TOP_LEVEL_CALLS = "Program > ExpressionStatement > CallExpression"

CONSTRUCTOR_NAME = "[constructor]"
DESTRUCTOR_NAME = "[destructor]"


class Section(str, Enum):
    """Recognized keys of a class body."""

    EXTEND = "extend"
    INCLUDE = "include"
    IMPLEMENT = "implement"
    CONSTRUCT = "construct"
    DESTRUCT = "destruct"
    STATICS = "statics"
    MEMBERS = "members"
    PROPERTIES = "properties"
    EVENTS = "events"
    TYPE = "type"
    ENVIRONMENT = "environment"
    DEFER = "defer"

    @classmethod
    def lookup(cls, key: str) -> "Section | None":
        try:
            return cls(key)
        except ValueError:
            return None


SectionHandler = Callable[[ClassRecord, Node], None]


class ClassExtractor:
    """Turn class-definition calls into ClassRecords.

    The extractor holds no per-file state; one instance can be shared by
    every file a registry checks.
    """

    def __init__(self, parser: JSParser | None = None, define_calls: list[str] | None = None):
        self._parser = parser or JSParser()
        self._define_calls = set(define_calls or DEFAULT_DEFINE_CALLS)
        self._handlers: dict[Section, SectionHandler] = {
            Section.EXTEND: self._extend,
            Section.INCLUDE: self._include,
            Section.IMPLEMENT: self._implement,
            Section.CONSTRUCT: self._construct,
            Section.DESTRUCT: self._destruct,
            Section.STATICS: self._statics,
            Section.MEMBERS: self._members,
            Section.PROPERTIES: self._properties,
            Section.EVENTS: self._events,
            Section.TYPE: self._type,
            Section.ENVIRONMENT: self._ignore,
            Section.DEFER: self._ignore,
        }

    def extract_all(self, path: str, program: Program) -> list[ClassRecord]:
        """Extract every top-level class definition in a parsed file."""
        records: list[ClassRecord] = []
        for call in self._parser.select(program, TOP_LEVEL_CALLS):
            if self._parser.regenerate(call.callee) not in self._define_calls:
                continue
            record = self.extract(path, call)
            if record is not None:
                records.append(record)
        return records

    def extract(self, path: str, call: CallExpression) -> ClassRecord | None:
        """Extract one class from a definition call.

        Args:
            path: Owning file path.
            call: A ``qx.Class.define(name, body)`` call node.

        Returns:
            The ClassRecord, or None if the call does not have a literal name
            and an object-literal body.
        """
        args = call.arguments
        if len(args) < 2 or not isinstance(args[0], StringLiteral) or not isinstance(args[1], ObjectLiteral):
            logger.warning(
                "Skipping malformed class definition at %s:%d", path, call.line
            )
            return None

        name_node, body = args[0], args[1]
        record = ClassRecord(path=path, name=name_node.value, body=body)

        for entry in body.entries:
            key = key_name(entry.key)
            section = Section.lookup(key)
            handler = self._handlers.get(section) if section else None
            if handler is None:
                self._unknown(record, entry.key)
                continue
            handler(record, entry.value)

        return record

    def _extend(self, record: ClassRecord, value: Node) -> None:
        record.extend = self._reference(value)

    def _include(self, record: ClassRecord, value: Node) -> None:
        record.include = self._references(value)

    def _implement(self, record: ClassRecord, value: Node) -> None:
        record.implement = self._references(value)

    def _construct(self, record: ClassRecord, value: Node) -> None:
        record.methods.append(
            MemberEntry(name=CONSTRUCTOR_NAME, node=value, signature=self._signature(value))
        )

    def _destruct(self, record: ClassRecord, value: Node) -> None:
        record.methods.append(
            MemberEntry(name=DESTRUCTOR_NAME, node=value, signature=self._signature(value))
        )

    def _statics(self, record: ClassRecord, value: Node) -> None:
        for entry in self._object_entries(record, Section.STATICS, value):
            record.statics.append(MemberEntry(name=key_name(entry.key), node=entry.value))

    def _members(self, record: ClassRecord, value: Node) -> None:
        for entry in self._object_entries(record, Section.MEMBERS, value):
            name = key_name(entry.key)
            if isinstance(entry.value, FunctionLiteral):
                record.methods.append(
                    MemberEntry(name=name, node=entry.value, signature=self._signature(entry.value))
                )
            else:
                default = self._parser.regenerate(entry.value)
                record.properties.append(
                    MemberEntry(name=name, node=entry.value, signature=f"(={default})")
                )

    def _properties(self, record: ClassRecord, value: Node) -> None:
        for entry in self._object_entries(record, Section.PROPERTIES, value):
            record.properties.append(MemberEntry(name=key_name(entry.key), node=entry.value))

    def _events(self, record: ClassRecord, value: Node) -> None:
        for entry in self._object_entries(record, Section.EVENTS, value):
            record.events.append(MemberEntry(name=key_name(entry.key), node=entry.value))

    def _type(self, record: ClassRecord, value: Node) -> None:
        text = value.value if isinstance(value, StringLiteral) else self._parser.regenerate(value)
        try:
            record.type = ClassType(text)
        except ValueError:
            logger.warning("Unknown class type %r for %s at line %d", text, record.name, value.line)

    def _ignore(self, record: ClassRecord, value: Node) -> None:
        pass

    def _unknown(self, record: ClassRecord, key: Node) -> None:
        logger.warning(
            "Unknown class section %r in %s (%s:%d)",
            key_name(key),
            record.name,
            record.path,
            key.line,
        )

    def _reference(self, node: Node) -> MemberEntry:
        if isinstance(node, StringLiteral):
            return MemberEntry(name=node.value, node=node)
        return MemberEntry(name=self._parser.regenerate(node), node=node)

    def _references(self, node: Node) -> list[MemberEntry]:
        if isinstance(node, ArrayLiteral):
            return [self._reference(element) for element in node.elements]
        return [self._reference(node)]

    def _signature(self, node: Node) -> str | None:
        if not isinstance(node, FunctionLiteral):
            return None
        return "(" + ", ".join(self._parser.regenerate(p) for p in node.params) + ")"

    def _object_entries(self, record: ClassRecord, section: Section, value: Node):
        if not isinstance(value, ObjectLiteral):
            logger.warning(
                "Section %r of %s is not an object literal (line %d)",
                section.value,
                record.name,
                value.line,
            )
            return ()
        return value.entries
