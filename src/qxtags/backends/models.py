"""Syntax node model for parsed JavaScript sources.

Each node kind is its own frozen dataclass carrying only the fields that kind
guarantees. Nodes are built once by the parser; consumers dispatch on the
class (or ``kind``) instead of probing attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterator


@dataclass(frozen=True)
class Node:
    """Base node: source start line (1-indexed) and regenerated text."""

    kind: ClassVar[str] = "Node"

    line: int
    text: str

    def children(self) -> Iterator[Node]:
        return iter(())


@dataclass(frozen=True)
class Identifier(Node):
    kind: ClassVar[str] = "Identifier"

    name: str


@dataclass(frozen=True)
class StringLiteral(Node):
    kind: ClassVar[str] = "StringLiteral"

    value: str


@dataclass(frozen=True)
class NumberLiteral(Node):
    kind: ClassVar[str] = "NumberLiteral"

    value: str


@dataclass(frozen=True)
class Expression(Node):
    """Any expression the core does not look inside (member access, null, ...)."""

    kind: ClassVar[str] = "Expression"

    syntax: str  # tree-sitter node type


@dataclass(frozen=True)
class FunctionLiteral(Node):
    kind: ClassVar[str] = "FunctionExpression"

    params: tuple[Node, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.params)


@dataclass(frozen=True)
class ArrayLiteral(Node):
    kind: ClassVar[str] = "ArrayExpression"

    elements: tuple[Node, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.elements)


@dataclass(frozen=True)
class Property(Node):
    """One ``key: value`` entry of an object literal."""

    kind: ClassVar[str] = "Property"

    key: Node
    value: Node

    def children(self) -> Iterator[Node]:
        yield self.key
        yield self.value


@dataclass(frozen=True)
class ObjectLiteral(Node):
    kind: ClassVar[str] = "ObjectExpression"

    entries: tuple[Property, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.entries)


@dataclass(frozen=True)
class CallExpression(Node):
    kind: ClassVar[str] = "CallExpression"

    callee: Node
    arguments: tuple[Node, ...]

    def children(self) -> Iterator[Node]:
        yield self.callee
        yield from self.arguments


@dataclass(frozen=True)
class ExpressionStatement(Node):
    kind: ClassVar[str] = "ExpressionStatement"

    expression: Node

    def children(self) -> Iterator[Node]:
        yield self.expression


@dataclass(frozen=True)
class Statement(Node):
    """Top-level statement other than an expression statement."""

    kind: ClassVar[str] = "Statement"

    syntax: str


@dataclass(frozen=True)
class Program(Node):
    kind: ClassVar[str] = "Program"

    body: tuple[Node, ...]

    def children(self) -> Iterator[Node]:
        return iter(self.body)


def key_name(key: Node) -> str:
    """Name an object-literal key: identifiers verbatim, literals by value."""
    if isinstance(key, Identifier):
        return key.name
    if isinstance(key, (StringLiteral, NumberLiteral)):
        return key.value
    return key.text
