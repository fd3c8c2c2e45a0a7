"""Syntax layer: node model and the tree-sitter backed parser."""

from .models import (
    ArrayLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    Node,
    NumberLiteral,
    ObjectLiteral,
    Program,
    Property,
    Statement,
    StringLiteral,
    key_name,
)
from .parsers import JSParser, SourceParseError

__all__ = [
    "ArrayLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "Node",
    "NumberLiteral",
    "ObjectLiteral",
    "Program",
    "Property",
    "Statement",
    "StringLiteral",
    "key_name",
    "JSParser",
    "SourceParseError",
]
