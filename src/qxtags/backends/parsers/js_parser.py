"""JavaScript parser using tree-sitter.

Turns tree-sitter's concrete syntax tree into the node model in
``qxtags.backends.models`` and offers the query and regeneration helpers the
class extractor relies on.
"""

from __future__ import annotations

import logging
import re

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Parser

from ..models import (
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
)

logger = logging.getLogger(__name__)

JS_LANGUAGE = Language(tsjs.language())

# tree-sitter-javascript renamed "function" to "function_expression" in 0.21
_FUNCTION_TYPES = {
    "function",
    "function_expression",
    "arrow_function",
    "generator_function",
}
_IDENTIFIER_TYPES = {
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "private_property_identifier",
}
_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_VERBATIM_TYPES = frozenset({"string", "template_string", "regex"})
_WHITESPACE_RE = re.compile(r"\s+")
_OCTAL_ESCAPE_RE = re.compile(r"[0-7]{1,3}")
_LEGACY_OCTAL_RE = re.compile(r"0[0-7]+")


class SourceParseError(Exception):
    """Raised when a source file is not syntactically valid JavaScript."""

    def __init__(self, message: str, line: int, path: str | None = None):
        self.message = message
        self.line = line
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"{self.path}:{self.line}" if self.path else f"line {self.line}"
        return f"{where}: {self.message}"


class JSParser:
    """Parse JavaScript source into the qxtags node model."""

    def __init__(self) -> None:
        self._parser = Parser(JS_LANGUAGE)

    def parse(self, source: str, path: str | None = None) -> Program:
        """Parse source text.

        Args:
            source: JavaScript source code.
            path: Optional file path, only used in error messages.

        Returns:
            Program node for the whole file.

        Raises:
            SourceParseError: if tree-sitter reports a syntax error.
        """
        tree = self._parser.parse(source.encode("utf-8"))
        root = tree.root_node
        if root.has_error:
            bad = _first_error(root)
            line = bad.start_point[0] + 1 if bad is not None else 1
            raise SourceParseError("syntax error", line, path)

        body = tuple(
            self._statement(child) for child in root.named_children if child.type != "comment"
        )
        return Program(line=1, text="", body=body)

    def select(self, program: Program, pattern: str) -> list[Node]:
        """Return nodes matching a child-combinator pattern, in source order.

        ``pattern`` is a chain of node kinds joined by ``>``, for example
        ``"Program > ExpressionStatement > CallExpression"``.
        """
        steps = [step.strip() for step in pattern.split(">") if step.strip()]
        if not steps or steps[0] != program.kind:
            return []

        matches: list[Node] = [program]
        for step in steps[1:]:
            matches = [child for node in matches for child in node.children() if child.kind == step]
        return matches

    def regenerate(self, node: Node) -> str:
        """Return the source text of a node on a single line.

        Whitespace runs between tokens become one space; string, template
        and regex literals are kept verbatim.
        """
        return node.text

    def _statement(self, ts_node) -> Node:
        if ts_node.type == "expression_statement":
            inner = _named(ts_node)
            expression = self._expression(inner[0]) if inner else _expression_leaf(ts_node)
            return ExpressionStatement(line=_line(ts_node), text=_text(ts_node), expression=expression)
        return Statement(line=_line(ts_node), text=_text(ts_node), syntax=ts_node.type)

    def _expression(self, ts_node) -> Node:
        node_type = ts_node.type
        line = _line(ts_node)
        text = _text(ts_node)

        if node_type in _IDENTIFIER_TYPES:
            return Identifier(line=line, text=text, name=ts_node.text.decode("utf-8"))
        if node_type == "string":
            return StringLiteral(line=line, text=text, value=_string_value(ts_node))
        if node_type == "number":
            return NumberLiteral(line=line, text=text, value=_number_value(text))
        if node_type == "call_expression":
            callee = ts_node.child_by_field_name("function")
            args = ts_node.child_by_field_name("arguments")
            arguments: tuple[Node, ...] = ()
            if args is not None and args.type == "arguments":
                arguments = tuple(self._expression(arg) for arg in _named(args))
            return CallExpression(
                line=line,
                text=text,
                callee=self._expression(callee),
                arguments=arguments,
            )
        if node_type == "object":
            return ObjectLiteral(line=line, text=text, entries=self._entries(ts_node))
        if node_type == "array":
            return ArrayLiteral(
                line=line,
                text=text,
                elements=tuple(self._expression(el) for el in _named(ts_node)),
            )
        if node_type in _FUNCTION_TYPES:
            return FunctionLiteral(line=line, text=text, params=self._params(ts_node))
        if node_type == "parenthesized_expression":
            inner = _named(ts_node)
            if len(inner) == 1:
                return self._expression(inner[0])
        return Expression(line=line, text=text, syntax=node_type)

    def _entries(self, ts_object) -> tuple[Property, ...]:
        entries: list[Property] = []
        for child in _named(ts_object):
            if child.type == "pair":
                key = self._key(child.child_by_field_name("key"))
                value = self._expression(child.child_by_field_name("value"))
            elif child.type == "shorthand_property_identifier":
                key = self._key(child)
                value = self._expression(child)
            elif child.type == "method_definition":
                key = self._key(child.child_by_field_name("name"))
                value = FunctionLiteral(
                    line=_line(child), text=_text(child), params=self._params(child)
                )
            else:
                # spread elements carry no key
                logger.debug("Skipping object entry of type %s at line %d", child.type, _line(child))
                continue
            entries.append(Property(line=_line(child), text=_text(child), key=key, value=value))
        return tuple(entries)

    def _key(self, ts_node) -> Node:
        if ts_node.type == "computed_property_name":
            return Expression(line=_line(ts_node), text=_text(ts_node), syntax=ts_node.type)
        return self._expression(ts_node)

    def _params(self, ts_function) -> tuple[Node, ...]:
        params = ts_function.child_by_field_name("parameters")
        if params is not None:
            return tuple(self._expression(p) for p in _named(params))
        # single unparenthesized arrow function parameter
        param = ts_function.child_by_field_name("parameter")
        if param is not None:
            return (self._expression(param),)
        return ()


def _named(ts_node) -> list:
    return [child for child in ts_node.named_children if child.type != "comment"]


def _line(ts_node) -> int:
    return ts_node.start_point[0] + 1


def _text(ts_node) -> str:
    """Source text on one line; string, template and regex literals are kept verbatim."""
    source = ts_node.text
    base = ts_node.start_byte
    pieces: list[str] = []
    pos = 0
    for start, end in _verbatim_spans(ts_node):
        pieces.append(_WHITESPACE_RE.sub(" ", source[pos : start - base].decode("utf-8")))
        pieces.append(source[start - base : end - base].decode("utf-8"))
        pos = end - base
    pieces.append(_WHITESPACE_RE.sub(" ", source[pos:].decode("utf-8")))
    return "".join(pieces).strip()


def _verbatim_spans(root):
    """Byte ranges of literal nodes under root, in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in _VERBATIM_TYPES:
            yield node.start_byte, node.end_byte
        else:
            stack.extend(reversed(node.children))


def _expression_leaf(ts_node) -> Expression:
    return Expression(line=_line(ts_node), text=_text(ts_node), syntax=ts_node.type)


def _first_error(root):
    """Find the first ERROR or missing node, depth-first in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _string_value(ts_node) -> str:
    parts: list[str] = []
    for child in ts_node.named_children:
        raw = child.text.decode("utf-8")
        if child.type == "escape_sequence":
            parts.append(_unescape(raw))
        else:
            parts.append(raw)
    # re-pair surrogate halves written as two \u escapes
    return "".join(parts).encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def _unescape(sequence: str) -> str:
    body = sequence[1:]
    if body.startswith("u{") and body.endswith("}"):
        return chr(int(body[2:-1], 16))
    if body.startswith(("u", "x")) and len(body) > 1:
        return chr(int(body[1:], 16))
    if _OCTAL_ESCAPE_RE.fullmatch(body):
        return chr(int(body, 8))
    if body.startswith(("\n", "\r")):
        return ""
    return _ESCAPES.get(body, body)


def _number_value(text: str) -> str:
    """Literal value of a JS number the way JavaScript prints it."""
    cleaned = text.replace("_", "")
    if _LEGACY_OCTAL_RE.fullmatch(cleaned):
        return str(int(cleaned, 8))
    try:
        return str(int(cleaned, 0))
    except ValueError:
        pass
    try:
        value = float(cleaned)
    except ValueError:
        return text
    if value.is_integer():
        return str(int(value))
    return repr(value)
