"""Syntax tree model consumed by the engine.

Trees are produced by an external parser (see :mod:`i18nscan.utils.estree`)
and borrowed read-only for the duration of a scan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union


class NodeKind(str, Enum):
    """Closed set of node kinds the rules dispatch on."""

    PROGRAM = "program"
    JSX_ELEMENT = "jsx-element"
    JSX_ATTRIBUTE = "jsx-attribute"
    JSX_TEXT = "jsx-text"
    JSX_EXPRESSION_CONTAINER = "jsx-expression-container"
    STRING_LITERAL = "string-literal"
    NUMERIC_LITERAL = "numeric-literal"
    TEMPLATE_LITERAL = "template-literal"
    TEMPLATE_ELEMENT = "template-element"
    BINARY_EXPRESSION = "binary-expression"
    CONDITIONAL_EXPRESSION = "conditional-expression"
    CALL_EXPRESSION = "call-expression"
    MEMBER_EXPRESSION = "member-expression"
    IDENTIFIER = "identifier"
    VARIABLE_DECLARATOR = "variable-declarator"
    ASSIGNMENT_EXPRESSION = "assignment-expression"
    AWAIT_EXPRESSION = "await-expression"
    OBJECT_LITERAL = "object-literal"
    ARRAY_LITERAL = "array-literal"
    PROPERTY = "property"
    OBJECT_PATTERN = "object-pattern"
    FUNCTION = "function"
    BLOCK = "block"
    COMMENT = "comment"
    OTHER = "other"


@dataclass(frozen=True)
class Span:
    """Source range. Lines and columns are 1-based, offsets 0-based."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    start_offset: int
    end_offset: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "start_line": self.start_line,
            "start_column": self.start_column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "start_offset": self.start_offset,
            "end_offset": self.end_offset,
        }


LANGUAGE_BY_SUFFIX = {
    "tsx": "tsx",
    "jsx": "jsx",
    "ts": "ts",
    "mts": "ts",
    "cts": "ts",
    "js": "js",
    "mjs": "js",
    "cjs": "js",
}

FieldValue = Union["SyntaxNode", Tuple["SyntaxNode", ...], None]


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    """Opaque handle into a parsed tree.

    ``value`` holds the literal text for literals, the name for identifiers,
    the tag name for JSX elements, the attribute name for JSX attributes and
    the body for comments. ``fields`` holds the named child slots.
    """

    kind: NodeKind
    span: Span
    value: Optional[str] = None
    operator: Optional[str] = None
    fields: Mapping[str, FieldValue] = field(default_factory=dict)

    def get(self, name: str) -> Optional["SyntaxNode"]:
        """Return a single-node field, or ``None``."""

        value = self.fields.get(name)
        if isinstance(value, SyntaxNode):
            return value
        return None

    def get_all(self, name: str) -> Tuple["SyntaxNode", ...]:
        """Return a list field as a tuple (empty when absent)."""

        value = self.fields.get(name)
        if isinstance(value, tuple):
            return value
        if isinstance(value, SyntaxNode):
            return (value,)
        return ()

    @cached_property
    def children(self) -> Tuple["SyntaxNode", ...]:
        collected = []
        for value in self.fields.values():
            if isinstance(value, SyntaxNode):
                collected.append(value)
            elif isinstance(value, tuple):
                collected.extend(item for item in value if isinstance(item, SyntaxNode))
        return tuple(sorted(collected, key=lambda node: node.span.start_offset))

    def iter_tree(self) -> Iterator["SyntaxNode"]:
        """Pre-order iteration without recursion."""

        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class SourceFile:
    """One already-parsed source file."""

    path: str
    language: str
    tree: SyntaxNode
    length: int
    comments: Tuple[SyntaxNode, ...] = ()


class MalformedTreeError(Exception):
    """Raised when a tree violates basic structural expectations."""

    def __init__(self, message: str, span: Optional[Span] = None) -> None:
        super().__init__(message)
        self.span = span


def check_span(node: SyntaxNode, length: int) -> None:
    """Raise :class:`MalformedTreeError` if ``node`` lies outside the file."""

    span = node.span
    if span.start_offset < 0 or span.end_offset > length:
        raise MalformedTreeError(
            f"{node.kind.value} node spans {span.start_offset}-{span.end_offset} "
            f"outside file of length {length}",
            span,
        )
    if span.end_offset < span.start_offset:
        raise MalformedTreeError(
            f"{node.kind.value} node ends before it starts "
            f"({span.start_offset}-{span.end_offset})",
            span,
        )


def language_for_path(path: str) -> str:
    """Return the dialect tag for a file path."""

    suffix = path.rsplit(".", 1)[-1].lower() if "." in path else ""
    return LANGUAGE_BY_SUFFIX.get(suffix, "js")
