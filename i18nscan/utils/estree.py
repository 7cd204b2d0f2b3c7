"""ESTree / Babel AST helpers.

Parsing happens elsewhere (Babel, typescript-estree, espree...). This module
only converts their JSON output into :class:`~i18nscan.syntax.SyntaxNode`
trees.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..syntax import LANGUAGE_BY_SUFFIX, MalformedTreeError, NodeKind, SourceFile, Span, SyntaxNode, language_for_path
from .code import source_path_for
from .fileio import read_json_file

SKIP_KEYS = frozenset(
    {
        "type",
        "loc",
        "range",
        "start",
        "end",
        "extra",
        "leadingComments",
        "trailingComments",
        "innerComments",
        "comments",
        "tokens",
        "typeAnnotation",
        "returnType",
        "typeParameters",
        "typeArguments",
        "superTypeParameters",
        "decorators",
    }
)
TRANSPARENT_TYPES = frozenset(
    {
        "ParenthesizedExpression",
        "TSAsExpression",
        "TSSatisfiesExpression",
        "TSNonNullExpression",
        "TSTypeAssertion",
        "TypeCastExpression",
    }
)
FUNCTION_TYPES = frozenset(
    {
        "FunctionDeclaration",
        "FunctionExpression",
        "ArrowFunctionExpression",
        "ObjectMethod",
        "ClassMethod",
        "ClassPrivateMethod",
    }
)
COMMENT_TYPES = frozenset({"CommentLine", "CommentBlock", "Line", "Block"})

RawFields = List[Tuple[str, Any]]


def _position(raw: Dict[str, Any]) -> Span:
    start = raw.get("start")
    end = raw.get("end")
    if start is None or end is None:
        span_range = raw.get("range")
        if not isinstance(span_range, (list, tuple)) or len(span_range) != 2:
            raise MalformedTreeError(f"{raw.get('type')} node has no position information")
        start, end = span_range
    loc = raw.get("loc") or {}
    loc_start = loc.get("start") or {}
    loc_end = loc.get("end") or {}
    return Span(
        start_line=int(loc_start.get("line", 1)),
        start_column=int(loc_start.get("column", start)) + 1,
        end_line=int(loc_end.get("line", 1)),
        end_column=int(loc_end.get("column", end)) + 1,
        start_offset=int(start),
        end_offset=int(end),
    )


def _unwrap(raw: Any) -> Any:
    while isinstance(raw, dict) and raw.get("type") in TRANSPARENT_TYPES and isinstance(raw.get("expression"), dict):
        raw = raw["expression"]
    return raw


def _jsx_name(raw: Any) -> str:
    if not isinstance(raw, dict):
        return ""
    node_type = raw.get("type")
    if node_type == "JSXIdentifier":
        return str(raw.get("name", ""))
    if node_type == "JSXNamespacedName":
        return f"{_jsx_name(raw.get('namespace'))}:{_jsx_name(raw.get('name'))}"
    if node_type == "JSXMemberExpression":
        return f"{_jsx_name(raw.get('object'))}.{_jsx_name(raw.get('property'))}"
    return ""


def _generic_fields(raw: Dict[str, Any]) -> RawFields:
    fields: RawFields = []
    for key, value in raw.items():
        if key in SKIP_KEYS:
            continue
        if isinstance(value, dict) and "type" in value:
            fields.append((key, value))
        elif isinstance(value, list) and any(isinstance(item, dict) and "type" in item for item in value):
            fields.append((key, value))
    return fields


def _describe(raw: Dict[str, Any]) -> Tuple[NodeKind, Optional[str], Optional[str], RawFields]:
    """Map one raw node to (kind, value, operator, raw child fields)."""

    node_type = raw.get("type")
    if node_type == "Program":
        return NodeKind.PROGRAM, None, None, [("body", raw.get("body") or [])]
    if node_type == "JSXElement":
        opening = raw.get("openingElement") or {}
        return (
            NodeKind.JSX_ELEMENT,
            _jsx_name(opening.get("name")),
            None,
            [("attributes", opening.get("attributes") or []), ("children", raw.get("children") or [])],
        )
    if node_type == "JSXFragment":
        return NodeKind.JSX_ELEMENT, "", None, [("children", raw.get("children") or [])]
    if node_type == "JSXAttribute":
        return NodeKind.JSX_ATTRIBUTE, _jsx_name(raw.get("name")), None, [("value", raw.get("value"))]
    if node_type == "JSXText":
        return NodeKind.JSX_TEXT, str(raw.get("value", "")), None, []
    if node_type == "JSXExpressionContainer":
        expression = raw.get("expression")
        if isinstance(expression, dict) and expression.get("type") == "JSXEmptyExpression":
            expression = None
        return NodeKind.JSX_EXPRESSION_CONTAINER, None, None, [("expression", expression)]
    if node_type in ("StringLiteral", "DirectiveLiteral"):
        return NodeKind.STRING_LITERAL, str(raw.get("value", "")), None, []
    if node_type == "NumericLiteral":
        return NodeKind.NUMERIC_LITERAL, str(raw.get("value")), None, []
    if node_type == "Literal":
        value = raw.get("value")
        if isinstance(value, str):
            return NodeKind.STRING_LITERAL, value, None, []
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return NodeKind.NUMERIC_LITERAL, str(value), None, []
        return NodeKind.OTHER, None, None, []
    if node_type == "TemplateLiteral":
        return (
            NodeKind.TEMPLATE_LITERAL,
            None,
            None,
            [("quasis", raw.get("quasis") or []), ("expressions", raw.get("expressions") or [])],
        )
    if node_type == "TemplateElement":
        value = raw.get("value") or {}
        cooked = value.get("cooked")
        return NodeKind.TEMPLATE_ELEMENT, cooked if cooked is not None else value.get("raw", ""), None, []
    if node_type == "BinaryExpression":
        return (
            NodeKind.BINARY_EXPRESSION,
            None,
            raw.get("operator"),
            [("left", raw.get("left")), ("right", raw.get("right"))],
        )
    if node_type == "ConditionalExpression":
        return (
            NodeKind.CONDITIONAL_EXPRESSION,
            None,
            None,
            [("test", raw.get("test")), ("consequent", raw.get("consequent")), ("alternate", raw.get("alternate"))],
        )
    if node_type in ("CallExpression", "OptionalCallExpression"):
        return (
            NodeKind.CALL_EXPRESSION,
            None,
            None,
            [("callee", raw.get("callee")), ("arguments", raw.get("arguments") or [])],
        )
    if node_type in ("MemberExpression", "OptionalMemberExpression"):
        return (
            NodeKind.MEMBER_EXPRESSION,
            None,
            "computed" if raw.get("computed") else None,
            [("object", raw.get("object")), ("property", raw.get("property"))],
        )
    if node_type == "Identifier":
        return NodeKind.IDENTIFIER, str(raw.get("name", "")), None, []
    if node_type == "VariableDeclarator":
        return NodeKind.VARIABLE_DECLARATOR, None, None, [("id", raw.get("id")), ("init", raw.get("init"))]
    if node_type == "AssignmentExpression":
        return (
            NodeKind.ASSIGNMENT_EXPRESSION,
            None,
            raw.get("operator"),
            [("left", raw.get("left")), ("right", raw.get("right"))],
        )
    if node_type == "AwaitExpression":
        return NodeKind.AWAIT_EXPRESSION, None, None, [("argument", raw.get("argument"))]
    if node_type == "ObjectExpression":
        return NodeKind.OBJECT_LITERAL, None, None, [("properties", raw.get("properties") or [])]
    if node_type == "ArrayExpression":
        return NodeKind.ARRAY_LITERAL, None, None, [("elements", [item for item in raw.get("elements") or [] if item])]
    if node_type in ("ObjectProperty", "Property") and raw.get("kind", "init") == "init" and not raw.get("method"):
        return (
            NodeKind.PROPERTY,
            None,
            "computed" if raw.get("computed") else None,
            [("key", raw.get("key")), ("value", raw.get("value"))],
        )
    if node_type == "ObjectPattern":
        return NodeKind.OBJECT_PATTERN, None, None, [("properties", raw.get("properties") or [])]
    if node_type in FUNCTION_TYPES:
        name = raw.get("id") or raw.get("key")
        label = str(name.get("name")) if isinstance(name, dict) and name.get("type") == "Identifier" else None
        return NodeKind.FUNCTION, label, None, [("params", raw.get("params") or []), ("body", raw.get("body"))]
    if node_type in ("BlockStatement", "StaticBlock"):
        return NodeKind.BLOCK, None, None, [("body", raw.get("body") or [])]
    if node_type in ("JSXOpeningElement", "JSXClosingElement", "JSXIdentifier", "JSXMemberExpression", "JSXNamespacedName"):
        return NodeKind.OTHER, None, None, []
    return NodeKind.OTHER, None, raw.get("operator"), _generic_fields(raw)


def convert_node(raw: Any) -> SyntaxNode:
    """Convert one raw ESTree node (and its subtree) into a :class:`SyntaxNode`.

    Uses an explicit stack so deeply nested expressions do not exhaust the
    interpreter's recursion limit.
    """

    root = _unwrap(raw)
    if not isinstance(root, dict) or not isinstance(root.get("type"), str):
        raise MalformedTreeError("AST root is not a node object")

    built: Dict[int, SyntaxNode] = {}
    described: Dict[int, Tuple[NodeKind, Optional[str], Optional[str], RawFields]] = {}
    stack: List[Tuple[bool, Dict[str, Any]]] = [(False, root)]
    while stack:
        ready, current = stack.pop()
        key = id(current)
        if ready:
            kind, value, operator, raw_fields = described[key]
            fields: Dict[str, Any] = {}
            for name, child in raw_fields:
                if isinstance(child, list):
                    fields[name] = tuple(built[id(_unwrap(item))] for item in child if _is_node(item))
                elif _is_node(child):
                    fields[name] = built[id(_unwrap(child))]
                else:
                    fields[name] = None
            built[key] = SyntaxNode(
                kind=kind,
                span=_position(current),
                value=value,
                operator=operator,
                fields=fields,
            )
            continue
        if key in described:
            continue
        description = _describe(current)
        described[key] = description
        stack.append((True, current))
        for _, child in reversed(description[3]):
            items = child if isinstance(child, list) else [child]
            for item in reversed(items):
                if _is_node(item):
                    stack.append((False, _unwrap(item)))
    return built[id(root)]


def _is_node(raw: Any) -> bool:
    return isinstance(raw, dict) and isinstance(raw.get("type"), str)


def convert_comment(raw: Dict[str, Any]) -> SyntaxNode:
    return SyntaxNode(
        kind=NodeKind.COMMENT,
        span=_position(raw),
        value=str(raw.get("value", "")),
        operator="block" if raw.get("type") in ("CommentBlock", "Block") else "line",
    )


def source_file_from_estree(
    payload: Any,
    path: str,
    language: Optional[str] = None,
    length: Optional[int] = None,
) -> SourceFile:
    """Build a :class:`SourceFile` from a parser's JSON output.

    Accepts a Babel ``File`` node, a bare ``Program`` node, or a wrapper
    ``{"path", "language", "length", "ast"}``.
    """

    if not isinstance(payload, dict):
        raise MalformedTreeError("AST document is not an object")
    if "ast" in payload and "type" not in payload:
        path = str(payload.get("path") or path)
        language = payload.get("language") or language
        if payload.get("length") is not None:
            length = int(payload["length"])
        payload = payload["ast"]
        if not isinstance(payload, dict):
            raise MalformedTreeError("'ast' is not an object")

    comments_raw = payload.get("comments") or []
    file_end = payload.get("end") if payload.get("type") == "File" else None
    program_raw = payload.get("program") if payload.get("type") == "File" else payload
    if not _is_node(program_raw):
        raise MalformedTreeError("AST document has no program node")

    tree = convert_node(program_raw)
    comments = tuple(convert_comment(item) for item in comments_raw if isinstance(item, dict) and item.get("type") in COMMENT_TYPES)
    if length is None:
        if file_end is not None:
            length = int(file_end)
        else:
            length = max([tree.span.end_offset] + [comment.span.end_offset for comment in comments])
    if language is None or language not in LANGUAGE_BY_SUFFIX.values():
        language = language_for_path(path)
    return SourceFile(path=path, language=language, tree=tree, length=length, comments=comments)


def load_source_file(ast_path: Path) -> SourceFile:
    """Read a JSON AST dump from disk."""

    try:
        payload = read_json_file(ast_path)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedTreeError(f"{ast_path}: invalid AST JSON ({exc})") from exc
    if payload is None:
        raise MalformedTreeError(f"{ast_path}: file not found")
    return source_file_from_estree(payload, source_path_for(ast_path))
