"""Detect hardcoded text content rendered by JSX elements."""

from __future__ import annotations

from typing import List

from ..matchers import is_jsx_text_node, resolve_static_string
from ..result import Finding
from ..severity import Category, Severity
from ..syntax import NodeKind, SyntaxNode
from ..utils.text import suggest_key, truncate
from . import Rule, TraversalContext


class JsxTextRule:
    """Flag ``<h1>Welcome back</h1>`` and ``<p>{"Welcome back"}</p>``."""

    id = "jsx-text"
    category = Category.HARDCODED_STRING
    target_kinds = frozenset({NodeKind.JSX_TEXT, NodeKind.JSX_EXPRESSION_CONTAINER})
    default_severity = Severity.WARNING
    help = "Wrap hardcoded JSX text with t() function call for translation support"

    def check(self, node: SyntaxNode, context: TraversalContext) -> List[Finding]:
        if is_jsx_text_node(node):
            text = (node.value or "").strip()
        else:
            # Only element children; attribute values belong to jsx-attribute.
            parent = context.parent
            if parent is None or parent.kind is not NodeKind.JSX_ELEMENT:
                return []
            resolved = resolve_static_string(node.get("expression"))
            if resolved is None:
                return []
            text = resolved.strip()

        if not text or not context.looks_like_text(text):
            return []

        if context.inside_element(context.config.ignored_jsx_elements):
            return []

        return [
            context.finding(
                self,
                node.span,
                text,
                f'Hardcoded text: "{truncate(text, 40)}"',
                suggested_key=suggest_key(text, context.file_path),
            )
        ]


def get_rule() -> Rule:
    return JsxTextRule()
