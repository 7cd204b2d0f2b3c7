"""Detect hardcoded strings in user-visible JSX attributes (title, alt, placeholder...)."""

from __future__ import annotations

from typing import List

from ..matchers import attribute_value
from ..result import Finding
from ..severity import Category, Severity
from ..syntax import NodeKind, SyntaxNode
from ..utils.text import suggest_key, truncate
from . import Rule, TraversalContext

# Never user-visible, even when configured by mistake.
IGNORE_ATTRIBUTES = frozenset(
    {
        "className",
        "class",
        "id",
        "key",
        "ref",
        "data-testid",
        "href",
        "src",
        "name",
        "type",
        "role",
    }
)


class JsxAttributeRule:
    id = "jsx-attribute"
    category = Category.HARDCODED_STRING
    target_kinds = frozenset({NodeKind.JSX_ATTRIBUTE})
    default_severity = Severity.WARNING
    help = "Use t() for translatable attributes like title, alt, placeholder, aria-label"

    def check(self, node: SyntaxNode, context: TraversalContext) -> List[Finding]:
        name = node.value or ""
        if name in IGNORE_ATTRIBUTES or name not in context.config.jsx_attributes:
            return []

        text = context.resolve(attribute_value(node))
        if text is None:
            return []
        text = text.strip()
        if not context.looks_like_text(text):
            return []

        return [
            context.finding(
                self,
                node.span,
                text,
                f'Hardcoded {name}: "{truncate(text, 40)}"',
                suggested_key=suggest_key(text, context.file_path, identifier=name),
            )
        ]


def get_rule() -> Rule:
    return JsxAttributeRule()
