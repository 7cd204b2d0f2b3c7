"""Detect user-facing text assigned to variables.

Strict filtering keeps noise down: the variable name must not suggest a
technical value and the initializer must resolve to natural language without
going through a translation call.
"""

from __future__ import annotations

from typing import List

from ..result import Finding
from ..severity import Category, Severity
from ..syntax import NodeKind, SyntaxNode
from ..utils.text import suggest_key, truncate
from . import Rule, TraversalContext

# Compared lower-cased.
IGNORE_VARIABLE_NAMES = frozenset(
    {
        "id", "key", "type", "name", "classname", "class", "style", "styles",
        "href", "src", "url", "path", "route", "endpoint", "query", "params",
        "config", "options", "settings", "env", "mode", "format", "variant",
        "size", "color", "status", "state", "icon", "target", "rel", "method",
        "headers", "contenttype", "mimetype", "encoding", "charset", "locale",
        "lang", "language", "namespace", "ns", "prefix", "suffix", "extension",
        "ext", "version", "v",
    }
)
TECHNICAL_SUFFIXES = ("Id", "ID", "Key", "Class", "ClassName", "Style", "Url", "URL", "Path", "Type")
SNAKE_SUFFIXES = ("_id", "_key", "_class", "_style", "_url", "_path", "_type")


def is_technical_name(name: str) -> bool:
    lowered = name.lower()
    if lowered in IGNORE_VARIABLE_NAMES:
        return True
    return name.endswith(TECHNICAL_SUFFIXES) or lowered.endswith(SNAKE_SUFFIXES)


class StringVariableRule:
    id = "string-variable"
    category = Category.HARDCODED_STRING
    target_kinds = frozenset({NodeKind.VARIABLE_DECLARATOR})
    default_severity = Severity.WARNING
    help = "Move user-facing strings to translation files and use t()"

    def check(self, node: SyntaxNode, context: TraversalContext) -> List[Finding]:
        target = node.get("id")
        init = node.get("init")
        if target is None or init is None or target.kind is not NodeKind.IDENTIFIER:
            return []
        name = target.value or ""
        if is_technical_name(name):
            return []
        # `const b = a` re-reports nothing; `a` was checked at its own declaration.
        if init.kind is NodeKind.IDENTIFIER:
            return []
        if context.contains_translation(init):
            return []

        text = context.resolve(init)
        if text is None:
            return []
        text = text.strip()
        if not context.looks_like_variable_text(text):
            return []

        return [
            context.finding(
                self,
                init.span,
                text,
                f'Hardcoded string: "{truncate(text, 40)}"',
                suggested_key=suggest_key(text, context.file_path, identifier=name),
            )
        ]


def get_rule() -> Rule:
    return StringVariableRule()
