"""Detect ternaries choosing between hardcoded strings.

The classic anti-pattern is ``locale === 'en' ? 'Hello' : 'Merhaba'``; such
locale comparisons are errors. Other ternaries over two static strings are
reported as warnings.
"""

from __future__ import annotations

from typing import List, Optional

from ..matchers import member_name
from ..result import Finding
from ..severity import Category, Severity
from ..syntax import NodeKind, SyntaxNode
from ..utils.text import suggest_key, truncate
from . import Rule, TraversalContext

LOCALE_NAMES = frozenset({"locale", "lang", "language", "currentLocale", "currentLanguage"})
COMPARISON_OPERATORS = frozenset({"===", "==", "!==", "!="})


def _is_locale_reference(node: Optional[SyntaxNode]) -> bool:
    name = member_name(node)
    if name is None:
        return False
    return name.rsplit(".", 1)[-1] in LOCALE_NAMES


def is_locale_comparison(test: Optional[SyntaxNode]) -> bool:
    if test is None or test.kind is not NodeKind.BINARY_EXPRESSION:
        return False
    if test.operator not in COMPARISON_OPERATORS:
        return False
    return _is_locale_reference(test.get("left")) or _is_locale_reference(test.get("right"))


class TernaryLocaleRule:
    id = "ternary-locale"
    category = Category.HARDCODED_STRING
    target_kinds = frozenset({NodeKind.CONDITIONAL_EXPRESSION})
    default_severity = Severity.WARNING
    help = "Replace locale-based ternary (locale === 'en' ? 'Hello' : 'Merhaba') with t() function"

    def check(self, node: SyntaxNode, context: TraversalContext) -> List[Finding]:
        consequent = context.resolve(node.get("consequent"))
        alternate = context.resolve(node.get("alternate"))
        if consequent is None or alternate is None:
            return []

        candidates = [text.strip() for text in (consequent, alternate) if text.strip()]
        natural = [text for text in candidates if context.looks_like_text(text)]
        if not natural:
            return []

        text = natural[0]
        if is_locale_comparison(node.get("test")):
            severity = Severity.ERROR
            message = f'Locale ternary pattern detected: "{truncate(text, 30)}"'
        else:
            severity = Severity.WARNING
            message = f'Hardcoded strings in conditional: "{truncate(text, 30)}"'

        return [
            context.finding(
                self,
                node.span,
                text,
                message,
                severity=severity,
                suggested_key=suggest_key(text, context.file_path),
            )
        ]


def get_rule() -> Rule:
    return TernaryLocaleRule()
