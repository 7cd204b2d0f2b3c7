"""Detect hardcoded messages passed to toast/alert style UI feedback calls.

Works with react-hot-toast, sonner, notistack and plain ``window.alert``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..matchers import callee_name, is_string_like
from ..result import Finding
from ..severity import Category, Severity
from ..syntax import NodeKind, SyntaxNode
from ..utils.text import suggest_key, truncate
from . import Rule, TraversalContext


def matches_feedback_name(name: str, patterns: Iterable[str]) -> bool:
    """``toast.*`` matches ``toast.error`` but not ``toast`` itself."""

    for pattern in patterns:
        if pattern.endswith(".*"):
            prefix = pattern[:-1]
            if name.startswith(prefix) and "." not in name[len(prefix):]:
                return True
        elif name == pattern:
            return True
    return False


class ToastMessageRule:
    id = "toast-message"
    category = Category.HARDCODED_STRING
    target_kinds = frozenset({NodeKind.CALL_EXPRESSION})
    default_severity = Severity.WARNING
    help = "Use t() for toast messages to support translations"

    def check(self, node: SyntaxNode, context: TraversalContext) -> List[Finding]:
        name = callee_name(node)
        if name is None or not matches_feedback_name(name, context.config.ui_feedback_function_names):
            return []

        argument = self._first_string_argument(node)
        if argument is None:
            return []
        text = context.resolve(argument)
        if text is None:
            return []
        text = text.strip()
        if not context.looks_like_text(text):
            return []

        return [
            context.finding(
                self,
                argument.span,
                text,
                f'Hardcoded toast: "{truncate(text, 40)}"',
                suggested_key=suggest_key(text, context.file_path),
            )
        ]

    @staticmethod
    def _first_string_argument(node: SyntaxNode) -> Optional[SyntaxNode]:
        for argument in node.get_all("arguments"):
            if is_string_like(argument):
                return argument
        return None


def get_rule() -> Rule:
    return ToastMessageRule()
