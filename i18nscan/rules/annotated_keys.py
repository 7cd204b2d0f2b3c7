"""Extract keys listed in ``@i18n-keys`` comment annotations.

    // @i18n-keys: pricing.plans.free.name, pricing.plans.pro.name
    /* @i18n-keys:
       - common.title
       - common.description */

Useful for keys only ever built dynamically. Each key gets its own span
inside the comment so that several keys from one annotation stay distinct.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from ..result import Finding
from ..severity import Category, Severity
from ..syntax import NodeKind, Span, SyntaxNode
from . import Rule, TraversalContext

ANNOTATION = re.compile(r"@i18n-keys:[ \t]*")
ITEM = re.compile(r"[^,\n]+")
BULLET = re.compile(r"^[\s*-]*")
COMMENT_OPENER_WIDTH = 2


def parse_annotation(comment: str, single_line: bool = False) -> List[Tuple[str, int]]:
    """Return ``(key, index)`` pairs, ``index`` being the key's offset in ``comment``."""

    match = ANNOTATION.search(comment)
    if match is None:
        return []
    end = len(comment)
    if single_line:
        newline = comment.find("\n", match.end())
        end = newline if newline != -1 else end
    keys = []
    for item in ITEM.finditer(comment, match.end(), end):
        raw = item.group()
        lead = BULLET.match(raw).end()
        key = raw[lead:].strip()
        if key:
            keys.append((key, item.start() + lead))
    return keys


def key_span(comment: SyntaxNode, index: int, length: int) -> Span:
    text = comment.value or ""
    line = comment.span.start_line + text.count("\n", 0, index)
    newline = text.rfind("\n", 0, index)
    if newline == -1:
        column = comment.span.start_column + COMMENT_OPENER_WIDTH + index
    else:
        column = index - newline
    start = comment.span.start_offset + COMMENT_OPENER_WIDTH + index
    return Span(
        start_line=line,
        start_column=column,
        end_line=line,
        end_column=column + length,
        start_offset=start,
        end_offset=start + length,
    )


class AnnotatedKeysRule:
    id = "annotated-keys"
    category = Category.EXTRACTED_KEY
    target_kinds = frozenset({NodeKind.COMMENT})
    default_severity = Severity.INFO
    help = "Translation key declared with an @i18n-keys annotation"

    def check(self, node: SyntaxNode, context: TraversalContext) -> List[Finding]:
        keys = parse_annotation(node.value or "", single_line=node.operator == "line")
        return [
            context.finding(
                self,
                key_span(node, index, len(key)),
                key,
                f'Annotated translation key: "{key}"',
                key=key,
            )
            for key, index in keys
        ]


def get_rule() -> Rule:
    return AnnotatedKeysRule()
