"""Extract translation keys from ``t(...)`` style calls.

Handles configured translation functions (``t``, ``i18n.t``, ``$t``),
translators bound by namespace hooks such as
``const t = useTranslations("auth")``, the ``t.raw``/``t.rich``/``t.has``
helpers and any callee matching the translator naming pattern (``tCommon``).
"""

from __future__ import annotations

from typing import List, Optional

from ..matchers import describe_expression, property_key, template_pattern
from ..result import Finding
from ..scope import TranslatorBinding
from ..severity import Category, Severity
from ..syntax import NodeKind, SyntaxNode
from . import Rule, TraversalContext


def qualify(key: str, binding: Optional[TranslatorBinding]) -> str:
    if binding is None or binding.scope != "bound" or not binding.namespace:
        return key
    if key.startswith(f"{binding.namespace}."):
        return key
    return f"{binding.namespace}.{key}"


class TranslationFunctionRule:
    id = "translation-function"
    category = Category.EXTRACTED_KEY
    target_kinds = frozenset({NodeKind.CALL_EXPRESSION})
    default_severity = Severity.INFO
    help = "Translation key used in code"

    def check(self, node: SyntaxNode, context: TraversalContext) -> List[Finding]:
        callee = context.translation_callee(node)
        if callee is None:
            return []
        _, binding = callee
        arguments = node.get_all("arguments")
        if not arguments:
            return []

        namespace = binding.namespace if binding is not None and binding.scope == "bound" else None
        first = arguments[0]
        raw_key = context.resolve(first)
        if raw_key is None:
            return [self._dynamic(node, first, binding, namespace, context)]

        key = qualify(raw_key, binding)
        default_value = self._default_value(arguments[1], context) if len(arguments) > 1 else None
        confidence = "medium" if binding is not None and binding.scope == "unknown" else "high"
        return [
            context.finding(
                self,
                node.span,
                raw_key,
                f'Translation key: "{key}"',
                key=key,
                default_value=default_value,
                namespace=namespace,
                confidence=confidence,
            )
        ]

    def _dynamic(
        self,
        node: SyntaxNode,
        argument: SyntaxNode,
        binding: Optional[TranslatorBinding],
        namespace: Optional[str],
        context: TraversalContext,
    ) -> Finding:
        pattern = None
        if argument.kind is NodeKind.TEMPLATE_LITERAL:
            pattern = qualify(template_pattern(argument), binding)
        label = describe_expression(argument)
        return context.finding(
            self,
            node.span,
            label,
            f"Dynamic translation key: {pattern or label}",
            namespace=namespace,
            dynamic=True,
            pattern=pattern,
            confidence="low",
        )

    @staticmethod
    def _default_value(argument: SyntaxNode, context: TraversalContext) -> Optional[str]:
        if argument.kind is NodeKind.OBJECT_LITERAL:
            for prop in argument.get_all("properties"):
                if property_key(prop) == "defaultValue":
                    return context.resolve(prop.get("value"))
            return None
        return context.resolve(argument)


def get_rule() -> Rule:
    return TranslationFunctionRule()
