"""Extract translation keys stored in object and array literals.

Three shapes are recognised, checked in this order at every level:

* locale dictionaries, ``{en: {title: "Hello"}, tr: {title: "Merhaba"}}``:
  every key is a locale code, leaves are flattened per locale;
* dotted catalogs, ``{"auth.login": "Log in", "auth.logout": "Log out"}``:
  every key is a dotted identifier and every value a static string;
* property-name keys, ``[{label: "nav.home"}, {label: "nav.about"}]``: values
  of well known properties (``label``, ``title``, ``message``...) inside a
  translation scope.

Only the outermost literal is examined; nested literals are reached through
it so each leaf is reported once.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from ..matchers import property_key
from ..result import Finding
from ..severity import Category, Severity
from ..syntax import NodeKind, SyntaxNode
from ..utils.text import text_to_key
from . import Rule, TraversalContext

logger = logging.getLogger(__name__)

LOCALE_KEY = re.compile(r"^(?P<base>[a-z]{2,3})(?:[-_][A-Za-z0-9]{2,4})?$")
LANGUAGE_VALUE = re.compile(r"^[a-z]{2}(-[a-z]{2,3})?$", re.IGNORECASE)
DOTTED_KEY = re.compile(r"^[A-Za-z_$][\w$-]*(\.[A-Za-z_$][\w$-]*)+$")
LITERAL_KINDS = (NodeKind.OBJECT_LITERAL, NodeKind.ARRAY_LITERAL)


def looks_like_translation_key(value: str) -> bool:
    if len(value) < 2:
        return False
    if value.startswith(("http://", "https://", "/", "./", "../", "data:")):
        return False
    if " " in value and ("-" in value or "_" in value):
        return False
    if re.match(r"^#[0-9a-fA-F]{3,8}$", value) or value.startswith("rgb("):
        return False
    if value.isdigit():
        return False
    return bool(re.search(r"[A-Za-z0-9]", value))


def is_language_selector(node: SyntaxNode) -> bool:
    """``[{value: "en", label: "English"}, {value: "tr", label: "Türkçe"}]``."""

    elements = node.get_all("elements")
    if len(elements) < 2:
        return False
    for element in elements:
        if element.kind is not NodeKind.OBJECT_LITERAL:
            return False
        names = {}
        for prop in element.get_all("properties"):
            name = property_key(prop)
            if name is not None:
                names[name] = prop.get("value")
        value = names.get("value")
        if "label" not in names or value is None or value.kind is not NodeKind.STRING_LITERAL:
            return False
        if not LANGUAGE_VALUE.match(value.value or ""):
            return False
    return True


def _entries(node: SyntaxNode) -> Optional[List[Tuple[str, SyntaxNode]]]:
    """Static ``(key, value)`` pairs of an object, ``None`` if any key is computed."""

    entries = []
    for prop in node.get_all("properties"):
        name = property_key(prop)
        value = prop.get("value")
        if name is None or value is None:
            return None
        entries.append((name, value))
    return entries


class DataStructureRule:
    id = "data-structure"
    category = Category.EXTRACTED_KEY
    target_kinds = frozenset(LITERAL_KINDS)
    default_severity = Severity.INFO
    help = "Translation key stored in a data structure"

    def check(self, node: SyntaxNode, context: TraversalContext) -> List[Finding]:
        settings = context.config.data_structure
        if not settings.enabled or context.has_ancestor(*LITERAL_KINDS):
            return []

        locale_codes = frozenset(settings.locale_codes)
        property_names = settings.all_property_names()
        scoped = context.in_translation_scope or not settings.require_translation_scope
        namespace = self._bound_namespace(context)
        owner = self._owner_name(context)

        findings: List[Finding] = []
        stack: List[Tuple[SyntaxNode, int]] = [(node, 0)]
        while stack:
            current, depth = stack.pop()
            if depth > settings.max_depth:
                continue
            if current.kind is NodeKind.ARRAY_LITERAL:
                if is_language_selector(current):
                    logger.debug("%s: skipping language selector array", context.file_path)
                    continue
                children = [element for element in current.get_all("elements") if element.kind in LITERAL_KINDS]
                stack.extend((child, depth + 1) for child in reversed(children))
                continue

            entries = _entries(current)
            if entries and self._is_locale_dictionary(entries, locale_codes):
                findings.extend(self._locale_entries(entries, owner, depth, context))
                continue
            if entries and self._is_dotted_catalog(entries, context):
                findings.extend(self._catalog_entries(entries, context))
                continue

            nested = []
            for prop in current.get_all("properties"):
                name = property_key(prop)
                value = prop.get("value")
                if value is None:
                    continue
                if value.kind in LITERAL_KINDS:
                    nested.append(value)
                elif scoped and name in property_names and value.kind is NodeKind.STRING_LITERAL:
                    finding = self._property_entry(value, namespace, context)
                    if finding is not None:
                        findings.append(finding)
            stack.extend((child, depth + 1) for child in reversed(nested))
        return findings

    @staticmethod
    def _bound_namespace(context: TraversalContext) -> Optional[str]:
        for binding in context.scope.translators():
            if binding.scope == "bound" and binding.namespace:
                return binding.namespace
        return None

    @staticmethod
    def _owner_name(context: TraversalContext) -> Optional[str]:
        parent = context.parent
        if parent is None:
            return None
        if parent.kind is NodeKind.VARIABLE_DECLARATOR:
            target = parent.get("id")
            if target is not None and target.kind is NodeKind.IDENTIFIER:
                return target.value
        if parent.kind is NodeKind.PROPERTY:
            return property_key(parent)
        return None

    @staticmethod
    def _is_locale_dictionary(entries: List[Tuple[str, SyntaxNode]], locale_codes: frozenset) -> bool:
        if len(entries) < 2:
            return False
        for key, _ in entries:
            match = LOCALE_KEY.match(key)
            if match is None or match.group("base") not in locale_codes:
                return False
        return True

    @staticmethod
    def _is_dotted_catalog(entries: List[Tuple[str, SyntaxNode]], context: TraversalContext) -> bool:
        return all(DOTTED_KEY.match(key) and context.resolve(value) is not None for key, value in entries)

    def _locale_entries(
        self,
        entries: List[Tuple[str, SyntaxNode]],
        owner: Optional[str],
        depth: int,
        context: TraversalContext,
    ) -> List[Finding]:
        max_depth = context.config.data_structure.max_depth
        findings = []
        for locale, root in entries:
            stack: List[Tuple[str, SyntaxNode, int]] = [("", root, depth + 1)]
            while stack:
                path, value, level = stack.pop()
                if value.kind is NodeKind.OBJECT_LITERAL:
                    if level > max_depth:
                        continue
                    children = _entries(value) or []
                    for name, child in reversed(children):
                        stack.append((f"{path}.{name}" if path else name, child, level + 1))
                    continue
                text = context.resolve(value)
                if text is None:
                    continue
                key = path or owner or text_to_key(text)
                findings.append(
                    context.finding(
                        self,
                        value.span,
                        text,
                        f'Locale dictionary entry "{key}" ({locale})',
                        key=key,
                        default_value=text,
                        locale=locale,
                    )
                )
        return findings

    def _catalog_entries(self, entries: List[Tuple[str, SyntaxNode]], context: TraversalContext) -> List[Finding]:
        findings = []
        for key, value in entries:
            text = context.resolve(value) or ""
            findings.append(
                context.finding(
                    self,
                    value.span,
                    text,
                    f'Translation catalog entry: "{key}"',
                    key=key,
                    default_value=text,
                )
            )
        return findings

    def _property_entry(
        self,
        value: SyntaxNode,
        namespace: Optional[str],
        context: TraversalContext,
    ) -> Optional[Finding]:
        raw = value.value or ""
        if not looks_like_translation_key(raw):
            return None
        key = raw
        if namespace and not key.startswith(f"{namespace}."):
            key = f"{namespace}.{raw}"
        return context.finding(
            self,
            value.span,
            raw,
            f'Translation key in data structure: "{key}"',
            key=key,
            namespace=namespace,
            confidence="medium",
        )


def get_rule() -> Rule:
    return DataStructureRule()
