"""Rule protocol and the per-file traversal context shared by all rules."""

from __future__ import annotations

import re
from collections import Counter
from typing import FrozenSet, Iterable, List, Optional, Protocol, Tuple

from ..config import ScanConfig
from ..heuristics import NaturalLanguagePolicy, looks_like_natural_language
from ..matchers import member_name, resolve_static_string
from ..result import Finding
from ..scope import ScopeTable, TranslatorBinding
from ..severity import Category, Severity
from ..syntax import NodeKind, SourceFile, Span, SyntaxNode

TRANSLATOR_HELPERS = frozenset({"raw", "rich", "has", "markup"})


class Rule(Protocol):
    """Protocol implemented by all rule evaluators.

    Rules are stateless: everything they need per file lives in the
    :class:`TraversalContext`.
    """

    id: str
    category: Category
    target_kinds: FrozenSet[NodeKind]
    default_severity: Severity
    help: str

    def check(self, node: SyntaxNode, context: "TraversalContext") -> List[Finding]:
        """Examine one node and return zero or more findings."""


class TraversalContext:
    """Per-file state threaded through the walk.

    The dispatcher owns the mutable parts (ancestor chain, scope table,
    translation depth); rules only read them.
    """

    def __init__(
        self,
        source: SourceFile,
        config: ScanConfig,
        policy: Optional[NaturalLanguagePolicy] = None,
    ) -> None:
        self.source = source
        self.config = config
        self.policy = policy if policy is not None else config.natural_language_policy()
        self.variable_policy = self.policy.for_variables()
        self.scope = ScopeTable()
        self.translation_depth = 0
        self.translation_names = frozenset(config.translation_function_names)
        self.namespace_hooks = frozenset(config.namespace_hooks)
        self.translator_regex = re.compile(config.translator_pattern) if config.translator_pattern else None
        self._ancestors: List[SyntaxNode] = []
        self.translators: Counter = Counter()

    @property
    def file_path(self) -> str:
        return self.source.path

    @property
    def parent(self) -> Optional[SyntaxNode]:
        return self._ancestors[-1] if self._ancestors else None

    def inside_element(self, names: Iterable[str]) -> bool:
        """True when any enclosing JSX element has one of the tag ``names``."""

        tags = frozenset(names)
        return any(
            ancestor.kind is NodeKind.JSX_ELEMENT and ancestor.value in tags for ancestor in self._ancestors
        )

    def has_ancestor(self, *kinds: NodeKind) -> bool:
        return any(ancestor.kind in kinds for ancestor in self._ancestors)

    @property
    def in_translation_scope(self) -> bool:
        if self.translation_depth > 0:
            return True
        return next(self.scope.translators(), None) is not None

    def looks_like_text(self, text: str) -> bool:
        return looks_like_natural_language(text, self.policy)

    def looks_like_variable_text(self, text: str) -> bool:
        return looks_like_natural_language(text, self.variable_policy)

    def resolve(self, node: Optional[SyntaxNode]) -> Optional[str]:
        return resolve_static_string(node, self.scope.literal)

    def is_translator_name(self, name: str) -> bool:
        return bool(self.translator_regex and self.translator_regex.match(name))

    def translation_callee(self, call: SyntaxNode) -> Optional[Tuple[str, Optional[TranslatorBinding]]]:
        """Identify ``call`` as a translation call.

        Returns ``(name, binding)`` where ``name`` is the translator variable
        (``t`` for ``t.rich(...)``) and ``binding`` its scope information, or
        ``None`` when the callee is not a translator.
        """

        if call.kind is not NodeKind.CALL_EXPRESSION:
            return None
        name = member_name(call.get("callee"))
        if name is None:
            return None
        if name in self.translation_names:
            return name, self.scope.translator(name)
        head, _, tail = name.rpartition(".")
        base = head if head and tail in TRANSLATOR_HELPERS else name
        if "." in base:
            return None
        binding = self.scope.translator(base)
        if binding is not None:
            return base, binding
        if base in self.translation_names:
            return base, None
        if self.is_translator_name(base):
            return base, TranslatorBinding(scope="unknown")
        return None

    def contains_translation(self, node: Optional[SyntaxNode]) -> bool:
        """True when a translation call or translated variable occurs under ``node``."""

        if node is None:
            return False
        for current in node.iter_tree():
            if current.kind is NodeKind.CALL_EXPRESSION and self.translation_callee(current) is not None:
                return True
            if current.kind is NodeKind.IDENTIFIER and current.value and self.scope.is_translated(current.value):
                return True
        return False

    def finding(
        self,
        rule: Rule,
        span: Span,
        text: str,
        message: str,
        severity: Optional[Severity] = None,
        **extra: object,
    ) -> Finding:
        """Build a :class:`Finding` for ``rule`` with config severity overrides applied."""

        base = severity if severity is not None else rule.default_severity
        return Finding(
            rule_id=rule.id,
            category=rule.category,
            severity=self.config.severity_for(rule.id, base),
            file_path=self.file_path,
            span=span,
            text=text,
            message=message,
            help=rule.help,
            **extra,
        )

    # ------------------------------------------------------------------
    # Dispatcher bookkeeping
    # ------------------------------------------------------------------
    def push_ancestor(self, node: SyntaxNode) -> None:
        self._ancestors.append(node)

    def pop_ancestor(self) -> SyntaxNode:
        return self._ancestors.pop()
