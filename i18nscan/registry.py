"""Ordered rule registry and the kind -> rules dispatch table."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from .config import ScanConfig
from .rules import Rule
from .rules.annotated_keys import get_rule as annotated_keys
from .rules.data_structure import get_rule as data_structure
from .rules.jsx_attribute import get_rule as jsx_attribute
from .rules.jsx_text import get_rule as jsx_text
from .rules.string_variable import get_rule as string_variable
from .rules.ternary_locale import get_rule as ternary_locale
from .rules.toast_message import get_rule as toast_message
from .rules.translation_function import get_rule as translation_function
from .syntax import NodeKind

DispatchTable = Dict[NodeKind, Tuple[Rule, ...]]


class RuleRegistry:
    """Rules in registration order; ids are unique."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: List[Rule] = []
        for rule in rules:
            self.register(rule)

    def __iter__(self):
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def ids(self) -> List[str]:
        return [rule.id for rule in self._rules]

    def register(self, rule: Rule) -> None:
        if rule.id in self.ids:
            raise ValueError(f"Rule '{rule.id}' is already registered")
        self._rules.append(rule)

    def get(self, rule_id: str) -> Optional[Rule]:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        return None

    def select(self, enabled_ids: Optional[Iterable[str]] = None) -> List[Rule]:
        """Rules whose id is in ``enabled_ids`` (all rules for ``None``), registration order kept."""

        if enabled_ids is None:
            return list(self._rules)
        wanted = set(enabled_ids)
        unknown = wanted.difference(self.ids)
        if unknown:
            raise ValueError(f"Unknown rule id(s): {', '.join(sorted(unknown))}")
        return [rule for rule in self._rules if rule.id in wanted]

    def enabled(self, config: ScanConfig, enabled_ids: Optional[Iterable[str]] = None) -> List[Rule]:
        return [rule for rule in self.select(enabled_ids) if config.is_rule_enabled(rule.id)]

    def lookup_table(self, rules: Optional[Iterable[Rule]] = None) -> DispatchTable:
        table: Dict[NodeKind, List[Rule]] = defaultdict(list)
        for rule in self._rules if rules is None else rules:
            for kind in sorted(rule.target_kinds, key=lambda item: item.value):
                table[kind].append(rule)
        return {kind: tuple(kind_rules) for kind, kind_rules in table.items()}


def default_registry() -> RuleRegistry:
    return RuleRegistry(
        [
            jsx_text(),
            jsx_attribute(),
            ternary_locale(),
            toast_message(),
            string_variable(),
            translation_function(),
            data_structure(),
            annotated_keys(),
        ]
    )
