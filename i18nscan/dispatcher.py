"""Single-pass traversal that dispatches nodes to the enabled rules."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional, Tuple

from .config import ScanConfig
from .matchers import callee_name, property_key
from .registry import DispatchTable, RuleRegistry, default_registry
from .result import CANCELLED, MALFORMED_TREE, RULE_CRASHED, Diagnostic, FileReport
from .rules import Rule, TraversalContext
from .scope import Binding, TranslatorBinding
from .syntax import MalformedTreeError, NodeKind, SourceFile, SyntaxNode, check_span

logger = logging.getLogger(__name__)

SCOPE_KINDS = (NodeKind.FUNCTION, NodeKind.BLOCK)
TRANSLATOR_PARAMETER = "t"

# (node, exiting, opened translation scope)
Frame = Tuple[SyntaxNode, bool, bool]


def scan(
    source: SourceFile,
    config: Optional[ScanConfig] = None,
    enabled_rules: Optional[Iterable[str]] = None,
    registry: Optional[RuleRegistry] = None,
    cancel: Optional[threading.Event] = None,
    table: Optional[DispatchTable] = None,
) -> FileReport:
    """Run every enabled rule over ``source`` in one depth-first walk.

    ``table`` may be passed by callers scanning many files so the kind ->
    rules lookup is built once. Rule failures become diagnostics; a
    structurally broken tree yields a partial report with ``error`` set.
    """

    config = config if config is not None else ScanConfig()
    if table is None:
        registry = registry if registry is not None else default_registry()
        table = registry.lookup_table(registry.enabled(config, enabled_rules))

    context = TraversalContext(source, config)
    report = FileReport(path=source.path)
    try:
        completed = _walk(source, table, context, report, cancel)
        if completed:
            _visit_comments(source, table, context, report)
    except MalformedTreeError as exc:
        logger.debug("%s: malformed tree: %s", source.path, exc)
        report.error = str(exc)
        report.partial = True
        report.diagnostics.append(
            Diagnostic(kind=MALFORMED_TREE, file_path=source.path, message=str(exc), span=exc.span)
        )

    report.translators.update(context.translators)
    report.findings.sort(key=lambda finding: (finding.line, finding.column))
    return report


def _walk(
    source: SourceFile,
    table: DispatchTable,
    context: TraversalContext,
    report: FileReport,
    cancel: Optional[threading.Event],
) -> bool:
    """Walk the tree; returns ``False`` when cancelled part way."""

    root = source.tree
    stack: List[Frame] = [(root, False, False)]
    while stack:
        node, exiting, translating = stack.pop()
        if exiting:
            context.pop_ancestor()
            _leave(node, translating, context)
            continue

        if cancel is not None and cancel.is_set() and context.parent is root:
            logger.debug("%s: scan cancelled", source.path)
            report.cancelled = True
            report.partial = True
            report.diagnostics.append(
                Diagnostic(kind=CANCELLED, file_path=source.path, message="scan cancelled before completion")
            )
            return False

        check_span(node, source.length)
        _dispatch(node, table.get(node.kind, ()), context, report)
        translating = _enter(node, context)
        context.push_ancestor(node)
        stack.append((node, True, translating))
        for child in reversed(node.children):
            stack.append((child, False, False))
    return True


def _visit_comments(
    source: SourceFile,
    table: DispatchTable,
    context: TraversalContext,
    report: FileReport,
) -> None:
    rules = table.get(NodeKind.COMMENT, ())
    if not rules:
        return
    context.push_ancestor(source.tree)
    try:
        for comment in source.comments:
            check_span(comment, source.length)
            _dispatch(comment, rules, context, report)
    finally:
        context.pop_ancestor()


def _dispatch(
    node: SyntaxNode,
    rules: Iterable[Rule],
    context: TraversalContext,
    report: FileReport,
) -> None:
    length = context.source.length
    for rule in rules:
        try:
            findings = rule.check(node, context)
        except Exception as exc:  # pylint: disable=broad-except
            logger.debug("Rule %s crashed on %s", rule.id, context.file_path, exc_info=True)
            report.diagnostics.append(
                Diagnostic(
                    kind=RULE_CRASHED,
                    file_path=context.file_path,
                    message=f"{type(exc).__name__}: {exc}",
                    rule_id=rule.id,
                    span=node.span,
                )
            )
            continue
        for finding in findings:
            span = finding.span
            if span.start_offset < 0 or span.end_offset > length or span.end_offset < span.start_offset:
                report.diagnostics.append(
                    Diagnostic(
                        kind=RULE_CRASHED,
                        file_path=context.file_path,
                        message=f"finding span {span.start_offset}-{span.end_offset} lies outside the file",
                        rule_id=rule.id,
                        span=node.span,
                    )
                )
                continue
            report.add_finding(finding)


# ----------------------------------------------------------------------
# Scope bookkeeping
# ----------------------------------------------------------------------
def _enter(node: SyntaxNode, context: TraversalContext) -> bool:
    if node.kind not in SCOPE_KINDS:
        return False
    context.scope.push()
    if node.kind is NodeKind.BLOCK:
        return False
    translating = False
    for name in _parameter_names(node.get_all("params")):
        context.scope.bind(name, Binding())
        if name == TRANSLATOR_PARAMETER or context.is_translator_name(name):
            translating = True
    if translating:
        context.translation_depth += 1
    return translating


def _leave(node: SyntaxNode, translating: bool, context: TraversalContext) -> None:
    if node.kind in SCOPE_KINDS:
        context.scope.pop()
    if translating:
        context.translation_depth -= 1
    if node.kind is NodeKind.VARIABLE_DECLARATOR:
        _bind(node.get("id"), node.get("init"), context, declare=True)
    elif node.kind is NodeKind.ASSIGNMENT_EXPRESSION and node.operator == "=":
        _bind(node.get("left"), node.get("right"), context, declare=False)


def _parameter_names(params: Iterable[SyntaxNode]) -> List[str]:
    names = []
    for param in params:
        if param.kind is NodeKind.IDENTIFIER and param.value:
            names.append(param.value)
        elif param.kind is NodeKind.OBJECT_PATTERN:
            names.extend(name for name, _ in _pattern_names(param))
    return names


def _pattern_names(pattern: SyntaxNode) -> List[Tuple[str, Optional[str]]]:
    """``(local name, property key)`` pairs of an object pattern."""

    pairs = []
    for prop in pattern.get_all("properties"):
        value = prop.get("value")
        if value is not None and value.kind is NodeKind.IDENTIFIER and value.value:
            pairs.append((value.value, property_key(prop)))
    return pairs


def _bind(
    target: Optional[SyntaxNode],
    init: Optional[SyntaxNode],
    context: TraversalContext,
    declare: bool,
) -> None:
    if target is None:
        return
    store = context.scope.bind if declare else context.scope.assign
    translator = _translator_binding(init, context)

    if target.kind is NodeKind.OBJECT_PATTERN:
        for name, key in _pattern_names(target):
            if translator is not None and key == TRANSLATOR_PARAMETER:
                context.translators[translator.scope] += 1
                store(name, Binding(translated=True, translator=translator))
            else:
                store(name, Binding())
        return
    if target.kind is not NodeKind.IDENTIFIER or not target.value:
        return

    if translator is not None:
        context.translators[translator.scope] += 1
        store(target.value, Binding(translated=True, translator=translator))
        return
    if init is None:
        store(target.value, Binding())
        return
    store(target.value, Binding(value=context.resolve(init), translated=context.contains_translation(init)))


def _translator_binding(init: Optional[SyntaxNode], context: TraversalContext) -> Optional[TranslatorBinding]:
    """Namespace binding for ``useTranslations("ns")`` style initializers."""

    if init is not None and init.kind is NodeKind.AWAIT_EXPRESSION:
        init = init.get("argument")
    if init is None or init.kind is not NodeKind.CALL_EXPRESSION:
        return None
    name = callee_name(init)
    if name is None or name not in context.namespace_hooks:
        return None

    arguments = init.get_all("arguments")
    if not arguments:
        return TranslatorBinding(scope="root")
    first = arguments[0]
    if first.kind is NodeKind.OBJECT_LITERAL:
        for prop in first.get_all("properties"):
            if property_key(prop) == "namespace":
                namespace = context.resolve(prop.get("value"))
                if namespace is None:
                    return TranslatorBinding(scope="unknown")
                return TranslatorBinding(scope="bound", namespace=namespace)
        return TranslatorBinding(scope="root")
    namespace = context.resolve(first)
    if namespace is None:
        return TranslatorBinding(scope="unknown")
    return TranslatorBinding(scope="bound", namespace=namespace)
