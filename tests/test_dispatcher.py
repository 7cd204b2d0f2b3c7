import dataclasses
import threading

import pytest

from builders import assign, attr, call, container, declare, func, ident, jsx, source

from i18nscan.config import ScanConfig
from i18nscan.dispatcher import scan
from i18nscan.registry import RuleRegistry, default_registry
from i18nscan.result import CANCELLED, MALFORMED_TREE, RULE_CRASHED
from i18nscan.severity import Category, Severity
from i18nscan.syntax import NodeKind, Span


class CrashingRule:
    id = "crashing"
    category = Category.HARDCODED_STRING
    target_kinds = frozenset({NodeKind.JSX_ATTRIBUTE})
    default_severity = Severity.WARNING
    help = ""

    def check(self, node, context):
        raise RuntimeError("boom")


class OutOfBoundsRule:
    id = "out-of-bounds"
    category = Category.HARDCODED_STRING
    target_kinds = frozenset({NodeKind.PROGRAM})
    default_severity = Severity.WARNING
    help = ""

    def check(self, node, context):
        span = Span(1, 1, 1, 2, context.source.length + 10, context.source.length + 20)
        return [context.finding(self, span, "x", "outside")]


class CancellingRule:
    id = "cancelling"
    category = Category.HARDCODED_STRING
    target_kinds = frozenset({NodeKind.JSX_TEXT})
    default_severity = Severity.WARNING
    help = ""

    def __init__(self, event):
        self.event = event

    def check(self, node, context):
        self.event.set()
        return []


def sample():
    return source(
        jsx("div", children=["Welcome back"]),
        call("toast.error", "Something went wrong"),
        jsx("input", [attr("placeholder", "Enter your email")]),
    )


def with_rules(*extra):
    return RuleRegistry(list(default_registry()) + list(extra))


def test_scan_is_deterministic():
    src = sample()

    first = [finding.to_dict() for finding in scan(src).findings]
    second = [finding.to_dict() for finding in scan(src).findings]

    assert first == second
    assert [finding["rule_id"] for finding in first] == ["jsx-text", "toast-message", "jsx-attribute"]


def test_crashing_rule_is_isolated():
    src = sample()

    report = scan(src, registry=with_rules(CrashingRule()))

    crashes = [diagnostic for diagnostic in report.diagnostics if diagnostic.kind == RULE_CRASHED]
    assert len(crashes) == 1
    assert crashes[0].rule_id == "crashing"
    assert "boom" in crashes[0].message
    assert [finding.rule_id for finding in report.findings] == ["jsx-text", "toast-message", "jsx-attribute"]
    assert [finding.line for finding in report.findings] == [1, 2, 3]
    assert report.error is None


def test_findings_outside_the_file_are_discarded():
    report = scan(sample(), registry=with_rules(OutOfBoundsRule()))

    assert all(finding.rule_id != "out-of-bounds" for finding in report.findings)
    assert [diagnostic.rule_id for diagnostic in report.diagnostics] == ["out-of-bounds"]


def test_malformed_tree_returns_partial_report():
    src = sample()
    body = src.tree.get_all("body")
    broken = dataclasses.replace(body[1], span=Span(2, 1, 2, 1, body[1].span.start_offset, 0))
    tree = dataclasses.replace(src.tree, fields={"body": (body[0], broken, body[2])})
    src = dataclasses.replace(src, tree=tree)

    report = scan(src)

    assert report.partial is True
    assert report.error is not None
    assert [diagnostic.kind for diagnostic in report.diagnostics] == [MALFORMED_TREE]
    assert [finding.rule_id for finding in report.findings] == ["jsx-text"]


def test_span_outside_file_is_malformed():
    src = dataclasses.replace(sample(), length=3)

    report = scan(src)

    assert report.partial is True
    assert report.findings == []


def test_cancel_before_start():
    event = threading.Event()
    event.set()

    report = scan(sample(), cancel=event)

    assert report.cancelled is True
    assert report.findings == []
    assert [diagnostic.kind for diagnostic in report.diagnostics] == [CANCELLED]


def test_cancel_between_top_level_statements():
    event = threading.Event()

    report = scan(sample(), registry=with_rules(CancellingRule(event)), cancel=event)

    assert report.cancelled is True
    assert report.partial is True
    assert [finding.rule_id for finding in report.findings] == ["jsx-text"]


def test_enabled_rules_and_config_switches():
    src = sample()

    only = scan(src, enabled_rules=["toast-message"])
    off = scan(src, ScanConfig(rules={"jsx-text": "off"}))

    assert [finding.rule_id for finding in only.findings] == ["toast-message"]
    assert "jsx-text" not in {finding.rule_id for finding in off.findings}
    with pytest.raises(ValueError):
        scan(src, enabled_rules=["no-such-rule"])


def test_scope_frames_are_popped():
    src = source(
        func([], declare("inner", "Welcome inside")),
        jsx("p", [attr("title", container(ident("inner")))]),
    )

    report = scan(src)

    assert [finding.rule_id for finding in report.findings] == ["string-variable"]


def test_assignment_updates_binding():
    src = source(
        declare("label"),
        assign("label", "Click to continue"),
        jsx("button", [attr("title", container(ident("label")))]),
    )

    texts = [finding.text for finding in report_for(src, "jsx-attribute")]

    assert texts == ["Click to continue"]


def report_for(src, rule_id):
    return [finding for finding in scan(src).findings if finding.rule_id == rule_id]


def test_registry_rejects_duplicates():
    registry = default_registry()

    with pytest.raises(ValueError):
        registry.register(CrashingRule())
        registry.register(CrashingRule())
    assert registry.ids[-1] == "crashing"
    assert len(default_registry()) == 8


def test_lookup_table_groups_rules_by_kind():
    table = default_registry().lookup_table()

    assert [rule.id for rule in table[NodeKind.CALL_EXPRESSION]] == ["toast-message", "translation-function"]
    assert [rule.id for rule in table[NodeKind.COMMENT]] == ["annotated-keys"]
