"""Core result data structures for the scanner."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .severity import Category, Severity
from .syntax import Span

SEVERITY_ORDER: Sequence[Severity] = (
    Severity.ERROR,
    Severity.WARNING,
    Severity.INFO,
)

RULE_CRASHED = "rule-crashed"
MALFORMED_TREE = "malformed-tree"
CANCELLED = "cancelled"


@dataclass
class Finding:
    """Capture a single rule evaluation result."""

    rule_id: str
    category: Category
    severity: Severity
    file_path: str
    span: Span
    text: str
    message: str
    help: str = ""
    suggested_key: Optional[str] = None
    key: Optional[str] = None
    default_value: Optional[str] = None
    namespace: Optional[str] = None
    locale: Optional[str] = None
    dynamic: bool = False
    pattern: Optional[str] = None
    confidence: str = "high"

    @property
    def line(self) -> int:
        return self.span.start_line

    @property
    def column(self) -> int:
        return self.span.start_column

    @property
    def identity(self) -> Tuple[str, str, Span]:
        return (self.rule_id, self.file_path, self.span)

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["category"] = self.category.value
        return data


@dataclass
class Diagnostic:
    """Something went wrong while scanning; not a finding about the code."""

    kind: str
    file_path: str
    message: str
    rule_id: Optional[str] = None
    span: Optional[Span] = None

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass
class FileReport:
    """Findings and diagnostics for one source file."""

    path: str
    findings: List[Finding] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    error: Optional[str] = None
    partial: bool = False
    skipped: bool = False
    cancelled: bool = False
    # translator bindings by namespace scope (bound / root / unknown)
    translators: Counter = field(default_factory=Counter)

    def add_finding(self, finding: Finding) -> None:
        self.findings.append(finding)

    def to_dict(self) -> Dict[str, object]:
        return {
            "path": self.path,
            "findings": [finding.to_dict() for finding in self.findings],
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
            "error": self.error,
            "partial": self.partial,
            "skipped": self.skipped,
            "cancelled": self.cancelled,
            "translators": dict(sorted(self.translators.items())),
        }


@dataclass
class Summary:
    """Finding counts by severity, rule, category and file, plus key-extraction statistics."""

    error: int = 0
    warning: int = 0
    info: int = 0
    by_rule: Counter = field(default_factory=Counter)
    by_category: Counter = field(default_factory=Counter)
    by_file: Counter = field(default_factory=Counter)
    dynamic_keys: int = 0
    data_structure_keys: int = 0
    translators: Counter = field(default_factory=Counter)

    def increment(self, finding: Finding) -> None:
        attr = finding.severity.value
        setattr(self, attr, getattr(self, attr) + 1)
        self.by_rule[finding.rule_id] += 1
        self.by_category[finding.category.value] += 1
        self.by_file[finding.file_path] += 1
        if finding.dynamic:
            self.dynamic_keys += 1
        if finding.rule_id == "data-structure":
            self.data_structure_keys += 1

    def to_dict(self) -> Dict[str, object]:
        return {
            "error": self.error,
            "warning": self.warning,
            "info": self.info,
            "total": self.total,
            "by_rule": dict(sorted(self.by_rule.items())),
            "by_category": dict(sorted(self.by_category.items())),
            "by_file": dict(sorted(self.by_file.items())),
            "dynamic_keys": self.dynamic_keys,
            "data_structure_keys": self.data_structure_keys,
            "root_translators": self.translators["root"],
            "unknown_translators": self.translators["unknown"],
        }

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, getattr(self, severity.value)) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, severity.value) for severity in SEVERITY_ORDER)


@dataclass
class Report:
    """Bundle summary, ordered findings and per-file reports."""

    summary: Summary = field(default_factory=Summary)
    findings: List[Finding] = field(default_factory=list)
    files: List[FileReport] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    cancelled: bool = False

    @property
    def failed_files(self) -> List[FileReport]:
        return [report for report in self.files if report.error is not None]

    @property
    def passed(self) -> bool:
        return self.exit_code() == 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "findings": [finding.to_dict() for finding in self.findings],
            "files": [report.to_dict() for report in self.files],
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
            "cancelled": self.cancelled,
            "passed": self.passed,
        }

    def exit_code(self) -> int:
        """2 for errors or unreadable files, 1 for warnings, 0 otherwise."""

        if self.failed_files:
            return 2
        return max((finding.severity.exit_priority for finding in self.findings), default=0)

    def top_findings(self, limit: int = 5) -> List[Finding]:
        """Return findings ordered by severity ranking."""

        severity_rank = {severity: idx for idx, severity in enumerate(SEVERITY_ORDER)}
        ordered = sorted(
            self.findings,
            key=lambda finding: (severity_rank[finding.severity], finding.file_path, finding.line, finding.column),
        )
        return ordered[:limit]


def format_summary_table(report: Report, max_findings: int = 5) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append("i18n Scan Summary")
    lines.append("=" * 40)
    header = f"{'Severity':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for severity, count in report.summary.as_rows():
        lines.append(f"{severity:<10} | {count:>5}")
    lines.append("-" * len(header))
    status = "PASS" if report.passed else "FAIL"
    lines.append(f"Status    : {status}")
    lines.append(f"Files     : {len(report.files)}")
    lines.append(f"Findings  : {report.summary.total}")
    if report.summary.dynamic_keys:
        lines.append(f"Dynamic   : {report.summary.dynamic_keys} key(s) need review")
    if report.cancelled:
        lines.append("Cancelled : yes (partial results)")

    if report.summary.by_rule:
        lines.append("")
        lines.append("By Rule")
        lines.append("-" * 40)
        for rule_id, count in sorted(report.summary.by_rule.items()):
            lines.append(f"{rule_id:<24} {count:>5}")

    findings = report.top_findings(max_findings)
    if findings:
        lines.append("")
        lines.append("Top Findings")
        lines.append("-" * 40)
        for finding in findings:
            lines.append(f"[{finding.severity.value}] {finding.rule_id} {finding.message}")
            location = f"  Location: {finding.file_path}:{finding.line}:{finding.column}"
            if finding.suggested_key:
                location += f" (suggested key: {finding.suggested_key})"
            lines.append(location)

    problems = report.failed_files
    if problems or report.diagnostics:
        lines.append("")
        lines.append("Diagnostics")
        lines.append("-" * 40)
        for file_report in problems:
            lines.append(f"[{MALFORMED_TREE}] {file_report.path}: {file_report.error}")
        for diagnostic in report.diagnostics:
            if diagnostic.kind == MALFORMED_TREE:
                continue
            rule = f" {diagnostic.rule_id}" if diagnostic.rule_id else ""
            lines.append(f"[{diagnostic.kind}]{rule} {diagnostic.file_path}: {diagnostic.message}")
    return "\n".join(lines)
