"""Merge per-file reports into one ordered, deduplicated report."""

from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from .result import Diagnostic, FileReport, Finding, Report, Summary
from .syntax import Span


def dedupe(findings: Iterable[Finding]) -> List[Finding]:
    """Drop repeated ``(rule_id, file_path, span)`` findings; the first one wins."""

    seen: Set[Tuple[str, str, Span]] = set()
    unique = []
    for finding in findings:
        if finding.identity in seen:
            continue
        seen.add(finding.identity)
        unique.append(finding)
    return unique


def aggregate(file_reports: Iterable[FileReport]) -> Report:
    files = list(file_reports)
    findings = dedupe(finding for report in files for finding in report.findings)
    findings.sort(key=lambda finding: (finding.file_path, finding.line, finding.column))

    summary = Summary()
    for finding in findings:
        summary.increment(finding)
    for report in files:
        summary.translators.update(report.translators)

    diagnostics: List[Diagnostic] = [diagnostic for report in files for diagnostic in report.diagnostics]
    return Report(
        summary=summary,
        findings=findings,
        files=files,
        diagnostics=diagnostics,
        cancelled=any(report.cancelled for report in files),
    )
