"""Command-line entry point for the i18n scanner."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config import ConfigError, ScanConfig, load_config
from .engine import scan_files
from .registry import default_registry
from .result import MALFORMED_TREE, Diagnostic, FileReport, Report, format_summary_table
from .syntax import MalformedTreeError, SourceFile
from .utils import iter_ast_files, load_source_file, source_path_for

logger = logging.getLogger(__name__)

DEFAULT_PATHS = (".",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i18nscan",
        description="Find hardcoded user-facing strings and extract translation keys from parsed JS/TS syntax trees",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="AST JSON files or directories containing *.ast.json dumps (defaults to the current directory).",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to the YAML configuration file (defaults to .i18nscan.yaml when present).",
    )
    parser.add_argument(
        "--rule",
        dest="rules",
        action="append",
        default=[],
        help="Only run the given rule id (repeatable).",
    )
    parser.add_argument(
        "--disable",
        dest="disabled",
        action="append",
        default=[],
        help="Turn a rule id off (repeatable).",
    )
    parser.add_argument(
        "--format",
        choices=["summary", "json"],
        default="summary",
        help="Console output format (defaults to summary).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the JSON report (e.g., artifacts/i18n-scan.json).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files scanned in parallel.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_sources(paths: Iterable[str]) -> Tuple[List[SourceFile], List[FileReport]]:
    """Load AST dumps; unreadable ones become failed file reports."""

    sources: List[SourceFile] = []
    failures: List[FileReport] = []
    for ast_path in iter_ast_files(paths):
        try:
            sources.append(load_source_file(ast_path))
        except MalformedTreeError as exc:
            logger.warning("Could not load %s: %s", ast_path, exc)
            path = source_path_for(ast_path)
            failures.append(
                FileReport(
                    path=path,
                    error=str(exc),
                    diagnostics=[Diagnostic(kind=MALFORMED_TREE, file_path=path, message=str(exc))],
                )
            )
    return sources, failures


def apply_rule_flags(config: ScanConfig, only: List[str], disabled: List[str]) -> None:
    known = set(default_registry().ids)
    unknown = sorted(set(only + disabled) - known)
    if unknown:
        raise SystemExit(f"Unknown rule id(s): {', '.join(unknown)}")
    if only:
        config.enabled_rules = list(only)
    for rule_id in disabled:
        config.rules[rule_id] = "off"


def run_scan(
    paths: Iterable[str],
    config: ScanConfig,
    max_workers: Optional[int] = None,
) -> Report:
    sources, failures = load_sources(paths)
    logger.info("Loaded %d syntax tree(s)", len(sources))
    return scan_files(sources, config, max_workers=max_workers, extra_reports=failures)


def write_output(report: Report, output_path: str | None, report_format: str) -> None:
    payload = json.dumps(report.to_dict(), indent=2)
    if report_format == "json":
        print(payload)
    else:
        print(format_summary_table(report))

    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload, encoding="utf-8")
        if report_format != "json":
            print(f"\nReport written to {output_path}")


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError) as exc:
        parser.error(str(exc))
    apply_rule_flags(config, args.rules, args.disabled)

    report = run_scan(args.paths or list(DEFAULT_PATHS), config, max_workers=args.workers)
    write_output(report, args.output_path, args.format)
    return report.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
