"""Scan many source files concurrently and aggregate the results."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence

from .aggregate import aggregate
from .config import ScanConfig
from .dispatcher import scan
from .registry import DispatchTable, RuleRegistry, default_registry
from .result import CANCELLED, Diagnostic, FileReport, Report
from .syntax import SourceFile

logger = logging.getLogger(__name__)


def _scan_one(
    source: SourceFile,
    config: ScanConfig,
    table: DispatchTable,
    cancel: threading.Event,
) -> FileReport:
    if config.is_ignored(source.path):
        logger.debug("Skipping ignored file %s", source.path)
        return FileReport(path=source.path, skipped=True)
    if cancel.is_set():
        return FileReport(
            path=source.path,
            cancelled=True,
            diagnostics=[Diagnostic(kind=CANCELLED, file_path=source.path, message="not scanned")],
        )
    return scan(source, config, table=table, cancel=cancel)


def scan_files(
    sources: Iterable[SourceFile],
    config: Optional[ScanConfig] = None,
    registry: Optional[RuleRegistry] = None,
    cancel: Optional[threading.Event] = None,
    max_workers: Optional[int] = None,
    enabled_rules: Optional[Iterable[str]] = None,
    extra_reports: Sequence[FileReport] = (),
) -> Report:
    """Scan ``sources`` on a thread pool and return the aggregated report.

    File reports keep the input order regardless of completion order.
    ``extra_reports`` (for files that failed to load) are merged in as is.
    """

    config = config if config is not None else ScanConfig()
    registry = registry if registry is not None else default_registry()
    cancel = cancel if cancel is not None else threading.Event()
    table = registry.lookup_table(registry.enabled(config, enabled_rules))
    workers = max_workers or config.max_workers

    items = list(sources)
    logger.debug("Scanning %d file(s) with %s worker(s)", len(items), workers or "default")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_scan_one, source, config, table, cancel) for source in items]
        reports: List[FileReport] = [future.result() for future in futures]

    report = aggregate(list(extra_reports) + reports)
    if report.cancelled:
        logger.info("Scan cancelled; returning partial results")
    return report
