"""
todo_scan.api
=============

Programmatic entrypoints for using todo_scan as a library.

Goals:
  - No argparse / CLI dependencies
  - JSON-friendly outputs matching ``scan_result.schema.json``

Non-goals:
  - Owning presentation (colours, wording) — see ``reports.console``

Usage::

    from todo_scan.api import scan_project

    result, summary, result_dict = scan_project(".", priority="high")
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from todo_scan.contracts.load import validate_instance as _validate_instance
from todo_scan.core.config import CONFIG_SCHEMA, ScanConfig, load_config
from todo_scan.core.filters import (
    filter_by_due_before,
    filter_by_priority,
    filter_by_responsible,
    summarize,
)
from todo_scan.core.runner import run_scan
from todo_scan.model import Priority
from todo_scan.model.scan_result import ScanResult, Summary


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def apply_filters(
    result: ScanResult,
    *,
    user: Optional[str] = None,
    priority: Optional[str | Priority] = None,
    due: Optional[date] = None,
) -> ScanResult:
    """Return a copy of *result* narrowed by user, then priority, then due date."""
    records = result.records
    if user:
        records = filter_by_responsible(records, user)
    if priority:
        records = filter_by_priority(records, priority)
    if due is not None:
        records = filter_by_due_before(records, due)
    return dataclasses.replace(result, records=records)


# ── scan_project ────────────────────────────────────────────────────


def scan_project(
    root: str | Path,
    *,
    user: Optional[str] = None,
    priority: Optional[str | Priority] = None,
    due: Optional[date] = None,
    now: Optional[date | datetime] = None,
    config: Optional[ScanConfig] = None,
    workers: int = 1,
) -> tuple[ScanResult, Summary, dict[str, Any]]:
    """Scan *root*, filter, and summarise.

    Parameters
    ----------
    root:
        Directory to scan.
    user, priority, due:
        Optional filters, applied in that order.
    now:
        Reference point for due-date buckets.  Default: the current time.
    config:
        Explicit configuration.  Default: loaded from *root* (shared then
        local config file).
    workers:
        Number of scanning threads (1 = sequential).

    Returns
    -------
    ``(ScanResult, Summary, result_dict)``

    Raises
    ------
    FileNotFoundError
        If *root* does not exist or is not a directory.
    """
    root_p = _to_path(root)
    if not root_p.is_dir():
        raise FileNotFoundError(f"scan_project: root does not exist: {root_p}")

    cfg = config if config is not None else load_config(root_p)
    result = apply_filters(
        run_scan(root_p, cfg, workers=workers), user=user, priority=priority, due=due
    )

    summary = summarize(
        result.records,
        elapsed_seconds=result.elapsed_seconds,
        now=now if now is not None else datetime.now(),
        time_warning=cfg.time_warning,
    )
    return result, summary, result.to_dict(summary)


def validate_config(instance: Any) -> None:
    """Validate a config dict; raises ``jsonschema.ValidationError``."""
    _validate_instance(instance, CONFIG_SCHEMA)
