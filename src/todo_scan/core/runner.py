"""Runner — times one walk of the tree and assembles a ``ScanResult``."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from todo_scan.core.config import ScanConfig
from todo_scan.core.walker import TreeWalker
from todo_scan.model.scan_result import ScanResult

_logger = logging.getLogger(__name__)


def run_scan(
    root: Path,
    config: ScanConfig,
    *,
    workers: int = 1,
) -> ScanResult:
    """Scan *root* with *config* and return every record found.

    Elapsed time is rounded to milliseconds.
    """
    walker = TreeWalker(config, workers=workers)

    started = time.perf_counter()
    records = walker.scan(root)
    elapsed = round(time.perf_counter() - started, 3)

    _logger.debug("Scanned %s: %d record(s) in %.3fs", root, len(records), elapsed)

    return ScanResult(
        root=str(root),
        records=records,
        elapsed_seconds=elapsed,
        config=config.to_dict(),
    )
