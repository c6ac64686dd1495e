"""Tree walker — recursive discovery of files to scan, plus aggregation.

Directories whose *name* is listed in ``directory_exceptions`` are pruned
at any depth.  Symlinks are skipped unless ``follow_symlinks`` is set, in
which case directories already visited (by real path) are not re-entered.
An unreadable directory is logged and contributes nothing.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator

from todo_scan.core.config import ScanConfig
from todo_scan.core.scanner import FileScanner
from todo_scan.model.record import Record

_logger = logging.getLogger(__name__)


def _is_file_exception(path: Path, root: Path, config: ScanConfig) -> bool:
    if path.name in config.file_exceptions:
        return True
    try:
        rel = path.relative_to(root).as_posix()
    except ValueError:
        return False
    return rel in config.file_exceptions


def _list_directory(
    directory: Path, config: ScanConfig, visited: set[str]
) -> Iterator[os.DirEntry] | None:
    """Entries of *directory* in name order; ``None`` if it is skipped."""
    if config.follow_symlinks:
        real = os.path.realpath(directory)
        if real in visited:
            _logger.debug("Skipping already visited directory %s", directory)
            return None
        visited.add(real)

    try:
        with os.scandir(directory) as it:
            return iter(sorted(it, key=lambda e: e.name))
    except OSError as exc:
        _logger.warning("Error scanning directory %s: %s", directory, exc)
        return None


def _walk(root: Path, config: ScanConfig) -> Iterator[Path]:
    # Depth-first with an explicit stack of (directory, entries) frames, so
    # tree depth is not bounded by the interpreter's recursion limit.
    visited: set[str] = set()
    stack: list[tuple[Path, Iterator[os.DirEntry]]] = []
    entries = _list_directory(root, config, visited)
    if entries is not None:
        stack.append((root, entries))

    while stack:
        directory, entries = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue

        path = directory / entry.name
        try:
            if entry.is_symlink() and not config.follow_symlinks:
                continue
            is_dir = entry.is_dir()
            is_file = entry.is_file()
        except OSError as exc:
            _logger.warning("Error inspecting %s: %s", path, exc)
            continue

        if is_dir:
            if entry.name in config.directory_exceptions:
                continue
            children = _list_directory(path, config, visited)
            if children is not None:
                stack.append((path, children))
        elif is_file:
            if _is_file_exception(path, root, config):
                continue
            yield path
        # sockets, FIFOs, devices and dangling links are never scanned


def iter_candidate_files(root: Path, config: ScanConfig) -> Iterator[Path]:
    """Yield regular files under *root* respecting all exclusion rules."""
    yield from _walk(Path(root), config)


class TreeWalker:
    """Walks a directory tree and scans every candidate file.

    ``workers > 1`` scans files on a thread pool; results are merged in
    discovery order, so within a file records stay in line order.
    """

    def __init__(self, config: ScanConfig, *, workers: int = 1):
        self.config = config
        self.workers = max(1, workers)
        self.scanner = FileScanner(config)

    def scan(self, root: Path) -> list[Record]:
        files = iter_candidate_files(Path(root), self.config)
        records: list[Record] = []
        if self.workers == 1:
            for path in files:
                records.extend(self.scanner.scan(path))
            return records

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            for file_records in pool.map(self.scanner.scan, files):
                records.extend(file_records)
        return records
