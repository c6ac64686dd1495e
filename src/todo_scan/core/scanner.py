"""File scanner — find marker lines in a single file."""

from __future__ import annotations

import logging
from pathlib import Path

from todo_scan.core.config import ScanConfig
from todo_scan.model.record import Record

_logger = logging.getLogger(__name__)


class FileScanner:
    """Applies one configuration's line pattern to files.

    A line is a candidate when it is no longer than ``pattern.limit`` and a
    regex *search* (not a full match) succeeds on it, lower-cased first
    unless the pattern is case-sensitive.
    """

    def __init__(self, config: ScanConfig):
        self.config = config
        self._regex = config.pattern.compile()
        self._limit = config.pattern.limit
        self._case_sensitive = config.pattern.case_sensitive

    def _read_text(self, path: Path) -> str:
        # newline="" keeps "\r" on each line; only the stored content is trimmed.
        with path.open("r", encoding=self.config.encoding, newline="") as fh:
            return fh.read()

    def matches(self, line: str) -> bool:
        if len(line) > self._limit:
            return False
        subject = line if self._case_sensitive else line.lower()
        return self._regex.search(subject) is not None

    def scan(self, path: Path) -> list[Record]:
        """Return the records for *path*, in line order; ``[]`` on read errors."""
        try:
            text = self._read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            _logger.warning("Error reading file %s: %s", path, exc)
            return []

        records: list[Record] = []
        for index, line in enumerate(text.split("\n")):
            if not self.matches(line):
                continue
            # str.strip keeps a leading byte-order mark; drop it for storage.
            content = line.lstrip("\ufeff").strip()
            if not content:
                continue
            records.append(Record.from_line(str(path), index + 1, content))
        return records


def scan_file(path: Path, config: ScanConfig | None = None) -> list[Record]:
    """Convenience wrapper: scan one file with *config* (defaults if omitted)."""
    return FileScanner(config or ScanConfig()).scan(Path(path))
