"""ScanResult and Summary — the assembled output of one scan invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from todo_scan import __version__
from todo_scan.model import DueBucket, Priority
from todo_scan.model.record import Record


@dataclass(frozen=True, slots=True)
class Summary:
    """Counts presented after a scan."""

    total: int
    elapsed_seconds: float
    by_priority: dict[Priority, int]
    by_due_bucket: dict[DueBucket, int]
    time_exceeded: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "elapsed_seconds": self.elapsed_seconds,
            "time_exceeded": self.time_exceeded,
            "by_priority": {p.value: self.by_priority.get(p, 0) for p in Priority},
            "by_due_bucket": {
                b.value: self.by_due_bucket.get(b, 0) for b in DueBucket
            },
        }


@dataclass(slots=True)
class ScanResult:
    """Records found under ``root`` plus run metadata.

    Constructed by ``core.runner``; the API layer replaces ``records`` with
    the filtered subset before summarising.
    """

    root: str
    records: list[Record] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    config: dict = field(default_factory=dict)
    tool_version: str = __version__

    def to_dict(self, summary: Summary | None = None) -> dict[str, Any]:
        d: dict[str, Any] = {
            "tool_version": self.tool_version,
            "root": self.root,
            "config": dict(self.config),
            "records": [r.to_dict() for r in self.records],
        }
        if summary is not None:
            d["summary"] = summary.to_dict()
        return d
