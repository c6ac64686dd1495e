"""Record — one matched marker line and the annotations extracted from it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from todo_scan.core.extract import extract_annotations
from todo_scan.model import Priority


@dataclass(frozen=True, slots=True)
class Record:
    """Immutable scan record.

    ``priority``, ``due_date`` and ``responsibles`` are ``None`` when the
    corresponding tag is absent or unusable.  ``responsibles`` may be an
    empty tuple when a tag is present but every segment was empty.
    """

    path: str
    line: int                  # 1-based
    content: str               # trimmed source line
    priority: Priority | None = None
    due_date: date | None = None
    responsibles: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"Record line must be >= 1, got {self.line}")
        if not self.content:
            raise ValueError("Record content must not be empty")

    @classmethod
    def from_line(cls, path: str, line: int, content: str) -> Record:
        """Build a record from a matched line, extracting its tags."""
        annotations = extract_annotations(content)
        return cls(
            path=path,
            line=line,
            content=content,
            priority=annotations.priority,
            due_date=annotations.due_date,
            responsibles=annotations.responsibles,
        )

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "line": self.line,
            "content": self.content,
            "priority": self.priority.value if self.priority else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "responsibles": (
                list(self.responsibles) if self.responsibles is not None else None
            ),
        }

    def __str__(self) -> str:
        return f"{self.path} [{self.line}]: {self.content}"
