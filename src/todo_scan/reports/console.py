"""Terminal rendering of records and scan summaries.

Uses ``rich`` for styling; colour is dropped automatically when the
console is not a terminal.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.text import Text

from todo_scan.model import DueBucket, Priority
from todo_scan.model.record import Record
from todo_scan.model.scan_result import Summary

_PRIORITY_TAG = re.compile(r"@prio=(low|medium|high)\b", re.IGNORECASE)

_TAG_STYLES = {
    Priority.LOW: "bright_black",
    Priority.MEDIUM: "red",
    Priority.HIGH: "bright_red",
}

_PRIORITY_LABELS = (
    (Priority.HIGH, "HIGH", "bright_red"),
    (Priority.MEDIUM, "MED", "red"),
    (Priority.LOW, "LOW", "bright_black"),
)

_BUCKET_LABELS = (
    (DueBucket.PAST_DUE, "past due"),
    (DueBucket.DUE_TODAY, "due today"),
    (DueBucket.DUE_THIS_WEEK, "due this week"),
    (DueBucket.DUE_THIS_MONTH, "due this month"),
)


def render_record(record: Record) -> Text:
    """``path [line]: content`` with priority tags highlighted."""
    text = Text(f"{record.path} [{record.line}]: ")
    content = Text(record.content)
    for match in _PRIORITY_TAG.finditer(record.content):
        style = _TAG_STYLES[Priority(match.group(1).lower())]
        content.stylize(style, match.start(), match.end())
    text.append_text(content)
    return text


def print_records(console: Console, records: list[Record]) -> None:
    for record in records:
        console.print(render_record(record), highlight=False, soft_wrap=True)


def print_summary(console: Console, summary: Summary, *, time_warning: float) -> None:
    console.print(
        f"Found {summary.total} TODOs in {summary.elapsed_seconds}s", highlight=False
    )
    if summary.time_exceeded:
        console.print(
            f"[yellow]Scanning time exceeded the limit ({time_warning}s). "
            "Are you sure the exceptions are set up right? You can hide this "
            "message by increasing the limit in the config.[/yellow]",
            highlight=False,
            soft_wrap=True,
        )

    for priority, label, style in _PRIORITY_LABELS:
        count = summary.by_priority.get(priority, 0)
        if count > 0:
            console.print(
                f"Found {count} TODO(s) in [{style}]{label}[/{style}] priority",
                highlight=False,
            )

    for bucket, label in _BUCKET_LABELS:
        count = summary.by_due_bucket.get(bucket, 0)
        if count > 0:
            console.print(f"Found {count} TODO(s) {label}", highlight=False)
