"""Record filters and aggregations.

Pure functions over a record collection; inputs are never mutated.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Iterable

from todo_scan.model import DueBucket, Priority
from todo_scan.model.record import Record
from todo_scan.model.scan_result import Summary

_logger = logging.getLogger(__name__)


def filter_by_responsible(records: Iterable[Record], user: str) -> list[Record]:
    """Keep records whose responsibles include *user* (exact match)."""
    return [
        r for r in records
        if r.responsibles is not None and user in r.responsibles
    ]


def filter_by_priority(
    records: Iterable[Record], level: str | Priority
) -> list[Record]:
    """Keep records at *level*.

    An unrecognised level is logged and matches nothing.
    """
    priority = level if isinstance(level, Priority) else Priority.parse(level)
    if priority is None:
        _logger.warning("Unknown priority level: %s", level)
        return []
    return [r for r in records if r.priority is priority]


def filter_by_due_before(records: Iterable[Record], due: date) -> list[Record]:
    """Keep records with a due date on or before *due*."""
    return [r for r in records if r.due_date is not None and r.due_date <= due]


def count_by_priority(records: Iterable[Record]) -> dict[Priority, int]:
    counts = {p: 0 for p in Priority}
    for r in records:
        if r.priority is not None:
            counts[r.priority] += 1
    return counts


def _as_date(now: date | datetime) -> date:
    return now.date() if isinstance(now, datetime) else now


def classify_due_date(due: date, now: date | datetime) -> DueBucket | None:
    """Place *due* in a bucket relative to *now*; ``None`` past month end.

    Weeks run Monday to Sunday.  The week test comes before the month test,
    so a date in the current week but next month counts as this week.
    """
    today = _as_date(now)
    end_of_week = today + timedelta(days=6 - today.weekday())
    end_of_month = today.replace(
        day=calendar.monthrange(today.year, today.month)[1]
    )
    if due < today:
        return DueBucket.PAST_DUE
    if due == today:
        return DueBucket.DUE_TODAY
    if due <= end_of_week:
        return DueBucket.DUE_THIS_WEEK
    if due <= end_of_month:
        return DueBucket.DUE_THIS_MONTH
    return None


def bucket_by_due_date(
    records: Iterable[Record], now: date | datetime
) -> dict[DueBucket, int]:
    counts = {b: 0 for b in DueBucket}
    for r in records:
        if r.due_date is None:
            continue
        bucket = classify_due_date(r.due_date, now)
        if bucket is not None:
            counts[bucket] += 1
    return counts


def summarize(
    records: list[Record],
    *,
    elapsed_seconds: float,
    now: date | datetime,
    time_warning: float | None = None,
) -> Summary:
    """Assemble the presentation summary for *records*."""
    return Summary(
        total=len(records),
        elapsed_seconds=elapsed_seconds,
        by_priority=count_by_priority(records),
        by_due_bucket=bucket_by_due_date(records, now),
        time_exceeded=time_warning is not None and elapsed_seconds > time_warning,
    )
