"""Annotation extraction — structured metadata from a marker line.

Three tags are recognised, each searched independently so they may appear
in any order on the same line::

    // TODO tidy this up @prio=high @due=2024-03-15 @resp=alice,bob

A tag that is absent leaves its field as ``None``.  A tag that is present
but unusable (unknown priority word, impossible date) is logged and also
leaves its field as ``None``; the other fields are unaffected.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date

from todo_scan.model import Priority

_logger = logging.getLogger(__name__)

PRIORITY_TAG = re.compile(r"@prio=(\w+)")
DUE_TAG = re.compile(r"@due=(\d{4}-\d{2}-\d{2})")
RESPONSIBLE_TAG = re.compile(r"@resp=([\w+,]+)")


@dataclass(frozen=True, slots=True)
class Annotations:
    priority: Priority | None = None
    due_date: date | None = None
    responsibles: tuple[str, ...] | None = None


def extract_priority(content: str) -> Priority | None:
    match = PRIORITY_TAG.search(content)
    if match is None:
        return None
    priority = Priority.parse(match.group(1))
    if priority is None:
        _logger.warning(
            "Unknown priority level %r in %r", match.group(1), content
        )
    return priority


def extract_due_date(content: str) -> date | None:
    """Parse ``@due=YYYY-MM-DD`` as a calendar date, day taken literally."""
    match = DUE_TAG.search(content)
    if match is None:
        return None
    year, month, day = match.group(1).split("-")
    try:
        return date(int(year), int(month), int(day))
    except ValueError as exc:
        _logger.warning("Error while parsing due date %r: %s", match.group(1), exc)
        return None


def extract_responsibles(content: str) -> tuple[str, ...] | None:
    match = RESPONSIBLE_TAG.search(content)
    if match is None:
        return None
    # Empty segments are dropped; the result may still be empty.
    return tuple(part for part in match.group(1).split(",") if part)


def extract_annotations(content: str) -> Annotations:
    """Run all three extractions over *content*."""
    return Annotations(
        priority=extract_priority(content),
        due_date=extract_due_date(content),
        responsibles=extract_responsibles(content),
    )
