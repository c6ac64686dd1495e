"""Enums shared across the scanner and the summary layer."""

from __future__ import annotations

from enum import Enum


class Priority(str, Enum):
    """Priority level carried by an ``@prio=`` tag."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, word: str) -> Priority | None:
        """Map a tag word to a level, case-insensitively; ``None`` if unknown."""
        try:
            return cls(word.lower())
        except ValueError:
            return None


class DueBucket(str, Enum):
    """Mutually exclusive due-date windows used for summary counts."""

    PAST_DUE = "past_due"
    DUE_TODAY = "due_today"
    DUE_THIS_WEEK = "due_this_week"
    DUE_THIS_MONTH = "due_this_month"
