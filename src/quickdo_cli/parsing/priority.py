"""Priority inference for tasks that carry no explicit ``!priority`` marker."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from quickdo_cli.models import Priority

URGENT_PATTERN = re.compile(r"\b(urgent|asap|critical|today)\b")
PLANNING_PATTERN = re.compile(r"\b(review|plan|someday)\b")

HIGH_WINDOW = timedelta(hours=24)
MEDIUM_WINDOW = timedelta(hours=72)


def infer_priority(
    text: str, due: datetime | None = None, now: datetime | None = None
) -> Priority:
    """Guess a priority from wording and due-date proximity.

    Rules are checked in order and the first hit wins:

    1. urgency words (urgent, asap, critical, today) -> high
    2. due within 24 hours (or overdue) -> high
    3. due within 72 hours -> medium
    4. planning words (review, plan, someday) -> low
    5. medium
    """
    lowered = text.lower()
    if URGENT_PATTERN.search(lowered):
        return Priority.HIGH

    if due is not None:
        remaining = due - (now or datetime.now())
        if remaining <= HIGH_WINDOW:
            return Priority.HIGH
        if remaining <= MEDIUM_WINDOW:
            return Priority.MEDIUM

    if PLANNING_PATTERN.search(lowered):
        return Priority.LOW
    return Priority.MEDIUM
