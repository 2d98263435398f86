"""Stale issue detection based on the last update timestamp."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from task_assistant.issues.models import Issue

SECONDS_PER_DAY = 24 * 60 * 60


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp (``Z`` suffix accepted). None when invalid."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_stale(issue: Issue, days: int, now: datetime | None = None) -> bool:
    """True when the issue was last updated at least ``days`` days ago."""
    updated = parse_timestamp(issue.updated_at)
    if updated is None:
        return False

    now = now or datetime.now(timezone.utc)
    elapsed_days = (now - updated).total_seconds() / SECONDS_PER_DAY
    return elapsed_days >= days
