"""Staleness classification of open pull requests on the triage page."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

YELLOW_DAYS = 7
RED_DAYS = 14


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def need_triage(updated_at: datetime | None, now: datetime | None = None) -> str:
    """``red`` after 14 days without update, ``yellow`` after 7, otherwise ``green``."""
    if updated_at is None:
        return "green"
    current = _now(now)
    if updated_at <= current - timedelta(days=RED_DAYS):
        return "red"
    if updated_at <= current - timedelta(days=YELLOW_DAYS):
        return "yellow"
    return "green"


def days_since_update(
    updated_at: datetime | None, created_at: datetime, now: datetime | None = None
) -> int:
    """Whole days since the last update, or since creation if never updated."""
    reference = updated_at if updated_at is not None else created_at
    return int((_now(now) - reference) / timedelta(days=1))