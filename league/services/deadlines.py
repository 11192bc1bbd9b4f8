"""Tournament lock state: commissioner status plus the league-time deadline check.

Deadlines are stored as naive wall-clock strings in the league timezone
(US Eastern by default), e.g. "2026-02-18T23:59:00" means 11:59 PM Eastern.
The current instant is rendered into the same naive format with the zone's
DST rules and the two strings are compared directly. Parsing the stored value
as UTC or server-local time would move the lock by several hours.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

import config
from league.models import Tournament, normalize_deadline
from league.models.tournament import DEADLINE_FORMAT


def league_timezone() -> ZoneInfo:
    return ZoneInfo(config.LEAGUE_TIMEZONE)


def league_now(now: Optional[datetime] = None) -> str:
    """Current time as a naive "YYYY-MM-DDTHH:MM:SS" string in league time.

    `now` must be timezone-aware; it defaults to the system clock.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    return now.astimezone(league_timezone()).strftime(DEADLINE_FORMAT)


def is_deadline_passed(deadline: str, now: Optional[datetime] = None) -> bool:
    return normalize_deadline(deadline) < league_now(now)


def is_locked(tournament: Tournament, now: Optional[datetime] = None) -> bool:
    """Closed to lineup submissions: status is not open, or the deadline has passed."""
    return tournament.status != "open" or is_deadline_passed(tournament.deadline, now)
