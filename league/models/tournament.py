"""Tournament model and deadline normalization."""
from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

import config
from league.models.base import Base

TOURNAMENT_STATUSES = ("open", "locked", "closed")

DEADLINE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def normalize_deadline(value: str) -> str:
    """Return deadline as a naive league-local "YYYY-MM-DDTHH:MM:SS" string.

    Accepts "2026-02-18 23:59", "2026-02-18T23:59:00.000", or a bare date
    (midnight). A value carrying an offset is converted to league time first.
    Raises ValueError for anything else.
    """
    s = (value or "").strip().replace(" ", "T", 1)
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is not None:
        dt = dt.astimezone(ZoneInfo(config.LEAGUE_TIMEZONE)).replace(tzinfo=None)
    return dt.strftime(DEADLINE_FORMAT)


class Tournament(Base):
    """Weekly PGA event. Status is set by the commissioner; see services.deadlines for locking."""

    __tablename__ = "tournaments"

    tournament_id: Mapped[str] = mapped_column(String(32), primary_key=True)  # e.g. "T001"
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    deadline: Mapped[str] = mapped_column(String(19), nullable=False, index=True)  # naive, league timezone
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="open")  # open, locked, closed
