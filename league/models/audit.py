"""Append-only audit records: waiver claims and commissioner lineup corrections."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from league.models.base import Base


class WaiverLogEntry(Base):
    """Roster change made through a waiver claim."""

    __tablename__ = "waiver_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601, UTC
    team_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    dropped_golfer: Mapped[str] = mapped_column(String(128), nullable=False)
    added_golfer: Mapped[str] = mapped_column(String(128), nullable=False)
    slot: Mapped[int] = mapped_column(Integer, nullable=False)


class AdminAdjustment(Base):
    """Commissioner swap of one lineup slot for another."""

    __tablename__ = "admin_adjustments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601, UTC
    tournament_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    team_id: Mapped[int] = mapped_column(Integer, nullable=False)
    old_slot: Mapped[int] = mapped_column(Integer, nullable=False)
    new_slot: Mapped[int] = mapped_column(Integer, nullable=False)
    old_points: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    new_points: Mapped[int] = mapped_column(Integer, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    admin_email: Mapped[str] = mapped_column(String(255), nullable=False)
