"""Golfer model."""
from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from league.models.base import Base


class Golfer(Base):
    """PGA golfer. Rostered when some RosterSlot points at it, otherwise available."""

    __tablename__ = "golfers"

    golfer_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
