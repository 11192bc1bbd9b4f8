"""Team and standings models."""
from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from league.models.base import Base


class Team(Base):
    """Fantasy team. owner_email is the login key."""

    __tablename__ = "teams"

    team_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    team_name: Mapped[str] = mapped_column(String(128), nullable=False)
    owner_email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased


class Standing(Base):
    """Cached season total. Recomputed from lineups, never edited directly."""

    __tablename__ = "standings"

    team_id: Mapped[int] = mapped_column(ForeignKey("teams.team_id"), primary_key=True)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
