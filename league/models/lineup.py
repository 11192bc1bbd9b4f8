"""Lineup entry model."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, ForeignKeyConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from league.models.base import Base


class LineupEntry(Base):
    """A roster slot selected by a team for a tournament. fedex_points is None until scored."""

    __tablename__ = "lineups"
    __table_args__ = (
        ForeignKeyConstraint(["team_id", "slot"], ["rosters.team_id", "rosters.slot"]),
    )

    tournament_id: Mapped[str] = mapped_column(ForeignKey("tournaments.tournament_id"), primary_key=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.team_id"), primary_key=True)
    slot: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    fedex_points: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    admin_note: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    @property
    def is_scored(self) -> bool:
        return self.fedex_points is not None
