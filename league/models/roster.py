"""Roster slot model."""
from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from league.models.base import Base


class RosterSlot(Base):
    """One of a team's draft slots (1..N, fixed at draft time).

    times_used belongs to the slot, not the golfer: it counts scored lineups
    that used this slot and is reset to 0 when a waiver swaps the golfer.
    """

    __tablename__ = "rosters"
    __table_args__ = (CheckConstraint("times_used >= 0", name="ck_rosters_times_used"),)

    team_id: Mapped[int] = mapped_column(ForeignKey("teams.team_id"), primary_key=True)
    slot: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    golfer_id: Mapped[int] = mapped_column(ForeignKey("golfers.golfer_id"), nullable=False, index=True)
    times_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    golfer = relationship("Golfer", lazy="joined")

    @property
    def golfer_name(self) -> str:
        return self.golfer.name if self.golfer else "Unknown"
