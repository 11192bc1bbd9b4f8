"""League-wide key/value settings (e.g. commissioner_emails)."""
from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from league.models.base import Base


class LeagueConfig(Base):
    """Singleton-style league settings, one row per key."""

    __tablename__ = "league_config"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
