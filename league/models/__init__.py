"""Database models."""
from league.models.base import Base, init_db, make_engine, make_session_factory
from league.models.team import Standing, Team
from league.models.golfer import Golfer
from league.models.roster import RosterSlot
from league.models.tournament import TOURNAMENT_STATUSES, Tournament, normalize_deadline
from league.models.lineup import LineupEntry
from league.models.audit import AdminAdjustment, WaiverLogEntry  # noqa: F401 - for metadata
from league.models.league_config import LeagueConfig  # noqa: F401 - for metadata

__all__ = [
    "Base",
    "Team",
    "Standing",
    "Golfer",
    "RosterSlot",
    "Tournament",
    "TOURNAMENT_STATUSES",
    "LineupEntry",
    "AdminAdjustment",
    "WaiverLogEntry",
    "LeagueConfig",
    "init_db",
    "make_engine",
    "make_session_factory",
    "normalize_deadline",
]
