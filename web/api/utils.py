"""Shared API serializers."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from league.models import LineupEntry, Team, Tournament
from league.services.deadlines import is_locked


def tournament_to_dict(t: Tournament, now: Optional[datetime] = None) -> dict:
    return {
        "tournament_id": t.tournament_id,
        "name": t.name,
        "deadline": t.deadline,
        "status": t.status,
        "is_locked": is_locked(t, now),
    }


def team_to_dict(team: Team) -> dict:
    return {"team_id": team.team_id, "team_name": team.team_name, "owner_email": team.owner_email}


def lineup_entry_to_dict(e: LineupEntry) -> dict:
    return {
        "tournament_id": e.tournament_id,
        "team_id": e.team_id,
        "slot": e.slot,
        "fedex_points": e.fedex_points,
        "admin_note": e.admin_note,
    }
