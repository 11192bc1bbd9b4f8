"""Commissioner API: tournaments, results, carryover, lineup adjustments, standings."""
from __future__ import annotations

from dataclasses import asdict
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from league.models import normalize_deadline
from league.services.adjustments import adjust_lineup
from league.services.carryover import generate_carryover
from league.services.results import ResultRow, enter_results, recalculate_standings
from league.services.tournaments import create_tournament, update_tournament
from league.store import LeagueStore
from web.api.utils import tournament_to_dict
from web.auth import get_store, require_commissioner_user

router = APIRouter(prefix="/api/admin", tags=["admin"])

TournamentStatus = Literal["open", "locked", "closed"]


def _check_deadline(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    try:
        return normalize_deadline(v)
    except ValueError as e:
        raise ValueError(f"Invalid deadline: {v!r}") from e


# --- Pydantic schemas ---


class TournamentCreate(BaseModel):
    tournament_id: str
    name: str
    deadline: str  # league-local wall clock, e.g. "2026-02-18T23:59:00"
    status: TournamentStatus = "open"

    check_deadline = field_validator("deadline")(_check_deadline)


class TournamentUpdate(BaseModel):
    name: Optional[str] = None
    deadline: Optional[str] = None
    status: Optional[TournamentStatus] = None

    check_deadline = field_validator("deadline")(_check_deadline)


class ResultItem(BaseModel):
    team_id: int
    slot: int
    fedex_points: int


class ResultsRequest(BaseModel):
    tournament_id: str
    results: list[ResultItem]


class CarryoverRequest(BaseModel):
    tournament_id: str


class AdjustLineupRequest(BaseModel):
    tournament_id: str
    team_id: int
    old_slot: int
    new_slot: int
    new_points: int
    admin_note: Optional[str] = None


# --- Tournaments ---


@router.post("/tournaments")
async def post_tournament(
    body: TournamentCreate,
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Create a tournament (commissioner only)."""
    t = await create_tournament(store, body.tournament_id, body.name, body.deadline, body.status)
    return tournament_to_dict(t)


@router.patch("/tournaments/{tournament_id}")
async def patch_tournament(
    tournament_id: str,
    body: TournamentUpdate,
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Rename, move the deadline, or change status (open/locked/closed)."""
    updates = body.model_dump(exclude_unset=True)
    t = await update_tournament(store, tournament_id, **updates)
    return tournament_to_dict(t)


# --- Scoring ---


@router.post("/results")
async def post_results(
    body: ResultsRequest,
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Enter FedEx points for lineup slots; refreshes standings."""
    summary = await enter_results(
        store,
        body.tournament_id,
        [ResultRow(r.team_id, r.slot, r.fedex_points) for r in body.results],
    )
    return {
        "ok": True,
        "first_time_scored": [list(k) for k in summary.first_time_scored],
        "rescored": [list(k) for k in summary.rescored],
        "standings": {str(k): v for k, v in summary.standings.items()},
    }


@router.post("/recalculate-standings")
async def post_recalculate_standings(
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Recompute every team's total from all lineups."""
    standings = await recalculate_standings(store)
    return {"ok": True, "message": "Standings recalculated", "standings": [asdict(s) for s in standings]}


@router.post("/carryover")
async def post_carryover(
    body: CarryoverRequest,
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Fill in lineups for teams that missed the deadline, from their previous lineup."""
    report = await generate_carryover(store, body.tournament_id)
    return {
        "ok": True,
        "message": report.message,
        "previous_tournament_id": report.previous_tournament_id,
        "carryovers": [asdict(c) for c in report.carryovers],
        "skipped_team_ids": report.skipped_team_ids,
    }


@router.post("/adjust-lineup")
async def post_adjust_lineup(
    body: AdjustLineupRequest,
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Swap one slot of a submitted lineup for another, with new points. Audited."""
    result = await adjust_lineup(
        store,
        body.tournament_id,
        body.team_id,
        body.old_slot,
        body.new_slot,
        body.new_points,
        body.admin_note,
        admin_email=admin,
    )
    return {"ok": True, "message": result.message, "total_points": result.total_points}


@router.get("/adjustments")
async def list_adjustments(
    tournament_id: Optional[str] = None,
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Audit trail of commissioner lineup adjustments."""
    return [
        {
            "id": a.id,
            "timestamp": a.timestamp,
            "tournament_id": a.tournament_id,
            "team_id": a.team_id,
            "old_slot": a.old_slot,
            "new_slot": a.new_slot,
            "old_points": a.old_points,
            "new_points": a.new_points,
            "note": a.note,
            "admin_email": a.admin_email,
        }
        for a in await store.list_admin_adjustments(tournament_id)
    ]
