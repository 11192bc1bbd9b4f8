"""API routes for owners: tournaments, lineups, rosters, standings, waivers."""
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from league.errors import NotFound
from league.services.lineups import get_lineup_state, submit_lineup
from league.services.results import list_standings
from league.services.tournaments import tournament_board
from league.services.waivers import available_golfers, claim_waiver
from league.store import LeagueStore
from web.api.utils import lineup_entry_to_dict, tournament_to_dict
from web.auth import get_store

router = APIRouter(prefix="/api", tags=["league"])


# --- Pydantic schemas ---


class LineupSubmit(BaseModel):
    team_id: int
    tournament_id: str
    slots: list[int]


class WaiverClaim(BaseModel):
    team_id: int
    drop_golfer_id: int
    add_golfer_id: int
    slot: int


# --- Tournaments ---


@router.get("/tournaments")
async def list_tournaments(store: LeagueStore = Depends(get_store)):
    """List tournaments, most recent deadline first."""
    return [tournament_to_dict(t) for t in await store.list_tournaments()]


@router.get("/tournaments/{tournament_id}")
async def get_tournament(tournament_id: str, store: LeagueStore = Depends(get_store)):
    """Tournament with every team's lineup, golfer names and points."""
    tournament, boards = await tournament_board(store, tournament_id)
    return {
        "tournament": tournament_to_dict(tournament),
        "lineups": [
            {
                "team_id": b.team_id,
                "team_name": b.team_name,
                "lineup": [asdict(e) for e in b.lineup],
                "total_points": b.total_points,
            }
            for b in boards
        ],
    }


# --- Lineups ---


@router.get("/lineup")
async def get_lineup(team_id: int, tournament_id: str, store: LeagueStore = Depends(get_store)):
    """Roster with selection/default/eligibility flags, current lineup and lock state."""
    state = await get_lineup_state(store, team_id, tournament_id)
    return {
        "tournament": tournament_to_dict(state.tournament),
        "roster": [asdict(r) for r in state.roster],
        "current_lineup": [lineup_entry_to_dict(e) for e in state.current_lineup],
        "default_slots": state.default_slots,
        "previous_tournament_id": state.previous_tournament_id,
        "is_locked": state.is_locked,
    }


@router.post("/lineup")
async def post_lineup(body: LineupSubmit, store: LeagueStore = Depends(get_store)):
    """Submit (or resubmit) a lineup. Replaces any earlier submission."""
    result = await submit_lineup(store, body.team_id, body.tournament_id, body.slots)
    return {"ok": True, "slots": result.slots, "warning": result.warning}


# --- Rosters and standings ---


@router.get("/roster/{team_id}")
async def get_roster(team_id: int, store: LeagueStore = Depends(get_store)):
    """Team roster with golfer names, by slot."""
    if not await store.get_team(team_id):
        raise NotFound("Team not found")
    return [
        {
            "team_id": r.team_id,
            "slot": r.slot,
            "golfer_id": r.golfer_id,
            "golfer_name": r.golfer_name,
            "times_used": r.times_used,
        }
        for r in await store.get_roster(team_id)
    ]


@router.get("/standings")
async def get_standings(store: LeagueStore = Depends(get_store)):
    """Season standings, highest total first."""
    return [asdict(s) for s in await list_standings(store)]


# --- Waivers ---


@router.get("/waivers/available")
async def list_available_golfers(store: LeagueStore = Depends(get_store)):
    """Unrostered golfers, by name."""
    return [{"golfer_id": g.golfer_id, "name": g.name} for g in await available_golfers(store)]


@router.post("/waivers")
async def post_waiver(body: WaiverClaim, store: LeagueStore = Depends(get_store)):
    """Drop a golfer and add an available one in the same slot."""
    if body.drop_golfer_id == body.add_golfer_id:
        raise HTTPException(400, "Drop and add golfer must differ")
    entry = await claim_waiver(store, body.team_id, body.drop_golfer_id, body.add_golfer_id, body.slot)
    return {
        "ok": True,
        "slot": entry.slot,
        "dropped_golfer": entry.dropped_golfer,
        "added_golfer": entry.added_golfer,
    }
