"""Lineup read path and submission."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from league.errors import InvalidSelection, Locked, NotFound
from league.models import LineupEntry, Team, Tournament
from league.services.deadlines import is_locked
from league.services.eligibility import can_use_slot, get_default_lineup, validate_lineup_selection
from league.store import LeagueStore

logger = logging.getLogger("league.lineups")


@dataclass
class RosterSlotState:
    slot: int
    golfer_id: int
    golfer_name: str
    times_used: int
    is_selected: bool
    is_default: bool
    can_select: bool


@dataclass
class LineupState:
    tournament: Tournament
    team: Team
    roster: list[RosterSlotState]
    current_lineup: list[LineupEntry]
    default_slots: list[int]
    is_locked: bool
    previous_tournament_id: Optional[str] = None


@dataclass
class SubmitResult:
    tournament_id: str
    team_id: int
    slots: list[int] = field(default_factory=list)
    warning: Optional[str] = None


async def _load(store: LeagueStore, team_id: int, tournament_id: str) -> tuple[Tournament, Team]:
    tournament = await store.get_tournament(tournament_id)
    if not tournament:
        raise NotFound("Tournament not found")
    team = await store.get_team(team_id)
    if not team:
        raise NotFound("Team not found")
    return tournament, team


async def get_lineup_state(
    store: LeagueStore,
    team_id: int,
    tournament_id: str,
    now: Optional[datetime] = None,
) -> LineupState:
    """Roster annotated for the lineup page, plus the current lineup and lock state.

    Defaults carry over from the team's lineup in the tournament with the
    latest deadline before this one.
    """
    tournament, team = await _load(store, team_id, tournament_id)
    roster = await store.get_roster(team_id)
    current = await store.get_lineup(tournament_id, team_id)

    previous = await store.get_previous_tournament(tournament)
    previous_lineup = await store.get_lineup(previous.tournament_id, team_id) if previous else []
    defaults = get_default_lineup(roster, previous_lineup)

    selected = {e.slot for e in current}
    return LineupState(
        tournament=tournament,
        team=team,
        roster=[
            RosterSlotState(
                slot=r.slot,
                golfer_id=r.golfer_id,
                golfer_name=r.golfer_name,
                times_used=r.times_used,
                is_selected=r.slot in selected,
                is_default=r.slot in defaults,
                can_select=can_use_slot(r),
            )
            for r in roster
        ],
        current_lineup=current,
        default_slots=defaults,
        is_locked=is_locked(tournament, now),
        previous_tournament_id=previous.tournament_id if previous else None,
    )


async def submit_lineup(
    store: LeagueStore,
    team_id: int,
    tournament_id: str,
    slots: Sequence[int],
    now: Optional[datetime] = None,
) -> SubmitResult:
    """Validate and store a team's selection, replacing any earlier submission.

    Usage counters are not touched here; a slot counts as used only once it
    has been scored (see services.results).
    """
    slots = list(slots)
    async with store.transaction():
        tournament, _team = await _load(store, team_id, tournament_id)
        if is_locked(tournament, now):
            raise Locked("Tournament is locked, cannot submit lineup")

        roster = await store.get_roster(team_id)
        validation = validate_lineup_selection(slots, roster)
        if not validation.valid:
            raise InvalidSelection(validation.error, validation.code)

        await store.replace_lineup(tournament_id, team_id, slots)

    logger.info("Team %s submitted lineup %s for %s", team_id, sorted(slots), tournament_id)
    return SubmitResult(
        tournament_id=tournament_id,
        team_id=team_id,
        slots=sorted(slots),
        warning=validation.warning,
    )
