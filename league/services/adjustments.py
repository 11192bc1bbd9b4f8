"""Commissioner correction of a team's scored lineup."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from league.errors import Conflict, InvalidSelection, NotFound, SelectionError, SlotExhausted
from league.services.commissioners import require_commissioner
from league.services.eligibility import MAX_USES
from league.store import LeagueStore

logger = logging.getLogger("league.adjustments")


@dataclass
class AdjustmentResult:
    tournament_id: str
    team_id: int
    old_slot: int
    new_slot: int
    old_points: Optional[int]
    new_points: int
    total_points: int

    @property
    def message(self) -> str:
        return f"Lineup adjusted: slot {self.old_slot} -> slot {self.new_slot} with {self.new_points} points"


async def adjust_lineup(
    store: LeagueStore,
    tournament_id: str,
    team_id: int,
    old_slot: int,
    new_slot: int,
    new_points: int,
    note: Optional[str],
    admin_email: str,
) -> AdjustmentResult:
    """Swap old_slot for new_slot on a submitted lineup (e.g. a golfer withdrew).

    The new slot picks up one use. The old slot gives one back if its row had
    been scored, since only scored rows were ever counted. A counter already
    at 0 (the slot changed hands on waivers) stays at 0.
    """
    async with store.transaction():
        admin = await require_commissioner(store, admin_email)

        target = await store.get_roster_slot(team_id, new_slot)
        if not target:
            raise InvalidSelection(f"Slot {new_slot} not found in team's roster", SelectionError.SLOT_NOT_ON_ROSTER)
        if target.times_used >= MAX_USES:
            raise SlotExhausted(
                f"Cannot use slot {new_slot}: already at maximum {MAX_USES} uses (current: {target.times_used})"
            )

        old_entry = await store.get_lineup_entry(tournament_id, team_id, old_slot)
        if not old_entry:
            raise NotFound(f"No lineup entry found for slot {old_slot} in this tournament")
        if new_slot != old_slot and await store.get_lineup_entry(tournament_id, team_id, new_slot):
            raise Conflict(f"Slot {new_slot} is already in this lineup")

        old_points = old_entry.fedex_points
        old_scored = old_entry.is_scored
        admin_note = f"Admin adjustment: {note}" if note else "Admin adjustment"

        await store.delete_lineup_entry(tournament_id, team_id, old_slot)
        await store.insert_lineup(tournament_id, team_id, [new_slot], fedex_points=new_points, admin_note=admin_note)
        if old_scored:
            await store.release_usage(team_id, old_slot)
        await store.change_usage(team_id, new_slot, +1)
        await store.add_admin_adjustment(
            tournament_id=tournament_id,
            team_id=team_id,
            old_slot=old_slot,
            new_slot=new_slot,
            old_points=old_points,
            new_points=new_points,
            note=note,
            admin_email=admin,
        )
        totals = await store.recalculate_standings()

    logger.info(
        "%s adjusted team %s in %s: slot %s (%s pts) -> slot %s (%s pts)",
        admin, team_id, tournament_id, old_slot, old_points, new_slot, new_points,
    )
    return AdjustmentResult(
        tournament_id=tournament_id,
        team_id=team_id,
        old_slot=old_slot,
        new_slot=new_slot,
        old_points=old_points,
        new_points=new_points,
        total_points=totals.get(team_id, 0),
    )
