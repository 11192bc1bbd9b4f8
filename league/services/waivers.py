"""Waiver claims: drop a rostered golfer, add an available one in the same slot."""
from __future__ import annotations

import logging

from league.errors import Conflict, InvalidSelection, NotFound, SelectionError
from league.models import Golfer, WaiverLogEntry
from league.store import LeagueStore

logger = logging.getLogger("league.waivers")


async def available_golfers(store: LeagueStore) -> list[Golfer]:
    return await store.list_available_golfers()


async def claim_waiver(
    store: LeagueStore,
    team_id: int,
    drop_golfer_id: int,
    add_golfer_id: int,
    slot: int,
) -> WaiverLogEntry:
    """Replace the golfer in a roster slot. The slot's usage counter restarts at 0."""
    async with store.transaction():
        entry = await store.get_roster_slot(team_id, slot)
        if not entry or entry.golfer_id != drop_golfer_id:
            raise InvalidSelection(
                "Golfer to drop is not on your roster at the specified slot",
                SelectionError.SLOT_NOT_ON_ROSTER,
            )
        dropped = await store.get_golfer(drop_golfer_id)
        added = await store.get_golfer(add_golfer_id)
        if not added:
            raise NotFound("Golfer to add does not exist")
        if await store.is_golfer_rostered(add_golfer_id):
            raise Conflict("Golfer to add is already on a roster")

        await store.swap_golfer(team_id, slot, add_golfer_id)
        log_entry = await store.add_waiver_log(
            team_id=team_id,
            dropped_golfer=dropped.name if dropped else "Unknown",
            added_golfer=added.name,
            slot=slot,
        )

    logger.info("Team %s waived %s for %s in slot %s", team_id, log_entry.dropped_golfer, added.name, slot)
    return log_entry
