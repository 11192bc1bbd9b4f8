"""Carry lineups forward for teams that missed a deadline."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from league.errors import NotFound
from league.services.eligibility import build_carryover_lineup
from league.store import LeagueStore

logger = logging.getLogger("league.carryover")


@dataclass
class TeamCarryover:
    team_id: int
    team_name: str
    slots: list[int]


@dataclass
class CarryoverReport:
    tournament_id: str
    previous_tournament_id: Optional[str] = None
    carryovers: list[TeamCarryover] = field(default_factory=list)
    skipped_team_ids: list[int] = field(default_factory=list)  # no lineup could be built

    @property
    def message(self) -> str:
        if not self.carryovers and not self.skipped_team_ids:
            return "All teams already have lineups"
        return f"Applied carryover lineups for {len(self.carryovers)} team(s)"


async def generate_carryover(store: LeagueStore, tournament_id: str) -> CarryoverReport:
    """Give every team without a lineup for this tournament one built from its previous lineup.

    The previous lineup comes from the tournament with the latest deadline
    before this one. Slots that have since hit the usage cap are dropped and
    backfilled. Teams that already have any lineup rows are left alone.
    """
    async with store.transaction():
        tournament = await store.get_tournament(tournament_id)
        if not tournament:
            raise NotFound("Tournament not found")

        previous = await store.get_previous_tournament(tournament)
        report = CarryoverReport(
            tournament_id=tournament_id,
            previous_tournament_id=previous.tournament_id if previous else None,
        )

        has_lineup = await store.team_ids_with_lineup(tournament_id)
        for team in await store.list_teams():
            if team.team_id in has_lineup:
                continue
            roster = await store.get_roster(team.team_id)
            previous_slots = (
                [e.slot for e in await store.get_lineup(previous.tournament_id, team.team_id)]
                if previous
                else []
            )
            slots = build_carryover_lineup(roster, previous_slots)
            if not slots:
                report.skipped_team_ids.append(team.team_id)
                continue
            await store.insert_lineup(tournament_id, team.team_id, slots)
            report.carryovers.append(TeamCarryover(team_id=team.team_id, team_name=team.team_name, slots=slots))

    for c in report.carryovers:
        logger.info("Carryover for %s: team %s -> slots %s", tournament_id, c.team_id, c.slots)
    return report
