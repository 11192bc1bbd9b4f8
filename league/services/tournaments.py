"""Tournament administration and the per-tournament lineup board."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from league.errors import InvalidInput, NotFound
from league.models import TOURNAMENT_STATUSES, Tournament, normalize_deadline
from league.store import LeagueStore

logger = logging.getLogger("league.tournaments")


@dataclass
class BoardEntry:
    slot: int
    golfer_name: str
    fedex_points: Optional[int]


@dataclass
class TeamBoard:
    team_id: int
    team_name: str
    lineup: list[BoardEntry] = field(default_factory=list)

    @property
    def total_points(self) -> int:
        return sum(e.fedex_points or 0 for e in self.lineup)


def _check_fields(status: Optional[str], deadline: Optional[str]) -> None:
    if status is not None and status not in TOURNAMENT_STATUSES:
        raise InvalidInput(f"Invalid status {status!r}: must be one of {', '.join(TOURNAMENT_STATUSES)}")
    if deadline is not None:
        try:
            normalize_deadline(deadline)
        except ValueError:
            raise InvalidInput(f"Invalid deadline {deadline!r}") from None


async def create_tournament(
    store: LeagueStore, tournament_id: str, name: str, deadline: str, status: str = "open"
) -> Tournament:
    _check_fields(status, deadline)
    async with store.transaction():
        t = await store.add_tournament(tournament_id, name, deadline, status)
    logger.info("Created tournament %s (%s), deadline %s", t.tournament_id, t.name, t.deadline)
    return t


async def update_tournament(
    store: LeagueStore,
    tournament_id: str,
    name: Optional[str] = None,
    deadline: Optional[str] = None,
    status: Optional[str] = None,
) -> Tournament:
    """Edit name/deadline/status. The commissioner may move status to any allowed value."""
    _check_fields(status, deadline)
    async with store.transaction():
        t = await store.get_tournament(tournament_id)
        if not t:
            raise NotFound("Tournament not found")
        await store.update_tournament(t, name=name, deadline=deadline, status=status)
    logger.info("Updated tournament %s: status=%s deadline=%s", t.tournament_id, t.status, t.deadline)
    return t


async def tournament_board(store: LeagueStore, tournament_id: str) -> tuple[Tournament, list[TeamBoard]]:
    """Every team's lineup for a tournament, with golfer names and points."""
    tournament = await store.get_tournament(tournament_id)
    if not tournament:
        raise NotFound("Tournament not found")

    by_team: dict[int, list] = {}
    for entry in await store.get_tournament_lineups(tournament_id):
        by_team.setdefault(entry.team_id, []).append(entry)

    boards = []
    for team in await store.list_teams():
        names = {r.slot: r.golfer_name for r in await store.get_roster(team.team_id)}
        boards.append(
            TeamBoard(
                team_id=team.team_id,
                team_name=team.team_name,
                lineup=[
                    BoardEntry(slot=e.slot, golfer_name=names.get(e.slot, "Unknown"), fedex_points=e.fedex_points)
                    for e in by_team.get(team.team_id, [])
                ],
            )
        )
    return tournament, boards
