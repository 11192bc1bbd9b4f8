"""Result entry and standings recalculation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, NamedTuple, Union

from league.errors import Conflict, NotFound
from league.store import LeagueStore

logger = logging.getLogger("league.results")


class ResultRow(NamedTuple):
    team_id: int
    slot: int
    fedex_points: int


@dataclass
class StandingRow:
    team_id: int
    team_name: str
    total_points: int


@dataclass
class ResultsSummary:
    tournament_id: str
    first_time_scored: list[tuple[int, int]] = field(default_factory=list)  # (team_id, slot)
    rescored: list[tuple[int, int]] = field(default_factory=list)
    standings: dict[int, int] = field(default_factory=dict)


def _dedupe(results: Iterable[Union[ResultRow, tuple]]) -> list[ResultRow]:
    """Last value wins for a repeated (team_id, slot)."""
    rows: dict[tuple[int, int], ResultRow] = {}
    for r in results:
        row = ResultRow(*r)
        rows[(row.team_id, row.slot)] = row
    return list(rows.values())


async def enter_results(
    store: LeagueStore,
    tournament_id: str,
    results: Iterable[Union[ResultRow, tuple]],
) -> ResultsSummary:
    """Record FedEx points for lineup slots and refresh standings, all in one transaction.

    A slot scored for the first time (points were None) has its roster usage
    counter bumped by one. Correcting an already-scored slot rewrites the
    points only. A row with no matching lineup entry aborts the whole call.
    """
    rows = _dedupe(results)
    summary = ResultsSummary(tournament_id=tournament_id)

    async with store.transaction():
        if not await store.get_tournament(tournament_id):
            raise NotFound("Tournament not found")

        existing = await store.get_points(tournament_id, {r.team_id for r in rows})
        for row in rows:
            key = (row.team_id, row.slot)
            if key not in existing:
                raise Conflict(f"No lineup entry for team {row.team_id} slot {row.slot} in {tournament_id}")
            if existing[key] is None:
                summary.first_time_scored.append(key)
            else:
                summary.rescored.append(key)

        for row in rows:
            await store.set_points(tournament_id, row.team_id, row.slot, row.fedex_points)

        for team_id, slot in summary.first_time_scored:
            await store.change_usage(team_id, slot, +1)

        summary.standings = await store.recalculate_standings()

    logger.info(
        "Results for %s: %d newly scored, %d corrected",
        tournament_id,
        len(summary.first_time_scored),
        len(summary.rescored),
    )
    return summary


async def recalculate_standings(store: LeagueStore) -> list[StandingRow]:
    """Recompute every team's total from scratch and return standings, best first."""
    async with store.transaction():
        await store.recalculate_standings()
    return await list_standings(store)


async def list_standings(store: LeagueStore) -> list[StandingRow]:
    return [
        StandingRow(team_id=team.team_id, team_name=team.team_name, total_points=total)
        for team, total in await store.list_standings()
    ]
