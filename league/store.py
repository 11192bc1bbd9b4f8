"""Persistence handle for the league services.

A LeagueStore wraps one AsyncSession. Build one per request (or per unit of
work) from a session factory and pass it explicitly to the service functions;
there is no module-level client. All writes that belong together go inside
``async with store.transaction():`` so they commit or roll back as one unit.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Iterable, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from league.errors import Conflict, StorageError
from league.models import (
    AdminAdjustment,
    Golfer,
    LeagueConfig,
    LineupEntry,
    RosterSlot,
    Standing,
    Team,
    Tournament,
    WaiverLogEntry,
    normalize_deadline,
)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class LeagueStore:
    """Point reads/writes by key plus an atomic transaction primitive."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # --- Transactions ---

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["LeagueStore"]:
        """Commit on clean exit, roll back on any exception. Database errors surface as StorageError."""
        try:
            yield self
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StorageError(str(e)) from e
        except BaseException:
            await self.session.rollback()
            raise

    async def _execute(self, stmt):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    async def _get(self, model, key):
        try:
            return await self.session.get(model, key)
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    async def _expect_one(self, stmt, what: str) -> None:
        """Run a targeted UPDATE/DELETE and insist it touched exactly one row."""
        result = await self._execute(stmt)
        if result.rowcount != 1:
            raise Conflict(f"Expected to change 1 {what} row, changed {result.rowcount}")

    # --- Teams ---

    async def get_team(self, team_id: int) -> Optional[Team]:
        return await self._get(Team, team_id)

    async def get_team_by_email(self, email: str) -> Optional[Team]:
        normalized = (email or "").strip().lower()
        result = await self._execute(select(Team).where(func.lower(Team.owner_email) == normalized))
        return result.scalar_one_or_none()

    async def list_teams(self) -> list[Team]:
        result = await self._execute(select(Team).order_by(Team.team_id))
        return list(result.scalars().all())

    async def add_team(self, team_id: int, team_name: str, owner_email: str) -> Team:
        """Draft setup: create a team with a zeroed standings row."""
        team = Team(team_id=team_id, team_name=team_name, owner_email=owner_email.strip().lower())
        self.session.add(team)
        self.session.add(Standing(team_id=team_id, total_points=0))
        await self._flush()
        return team

    # --- Golfers and rosters ---

    async def get_golfer(self, golfer_id: int) -> Optional[Golfer]:
        return await self._get(Golfer, golfer_id)

    async def add_golfer(self, golfer_id: int, name: str) -> Golfer:
        golfer = Golfer(golfer_id=golfer_id, name=name)
        self.session.add(golfer)
        await self._flush()
        return golfer

    async def list_available_golfers(self) -> list[Golfer]:
        """Golfers not on any roster, by name."""
        rostered = select(RosterSlot.golfer_id)
        result = await self._execute(
            select(Golfer).where(Golfer.golfer_id.not_in(rostered)).order_by(Golfer.name)
        )
        return list(result.scalars().all())

    async def is_golfer_rostered(self, golfer_id: int) -> bool:
        result = await self._execute(
            select(func.count()).select_from(RosterSlot).where(RosterSlot.golfer_id == golfer_id)
        )
        return result.scalar_one() > 0

    async def get_roster(self, team_id: int) -> list[RosterSlot]:
        result = await self._execute(
            select(RosterSlot).where(RosterSlot.team_id == team_id).order_by(RosterSlot.slot)
        )
        return list(result.scalars().all())

    async def get_roster_slot(self, team_id: int, slot: int) -> Optional[RosterSlot]:
        return await self._get(RosterSlot, (team_id, slot))

    async def add_roster_slot(self, team_id: int, slot: int, golfer_id: int, times_used: int = 0) -> RosterSlot:
        entry = RosterSlot(team_id=team_id, slot=slot, golfer_id=golfer_id, times_used=times_used)
        self.session.add(entry)
        await self._flush()
        return entry

    async def change_usage(self, team_id: int, slot: int, delta: int) -> None:
        await self._expect_one(
            update(RosterSlot)
            .where(RosterSlot.team_id == team_id, RosterSlot.slot == slot)
            .values(times_used=RosterSlot.times_used + delta),
            "roster",
        )

    async def release_usage(self, team_id: int, slot: int) -> None:
        """Give back one use, stopping at 0 (a waiver may have reset the counter since)."""
        await self._execute(
            update(RosterSlot)
            .where(RosterSlot.team_id == team_id, RosterSlot.slot == slot, RosterSlot.times_used > 0)
            .values(times_used=RosterSlot.times_used - 1)
        )

    async def swap_golfer(self, team_id: int, slot: int, golfer_id: int) -> None:
        """Put a new golfer in a slot. Usage history does not carry over."""
        await self._expect_one(
            update(RosterSlot)
            .where(RosterSlot.team_id == team_id, RosterSlot.slot == slot)
            .values(golfer_id=golfer_id, times_used=0),
            "roster",
        )

    # --- Tournaments ---

    async def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        return await self._get(Tournament, tournament_id)

    async def list_tournaments(self) -> list[Tournament]:
        """Most recent deadline first."""
        result = await self._execute(
            select(Tournament).order_by(Tournament.deadline.desc(), Tournament.tournament_id.desc())
        )
        return list(result.scalars().all())

    async def get_previous_tournament(self, tournament: Tournament) -> Optional[Tournament]:
        """Tournament with the latest deadline strictly before this one's."""
        result = await self._execute(
            select(Tournament)
            .where(Tournament.deadline < tournament.deadline)
            .order_by(Tournament.deadline.desc(), Tournament.tournament_id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def add_tournament(self, tournament_id: str, name: str, deadline: str, status: str = "open") -> Tournament:
        if await self.get_tournament(tournament_id):
            raise Conflict(f"Tournament {tournament_id} already exists")
        t = Tournament(
            tournament_id=tournament_id,
            name=name,
            deadline=normalize_deadline(deadline),
            status=status,
        )
        self.session.add(t)
        await self._flush()
        return t

    async def update_tournament(
        self,
        tournament: Tournament,
        name: Optional[str] = None,
        deadline: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tournament:
        if name is not None:
            tournament.name = name
        if deadline is not None:
            tournament.deadline = normalize_deadline(deadline)
        if status is not None:
            tournament.status = status
        await self._flush()
        return tournament

    # --- Lineups ---

    async def get_lineup(self, tournament_id: str, team_id: int) -> list[LineupEntry]:
        result = await self._execute(
            select(LineupEntry)
            .where(LineupEntry.tournament_id == tournament_id, LineupEntry.team_id == team_id)
            .order_by(LineupEntry.slot)
        )
        return list(result.scalars().all())

    async def get_lineup_entry(self, tournament_id: str, team_id: int, slot: int) -> Optional[LineupEntry]:
        return await self._get(LineupEntry, (tournament_id, team_id, slot))

    async def get_tournament_lineups(self, tournament_id: str) -> list[LineupEntry]:
        result = await self._execute(
            select(LineupEntry)
            .where(LineupEntry.tournament_id == tournament_id)
            .order_by(LineupEntry.team_id, LineupEntry.slot)
        )
        return list(result.scalars().all())

    async def team_ids_with_lineup(self, tournament_id: str) -> set[int]:
        result = await self._execute(
            select(LineupEntry.team_id).where(LineupEntry.tournament_id == tournament_id).distinct()
        )
        return {row[0] for row in result.all()}

    async def get_points(self, tournament_id: str, team_ids: Iterable[int]) -> dict[tuple[int, int], Optional[int]]:
        """(team_id, slot) -> fedex_points for the given teams' rows in one tournament."""
        result = await self._execute(
            select(LineupEntry.team_id, LineupEntry.slot, LineupEntry.fedex_points).where(
                LineupEntry.tournament_id == tournament_id,
                LineupEntry.team_id.in_(set(team_ids)),
            )
        )
        return {(team_id, slot): points for team_id, slot, points in result.all()}

    async def insert_lineup(
        self,
        tournament_id: str,
        team_id: int,
        slots: Iterable[int],
        fedex_points: Optional[int] = None,
        admin_note: Optional[str] = None,
    ) -> None:
        self.session.add_all(
            LineupEntry(
                tournament_id=tournament_id,
                team_id=team_id,
                slot=slot,
                fedex_points=fedex_points,
                admin_note=admin_note,
            )
            for slot in slots
        )
        await self._flush()

    async def replace_lineup(self, tournament_id: str, team_id: int, slots: Iterable[int]) -> None:
        """Delete the team's rows for the tournament, then insert unscored rows for slots."""
        await self._execute(
            delete(LineupEntry).where(
                LineupEntry.tournament_id == tournament_id,
                LineupEntry.team_id == team_id,
            )
        )
        await self._flush()
        await self.insert_lineup(tournament_id, team_id, slots)

    async def delete_lineup_entry(self, tournament_id: str, team_id: int, slot: int) -> None:
        await self._expect_one(
            delete(LineupEntry).where(
                LineupEntry.tournament_id == tournament_id,
                LineupEntry.team_id == team_id,
                LineupEntry.slot == slot,
            ),
            "lineup",
        )
        await self._flush()

    async def set_points(self, tournament_id: str, team_id: int, slot: int, fedex_points: int) -> None:
        await self._expect_one(
            update(LineupEntry)
            .where(
                LineupEntry.tournament_id == tournament_id,
                LineupEntry.team_id == team_id,
                LineupEntry.slot == slot,
            )
            .values(fedex_points=fedex_points),
            "lineup",
        )

    # --- Standings ---

    async def recalculate_standings(self) -> dict[int, int]:
        """Full recompute of every team's total from all lineup rows (null points count as 0)."""
        result = await self._execute(
            select(Team.team_id, func.coalesce(func.sum(LineupEntry.fedex_points), 0))
            .outerjoin(LineupEntry, LineupEntry.team_id == Team.team_id)
            .group_by(Team.team_id)
        )
        totals = {team_id: int(total) for team_id, total in result.all()}
        existing = await self._execute(select(Standing))
        standings = {s.team_id: s for s in existing.scalars().all()}
        for team_id, total in totals.items():
            if team_id in standings:
                standings[team_id].total_points = total
            else:
                self.session.add(Standing(team_id=team_id, total_points=total))
        await self._flush()
        return totals

    async def list_standings(self) -> list[tuple[Team, int]]:
        """(team, cached total) pairs, highest total first."""
        total = func.coalesce(Standing.total_points, 0)
        result = await self._execute(
            select(Team, total)
            .outerjoin(Standing, Standing.team_id == Team.team_id)
            .order_by(total.desc(), Team.team_id)
        )
        return [(team, int(points)) for team, points in result.all()]

    # --- Audit ---

    async def add_waiver_log(self, team_id: int, dropped_golfer: str, added_golfer: str, slot: int) -> WaiverLogEntry:
        entry = WaiverLogEntry(
            timestamp=utc_timestamp(),
            team_id=team_id,
            dropped_golfer=dropped_golfer,
            added_golfer=added_golfer,
            slot=slot,
        )
        self.session.add(entry)
        await self._flush()
        return entry

    async def add_admin_adjustment(self, **fields) -> AdminAdjustment:
        entry = AdminAdjustment(timestamp=utc_timestamp(), **fields)
        self.session.add(entry)
        await self._flush()
        return entry

    async def list_admin_adjustments(self, tournament_id: Optional[str] = None) -> list[AdminAdjustment]:
        q = select(AdminAdjustment).order_by(AdminAdjustment.id)
        if tournament_id is not None:
            q = q.where(AdminAdjustment.tournament_id == tournament_id)
        result = await self._execute(q)
        return list(result.scalars().all())

    async def list_waiver_log(self, team_id: Optional[int] = None) -> list[WaiverLogEntry]:
        q = select(WaiverLogEntry).order_by(WaiverLogEntry.id)
        if team_id is not None:
            q = q.where(WaiverLogEntry.team_id == team_id)
        result = await self._execute(q)
        return list(result.scalars().all())

    # --- Config ---

    async def get_config_value(self, key: str) -> Optional[str]:
        row = await self._get(LeagueConfig, key)
        return row.value if row else None

    async def set_config_value(self, key: str, value: str) -> None:
        row = await self._get(LeagueConfig, key)
        if row:
            row.value = value
        else:
            self.session.add(LeagueConfig(key=key, value=value))
        await self._flush()
