"""Pytest configuration and fixtures."""
import os

# Set test env BEFORE any imports that use config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LEAGUE_TIMEZONE"] = "America/New_York"
os.environ["COMMISSIONER_EMAILS"] = ""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from league.models import init_db, make_engine, make_session_factory
from league.store import LeagueStore
from web.api.main import create_app

GOLFERS = [
    (101, "Scottie Scheffler"),
    (102, "Rory McIlroy"),
    (103, "Xander Schauffele"),
    (104, "Collin Morikawa"),
    (105, "Ludvig Aberg"),
    (106, "Viktor Hovland"),
    (107, "Jon Rahm"),
    (108, "Patrick Cantlay"),
    (109, "Tommy Fleetwood"),
    (110, "Hideki Matsuyama"),
    (111, "Justin Thomas"),
    (112, "Jordan Spieth"),
    # Unrostered
    (201, "Sahith Theegala"),
    (202, "Max Homa"),
    (203, "Adam Scott"),
]

# Team 1 usage by slot 1..6: slot 2 is at the cap
TEAM1_USAGE = [3, 8, 0, 5, 2, 4]


async def seed_league(session_factory) -> None:
    """Two teams with six-slot rosters, three tournaments, scored T001 lineups.

    T001 (closed, 2026-01-01 noon): team 1 played [1, 2, 4, 5] for 10/20/30/40,
    team 2 played [1, 2] with only slot 1 scored (5).
    T002 (open, 2026-01-08 noon) and T003 (open, 2099) have no lineups.
    """
    async with session_factory() as session:
        store = LeagueStore(session)
        async with store.transaction():
            for golfer_id, name in GOLFERS:
                await store.add_golfer(golfer_id, name)
            await store.add_team(1, "Birdie Brigade", "owner1@example.com")
            await store.add_team(2, "Bogey Boys", "Owner2@Example.com")
            for slot, used in enumerate(TEAM1_USAGE, start=1):
                await store.add_roster_slot(1, slot, 100 + slot, used)
            for slot in range(1, 7):
                await store.add_roster_slot(2, slot, 106 + slot, 1 if slot == 1 else 0)
            await store.add_tournament("T001", "The Sentry", "2026-01-01T12:00:00", "closed")
            await store.add_tournament("T002", "Sony Open", "2026-01-08 12:00", "open")
            await store.add_tournament("T003", "The American Express", "2099-01-15T12:00:00")
            for slot, points in zip([1, 2, 4, 5], [10, 20, 30, 40]):
                await store.insert_lineup("T001", 1, [slot], fedex_points=points)
            await store.insert_lineup("T001", 2, [1], fedex_points=5)
            await store.insert_lineup("T001", 2, [2])
            await store.set_config_value("commissioner_emails", "commish@example.com, Boss@Example.com")
            await store.recalculate_standings()


@pytest.fixture
def now():
    """Fixed clock: 2026-01-05 07:00 Eastern. T001 is past its deadline, T002 is not."""
    return datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'league.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
async def league(session_factory):
    await seed_league(session_factory)


@pytest.fixture
async def store(league, session_factory):
    """Store over the seeded league."""
    async with session_factory() as session:
        yield LeagueStore(session)


@pytest.fixture
async def empty_store(session_factory):
    """Store over an empty database."""
    async with session_factory() as session:
        yield LeagueStore(session)


@pytest.fixture
def fresh(session_factory):
    """Open a second session to read what was actually committed."""

    @asynccontextmanager
    async def _open():
        async with session_factory() as session:
            yield LeagueStore(session)

    return _open


@pytest.fixture
def check_standings(fresh):
    """Assert cached standings equal the live sum of every team's points; return them."""

    async def _check() -> dict[int, int]:
        async with fresh() as s:
            expected = {t.team_id: 0 for t in await s.list_teams()}
            for t in await s.list_tournaments():
                for e in await s.get_tournament_lineups(t.tournament_id):
                    expected[e.team_id] += e.fedex_points or 0
            actual = {team.team_id: total for team, total in await s.list_standings()}
        assert actual == expected
        return actual

    return _check


@pytest.fixture
async def app(tmp_path):
    app = create_app(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    # ASGI lifespan doesn't run with httpx
    await init_db(app.state.engine)
    await seed_league(app.state.session_factory)
    yield app
    await app.state.engine.dispose()


@pytest.fixture
async def client(app):
    """Async HTTP client for testing the API."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def commish_headers():
    return {"X-User-Email": "commish@example.com"}


@pytest.fixture
def owner_headers():
    return {"X-User-Email": "owner1@example.com"}
