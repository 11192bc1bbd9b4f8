"""Tests for tournament administration and the lineup board."""
import pytest

from league.errors import Conflict, InvalidInput, NotFound
from league.services.tournaments import create_tournament, tournament_board, update_tournament


async def test_create_tournament(store, fresh):
    t = await create_tournament(store, "T004", "Pebble Beach", "2099-02-12 08:00")

    assert t.status == "open"
    async with fresh() as s:
        stored = await s.get_tournament("T004")
    assert stored.deadline == "2099-02-12T08:00:00"


@pytest.mark.parametrize("status", ["Open", "paused", ""])
async def test_create_rejects_unknown_status(store, fresh, status):
    with pytest.raises(InvalidInput) as exc:
        await create_tournament(store, "T004", "Pebble Beach", "2099-02-12T08:00:00", status)
    assert exc.value.reason == "invalid_input"

    async with fresh() as s:
        assert await s.get_tournament("T004") is None


async def test_create_rejects_bad_deadline(store):
    with pytest.raises(InvalidInput):
        await create_tournament(store, "T004", "Pebble Beach", "soon")


async def test_create_duplicate(store):
    with pytest.raises(Conflict):
        await create_tournament(store, "T001", "Again", "2099-02-12")


async def test_update_status(store, fresh):
    await update_tournament(store, "T003", status="locked")
    async with fresh() as s:
        assert (await s.get_tournament("T003")).status == "locked"


async def test_update_rejects_unknown_status(store, fresh):
    with pytest.raises(InvalidInput):
        await update_tournament(store, "T003", status="paused")
    async with fresh() as s:
        assert (await s.get_tournament("T003")).status == "open"


async def test_update_unknown_tournament(store):
    with pytest.raises(NotFound):
        await update_tournament(store, "T999", name="Nowhere")


async def test_board(store):
    tournament, boards = await tournament_board(store, "T001")

    assert tournament.name == "The Sentry"
    team1 = boards[0]
    assert [e.golfer_name for e in team1.lineup] == [
        "Scottie Scheffler",
        "Rory McIlroy",
        "Collin Morikawa",
        "Ludvig Aberg",
    ]
    assert team1.total_points == 100
    assert boards[1].total_points == 5
