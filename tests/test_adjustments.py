"""Tests for commissioner lineup adjustments."""
import pytest

from league.errors import (
    Conflict,
    InvalidSelection,
    NotFound,
    SelectionError,
    SlotExhausted,
    StorageError,
    Unauthorized,
)
from league.services.adjustments import adjust_lineup
from league.services.lineups import submit_lineup
from league.services.results import enter_results
from league.services.waivers import claim_waiver

COMMISH = "commish@example.com"


@pytest.fixture
async def scored(store, now):
    """Team 1 played [1, 3, 4, 5] in T002; slot 3 scored 2 points."""
    await submit_lineup(store, 1, "T002", [1, 3, 4, 5], now=now)
    await enter_results(store, "T002", [(1, 1, 10), (1, 3, 2), (1, 4, 6), (1, 5, 8)])


async def snapshot(fresh):
    async with fresh() as s:
        return {
            "usage": {r.slot: r.times_used for r in await s.get_roster(1)},
            "lineup": {e.slot: (e.fedex_points, e.admin_note) for e in await s.get_lineup("T002", 1)},
            "audit": len(await s.list_admin_adjustments()),
            "standings": {team.team_id: total for team, total in await s.list_standings()},
        }


async def test_swap_withdrawn_golfer(store, fresh, scored, check_standings):
    before = await snapshot(fresh)
    assert before["usage"][3] == 1
    assert before["usage"][6] == 4

    result = await adjust_lineup(store, "T002", 1, 3, 6, 5, "WD before round 1", COMMISH)

    after = await snapshot(fresh)
    assert after["usage"][3] == before["usage"][3] - 1
    assert after["usage"][6] == before["usage"][6] + 1
    assert 3 not in after["lineup"]
    assert after["lineup"][6] == (5, "Admin adjustment: WD before round 1")
    assert after["standings"][1] == before["standings"][1] + 3
    assert result.total_points == after["standings"][1]
    assert result.old_points == 2
    assert result.message == "Lineup adjusted: slot 3 -> slot 6 with 5 points"
    await check_standings()

    async with fresh() as s:
        [row] = await s.list_admin_adjustments("T002")
    assert (row.team_id, row.old_slot, row.new_slot, row.old_points, row.new_points) == (1, 3, 6, 2, 5)
    assert row.admin_email == COMMISH
    assert row.note == "WD before round 1"


async def test_unscored_old_slot_gives_nothing_back(store, fresh, now):
    await submit_lineup(store, 1, "T002", [1, 3], now=now)

    await adjust_lineup(store, "T002", 1, 3, 6, 4, None, COMMISH)

    after = await snapshot(fresh)
    assert after["usage"][3] == 0
    assert after["usage"][6] == 5
    assert after["lineup"][6] == (4, "Admin adjustment")


async def test_commissioner_email_is_case_insensitive(store, scored):
    result = await adjust_lineup(store, "T002", 1, 3, 6, 5, None, "  BOSS@example.com ")
    assert result.new_slot == 6


async def test_non_commissioner_is_refused(store, fresh, scored):
    before = await snapshot(fresh)
    with pytest.raises(Unauthorized):
        await adjust_lineup(store, "T002", 1, 3, 6, 5, None, "owner1@example.com")
    assert await snapshot(fresh) == before


async def test_new_slot_not_on_roster(store, fresh, scored):
    before = await snapshot(fresh)
    with pytest.raises(InvalidSelection) as exc:
        await adjust_lineup(store, "T002", 1, 3, 9, 5, None, COMMISH)
    assert exc.value.code == SelectionError.SLOT_NOT_ON_ROSTER
    assert await snapshot(fresh) == before


async def test_new_slot_exhausted(store, fresh, scored):
    before = await snapshot(fresh)
    with pytest.raises(SlotExhausted):
        await adjust_lineup(store, "T002", 1, 3, 2, 5, None, COMMISH)
    assert await snapshot(fresh) == before


async def test_old_slot_not_in_lineup(store, scored):
    with pytest.raises(NotFound):
        await adjust_lineup(store, "T002", 1, 6, 3, 5, None, COMMISH)


async def test_new_slot_already_in_lineup(store, fresh, scored):
    before = await snapshot(fresh)
    with pytest.raises(Conflict):
        await adjust_lineup(store, "T002", 1, 3, 4, 5, None, COMMISH)
    assert await snapshot(fresh) == before


async def test_rescore_same_slot(store, fresh, scored):
    await adjust_lineup(store, "T002", 1, 3, 3, 9, "Scoring correction", COMMISH)

    after = await snapshot(fresh)
    # -1 for the scored row, +1 for the replacement
    assert after["usage"][3] == 1
    assert after["lineup"][3][0] == 9
    assert after["standings"][1] == 100 + 10 + 9 + 6 + 8


async def test_adjust_after_waiver_reset_keeps_usage_at_zero(store, fresh, now, check_standings):
    await submit_lineup(store, 1, "T002", [1, 3], now=now)
    await enter_results(store, "T002", [(1, 3, 2)])
    # Slot 3 changes hands and its counter restarts
    await claim_waiver(store, 1, drop_golfer_id=103, add_golfer_id=201, slot=3)

    result = await adjust_lineup(store, "T002", 1, 3, 6, 5, "WD", COMMISH)

    after = await snapshot(fresh)
    assert after["usage"][3] == 0
    assert after["usage"][6] == 5
    assert after["lineup"][6][0] == 5
    assert result.old_points == 2
    await check_standings()


async def test_failure_after_swap_rolls_back(store, fresh, scored, monkeypatch):
    before = await snapshot(fresh)

    async def broken_audit(**fields):
        raise StorageError("disk I/O error")

    monkeypatch.setattr(store, "add_admin_adjustment", broken_audit)

    with pytest.raises(StorageError):
        await adjust_lineup(store, "T002", 1, 3, 6, 5, None, COMMISH)

    assert await snapshot(fresh) == before
