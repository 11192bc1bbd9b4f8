"""Tests for result entry, usage counting and standings."""
import pytest

from league.errors import Conflict, NotFound, StorageError
from league.services.lineups import submit_lineup
from league.services.results import ResultRow, enter_results, list_standings, recalculate_standings


@pytest.fixture
async def submitted(store, now):
    """Team 1 plays [1, 3, 4, 5] and team 2 plays [1, 2] in T002."""
    await submit_lineup(store, 1, "T002", [1, 3, 4, 5], now=now)
    await submit_lineup(store, 2, "T002", [1, 2], now=now)


async def usage(fresh, team_id):
    async with fresh() as s:
        return {r.slot: r.times_used for r in await s.get_roster(team_id)}


async def test_first_scoring_counts_usage(store, fresh, submitted, check_standings):
    summary = await enter_results(store, "T002", [ResultRow(1, 1, 100), ResultRow(1, 3, 50)])

    assert summary.first_time_scored == [(1, 1), (1, 3)]
    assert summary.rescored == []
    team1 = await usage(fresh, 1)
    assert team1[1] == 4
    assert team1[3] == 1
    # Submitted but not scored yet
    assert team1[4] == 5
    assert team1[5] == 2

    totals = await check_standings()
    assert totals[1] == 100 + 150
    assert summary.standings == totals


async def test_rescoring_does_not_count_usage(store, fresh, submitted, check_standings):
    await enter_results(store, "T002", [(1, 1, 100)])
    summary = await enter_results(store, "T002", [(1, 1, 120)])

    assert summary.rescored == [(1, 1)]
    assert (await usage(fresh, 1))[1] == 4
    assert (await check_standings())[1] == 100 + 120


async def test_duplicate_rows_count_once(store, fresh, submitted):
    summary = await enter_results(store, "T002", [(2, 1, 7), (2, 1, 9)])

    assert summary.first_time_scored == [(2, 1)]
    assert (await usage(fresh, 2))[1] == 2
    async with fresh() as s:
        assert (await s.get_lineup_entry("T002", 2, 1)).fedex_points == 9


async def test_scoring_unscored_slot_of_past_tournament(store, fresh, check_standings):
    # Team 2 slot 2 in T001 was never scored
    summary = await enter_results(store, "T001", [(2, 2, 12)])

    assert summary.first_time_scored == [(2, 2)]
    assert (await usage(fresh, 2))[2] == 1
    assert (await check_standings())[2] == 17


async def test_missing_lineup_row_aborts_everything(store, fresh, submitted, check_standings):
    with pytest.raises(Conflict):
        await enter_results(store, "T002", [(1, 1, 100), (1, 6, 30)])

    async with fresh() as s:
        assert (await s.get_lineup_entry("T002", 1, 1)).fedex_points is None
    assert (await usage(fresh, 1))[1] == 3
    assert await check_standings() == {1: 100, 2: 5}


async def test_unknown_tournament(store):
    with pytest.raises(NotFound):
        await enter_results(store, "T999", [(1, 1, 10)])


async def test_failure_mid_transaction_leaves_no_partial_writes(store, fresh, submitted, monkeypatch):
    async def broken_recalculate():
        raise StorageError("disk I/O error")

    monkeypatch.setattr(store, "recalculate_standings", broken_recalculate)

    with pytest.raises(StorageError):
        await enter_results(store, "T002", [(1, 1, 100), (2, 2, 40)])

    async with fresh() as s:
        assert all(e.fedex_points is None for e in await s.get_tournament_lineups("T002"))
        assert {team.team_id: total for team, total in await s.list_standings()} == {1: 100, 2: 5}
    assert (await usage(fresh, 1))[1] == 3
    assert (await usage(fresh, 2))[2] == 0


async def test_recalculate_repairs_drifted_standings(store, check_standings):
    async with store.transaction():
        await store.set_points("T001", 1, 1, 60)

    rows = await recalculate_standings(store)

    assert [(r.team_id, r.total_points) for r in rows] == [(1, 150), (2, 5)]
    assert rows[0].team_name == "Birdie Brigade"
    await check_standings()


async def test_standings_order(store, submitted):
    await enter_results(store, "T002", [(2, 1, 500)])

    rows = await list_standings(store)
    assert [r.team_id for r in rows] == [2, 1]
    assert rows[0].total_points == 505
