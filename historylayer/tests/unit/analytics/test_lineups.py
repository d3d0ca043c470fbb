import pytest

from historylayer.league_history.analytics.lineups import (
    LINEUP_SLOTS,
    PlayerTotals,
    build_all_star_lineup,
    get_optimal_lineup,
    slot_accepts,
)
from historylayer.league_history.schema.models import Matchup
from historylayer.league_history.store import SeasonStore


def test_slot_accepts_flex_positions():
    assert slot_accepts("FLEX", "TE")
    assert not slot_accepts("FLEX", "QB")
    assert slot_accepts("K", "K")


def test_all_star_lineup_is_greedy_and_never_reuses_players():
    totals = [
        PlayerTotals("qb1", "QB One", "QB", 300.0, 15),
        PlayerTotals("rb1", "RB One", "RB", 250.0, 15),
        PlayerTotals("rb2", "RB Two", "RB", 200.0, 15),
        PlayerTotals("rb3", "RB Three", "RB", 190.0, 15),
        PlayerTotals("wr1", "WR One", "WR", 180.0, 15),
        PlayerTotals("te1", "TE One", "TE", 120.0, 15),
        PlayerTotals("def1", "DEF One", "DEF", 100.0, 15),
    ]
    lineup = build_all_star_lineup(totals)
    assert [slot.slot for slot in lineup] == list(LINEUP_SLOTS)
    assert [slot.player_id for slot in lineup] == [
        "qb1", "rb1", "rb2", "wr1", None, "te1", "rb3", None, "def1",
    ]
    assert lineup[0].average_points == pytest.approx(20.0)


def test_optimal_lineup_reports_bench_points():
    points = {
        "qb_a": 20.0, "qb_b": 25.0,
        "rb_a": 10.0, "rb_b": 12.0, "rb_c": 8.0,
        "wr_a": 15.0, "wr_b": 9.0, "wr_c": 7.0,
        "te_a": 6.0, "k_a": 5.0, "def_a": 4.0,
    }
    matchup = Matchup(roster_id=1, matchup_id=1, points=90.0, players_points=points)
    positions = {pid: pid.split("_")[0].upper() for pid in points}
    result = get_optimal_lineup(SeasonStore([]), matchup, position_of=positions.get)
    assert [slot.player_id for slot in result.starters] == [
        "qb_b", "rb_b", "rb_a", "wr_a", "wr_b", "te_a", "rb_c", "k_a", "def_a",
    ]
    assert result.optimal_points == pytest.approx(94.0)
    assert result.points_left_on_bench == pytest.approx(4.0)
