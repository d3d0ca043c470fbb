import json

import pytest

from historylayer.league_history import HistoryConfig, LeagueHistory


@pytest.fixture
def data(history_dir) -> LeagueHistory:
    history = LeagueHistory(
        config=HistoryConfig(data_dir=str(history_dir), simulation_trials=200, simulation_seed=9)
    )
    history.load()
    return history


def test_queries_require_load(history_dir):
    history = LeagueHistory(str(history_dir))
    with pytest.raises(RuntimeError, match="Data not loaded"):
        history.get_seasons()


def test_get_seasons(data):
    result = data.get_seasons()
    assert result["found"] is True
    assert [row["year"] for row in result["seasons"]] == [2022, 2023]
    assert result["seasons"][1]["playoff_week_start"] == 4


def test_h2h_resolves_names_and_payload_is_json_ready(data):
    result = data.get_h2h_record("Alice", "bob_ff", include_games=True)
    assert result["found"] is True
    assert result["team1"]["owner_ids"] == ["u1"]
    assert (result["team1_wins"], result["team2_wins"]) == (2, 0)
    assert len(result["games"]) == 2
    assert result["streak"] == {"result": "W", "count": 2}
    json.dumps(result)


def test_h2h_unknown_team(data):
    result = data.get_h2h_record("Alice", "Zed")
    assert result == {"found": False, "team_key": "Zed"}


def test_h2h_hides_games_unless_requested(data):
    result = data.get_h2h_record("m1", "m4", year_from=2023, data_mode="combined")
    assert result["team2_wins"] == 2
    assert "games" not in result


def test_manager_stats_lookup(data):
    result = data.get_manager_stats("alice")
    assert result["found"] is True
    assert result["manager_id"] == "m1"
    assert result["h2h_records"]["m2"]["avg_points_for"] == pytest.approx(105.0)
    assert data.get_manager_stats("nobody")["found"] is False


def test_cumulative_and_schedule_queries(data):
    standings = data.get_cumulative_standings(year_from=2023)
    assert standings["years"] == [2023]
    assert standings["standings"][0]["owner_id"] == "u4"

    matrix = data.get_schedule_comparison(2023)["matrix"]
    assert matrix[1][1] == {"wins": 2, "losses": 1, "ties": 0, "win_percentage": 0.6667}
    assert data.get_schedule_comparison(1999) == {"found": False, "year": 1999}

    all_time = data.get_all_time_schedule_comparison()
    assert all_time["matrix"]["u1"]["u1"]["wins"] == 4


def test_positional_stats_accepts_expression_or_list(data):
    from_text = data.get_positional_stats("QB>=25")
    from_list = data.get_positional_stats([{"position": "QB", "operator": ">=", "points": 25}])
    assert from_text["total_matchups"] == from_list["total_matchups"] == 3
    assert from_text["filters"][0]["position"] == "QB"
    with pytest.raises(ValueError):
        data.get_positional_stats([{"position": "QB", "operator": "~", "points": 25}])


def test_playoff_odds_settled_season_with_config_seed(data):
    result = data.get_playoff_odds(2023)
    assert result["found"] is True
    assert result["num_simulations"] == 200
    odds = {row["roster_id"]: row["playoff_odds"] for row in result["teams"]}
    assert odds == {4: 100.0, 1: 100.0, 2: 0.0, 3: 0.0}


def test_playoff_odds_picks_as_json(data):
    picks = json.dumps([{"week": 3, "matchup_id": 1, "winner": 1}])
    result = data.get_playoff_odds(2023, picks=picks)
    # Nothing remains in 2023, so the pick has no game to apply to.
    assert result["projected_records"][1] == {"wins": 2, "losses": 1, "ties": 0}


def test_best_performances(data):
    result = data.get_best_performances(year_to=2022, limit=1)
    assert result["performances"][0]["points"] == pytest.approx(70.0)


def test_trades_by_season_week_and_team(data):
    result = data.get_trades(2023)
    assert result["found"] is True
    assert [trade["transaction_id"] for trade in result["trades"]] == ["T2023-3", "T2023-1"]
    json.dumps(result)

    draft_trades = data.get_trades(2023, trade_type="draft")["trades"]
    assert draft_trades[0]["formatted_date"] == "Pre-Draft, August 15, 2023"

    assert [t["transaction_id"] for t in data.get_trades(2023, week=3)["trades"]] == ["T2023-3"]
    assert [t["transaction_id"] for t in data.get_trades(2023, team="Alice")["trades"]] == ["T2023-1"]
    # Alice held roster 2 in 2022.
    team_trade = data.get_trades(2022, team="Alice")["trades"][0]
    assert team_trade["teams"][0]["roster_id"] == 2
    assert data.get_trades(1999) == {"found": False, "year": 1999}
    assert data.get_trades(2023, team="Zed")["found"] is False


def test_trade_stats(data):
    result = data.get_trade_stats()
    assert result["found"] is True
    assert result["total_trades"] == 3
    assert result["teams"][0]["manager_name"] == "Alice"
    assert result["pairs"][0]["years"] == [2023, 2022]
    assert data.get_trade_stats(year_from=2023)["total_trades"] == 2
