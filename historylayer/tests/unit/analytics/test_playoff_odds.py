import dataclasses

import pytest

from historylayer.league_history.analytics.playoff_odds import (
    PlayoffOddsSimulator,
    ScheduledGame,
    SimulationState,
    TeamScoringProfile,
    apply_user_scenario,
    calculate_playoff_odds,
    calculate_team_profiles,
    get_current_standings,
    get_remaining_schedule,
)
from historylayer.league_history.analytics.records import TeamRecord
from historylayer.league_history.schema.inputs import PlayoffScenario, ScenarioPick
from historylayer.league_history.schema.models import League, Roster, Season


def _by_roster(results):
    return {result.roster_id: result for result in results}


def test_current_standings_from_completed_weeks(in_progress_season):
    standings = get_current_standings(in_progress_season)
    assert (standings[1].wins, standings[1].losses) == (2, 0)
    assert (standings[4].wins, standings[4].losses) == (0, 2)
    assert standings[1].points_for == pytest.approx(235.0)


def test_team_profiles_use_sample_std(in_progress_season):
    profiles = calculate_team_profiles(in_progress_season)
    assert profiles[1].mean == pytest.approx(117.5)
    assert profiles[1].std_dev == pytest.approx(3.5355, abs=1e-4)
    assert profiles[1].games == 2


def test_team_without_games_borrows_league_profile(in_progress_season):
    season = dataclasses.replace(
        in_progress_season, rosters=in_progress_season.rosters + (Roster(roster_id=5),)
    )
    profile = calculate_team_profiles(season)[5]
    assert profile.games == 0
    assert profile.mean == pytest.approx(104.375)


def test_remaining_schedule(in_progress_season):
    games = get_remaining_schedule(in_progress_season)
    assert [(g.week, g.matchup_id, g.team1, g.team2) for g in games] == [
        (3, 1, 1, 4),
        (3, 2, 2, 3),
        (4, 1, 1, 2),
        (4, 2, 3, 4),
    ]


def test_settled_season_is_exact(season_2023):
    results = calculate_playoff_odds(season_2023, seed=1)
    assert [result.roster_id for result in results] == [4, 1, 2, 3]
    odds = _by_roster(results)
    assert odds[4].playoff_odds == 100.0
    assert odds[1].playoff_odds == 100.0
    assert odds[2].playoff_odds == 0.0
    assert odds[3].playoff_odds == 0.0
    assert odds[4].position_odds == {1: 100.0}
    assert odds[3].position_odds == {4: 100.0}


def test_season_without_regular_weeks_has_no_odds():
    season = Season(year=2025, league=League(league_id="L", season="2025", name="x"))
    assert calculate_playoff_odds(season) == []


def test_simulation_distributions_sum_correctly(in_progress_season):
    results = calculate_playoff_odds(in_progress_season, num_simulations=2000, seed=11)
    assert len(results) == 4
    assert sum(result.playoff_odds for result in results) == pytest.approx(200.0, abs=0.1)
    for result in results:
        assert sum(result.position_odds.values()) == pytest.approx(100.0, abs=0.1)
        assert 0.0 <= result.playoff_odds <= 100.0


def test_same_seed_is_reproducible(in_progress_season):
    first = calculate_playoff_odds(in_progress_season, num_simulations=500, seed=5)
    second = calculate_playoff_odds(in_progress_season, num_simulations=500, seed=5)
    assert first == second


def test_identical_teams_split_odds_evenly():
    standings = {roster_id: TeamRecord() for roster_id in (1, 2, 3, 4)}
    profiles = {
        roster_id: TeamScoringProfile(roster_id, 100.0, 15.0, 5) for roster_id in standings
    }
    games = [
        ScheduledGame(1, 1, 1, 2),
        ScheduledGame(1, 2, 3, 4),
        ScheduledGame(2, 1, 1, 3),
        ScheduledGame(2, 2, 2, 4),
        ScheduledGame(3, 1, 1, 4),
        ScheduledGame(3, 2, 2, 3),
    ]
    simulator = PlayoffOddsSimulator(
        standings, profiles, games, playoff_teams=2, num_simulations=10_000, seed=3
    )
    results = simulator.run()
    for result in results:
        assert result.playoff_odds == pytest.approx(50.0, abs=3.0)


def test_forced_picks_always_win(in_progress_season):
    scenario = PlayoffScenario(
        picks=[
            ScenarioPick(week=3, matchup_id=1, winner=1),
            ScenarioPick(week=4, matchup_id=1, winner=1),
            ScenarioPick(week=4, matchup_id=2, winner=3),
        ]
    )
    odds = _by_roster(
        calculate_playoff_odds(in_progress_season, scenario, num_simulations=1000, seed=2)
    )
    assert odds[1].position_odds == {1: 100.0}
    assert odds[1].playoff_odds == 100.0
    assert odds[4].position_odds == {4: 100.0}
    assert odds[4].playoff_odds == 0.0
    assert odds[2].playoff_odds + odds[3].playoff_odds == pytest.approx(100.0, abs=0.1)


def test_simulator_runs_once():
    simulator = PlayoffOddsSimulator(
        {1: TeamRecord(wins=1), 2: TeamRecord(losses=1)},
        {},
        [],
        playoff_teams=1,
    )
    assert simulator.state is SimulationState.NOT_STARTED
    simulator.run()
    assert simulator.state is SimulationState.COMPLETE
    with pytest.raises(RuntimeError):
        simulator.run()


def test_simulator_rejects_zero_trials():
    with pytest.raises(ValueError):
        PlayoffOddsSimulator({}, {}, [], playoff_teams=2, num_simulations=0)


def test_user_scenario_projection_with_scores(in_progress_season):
    standings = get_current_standings(in_progress_season)
    games = get_remaining_schedule(in_progress_season)
    scenario = PlayoffScenario(
        picks=[ScenarioPick(week=3, matchup_id=1, winner=4, team1_score=90, team2_score=120)]
    )
    projected = apply_user_scenario(standings, games, scenario)
    assert (projected[4].wins, projected[4].losses) == (1, 2)
    assert projected[4].points_for == pytest.approx(305.0)
    assert (projected[1].wins, projected[1].losses) == (2, 1)
    # The input standings are left untouched.
    assert standings[4].wins == 0


def test_no_odds_before_first_week_is_scored(in_progress_season):
    league = dataclasses.replace(in_progress_season.league, leg=1, last_scored_leg=None)
    season = dataclasses.replace(in_progress_season, league=league)
    standings = get_current_standings(season)
    assert all(record.wins == record.losses == record.ties == 0 for record in standings.values())
    assert len(get_remaining_schedule(season)) == 8
    assert calculate_playoff_odds(season, seed=1) == []
