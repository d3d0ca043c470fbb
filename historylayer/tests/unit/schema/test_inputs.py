import pytest
from pydantic import ValidationError

from historylayer.league_history.schema.inputs import (
    PlayoffScenario,
    PositionalFilter,
    ScenarioPick,
)


def test_positional_filter_defaults_and_helpers():
    individual = PositionalFilter(position="WR_INDIVIDUAL", operator=">", points=12)
    assert individual.min_count == 1
    assert individual.is_individual
    assert individual.base_position == "WR"

    total = PositionalFilter(position="FLEX", operator="<=", points=5)
    assert not total.is_individual
    assert total.base_position == "FLEX"


def test_positional_filter_rejects_bad_min_count():
    with pytest.raises(ValidationError):
        PositionalFilter(position="RB_INDIVIDUAL", operator=">=", points=15, min_count=0)


def test_scenario_pick_scores_are_optional_together():
    assert not ScenarioPick(week=12, matchup_id=3, winner=5).has_scores
    assert not ScenarioPick(week=12, matchup_id=3, winner=5, team1_score=100).has_scores
    assert ScenarioPick(week=12, matchup_id=3, winner=5, team1_score=100, team2_score=90).has_scores
    with pytest.raises(ValidationError):
        ScenarioPick(week=0, matchup_id=3, winner=5)
    with pytest.raises(ValidationError):
        ScenarioPick(week=12, matchup_id=3, winner=5, team1_score=-1, team2_score=90)


def test_playoff_scenario_rejects_duplicate_games():
    with pytest.raises(ValidationError):
        PlayoffScenario(
            picks=[
                {"week": 12, "matchup_id": 3, "winner": 5},
                {"week": 12, "matchup_id": 3, "winner": 6},
            ]
        )


def test_playoff_scenario_pick_lookup():
    scenario = PlayoffScenario.model_validate(
        {"picks": [{"week": 12, "matchup_id": 3, "winner": 5}]}
    )
    assert scenario.pick_for(12, 3).winner == 5
    assert scenario.pick_for(13, 3) is None
