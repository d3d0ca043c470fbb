import pytest
from pydantic import ValidationError

from historylayer.league_history.analytics.stats_explorer import (
    PRESET_FILTERS,
    PositionalScores,
    calculate_positional_stats,
    extract_positional_scores,
    matches_filter,
    parse_filter_expression,
)
from historylayer.league_history.schema.inputs import PositionalFilter


def _qb(points):
    return PositionalFilter(position="QB", operator=">=", points=points)


def test_qb_threshold_over_regular_season(store):
    stats = calculate_positional_stats(store, [_qb(25)])
    assert stats.total_matchups == 3
    assert (stats.wins, stats.losses, stats.ties) == (1, 1, 1)
    assert stats.win_percentage == pytest.approx(0.5)
    assert stats.avg_points_for == pytest.approx(93.33)
    assert stats.avg_points_against == pytest.approx(105.0)
    qb = stats.positional_breakdown["QB"]
    assert qb.avg == pytest.approx(27.8)
    assert (qb.min, qb.max) == (25.0, 31.0)


def test_single_matchup_scenario(store):
    stats = calculate_positional_stats(store, [_qb(27)], years=[2023])
    assert stats.total_matchups == 2
    sample = {(row.week, row.roster_id): row for row in stats.sample_matchups}
    week_one = sample[(1, 1)]
    assert week_one.positional_scores["QB"] == pytest.approx(27.4)
    assert week_one.result == "W"
    assert week_one.opponent_points == 90.0


def test_include_playoffs_adds_meaningful_games_only(store):
    stats = calculate_positional_stats(store, [_qb(25)], include_playoffs=True)
    assert stats.total_matchups == 4
    assert (stats.wins, stats.losses, stats.ties) == (2, 1, 1)
    assert stats.win_percentage == pytest.approx(0.625)


def test_individual_filter_with_min_count(store):
    any_rb = PositionalFilter(position="RB_INDIVIDUAL", operator=">=", points=15)
    two_rbs = PositionalFilter(position="RB_INDIVIDUAL", operator=">=", points=15, min_count=2)

    stats = calculate_positional_stats(store, [any_rb])
    assert stats.total_matchups == 2
    assert (stats.wins, stats.ties) == (1, 1)

    stats = calculate_positional_stats(store, [two_rbs])
    assert stats.total_matchups == 1
    assert stats.sample_matchups[0].roster_id == 4


def test_filters_are_combined_with_and(store):
    stats = calculate_positional_stats(
        store, [_qb(25), PositionalFilter(position="RB", operator=">", points=20)]
    )
    assert stats.total_matchups == 0
    assert stats.win_percentage == 0.0
    assert stats.positional_breakdown["QB"].avg == 0.0


def test_flex_counts_toward_real_position(store, season_2023):
    matchup = season_2023.matchup_for(1, 4)
    scores = extract_positional_scores(store, matchup, 2023)
    assert scores.totals["RB"] == pytest.approx(34.0)
    assert scores.totals["FLEX"] == pytest.approx(5.0)
    assert scores.totals["WR"] == pytest.approx(15.0)
    assert scores.individual["RB"] == [16.0, 18.0]
    assert scores.flatten()["RB_INDIVIDUAL"] == 18.0


def test_sample_limit(store):
    stats = calculate_positional_stats(store, [_qb(0)], sample_limit=1)
    assert len(stats.sample_matchups) == 1
    assert stats.total_matchups > 1


def test_matches_filter_operators():
    scores = PositionalScores()
    scores.totals["QB"] = 20.0
    scores.individual["WR"] = [12.0, 8.0]
    assert matches_filter(scores, PositionalFilter(position="QB", operator="=", points=20))
    assert matches_filter(scores, PositionalFilter(position="QB", operator="<", points=21))
    assert not matches_filter(scores, PositionalFilter(position="QB", operator=">", points=20))
    assert not matches_filter(
        scores, PositionalFilter(position="WR_INDIVIDUAL", operator=">=", points=8, min_count=3)
    )


def test_invalid_operator_is_rejected():
    with pytest.raises(ValidationError):
        PositionalFilter(position="QB", operator="!=", points=10)
    with pytest.raises(ValidationError):
        PositionalFilter(position="LB", operator=">=", points=10)


def test_parse_filter_expression():
    filters = parse_filter_expression("QB>=25, rb_individual>=15x2")
    assert [(f.position, f.operator, f.points, f.min_count) for f in filters] == [
        ("QB", ">=", 25.0, 1),
        ("RB_INDIVIDUAL", ">=", 15.0, 2),
    ]
    assert parse_filter_expression("QB 25+ Points") == PRESET_FILTERS["QB 25+ Points"]
    with pytest.raises(ValueError):
        parse_filter_expression("QB=>25")
    with pytest.raises(ValueError):
        parse_filter_expression("XX>=5")


def test_presets_cover_combined_and_high_threshold_filters(store):
    assert {
        "Any RB 15+ AND Any WR 12+",
        "RB Total 30+ AND Any RB 20+",
        "High Scoring QB (30+)",
        "Elite RB Total (35+)",
    } <= set(PRESET_FILTERS)
    combo = PRESET_FILTERS["RB Total 30+ AND Any RB 20+"]
    assert [(f.position, f.points) for f in combo] == [("RB", 30.0), ("RB_INDIVIDUAL", 20.0)]

    stats = calculate_positional_stats(store, parse_filter_expression("High Scoring QB (30+)"))
    assert stats.total_matchups == 1
    assert stats.sample_matchups[0].roster_id == 4
    assert stats.sample_matchups[0].result == "T"
