from historylayer.league_history.normalize.matchups import normalize_matchups


def test_normalize_matchups_keeps_empty_starter_slots():
    raw = [
        {
            "roster_id": 1,
            "matchup_id": 4,
            "points": 101.5,
            "starters": ["100", "0", "102"],
            "starters_points": [20.5, 0, "bad"],
            "players": ["100", "102", "0", "103"],
            "players_points": {"100": 20.5, "102": 7, "103": "x"},
        }
    ]
    matchup = normalize_matchups(raw)[0]
    assert matchup.matchup_id == 4
    assert matchup.points == 101.5
    assert matchup.starters == ("100", "0", "102")
    assert matchup.starters_points == (20.5, 0.0, 0.0)
    assert matchup.players == ("100", "102", "103")
    assert matchup.players_points == {"100": 20.5, "102": 7.0}


def test_starter_points_skips_empty_slots_and_keeps_index():
    raw = [
        {
            "roster_id": 2,
            "matchup_id": 1,
            "starters": ["200", "0", "202"],
            "starters_points": [18.0, 0.0, 9.5],
        }
    ]
    matchup = normalize_matchups(raw)[0]
    assert matchup.starter_points() == [(0, "200", 18.0), (2, "202", 9.5)]


def test_normalize_matchups_bye_and_unmatched_players():
    raw = [
        {
            "roster_id": 3,
            "matchup_id": None,
            "points": None,
            "unmatched_players": {"Jerry Rice": "WR"},
        }
    ]
    matchup = normalize_matchups(raw)[0]
    assert matchup.matchup_id is None
    assert matchup.points == 0.0
    assert matchup.unmatched_players == {"Jerry Rice": "WR"}
