import pytest

from historylayer.league_history.normalize.rosters import normalize_rosters


def test_normalize_rosters_combines_decimal_points():
    raw = [
        {
            "roster_id": 1,
            "owner_id": "u1",
            "players": ["100", None, "101"],
            "settings": {
                "wins": 9,
                "losses": 4,
                "ties": 1,
                "fpts": 1543,
                "fpts_decimal": 27,
                "fpts_against": 1402,
                "fpts_against_decimal": 5,
                "division": 2,
            },
        }
    ]
    roster = normalize_rosters(raw)[0]
    assert roster.roster_id == 1
    assert roster.owner_id == "u1"
    assert (roster.wins, roster.losses, roster.ties) == (9, 4, 1)
    assert roster.games_played == 14
    assert roster.points_for == pytest.approx(1543.27)
    assert roster.points_against == pytest.approx(1402.05)
    assert roster.division == 2
    assert roster.players == ("100", "101")


def test_normalize_rosters_handles_missing_settings():
    roster = normalize_rosters([{"roster_id": 5, "owner_id": None}])[0]
    assert roster.owner_id is None
    assert (roster.wins, roster.losses, roster.ties) == (0, 0, 0)
    assert roster.points_for == 0.0
    assert roster.division is None


def test_normalize_rosters_skips_rows_without_roster_id():
    assert normalize_rosters([{"owner_id": "u1"}]) == []
