from historylayer.league_history.normalize.managers import normalize_managers
from historylayer.league_history.normalize.players import normalize_players


def test_normalize_managers_collects_owner_ids():
    raw = [
        {
            "id": 7,
            "name": "Alice",
            "teamName": "Aces",
            "userId": ["legacy-1", "u1"],
            "sleeper": {"id": "u1", "display_name": "alice_ff"},
            "firstPlace": [2019, "2021", "bad"],
            "secondPlace": None,
        },
        {"name": "No id"},
    ]
    managers = normalize_managers(raw)
    assert len(managers) == 1
    manager = managers[0]
    assert manager.manager_id == "7"
    assert manager.team_name == "Aces"
    assert manager.display_name == "alice_ff"
    assert manager.owner_ids == ("u1", "legacy-1")
    assert manager.first_place == (2019, 2021)
    assert manager.second_place == ()


def test_normalize_players_accepts_mapping_and_list():
    as_mapping = normalize_players(
        {"4046": {"first_name": "Patrick", "last_name": "Mahomes", "position": "QB", "team": "KC"}}
    )
    as_list = normalize_players([{"player_id": "4046", "full_name": "Patrick Mahomes"}])
    assert as_mapping["4046"].name == "Patrick Mahomes"
    assert as_mapping["4046"].position == "QB"
    assert as_list["4046"].name == "Patrick Mahomes"
    assert as_list["4046"].position == "UNK"
