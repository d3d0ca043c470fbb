import json
from pathlib import Path

import pytest

from historylayer.league_history.store import SeasonStore, build_season
from historylayer.league_history.normalize import normalize_managers

# Slot order matches LINEUP_SLOTS; the FLEX starter (index 6) is a WR.
SLOT_POSITIONS = ("QB", "RB", "RB", "WR", "WR", "TE", "WR", "K", "DEF")
DEFAULT_QB_POINTS = 15.0
DEFAULT_SLOT_POINTS = 5.0


def player_id(roster_id: int, slot: int) -> str:
    return f"{roster_id}{slot:02d}"


def matchup_row(roster_id, matchup_id, total, **overrides):
    """Raw Sleeper matchup with nine starters summing to ``total``.

    Overrides are keyed ``s<index>`` (e.g. ``s0=27.4`` for the QB); the DEF
    slot absorbs whatever is left.
    """
    points = [DEFAULT_QB_POINTS] + [DEFAULT_SLOT_POINTS] * 7
    for key, value in overrides.items():
        points[int(key[1:])] = value
    points.append(round(total - sum(points), 2))
    starters = [player_id(roster_id, slot) for slot in range(9)]
    return {
        "roster_id": roster_id,
        "matchup_id": matchup_id,
        "points": total,
        "starters": starters,
        "starters_points": points,
        "players": starters,
        "players_points": dict(zip(starters, points)),
    }


def roster_row(roster_id, owner_id, wins, losses, ties, fpts, fpts_against):
    return {
        "roster_id": roster_id,
        "owner_id": owner_id,
        "settings": {
            "wins": wins,
            "losses": losses,
            "ties": ties,
            "fpts": int(fpts),
            "fpts_decimal": round((fpts - int(fpts)) * 100),
            "fpts_against": int(fpts_against),
            "fpts_against_decimal": round((fpts_against - int(fpts_against)) * 100),
        },
    }


def player_directory(roster_ids=(1, 2, 3, 4)):
    players = {}
    for roster_id in roster_ids:
        for slot, position in enumerate(SLOT_POSITIONS):
            pid = player_id(roster_id, slot)
            players[pid] = {
                "player_id": pid,
                "first_name": f"Team{roster_id}",
                "last_name": f"{position}{slot}",
                "position": position,
            }
    return players


def league_row(league_id, season, *, playoff_week_start, playoff_teams=2, status="complete", **settings):
    return {
        "league_id": league_id,
        "season": str(season),
        "name": "Test League",
        "status": status,
        "total_rosters": 4,
        "settings": {
            "playoff_week_start": playoff_week_start,
            "playoff_teams": playoff_teams,
            **settings,
        },
        "roster_positions": list(("QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "K", "DEF")),
    }


DAY_MS = 86_400_000
# 2023-08-15T12:00Z and 2023-08-20T18:00Z, Sleeper millisecond timestamps.
AUG_15_2023 = 1_692_100_800_000
DRAFT_START_2023 = 1_692_554_400_000


def trade_row(transaction_id, leg, created, roster_ids, *, status="complete", **moves):
    return {
        "transaction_id": transaction_id,
        "type": "trade",
        "status": status,
        "leg": leg,
        "created": created,
        "roster_ids": roster_ids,
        "adds": moves.get("adds"),
        "drops": moves.get("drops"),
        "draft_picks": moves.get("draft_picks", []),
        "waiver_budget": moves.get("waiver_budget", []),
    }


USERS = [
    {"user_id": "u1", "display_name": "alice_ff", "metadata": {"team_name": "Alice's Aces"}},
    {"user_id": "u2", "display_name": "bob_ff", "metadata": {"team_name": "Bob's Bombers"}},
    {"user_id": "u3", "display_name": "carol_ff"},
    {"user_id": "u4", "display_name": "dave_ff"},
]

MANAGERS = [
    {"id": "m1", "name": "Alice", "teamName": "Aces", "sleeper": {"id": "u1", "display_name": "alice_ff"}},
    {"id": "m2", "name": "Bob", "sleeper": {"id": "u2", "display_name": "bob_ff"}},
    {"id": "m3", "name": "Carol", "sleeper": {"id": "u3", "display_name": "carol_ff"}},
    {"id": "m4", "name": "Dave", "sleeper": {"id": "u4", "display_name": "dave_ff"}},
    {"id": "m5", "name": "Erin", "sleeper": {"id": "u5", "display_name": "erin_ff"}},
]


def season_2022_payloads():
    """Two regular weeks, championship in week 3.

    Roster 2 belongs to u1 and roster 1 to u2 this year.
    Final regular records: r2 2-0, r1 1-1, r4 1-1, r3 0-2.
    """
    return {
        "league": league_row("L2022", 2022, playoff_week_start=3),
        "users": USERS,
        "rosters": [
            roster_row(1, "u2", 1, 1, 0, 205.0, 210.0),
            roster_row(2, "u1", 2, 0, 0, 230.0, 180.0),
            roster_row(3, "u3", 0, 2, 0, 170.0, 215.0),
            roster_row(4, "u4", 1, 1, 0, 195.0, 195.0),
        ],
        "matchups": {
            1: [
                matchup_row(1, 1, 100.0),
                matchup_row(2, 1, 110.0),
                matchup_row(3, 2, 90.0),
                matchup_row(4, 2, 95.0),
            ],
            2: [
                matchup_row(2, 1, 120.0),
                matchup_row(3, 1, 80.0),
                matchup_row(1, 2, 105.0),
                matchup_row(4, 2, 100.0),
            ],
            3: [
                matchup_row(2, 1, 100.0),
                matchup_row(4, 1, 110.0),
                matchup_row(1, 2, 90.0),
                matchup_row(3, 2, 85.0),
            ],
        },
        "winners_bracket": [
            {"r": 1, "m": 1, "t1": 2, "t2": 4, "w": 4, "l": 2, "p": 1},
        ],
        "losers_bracket": [
            {"r": 1, "m": 2, "t1": 1, "t2": 3, "w": 1, "l": 3, "p": 5},
        ],
        "draft": {"draft_id": "D2022", "season": "2022", "type": "snake", "settings": {"rounds": 2, "teams": 4}},
        "picks": [
            {"round": 1, "pick_no": 2, "player_id": "100", "picked_by": "u1", "roster_id": 2, "draft_slot": 2,
             "metadata": {"first_name": "Team1", "last_name": "QB0", "position": "QB"}},
            {"round": 1, "pick_no": 1, "player_id": "200", "picked_by": "u2", "roster_id": 1, "draft_slot": 1,
             "metadata": {"first_name": "Team2", "last_name": "QB0", "position": "QB"}},
        ],
        "players": player_directory(),
        "transactions": {
            2: [
                trade_row("T2022-2", 2, AUG_15_2023 - 300 * DAY_MS, [2, 1], adds={"104": 2}, drops={"104": 1}),
            ],
        },
    }


def season_2023_payloads():
    """Three regular weeks, playoffs in week 4.

    Regular records: r4 2-0-1, r1 2-1, r2 1-1-1, r3 0-3.
    Week 4 holds the championship (r4 beats r1) and a third-place game
    (r2 beats r3) in the winners bracket.
    """
    return {
        "league": league_row("L2023", 2023, playoff_week_start=4),
        "users": USERS,
        "rosters": [
            roster_row(1, "u1", 2, 1, 0, 295.0, 290.0),
            roster_row(2, "u2", 1, 1, 1, 290.0, 255.0),
            roster_row(3, "u3", 0, 3, 0, 210.0, 335.0),
            roster_row(4, "u4", 2, 0, 1, 345.0, 260.0),
        ],
        "matchups": {
            1: [
                matchup_row(1, 1, 100.0, s0=27.4),
                matchup_row(2, 1, 90.0),
                matchup_row(3, 2, 80.0),
                matchup_row(4, 2, 120.0, s1=16.0, s2=18.0),
            ],
            2: [
                matchup_row(1, 1, 110.0),
                matchup_row(3, 1, 70.0),
                matchup_row(2, 2, 95.0, s1=20.0),
                matchup_row(4, 2, 95.0, s0=31.0),
            ],
            3: [
                matchup_row(1, 1, 85.0, s0=25.0),
                matchup_row(4, 1, 130.0),
                matchup_row(2, 2, 105.0),
                matchup_row(3, 2, 60.0),
            ],
            4: [
                matchup_row(4, 1, 140.0, s0=26.0),
                matchup_row(1, 1, 100.0),
                matchup_row(2, 2, 90.0),
                matchup_row(3, 2, 80.0),
            ],
        },
        "winners_bracket": [
            {"r": 1, "m": 1, "t1": 4, "t2": 1, "w": 4, "l": 1, "p": 1},
            {"r": 1, "m": 2, "t1": 2, "t2": 3, "w": 2, "l": 3, "p": 3},
        ],
        "losers_bracket": [],
        "draft": {
            "draft_id": "D2023",
            "season": "2023",
            "type": "snake",
            "settings": {"rounds": 2, "teams": 4},
            "start_time": DRAFT_START_2023,
            "slot_to_roster_id": {"1": 1, "2": 2, "3": 3, "4": 4},
        },
        "picks": [
            {"round": 1, "pick_no": 1, "player_id": "100", "picked_by": "u1", "roster_id": 1, "draft_slot": 1,
             "metadata": {"first_name": "Team1", "last_name": "QB0", "position": "QB"}},
            {"round": 2, "pick_no": 8, "player_id": "103", "picked_by": "u1", "roster_id": 1, "draft_slot": 1,
             "metadata": {"first_name": "Team1", "last_name": "WR3", "position": "WR"}},
        ],
        "players": player_directory(),
        "transactions": {
            1: [
                trade_row(
                    "T2023-1", 1, AUG_15_2023, [1, 2],
                    adds={"104": 2}, drops={"104": 1},
                    draft_picks=[{"round": 1, "season": "2024", "roster_id": 2, "owner_id": 1, "previous_owner_id": 2}],
                ),
                {"transaction_id": "W2023-1", "type": "waiver", "status": "complete", "leg": 1,
                 "created": AUG_15_2023 + 1000, "roster_ids": [3], "adds": {"999": 3}},
            ],
            3: [
                trade_row(
                    "T2023-3", 3, AUG_15_2023 + 30 * DAY_MS, [3, 4],
                    adds={"300": 4, "400": 3}, drops={"300": 3, "400": 4},
                    waiver_budget=[{"amount": 10, "sender": 4, "receiver": 3}],
                ),
                trade_row("T2023-X", 3, AUG_15_2023 + 31 * DAY_MS, [1, 3], status="failed"),
            ],
        },
    }


def in_progress_payloads():
    """Four regular weeks with two scored; playoffs start in week 5.

    After week 2: r1 2-0, r2 1-1, r3 1-1, r4 0-2.
    Remaining: week 3 r1-r4 (m1), r2-r3 (m2); week 4 r1-r2 (m1), r3-r4 (m2).
    """
    unplayed = lambda roster_id, matchup_id: {  # noqa: E731
        "roster_id": roster_id,
        "matchup_id": matchup_id,
        "points": 0,
        "starters": [],
        "starters_points": [],
    }
    return {
        "league": league_row("L2024", 2024, playoff_week_start=5, status="in_season", leg=3),
        "users": USERS,
        "rosters": [
            roster_row(1, "u1", 2, 0, 0, 235.0, 205.0),
            roster_row(2, "u2", 1, 1, 0, 200.0, 215.0),
            roster_row(3, "u3", 1, 1, 0, 215.0, 205.0),
            roster_row(4, "u4", 0, 2, 0, 185.0, 210.0),
        ],
        "matchups": {
            1: [
                matchup_row(1, 1, 120.0),
                matchup_row(2, 1, 100.0),
                matchup_row(3, 2, 110.0),
                matchup_row(4, 2, 90.0),
            ],
            2: [
                matchup_row(1, 1, 115.0),
                matchup_row(3, 1, 105.0),
                matchup_row(2, 2, 100.0),
                matchup_row(4, 2, 95.0),
            ],
            3: [unplayed(1, 1), unplayed(4, 1), unplayed(2, 2), unplayed(3, 2)],
            4: [unplayed(1, 1), unplayed(2, 1), unplayed(3, 2), unplayed(4, 2)],
        },
        "players": player_directory(),
    }


@pytest.fixture
def season_2022():
    return build_season(2022, **season_2022_payloads())


@pytest.fixture
def season_2023():
    return build_season(2023, **season_2023_payloads())


@pytest.fixture
def in_progress_season():
    return build_season(2024, **in_progress_payloads())


@pytest.fixture
def store(season_2022, season_2023) -> SeasonStore:
    return SeasonStore(
        [season_2022, season_2023],
        managers=normalize_managers(MANAGERS),
        players={},
    )


@pytest.fixture
def history_dir(tmp_path: Path) -> Path:
    """Write the 2022 and 2023 fixtures as an on-disk export tree."""

    def _dump(path: Path, payload) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    for year, payloads in ((2022, season_2022_payloads()), (2023, season_2023_payloads())):
        year_dir = tmp_path / str(year)
        _dump(year_dir / "league.json", payloads["league"])
        _dump(year_dir / "users.json", payloads["users"])
        _dump(year_dir / "rosters.json", payloads["rosters"])
        _dump(year_dir / "winners_bracket.json", payloads["winners_bracket"])
        _dump(year_dir / "losers_bracket.json", payloads["losers_bracket"])
        _dump(year_dir / "draft.json", payloads["draft"])
        _dump(year_dir / "picks.json", payloads["picks"])
        _dump(year_dir / "players.json", payloads["players"])
        _dump(year_dir / "transactions.json", payloads["transactions"])
        for week, rows in payloads["matchups"].items():
            _dump(year_dir / "matchups" / f"{week}.json", rows)
    _dump(tmp_path / "managers.json", MANAGERS)
    return tmp_path


@pytest.fixture
def live_store(in_progress_season) -> SeasonStore:
    """Only the in-progress season: weeks 3 and 4 are still unplayed."""
    return SeasonStore(
        [in_progress_season],
        managers=normalize_managers(MANAGERS),
        players={},
    )
