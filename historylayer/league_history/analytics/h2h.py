"""Head-to-head records between two owners across seasons."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from ..schema.models import Season
from .playoffs import DataMode, get_playoff_week_start, include_week, is_playoff_week
from .records import Result, determine_matchup_result
from .weeks import is_week_completed

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore


@dataclass
class H2HGame:
    year: int
    week: int
    team1_points: float
    team2_points: float
    result: Result
    is_playoff: bool = False


@dataclass
class H2HStreak:
    result: Optional[Result]
    count: int


@dataclass
class H2HRecord:
    team1_wins: int = 0
    team2_wins: int = 0
    ties: int = 0
    team1_avg_points: float = 0.0
    team2_avg_points: float = 0.0
    games: list[H2HGame] = field(default_factory=list)
    streak: Optional[H2HStreak] = None

    @property
    def total_games(self) -> int:
        return self.team1_wins + self.team2_wins + self.ties


def get_h2h_record_for_season(
    season: Season,
    team1_owner_id: str | Iterable[str],
    team2_owner_id: str | Iterable[str],
    mode: DataMode = DataMode.REGULAR,
) -> list[H2HGame]:
    """Games the two owners actually played against each other in one season."""
    roster1 = season.roster_for_owner(team1_owner_id)
    roster2 = season.roster_for_owner(team2_owner_id)
    if roster1 is None or roster2 is None or roster1.roster_id == roster2.roster_id:
        return []

    start = get_playoff_week_start(season)
    games: list[H2HGame] = []
    for week in season.weeks():
        if not is_week_completed(week, season.league):
            continue
        matchup1 = season.matchup_for(week, roster1.roster_id)
        matchup2 = season.matchup_for(week, roster2.roster_id)
        if matchup1 is None or matchup2 is None:
            continue
        if matchup1.matchup_id is None or matchup1.matchup_id != matchup2.matchup_id:
            continue
        if not include_week(matchup1, season, week, mode):
            continue
        games.append(
            H2HGame(
                year=season.year,
                week=week,
                team1_points=matchup1.points,
                team2_points=matchup2.points,
                result=determine_matchup_result(matchup1.points, matchup2.points),
                is_playoff=is_playoff_week(week, start),
            )
        )
    return games


def calculate_h2h_streak(games: Iterable[H2HGame]) -> H2HStreak:
    """Run of identical results counting back from the most recent game."""
    ordered = sorted(games, key=lambda game: (game.year, game.week), reverse=True)
    if not ordered:
        return H2HStreak(result=None, count=0)
    latest = ordered[0].result
    count = 0
    for game in ordered:
        if game.result != latest:
            break
        count += 1
    return H2HStreak(result=latest, count=count)


def get_all_time_h2h_record(
    store: "SeasonStore",
    team1_owner_id: str | Iterable[str],
    team2_owner_id: str | Iterable[str],
    *,
    years: Optional[Iterable[int]] = None,
    mode: DataMode | str = DataMode.REGULAR,
    include_games: bool = False,
) -> H2HRecord:
    mode = DataMode.parse(mode)
    team1 = team1_owner_id if isinstance(team1_owner_id, str) else tuple(team1_owner_id)
    team2 = team2_owner_id if isinstance(team2_owner_id, str) else tuple(team2_owner_id)

    games: list[H2HGame] = []
    for season in store.seasons(years):
        games.extend(get_h2h_record_for_season(season, team1, team2, mode))

    record = H2HRecord()
    team1_total = 0.0
    team2_total = 0.0
    for game in games:
        if game.result == "W":
            record.team1_wins += 1
        elif game.result == "L":
            record.team2_wins += 1
        else:
            record.ties += 1
        team1_total += game.team1_points
        team2_total += game.team2_points

    if games:
        record.team1_avg_points = round(team1_total / len(games), 2)
        record.team2_avg_points = round(team2_total / len(games), 2)
    if include_games:
        record.games = games
        record.streak = calculate_h2h_streak(games)
    return record


def get_h2h_record_with_games(
    store: "SeasonStore",
    team1_owner_id: str | Iterable[str],
    team2_owner_id: str | Iterable[str],
    *,
    years: Optional[Iterable[int]] = None,
    mode: DataMode | str = DataMode.REGULAR,
) -> H2HRecord:
    return get_all_time_h2h_record(
        store, team1_owner_id, team2_owner_id, years=years, mode=mode, include_games=True
    )


def get_h2h_matrix(
    store: "SeasonStore",
    owner_ids: Optional[Iterable[str]] = None,
    *,
    years: Optional[Iterable[int]] = None,
    mode: DataMode | str = DataMode.REGULAR,
) -> dict[str, dict[str, H2HRecord]]:
    """Pairwise records keyed ``[owner][opponent]`` from the row owner's side."""
    seasons = store.seasons(years)
    if owner_ids is None:
        ordered: list[str] = []
        for season in seasons:
            for roster in season.rosters:
                if roster.owner_id and roster.owner_id not in ordered:
                    ordered.append(roster.owner_id)
        owner_ids = ordered
    owners = list(owner_ids)
    year_list = [season.year for season in seasons]
    matrix: dict[str, dict[str, H2HRecord]] = {}
    for owner in owners:
        matrix[owner] = {}
        for opponent in owners:
            if opponent == owner:
                continue
            matrix[owner][opponent] = get_all_time_h2h_record(
                store, owner, opponent, years=year_list, mode=mode
            )
    return matrix
