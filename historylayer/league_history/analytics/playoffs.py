"""Playoff structure: week boundaries, meaningful games and bracket outcomes."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from ..schema.models import BracketMatch, Matchup, Season

DEFAULT_PLAYOFF_WEEK_START = 15
DEFAULT_PLAYOFF_TEAMS = 6

ChampionshipResult = Literal["champion", "runner-up", "third-place"]


class DataMode(str, Enum):
    REGULAR = "regular"
    PLAYOFFS = "playoffs"
    COMBINED = "combined"

    @classmethod
    def parse(cls, value: "DataMode | str") -> "DataMode":
        if isinstance(value, DataMode):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown data mode {value!r}; expected one of {choices}.") from exc


def get_playoff_week_start(season: Optional[Season]) -> int:
    if season is None or not season.league.playoff_week_start:
        return DEFAULT_PLAYOFF_WEEK_START
    return season.league.playoff_week_start


def get_playoff_teams(season: Optional[Season]) -> int:
    if season is None or not season.league.playoff_teams:
        return DEFAULT_PLAYOFF_TEAMS
    return season.league.playoff_teams


def is_playoff_week(week: int, playoff_week_start: int) -> bool:
    return week >= playoff_week_start


def is_regular_season_week(week: int, playoff_week_start: int) -> bool:
    return week < playoff_week_start


def find_bracket_match(
    bracket: tuple[BracketMatch, ...], roster_id: int, round_num: int
) -> Optional[BracketMatch]:
    for match in bracket:
        if match.round == round_num and match.involves(roster_id):
            return match
    return None


def is_meaningful_playoff_game(
    matchup: Matchup,
    season: Season,
    week: int,
    playoff_week_start: Optional[int] = None,
) -> bool:
    """True for winners-bracket elimination and championship games.

    Placement games (p = 3, 5, ...) and anything only found in the losers
    bracket are consolation play and never count.
    """
    start = playoff_week_start if playoff_week_start is not None else get_playoff_week_start(season)
    match = find_bracket_match(season.winners_bracket, matchup.roster_id, week - start + 1)
    if match is None:
        return False
    return match.placement is None or match.placement == 1


def include_week(matchup: Matchup, season: Season, week: int, mode: DataMode) -> bool:
    """Apply the data-mode week filter to one team's matchup."""
    start = get_playoff_week_start(season)
    if is_regular_season_week(week, start):
        return mode in (DataMode.REGULAR, DataMode.COMBINED)
    if mode is DataMode.REGULAR:
        return False
    return is_meaningful_playoff_game(matchup, season, week, start)


def filter_regular_season_matchups(season: Season) -> dict[int, tuple[Matchup, ...]]:
    start = get_playoff_week_start(season)
    return {
        week: season.week_matchups(week)
        for week in season.weeks()
        if is_regular_season_week(week, start)
    }


def filter_meaningful_playoff_matchups(season: Season) -> dict[int, tuple[Matchup, ...]]:
    start = get_playoff_week_start(season)
    weeks: dict[int, tuple[Matchup, ...]] = {}
    for week in season.weeks():
        if not is_playoff_week(week, start):
            continue
        rows = tuple(
            matchup
            for matchup in season.week_matchups(week)
            if is_meaningful_playoff_game(matchup, season, week, start)
        )
        if rows:
            weeks[week] = rows
    return weeks


def _placement_match(season: Season, placement: int) -> Optional[BracketMatch]:
    for match in season.winners_bracket:
        if match.placement == placement:
            return match
    return None


def get_championship_result(season: Season, roster_id: int) -> Optional[ChampionshipResult]:
    championship = _placement_match(season, 1)
    if championship is not None and championship.winner is not None:
        if championship.winner == roster_id:
            return "champion"
        if championship.involves(roster_id):
            return "runner-up"
    third_place = _placement_match(season, 3)
    if third_place is not None and third_place.winner == roster_id:
        return "third-place"
    return None


def get_champion_roster_id(season: Season) -> Optional[int]:
    championship = _placement_match(season, 1)
    return championship.winner if championship else None


def get_runner_up_roster_id(season: Season) -> Optional[int]:
    championship = _placement_match(season, 1)
    if championship is None or championship.winner is None:
        return None
    if championship.loser is not None:
        return championship.loser
    return championship.t2 if championship.t1 == championship.winner else championship.t1


def made_playoffs(season: Season, roster_id: int) -> bool:
    """Whether the roster appeared in the winners bracket.

    Byes are not flagged in the data: a top seed first shows up in round 2,
    so round-2 appearances count as qualification too.
    """
    for match in season.winners_bracket:
        if match.round in (1, 2) and match.involves(roster_id):
            return True
    return False


def get_playoff_round_name(season: Season, week: int) -> Optional[str]:
    start = get_playoff_week_start(season)
    if not is_playoff_week(week, start):
        return None
    rounds = max((match.round for match in season.winners_bracket), default=0)
    round_num = week - start + 1
    if rounds == 0 or round_num > rounds:
        return None
    if round_num == rounds:
        return "Championship"
    if round_num == rounds - 1:
        return "Semifinals"
    if round_num == rounds - 2:
        return "Quarterfinals"
    return f"Round {round_num}"
