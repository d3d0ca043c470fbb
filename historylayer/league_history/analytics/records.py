"""Record and result primitives shared by every aggregator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal, Optional, TypeVar

from ..schema.models import Matchup, Season
from .playoffs import get_playoff_week_start

Result = Literal["W", "L", "T"]

T = TypeVar("T")


def determine_matchup_result(points_a: float, points_b: float) -> Result:
    """Return the result for side A; equal scores are a tie, no tolerance."""
    if points_a > points_b:
        return "W"
    if points_a < points_b:
        return "L"
    return "T"


def calculate_win_percentage(wins: int, losses: int, ties: int) -> float:
    total = wins + losses + ties
    if total == 0:
        return 0.0
    return (wins + 0.5 * ties) / total


@dataclass
class LeagueRecord:
    wins: int = 0
    losses: int = 0
    ties: int = 0

    def add(self, other: "LeagueRecord") -> None:
        self.wins += other.wins
        self.losses += other.losses
        self.ties += other.ties


@dataclass
class TeamRecord:
    """Mutable win/loss/tie and points tally."""

    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        return calculate_win_percentage(self.wins, self.losses, self.ties)

    def add_result(
        self, result: Result, points_for: float = 0.0, points_against: float = 0.0
    ) -> None:
        if result == "W":
            self.wins += 1
        elif result == "L":
            self.losses += 1
        else:
            self.ties += 1
        self.points_for += points_for
        self.points_against += points_against


def calculate_league_record(
    team_matchup: Matchup, week_matchups: Iterable[Matchup]
) -> LeagueRecord:
    """Compare one team's weekly score against every team that week.

    The team's own entry is in ``week_matchups`` and shows up as one equal
    score, which is removed from the tie count.
    """
    record = LeagueRecord()
    equal = 0
    for other in week_matchups:
        if other.points < team_matchup.points:
            record.wins += 1
        elif other.points > team_matchup.points:
            record.losses += 1
        else:
            equal += 1
    record.ties = max(equal - 1, 0)
    return record


def record_sort_key(team: Any) -> tuple[float, float]:
    """Key for win percentage desc, then points-for desc."""
    return (
        -calculate_win_percentage(team.wins, team.losses, team.ties),
        -float(team.points_for),
    )


def sort_teams_by_record(teams: Iterable[T]) -> list[T]:
    """Sort anything carrying wins/losses/ties/points_for.

    The sort is stable: teams equal on both keys keep their input order.
    """
    return sorted(teams, key=record_sort_key)


def find_opponent(matchup: Matchup, week_matchups: Iterable[Matchup]) -> Optional[Matchup]:
    if matchup.matchup_id is None:
        return None
    for other in week_matchups:
        if other.matchup_id == matchup.matchup_id and other.roster_id != matchup.roster_id:
            return other
    return None


def _regular_weeks(season: Season) -> list[int]:
    start = get_playoff_week_start(season)
    return [week for week in season.weeks() if week < start]


def calculate_division_record(season: Season, roster_id: int) -> TeamRecord:
    """Regular-season record against teams in the same division."""
    roster = season.roster_by_id(roster_id)
    record = TeamRecord()
    if roster is None or roster.division is None:
        return record
    division_ids = {
        other.roster_id for other in season.rosters if other.division == roster.division
    }
    for week in _regular_weeks(season):
        matchup = season.matchup_for(week, roster_id)
        if matchup is None:
            continue
        opponent = season.opponent_of(week, matchup)
        if opponent is None or opponent.roster_id not in division_ids:
            continue
        record.add_result(
            determine_matchup_result(matchup.points, opponent.points),
            matchup.points,
            opponent.points,
        )
    return record


def get_record_up_to_week(season: Season, roster_id: int, week: int) -> TeamRecord:
    """Record from head-to-head results in weeks before ``week``."""
    record = TeamRecord()
    for current in season.weeks():
        if current >= week:
            break
        matchup = season.matchup_for(current, roster_id)
        if matchup is None:
            continue
        opponent = season.opponent_of(current, matchup)
        if opponent is None:
            continue
        record.add_result(
            determine_matchup_result(matchup.points, opponent.points),
            matchup.points,
            opponent.points,
        )
    return record


@dataclass
class Streak:
    result: Optional[Result]
    length: int


def get_current_streak(season: Season, roster_id: int, week: int) -> Streak:
    """Win or loss streak entering ``week``; a tie ends the run."""
    results: list[Result] = []
    for current in season.weeks():
        if current >= week:
            break
        matchup = season.matchup_for(current, roster_id)
        if matchup is None:
            continue
        opponent = season.opponent_of(current, matchup)
        if opponent is None:
            continue
        results.append(determine_matchup_result(matchup.points, opponent.points))

    streak_type: Optional[Result] = None
    length = 0
    for result in reversed(results):
        if result == "T":
            break
        if streak_type is None:
            streak_type = result
        if result != streak_type:
            break
        length += 1
    return Streak(result=streak_type, length=length)

