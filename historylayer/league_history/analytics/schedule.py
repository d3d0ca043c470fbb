"""Cross-schedule records and strength of schedule."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from ..schema.models import Season
from .playoffs import get_playoff_week_start, is_regular_season_week
from .records import calculate_win_percentage, determine_matchup_result, sort_teams_by_record
from .weeks import get_completed_week, is_week_completed

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore


@dataclass
class CrossScheduleRecord:
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def win_percentage(self) -> float:
        return calculate_win_percentage(self.wins, self.losses, self.ties)

    def add(self, other: "CrossScheduleRecord") -> None:
        self.wins += other.wins
        self.losses += other.losses
        self.ties += other.ties


def calculate_cross_schedule_record(
    season: Season,
    team_roster_id: int,
    schedule_roster_id: int,
    *,
    completed_only: bool = False,
) -> CrossScheduleRecord:
    """Record team A would have had playing team B's regular-season schedule.

    When B's opponent in a week is A itself, A's score is compared against
    B's score instead. Weeks where A is on a bye or where both compared
    scores are zero are skipped.
    """
    start = get_playoff_week_start(season)
    record = CrossScheduleRecord()
    for week in season.weeks():
        if not is_regular_season_week(week, start):
            continue
        if completed_only and not is_week_completed(week, season.league):
            continue
        team_matchup = season.matchup_for(week, team_roster_id)
        if team_matchup is None:
            continue
        schedule_matchup = season.matchup_for(week, schedule_roster_id)
        if schedule_matchup is None:
            continue
        opponent = season.opponent_of(week, schedule_matchup)
        if opponent is None:
            continue
        if opponent.roster_id == team_roster_id:
            opponent_points = schedule_matchup.points
        else:
            opponent_points = opponent.points
        if team_matchup.points == 0 and opponent_points == 0:
            continue

        result = determine_matchup_result(team_matchup.points, opponent_points)
        if result == "W":
            record.wins += 1
        elif result == "L":
            record.losses += 1
        else:
            record.ties += 1
    return record


def get_schedule_comparison(
    season: Season, *, completed_only: bool = False
) -> dict[int, dict[int, CrossScheduleRecord]]:
    """Matrix ``[team][schedule]`` for one season, rows in standings order.

    The diagonal is each team's real record over the same weeks.
    """
    rosters = sort_teams_by_record(season.rosters)
    return {
        team.roster_id: {
            schedule.roster_id: calculate_cross_schedule_record(
                season, team.roster_id, schedule.roster_id, completed_only=completed_only
            )
            for schedule in rosters
        }
        for team in rosters
    }


def _owner_order(seasons: list[Season]) -> list[str]:
    owners: list[str] = []
    for season in seasons:
        for roster in season.rosters:
            if roster.owner_id and roster.owner_id not in owners:
                owners.append(roster.owner_id)
    return owners


def get_all_time_schedule_comparison(
    store: "SeasonStore",
    *,
    years: Optional[Iterable[int]] = None,
    active_only: bool = False,
) -> dict[str, dict[str, CrossScheduleRecord]]:
    """All-time matrix keyed by owner id, summed across seasons.

    Only completed weeks count. A pair contributes in a season only when
    both owners had a roster that year.
    """
    seasons = store.seasons(years)
    owners = _owner_order(seasons)
    if active_only and seasons:
        latest = seasons[-1]
        active = {roster.owner_id for roster in latest.rosters if roster.owner_id}
        owners = [owner for owner in owners if owner in active]

    matrix = {
        owner: {other: CrossScheduleRecord() for other in owners} for owner in owners
    }
    for season in seasons:
        roster_ids = {
            roster.owner_id: roster.roster_id
            for roster in season.rosters
            if roster.owner_id in matrix
        }
        for owner, team_roster_id in roster_ids.items():
            for other, schedule_roster_id in roster_ids.items():
                matrix[owner][other].add(
                    calculate_cross_schedule_record(
                        season, team_roster_id, schedule_roster_id, completed_only=True
                    )
                )
    return matrix


def calculate_strength_of_schedule(
    season: Season, completed_week: Optional[int] = None
) -> dict[int, int]:
    """Rank remaining regular-season schedules, 1 being the hardest.

    Difficulty is the average points-per-game, over completed regular-season
    weeks, of the opponents each team still has to face.
    """
    if completed_week is None:
        completed_week = get_completed_week(season.league)
    if completed_week is None:
        return {}

    start = get_playoff_week_start(season)
    totals: dict[int, list[float]] = {roster.roster_id: [] for roster in season.rosters}
    for week in season.weeks():
        if week > completed_week or not is_regular_season_week(week, start):
            continue
        for matchup in season.week_matchups(week):
            totals.setdefault(matchup.roster_id, []).append(matchup.points)
    ppg = {
        roster_id: (sum(scores) / len(scores) if scores else 0.0)
        for roster_id, scores in totals.items()
    }

    difficulty: dict[int, float] = {}
    for roster in season.rosters:
        opponents: list[float] = []
        for week in season.weeks():
            if week <= completed_week or not is_regular_season_week(week, start):
                continue
            matchup = season.matchup_for(week, roster.roster_id)
            if matchup is None:
                continue
            opponent = season.opponent_of(week, matchup)
            if opponent is not None:
                opponents.append(ppg.get(opponent.roster_id, 0.0))
        if opponents:
            difficulty[roster.roster_id] = sum(opponents) / len(opponents)

    ranked = sorted(difficulty.items(), key=lambda item: (-item[1], item[0]))
    return {roster_id: rank for rank, (roster_id, _) in enumerate(ranked, start=1)}
