"""Season and cumulative standings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from ..schema.models import Season
from .playoffs import get_champion_roster_id, get_runner_up_roster_id
from .records import calculate_win_percentage, sort_teams_by_record

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore


@dataclass
class SeasonStanding:
    rank: int
    roster_id: int
    owner_id: Optional[str]
    team_name: Optional[str]
    wins: int
    losses: int
    ties: int
    points_for: float
    points_against: float
    win_percentage: float


def _team_name(store: Optional["SeasonStore"], season: Season, owner_id: Optional[str]) -> Optional[str]:
    user = season.user_for(owner_id)
    if user is not None and user.team_name:
        return user.team_name
    if store is not None:
        manager = store.manager_for_owner(owner_id)
        if manager is not None:
            return manager.team_name or manager.name
    return user.display_name if user else None


def get_season_standings(
    season: Season, store: Optional["SeasonStore"] = None
) -> list[SeasonStanding]:
    """Regular-season standings from roster settings."""
    rows: list[SeasonStanding] = []
    for rank, roster in enumerate(sort_teams_by_record(season.rosters), start=1):
        rows.append(
            SeasonStanding(
                rank=rank,
                roster_id=roster.roster_id,
                owner_id=roster.owner_id,
                team_name=_team_name(store, season, roster.owner_id),
                wins=roster.wins,
                losses=roster.losses,
                ties=roster.ties,
                points_for=round(roster.points_for, 2),
                points_against=round(roster.points_against, 2),
                win_percentage=round(
                    calculate_win_percentage(roster.wins, roster.losses, roster.ties), 4
                ),
            )
        )
    return rows


@dataclass
class CumulativeStanding:
    owner_id: str
    manager_name: Optional[str] = None
    seasons: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    win_percentage: float = 0.0
    avg_points_for: float = 0.0
    avg_points_against: float = 0.0
    championships: list[int] = field(default_factory=list)
    runner_ups: list[int] = field(default_factory=list)
    scoring_crowns: list[int] = field(default_factory=list)


def get_cumulative_standings(
    store: "SeasonStore", years: Optional[Iterable[int]] = None
) -> list[CumulativeStanding]:
    """All-time table per owner across the selected seasons.

    Scoring crowns are only awarded for seasons whose league status is
    "complete". Sorted by win percentage, wins, points-for, then fewest
    points against.
    """
    rows: dict[str, CumulativeStanding] = {}
    for season in store.seasons(years):
        champion = get_champion_roster_id(season)
        runner_up = get_runner_up_roster_id(season)
        top_scorer = None
        if season.league.status == "complete" and season.rosters:
            top_scorer = max(season.rosters, key=lambda roster: roster.points_for).roster_id

        for roster in season.rosters:
            if not roster.owner_id:
                continue
            row = rows.get(roster.owner_id)
            if row is None:
                manager = store.manager_for_owner(roster.owner_id)
                user = season.user_for(roster.owner_id)
                row = CumulativeStanding(
                    owner_id=roster.owner_id,
                    manager_name=manager.name if manager else (user.display_name if user else None),
                )
                rows[roster.owner_id] = row
            row.seasons += 1
            row.wins += roster.wins
            row.losses += roster.losses
            row.ties += roster.ties
            row.points_for += roster.points_for
            row.points_against += roster.points_against
            if roster.roster_id == champion:
                row.championships.append(season.year)
            if roster.roster_id == runner_up:
                row.runner_ups.append(season.year)
            if roster.roster_id == top_scorer:
                row.scoring_crowns.append(season.year)

    for row in rows.values():
        games = row.wins + row.losses + row.ties
        row.win_percentage = round(calculate_win_percentage(row.wins, row.losses, row.ties), 4)
        row.avg_points_for = round(row.points_for / games, 2) if games else 0.0
        row.avg_points_against = round(row.points_against / games, 2) if games else 0.0
        row.points_for = round(row.points_for, 2)
        row.points_against = round(row.points_against, 2)

    return sorted(
        rows.values(),
        key=lambda row: (
            -calculate_win_percentage(row.wins, row.losses, row.ties),
            -row.wins,
            -row.points_for,
            row.points_against,
        ),
    )
