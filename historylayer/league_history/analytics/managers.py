"""Manager career statistics across seasons."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from ..schema.models import Manager, Matchup, Roster, Season
from .lineups import LineupSlot, PlayerTotals, build_all_star_lineup
from .playoffs import (
    DataMode,
    get_championship_result,
    include_week,
    made_playoffs,
)
from .players import get_player_name, get_player_position
from .records import (
    LeagueRecord,
    TeamRecord,
    calculate_league_record,
    calculate_win_percentage,
    determine_matchup_result,
    sort_teams_by_record,
)
from .weeks import is_week_completed

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore

logger = logging.getLogger(__name__)


@dataclass
class ManagerSeasonStats:
    year: int
    roster_id: int
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    league_wins: int = 0
    league_losses: int = 0
    league_ties: int = 0
    final_standing: int = 0
    points_standing: int = 0
    championship_result: Optional[str] = None
    scoring_crown: bool = False
    made_playoffs: bool = False


@dataclass
class OpponentRecord:
    opponent_id: str
    opponent_name: Optional[str]
    wins: int = 0
    losses: int = 0
    ties: int = 0
    games: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    avg_points_for: float = 0.0
    avg_points_against: float = 0.0


@dataclass
class BestSeason:
    year: int
    value: float


@dataclass
class PickSlot:
    year: int
    round: int
    pick: int


@dataclass
class DraftedPlayer:
    player_id: str
    player_name: str
    position: str
    times_drafted: int = 0
    years: list[int] = field(default_factory=list)
    best_pick: Optional[PickSlot] = None


@dataclass
class CappedPlayer:
    player_id: str
    player_name: str
    position: str
    starts: int = 0
    total_points: float = 0.0
    years: list[int] = field(default_factory=list)


@dataclass
class Performance:
    player_id: str
    player_name: str
    position: str
    points: float
    year: int
    week: int
    owner_id: Optional[str] = None


@dataclass
class ManagerStats:
    manager_id: str
    manager_name: str
    team_name: Optional[str]
    data_mode: str
    seasons_played: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    win_percentage: float = 0.0
    points_for: float = 0.0
    points_against: float = 0.0
    league_wins: int = 0
    league_losses: int = 0
    league_ties: int = 0
    league_win_percentage: float = 0.0
    championships: int = 0
    runner_ups: int = 0
    third_place_finishes: int = 0
    scoring_crowns: int = 0
    first_place_finishes: int = 0
    playoff_appearances: int = 0
    best_wins_season: Optional[BestSeason] = None
    best_points_season: Optional[BestSeason] = None
    season_stats: list[ManagerSeasonStats] = field(default_factory=list)
    h2h_records: dict[str, OpponentRecord] = field(default_factory=dict)
    all_star_lineup: list[LineupSlot] = field(default_factory=list)
    most_drafted: list[DraftedPlayer] = field(default_factory=list)
    most_capped: list[CappedPlayer] = field(default_factory=list)
    top_performances: list[Performance] = field(default_factory=list)


@dataclass
class _CountedWeek:
    week: int
    matchup: Matchup
    opponent: Optional[Matchup]


def _counted_weeks(season: Season, roster_id: int, mode: DataMode) -> list[_CountedWeek]:
    rows: list[_CountedWeek] = []
    for week in season.weeks():
        if not is_week_completed(week, season.league):
            continue
        matchup = season.matchup_for(week, roster_id)
        if matchup is None or not include_week(matchup, season, week, mode):
            continue
        rows.append(_CountedWeek(week, matchup, season.opponent_of(week, matchup)))
    return rows


def _rank_of(ordered: list[Roster], roster_id: int) -> int:
    for rank, roster in enumerate(ordered, start=1):
        if roster.roster_id == roster_id:
            return rank
    return 0


def _season_stats(
    season: Season, roster: Roster, weeks: list[_CountedWeek]
) -> ManagerSeasonStats:
    record = TeamRecord()
    league_record = LeagueRecord()
    for row in weeks:
        # Points count even on a bye; only a paired week yields a result.
        if row.opponent is None:
            record.points_for += row.matchup.points
        else:
            record.add_result(
                determine_matchup_result(row.matchup.points, row.opponent.points),
                row.matchup.points,
                row.opponent.points,
            )
        league_record.add(calculate_league_record(row.matchup, season.week_matchups(row.week)))

    by_points = sorted(season.rosters, key=lambda other: -other.points_for)
    points_standing = _rank_of(by_points, roster.roster_id)
    return ManagerSeasonStats(
        year=season.year,
        roster_id=roster.roster_id,
        wins=record.wins,
        losses=record.losses,
        ties=record.ties,
        points_for=round(record.points_for, 2),
        points_against=round(record.points_against, 2),
        league_wins=league_record.wins,
        league_losses=league_record.losses,
        league_ties=league_record.ties,
        final_standing=_rank_of(sort_teams_by_record(season.rosters), roster.roster_id),
        points_standing=points_standing,
        championship_result=get_championship_result(season, roster.roster_id),
        scoring_crown=points_standing == 1 and season.league.status == "complete",
        made_playoffs=made_playoffs(season, roster.roster_id),
    )


def _pick_in_round(season: Season, pick_no: int, round_num: int, draft_slot: Optional[int]) -> int:
    teams = (season.draft.teams if season.draft else None) or len(season.rosters)
    if teams:
        return pick_no - (round_num - 1) * teams
    return draft_slot or pick_no


def _rank_by_count_then_recent(rows: Iterable, count_attr: str) -> list:
    return sorted(
        rows,
        key=lambda row: (-getattr(row, count_attr), -max(row.years, default=0), row.player_id),
    )


def get_most_drafted_players(
    store: "SeasonStore", manager: Manager, *, limit: Optional[int] = 10
) -> list[DraftedPlayer]:
    owner_ids = set(manager.owner_ids)
    drafted: dict[str, DraftedPlayer] = {}
    for season in store.seasons():
        roster = season.roster_for_owner(owner_ids)
        for pick in season.picks:
            if pick.picked_by is not None:
                if pick.picked_by not in owner_ids:
                    continue
            elif roster is None or pick.roster_id != roster.roster_id:
                continue
            row = drafted.get(pick.player_id)
            if row is None:
                row = DraftedPlayer(
                    player_id=pick.player_id,
                    player_name=pick.player_name or get_player_name(store, pick.player_id, season.year),
                    position=pick.position or get_player_position(store, pick.player_id, season.year),
                )
                drafted[pick.player_id] = row
            row.times_drafted += 1
            if season.year not in row.years:
                row.years.append(season.year)
            slot = PickSlot(
                year=season.year,
                round=pick.round,
                pick=_pick_in_round(season, pick.pick_no, pick.round, pick.draft_slot),
            )
            if row.best_pick is None or (slot.round, slot.pick) < (row.best_pick.round, row.best_pick.pick):
                row.best_pick = slot
    ranked = _rank_by_count_then_recent(drafted.values(), "times_drafted")
    return ranked[:limit] if limit is not None else ranked


def get_manager_stats(
    store: "SeasonStore",
    manager_id: str,
    mode: DataMode | str = DataMode.REGULAR,
    *,
    top_performances: int = 10,
    list_limit: Optional[int] = 10,
) -> Optional[ManagerStats]:
    """Career statistics for one manager, or None if the id is unknown.

    Regular mode takes season totals from roster settings. Playoff and
    combined modes re-derive them from the weeks the mode includes. A
    manager with no rosters still gets a result, just an empty one.
    """
    mode = DataMode.parse(mode)
    manager = store.get_manager(manager_id)
    if manager is None:
        return None

    stats = ManagerStats(
        manager_id=manager.manager_id,
        manager_name=manager.name,
        team_name=manager.team_name,
        data_mode=mode.value,
    )
    totals = TeamRecord()
    league_totals = LeagueRecord()
    career: dict[str, PlayerTotals] = {}
    capped: dict[str, CappedPlayer] = {}
    performances: list[Performance] = []

    for season in store.seasons():
        roster = season.roster_for_owner(manager.owner_ids)
        if roster is None:
            continue
        weeks = _counted_weeks(season, roster.roster_id, mode)
        season_row = _season_stats(season, roster, weeks)
        stats.season_stats.append(season_row)

        if mode is DataMode.REGULAR:
            totals.wins += roster.wins
            totals.losses += roster.losses
            totals.ties += roster.ties
            totals.points_for += roster.points_for
            totals.points_against += roster.points_against
        else:
            totals.wins += season_row.wins
            totals.losses += season_row.losses
            totals.ties += season_row.ties
            totals.points_for += season_row.points_for
            totals.points_against += season_row.points_against
        league_totals.add(
            LeagueRecord(season_row.league_wins, season_row.league_losses, season_row.league_ties)
        )

        for row in weeks:
            if row.opponent is not None:
                _add_opponent_result(store, season, stats.h2h_records, row)
            for _, player_id, points in row.matchup.starter_points():
                position = get_player_position(store, player_id, season.year, row.matchup)
                name = get_player_name(store, player_id, season.year)
                start = capped.get(player_id)
                if start is None:
                    start = CappedPlayer(player_id=player_id, player_name=name, position=position)
                    capped[player_id] = start
                start.starts += 1
                start.total_points += points
                if season.year not in start.years:
                    start.years.append(season.year)
                if points <= 0:
                    continue
                totals_row = career.get(player_id)
                if totals_row is None:
                    totals_row = PlayerTotals(player_id=player_id, player_name=name, position=position)
                    career[player_id] = totals_row
                totals_row.total_points += points
                totals_row.games += 1
                performances.append(
                    Performance(
                        player_id=player_id,
                        player_name=name,
                        position=position,
                        points=points,
                        year=season.year,
                        week=row.week,
                        owner_id=roster.owner_id,
                    )
                )

    stats.seasons_played = len(stats.season_stats)
    stats.wins, stats.losses, stats.ties = totals.wins, totals.losses, totals.ties
    stats.win_percentage = round(totals.win_percentage, 4)
    stats.points_for = round(totals.points_for, 2)
    stats.points_against = round(totals.points_against, 2)
    stats.league_wins = league_totals.wins
    stats.league_losses = league_totals.losses
    stats.league_ties = league_totals.ties
    stats.league_win_percentage = round(
        calculate_win_percentage(league_totals.wins, league_totals.losses, league_totals.ties), 4
    )

    for season_row in stats.season_stats:
        if season_row.championship_result == "champion":
            stats.championships += 1
        elif season_row.championship_result == "runner-up":
            stats.runner_ups += 1
        elif season_row.championship_result == "third-place":
            stats.third_place_finishes += 1
        if season_row.scoring_crown:
            stats.scoring_crowns += 1
        if season_row.final_standing == 1:
            stats.first_place_finishes += 1
        if season_row.made_playoffs:
            stats.playoff_appearances += 1
        if stats.best_wins_season is None or season_row.wins > stats.best_wins_season.value:
            stats.best_wins_season = BestSeason(season_row.year, season_row.wins)
        if stats.best_points_season is None or season_row.points_for > stats.best_points_season.value:
            stats.best_points_season = BestSeason(season_row.year, season_row.points_for)

    for start in capped.values():
        start.total_points = round(start.total_points, 2)
    stats.all_star_lineup = build_all_star_lineup(career.values())
    stats.most_drafted = get_most_drafted_players(store, manager, limit=list_limit)
    ranked_capped = _rank_by_count_then_recent(capped.values(), "starts")
    stats.most_capped = ranked_capped[:list_limit] if list_limit is not None else ranked_capped
    performances.sort(key=lambda row: (-row.points, row.year, row.week, row.player_id))
    stats.top_performances = performances[:top_performances]
    logger.debug(
        "Manager %s: %d seasons in %s mode", manager.manager_id, stats.seasons_played, mode.value
    )
    return stats


def _add_opponent_result(
    store: "SeasonStore",
    season: Season,
    records: dict[str, OpponentRecord],
    row: _CountedWeek,
) -> None:
    opponent_roster = season.roster_by_id(row.opponent.roster_id)
    owner_id = opponent_roster.owner_id if opponent_roster else None
    if owner_id is None:
        return
    opponent_manager = store.manager_for_owner(owner_id)
    if opponent_manager is not None:
        key = opponent_manager.manager_id
        name = opponent_manager.name
    else:
        user = season.user_for(owner_id)
        key = owner_id
        name = user.display_name if user else None

    record = records.get(key)
    if record is None:
        record = OpponentRecord(opponent_id=key, opponent_name=name)
        records[key] = record
    result = determine_matchup_result(row.matchup.points, row.opponent.points)
    if result == "W":
        record.wins += 1
    elif result == "L":
        record.losses += 1
    else:
        record.ties += 1
    record.games += 1
    record.points_for += row.matchup.points
    record.points_against += row.opponent.points
    record.avg_points_for = round(record.points_for / record.games, 2)
    record.avg_points_against = round(record.points_against / record.games, 2)


def get_best_performances(
    store: "SeasonStore",
    *,
    years: Optional[Iterable[int]] = None,
    mode: DataMode | str = DataMode.REGULAR,
    limit: int = 10,
    unique_players: bool = False,
) -> list[Performance]:
    """League-wide single-game starter performances, best first."""
    mode = DataMode.parse(mode)
    performances: list[Performance] = []
    for season in store.seasons(years):
        owners = {roster.roster_id: roster.owner_id for roster in season.rosters}
        for week in season.weeks():
            for matchup in season.week_matchups(week):
                if not include_week(matchup, season, week, mode):
                    continue
                for _, player_id, points in matchup.starter_points():
                    if points <= 0:
                        continue
                    performances.append(
                        Performance(
                            player_id=player_id,
                            player_name=get_player_name(store, player_id, season.year),
                            position=get_player_position(store, player_id, season.year, matchup),
                            points=points,
                            year=season.year,
                            week=week,
                            owner_id=owners.get(matchup.roster_id),
                        )
                    )
    performances.sort(key=lambda row: (-row.points, row.year, row.week, row.player_id))
    if unique_players:
        seen: set[str] = set()
        unique: list[Performance] = []
        for row in performances:
            if row.player_id in seen:
                continue
            seen.add(row.player_id)
            unique.append(row)
        performances = unique
    return performances[:limit]
