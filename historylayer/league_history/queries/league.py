"""League-wide query functions: seasons, standings, schedules, explorer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional

from pydantic import TypeAdapter

from ..analytics.managers import get_best_performances as compute_best_performances
from ..analytics.playoffs import get_playoff_teams, get_playoff_week_start
from ..analytics.schedule import (
    CrossScheduleRecord,
    calculate_strength_of_schedule,
    get_all_time_schedule_comparison as compute_all_time_schedule,
    get_schedule_comparison as compute_schedule_comparison,
)
from ..analytics.standings import (
    get_cumulative_standings as compute_cumulative_standings,
    get_season_standings as compute_season_standings,
)
from ..analytics.stats_explorer import calculate_positional_stats, parse_filter_expression
from ..analytics.weeks import get_completed_week
from ..schema.inputs import PositionalFilter
from ._helpers import to_payload, year_range

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore

_FILTER_LIST = TypeAdapter(list[PositionalFilter])


def _record_payload(record: CrossScheduleRecord) -> dict[str, Any]:
    return {
        "wins": record.wins,
        "losses": record.losses,
        "ties": record.ties,
        "win_percentage": round(record.win_percentage, 4),
    }


def get_seasons(store: "SeasonStore") -> dict[str, Any]:
    seasons = []
    for season in store.seasons():
        seasons.append(
            {
                "year": season.year,
                "league_name": season.league.name,
                "status": season.league.status,
                "teams": len(season.rosters),
                "weeks": season.weeks(),
                "playoff_week_start": get_playoff_week_start(season),
                "playoff_teams": get_playoff_teams(season),
                "completed_week": get_completed_week(season.league),
            }
        )
    return {"found": bool(seasons), "seasons": seasons}


def get_season_standings(store: "SeasonStore", year: int) -> dict[str, Any]:
    season = store.get_season(year)
    if season is None:
        return {"found": False, "year": year}
    return {
        "found": True,
        "year": season.year,
        "standings": to_payload(compute_season_standings(season, store)),
    }


def get_cumulative_standings(
    store: "SeasonStore", year_from: Optional[int] = None, year_to: Optional[int] = None
) -> dict[str, Any]:
    years = year_range(store, year_from, year_to)
    rows = compute_cumulative_standings(store, years)
    return {
        "found": bool(rows),
        "years": years if years is not None else store.years(),
        "standings": to_payload(rows),
    }


def get_schedule_comparison(store: "SeasonStore", year: int) -> dict[str, Any]:
    """Cross-schedule matrix for one season, keyed by roster id.

    Returns:
        {
            "found": True,
            "year": int,
            "matrix": {team_roster_id: {schedule_roster_id: {"wins", "losses", "ties", "win_percentage"}}}
        }
    """
    season = store.get_season(year)
    if season is None:
        return {"found": False, "year": year}
    matrix = compute_schedule_comparison(season)
    return {
        "found": True,
        "year": season.year,
        "matrix": {
            team: {schedule: _record_payload(record) for schedule, record in row.items()}
            for team, row in matrix.items()
        },
    }


def get_all_time_schedule_comparison(
    store: "SeasonStore", active_only: bool = False
) -> dict[str, Any]:
    matrix = compute_all_time_schedule(store, active_only=active_only)
    return {
        "found": bool(matrix),
        "active_only": active_only,
        "matrix": {
            owner: {other: _record_payload(record) for other, record in row.items()}
            for owner, row in matrix.items()
        },
    }


def get_strength_of_schedule(store: "SeasonStore", year: int) -> dict[str, Any]:
    season = store.get_season(year)
    if season is None:
        return {"found": False, "year": year}
    ranks = calculate_strength_of_schedule(season)
    return {
        "found": bool(ranks),
        "year": season.year,
        "completed_week": get_completed_week(season.league),
        "ranks": ranks,
    }


def _coerce_filters(filters: str | Iterable[Any]) -> list[PositionalFilter]:
    if isinstance(filters, str):
        return parse_filter_expression(filters)
    return _FILTER_LIST.validate_python(list(filters))


def get_positional_stats(
    store: "SeasonStore",
    filters: str | Iterable[Any],
    year_from: Optional[int] = None,
    year_to: Optional[int] = None,
    include_playoffs: bool = False,
) -> dict[str, Any]:
    """Run the positional filter engine.

    ``filters`` is either an expression such as ``"QB>=25,RB_INDIVIDUAL>=15x2"``
    or a list of filter dicts. Malformed filters raise ValueError (pydantic's
    ValidationError included).
    """
    parsed = _coerce_filters(filters)
    years = year_range(store, year_from, year_to)
    stats = calculate_positional_stats(
        store, parsed, years=years, include_playoffs=include_playoffs
    )
    return {
        "found": stats.total_matchups > 0,
        "filters": [item.model_dump() for item in parsed],
        **to_payload(stats),
    }


def get_best_performances(
    store: "SeasonStore",
    year_from: Optional[int] = None,
    year_to: Optional[int] = None,
    limit: int = 10,
    unique_players: bool = False,
) -> dict[str, Any]:
    rows = compute_best_performances(
        store,
        years=year_range(store, year_from, year_to),
        limit=limit,
        unique_players=unique_players,
    )
    return {"found": bool(rows), "performances": to_payload(rows)}
