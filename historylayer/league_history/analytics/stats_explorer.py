"""Positional scoring filters evaluated across every historical matchup."""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

from ..schema.inputs import PositionalFilter
from ..schema.models import Matchup
from .lineups import FLEX_ELIGIBLE, LINEUP_SLOTS
from .playoffs import DataMode, include_week
from .players import get_player_position
from .records import Result, calculate_win_percentage, determine_matchup_result

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore

TOTAL_POSITIONS = ("QB", "RB", "WR", "TE", "K", "DEF", "FLEX")
INDIVIDUAL_POSITIONS = ("RB", "WR", "TE")
SAMPLE_LIMIT = 50

_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    ">": operator.gt,
    "<=": operator.le,
    "<": operator.lt,
    "=": operator.eq,
}

PRESET_FILTERS: dict[str, list[PositionalFilter]] = {
    "QB 25+ Points": [PositionalFilter(position="QB", operator=">=", points=25)],
    "RB Total 30+ Points": [PositionalFilter(position="RB", operator=">=", points=30)],
    "Any RB 15+ Points": [PositionalFilter(position="RB_INDIVIDUAL", operator=">=", points=15)],
    "Two RBs 15+ Points": [
        PositionalFilter(position="RB_INDIVIDUAL", operator=">=", points=15, min_count=2)
    ],
    "WR Total 25+ Points": [PositionalFilter(position="WR", operator=">=", points=25)],
    "Any WR 12+ Points": [PositionalFilter(position="WR_INDIVIDUAL", operator=">=", points=12)],
    "QB 25+ AND RB Total 30+": [
        PositionalFilter(position="QB", operator=">=", points=25),
        PositionalFilter(position="RB", operator=">=", points=30),
    ],
    "Any RB 15+ AND Any WR 12+": [
        PositionalFilter(position="RB_INDIVIDUAL", operator=">=", points=15),
        PositionalFilter(position="WR_INDIVIDUAL", operator=">=", points=12),
    ],
    "RB Total 30+ AND Any RB 20+": [
        PositionalFilter(position="RB", operator=">=", points=30),
        PositionalFilter(position="RB_INDIVIDUAL", operator=">=", points=20),
    ],
    "All Starters 10+": [
        PositionalFilter(position=position, operator=">=", points=10)
        for position in ("QB", "RB", "WR", "TE", "K", "DEF")
    ],
    "High Scoring QB (30+)": [PositionalFilter(position="QB", operator=">=", points=30)],
    "Elite RB Total (35+)": [PositionalFilter(position="RB", operator=">=", points=35)],
}


@dataclass
class PositionalScores:
    totals: dict[str, float] = field(default_factory=lambda: {pos: 0.0 for pos in TOTAL_POSITIONS})
    individual: dict[str, list[float]] = field(
        default_factory=lambda: {pos: [] for pos in INDIVIDUAL_POSITIONS}
    )

    def flatten(self) -> dict[str, float]:
        """Totals plus the best single score at each individual position."""
        flat = dict(self.totals)
        for position, scores in self.individual.items():
            flat[f"{position}_INDIVIDUAL"] = max(scores, default=0.0)
        return flat


def extract_positional_scores(
    store: "SeasonStore",
    matchup: Matchup,
    year: int,
    slots: Sequence[str] = LINEUP_SLOTS,
) -> PositionalScores:
    """Sum starter points by lineup slot.

    A FLEX starter counts toward the FLEX total and also toward the total
    and individual scores of the player's real position.
    """
    scores = PositionalScores()
    for index, player_id, points in matchup.starter_points():
        if index >= len(slots) or index >= len(matchup.starters_points):
            continue
        slot = slots[index]
        if slot == "FLEX":
            scores.totals["FLEX"] += points
            position = get_player_position(store, player_id, year, matchup)
            if position not in FLEX_ELIGIBLE:
                continue
        else:
            position = slot
        scores.totals[position] = scores.totals.get(position, 0.0) + points
        if position in scores.individual:
            scores.individual[position].append(points)
    return scores


def matches_filter(scores: PositionalScores, positional_filter: PositionalFilter) -> bool:
    compare = _OPERATORS[positional_filter.operator]
    if positional_filter.is_individual:
        qualifying = [
            score
            for score in scores.individual.get(positional_filter.base_position, [])
            if compare(score, positional_filter.points)
        ]
        return len(qualifying) >= positional_filter.min_count
    return compare(scores.totals.get(positional_filter.position, 0.0), positional_filter.points)


def matches_filters(scores: PositionalScores, filters: Iterable[PositionalFilter]) -> bool:
    return all(matches_filter(scores, positional_filter) for positional_filter in filters)


@dataclass
class PositionBreakdown:
    avg: float = 0.0
    min: float = 0.0
    max: float = 0.0


@dataclass
class SampleMatchup:
    year: int
    week: int
    roster_id: int
    points: float
    opponent_points: float
    result: Result
    positional_scores: dict[str, float]


@dataclass
class PositionalStats:
    total_matchups: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    win_percentage: float = 0.0
    avg_points_for: float = 0.0
    avg_points_against: float = 0.0
    positional_breakdown: dict[str, PositionBreakdown] = field(default_factory=dict)
    sample_matchups: list[SampleMatchup] = field(default_factory=list)


def calculate_positional_stats(
    store: "SeasonStore",
    filters: Iterable[PositionalFilter],
    *,
    years: Optional[Iterable[int]] = None,
    include_playoffs: bool = False,
    completed_only: bool = True,
    sample_limit: int = SAMPLE_LIMIT,
) -> PositionalStats:
    """Outcomes of every matchup whose lineup satisfies all ``filters``.

    Playoff weeks are only considered with ``include_playoffs`` and then only
    for meaningful games. Win/loss/tie and points against are counted for
    matched entries that had an opponent.
    """
    filters = list(filters)
    mode = DataMode.COMBINED if include_playoffs else DataMode.REGULAR
    stats = PositionalStats()
    points_for = 0.0
    points_against = 0.0
    against_count = 0
    sums: dict[str, list[float]] = {}

    for season in store.seasons(years):
        for week in season.weeks():
            if completed_only and not store.is_week_completed(season.year, week):
                continue
            for matchup in season.week_matchups(week):
                if not include_week(matchup, season, week, mode):
                    continue
                scores = extract_positional_scores(store, matchup, season.year)
                if not matches_filters(scores, filters):
                    continue

                stats.total_matchups += 1
                points_for += matchup.points
                flat = scores.flatten()
                for position, score in flat.items():
                    sums.setdefault(position, []).append(score)

                opponent = season.opponent_of(week, matchup)
                if opponent is None:
                    continue
                points_against += opponent.points
                against_count += 1
                result = determine_matchup_result(matchup.points, opponent.points)
                if result == "W":
                    stats.wins += 1
                elif result == "L":
                    stats.losses += 1
                else:
                    stats.ties += 1
                if len(stats.sample_matchups) < sample_limit:
                    stats.sample_matchups.append(
                        SampleMatchup(
                            year=season.year,
                            week=week,
                            roster_id=matchup.roster_id,
                            points=matchup.points,
                            opponent_points=opponent.points,
                            result=result,
                            positional_scores=flat,
                        )
                    )

    stats.win_percentage = round(calculate_win_percentage(stats.wins, stats.losses, stats.ties), 4)
    if stats.total_matchups:
        stats.avg_points_for = round(points_for / stats.total_matchups, 2)
    if against_count:
        stats.avg_points_against = round(points_against / against_count, 2)
    for position in (*TOTAL_POSITIONS, *(f"{pos}_INDIVIDUAL" for pos in INDIVIDUAL_POSITIONS)):
        values = sums.get(position, [])
        if not values:
            stats.positional_breakdown[position] = PositionBreakdown()
            continue
        stats.positional_breakdown[position] = PositionBreakdown(
            avg=round(sum(values) / len(values), 2),
            min=min(values),
            max=max(values),
        )
    return stats


_FILTER_PATTERN = re.compile(
    r"^\s*(?P<position>[A-Z_]+)\s*(?P<operator>>=|<=|>|<|=)\s*(?P<points>-?\d+(?:\.\d+)?)"
    r"(?:\s*[xX]\s*(?P<count>\d+))?\s*$"
)


def parse_filter_expression(expression: str) -> list[PositionalFilter]:
    """Parse ``"QB>=25,RB_INDIVIDUAL>=15x2"`` into validated filters.

    A trailing ``xN`` sets the minimum count for an individual filter. A
    preset name is accepted as well.
    """
    if expression in PRESET_FILTERS:
        return list(PRESET_FILTERS[expression])
    filters: list[PositionalFilter] = []
    for part in expression.split(","):
        if not part.strip():
            continue
        match = _FILTER_PATTERN.match(part.upper())
        if match is None:
            raise ValueError(f"Invalid filter expression: {part.strip()!r}")
        filters.append(
            PositionalFilter(
                position=match["position"],
                operator=match["operator"],
                points=float(match["points"]),
                min_count=int(match["count"]) if match["count"] else 1,
            )
        )
    return filters
