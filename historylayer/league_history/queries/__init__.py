"""Query helpers for the league history layer.

All functions take a loaded SeasonStore and return dictionaries with a
consistent 'found' boolean, ready for JSON output.

Modules:
    league: seasons, standings, schedule comparisons, positional explorer
    managers: manager career stats and head-to-head records
    playoffs: Monte Carlo playoff odds with optional scenario picks
    trades: season and week trade history, all-time trade counts
"""

from .league import (
    get_all_time_schedule_comparison,
    get_best_performances,
    get_cumulative_standings,
    get_positional_stats,
    get_schedule_comparison,
    get_season_standings,
    get_seasons,
    get_strength_of_schedule,
)
from .managers import get_h2h_record, get_manager_stats
from .playoffs import get_playoff_odds
from .trades import get_trade_stats, get_trades

__all__ = [
    "get_all_time_schedule_comparison",
    "get_best_performances",
    "get_cumulative_standings",
    "get_h2h_record",
    "get_manager_stats",
    "get_playoff_odds",
    "get_positional_stats",
    "get_schedule_comparison",
    "get_season_standings",
    "get_seasons",
    "get_strength_of_schedule",
    "get_trade_stats",
    "get_trades",
]
