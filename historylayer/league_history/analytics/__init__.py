"""Analytics over the in-memory season store."""

from .h2h import get_all_time_h2h_record, get_h2h_matrix, get_h2h_record_with_games
from .managers import get_best_performances, get_manager_stats
from .playoff_odds import PlayoffOddsSimulator, calculate_playoff_odds
from .playoffs import DataMode
from .schedule import (
    calculate_strength_of_schedule,
    get_all_time_schedule_comparison,
    get_schedule_comparison,
)
from .standings import get_cumulative_standings, get_season_standings
from .stats_explorer import PRESET_FILTERS, calculate_positional_stats, parse_filter_expression

__all__ = [
    "DataMode",
    "PRESET_FILTERS",
    "PlayoffOddsSimulator",
    "calculate_playoff_odds",
    "calculate_positional_stats",
    "calculate_strength_of_schedule",
    "get_all_time_h2h_record",
    "get_all_time_schedule_comparison",
    "get_best_performances",
    "get_cumulative_standings",
    "get_h2h_matrix",
    "get_h2h_record_with_games",
    "get_manager_stats",
    "get_schedule_comparison",
    "get_season_standings",
    "parse_filter_expression",
]
