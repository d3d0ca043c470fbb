"""Public package exports for the league history layer."""

from .config import HistoryConfig, load_config
from .league_history import LeagueHistory
from .schema import models as schema_models
from .store import SeasonStore, build_season, load_store

__all__ = [
    "HistoryConfig",
    "LeagueHistory",
    "SeasonStore",
    "build_season",
    "load_config",
    "load_store",
    "schema_models",
]
