"""Facade over the in-memory league history store."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .config import DEFAULT_SIMULATION_TRIALS, HistoryConfig, load_config
from .queries import (
    get_all_time_schedule_comparison,
    get_best_performances,
    get_cumulative_standings,
    get_h2h_record,
    get_manager_stats,
    get_playoff_odds,
    get_positional_stats,
    get_schedule_comparison,
    get_season_standings,
    get_seasons,
    get_strength_of_schedule,
    get_trade_stats,
    get_trades,
)
from .store.season_store import SeasonStore, load_store

logger = logging.getLogger(__name__)


class LeagueHistory:
    def __init__(
        self,
        data_dir: Optional[str] = None,
        *,
        store: Optional[SeasonStore] = None,
        config: Optional[HistoryConfig] = None,
    ) -> None:
        if config is None and (data_dir is None and store is None):
            config = load_config()
        self.config = config
        self.data_dir = data_dir or (config.data_dir if config else None)
        self.simulation_trials = config.simulation_trials if config else DEFAULT_SIMULATION_TRIALS
        self.simulation_seed = config.simulation_seed if config else None
        self.store: Optional[SeasonStore] = store

    def load(self) -> None:
        if self.data_dir is None:
            raise RuntimeError("No data directory configured; set LEAGUE_HISTORY_DATA_DIR.")
        self.store = load_store(self.data_dir)
        logger.info("League history ready: %d seasons", len(self.store.years()))

    def _require_store(self) -> SeasonStore:
        if self.store is None:
            raise RuntimeError("Data not loaded. Call load() before querying.")
        return self.store

    def get_seasons(self) -> dict[str, Any]:
        """List loaded seasons with playoff settings and completion state."""
        return get_seasons(self._require_store())

    def get_season_standings(self, year: int) -> dict[str, Any]:
        return get_season_standings(self._require_store(), year)

    def get_cumulative_standings(
        self, year_from: int | None = None, year_to: int | None = None
    ) -> dict[str, Any]:
        """All-time table per owner with championships and scoring crowns.

        See queries.league.get_cumulative_standings for full return structure.
        """
        return get_cumulative_standings(self._require_store(), year_from, year_to)

    def get_h2h_record(
        self,
        team1: Any,
        team2: Any,
        year_from: int | None = None,
        year_to: int | None = None,
        data_mode: str = "regular",
        include_games: bool = False,
    ) -> dict[str, Any]:
        """Head-to-head record between two teams.

        Args:
            team1: Manager id or name, owner id, or user display name.
            team2: Same as team1.
            year_from: First season to include (inclusive).
            year_to: Last season to include (inclusive).
            data_mode: "regular", "playoffs", or "combined".
            include_games: Include the game list and current streak.

        See queries.managers.get_h2h_record for full return structure.
        """
        return get_h2h_record(
            self._require_store(), team1, team2, year_from, year_to, data_mode, include_games
        )

    def get_manager_stats(self, manager_key: Any, data_mode: str = "regular") -> dict[str, Any]:
        """Career statistics for a manager.

        Returns {"found": False, ...} when the manager cannot be resolved.
        """
        return get_manager_stats(self._require_store(), manager_key, data_mode)

    def get_schedule_comparison(self, year: int) -> dict[str, Any]:
        return get_schedule_comparison(self._require_store(), year)

    def get_all_time_schedule_comparison(self, active_only: bool = False) -> dict[str, Any]:
        return get_all_time_schedule_comparison(self._require_store(), active_only)

    def get_strength_of_schedule(self, year: int) -> dict[str, Any]:
        return get_strength_of_schedule(self._require_store(), year)

    def get_playoff_odds(
        self, year: int, picks: Any = None, seed: int | None = None
    ) -> dict[str, Any]:
        """Monte Carlo playoff odds, optionally with forced scenario picks.

        See queries.playoffs.get_playoff_odds for the pick format.
        """
        return get_playoff_odds(
            self._require_store(),
            year,
            picks,
            seed=seed if seed is not None else self.simulation_seed,
            num_simulations=self.simulation_trials,
        )

    def get_positional_stats(
        self,
        filters: Any,
        year_from: int | None = None,
        year_to: int | None = None,
        include_playoffs: bool = False,
    ) -> dict[str, Any]:
        return get_positional_stats(
            self._require_store(), filters, year_from, year_to, include_playoffs
        )

    def get_best_performances(
        self,
        year_from: int | None = None,
        year_to: int | None = None,
        limit: int = 10,
        unique_players: bool = False,
    ) -> dict[str, Any]:
        return get_best_performances(
            self._require_store(), year_from, year_to, limit, unique_players
        )

    def get_trades(
        self,
        year: int,
        week: int | None = None,
        trade_type: str = "all",
        team: Any = None,
    ) -> dict[str, Any]:
        """Completed trades for a season or one week.

        Args:
            year: Season year.
            week: Only trades filed under this week.
            trade_type: "all", "player" (no draft picks) or "draft".
            team: Only trades involving this team (manager, owner id or name).

        See queries.trades.get_trades for full return structure.
        """
        return get_trades(self._require_store(), year, week, trade_type, team)

    def get_trade_stats(
        self,
        year_from: int | None = None,
        year_to: int | None = None,
        active_only: bool = False,
    ) -> dict[str, Any]:
        return get_trade_stats(self._require_store(), year_from, year_to, active_only)
