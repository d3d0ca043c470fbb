"""Read-only, in-memory store of normalized seasons keyed by year."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from ..analytics.weeks import is_week_completed
from ..normalize import (
    group_transactions_by_week,
    normalize_bracket,
    normalize_draft,
    normalize_league,
    normalize_managers,
    normalize_matchups,
    normalize_picks,
    normalize_players,
    normalize_rosters,
    normalize_users,
)
from ..schema.models import Manager, Player, Season

logger = logging.getLogger(__name__)


def build_season(
    year: int,
    *,
    league: Mapping[str, Any],
    rosters: Iterable[Mapping[str, Any]] = (),
    users: Iterable[Mapping[str, Any]] = (),
    matchups: Optional[Mapping[int, Iterable[Mapping[str, Any]]]] = None,
    winners_bracket: Iterable[Mapping[str, Any]] = (),
    losers_bracket: Iterable[Mapping[str, Any]] = (),
    draft: Optional[Mapping[str, Any]] = None,
    picks: Iterable[Mapping[str, Any]] = (),
    players: Any = None,
    transactions: Any = None,
) -> Season:
    """Build a Season from raw Sleeper payloads."""
    weekly = {
        int(week): tuple(normalize_matchups(rows))
        for week, rows in (matchups or {}).items()
    }
    return Season(
        year=int(year),
        league=normalize_league(league),
        rosters=tuple(normalize_rosters(rosters)),
        users=tuple(normalize_users(users)),
        matchups=weekly,
        winners_bracket=tuple(normalize_bracket(winners_bracket, bracket="winners")),
        losers_bracket=tuple(normalize_bracket(losers_bracket, bracket="losers")),
        draft=normalize_draft(draft),
        picks=tuple(normalize_picks(picks)),
        players=normalize_players(players or {}),
        transactions=group_transactions_by_week(transactions or {}),
    )


class SeasonStore:
    """Registry of seasons, managers and players handed to every aggregator."""

    def __init__(
        self,
        seasons: Iterable[Season],
        *,
        managers: Iterable[Manager] = (),
        players: Optional[Mapping[str, Player]] = None,
    ) -> None:
        self._seasons = {season.year: season for season in seasons}
        self.managers: tuple[Manager, ...] = tuple(managers)
        self.players: Mapping[str, Player] = dict(players or {})
        self._unmatched_positions = self._index_unmatched_positions()

    def _index_unmatched_positions(self) -> dict[str, str]:
        positions: dict[str, str] = {}
        for year in sorted(self._seasons):
            for rows in self._seasons[year].matchups.values():
                for matchup in rows:
                    for player_id, position in matchup.unmatched_players.items():
                        if position and position != "UNK":
                            positions.setdefault(player_id, position)
        return positions

    def years(self) -> list[int]:
        return sorted(self._seasons)

    def get_season(self, year: int) -> Optional[Season]:
        return self._seasons.get(int(year))

    def seasons(self, years: Optional[Iterable[int]] = None) -> list[Season]:
        """Return seasons in ascending year order, optionally limited to ``years``."""
        if years is None:
            return [self._seasons[year] for year in self.years()]
        wanted = {int(year) for year in years}
        return [self._seasons[year] for year in self.years() if year in wanted]

    def get_manager(self, manager_id: str) -> Optional[Manager]:
        for manager in self.managers:
            if manager.manager_id == str(manager_id):
                return manager
        return None

    def manager_for_owner(self, owner_id: Optional[str]) -> Optional[Manager]:
        if owner_id is None:
            return None
        for manager in self.managers:
            if owner_id in manager.owner_ids:
                return manager
        return None

    def get_player(self, player_id: str, year: Optional[int] = None) -> Optional[Player]:
        """Look up a player, synthesizing a record for free-text legacy names."""
        if year is not None:
            season = self.get_season(year)
            if season is not None and player_id in season.players:
                return season.players[player_id]
        if player_id in self.players:
            return self.players[player_id]
        if " " in player_id:
            first, _, last = player_id.partition(" ")
            return Player(
                player_id=player_id,
                first_name=first,
                last_name=last,
                full_name=player_id,
                position=self._unmatched_positions.get(player_id, "UNK"),
            )
        return None

    def unmatched_position(self, player_id: str) -> Optional[str]:
        return self._unmatched_positions.get(player_id)

    def is_week_completed(self, year: int, week: int) -> bool:
        season = self.get_season(year)
        return is_week_completed(week, season.league if season else None)


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _read_optional(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    return _read_json(path)


def _load_season_dir(year_dir: Path) -> Optional[Season]:
    league_path = year_dir / "league.json"
    if not league_path.exists():
        logger.warning("Skipping %s: no league.json", year_dir)
        return None

    raw_league = _read_json(league_path)
    if not isinstance(raw_league, dict) or not raw_league.get("league_id"):
        logger.warning("Skipping %s: league.json has no league_id", year_dir)
        return None

    matchups: dict[int, Any] = {}
    matchup_dir = year_dir / "matchups"
    if matchup_dir.is_dir():
        for week_path in sorted(matchup_dir.glob("*.json")):
            if not week_path.stem.isdigit():
                continue
            matchups[int(week_path.stem)] = _read_json(week_path)

    season = build_season(
        int(year_dir.name),
        league=raw_league,
        rosters=_read_optional(year_dir / "rosters.json", []),
        users=_read_optional(year_dir / "users.json", []),
        matchups=matchups,
        winners_bracket=_read_optional(year_dir / "winners_bracket.json", []),
        losers_bracket=_read_optional(year_dir / "losers_bracket.json", []),
        draft=_read_optional(year_dir / "draft.json", None),
        picks=_read_optional(year_dir / "picks.json", []),
        players=_read_optional(year_dir / "players.json", {}),
        transactions=_read_optional(year_dir / "transactions.json", {}),
    )
    logger.debug(
        "Loaded season %s: %d rosters, %d weeks",
        season.year,
        len(season.rosters),
        len(season.weeks()),
    )
    return season


def load_store(data_dir: str | Path) -> SeasonStore:
    """Load every ``<year>/`` directory under ``data_dir`` into a SeasonStore."""
    root = Path(data_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"League history data directory not found: {root}")

    seasons: list[Season] = []
    for year_dir in sorted(root.iterdir()):
        if not year_dir.is_dir() or not year_dir.name.isdigit():
            continue
        season = _load_season_dir(year_dir)
        if season is not None:
            seasons.append(season)

    managers = normalize_managers(_read_optional(root / "managers.json", []))
    players = normalize_players(_read_optional(root / "players.json", {}))
    logger.info(
        "Loaded %d seasons (%s) and %d managers from %s",
        len(seasons),
        ", ".join(str(season.year) for season in seasons),
        len(managers),
        root,
    )
    return SeasonStore(seasons, managers=managers, players=players)
