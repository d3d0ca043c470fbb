"""Normalization helpers for league payloads."""

from __future__ import annotations

from typing import Any, Mapping

from ..schema.models import League


def _as_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _setting(raw_league: Mapping[str, Any], key: str) -> int | None:
    """Read an integer setting, preferring a top-level override."""
    settings = raw_league.get("settings") or {}
    return _as_int(raw_league.get(key) or settings.get(key))


def normalize_league(raw_league: Mapping[str, Any]) -> League:
    """Normalize a season's league.json.

    ``leg`` and ``last_scored_leg`` drive week completion for in-progress
    seasons; historical exports usually omit both.
    """
    return League(
        league_id=str(raw_league.get("league_id") or ""),
        season=str(raw_league.get("season", "")),
        name=str(raw_league.get("name", "")),
        status=str(raw_league.get("status") or ""),
        playoff_week_start=_setting(raw_league, "playoff_week_start"),
        playoff_teams=_setting(raw_league, "playoff_teams"),
        num_teams=_as_int(raw_league.get("total_rosters")) or _setting(raw_league, "num_teams"),
        divisions=_setting(raw_league, "divisions") or 0,
        leg=_setting(raw_league, "leg"),
        last_scored_leg=_setting(raw_league, "last_scored_leg"),
        roster_positions=tuple(str(slot) for slot in raw_league.get("roster_positions") or ()),
    )
