"""Normalization helpers for matchup payloads."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..schema.models import Matchup


def _normalize_player_ids(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    # "0" is kept: it marks an empty starter slot and preserves slot order.
    return tuple(str(pid) if pid is not None else "0" for pid in value)


def _normalize_points_list(value: Any) -> tuple[float, ...]:
    if not isinstance(value, list):
        return ()
    points: list[float] = []
    for raw_points in value:
        try:
            points.append(float(raw_points))
        except (TypeError, ValueError):
            points.append(0.0)
    return tuple(points)


def _normalize_player_points(value: Any) -> dict[str, float]:
    if not isinstance(value, dict):
        return {}
    points: dict[str, float] = {}
    for player_id, raw_points in value.items():
        if player_id is None:
            continue
        try:
            points[str(player_id)] = float(raw_points)
        except (TypeError, ValueError):
            continue
    return points


def normalize_matchups(raw_matchups: Iterable[Mapping[str, Any]]) -> list[Matchup]:
    rows: list[Matchup] = []
    for raw_row in raw_matchups:
        roster_id = raw_row.get("roster_id")
        if roster_id is None:
            continue
        matchup_id = raw_row.get("matchup_id")
        unmatched = raw_row.get("unmatched_players")
        rows.append(
            Matchup(
                roster_id=int(roster_id),
                matchup_id=int(matchup_id) if matchup_id is not None else None,
                points=float(raw_row.get("points") or 0.0),
                starters=_normalize_player_ids(raw_row.get("starters")),
                starters_points=_normalize_points_list(raw_row.get("starters_points")),
                players=tuple(pid for pid in _normalize_player_ids(raw_row.get("players")) if pid != "0"),
                players_points=_normalize_player_points(raw_row.get("players_points")),
                unmatched_players=(
                    {str(key): str(value) for key, value in unmatched.items()}
                    if isinstance(unmatched, dict)
                    else {}
                ),
            )
        )
    return rows
