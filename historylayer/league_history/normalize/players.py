"""Normalization helpers for player directories."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..schema.models import Player


def _full_name(raw_player: Mapping[str, Any]) -> str | None:
    name = raw_player.get("full_name")
    if name:
        return str(name)
    first = raw_player.get("first_name")
    last = raw_player.get("last_name")
    if first and last:
        return f"{first} {last}"
    return None


def _iter_raw_players(raw_players: Any) -> Iterable[tuple[str, Mapping[str, Any]]]:
    if isinstance(raw_players, Mapping):
        for player_id, raw_player in raw_players.items():
            if isinstance(raw_player, Mapping):
                yield str(raw_player.get("player_id") or player_id), raw_player
    elif isinstance(raw_players, list):
        for raw_player in raw_players:
            if isinstance(raw_player, Mapping) and raw_player.get("player_id") is not None:
                yield str(raw_player["player_id"]), raw_player


def normalize_players(raw_players: Any) -> dict[str, Player]:
    """Normalize a player directory keyed by player id.

    Accepts either Sleeper's ``{player_id: player}`` mapping or a list of
    player dicts carrying their own ``player_id``.
    """
    players: dict[str, Player] = {}
    for player_id, raw_player in _iter_raw_players(raw_players):
        players[player_id] = Player(
            player_id=player_id,
            first_name=raw_player.get("first_name"),
            last_name=raw_player.get("last_name"),
            full_name=_full_name(raw_player),
            position=str(raw_player.get("position") or "UNK"),
            team=raw_player.get("team"),
            fantasy_positions=tuple(raw_player.get("fantasy_positions") or ()),
        )
    return players
