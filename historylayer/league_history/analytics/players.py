"""Player name and position resolution with legacy-data fallbacks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..schema.models import Matchup

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore

UNKNOWN_POSITION = "UNK"


def get_player_name(store: "SeasonStore", player_id: str, year: Optional[int] = None) -> str:
    player = store.get_player(player_id, year)
    if player is None:
        return player_id
    return player.name or player_id


def get_player_position(
    store: "SeasonStore",
    player_id: str,
    year: Optional[int] = None,
    matchup: Optional[Matchup] = None,
) -> str:
    """Resolve a player's position, falling back through legacy sources.

    Order: the player directory, the matchup's ``unmatched_players`` map,
    any season's ``unmatched_players``, then a directory entry with the same
    full name. Returns "UNK" when nothing resolves.
    """
    if not player_id or player_id == "0":
        return UNKNOWN_POSITION

    player = store.get_player(player_id, year)
    if player is not None and player.position and player.position != UNKNOWN_POSITION:
        return player.position

    if matchup is not None:
        position = matchup.unmatched_players.get(player_id)
        if position and position != UNKNOWN_POSITION:
            return position

    position = store.unmatched_position(player_id)
    if position:
        return position

    if " " in player_id:
        wanted = player_id.lower()
        for candidate in store.players.values():
            if candidate.name and candidate.name.lower() == wanted:
                if candidate.position and candidate.position != UNKNOWN_POSITION:
                    return candidate.position

    return UNKNOWN_POSITION
