"""Manager and head-to-head query functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ..analytics.h2h import get_all_time_h2h_record
from ..analytics.managers import get_manager_stats as compute_manager_stats
from ._helpers import to_payload, year_range
from ._resolvers import resolve_manager, resolve_owner_ids

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore


def get_manager_stats(
    store: "SeasonStore", manager_key: Any, data_mode: str = "regular"
) -> dict[str, Any]:
    resolved = resolve_manager(store, manager_key)
    if not resolved["found"]:
        return resolved
    stats = compute_manager_stats(store, resolved["manager_id"], data_mode)
    if stats is None:
        return {"found": False, "manager_key": manager_key}
    return {"found": True, **to_payload(stats)}


def get_h2h_record(
    store: "SeasonStore",
    team1: Any,
    team2: Any,
    year_from: Optional[int] = None,
    year_to: Optional[int] = None,
    data_mode: str = "regular",
    include_games: bool = False,
) -> dict[str, Any]:
    """Head-to-head record between two teams, from team1's side.

    Returns:
        {
            "found": True,
            "team1": {"owner_ids": [...], "name": ...},
            "team2": {...},
            "team1_wins": int, "team2_wins": int, "ties": int,
            "team1_avg_points": float, "team2_avg_points": float,
            "games": [...], "streak": {...} | None
        }
    """
    first = resolve_owner_ids(store, team1)
    if not first["found"]:
        return first
    second = resolve_owner_ids(store, team2)
    if not second["found"]:
        return second
    record = get_all_time_h2h_record(
        store,
        first["owner_ids"],
        second["owner_ids"],
        years=year_range(store, year_from, year_to),
        mode=data_mode,
        include_games=include_games,
    )
    payload = to_payload(record)
    if not include_games:
        payload.pop("games", None)
        payload.pop("streak", None)
    return {
        "found": True,
        "team1": {"owner_ids": first["owner_ids"], "name": first.get("name")},
        "team2": {"owner_ids": second["owner_ids"], "name": second.get("name")},
        "data_mode": data_mode,
        **payload,
    }
