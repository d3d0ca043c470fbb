"""Owner and manager resolution for flexible lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._helpers import normalize_lookup_key

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore


def _known_owner_ids(store: "SeasonStore") -> set[str]:
    return {
        roster.owner_id
        for season in store.seasons()
        for roster in season.rosters
        if roster.owner_id
    }


def resolve_manager(store: "SeasonStore", manager_key: Any) -> dict[str, Any]:
    """Resolve a manager id, owner id, or manager name to a manager.

    Returns:
        On success: {"found": True, "manager_id": str, "manager_name": str}
        On failure: {"found": False, "manager_key": ...}
        On ambiguous: {"found": False, "manager_key": ..., "matches": [...]}
    """
    key = normalize_lookup_key(manager_key)
    if not key:
        return {"found": False, "manager_key": manager_key}

    manager = store.get_manager(key) or store.manager_for_owner(key)
    if manager is not None:
        return {"found": True, "manager_id": manager.manager_id, "manager_name": manager.name}

    lowered = key.lower()
    matches = [
        manager
        for manager in store.managers
        if lowered
        in {
            (manager.name or "").lower(),
            (manager.display_name or "").lower(),
            (manager.team_name or "").lower(),
        }
    ]
    if not matches:
        return {"found": False, "manager_key": manager_key}
    if len(matches) > 1:
        return {
            "found": False,
            "manager_key": manager_key,
            "matches": [{"manager_id": m.manager_id, "manager_name": m.name} for m in matches],
        }
    return {"found": True, "manager_id": matches[0].manager_id, "manager_name": matches[0].name}


def resolve_owner_ids(store: "SeasonStore", team_key: Any) -> dict[str, Any]:
    """Resolve a team key to every owner id it covers across seasons.

    Manager entries expand to all of their owner ids; a bare owner id or a
    user display name resolves to that single id.

    Returns:
        On success: {"found": True, "owner_ids": [str, ...], "name": str | None}
        On failure: {"found": False, "team_key": ...}
    """
    key = normalize_lookup_key(team_key)
    if not key:
        return {"found": False, "team_key": team_key}

    manager = resolve_manager(store, key)
    if manager["found"]:
        resolved = store.get_manager(manager["manager_id"])
        return {
            "found": True,
            "owner_ids": list(resolved.owner_ids),
            "name": resolved.name,
        }
    if manager.get("matches"):
        return {"found": False, "team_key": team_key, "matches": manager["matches"]}

    if key in _known_owner_ids(store):
        return {"found": True, "owner_ids": [key], "name": None}

    lowered = key.lower()
    user_ids = sorted(
        {
            user.user_id
            for season in store.seasons()
            for user in season.users
            if user.display_name.lower() == lowered or (user.team_name or "").lower() == lowered
        }
    )
    if len(user_ids) == 1:
        return {"found": True, "owner_ids": user_ids, "name": key}
    if len(user_ids) > 1:
        return {"found": False, "team_key": team_key, "matches": user_ids}
    return {"found": False, "team_key": team_key}
