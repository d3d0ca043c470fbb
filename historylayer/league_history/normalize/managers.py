"""Normalization helpers for the cross-season manager directory."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..schema.models import Manager


def _as_years(value: Any) -> tuple[int, ...]:
    if not isinstance(value, list):
        return ()
    years: list[int] = []
    for item in value:
        try:
            years.append(int(item))
        except (TypeError, ValueError):
            continue
    return tuple(years)


def normalize_managers(raw_managers: Iterable[Mapping[str, Any]]) -> list[Manager]:
    rows: list[Manager] = []
    for raw_manager in raw_managers or []:
        manager_id = raw_manager.get("id")
        if manager_id is None:
            continue
        sleeper = raw_manager.get("sleeper") or {}
        user_ids = raw_manager.get("userId") or []
        if isinstance(user_ids, str):
            user_ids = [user_ids]
        rows.append(
            Manager(
                manager_id=str(manager_id),
                name=str(raw_manager.get("name") or ""),
                team_name=raw_manager.get("teamName") or None,
                sleeper_id=str(sleeper["id"]) if sleeper.get("id") else None,
                display_name=sleeper.get("display_name") or None,
                user_ids=tuple(str(user_id) for user_id in user_ids if user_id),
                first_place=_as_years(raw_manager.get("firstPlace")),
                second_place=_as_years(raw_manager.get("secondPlace")),
            )
        )
    return rows
