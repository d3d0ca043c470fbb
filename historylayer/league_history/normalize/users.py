"""Normalization helpers for user payloads."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..schema.models import User


def normalize_users(raw_users: Iterable[Mapping[str, Any]]) -> list[User]:
    """Flatten Sleeper users; the team name lives under ``metadata``."""
    rows: list[User] = []
    for raw_user in raw_users or []:
        user_id = raw_user.get("user_id")
        if user_id is None:
            continue
        metadata = raw_user.get("metadata") or {}
        rows.append(
            User(
                user_id=str(user_id),
                display_name=str(raw_user.get("display_name") or raw_user.get("username") or ""),
                team_name=metadata.get("team_name") or None,
                avatar=raw_user.get("avatar"),
            )
        )
    return rows
