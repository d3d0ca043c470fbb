"""Normalization helpers for roster payloads."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..schema.models import Roster


def _points_from_settings(settings: Mapping[str, int | float | None], *, prefix: str) -> float:
    whole = settings.get(prefix, 0) or 0
    decimal = settings.get(f"{prefix}_decimal", 0) or 0
    return float(whole) + float(decimal) / 100.0


def normalize_rosters(raw_rosters: Iterable[Mapping[str, Any]]) -> list[Roster]:
    """Normalize raw Sleeper rosters, combining split point totals.

    Sleeper stores season points as an integer part plus a hundredths part
    (``fpts`` and ``fpts_decimal``); both halves are combined here so the
    analytics layer only ever sees a single float.
    """
    rows: list[Roster] = []
    for raw_roster in raw_rosters:
        roster_id = raw_roster.get("roster_id")
        if roster_id is None:
            continue
        settings = raw_roster.get("settings") or {}
        owner_id = raw_roster.get("owner_id")
        division = settings.get("division")
        rows.append(
            Roster(
                roster_id=int(roster_id),
                owner_id=str(owner_id) if owner_id is not None else None,
                wins=int(settings.get("wins", 0) or 0),
                losses=int(settings.get("losses", 0) or 0),
                ties=int(settings.get("ties", 0) or 0),
                points_for=_points_from_settings(settings, prefix="fpts"),
                points_against=_points_from_settings(settings, prefix="fpts_against"),
                division=int(division) if division is not None else None,
                players=tuple(str(pid) for pid in raw_roster.get("players") or [] if pid),
            )
        )
    return rows
