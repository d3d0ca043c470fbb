"""Week completion checks driven by league settings."""

from __future__ import annotations

from typing import Optional

from ..schema.models import League


def get_completed_week(league: Optional[League]) -> Optional[int]:
    """Return the last fully scored week, or None when it cannot be known.

    ``None`` covers a missing league, a live league on its first leg, and
    historical seasons whose settings carry no ``leg`` marker. Only the
    last of these counts as complete.
    """
    if league is None or not league.leg:
        return None
    if league.last_scored_leg:
        return league.last_scored_leg
    if league.leg > 1:
        return league.leg - 1
    return None


def is_week_completed(week: int, league: Optional[League]) -> bool:
    completed_week = get_completed_week(league)
    if completed_week is None:
        # A live league still on its first leg has nothing scored yet.
        return league is not None and not league.leg
    return week <= completed_week
