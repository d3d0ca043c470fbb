"""Trade history query functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ..analytics.trades import get_all_time_trade_stats, get_season_trades, get_week_trades
from ._helpers import to_payload, year_range
from ._resolvers import resolve_owner_ids

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore


def get_trades(
    store: "SeasonStore",
    year: int,
    week: Optional[int] = None,
    trade_type: str = "all",
    team: Any = None,
) -> dict[str, Any]:
    """Completed trades in a season or a single week, most recent first.

    Returns:
        {
            "found": True,
            "year": int,
            "week": int | None,
            "trades": [
                {
                    "transaction_id": str,
                    "week": int,
                    "formatted_date": str,  # "Week 7" or "Pre-Draft, August 20, 2023"
                    "is_draft_pick_trade": bool,
                    "teams": [
                        {
                            "roster_id": int,
                            "owner_id": str | None,
                            "gives": {"players": [...], "draft_picks": [...], "waiver_budget": [...]},
                            "receives": {...}  # Same structure
                        },
                        ...
                    ]
                },
                ...
            ]
        }

        Returns {"found": False, ...} if the season or team is not found.
    """
    season = store.get_season(year)
    if season is None:
        return {"found": False, "year": year}

    roster_ids: list[int] = []
    if team is not None and team != "":
        resolved = resolve_owner_ids(store, team)
        if not resolved["found"]:
            return resolved
        roster = season.roster_for_owner(resolved["owner_ids"])
        if roster is None:
            return {"found": False, "year": season.year, "team": team}
        roster_ids.append(roster.roster_id)

    if week is not None:
        trades = get_week_trades(
            store, season, int(week), trade_type=trade_type, roster_ids=roster_ids
        )
    else:
        trades = get_season_trades(store, season, trade_type=trade_type, roster_ids=roster_ids)
    return {
        "found": True,
        "year": season.year,
        "week": week,
        "trade_type": trade_type,
        "trades": to_payload(trades),
    }


def get_trade_stats(
    store: "SeasonStore",
    year_from: Optional[int] = None,
    year_to: Optional[int] = None,
    active_only: bool = False,
) -> dict[str, Any]:
    """All-time trade counts per manager, per player and per manager pair."""
    stats = get_all_time_trade_stats(
        store, years=year_range(store, year_from, year_to), active_only=active_only
    )
    return {"found": True, **to_payload(stats)}
