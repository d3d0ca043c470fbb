"""Playoff odds query functions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Optional

from ..analytics.playoff_odds import (
    NUM_SIMULATIONS,
    apply_user_scenario,
    calculate_playoff_odds,
    get_current_standings,
    get_remaining_schedule,
)
from ..analytics.weeks import get_completed_week
from ..schema.inputs import PlayoffScenario
from ._helpers import to_payload

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore


def _coerce_scenario(picks: Any) -> Optional[PlayoffScenario]:
    if picks is None or picks == "":
        return None
    if isinstance(picks, PlayoffScenario):
        return picks
    if isinstance(picks, str):
        picks = json.loads(picks)
    if isinstance(picks, list):
        picks = {"picks": picks}
    return PlayoffScenario.model_validate(picks)


def get_playoff_odds(
    store: "SeasonStore",
    year: int,
    picks: Any = None,
    seed: Optional[int] = None,
    num_simulations: int = NUM_SIMULATIONS,
) -> dict[str, Any]:
    """Monte Carlo playoff odds for a season.

    ``picks`` may be a PlayoffScenario, a list of pick dicts, or the same as a
    JSON string. Each pick is {"week", "matchup_id", "winner", optional
    "team1_score"/"team2_score"}.
    """
    season = store.get_season(year)
    if season is None:
        return {"found": False, "year": year}
    scenario = _coerce_scenario(picks)
    results = calculate_playoff_odds(
        season, scenario, num_simulations=num_simulations, seed=seed
    )
    payload: dict[str, Any] = {
        "found": bool(results),
        "year": season.year,
        "completed_week": get_completed_week(season.league),
        "num_simulations": num_simulations,
        "teams": to_payload(results),
    }
    if scenario is not None:
        projected = apply_user_scenario(
            get_current_standings(season), get_remaining_schedule(season), scenario
        )
        payload["projected_records"] = {
            roster_id: {"wins": record.wins, "losses": record.losses, "ties": record.ties}
            for roster_id, record in projected.items()
        }
    return payload
