"""Configuration helpers for the league history layer."""

from __future__ import annotations

from dataclasses import dataclass
import os
from dotenv import load_dotenv

DEFAULT_SIMULATION_TRIALS = 10_000


@dataclass(frozen=True)
class HistoryConfig:
    data_dir: str
    simulation_trials: int = DEFAULT_SIMULATION_TRIALS
    simulation_seed: int | None = None


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer.") from exc


def load_config() -> HistoryConfig:
    load_dotenv()
    data_dir = os.getenv("LEAGUE_HISTORY_DATA_DIR")
    if not data_dir:
        raise ValueError("LEAGUE_HISTORY_DATA_DIR must be set.")

    trials = _optional_int("PLAYOFF_ODDS_TRIALS")
    if trials is not None and trials <= 0:
        raise ValueError("PLAYOFF_ODDS_TRIALS must be positive.")

    return HistoryConfig(
        data_dir=str(data_dir),
        simulation_trials=trials if trials is not None else DEFAULT_SIMULATION_TRIALS,
        simulation_seed=_optional_int("PLAYOFF_ODDS_SEED"),
    )
