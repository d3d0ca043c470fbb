"""Validated query inputs for filters and playoff scenarios."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

FilterPosition = Literal[
    "QB",
    "RB",
    "WR",
    "TE",
    "K",
    "DEF",
    "FLEX",
    "RB_INDIVIDUAL",
    "WR_INDIVIDUAL",
    "TE_INDIVIDUAL",
]
FilterOperator = Literal[">=", ">", "<=", "<", "="]


class PositionalFilter(BaseModel):
    """One positional-scoring predicate evaluated against a single matchup."""

    model_config = {"frozen": True}

    position: FilterPosition = Field(
        description="Lineup position total (QB, RB, ...) or an *_INDIVIDUAL player filter."
    )
    operator: FilterOperator = Field(description="Comparison applied to the score.")
    points: float = Field(description="Threshold the score is compared against.")
    min_count: int = Field(
        default=1,
        ge=1,
        description="Individual filters only: players that must meet the threshold.",
    )

    @property
    def is_individual(self) -> bool:
        return self.position.endswith("_INDIVIDUAL")

    @property
    def base_position(self) -> str:
        return self.position.removesuffix("_INDIVIDUAL")


class ScenarioPick(BaseModel):
    """A forced outcome for one remaining matchup."""

    model_config = {"frozen": True}

    week: int = Field(ge=1)
    matchup_id: int
    winner: int = Field(description="roster_id of the team forced to win.")
    team1_score: Optional[float] = Field(default=None, ge=0)
    team2_score: Optional[float] = Field(default=None, ge=0)

    @property
    def has_scores(self) -> bool:
        return self.team1_score is not None and self.team2_score is not None


class PlayoffScenario(BaseModel):
    picks: list[ScenarioPick] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_games(self) -> "PlayoffScenario":
        seen: set[tuple[int, int]] = set()
        for pick in self.picks:
            key = (pick.week, pick.matchup_id)
            if key in seen:
                raise ValueError(
                    f"Duplicate pick for week {pick.week} matchup {pick.matchup_id}."
                )
            seen.add(key)
        return self

    def pick_for(self, week: int, matchup_id: int) -> Optional[ScenarioPick]:
        for pick in self.picks:
            if pick.week == week and pick.matchup_id == matchup_id:
                return pick
        return None
