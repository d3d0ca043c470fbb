"""Monte Carlo playoff odds for the remaining regular season.

Each trial draws a score for both sides of every remaining game from the
team's own completed-week scoring distribution, adds the results to the
current standings and ranks the league. Position counts across trials give
the finishing distribution; summing positions up to the playoff cut gives
the playoff odds.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence

import numpy as np

from ..config import DEFAULT_SIMULATION_TRIALS
from ..schema.inputs import PlayoffScenario
from ..schema.models import Season
from .playoffs import get_playoff_teams, get_playoff_week_start, is_regular_season_week
from .records import TeamRecord, determine_matchup_result, sort_teams_by_record
from .weeks import is_week_completed

logger = logging.getLogger(__name__)

NUM_SIMULATIONS = DEFAULT_SIMULATION_TRIALS
FORCED_WIN_MIN_MARGIN = 1.0
FORCED_WIN_MARGIN_SPREAD = 10.0


class SimulationState(str, Enum):
    NOT_STARTED = "not_started"
    SIMULATING = "simulating"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TeamScoringProfile:
    roster_id: int
    mean: float
    std_dev: float
    games: int


@dataclass(frozen=True)
class ScheduledGame:
    week: int
    matchup_id: int
    team1: int
    team2: int


@dataclass
class PlayoffOddsResult:
    roster_id: int
    wins: int
    losses: int
    ties: int
    points_for: float
    playoff_odds: float
    position_odds: dict[int, float] = field(default_factory=dict)


def _completed(season: Season, week: int, completed_week: Optional[int]) -> bool:
    if completed_week is not None:
        return week <= completed_week
    return is_week_completed(week, season.league)


def _regular_weeks(season: Season) -> list[int]:
    start = get_playoff_week_start(season)
    return [week for week in season.weeks() if is_regular_season_week(week, start)]


def get_current_standings(
    season: Season, completed_week: Optional[int] = None
) -> dict[int, TeamRecord]:
    """Records from completed regular-season weeks, keyed by roster id."""
    standings = {roster.roster_id: TeamRecord() for roster in season.rosters}
    for week in _regular_weeks(season):
        if not _completed(season, week, completed_week):
            continue
        for matchup in season.week_matchups(week):
            record = standings.setdefault(matchup.roster_id, TeamRecord())
            opponent = season.opponent_of(week, matchup)
            if opponent is None:
                record.points_for += matchup.points
                continue
            record.add_result(
                determine_matchup_result(matchup.points, opponent.points),
                matchup.points,
                opponent.points,
            )
    return standings


def _mean_and_std(scores: Sequence[float]) -> tuple[float, float]:
    if not scores:
        return 0.0, 0.0
    mean = sum(scores) / len(scores)
    if len(scores) <= 1:
        return mean, 0.0
    variance = sum((score - mean) ** 2 for score in scores) / (len(scores) - 1)
    return mean, math.sqrt(variance)


def calculate_team_profiles(
    season: Season, completed_week: Optional[int] = None
) -> dict[int, TeamScoringProfile]:
    """Mean and sample standard deviation of each team's completed scores.

    A team without any completed game borrows the league-wide distribution.
    """
    scores: dict[int, list[float]] = {roster.roster_id: [] for roster in season.rosters}
    for week in _regular_weeks(season):
        if not _completed(season, week, completed_week):
            continue
        for matchup in season.week_matchups(week):
            scores.setdefault(matchup.roster_id, []).append(matchup.points)

    league_mean, league_std = _mean_and_std([s for rows in scores.values() for s in rows])
    profiles: dict[int, TeamScoringProfile] = {}
    for roster_id, rows in scores.items():
        if rows:
            mean, std_dev = _mean_and_std(rows)
        else:
            mean, std_dev = league_mean, league_std
        profiles[roster_id] = TeamScoringProfile(roster_id, mean, std_dev, len(rows))
    return profiles


def get_remaining_schedule(
    season: Season, completed_week: Optional[int] = None
) -> list[ScheduledGame]:
    """Unplayed regular-season games; byes and unpaired entries are skipped."""
    games: list[ScheduledGame] = []
    for week in _regular_weeks(season):
        if _completed(season, week, completed_week):
            continue
        grouped: dict[int, list[int]] = {}
        for matchup in season.week_matchups(week):
            if matchup.matchup_id is None:
                continue
            grouped.setdefault(matchup.matchup_id, []).append(matchup.roster_id)
        for matchup_id in sorted(grouped):
            roster_ids = grouped[matchup_id]
            if len(roster_ids) != 2:
                continue
            games.append(ScheduledGame(week, matchup_id, roster_ids[0], roster_ids[1]))
    return games


def apply_user_scenario(
    standings: Mapping[int, TeamRecord],
    games: Sequence[ScheduledGame],
    scenario: Optional[PlayoffScenario],
) -> dict[int, TeamRecord]:
    """Standings with only the user's picks applied, for display."""
    projected = {roster_id: copy.copy(record) for roster_id, record in standings.items()}
    if scenario is None:
        return projected
    for game in games:
        pick = scenario.pick_for(game.week, game.matchup_id)
        if pick is None or pick.winner not in (game.team1, game.team2):
            continue
        loser = game.team2 if pick.winner == game.team1 else game.team1
        winner_points = loser_points = 0.0
        if pick.has_scores:
            team1_score, team2_score = pick.team1_score, pick.team2_score
            winner_points = team1_score if pick.winner == game.team1 else team2_score
            loser_points = team2_score if pick.winner == game.team1 else team1_score
        projected.setdefault(pick.winner, TeamRecord()).add_result("W", winner_points, loser_points)
        projected.setdefault(loser, TeamRecord()).add_result("L", loser_points, winner_points)
    return projected


def _box_muller(rng: np.random.Generator, shape: tuple[int, ...]) -> np.ndarray:
    u1 = 1.0 - rng.random(shape)
    u2 = rng.random(shape)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


@dataclass
class _Ranked:
    roster_id: int
    record: TeamRecord

    @property
    def wins(self) -> int:
        return self.record.wins

    @property
    def losses(self) -> int:
        return self.record.losses

    @property
    def ties(self) -> int:
        return self.record.ties

    @property
    def points_for(self) -> float:
        return self.record.points_for


class PlayoffOddsSimulator:
    """Single-pass simulator: NOT_STARTED -> SIMULATING -> COMPLETE."""

    def __init__(
        self,
        standings: Mapping[int, TeamRecord],
        profiles: Mapping[int, TeamScoringProfile],
        remaining_games: Sequence[ScheduledGame],
        *,
        playoff_teams: int,
        scenario: Optional[PlayoffScenario] = None,
        num_simulations: int = NUM_SIMULATIONS,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if num_simulations < 1:
            raise ValueError("num_simulations must be at least 1.")
        self.standings = dict(standings)
        self.profiles = dict(profiles)
        self.remaining_games = list(remaining_games)
        self.playoff_teams = playoff_teams
        self.scenario = scenario
        self.num_simulations = num_simulations
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.state = SimulationState.NOT_STARTED
        self.results: list[PlayoffOddsResult] = []

    def run(self) -> list[PlayoffOddsResult]:
        if self.state is not SimulationState.NOT_STARTED:
            raise RuntimeError(f"Simulation already {self.state.value}.")
        self.state = SimulationState.SIMULATING
        if not self.standings:
            self.results = []
        elif not self.remaining_games:
            self.results = self._settled_results()
        else:
            self.results = self._simulate()
        self.state = SimulationState.COMPLETE
        return self.results

    def _settled_results(self) -> list[PlayoffOddsResult]:
        ordered = sort_teams_by_record(
            _Ranked(roster_id, record) for roster_id, record in sorted(self.standings.items())
        )
        cut = min(self.playoff_teams, len(ordered))
        results: list[PlayoffOddsResult] = []
        for position, row in enumerate(ordered, start=1):
            results.append(
                self._result(
                    row.roster_id,
                    {position: 100.0},
                    100.0 if position <= cut else 0.0,
                )
            )
        return results

    def _simulate(self) -> list[PlayoffOddsResult]:
        roster_ids = sorted(self.standings)
        index = {roster_id: i for i, roster_id in enumerate(roster_ids)}
        games = [
            game
            for game in self.remaining_games
            if game.team1 in index and game.team2 in index
        ]
        trials = self.num_simulations
        n_teams = len(roster_ids)
        n_games = len(games)
        logger.debug(
            "Simulating %d trials over %d remaining games for %d teams",
            trials,
            n_games,
            n_teams,
        )

        means = np.array([self._profile(roster_id).mean for roster_id in roster_ids])
        stds = np.array([self._profile(roster_id).std_dev for roster_id in roster_ids])
        team1 = np.array([index[game.team1] for game in games], dtype=int)
        team2 = np.array([index[game.team2] for game in games], dtype=int)
        pairs = np.stack([team1, team2], axis=1)

        scores = np.maximum(0.0, means[pairs] + stds[pairs] * _box_muller(self.rng, (trials, n_games, 2)))
        team1_scores = scores[:, :, 0]
        team2_scores = scores[:, :, 1]
        team1_wins = team1_scores > team2_scores
        team2_wins = team1_scores < team2_scores
        self._apply_picks(games, team1_scores, team2_scores, team1_wins, team2_wins)
        tied = ~(team1_wins | team2_wins)

        home = np.zeros((n_games, n_teams))
        home[np.arange(n_games), team1] = 1.0
        away = np.zeros((n_games, n_teams))
        away[np.arange(n_games), team2] = 1.0

        base = [self.standings[roster_id] for roster_id in roster_ids]
        wins = np.array([r.wins for r in base], float) + team1_wins @ home + team2_wins @ away
        losses = np.array([r.losses for r in base], float) + team2_wins @ home + team1_wins @ away
        ties = np.array([r.ties for r in base], float) + tied @ home + tied @ away
        points = np.array([r.points_for for r in base]) + team1_scores @ home + team2_scores @ away

        played = wins + losses + ties
        win_pct = np.divide(
            wins + 0.5 * ties, played, out=np.zeros_like(wins), where=played > 0
        )
        # lexsort is stable; the last key is the primary one.
        order = np.lexsort((-points, -win_pct), axis=-1)
        counts = np.zeros((n_teams, n_teams), dtype=np.int64)
        positions = np.broadcast_to(np.arange(n_teams), order.shape)
        np.add.at(counts, (order, positions), 1)

        cut = min(self.playoff_teams, n_teams)
        percentages = counts / trials * 100.0
        results: list[PlayoffOddsResult] = []
        for roster_id in roster_ids:
            row = percentages[index[roster_id]]
            position_odds = {
                position + 1: round(float(value), 2)
                for position, value in enumerate(row)
                if value > 0
            }
            results.append(
                self._result(roster_id, position_odds, round(float(row[:cut].sum()), 2))
            )
        ranked = sort_teams_by_record(
            [_Ranked(roster_id, self.standings[roster_id]) for roster_id in roster_ids]
        )
        order_map = {row.roster_id: i for i, row in enumerate(ranked)}
        results.sort(key=lambda result: order_map[result.roster_id])
        return results

    def _apply_picks(
        self,
        games: Sequence[ScheduledGame],
        team1_scores: np.ndarray,
        team2_scores: np.ndarray,
        team1_wins: np.ndarray,
        team2_wins: np.ndarray,
    ) -> None:
        if self.scenario is None:
            return
        for g, game in enumerate(games):
            pick = self.scenario.pick_for(game.week, game.matchup_id)
            if pick is None:
                continue
            if pick.winner not in (game.team1, game.team2):
                logger.warning(
                    "Ignoring pick for week %s matchup %s: roster %s is not playing",
                    game.week,
                    game.matchup_id,
                    pick.winner,
                )
                continue
            winner_is_team1 = pick.winner == game.team1
            if pick.has_scores:
                team1_scores[:, g] = pick.team1_score
                team2_scores[:, g] = pick.team2_score
            else:
                winner = team1_scores[:, g] if winner_is_team1 else team2_scores[:, g]
                loser = team2_scores[:, g] if winner_is_team1 else team1_scores[:, g]
                needs_lift = winner <= loser
                margin = FORCED_WIN_MIN_MARGIN + self.rng.random(len(winner)) * FORCED_WIN_MARGIN_SPREAD
                lifted = np.maximum(winner, loser) + margin
                winner[needs_lift] = lifted[needs_lift]
            team1_wins[:, g] = winner_is_team1
            team2_wins[:, g] = not winner_is_team1

    def _profile(self, roster_id: int) -> TeamScoringProfile:
        profile = self.profiles.get(roster_id)
        if profile is None:
            return TeamScoringProfile(roster_id, 0.0, 0.0, 0)
        return profile

    def _result(
        self, roster_id: int, position_odds: dict[int, float], playoff_odds: float
    ) -> PlayoffOddsResult:
        record = self.standings[roster_id]
        return PlayoffOddsResult(
            roster_id=roster_id,
            wins=record.wins,
            losses=record.losses,
            ties=record.ties,
            points_for=round(record.points_for, 2),
            playoff_odds=playoff_odds,
            position_odds=position_odds,
        )


def calculate_playoff_odds(
    season: Season,
    scenario: Optional[PlayoffScenario] = None,
    *,
    num_simulations: int = NUM_SIMULATIONS,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    completed_week: Optional[int] = None,
) -> list[PlayoffOddsResult]:
    """Playoff odds for every roster in the season, best current record first.

    Returns an empty list for a season without regular-season matchups, or
    one where no regular-season week has been scored yet.
    When nothing remains to be played the odds are settled: 100 for teams
    inside the playoff cut and 0 for everyone else.
    """
    regular_weeks = _regular_weeks(season)
    if not any(_completed(season, week, completed_week) for week in regular_weeks):
        return []
    simulator = PlayoffOddsSimulator(
        get_current_standings(season, completed_week),
        calculate_team_profiles(season, completed_week),
        get_remaining_schedule(season, completed_week),
        playoff_teams=get_playoff_teams(season),
        scenario=scenario,
        num_simulations=num_simulations,
        seed=seed,
        rng=rng,
    )
    return simulator.run()
