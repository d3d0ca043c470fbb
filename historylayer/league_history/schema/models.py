"""Canonical schema models for the league history layer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Mapping, Optional


class RecordMixin:
    """Small helper to expose models as JSON-ready dicts."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class League(RecordMixin):
    league_id: str
    season: str
    name: str
    status: str = ""
    playoff_week_start: Optional[int] = None
    playoff_teams: Optional[int] = None
    num_teams: Optional[int] = None
    divisions: int = 0
    leg: Optional[int] = None
    last_scored_leg: Optional[int] = None
    roster_positions: tuple[str, ...] = ()


@dataclass(frozen=True)
class User(RecordMixin):
    user_id: str
    display_name: str
    team_name: Optional[str] = None
    avatar: Optional[str] = None


@dataclass(frozen=True)
class Roster(RecordMixin):
    roster_id: int
    owner_id: Optional[str] = None
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    division: Optional[int] = None
    players: tuple[str, ...] = ()

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties


@dataclass(frozen=True)
class Matchup(RecordMixin):
    roster_id: int
    matchup_id: Optional[int]
    points: float = 0.0
    starters: tuple[str, ...] = ()
    starters_points: tuple[float, ...] = ()
    players: tuple[str, ...] = ()
    players_points: Mapping[str, float] = field(default_factory=dict)
    unmatched_players: Mapping[str, str] = field(default_factory=dict)

    def starter_points(self) -> list[tuple[int, str, float]]:
        """Return (slot index, player id, points) for each filled starter slot."""
        rows: list[tuple[int, str, float]] = []
        for index, player_id in enumerate(self.starters):
            if not player_id or player_id == "0":
                continue
            if index < len(self.starters_points):
                points = self.starters_points[index]
            else:
                points = self.players_points.get(player_id, 0.0)
            rows.append((index, player_id, float(points)))
        return rows


@dataclass(frozen=True)
class BracketMatch(RecordMixin):
    bracket: str
    round: int
    match_id: int
    t1: Optional[int] = None
    t2: Optional[int] = None
    winner: Optional[int] = None
    loser: Optional[int] = None
    placement: Optional[int] = None
    t1_from_match_id: Optional[int] = None
    t1_from_outcome: Optional[str] = None
    t2_from_match_id: Optional[int] = None
    t2_from_outcome: Optional[str] = None

    def involves(self, roster_id: int) -> bool:
        return roster_id in (self.t1, self.t2)


@dataclass(frozen=True)
class Draft(RecordMixin):
    draft_id: str
    season: str
    draft_type: Optional[str] = None
    rounds: Optional[int] = None
    teams: Optional[int] = None
    start_time: Optional[int] = None
    slot_to_roster_id: Mapping[int, int] = field(default_factory=dict)

    def slot_for_roster(self, roster_id: int) -> Optional[int]:
        for slot, slot_roster_id in self.slot_to_roster_id.items():
            if slot_roster_id == roster_id:
                return slot
        return None


@dataclass(frozen=True)
class DraftPick(RecordMixin):
    round: int
    pick_no: int
    player_id: str
    draft_slot: Optional[int] = None
    picked_by: Optional[str] = None
    roster_id: Optional[int] = None
    position: Optional[str] = None
    player_name: Optional[str] = None
    is_keeper: bool = False


@dataclass(frozen=True)
class TradedPick(RecordMixin):
    round: int
    season: str
    roster_id: int
    owner_id: Optional[int] = None
    previous_owner_id: Optional[int] = None


@dataclass(frozen=True)
class BudgetTransfer(RecordMixin):
    amount: int
    sender: Optional[int] = None
    receiver: Optional[int] = None


@dataclass(frozen=True)
class Transaction(RecordMixin):
    transaction_id: str
    type: str
    status: Optional[str] = None
    week: Optional[int] = None
    created: int = 0
    roster_ids: tuple[int, ...] = ()
    adds: Mapping[str, int] = field(default_factory=dict)
    drops: Mapping[str, int] = field(default_factory=dict)
    draft_picks: tuple[TradedPick, ...] = ()
    waiver_budget: tuple[BudgetTransfer, ...] = ()

    @property
    def is_completed_trade(self) -> bool:
        return self.type == "trade" and self.status == "complete"


@dataclass(frozen=True)
class Player(RecordMixin):
    player_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    position: str = "UNK"
    team: Optional[str] = None
    fantasy_positions: tuple[str, ...] = ()

    @property
    def name(self) -> Optional[str]:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.full_name


@dataclass(frozen=True)
class Manager(RecordMixin):
    manager_id: str
    name: str
    team_name: Optional[str] = None
    sleeper_id: Optional[str] = None
    display_name: Optional[str] = None
    user_ids: tuple[str, ...] = ()
    first_place: tuple[int, ...] = ()
    second_place: tuple[int, ...] = ()

    @property
    def owner_ids(self) -> tuple[str, ...]:
        ids: list[str] = []
        for owner_id in (self.sleeper_id, *self.user_ids):
            if owner_id and owner_id not in ids:
                ids.append(owner_id)
        return tuple(ids)


@dataclass(frozen=True)
class Season:
    year: int
    league: League
    rosters: tuple[Roster, ...] = ()
    users: tuple[User, ...] = ()
    matchups: Mapping[int, tuple[Matchup, ...]] = field(default_factory=dict)
    winners_bracket: tuple[BracketMatch, ...] = ()
    losers_bracket: tuple[BracketMatch, ...] = ()
    draft: Optional[Draft] = None
    picks: tuple[DraftPick, ...] = ()
    players: Mapping[str, Player] = field(default_factory=dict)
    transactions: Mapping[int, tuple[Transaction, ...]] = field(default_factory=dict)

    def weeks(self) -> list[int]:
        return sorted(week for week, rows in self.matchups.items() if rows)

    def week_matchups(self, week: int) -> tuple[Matchup, ...]:
        return self.matchups.get(week, ())

    def roster_by_id(self, roster_id: Optional[int]) -> Optional[Roster]:
        for roster in self.rosters:
            if roster.roster_id == roster_id:
                return roster
        return None

    def roster_for_owner(self, owner_ids: str | Iterable[str]) -> Optional[Roster]:
        """Resolve a season-scoped roster from one or more owner ids."""
        if isinstance(owner_ids, str):
            wanted = {owner_ids}
        else:
            wanted = set(owner_ids)
        for roster in self.rosters:
            if roster.owner_id is not None and roster.owner_id in wanted:
                return roster
        return None

    def user_for(self, owner_id: Optional[str]) -> Optional[User]:
        for user in self.users:
            if user.user_id == owner_id:
                return user
        return None

    def matchup_for(self, week: int, roster_id: int) -> Optional[Matchup]:
        for matchup in self.week_matchups(week):
            if matchup.roster_id == roster_id:
                return matchup
        return None

    def opponent_of(self, week: int, matchup: Matchup) -> Optional[Matchup]:
        if matchup.matchup_id is None:
            return None
        for other in self.week_matchups(week):
            if other.matchup_id == matchup.matchup_id and other.roster_id != matchup.roster_id:
                return other
        return None
