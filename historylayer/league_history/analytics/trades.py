"""Trade history: completed trades split into what each team gave and got."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from itertools import combinations
from typing import TYPE_CHECKING, Iterable, Literal, Optional

from ..schema.models import Draft, Season, Transaction
from .players import get_player_name, get_player_position

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore

logger = logging.getLogger(__name__)

TradeType = Literal["all", "player", "draft"]
TRADE_TYPES = ("all", "player", "draft")

# Pick numbers fall back to a 12-team snake when the draft has no slot map.
DEFAULT_TEAM_COUNT = 12


@dataclass
class TradedPlayerAsset:
    player_id: str
    player_name: str
    position: str
    roster_id: int


@dataclass
class TradedPickAsset:
    round: int
    season: str
    roster_id: int
    pick_number: int
    overall_pick_number: int


@dataclass
class BudgetAsset:
    amount: int
    roster_id: Optional[int]


@dataclass
class TradeAssets:
    players: list[TradedPlayerAsset] = field(default_factory=list)
    draft_picks: list[TradedPickAsset] = field(default_factory=list)
    waiver_budget: list[BudgetAsset] = field(default_factory=list)


@dataclass
class TradeSide:
    roster_id: int
    owner_id: Optional[str] = None
    gives: TradeAssets = field(default_factory=TradeAssets)
    receives: TradeAssets = field(default_factory=TradeAssets)


@dataclass
class TradeSummary:
    year: int
    week: Optional[int]
    transaction_id: str
    created: int
    is_draft_pick_trade: bool
    formatted_date: str
    teams: list[TradeSide] = field(default_factory=list)

    def player_ids(self) -> list[str]:
        """Every player moved in the trade, once each."""
        seen: list[str] = []
        for team in self.teams:
            for asset in (*team.gives.players, *team.receives.players):
                if asset.player_id not in seen:
                    seen.append(asset.player_id)
        return seen


def get_completed_trades(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [tx for tx in transactions if tx.is_completed_trade]


def is_draft_pick_trade(transaction: Transaction) -> bool:
    return bool(transaction.draft_picks)


def _utc(timestamp_ms: int) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)


def format_trade_date(transaction: Transaction, draft_start_time: Optional[int] = None) -> str:
    """Label a trade by week, or by its timing against the draft for pick trades.

    Timestamps are Sleeper milliseconds and are compared as UTC dates.
    """
    if not is_draft_pick_trade(transaction):
        return f"Week {transaction.week}"
    traded = _utc(transaction.created)
    label = f"{traded:%B} {traded.day}, {traded.year}"
    if not draft_start_time:
        return f"Pre-Draft, {label}"
    start = _utc(draft_start_time)
    same_day = traded.date() == start.date()
    if traded < start:
        prefix = "Draft Day" if same_day else "Pre-Draft"
    else:
        prefix = "During Draft" if same_day else "Post-Draft"
    return f"{prefix}, {label}"


def calculate_pick_numbers(
    round_number: int, roster_id: int, draft: Optional[Draft]
) -> tuple[int, int]:
    """(pick within round, overall pick) for a traded pick in a snake draft.

    A roster missing from the slot map gets ``round * 100`` as its in-round
    number and is placed in slot 1 for the overall number.
    """
    slots = draft.slot_to_roster_id if draft else {}
    teams = len(slots) or DEFAULT_TEAM_COUNT
    slot = draft.slot_for_roster(roster_id) if draft else None

    def in_round(position: int) -> int:
        return position if round_number % 2 == 1 else teams - position + 1

    pick_number = in_round(slot) if slot is not None else round_number * 100
    overall = (round_number - 1) * teams + in_round(slot or 1)
    return pick_number, overall


def group_trade_assets_by_team(
    store: "SeasonStore", season: Season, transaction: Transaction
) -> TradeSummary:
    """Split a trade into per-roster gives and receives."""
    sides = {}
    for roster_id in transaction.roster_ids:
        roster = season.roster_by_id(roster_id)
        sides[roster_id] = TradeSide(roster_id=roster_id, owner_id=roster.owner_id if roster else None)

    def player_asset(player_id: str, roster_id: int) -> TradedPlayerAsset:
        return TradedPlayerAsset(
            player_id=player_id,
            player_name=get_player_name(store, player_id, season.year),
            position=get_player_position(store, player_id, season.year),
            roster_id=roster_id,
        )

    for player_id, new_roster in transaction.adds.items():
        old_roster = transaction.drops.get(player_id)
        if old_roster is None:
            continue
        if old_roster in sides:
            sides[old_roster].gives.players.append(player_asset(player_id, old_roster))
        if new_roster in sides:
            sides[new_roster].receives.players.append(player_asset(player_id, new_roster))

    for player_id, old_roster in transaction.drops.items():
        if player_id not in transaction.adds and old_roster in sides:
            sides[old_roster].gives.players.append(player_asset(player_id, old_roster))

    for pick in transaction.draft_picks:
        pick_number, overall = calculate_pick_numbers(pick.round, pick.roster_id, season.draft)
        asset = TradedPickAsset(
            round=pick.round,
            season=pick.season,
            roster_id=pick.roster_id,
            pick_number=pick_number,
            overall_pick_number=overall,
        )
        if pick.previous_owner_id in sides:
            sides[pick.previous_owner_id].gives.draft_picks.append(asset)
        if pick.owner_id in sides:
            sides[pick.owner_id].receives.draft_picks.append(asset)

    for budget in transaction.waiver_budget:
        asset = BudgetAsset(amount=budget.amount, roster_id=budget.receiver)
        if budget.sender in sides:
            sides[budget.sender].gives.waiver_budget.append(asset)
        if budget.receiver in sides:
            sides[budget.receiver].receives.waiver_budget.append(asset)

    return TradeSummary(
        year=season.year,
        week=transaction.week,
        transaction_id=transaction.transaction_id,
        created=transaction.created,
        is_draft_pick_trade=is_draft_pick_trade(transaction),
        formatted_date=format_trade_date(
            transaction, season.draft.start_time if season.draft else None
        ),
        teams=list(sides.values()),
    )


def _most_recent_first(trades: list[TradeSummary]) -> list[TradeSummary]:
    return sorted(trades, key=lambda trade: -trade.created)


def _summarize(
    store: "SeasonStore",
    season: Season,
    transactions: Iterable[Transaction],
    trade_type: TradeType,
    roster_ids: Optional[Iterable[int]],
) -> list[TradeSummary]:
    if trade_type not in TRADE_TYPES:
        raise ValueError(f"Unknown trade type: {trade_type!r}")
    required = set(roster_ids or ())
    trades: list[TradeSummary] = []
    for transaction in get_completed_trades(transactions):
        if trade_type == "player" and is_draft_pick_trade(transaction):
            continue
        if trade_type == "draft" and not is_draft_pick_trade(transaction):
            continue
        if not required <= set(transaction.roster_ids):
            continue
        trades.append(group_trade_assets_by_team(store, season, transaction))
    return _most_recent_first(trades)


def get_season_trades(
    store: "SeasonStore",
    season: Season,
    *,
    trade_type: TradeType = "all",
    roster_ids: Optional[Iterable[int]] = None,
) -> list[TradeSummary]:
    """Completed trades for a season, most recent first.

    ``trade_type`` keeps only player trades or only draft pick trades.
    ``roster_ids`` keeps trades that involve every listed roster.
    """
    transactions = [tx for week in sorted(season.transactions) for tx in season.transactions[week]]
    return _summarize(store, season, transactions, trade_type, roster_ids)


def get_week_trades(
    store: "SeasonStore",
    season: Season,
    week: int,
    *,
    trade_type: TradeType = "all",
    roster_ids: Optional[Iterable[int]] = None,
) -> list[TradeSummary]:
    return _summarize(store, season, season.transactions.get(week, ()), trade_type, roster_ids)


@dataclass
class TeamTradeCount:
    manager_id: str
    manager_name: str
    total_trades: int = 0
    player_trades: int = 0
    draft_trades: int = 0


@dataclass
class PlayerTradeCount:
    player_id: str
    player_name: str
    trade_count: int = 0
    years: dict[int, int] = field(default_factory=dict)


@dataclass
class ManagerTradePair:
    manager1_id: str
    manager1_name: str
    manager2_id: str
    manager2_name: str
    trade_count: int = 0
    years: list[int] = field(default_factory=list)


@dataclass
class TradeStats:
    total_trades: int = 0
    teams: list[TeamTradeCount] = field(default_factory=list)
    players: list[PlayerTradeCount] = field(default_factory=list)
    pairs: list[ManagerTradePair] = field(default_factory=list)


def _trade_managers(store: "SeasonStore", trade: TradeSummary) -> list[str]:
    manager_ids: list[str] = []
    for team in trade.teams:
        manager = store.manager_for_owner(team.owner_id)
        if manager is not None and manager.manager_id not in manager_ids:
            manager_ids.append(manager.manager_id)
    return manager_ids


def get_all_time_trade_stats(
    store: "SeasonStore",
    *,
    years: Optional[Iterable[int]] = None,
    active_only: bool = False,
) -> TradeStats:
    """Trade counts per manager, per player and per manager pairing.

    Sides whose owner has no manager entry are left out of the manager
    tables. ``active_only`` limits the per-manager table to managers with a
    roster in the most recent season.
    """
    stats = TradeStats()
    teams: dict[str, TeamTradeCount] = {}
    players: dict[str, PlayerTradeCount] = {}
    pairs: dict[tuple[str, str], ManagerTradePair] = {}

    for season in store.seasons(years):
        for trade in get_season_trades(store, season):
            stats.total_trades += 1
            manager_ids = _trade_managers(store, trade)
            for manager_id in manager_ids:
                row = teams.get(manager_id)
                if row is None:
                    row = TeamTradeCount(manager_id, store.get_manager(manager_id).name)
                    teams[manager_id] = row
                row.total_trades += 1
                if trade.is_draft_pick_trade:
                    row.draft_trades += 1
                else:
                    row.player_trades += 1

            for player_id in trade.player_ids():
                player = players.get(player_id)
                if player is None:
                    player = PlayerTradeCount(
                        player_id, get_player_name(store, player_id, season.year)
                    )
                    players[player_id] = player
                player.trade_count += 1
                player.years[season.year] = player.years.get(season.year, 0) + 1

            for first, second in combinations(sorted(manager_ids), 2):
                pair = pairs.get((first, second))
                if pair is None:
                    pair = ManagerTradePair(
                        manager1_id=first,
                        manager1_name=store.get_manager(first).name,
                        manager2_id=second,
                        manager2_name=store.get_manager(second).name,
                    )
                    pairs[(first, second)] = pair
                pair.trade_count += 1
                if season.year not in pair.years:
                    pair.years.append(season.year)

    team_rows = list(teams.values())
    if active_only:
        latest = store.seasons()[-1:]
        active_owners = {roster.owner_id for season in latest for roster in season.rosters}
        team_rows = [
            row
            for row in team_rows
            if active_owners & set(store.get_manager(row.manager_id).owner_ids)
        ]
    stats.teams = sorted(team_rows, key=lambda row: (-row.total_trades, row.manager_name))
    stats.players = sorted(players.values(), key=lambda row: (-row.trade_count, row.player_name))
    for pair in pairs.values():
        pair.years.sort(reverse=True)
    stats.pairs = sorted(
        pairs.values(), key=lambda row: (-row.trade_count, row.manager1_name, row.manager2_name)
    )
    logger.debug("Counted %d trades across %d seasons", stats.total_trades, len(store.seasons(years)))
    return stats
