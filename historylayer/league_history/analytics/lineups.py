"""Lineup slot configuration and lineup reconstruction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

from ..schema.models import Matchup
from .players import get_player_name, get_player_position

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore

# Slot order is significant: starters are stored positionally and the
# all-star lineup fills slots greedily in this order.
LINEUP_SLOTS: tuple[str, ...] = ("QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "K", "DEF")
FLEX_ELIGIBLE: frozenset[str] = frozenset({"RB", "WR", "TE"})


def slot_position(index: int, slots: Sequence[str] = LINEUP_SLOTS) -> Optional[str]:
    if 0 <= index < len(slots):
        return slots[index]
    return None


def slot_accepts(slot: str, position: str) -> bool:
    if slot == "FLEX":
        return position in FLEX_ELIGIBLE
    return slot == position


@dataclass
class PlayerTotals:
    """Accumulated starter production for one player."""

    player_id: str
    player_name: str
    position: str
    total_points: float = 0.0
    games: int = 0

    @property
    def average_points(self) -> float:
        return self.total_points / self.games if self.games else 0.0


@dataclass
class LineupSlot:
    slot: str
    player_id: Optional[str] = None
    player_name: Optional[str] = None
    position: Optional[str] = None
    total_points: float = 0.0
    average_points: float = 0.0
    games: int = 0


def build_all_star_lineup(
    totals: Iterable[PlayerTotals], slots: Sequence[str] = LINEUP_SLOTS
) -> list[LineupSlot]:
    """Fill each slot with the best unused eligible player, in slot order.

    Greedy in slot-table order: a dual-eligible star can be claimed
    by a dedicated slot before FLEX is considered.
    """
    ranked = sorted(totals, key=lambda row: (-row.total_points, row.player_id))
    used: set[str] = set()
    lineup: list[LineupSlot] = []
    for slot in slots:
        choice = next(
            (row for row in ranked if row.player_id not in used and slot_accepts(slot, row.position)),
            None,
        )
        if choice is None:
            lineup.append(LineupSlot(slot=slot))
            continue
        used.add(choice.player_id)
        lineup.append(
            LineupSlot(
                slot=slot,
                player_id=choice.player_id,
                player_name=choice.player_name,
                position=choice.position,
                total_points=round(choice.total_points, 2),
                average_points=round(choice.average_points, 2),
                games=choice.games,
            )
        )
    return lineup


@dataclass
class OptimalLineup:
    actual_points: float
    optimal_points: float
    points_left_on_bench: float
    starters: list[LineupSlot]


def get_optimal_lineup(
    store: "SeasonStore",
    matchup: Matchup,
    year: Optional[int] = None,
    slots: Sequence[str] = LINEUP_SLOTS,
    position_of: Optional[Callable[[str], str]] = None,
) -> OptimalLineup:
    """Best possible starting lineup from everyone on the roster that week.

    Dedicated slots are filled first with the best player at each position,
    then FLEX takes the best remaining eligible player.
    """
    resolve = position_of or (
        lambda player_id: get_player_position(store, player_id, year, matchup)
    )
    pool = [
        (player_id, resolve(player_id), float(points))
        for player_id, points in matchup.players_points.items()
    ]
    pool.sort(key=lambda row: (-row[2], row[0]))

    chosen: dict[int, tuple[str, str, float]] = {}
    used: set[str] = set()
    ordered = [index for index, slot in enumerate(slots) if slot != "FLEX"]
    ordered += [index for index, slot in enumerate(slots) if slot == "FLEX"]
    for index in ordered:
        slot = slots[index]
        for player_id, position, points in pool:
            if player_id in used or not slot_accepts(slot, position):
                continue
            chosen[index] = (player_id, position, points)
            used.add(player_id)
            break

    starters: list[LineupSlot] = []
    for index, slot in enumerate(slots):
        if index not in chosen:
            starters.append(LineupSlot(slot=slot))
            continue
        player_id, position, points = chosen[index]
        starters.append(
            LineupSlot(
                slot=slot,
                player_id=player_id,
                player_name=get_player_name(store, player_id, year),
                position=position,
                total_points=points,
                average_points=points,
                games=1,
            )
        )
    optimal = round(sum(row.total_points for row in starters), 2)
    return OptimalLineup(
        actual_points=matchup.points,
        optimal_points=optimal,
        points_left_on_bench=round(max(optimal - matchup.points, 0.0), 2),
        starters=starters,
    )
