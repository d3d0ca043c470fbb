"""Normalization helpers for transactions."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..schema.models import BudgetTransfer, TradedPick, Transaction


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _roster_moves(moves: Mapping[str, Any] | None) -> dict[str, int]:
    """player_id -> roster_id, dropping entries without a roster."""
    if not moves:
        return {}
    rows: dict[str, int] = {}
    for player_id, roster_id in moves.items():
        roster = _optional_int(roster_id)
        if player_id is not None and roster is not None:
            rows[str(player_id)] = roster
    return rows


def _traded_picks(raw_picks: Iterable[Mapping[str, Any]] | None) -> tuple[TradedPick, ...]:
    rows: list[TradedPick] = []
    for pick in raw_picks or []:
        round_value = _optional_int(pick.get("round"))
        roster_id = _optional_int(pick.get("roster_id"))
        if round_value is None or roster_id is None:
            continue
        rows.append(
            TradedPick(
                round=round_value,
                season=str(pick.get("season") or ""),
                roster_id=roster_id,
                owner_id=_optional_int(pick.get("owner_id")),
                previous_owner_id=_optional_int(pick.get("previous_owner_id")),
            )
        )
    return tuple(rows)


def _budget_transfers(raw_budget: Iterable[Mapping[str, Any]] | None) -> tuple[BudgetTransfer, ...]:
    return tuple(
        BudgetTransfer(
            amount=int(entry.get("amount") or 0),
            sender=_optional_int(entry.get("sender")),
            receiver=_optional_int(entry.get("receiver")),
        )
        for entry in raw_budget or []
    )


def normalize_transactions(
    raw_transactions: Iterable[Mapping[str, Any]],
    week: Optional[int] = None,
) -> list[Transaction]:
    """Normalize one week's transactions.

    ``leg`` on the payload wins over the ``week`` the rows were filed under.
    Rows without a transaction id are skipped.
    """
    rows: list[Transaction] = []
    for raw_tx in raw_transactions or []:
        transaction_id = raw_tx.get("transaction_id")
        if transaction_id is None:
            continue
        rows.append(
            Transaction(
                transaction_id=str(transaction_id),
                type=str(raw_tx.get("type") or ""),
                status=raw_tx.get("status"),
                week=_optional_int(raw_tx.get("leg")) or week,
                created=_optional_int(raw_tx.get("created")) or 0,
                roster_ids=tuple(
                    roster_id
                    for roster_id in (_optional_int(value) for value in raw_tx.get("roster_ids") or [])
                    if roster_id is not None
                ),
                adds=_roster_moves(raw_tx.get("adds")),
                drops=_roster_moves(raw_tx.get("drops")),
                draft_picks=_traded_picks(raw_tx.get("draft_picks")),
                waiver_budget=_budget_transfers(raw_tx.get("waiver_budget")),
            )
        )
    return rows


def group_transactions_by_week(
    raw_transactions: Mapping[Any, Iterable[Mapping[str, Any]]] | Iterable[Mapping[str, Any]],
) -> dict[int, tuple[Transaction, ...]]:
    """Accept either ``{week: [tx, ...]}`` or a flat list keyed by ``leg``."""
    weekly: dict[int, list[Transaction]] = {}
    if isinstance(raw_transactions, Mapping):
        for week, rows in raw_transactions.items():
            week_number = _optional_int(week)
            for tx in normalize_transactions(rows, week_number):
                weekly.setdefault(tx.week or 0, []).append(tx)
    else:
        for tx in normalize_transactions(raw_transactions):
            weekly.setdefault(tx.week or 0, []).append(tx)
    return {week: tuple(rows) for week, rows in sorted(weekly.items())}
