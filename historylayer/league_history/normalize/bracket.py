"""Normalization helpers for playoff bracket data."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..schema.models import BracketMatch


def _int_field(value: Any) -> Optional[int]:
    return int(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else None


def _extract_from_ref(ref: Any) -> tuple[Optional[int], Optional[str]]:
    """Parse a t1_from/t2_from dict into (match_id, outcome).

    Sleeper encodes bracket progression as {"w": match_id} or {"l": match_id},
    meaning the winner or loser of an earlier match fills the slot.
    """
    if not isinstance(ref, dict):
        return None, None
    if "w" in ref:
        return int(ref["w"]), "w"
    if "l" in ref:
        return int(ref["l"]), "l"
    return None, None


def normalize_bracket(
    raw_bracket: Iterable[Mapping[str, Any]],
    *,
    bracket: str,
) -> list[BracketMatch]:
    """Normalize raw Sleeper bracket JSON into BracketMatch models.

    Args:
        raw_bracket: List of bracket match dicts.
        bracket: "winners" or "losers".

    Returns:
        List of BracketMatch instances; entries without a round or match
        number are dropped.
    """
    rows: list[BracketMatch] = []
    for entry in raw_bracket or []:
        round_num = entry.get("r")
        match_id = entry.get("m")
        if round_num is None or match_id is None:
            continue

        t1_from_match_id, t1_from_outcome = _extract_from_ref(entry.get("t1_from"))
        t2_from_match_id, t2_from_outcome = _extract_from_ref(entry.get("t2_from"))

        rows.append(
            BracketMatch(
                bracket=bracket,
                round=int(round_num),
                match_id=int(match_id),
                t1=_int_field(entry.get("t1")),
                t2=_int_field(entry.get("t2")),
                winner=_int_field(entry.get("w")),
                loser=_int_field(entry.get("l")),
                placement=_int_field(entry.get("p")),
                t1_from_match_id=t1_from_match_id,
                t1_from_outcome=t1_from_outcome,
                t2_from_match_id=t2_from_match_id,
                t2_from_outcome=t2_from_outcome,
            )
        )
    return rows
