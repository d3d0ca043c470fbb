"""Normalization helpers for draft and draft pick payloads."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..schema.models import Draft, DraftPick


def normalize_draft(raw_draft: Optional[Mapping[str, Any]]) -> Optional[Draft]:
    if not raw_draft or raw_draft.get("draft_id") is None:
        return None
    settings = raw_draft.get("settings") or {}
    rounds = settings.get("rounds")
    teams = settings.get("teams")
    slots = {
        int(slot): int(roster_id)
        for slot, roster_id in (raw_draft.get("slot_to_roster_id") or {}).items()
        if roster_id is not None
    }
    start_time = raw_draft.get("start_time")
    return Draft(
        draft_id=str(raw_draft["draft_id"]),
        season=str(raw_draft.get("season", "")),
        draft_type=raw_draft.get("type"),
        rounds=int(rounds) if rounds is not None else None,
        teams=int(teams) if teams is not None else None,
        start_time=int(start_time) if start_time else None,
        slot_to_roster_id=slots,
    )


def _pick_player_name(metadata: Mapping[str, Any]) -> Optional[str]:
    first = metadata.get("first_name")
    last = metadata.get("last_name")
    if first and last:
        return f"{first} {last}"
    return first or last or None


def normalize_picks(raw_picks: Iterable[Mapping[str, Any]]) -> list[DraftPick]:
    rows: list[DraftPick] = []
    for raw_pick in raw_picks or []:
        player_id = raw_pick.get("player_id")
        round_value = raw_pick.get("round")
        pick_no = raw_pick.get("pick_no")
        if player_id is None or round_value is None or pick_no is None:
            continue
        metadata = raw_pick.get("metadata") or {}
        roster_id = raw_pick.get("roster_id")
        draft_slot = raw_pick.get("draft_slot")
        picked_by = raw_pick.get("picked_by")
        rows.append(
            DraftPick(
                round=int(round_value),
                pick_no=int(pick_no),
                player_id=str(player_id),
                draft_slot=int(draft_slot) if draft_slot is not None else None,
                picked_by=str(picked_by) if picked_by else None,
                roster_id=int(roster_id) if roster_id is not None else None,
                position=raw_pick.get("position") or metadata.get("position") or None,
                player_name=_pick_player_name(metadata),
                is_keeper=bool(raw_pick.get("is_keeper")),
            )
        )
    return rows
