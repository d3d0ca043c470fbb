"""Shared utility functions for query modules."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..store.season_store import SeasonStore


def normalize_lookup_key(value: Any) -> str:
    """Normalize a lookup key to a stripped string."""
    if value is None:
        return ""
    return str(value).strip()


def to_payload(value: Any) -> Any:
    """Convert analytics dataclasses (and containers of them) to plain dicts."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, dict):
        return {key: to_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    return value


def year_range(
    store: "SeasonStore", year_from: Optional[int] = None, year_to: Optional[int] = None
) -> Optional[list[int]]:
    """Years in the store within the inclusive bounds, or None for all years."""
    if year_from is None and year_to is None:
        return None
    low = int(year_from) if year_from is not None else min(store.years(), default=0)
    high = int(year_to) if year_to is not None else max(store.years(), default=0)
    return [year for year in store.years() if low <= year <= high]
