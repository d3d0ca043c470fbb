"""Normalization exports."""

from .bracket import normalize_bracket
from .league import normalize_league
from .managers import normalize_managers
from .matchups import normalize_matchups
from .picks import normalize_draft, normalize_picks
from .players import normalize_players
from .rosters import normalize_rosters
from .transactions import group_transactions_by_week, normalize_transactions
from .users import normalize_users

__all__ = [
    "normalize_league",
    "normalize_users",
    "normalize_rosters",
    "normalize_matchups",
    "normalize_bracket",
    "normalize_draft",
    "normalize_picks",
    "normalize_players",
    "normalize_managers",
    "normalize_transactions",
    "group_transactions_by_week",
]
