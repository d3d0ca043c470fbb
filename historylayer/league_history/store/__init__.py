"""In-memory season store."""

from .season_store import SeasonStore, build_season, load_store

__all__ = ["SeasonStore", "build_season", "load_store"]
