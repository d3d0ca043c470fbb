"""Tool definitions for the league history layer.

Each tool maps to a query method on LeagueHistory and is described in the
OpenAI function-calling format, so the same registry drives both the CLI
shell and any agent that wants to call into the data.

Usage:
    from historylayer.league_history import LeagueHistory
    from historylayer.tools import HISTORY_TOOLS, create_tool_handlers

    data = LeagueHistory()
    data.load()

    handlers = create_tool_handlers(data)
    result = handlers[tool_name](**arguments)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from historylayer.league_history import LeagueHistory

_YEAR_FROM = {"type": "integer", "description": "First season to include (inclusive). Omit for the earliest."}
_YEAR_TO = {"type": "integer", "description": "Last season to include (inclusive). Omit for the latest."}
_DATA_MODE = {
    "type": "string",
    "enum": ["regular", "playoffs", "combined"],
    "description": "regular (default), playoffs (meaningful playoff games only), or combined.",
}

HISTORY_TOOLS = [
    {
        "type": "function",
        "function": {
            "name": "get_seasons",
            "description": "List every loaded season with team count, playoff settings and the last completed week.",
            "parameters": {"type": "object", "properties": {}, "required": []},
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_season_standings",
            "description": "Regular-season standings for one season, ranked by win percentage then points for.",
            "parameters": {
                "type": "object",
                "properties": {"year": {"type": "integer", "description": "Season year."}},
                "required": ["year"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_cumulative_standings",
            "description": "All-time standings per owner with championships, runner-ups and scoring crowns.",
            "parameters": {
                "type": "object",
                "properties": {"year_from": _YEAR_FROM, "year_to": _YEAR_TO},
                "required": [],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_h2h_record",
            "description": "Head-to-head record between two teams across seasons. Teams can be a manager name, manager id, owner id or display name.",
            "parameters": {
                "type": "object",
                "properties": {
                    "team1": {"type": "string", "description": "First team (results are from this side)."},
                    "team2": {"type": "string", "description": "Second team."},
                    "year_from": _YEAR_FROM,
                    "year_to": _YEAR_TO,
                    "data_mode": _DATA_MODE,
                    "include_games": {"type": "boolean", "description": "Include each game and the current streak."},
                },
                "required": ["team1", "team2"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_manager_stats",
            "description": "Career statistics for a manager: totals, per-season results, titles, all-star lineup, draft and performance lists.",
            "parameters": {
                "type": "object",
                "properties": {
                    "manager_key": {"type": "string", "description": "Manager id, name or owner id."},
                    "data_mode": _DATA_MODE,
                },
                "required": ["manager_key"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_schedule_comparison",
            "description": "For one season, the record every team would have had with every other team's schedule.",
            "parameters": {
                "type": "object",
                "properties": {"year": {"type": "integer", "description": "Season year."}},
                "required": ["year"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_all_time_schedule_comparison",
            "description": "All-time schedule swap matrix keyed by owner id, over completed regular-season weeks.",
            "parameters": {
                "type": "object",
                "properties": {
                    "active_only": {"type": "boolean", "description": "Only owners in the most recent season."}
                },
                "required": [],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_strength_of_schedule",
            "description": "Rank remaining regular-season schedules by opponent scoring, 1 being the hardest.",
            "parameters": {
                "type": "object",
                "properties": {"year": {"type": "integer", "description": "Season year."}},
                "required": ["year"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_playoff_odds",
            "description": "Monte Carlo playoff odds and finishing-position distribution for the remaining regular season.",
            "parameters": {
                "type": "object",
                "properties": {
                    "year": {"type": "integer", "description": "Season year."},
                    "picks": {
                        "type": "string",
                        "description": 'JSON list of forced results, e.g. [{"week": 12, "matchup_id": 3, "winner": 5}].',
                    },
                    "seed": {"type": "integer", "description": "Random seed for reproducible output."},
                },
                "required": ["year"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_positional_stats",
            "description": "Win rate and scoring of every matchup whose starters meet positional filters, e.g. QB>=25,RB_INDIVIDUAL>=15x2.",
            "parameters": {
                "type": "object",
                "properties": {
                    "filters": {
                        "type": "string",
                        "description": "Comma-separated filters (POSITION OP POINTS[xCOUNT]) or a preset name.",
                    },
                    "year_from": _YEAR_FROM,
                    "year_to": _YEAR_TO,
                    "include_playoffs": {"type": "boolean", "description": "Also include meaningful playoff games."},
                },
                "required": ["filters"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_best_performances",
            "description": "Top single-game starter performances across the league.",
            "parameters": {
                "type": "object",
                "properties": {
                    "year_from": _YEAR_FROM,
                    "year_to": _YEAR_TO,
                    "limit": {"type": "integer", "description": "Maximum rows (default 10)."},
                    "unique_players": {"type": "boolean", "description": "Keep only each player's best game."},
                },
                "required": [],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_trades",
            "description": "Completed trades in a season or week, showing what each team gave and received.",
            "parameters": {
                "type": "object",
                "properties": {
                    "year": {"type": "integer", "description": "Season year."},
                    "week": {"type": "integer", "description": "Only trades from this week."},
                    "trade_type": {
                        "type": "string",
                        "enum": ["all", "player", "draft"],
                        "description": "all (default), player (no draft picks) or draft (involves picks).",
                    },
                    "team": {"type": "string", "description": "Only trades involving this team."},
                },
                "required": ["year"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_trade_stats",
            "description": "All-time trade counts per manager, most traded players and most frequent trade partners.",
            "parameters": {
                "type": "object",
                "properties": {
                    "year_from": _YEAR_FROM,
                    "year_to": _YEAR_TO,
                    "active_only": {"type": "boolean", "description": "Only managers in the most recent season."},
                },
                "required": [],
            },
        },
    },
]


def create_tool_handlers(data: "LeagueHistory") -> dict[str, Callable[..., Any]]:
    """Create a mapping of tool names to handler functions.

    Args:
        data: A loaded LeagueHistory instance.

    Returns:
        Dict mapping tool names to callable handlers.
    """
    return {
        "get_seasons": lambda: data.get_seasons(),
        "get_season_standings": lambda year: data.get_season_standings(year),
        "get_cumulative_standings": lambda year_from=None, year_to=None: data.get_cumulative_standings(year_from, year_to),
        "get_h2h_record": lambda team1, team2, year_from=None, year_to=None, data_mode="regular", include_games=False: data.get_h2h_record(team1, team2, year_from, year_to, data_mode, include_games),
        "get_manager_stats": lambda manager_key, data_mode="regular": data.get_manager_stats(manager_key, data_mode),
        "get_schedule_comparison": lambda year: data.get_schedule_comparison(year),
        "get_all_time_schedule_comparison": lambda active_only=False: data.get_all_time_schedule_comparison(active_only),
        "get_strength_of_schedule": lambda year: data.get_strength_of_schedule(year),
        "get_playoff_odds": lambda year, picks=None, seed=None: data.get_playoff_odds(year, picks, seed),
        "get_positional_stats": lambda filters, year_from=None, year_to=None, include_playoffs=False: data.get_positional_stats(filters, year_from, year_to, include_playoffs),
        "get_best_performances": lambda year_from=None, year_to=None, limit=10, unique_players=False: data.get_best_performances(year_from, year_to, limit, unique_players),
        "get_trades": lambda year, week=None, trade_type="all", team=None: data.get_trades(year, week, trade_type, team),
        "get_trade_stats": lambda year_from=None, year_to=None, active_only=False: data.get_trade_stats(year_from, year_to, active_only),
    }

