"""CLI for the league history layer.

Commands mirror the tool definitions in historylayer.tools so the
interactive shell, one-shot queries and agent tool calls share one surface.
"""

from __future__ import annotations

import argparse
import json
import logging
import shlex
from typing import Any

from dotenv import load_dotenv

from historylayer.league_history import LeagueHistory
from historylayer.tools import HISTORY_TOOLS, create_tool_handlers

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="leaguehist")
    parser.add_argument(
        "--data-dir",
        help="Directory of per-season JSON exports (overrides LEAGUE_HISTORY_DATA_DIR).",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("app", help="Load data and run interactive query shell.")

    query = subparsers.add_parser("query", help="Run a single tool and print JSON.")
    query.add_argument("tool", help="Tool name, e.g. get_h2h_record.")
    query.add_argument(
        "args", nargs="*", help="Tool arguments, positional or key=value."
    )

    return parser


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def _find_tool(tool_name: str) -> dict[str, Any] | None:
    for tool in HISTORY_TOOLS:
        if tool["function"]["name"] == tool_name:
            return tool["function"]
    return None


def _build_tool_help() -> str:
    """Build help text from tool definitions."""
    lines = ["", "Available tools (commands):"]
    for tool in HISTORY_TOOLS:
        func = tool["function"]
        desc = func["description"].split(". ")[0]
        params = func["parameters"]["properties"]
        required = func["parameters"].get("required", [])

        param_parts = []
        for pname, pdef in params.items():
            ptype = pdef.get("type", "string")
            if pname in required:
                param_parts.append(f"<{pname}:{ptype}>")
            else:
                param_parts.append(f"[{pname}:{ptype}]")

        lines.append(f"  {func['name']} {' '.join(param_parts)}".rstrip())
        lines.append(f"      {desc}")

    lines.extend([
        "",
        "Other commands:",
        "  tools               - Show this help",
        "  help                - Show this help",
        "  exit | quit         - Exit the app",
        "",
        "Parameters can be passed positionally or as key=value pairs:",
        "  get_season_standings 2023",
        "  get_h2h_record Alice Bob data_mode=combined include_games=true",
        '  get_positional_stats "QB>=25,RB_INDIVIDUAL>=15x2" year_from=2021',
        "  get_trades 2023 trade_type=draft team=Alice",
        "",
    ])
    return "\n".join(lines)


def _usage(tool_name: str) -> str:
    tool_def = _find_tool(tool_name)
    if tool_def is None:
        return tool_name
    required = tool_def["parameters"].get("required", [])
    usage_parts = [tool_name]
    for pname in tool_def["parameters"]["properties"]:
        usage_parts.append(f"<{pname}>" if pname in required else f"[{pname}]")
    return " ".join(usage_parts)


def _convert_value(key: str, value: str, ptype: str | None) -> tuple[Any, str | None]:
    if ptype == "integer":
        try:
            return int(value), None
        except ValueError:
            return None, f"Parameter '{key}' must be an integer"
    if ptype == "number":
        try:
            return float(value), None
        except ValueError:
            return None, f"Parameter '{key}' must be a number"
    if ptype == "boolean":
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True, None
        if lowered in _FALSE_VALUES:
            return False, None
        return None, f"Parameter '{key}' must be true or false"
    return value, None


def _parse_tool_args(
    args: list[str], tool_name: str
) -> tuple[dict[str, Any], str | None]:
    """Parse command arguments into tool parameters.

    Supports both positional and key=value syntax.

    Returns:
        (params_dict, error_message)
    """
    tool_def = _find_tool(tool_name)
    if not tool_def:
        return {}, f"Unknown tool: {tool_name}"

    properties = tool_def["parameters"]["properties"]
    required = tool_def["parameters"].get("required", [])
    param_names = list(properties.keys())

    result: dict[str, Any] = {}
    positional_idx = 0

    for arg in args:
        key, sep, value = arg.partition("=")
        if sep and key in properties:
            result[key] = value
        elif sep and key.isidentifier() and key.islower():
            return {}, f"Unknown parameter: {key}"
        else:
            # Positional argument; filter expressions like QB>=25 land here
            if positional_idx >= len(param_names):
                return {}, "Too many arguments"
            result[param_names[positional_idx]] = arg
            positional_idx += 1

    for key, value in list(result.items()):
        converted, error = _convert_value(key, value, properties[key].get("type"))
        if error:
            return {}, error
        result[key] = converted

    for req in required:
        if req not in result:
            return {}, f"Missing required parameter: {req}"

    return result, None


def _load_data(data_dir: str | None) -> LeagueHistory:
    data = LeagueHistory(data_dir=data_dir)
    data.load()
    return data


def _run_app(data_dir: str | None) -> int:
    print("Loading data...")
    data = _load_data(data_dir)
    print(f"Loaded seasons: {', '.join(str(year) for year in data.store.years())}")

    handlers = create_tool_handlers(data)
    help_text = _build_tool_help()
    print(help_text)

    while True:
        try:
            raw = input("leaguehist> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("")
            return 0

        if not raw:
            continue
        if raw in {"exit", "quit"}:
            return 0
        if raw in {"help", "tools"}:
            print(help_text)
            continue

        try:
            parts = shlex.split(raw)
        except ValueError as e:
            print(f"Parse error: {e}")
            continue

        command = parts[0]
        args = parts[1:]

        if command not in handlers:
            print(f"Unknown command: {command}")
            print("Type 'tools' to see available commands.")
            continue

        params, error = _parse_tool_args(args, command)
        if error:
            print(f"Error: {error}")
            print(f"Usage: {_usage(command)}")
            continue

        try:
            result = handlers[command](**params)
            _print_json(result)
        except Exception as exc:
            print(f"Error: {exc}")

    return 0


def _run_query(data_dir: str | None, tool_name: str, args: list[str]) -> int:
    params, error = _parse_tool_args(args, tool_name)
    if error:
        print(f"Error: {error}")
        if _find_tool(tool_name) is not None:
            print(f"Usage: {_usage(tool_name)}")
        return 1

    try:
        data = _load_data(data_dir)
    except (RuntimeError, OSError, ValueError) as exc:
        print(f"Error: {exc}")
        return 1
    handlers = create_tool_handlers(data)
    try:
        result = handlers[tool_name](**params)
    except (ValueError, LookupError) as exc:
        print(f"Error: {exc}")
        return 1
    _print_json(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "app":
        return _run_app(args.data_dir)
    if args.command == "query":
        return _run_query(args.data_dir, args.tool, args.args)

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
