"""
TinyClaw CLI - team management commands.

    tinyclaw team list
    tinyclaw team show <id>
    tinyclaw team add <id> --agents coder,reviewer [--name "Dev Team"] [--leader coder]
    tinyclaw team remove <id> [--yes]
    tinyclaw team sync [agent ...]

The commands only collect input and print results; every rule lives in
``tinyclaw.teams``.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from tinyclaw import __version__
from tinyclaw.config.manager import ConfigManager
from tinyclaw.errors import TeamError, TeamNotFound
from tinyclaw.settings.store import SettingsStore
from tinyclaw.teams.registry import TeamRegistry


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging."""
    # Remove default handler
    logger.remove()

    # Console handler
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )

    # File handler
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tinyclaw", description="TinyClaw - agent team management")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML/JSON configuration file")
    parser.add_argument("--settings", type=str, default=None, help="Path to settings.json")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"TinyClaw {__version__}")

    commands = parser.add_subparsers(dest="command", required=True)
    team = commands.add_parser("team", help="Manage agent teams")
    actions = team.add_subparsers(dest="action", required=True)

    actions.add_parser("list", help="List configured teams")

    show = actions.add_parser("show", help="Show one team")
    show.add_argument("team_id")

    add = actions.add_parser("add", help="Create a team")
    add.add_argument("team_id", help="Team ID (lowercase, no spaces, e.g. 'dev')")
    add.add_argument("--agents", required=True, help="Comma-separated agent IDs, e.g. 'coder,reviewer'")
    add.add_argument("--name", default="", help="Display name (defaults to the team ID)")
    add.add_argument("--leader", default="", help="Leader agent (defaults to the first agent)")

    remove = actions.add_parser("remove", help="Remove a team")
    remove.add_argument("team_id")
    remove.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    sync = actions.add_parser("sync", help="Regenerate team sections in AGENTS.md")
    sync.add_argument("agents", nargs="*", help="Agent IDs (default: all agents)")

    return parser


def _cmd_list(registry: TeamRegistry) -> int:
    teams = registry.list()
    if not teams:
        print("No teams configured.")
        print("")
        print("Add a team with:")
        print("  tinyclaw team add <team_id> --agents <agent1>,<agent2>")
        return 0

    print("Configured Teams")
    print("================")
    print("")
    for team in teams:
        print(f"  @{team.id} - {team.display_name}")
        print(f"    Agents:  {','.join(team.agents)}")
        print(f"    Leader:  @{team.leader_agent}")
        print("")
    print("Usage: Send '@team_id <message>' in any channel to route to a team.")
    return 0


def _cmd_show(registry: TeamRegistry, team_id: str) -> int:
    try:
        team = registry.get(team_id)
    except TeamNotFound as e:
        print(str(e), file=sys.stderr)
        print("", file=sys.stderr)
        print("Available teams:", file=sys.stderr)
        for tid in e.available:
            print(f"  @{tid}", file=sys.stderr)
        return 1

    print(f"Team: @{team.id}")
    print("")
    print(json.dumps(team.to_settings(), indent=2, ensure_ascii=False))
    return 0


def _cmd_add(registry: TeamRegistry, args: argparse.Namespace) -> int:
    result = registry.create(args.team_id, args.name, args.agents.split(","), args.leader)
    team = result.team

    print(f"Team '{team.id}' created!")
    print(f"  Name:    {team.name}")
    print(f"  Agents:  {' '.join(team.agents)}")
    print(f"  Leader:  @{team.leader_agent}")
    print("")
    print("Next steps:")
    print(f"  Send a message: '@{team.id} <message>' in any channel")
    print(f"  The leader (@{team.leader_agent}) will receive it first.")
    print("  Agents can mention @teammate in responses to collaborate.")
    return 0


def _cmd_remove(registry: TeamRegistry, args: argparse.Namespace) -> int:
    if args.yes:
        answer = "y"
    else:
        team = registry.get(args.team_id)
        try:
            answer = input(f"Remove team '{team.id}' ({team.display_name})? [y/N]: ")
        except EOFError:
            answer = ""

    result = registry.delete(args.team_id, answer)
    if result.cancelled:
        print("Cancelled.")
        return 0
    print(f"Team '{result.team_id}' removed.")
    return 0


def _cmd_sync(registry: TeamRegistry, agents: List[str]) -> int:
    updated = registry.resync(agents or None)
    print(f"Updated {len(updated)} AGENTS.md file(s).")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigManager(args.config).load()
    except (OSError, ValueError) as e:
        print(f"Failed to load config: {e}", file=sys.stderr)
        return 1
    if args.settings:
        config.set("paths.settings_file", args.settings)

    level = "DEBUG" if args.debug or config.debug else str(config.get("logging.level", "INFO"))
    setup_logging(level, config.get("logging.file"))

    registry = TeamRegistry(SettingsStore(config.settings_path), docs_filename=config.docs_filename)

    try:
        if args.action == "list":
            return _cmd_list(registry)
        if args.action == "show":
            return _cmd_show(registry, args.team_id)
        if args.action == "add":
            return _cmd_add(registry, args)
        if args.action == "remove":
            return _cmd_remove(registry, args)
        return _cmd_sync(registry, args.agents)
    except TeamError as e:
        print(str(e), file=sys.stderr)
        return 1


def cli() -> None:
    """CLI entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
