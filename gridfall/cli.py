"""
Gridfall CLI - Command-line interface for the engine.

Usage:
    gridfall validate <config_file>                  Validate a game configuration
    gridfall dimensions <player_count>               Board edge for a player count
    gridfall placement <player_count> --at ISO       Random starting PLACE events
    gridfall replay <config_file> <events_file> --at ISO
                                                     Game state at an instant
"""

import argparse
import json
import logging
import sys

from . import config


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Gridfall - scheduled grid game engine",
        prog="gridfall",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a game configuration")
    validate_parser.add_argument("config_file", help="Path to configuration JSON")

    # Dimensions command
    dimensions_parser = subparsers.add_parser("dimensions", help="Board edge for a player count")
    dimensions_parser.add_argument("player_count", type=int)

    # Placement command
    placement_parser = subparsers.add_parser("placement", help="Random starting PLACE events")
    placement_parser.add_argument("player_count", type=int)
    placement_parser.add_argument("--at", required=True, help="submittedAt for the events (ISO-8601)")
    placement_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Game state at an instant")
    replay_parser.add_argument("config_file", help="Path to configuration JSON")
    replay_parser.add_argument("events_file", help="Path to event log JSON")
    replay_parser.add_argument("--at", required=True, help="Query instant (ISO-8601)")
    replay_parser.add_argument(
        "--mode",
        choices=["compatible", "corrected"],
        default=None,
        help="Rule mode (default: GRIDFALL_RULE_MODE)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.GRIDFALL_LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "validate": cmd_validate,
        "dimensions": cmd_dimensions,
        "placement": cmd_placement,
        "replay": cmd_replay,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    # GameRuleError and pydantic ValidationError are both ValueErrors
    try:
        command(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _load_json(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)


def cmd_validate(args):
    """Validate a game configuration."""
    from .schema import validate_config

    errors = validate_config(_load_json(args.config_file))
    if errors:
        print("Errors:")
        for e in errors:
            print(f"  - {e}")
        sys.exit(1)
    print("ok")


def cmd_dimensions(args):
    """Print the board edge length for a player count."""
    from .engine_core.setup import calc_dimensions

    print(calc_dimensions(args.player_count))


def cmd_placement(args):
    """Print random starting PLACE events as JSON."""
    from .engine_core.setup import initial_placement
    from .schema import event_to_wire
    from .utils.time import parse_iso

    events = initial_placement(args.player_count, parse_iso(args.at), random_seed=args.seed)
    print(json.dumps([event_to_wire(e) for e in events], indent=2))


def cmd_replay(args):
    """Print the game state at an instant as JSON."""
    from .engine_core import init_game, init_process, process_events, calculate_state
    from .engine_core.reducer import RuleMode
    from .schema import GameStateModel, parse_events
    from .utils.time import parse_iso

    state = init_game(_load_json(args.config_file))
    events = parse_events(_load_json(args.events_file))
    process = process_events(init_process(state), events)

    mode = RuleMode(args.mode) if args.mode else None
    result = calculate_state(parse_iso(args.at), process, mode=mode)
    print(json.dumps(GameStateModel.from_state(result).to_wire(), indent=2))


if __name__ == "__main__":
    main()
