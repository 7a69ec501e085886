"""
Orbis CLI - Command-line interface for the engine.

Usage:
    orbis serve [--host H] [--port P]      Run the API server
    orbis new --players A B [--seed N]     Print a fresh game as JSON
    orbis draft --players A B [--seed N]   Auto-play the placement round
"""

import argparse
import json
import logging
import sys

from .config import get_settings


def main():
    """Main CLI entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Orbis - Strategy Board Game Rules Engine",
        prog="orbis",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=settings.host, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.port, help="Bind port")

    # New game command
    new_parser = subparsers.add_parser("new", help="Print a new game as JSON")
    new_parser.add_argument("--players", nargs="+", required=True, help="Players in turn order")
    new_parser.add_argument("--seed", type=int, default=None, help="Board seed")

    # Draft command
    draft_parser = subparsers.add_parser("draft", help="Auto-play the placement round")
    draft_parser.add_argument("--players", nargs="+", required=True, help="Players in turn order")
    draft_parser.add_argument("--seed", type=int, default=None, help="Board seed")

    args = parser.parse_args()

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "new":
        cmd_new(args)
    elif args.command == "draft":
        cmd_draft(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("orbis.api.app:create_app", factory=True, host=args.host, port=args.port)


def cmd_new(args):
    """Create a game and dump it."""
    from .match import new_game

    try:
        game = new_game(args.players, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(json.dumps(game.to_dict(), indent=2))


def cmd_draft(args):
    """Play the snake draft by placing a mine on the first free slot each pick."""
    from .engine_core import Action, resolve_action
    from .engine_core.constants import StructureKind
    from .match import new_game

    try:
        game = new_game(args.players, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    order = []
    while game.round == 0:
        target = _first_free_slot(game)
        if target is None:
            print("Error: No free resource left to place on")
            sys.exit(1)
        player = game.turn
        envelope = resolve_action(
            game, Action.place(player, target[0], StructureKind.MINE, target[1])
        )
        if envelope.event != "game event":
            print(f"Error: {envelope.content}")
            sys.exit(1)
        order.append(game.players[player])

    print(f"Pick order: {', '.join(order)}")
    print(f"Round: {game.round}")
    print(f"Phase: {game.phase.name.lower()}")
    for player, name in enumerate(game.players):
        print(f"  {name} collects {game.resource_collect[player]}")


def _first_free_slot(game):
    planets = sorted(
        enumerate(game.board.planets), key=lambda item: not item[1].explored
    )
    for planet_id, planet in planets:
        for index, slot in enumerate(planet.resources):
            if slot.is_free:
                return planet_id, index
    return None


if __name__ == "__main__":
    main()
