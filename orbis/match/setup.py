"""
Match Setup - Creates the initial Game for a match.

This module handles:
- Generating a board of planets with resource slots and borders
- Seeding randomness for deterministic boards
- Filling every player's structure inventory
- Creating each player's off-board agents and unbuilt fleets

The engine itself never creates games; the transport calls this once
per match.
"""

from __future__ import annotations
import random

from ..engine_core.constants import (
    NUM_FLEETS,
    NUM_RESOURCES,
    STRUCTURE_RULES,
    AgentKind,
    BorderState,
    PointCategory,
    ResourceKind,
    StructureKind,
)
from ..engine_core.state import (
    Agent,
    Board,
    Fleet,
    Game,
    Planet,
    ResourceSlot,
    agent_id,
    fleet_id,
)

MIN_PLAYERS = 2
MAX_PLAYERS = 4

# Planets explored at the start of a match
STARTING_EXPLORED = 6


def new_game(
    players: list[str],
    seed: int | None = None,
    num_planets: int | None = None,
) -> Game:
    """
    Set up a new match.

    Args:
        players: Player identifiers in turn order (2-4)
        seed: Seed for deterministic board generation
        num_planets: Board size (defaults to 4 planets per player)

    Returns:
        Game at round 0, placement phase, first player's turn
    """
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        raise ValueError(f"A match needs {MIN_PLAYERS}-{MAX_PLAYERS} players")
    if len(set(players)) != len(players):
        raise ValueError("Player identifiers must be unique")

    rng = random.Random(seed)
    board = generate_board(rng, num_planets or 4 * len(players))

    game = Game(players=list(players), board=board)
    game.phase_done = [False] * len(players)

    for player in range(len(players)):
        game.resources[player] = [0] * NUM_RESOURCES
        game.resource_collect[player] = [0] * NUM_RESOURCES
        game.resource_upkeep[player] = [0] * NUM_RESOURCES
        game.structures[player] = [STRUCTURE_RULES[k].max for k in StructureKind]
        game.points[player] = [0] * len(PointCategory)

        for kind in AgentKind:
            board.agents[agent_id(player, kind)] = Agent(player=player, agent_type=kind)
        for slot in range(NUM_FLEETS):
            board.fleets[fleet_id(player, slot)] = Fleet(player=player)

    return game


def generate_board(rng: random.Random, num_planets: int) -> Board:
    """
    Generate planets connected in a ring with a few chords.

    The first STARTING_EXPLORED planets are explored and openly connected
    to each other; borders touching unexplored planets start unexplored.
    """
    if num_planets < 2:
        raise ValueError("A board needs at least 2 planets")

    planets = [_create_planet(rng, i < STARTING_EXPLORED) for i in range(num_planets)]

    edges = {(i, (i + 1) % num_planets) for i in range(num_planets)}
    for i in range(0, num_planets, 3):
        j = (i + num_planets // 2) % num_planets
        if i != j:
            edges.add((i, j))

    for a, b in edges:
        if a == b:
            continue
        both_explored = planets[a].explored and planets[b].explored
        state = BorderState.OPEN if both_explored else BorderState.UNEXPLORED
        planets[a].borders[b] = state
        planets[b].borders[a] = state

    return Board(planets=planets)


def _create_planet(rng: random.Random, explored: bool) -> Planet:
    """Create one planet with 1-3 resource slots."""
    w = rng.choice([1, 1, 2])
    num_slots = rng.randint(1, 2) if w == 1 else rng.randint(2, 3)
    resources = [
        ResourceSlot(kind=rng.choice(list(ResourceKind)), num=rng.randint(1, 3))
        for _ in range(num_slots)
    ]
    return Planet(w=w, explored=explored, resources=resources)
