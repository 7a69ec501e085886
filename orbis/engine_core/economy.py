"""
Economy Calculator - Derives income and upkeep vectors.

Both vectors are full recomputations. The calc_* functions store them
on the Game:
- resource_collect: after every place/build, and on a legal collection
- resource_upkeep: on a legal upkeep payment

Between those points the stored vectors may be stale.
"""

from __future__ import annotations

from .constants import (
    NON_MINE_YIELD,
    NUM_RESOURCES,
    STRUCTURE_RULES,
    StructureKind,
)
from .state import Game


def resources_to_collect(game: Game, player: int) -> list[int]:
    """
    Compute the income vector for one player without storing it.

    Every explored planet's slots are scanned. A mine yields the slot's
    own count, any other structure a flat NON_MINE_YIELD, added to the
    bucket of the slot's resource kind.
    """
    collect = [0] * NUM_RESOURCES

    for planet in game.board.planets:
        if not planet.explored:
            continue
        for slot in planet.resources:
            structure = slot.structure
            if structure is None or structure.player != player:
                continue
            if structure.kind == StructureKind.MINE:
                collect[slot.kind] += slot.num
            else:
                collect[slot.kind] += NON_MINE_YIELD

    return collect


def resource_upkeep(game: Game, player: int) -> list[int]:
    """
    Compute the upkeep vector for one player without storing it.

    Built count per kind is (max allowed - remaining inventory).
    """
    upkeep = [0] * NUM_RESOURCES
    inventory = game.structures[player]

    for kind in range(StructureKind.MINE, StructureKind.FLEET + 1):
        rules = STRUCTURE_RULES[StructureKind(kind)]
        built = rules.max - inventory[kind]
        for resource, amount in rules.upkeep.items():
            upkeep[resource] += amount * built

    return upkeep


def calc_resources_to_collect(game: Game, player: int) -> list[int]:
    """Recompute and store the income vector for one player."""
    collect = resources_to_collect(game, player)
    game.resource_collect[player] = collect
    return collect


def calc_resource_upkeep(game: Game, player: int) -> list[int]:
    """Recompute and store the upkeep vector for one player."""
    upkeep = resource_upkeep(game, player)
    game.resource_upkeep[player] = upkeep
    return upkeep
