"""
Game Constants - Phases, kinds and the structure rule table.

Everything the handlers branch on lives here as data:
- Phase cycle (period 5)
- Resource, structure and agent kinds
- Per-structure build cost, upkeep cost, point value and inventory cap
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum


class Phase(IntEnum):
    """Phases of a round. Advances mod 5."""
    PLACEMENT = 0
    RESOURCE = 1
    UPKEEP = 2
    BUILD = 3
    RECRUIT = 4  # Reserved: recruiting is legal during BUILD


NUM_PHASES = len(Phase)


class ResourceKind(IntEnum):
    """Resource types. Resource vectors are indexed by these."""
    METAL = 0
    WATER = 1
    FUEL = 2
    FOOD = 3


NUM_RESOURCES = len(ResourceKind)

# resourceid value meaning "not on a resource"
NO_RESOURCE = -1


class StructureKind(IntEnum):
    """Buildable structures. Inventories are indexed by these."""
    MINE = 0
    FACTORY = 1
    EMBASSY = 2
    BASE = 3
    FLEET = 4


class AgentKind(IntEnum):
    EXPLORER = 0
    MINER = 1
    SURVEYOR = 2
    AMBASSADOR = 3
    CAPTAIN = 4


class AgentStatus(Enum):
    OFF_BOARD = "off_board"
    ON_BOARD = "on_board"
    DEAD = "dead"


class BorderState(Enum):
    OPEN = "open"
    BLOCKED = "blocked"
    UNEXPLORED = "unexplored"


class PointCategory(IntEnum):
    STRUCTURES = 0
    MISSIONS = 1


@dataclass(frozen=True)
class StructureRules:
    """
    Rules for one structure kind.

    build/upkeep map resource kind -> amount.
    occupies_slot is true for structures that sit on a resource slot.
    """
    name: str
    max: int
    build: dict[ResourceKind, int] = field(default_factory=dict)
    upkeep: dict[ResourceKind, int] = field(default_factory=dict)
    points: int = 0
    occupies_slot: bool = False


NUM_FLEETS = 3

STRUCTURE_RULES: dict[StructureKind, StructureRules] = {
    StructureKind.MINE: StructureRules(
        name="mine",
        max=12,
        build={ResourceKind.METAL: 1, ResourceKind.WATER: 1},
        upkeep={},
        points=1,
        occupies_slot=True,
    ),
    StructureKind.FACTORY: StructureRules(
        name="factory",
        max=4,
        build={ResourceKind.METAL: 2, ResourceKind.FUEL: 1},
        upkeep={ResourceKind.FUEL: 1},
        points=2,
        occupies_slot=True,
    ),
    StructureKind.EMBASSY: StructureRules(
        name="embassy",
        max=3,
        build={ResourceKind.WATER: 2, ResourceKind.FOOD: 1},
        upkeep={ResourceKind.FOOD: 1},
        points=2,
        occupies_slot=True,
    ),
    StructureKind.BASE: StructureRules(
        name="base",
        max=2,
        build={
            ResourceKind.METAL: 2,
            ResourceKind.WATER: 1,
            ResourceKind.FOOD: 1,
        },
        upkeep={ResourceKind.FOOD: 1, ResourceKind.WATER: 1},
        points=3,
    ),
    StructureKind.FLEET: StructureRules(
        name="fleet",
        max=NUM_FLEETS,
        build={ResourceKind.METAL: 1, ResourceKind.FUEL: 2},
        upkeep={ResourceKind.FUEL: 1},
        points=1,
    ),
}

# Structure a player must own on a planet to recruit each agent there
AGENT_STRUCTURE: dict[AgentKind, StructureKind] = {
    AgentKind.EXPLORER: StructureKind.BASE,
    AgentKind.MINER: StructureKind.MINE,
    AgentKind.SURVEYOR: StructureKind.FACTORY,
    AgentKind.AMBASSADOR: StructureKind.EMBASSY,
    AgentKind.CAPTAIN: StructureKind.FLEET,
}

AGENT_NAMES: dict[AgentKind, str] = {
    AgentKind.EXPLORER: "explorer",
    AgentKind.MINER: "miner",
    AgentKind.SURVEYOR: "surveyor",
    AgentKind.AMBASSADOR: "ambassador",
    AgentKind.CAPTAIN: "captain",
}

# Economy
RESOURCE_CEILING = 10
NON_MINE_YIELD = 2

# The match ends once this round is reached
FINAL_ROUND = 3


def structure_name(kind: StructureKind) -> str:
    return STRUCTURE_RULES[kind].name


def agent_name(kind: AgentKind) -> str:
    return AGENT_NAMES[kind]
