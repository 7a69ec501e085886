"""
Game State - The shared aggregate the engine mutates.

Design principles:
- One Game per match, mutated in place by the reducer only
- Serializable: every aggregate has to_dict() for the transport
- Player keys are turn indices into Game.players
- Derived economy vectors are cached, not authoritative
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .action import IllegalActionError
from .constants import (
    AgentKind,
    AgentStatus,
    BorderState,
    Phase,
    ResourceKind,
    StructureKind,
)


@dataclass
class Structure:
    """A structure sitting on a resource slot."""
    player: int
    kind: StructureKind

    def to_dict(self) -> dict[str, Any]:
        return {"player": self.player, "kind": int(self.kind)}


@dataclass
class Base:
    """The per-planet base singleton."""
    player: int
    used: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"player": self.player, "used": self.used}


@dataclass
class ResourceSlot:
    """
    A resource on a planet.

    num is the slot's intrinsic yield when mined.
    At most one structure occupies a slot.
    """
    kind: ResourceKind
    num: int = 1
    structure: Structure | None = None

    @property
    def is_free(self) -> bool:
        return self.structure is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": int(self.kind),
            "num": self.num,
            "structure": self.structure.to_dict() if self.structure else None,
        }


@dataclass
class Planet:
    """
    A planet tile on the board.

    borders maps neighbour planet id -> BorderState.
    settled_by / buildable_by are only ever set true.
    """
    w: int = 1
    explored: bool = False
    resources: list[ResourceSlot] = field(default_factory=list)
    base: Base | None = None
    fleets: list[str] = field(default_factory=list)
    agents: list[str] = field(default_factory=list)
    borders: dict[int, BorderState] = field(default_factory=dict)
    settled_by: dict[int, bool] = field(default_factory=dict)
    buildable_by: dict[int, bool] = field(default_factory=dict)

    def slot(self, resource_id: int | None) -> ResourceSlot:
        """Get a resource slot, raising for unknown ids."""
        if resource_id is None or not 0 <= resource_id < len(self.resources):
            raise IllegalActionError("That resource does not exist")
        return self.resources[resource_id]

    def open_neighbours(self) -> list[int]:
        """Ids of planets this planet has an open border with."""
        return [pid for pid, state in self.borders.items() if state == BorderState.OPEN]

    def to_dict(self) -> dict[str, Any]:
        return {
            "w": self.w,
            "explored": self.explored,
            "resources": [r.to_dict() for r in self.resources],
            "base": self.base.to_dict() if self.base else None,
            "fleets": list(self.fleets),
            "agents": list(self.agents),
            "borders": {pid: state.value for pid, state in self.borders.items()},
            "settledBy": dict(self.settled_by),
            "buildableBy": dict(self.buildable_by),
        }


@dataclass
class Agent:
    """A recruitable unit. DEAD is terminal."""
    player: int
    agent_type: AgentKind
    planet_id: int | None = None
    used: bool = False
    status: AgentStatus = AgentStatus.OFF_BOARD

    def to_dict(self) -> dict[str, Any]:
        return {
            "player": self.player,
            "agenttype": int(self.agent_type),
            "planetid": self.planet_id,
            "used": self.used,
            "status": self.status.value,
        }


@dataclass
class Fleet:
    """One of a player's fixed fleet slots. Built when planet_id is set."""
    player: int
    planet_id: int | None = None
    used: bool = False

    @property
    def is_built(self) -> bool:
        return self.planet_id is not None

    def to_dict(self) -> dict[str, Any]:
        return {"player": self.player, "planetid": self.planet_id, "used": self.used}


def agent_id(player: int, agent_type: int) -> str:
    return f"{player}{int(agent_type)}"


def fleet_id(player: int, slot: int) -> str:
    return f"{player}{slot}"


@dataclass
class Board:
    """Planets plus the id-indexed agents and fleets."""
    planets: list[Planet] = field(default_factory=list)
    agents: dict[str, Agent] = field(default_factory=dict)
    fleets: dict[str, Fleet] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "planets": [p.to_dict() for p in self.planets],
            "agents": {aid: a.to_dict() for aid, a in self.agents.items()},
            "fleets": {fid: f.to_dict() for fid, f in self.fleets.items()},
        }


@dataclass
class Game:
    """
    Complete shared state of one match.

    resource_collect / resource_upkeep are memoized by the economy
    calculator and can be stale between recomputations.
    """
    players: list[str]
    board: Board = field(default_factory=Board)

    round: int = 0
    turn: int = 0
    phase: Phase = Phase.PLACEMENT
    second_mines: bool = False
    phase_done: list[bool] = field(default_factory=list)

    resources: dict[int, list[int]] = field(default_factory=dict)
    resource_collect: dict[int, list[int]] = field(default_factory=dict)
    resource_upkeep: dict[int, list[int]] = field(default_factory=dict)
    structures: dict[int, list[int]] = field(default_factory=dict)
    points: dict[int, list[int]] = field(default_factory=dict)

    @property
    def num_players(self) -> int:
        return len(self.players)

    def planet(self, planet_id: int | None) -> Planet:
        """Get a planet by id, raising for unknown ids."""
        planets = self.board.planets
        if planet_id is None or not 0 <= planet_id < len(planets):
            raise IllegalActionError("That planet does not exist")
        return planets[planet_id]

    def is_player(self, player: Any) -> bool:
        return isinstance(player, int) and 0 <= player < len(self.players)

    def to_dict(self) -> dict[str, Any]:
        return {
            "players": list(self.players),
            "round": self.round,
            "turn": self.turn,
            "phase": int(self.phase),
            "secondmines": self.second_mines,
            "phaseDone": list(self.phase_done),
            "resources": {p: list(v) for p, v in self.resources.items()},
            "resourceCollect": {p: list(v) for p, v in self.resource_collect.items()},
            "resourceUpkeep": {p: list(v) for p, v in self.resource_upkeep.items()},
            "structures": {p: list(v) for p, v in self.structures.items()},
            "points": {p: list(v) for p, v in self.points.items()},
            "board": self.board.to_dict(),
        }
