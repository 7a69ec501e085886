"""
Engine Core - Authoritative action resolution for a match.

The engine:
1. Receives one player action and the shared Game
2. Validates it against phase, turn and resource rules
3. Mutates the Game exactly when the action is legal
4. Recomputes derived economy values
5. Returns an Envelope saying who to notify and with what
"""

from .state import Game, Board, Planet, ResourceSlot, Structure, Base, Agent, Fleet
from .action import (
    Action,
    ActionType,
    ActionResult,
    Envelope,
    Recipient,
    IllegalActionError,
)
from .reducer import Reducer, resolve_action
from .turns import update_turn, update_phase, is_end_condition
from .economy import calc_resources_to_collect, calc_resource_upkeep

__all__ = [
    "Game",
    "Board",
    "Planet",
    "ResourceSlot",
    "Structure",
    "Base",
    "Agent",
    "Fleet",
    "Action",
    "ActionType",
    "ActionResult",
    "Envelope",
    "Recipient",
    "IllegalActionError",
    "Reducer",
    "resolve_action",
    "update_turn",
    "update_phase",
    "is_end_condition",
    "calc_resources_to_collect",
    "calc_resource_upkeep",
]
