"""
Reducer - Resolves one player action against the shared game.

The reducer is the single point of state mutation.
All state changes must go through resolve_action().

Design principles:
- (game, action) -> Envelope, mutating game in place
- Handlers validate completely before mutating anything
- Rule violations are results, not exceptions
- Routing is by action kind only; unknown kinds are illegal
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Callable

from .action import (
    Action,
    ActionResult,
    ActionType,
    Envelope,
    IllegalActionError,
    Recipient,
    EVENT_GAME_END,
    EVENT_GAME_EVENT,
    EVENT_ILLEGAL_ACTION,
    EVENT_LOADING_DONE,
)
from .constants import (
    AGENT_STRUCTURE,
    NO_RESOURCE,
    NUM_FLEETS,
    RESOURCE_CEILING,
    STRUCTURE_RULES,
    AgentKind,
    AgentStatus,
    Phase,
    PointCategory,
    StructureKind,
    agent_name,
    structure_name,
)
from .economy import (
    calc_resource_upkeep,
    calc_resources_to_collect,
    resources_to_collect,
)
from .state import Base, Game, Planet, Structure, agent_id, fleet_id
from .turns import is_end_condition, update_phase, update_turn

logger = logging.getLogger(__name__)

Handler = Callable[[Game, Action], ActionResult]


@dataclass
class Reducer:
    """
    Routes actions to handlers and packages the verdict.

    Stateless - all state is in Game.
    """

    def resolve(self, game: Game, action: Action) -> Envelope:
        """
        Resolve an action against the game.

        Returns the Envelope the transport should deliver.
        """
        if action.action_type == ActionType.LOADING_DONE:
            return Envelope(Recipient.ONE, EVENT_LOADING_DONE, {"game": game})

        if is_end_condition(game):
            return Envelope(Recipient.ALL, EVENT_GAME_END, {})

        if action.action_type == ActionType.TURN_DONE:
            return self._resolve_turn_done(game, action)

        handler = self._get_handler(action.action_type)
        if handler is None:
            result = ActionResult.illegal("That is an unknown action")
        elif not game.is_player(action.player):
            result = ActionResult.illegal("You are not a player in this game")
        else:
            try:
                result = handler(game, action)
            except IllegalActionError as e:
                result = ActionResult.illegal(str(e))

        if result.is_illegal:
            logger.debug(
                "Rejected %s from player %s: %s",
                action.action_type, action.player, result.response,
            )
            return Envelope(Recipient.ONE, EVENT_ILLEGAL_ACTION, result.response)

        return Envelope(
            Recipient.ALL,
            EVENT_GAME_EVENT,
            {"game": game, "action": action, "response": result.response},
        )

    def _resolve_turn_done(self, game: Game, action: Action) -> Envelope:
        if game.turn != action.player:
            return Envelope(Recipient.ONE, EVENT_ILLEGAL_ACTION, "it is not your turn")

        update_turn(game)
        return Envelope(Recipient.ALL, EVENT_GAME_EVENT, {"game": game})

    def _get_handler(self, action_type: ActionType | str) -> Handler | None:
        """Get the handler function for an action type."""
        handlers: dict[ActionType, Handler] = {
            ActionType.PLACE: apply_place,
            ActionType.BUILD: apply_build,
            ActionType.RECRUIT: apply_recruit,
            ActionType.COLLECT_RESOURCES: apply_collect_resources,
            ActionType.PAY_UPKEEP: apply_pay_upkeep,
        }
        try:
            return handlers.get(ActionType(action_type))
        except ValueError:
            return None


def resolve_action(game: Game, action: Action) -> Envelope:
    """
    Convenience function to resolve an action.

    Creates a Reducer and resolves the action.
    """
    return Reducer().resolve(game, action)


# =============================================================================
# Handlers
# =============================================================================

def apply_place(game: Game, action: Action) -> ActionResult:
    """
    Place a structure during the opening snake draft.

    No phase or turn gate: ordering comes from update_turn alone, so a
    place from a player whose turn it is not is still accepted and the
    draft advances as if the expected player had placed. Only structures
    that sit on a resource slot can be placed.
    """
    player = action.player
    index = action.resource_id

    if index is None or index == NO_RESOURCE:
        return ActionResult.illegal("You must place this on a resource")

    kind = _structure_kind(action.object_type)
    if not STRUCTURE_RULES[kind].occupies_slot:
        return ActionResult.illegal(f"You cannot place a {structure_name(kind)} on a resource")

    planet = game.planet(action.planet_id)
    slot = planet.slot(index)

    if not slot.is_free:
        return ActionResult.illegal("You cannot place this on another structure")

    if game.structures[player][kind] <= 0:
        return ActionResult.illegal(f"You have no {structure_name(kind)} left to place")

    slot.structure = Structure(player=player, kind=kind)
    game.structures[player][kind] -= 1

    _mark_settled(game, player, action.planet_id)

    update_turn(game)
    calc_resources_to_collect(game, player)
    return ActionResult.legal()


def apply_build(game: Game, action: Action) -> ActionResult:
    """Build a structure during the build phase."""
    player = action.player

    if game.phase != Phase.BUILD:
        return ActionResult.illegal("This action must be done during the build phase")

    if game.turn != player:
        return ActionResult.illegal("This action must be done during your turn")

    kind = _structure_kind(action.object_type)
    planet = game.planet(action.planet_id)
    name = structure_name(kind)

    if game.structures[player][kind] <= 0:
        return ActionResult.illegal(f"You cannot build another {name}")

    if not has_enough_to_build(game, player, kind):
        return ActionResult.illegal(
            f"You do not have enough resources to build a new {name}"
        )

    if STRUCTURE_RULES[kind].occupies_slot:
        index = action.resource_id
        if index is None or index == NO_RESOURCE:
            return ActionResult.illegal(f"You must build a {name} on a resource")
        slot = planet.slot(index)
        occupant = slot.structure
        upgrading = (
            occupant is not None
            and occupant.player == player
            and occupant.kind == StructureKind.MINE
            and kind != StructureKind.MINE
        )
        if occupant is not None and not upgrading:
            return ActionResult.illegal("You cannot build this on another structure")
        slot.structure = Structure(player=player, kind=kind)
        if kind != StructureKind.MINE:
            # Factories and embassies hand a mine back to the builder
            game.structures[player][StructureKind.MINE] += 1

    elif kind == StructureKind.BASE:
        if planet.base is not None:
            return ActionResult.illegal("Only one base can be built on a planet")
        planet.base = Base(player=player)

    else:
        if planet.base is None or planet.base.player != player:
            return ActionResult.illegal("You must build fleets where you have a base")
        fid = _free_fleet(game, player)
        if fid is None:
            return ActionResult.illegal("All of your fleets are already built")
        fleet = game.board.fleets[fid]
        fleet.planet_id = action.planet_id
        fleet.used = False
        planet.fleets.append(fid)

    pay_to_build(game, player, kind)
    game.structures[player][kind] -= 1

    _mark_settled(game, player, action.planet_id)
    add_points_for_structure(game, player, kind)

    calc_resources_to_collect(game, player)
    return ActionResult.legal()


def apply_recruit(game: Game, action: Action) -> ActionResult:
    """Bring an off-board agent onto a planet where the player has its structure."""
    player = action.player

    if game.phase != Phase.BUILD:
        return ActionResult.illegal("You must recruit new agents during the build phase")

    if game.turn != player:
        return ActionResult.illegal("You must recruit agents during your turn")

    try:
        agent_type = AgentKind(action.agent_type)
    except ValueError:
        raise IllegalActionError("That is an unknown agent") from None

    planet = game.planet(action.planet_id)
    aid = agent_id(player, agent_type)
    agent = game.board.agents[aid]
    required = AGENT_STRUCTURE[agent_type]
    name = agent_name(agent_type)

    if agent.status == AgentStatus.DEAD:
        return ActionResult.illegal(f"Your {name} cannot return during this game.")

    if agent.status == AgentStatus.ON_BOARD:
        return ActionResult.illegal(f"Your {name} is already on the board.")

    if not player_has_structure(game, player, planet, required):
        return ActionResult.illegal(
            f"You must recruit a new {name} at your {structure_name(required)}"
        )

    agent.planet_id = action.planet_id
    agent.used = False
    agent.status = AgentStatus.ON_BOARD
    planet.agents.append(aid)

    return ActionResult.legal()


def apply_collect_resources(game: Game, action: Action) -> ActionResult:
    """Collect this round's income, once per player."""
    player = action.player

    if game.phase != Phase.RESOURCE:
        return ActionResult.illegal("The resource phase is complete")

    if game.phase_done[player]:
        return ActionResult.illegal("You have already collected resources")

    collect = resources_to_collect(game, player)
    owned = game.resources[player]

    # Surplus has to be traded down before collecting more
    for have, gain in zip(owned, collect):
        if have + gain > RESOURCE_CEILING:
            return ActionResult.illegal("You must trade or 4 to 1 before collecting more")

    game.resource_collect[player] = collect
    for i, gain in enumerate(collect):
        owned[i] += gain

    game.phase_done[player] = True
    update_phase(game)

    return ActionResult.legal()


def apply_pay_upkeep(game: Game, action: Action) -> ActionResult:
    """
    Pay upkeep for every built structure, once per player.

    Resources may go negative here; nothing rejects a short payment.
    """
    player = action.player

    if game.phase != Phase.UPKEEP:
        return ActionResult.illegal("The upkeep phase is complete")

    if game.phase_done[player]:
        return ActionResult.illegal("You have already paid upkeep")

    upkeep = calc_resource_upkeep(game, player)
    owned = game.resources[player]
    for i, cost in enumerate(upkeep):
        owned[i] -= cost

    game.phase_done[player] = True
    update_phase(game)

    return ActionResult.legal()


# =============================================================================
# Helpers
# =============================================================================

def has_enough_to_build(game: Game, player: int, kind: StructureKind) -> bool:
    owned = game.resources[player]
    return all(
        owned[resource] >= amount
        for resource, amount in STRUCTURE_RULES[kind].build.items()
    )


def pay_to_build(game: Game, player: int, kind: StructureKind) -> None:
    owned = game.resources[player]
    for resource, amount in STRUCTURE_RULES[kind].build.items():
        owned[resource] -= amount


def add_points_for_structure(game: Game, player: int, kind: StructureKind) -> None:
    """Award the flat point value of a newly built structure."""
    game.points[player][PointCategory.STRUCTURES] += STRUCTURE_RULES[kind].points


def player_has_structure(
    game: Game, player: int, planet: Planet, kind: StructureKind
) -> bool:
    """Check whether player owns a structure of this kind on the planet."""
    if kind == StructureKind.BASE:
        return planet.base is not None and planet.base.player == player
    if kind == StructureKind.FLEET:
        return any(game.board.fleets[fid].player == player for fid in planet.fleets)
    return any(
        slot.structure is not None
        and slot.structure.player == player
        and slot.structure.kind == kind
        for slot in planet.resources
    )


def _mark_settled(game: Game, player: int, planet_id: int) -> None:
    """
    Record that player has a presence on planet_id.

    The planet and every planet it borders openly become buildable.
    Flags are never cleared; structures cannot be removed.
    """
    planet = game.board.planets[planet_id]
    planet.settled_by[player] = True
    planet.buildable_by[player] = True
    for neighbour in planet.open_neighbours():
        game.board.planets[neighbour].buildable_by[player] = True


def _free_fleet(game: Game, player: int) -> str | None:
    for slot in range(NUM_FLEETS):
        fid = fleet_id(player, slot)
        if not game.board.fleets[fid].is_built:
            return fid
    return None


def _structure_kind(object_type: int | None) -> StructureKind:
    try:
        return StructureKind(object_type)
    except ValueError:
        raise IllegalActionError("Unknown building type") from None
