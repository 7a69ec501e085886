"""
Action System - Actions, results, and notification envelopes.

Actions represent one player submission:
1. Board actions (place, build, recruit)
2. Simultaneous-phase actions (collect resources, pay upkeep)
3. Turn control (turn done)
4. Client bookkeeping (loading done)

The engine answers every action with an Envelope that tells the
transport who to notify and with what.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ActionType(str, Enum):
    """Kinds of actions a player can submit."""
    PLACE = "place"
    BUILD = "build"
    RECRUIT = "recruit"
    COLLECT_RESOURCES = "collect_resources"
    PAY_UPKEEP = "pay_upkeep"
    TURN_DONE = "turn_done"
    LOADING_DONE = "loading_done"


class IllegalActionError(Exception):
    """Raised when an action references something that does not exist."""


@dataclass
class Action:
    """
    A single player submission.

    action_type is an ActionType, or the raw tag when the client sent
    a kind the engine does not know. Unknown kinds are rejected by the
    dispatcher, not at parse time.
    """
    player: int
    action_type: ActionType | str
    planet_id: int | None = None
    object_type: int | None = None
    resource_id: int | None = None
    agent_type: int | None = None

    @classmethod
    def place(cls, player: int, planet_id: int, object_type: int, resource_id: int) -> Action:
        """Factory for initial placement."""
        return cls(
            player=player,
            action_type=ActionType.PLACE,
            planet_id=planet_id,
            object_type=object_type,
            resource_id=resource_id,
        )

    @classmethod
    def build(
        cls,
        player: int,
        planet_id: int,
        object_type: int,
        resource_id: int | None = None,
    ) -> Action:
        """Factory for build action."""
        return cls(
            player=player,
            action_type=ActionType.BUILD,
            planet_id=planet_id,
            object_type=object_type,
            resource_id=resource_id,
        )

    @classmethod
    def recruit(cls, player: int, planet_id: int, agent_type: int) -> Action:
        """Factory for recruit action."""
        return cls(
            player=player,
            action_type=ActionType.RECRUIT,
            planet_id=planet_id,
            agent_type=agent_type,
        )

    @classmethod
    def collect_resources(cls, player: int) -> Action:
        return cls(player=player, action_type=ActionType.COLLECT_RESOURCES)

    @classmethod
    def pay_upkeep(cls, player: int) -> Action:
        return cls(player=player, action_type=ActionType.PAY_UPKEEP)

    @classmethod
    def turn_done(cls, player: int) -> Action:
        return cls(player=player, action_type=ActionType.TURN_DONE)

    @classmethod
    def loading_done(cls, player: int) -> Action:
        return cls(player=player, action_type=ActionType.LOADING_DONE)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Action:
        """
        Build an action from a client payload.

        Accepts the wire keys (actiontype, planetid, objecttype,
        resourceid, agenttype) as well as the attribute names.
        """
        raw_type = data.get("actiontype", data.get("action_type"))
        try:
            action_type: ActionType | str = ActionType(raw_type)
        except ValueError:
            action_type = str(raw_type)

        def pick(wire_key: str, attr: str) -> Any:
            return data.get(wire_key, data.get(attr))

        return cls(
            player=data["player"],
            action_type=action_type,
            planet_id=pick("planetid", "planet_id"),
            object_type=pick("objecttype", "object_type"),
            resource_id=pick("resourceid", "resource_id"),
            agent_type=pick("agenttype", "agent_type"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the wire keys."""
        action_type = self.action_type
        if isinstance(action_type, ActionType):
            action_type = action_type.value
        return {
            "player": self.player,
            "actiontype": action_type,
            "planetid": self.planet_id,
            "objecttype": self.object_type,
            "resourceid": self.resource_id,
            "agenttype": self.agent_type,
        }


@dataclass
class ActionResult:
    """
    Verdict of a legality & mutation handler.

    A legal result means the handler fully applied its effect.
    An illegal result means nothing was changed.
    """
    is_illegal: bool
    response: Any | None = None

    @classmethod
    def legal(cls, response: Any | None = None) -> ActionResult:
        return cls(is_illegal=False, response=response)

    @classmethod
    def illegal(cls, reason: str) -> ActionResult:
        return cls(is_illegal=True, response=reason)


class Recipient(str, Enum):
    """Who the transport should deliver an envelope to."""
    ONE = "one"  # Only the acting player
    ALL = "all"  # Every participant


EVENT_ILLEGAL_ACTION = "illegal action"
EVENT_GAME_EVENT = "game event"
EVENT_GAME_END = "game end"
EVENT_LOADING_DONE = "loading done"


@dataclass
class Envelope:
    """Notification returned by the engine for the transport to deliver."""
    to: Recipient
    event: str
    content: Any

    @property
    def is_broadcast(self) -> bool:
        return self.to == Recipient.ALL

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the wire. Game and Action values are expanded."""
        content = self.content
        if isinstance(content, dict):
            content = {
                key: value.to_dict() if hasattr(value, "to_dict") else value
                for key, value in content.items()
            }
        return {"to": self.to.value, "event": self.event, "content": content}
