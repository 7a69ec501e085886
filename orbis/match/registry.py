"""
Match Registry - Creates and tracks running matches.

LIFECYCLE:
1. Transport creates a match from a player list
2. Players submit actions; each is resolved by the engine
3. The returned envelope is delivered by the transport
4. Match ends (game end or abandoned) -> removed from memory

PERSISTENCE RULES:
- In-memory only; a restart loses every match
- Actions against one match are serialized here, never in the engine
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import threading
import time
import uuid

from ..engine_core.action import Action, Envelope, EVENT_GAME_END
from ..engine_core.reducer import Reducer
from ..engine_core.state import Game
from .setup import new_game

logger = logging.getLogger(__name__)


class MatchState(Enum):
    """State of a match."""
    ACTIVE = "active"
    FINISHED = "finished"
    ABANDONED = "abandoned"


@dataclass
class Match:
    """
    A running match.

    Holds the Game and the lock that serializes actions against it.
    """
    match_id: str
    game: Game
    created_at: float
    state: MatchState = MatchState.ACTIVE
    actions_resolved: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def is_active(self) -> bool:
        return self.state == MatchState.ACTIVE


class MatchNotFoundError(KeyError):
    """Raised when a match id is not registered."""


class MatchRegistry:
    """
    Manages matches.

    Responsibilities:
    - Create matches from player lists
    - Resolve actions one at a time per match
    - Clean up finished matches
    """

    def __init__(self, reducer: Reducer | None = None):
        self._matches: dict[str, Match] = {}
        self._reducer = reducer or Reducer()

    def create_match(self, players: list[str], seed: int | None = None) -> Match:
        """
        Create a new match.

        Raises ValueError for an invalid player list.
        """
        game = new_game(players, seed=seed)
        match = Match(match_id=str(uuid.uuid4()), game=game, created_at=time.time())
        self._matches[match.match_id] = match
        logger.info("Created match %s for %d players", match.match_id, len(players))
        return match

    def get_match(self, match_id: str) -> Match | None:
        """Get a match by ID."""
        return self._matches.get(match_id)

    def submit_action(self, match_id: str, action: Action) -> Envelope:
        """
        Resolve an action against a match.

        The match lock is held for the whole resolution so the engine
        never sees two actions for the same game at once.
        """
        match = self._matches.get(match_id)
        if match is None:
            raise MatchNotFoundError(match_id)

        with match.lock:
            envelope = self._reducer.resolve(match.game, action)
            match.actions_resolved += 1
            if envelope.event == EVENT_GAME_END and match.is_active():
                match.state = MatchState.FINISHED
                logger.info("Match %s finished", match_id)
        return envelope

    def end_match(self, match_id: str, reason: str = "completed") -> bool:
        """
        End a match and drop it from memory.

        Returns False if the match did not exist.
        """
        match = self._matches.pop(match_id, None)
        if match is None:
            return False
        if match.is_active():
            match.state = MatchState.FINISHED if reason == "completed" else MatchState.ABANDONED
        logger.info("Ended match %s (%s)", match_id, reason)
        return True

    def list_matches(self) -> list[str]:
        """List IDs of active matches."""
        return [mid for mid, match in self._matches.items() if match.is_active()]

    def cleanup_finished(self, max_age_seconds: int = 3600) -> int:
        """
        Drop finished matches older than max_age_seconds.

        Returns the number removed.
        """
        now = time.time()
        stale = [
            mid for mid, match in self._matches.items()
            if not match.is_active() and now - match.created_at > max_age_seconds
        ]
        for mid in stale:
            self.end_match(mid, reason="stale")
        return len(stale)
