"""
API Service - Layer between the HTTP/WebSocket transport and the engine.

The service:
1. Translates API requests to registry/engine calls
2. Converts engine envelopes and games into response schemas
3. Reports missing matches as ErrorResponse values

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    ActionRequest,
    CreateMatchRequest,
    EndMatchResponse,
    EnvelopeResponse,
    ErrorCode,
    ErrorResponse,
    MatchResponse,
    MatchStatus,
)
from ..match import Match, MatchNotFoundError, MatchRegistry


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        match = service.create_match(CreateMatchRequest(players=["ann", "bob"]))
        envelope = service.submit_action(match.match_id, ActionRequest(...))
    """
    registry: MatchRegistry = field(default_factory=MatchRegistry)

    def create_match(self, request: CreateMatchRequest) -> MatchResponse:
        """
        Create a new match.

        Raises ValueError if the player list is rejected by setup.
        """
        match = self.registry.create_match(request.players, seed=request.seed)
        return self._match_to_response(match)

    def get_match(self, match_id: str) -> MatchResponse | ErrorResponse:
        match = self.registry.get_match(match_id)
        if match is None:
            return self._not_found(match_id)
        return self._match_to_response(match)

    def submit_action(
        self, match_id: str, request: ActionRequest
    ) -> EnvelopeResponse | ErrorResponse:
        """Resolve an action and return the envelope for delivery."""
        try:
            envelope = self.registry.submit_action(match_id, request.to_action())
        except MatchNotFoundError:
            return self._not_found(match_id)

        data = envelope.to_dict()
        return EnvelopeResponse(to=envelope.to, event=data["event"], content=data["content"])

    def end_match(self, match_id: str, reason: str = "completed") -> EndMatchResponse:
        success = self.registry.end_match(match_id, reason)
        return EndMatchResponse(success=success, match_id=match_id)

    def list_matches(self) -> list[str]:
        return self.registry.list_matches()

    def _match_to_response(self, match: Match) -> MatchResponse:
        game = match.game
        return MatchResponse(
            match_id=match.match_id,
            status=MatchStatus(match.state.value),
            players=list(game.players),
            round=game.round,
            turn=game.turn,
            phase=int(game.phase),
            game=game.to_dict(),
            created_at=match.created_at,
        )

    def _not_found(self, match_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Match {match_id} not found",
            error_code=ErrorCode.MATCH_NOT_FOUND,
        )
