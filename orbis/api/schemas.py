"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between game clients and the engine.
Actions use the same keys clients already send over the socket
(actiontype, planetid, objecttype, resourceid, agenttype).

Error Codes:
- MATCH_NOT_FOUND: Match does not exist or has ended
- VALIDATION_ERROR: Request body is invalid (e.g. bad player list)
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.action import Action, Recipient


# =============================================================================
# Enums
# =============================================================================

class MatchStatus(str, Enum):
    """Match status values."""
    ACTIVE = "active"
    FINISHED = "finished"
    ABANDONED = "abandoned"


class ErrorCode(str, Enum):
    """Structured error codes."""
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class ActionRequest(BaseModel):
    """A player action as sent by the client."""
    player: int = Field(..., description="Turn index of the acting player")
    actiontype: str = Field(
        ...,
        description="place, build, recruit, collect_resources, pay_upkeep, turn_done, loading_done",
    )
    planetid: Optional[int] = None
    objecttype: Optional[int] = Field(None, description="Structure kind")
    resourceid: Optional[int] = Field(None, description="Resource slot index, -1 for none")
    agenttype: Optional[int] = None

    def to_action(self) -> Action:
        return Action.from_dict(self.model_dump())


class CreateMatchRequest(BaseModel):
    """Request to start a match."""
    players: list[str] = Field(
        ..., min_length=2, max_length=4, description="Player identifiers in turn order"
    )
    seed: Optional[int] = Field(None, description="Seed for board generation")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class EnvelopeResponse(BaseModel):
    """
    The engine's verdict on an action.

    to=one: only the acting player is told (illegal action, loading done).
    to=all: every participant receives it (game event, game end).
    """
    to: Recipient
    event: str = Field(..., description="illegal action, game event, game end, loading done")
    content: Any = None
    api_version: str = "v1"


class MatchResponse(BaseModel):
    """Match information with the full shared game state."""
    match_id: str
    status: MatchStatus
    players: list[str]
    round: int
    turn: int
    phase: int
    game: dict[str, Any] = Field(default_factory=dict)
    created_at: float = 0.0
    api_version: str = "v1"


class MatchListResponse(BaseModel):
    """Response listing active matches."""
    matches: list[str]
    count: int


class EndMatchResponse(BaseModel):
    """Response after ending a match."""
    success: bool
    match_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
