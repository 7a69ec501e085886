"""
API Module - Transport around the engine.

Exposes the engine via REST and WebSocket:
1. Clients create a match
2. Clients submit actions
3. The engine's envelope is returned, and broadcast when addressed to all

All state is in memory. No persistent accounts or games.
"""

from .schemas import (
    # Requests
    ActionRequest,
    CreateMatchRequest,
    # Responses
    EnvelopeResponse,
    MatchResponse,
    MatchListResponse,
    EndMatchResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
    MatchStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "ActionRequest",
    "CreateMatchRequest",
    # Responses
    "EnvelopeResponse",
    "MatchResponse",
    "MatchListResponse",
    "EndMatchResponse",
    "ErrorResponse",
    "HealthResponse",
    # Enums
    "ErrorCode",
    "MatchStatus",
    # Service
    "APIService",
    "create_app",
]
