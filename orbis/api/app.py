"""
FastAPI Application - Transport for game clients.

Endpoints:
    POST   /api/v1/matches                 Create a match
    GET    /api/v1/matches                 List active matches
    GET    /api/v1/matches/{id}            Get match state
    DELETE /api/v1/matches/{id}            End match
    POST   /api/v1/matches/{id}/actions    Submit a player action
    WS     /api/v1/matches/{id}/ws         WebSocket for real-time updates

Delivery:
    The engine answers each action with an envelope. Envelopes addressed
    to one player go back only in the HTTP/WebSocket reply; envelopes
    addressed to all are also broadcast to every socket of the match.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import json
import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .. import __version__
from ..config import Settings, get_settings
from .service import APIService
from .schemas import (
    ActionRequest,
    CreateMatchRequest,
    EndMatchResponse,
    EnvelopeResponse,
    ErrorCode,
    ErrorResponse,
    HealthResponse,
    MatchListResponse,
    MatchResponse,
)

logger = logging.getLogger(__name__)


def create_app(service: APIService | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Orbis Engine API",
        description="""
Rules engine for a turn-based, multi-phase strategy board game.

## Envelopes

Every action returns `{to, event, content}`:

| Event | To | Meaning |
|-------|----|---------|
| `illegal action` | one | Rejected; `content` is the reason |
| `game event` | all | Applied; `content` holds the new game state |
| `game end` | all | The match is over |
| `loading done` | one | Current state for a client that finished loading |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # WebSocket connections
    ws_connections: dict[str, list[WebSocket]] = {}

    # =========================================================================
    # Helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: dict | None = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    async def broadcast_to_match(match_id: str, message: dict):
        """Broadcast a message to all WebSocket connections for a match."""
        if match_id not in ws_connections:
            return
        dead_connections = []
        for ws in ws_connections[match_id]:
            try:
                await ws.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                dead_connections.append(ws)
        for ws in dead_connections:
            ws_connections[match_id].remove(ws)

    async def deliver(match_id: str, envelope: EnvelopeResponse):
        if envelope.to.value == "all":
            await broadcast_to_match(match_id, {
                "type": "envelope",
                "payload": envelope.model_dump(mode="json"),
            })

    # =========================================================================
    # Match Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/matches",
        response_model=MatchResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Create a new match",
    )
    async def create_match(body: CreateMatchRequest) -> Union[MatchResponse, JSONResponse]:
        """Create a match. Players take turns in the order given."""
        try:
            return api_service.create_match(body)
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))

    @app.get(
        "/api/v1/matches",
        response_model=MatchListResponse,
        tags=["Matches"],
        summary="List active matches",
    )
    async def list_matches() -> MatchListResponse:
        matches = api_service.list_matches()
        return MatchListResponse(matches=matches, count=len(matches))

    @app.get(
        "/api/v1/matches/{match_id}",
        response_model=MatchResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Get match state",
    )
    async def get_match(match_id: str) -> Union[MatchResponse, JSONResponse]:
        response = api_service.get_match(match_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        return response

    @app.delete(
        "/api/v1/matches/{match_id}",
        response_model=EndMatchResponse,
        tags=["Matches"],
        summary="End a match",
    )
    async def end_match(
        match_id: str,
        reason: str = Query("abandoned", description="Reason for ending"),
    ) -> EndMatchResponse:
        """End a match and release it from memory."""
        return api_service.end_match(match_id, reason)

    # =========================================================================
    # Action Endpoint
    # =========================================================================

    @app.post(
        "/api/v1/matches/{match_id}/actions",
        response_model=EnvelopeResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Submit a player action",
    )
    async def submit_action(
        match_id: str, body: ActionRequest
    ) -> Union[EnvelopeResponse, JSONResponse]:
        """
        Resolve an action against the match.

        Broadcast envelopes are also pushed to every WebSocket of the match.
        """
        response = api_service.submit_action(match_id, body)
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        await deliver(match_id, response)
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/matches/{match_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, match_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state: Current match state (sent on connect)
        - envelope: Engine verdict (broadcast or reply)
        - error: Malformed message

        Messages from client:
        - ping: Keep-alive
        - action: {"type": "action", "action": {...}}
        """
        await websocket.accept()

        initial = api_service.get_match(match_id)
        if isinstance(initial, ErrorResponse):
            await websocket.send_json({"type": "error", "payload": initial.model_dump(mode="json")})
            await websocket.close()
            return

        ws_connections.setdefault(match_id, []).append(websocket)
        await websocket.send_json({"type": "state", "payload": initial.model_dump(mode="json")})

        try:
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue

                if message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})
                elif message.get("type") == "action":
                    try:
                        request = ActionRequest.model_validate(message.get("action") or {})
                    except ValidationError as e:
                        details = e.errors(include_url=False, include_context=False)
                        await websocket.send_json({
                            "type": "error",
                            "payload": {"message": "Invalid action", "details": details},
                        })
                        continue
                    response = api_service.submit_action(match_id, request)
                    payload = {"type": "envelope", "payload": response.model_dump(mode="json")}
                    if isinstance(response, EnvelopeResponse) and response.to.value == "all":
                        await broadcast_to_match(match_id, payload)
                    else:
                        await websocket.send_json(payload)
        except WebSocketDisconnect:
            logger.debug("WebSocket disconnected from match %s", match_id)
        finally:
            connections = ws_connections.get(match_id, [])
            if websocket in connections:
                connections.remove(websocket)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="orbis-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Orbis Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
