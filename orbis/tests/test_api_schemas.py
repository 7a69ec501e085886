"""
Tests for API Pydantic schemas.

Validates that:
- Action requests accept the client's wire keys
- Match creation enforces the player count
- Envelope and error responses serialize as clients expect
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    ActionRequest,
    CreateMatchRequest,
    EnvelopeResponse,
    ErrorCode,
    ErrorResponse,
)
from ..engine_core.action import ActionType, Recipient


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_action_request_to_action(self):
        request = ActionRequest.model_validate({
            "player": 2,
            "actiontype": "build",
            "planetid": 5,
            "objecttype": 1,
            "resourceid": 0,
        })

        action = request.to_action()
        assert action.player == 2
        assert action.action_type == ActionType.BUILD
        assert action.planet_id == 5
        assert action.object_type == 1
        assert action.resource_id == 0
        assert action.agent_type is None

    def test_action_request_requires_kind(self):
        with pytest.raises(ValidationError):
            ActionRequest.model_validate({"player": 0})

    def test_unknown_kind_passes_validation(self):
        """Unknown kinds are rejected by the engine, not by the schema."""
        action = ActionRequest(player=0, actiontype="teleport").to_action()
        assert action.action_type == "teleport"

    @pytest.mark.parametrize("players", [[], ["solo"], ["a", "b", "c", "d", "e"]])
    def test_create_match_player_count(self, players):
        with pytest.raises(ValidationError):
            CreateMatchRequest(players=players)

    def test_envelope_response_dump(self):
        response = EnvelopeResponse(to=Recipient.ONE, event="illegal action", content="nope")

        data = response.model_dump(mode="json")
        assert data == {
            "to": "one",
            "event": "illegal action",
            "content": "nope",
            "api_version": "v1",
        }

    def test_error_response_schema(self):
        response = ErrorResponse(error="Match x not found", error_code=ErrorCode.MATCH_NOT_FOUND)

        data = response.model_dump(mode="json")
        assert data["error_code"] == "MATCH_NOT_FOUND"
        assert data["details"] is None
