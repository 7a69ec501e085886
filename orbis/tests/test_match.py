"""
Tests for match setup and the match registry.

Tests:
- Initial game shape from new_game
- Deterministic board generation
- Registry lifecycle and action submission
"""

import random

import pytest

from ..engine_core.action import Action
from ..engine_core.constants import (
    NUM_FLEETS,
    STRUCTURE_RULES,
    AgentKind,
    AgentStatus,
    BorderState,
    Phase,
    StructureKind,
)
from ..engine_core.state import agent_id, fleet_id
from ..match import MatchNotFoundError, MatchRegistry, MatchState, generate_board, new_game


class TestNewGame:
    def test_initial_fields(self):
        game = new_game(["ann", "bob", "cy"], seed=3)

        assert game.players == ["ann", "bob", "cy"]
        assert game.round == 0
        assert game.turn == 0
        assert game.phase == Phase.PLACEMENT
        assert game.second_mines is False
        assert game.phase_done == [False, False, False]

    def test_inventories_full(self):
        game = new_game(["ann", "bob"])
        for player in range(2):
            assert game.structures[player] == [STRUCTURE_RULES[k].max for k in StructureKind]
            assert game.resources[player] == [0, 0, 0, 0]
            assert game.points[player] == [0, 0]

    def test_agents_and_fleets(self):
        game = new_game(["ann", "bob"])
        agents = game.board.agents
        fleets = game.board.fleets

        assert len(agents) == 2 * len(AgentKind)
        assert len(fleets) == 2 * NUM_FLEETS
        explorer = agents[agent_id(1, AgentKind.EXPLORER)]
        assert explorer.player == 1
        assert explorer.status == AgentStatus.OFF_BOARD
        assert explorer.planet_id is None
        assert not fleets[fleet_id(1, 2)].is_built

    @pytest.mark.parametrize("players", [["solo"], ["a", "b", "c", "d", "e"]])
    def test_player_count_limits(self, players):
        with pytest.raises(ValueError):
            new_game(players)

    def test_duplicate_players(self):
        with pytest.raises(ValueError):
            new_game(["ann", "ann"])


class TestBoardGeneration:
    def test_deterministic(self):
        a = new_game(["ann", "bob"], seed=11).to_dict()["board"]
        b = new_game(["ann", "bob"], seed=11).to_dict()["board"]
        assert a == b

    def test_borders_symmetric(self):
        board = generate_board(random.Random(5), 9)
        for pid, planet in enumerate(board.planets):
            for neighbour, state in planet.borders.items():
                assert board.planets[neighbour].borders[pid] == state

    def test_open_only_between_explored(self):
        board = generate_board(random.Random(5), 10)
        for pid, planet in enumerate(board.planets):
            for neighbour in planet.open_neighbours():
                assert planet.explored
                assert board.planets[neighbour].explored

    def test_every_planet_has_resources(self):
        board = generate_board(random.Random(2), 8)
        assert len(board.planets) == 8
        for planet in board.planets:
            assert 1 <= len(planet.resources) <= 3
            assert all(slot.is_free for slot in planet.resources)
            assert all(1 <= slot.num <= 3 for slot in planet.resources)

    def test_unexplored_borders(self):
        board = generate_board(random.Random(0), 8)
        states = {
            state
            for planet in board.planets if not planet.explored
            for state in planet.borders.values()
        }
        assert states == {BorderState.UNEXPLORED}


class TestMatchRegistry:
    @pytest.fixture
    def registry(self):
        return MatchRegistry()

    def test_create_and_get(self, registry):
        match = registry.create_match(["ann", "bob"], seed=1)

        assert registry.get_match(match.match_id) is match
        assert match.is_active()
        assert registry.list_matches() == [match.match_id]

    def test_create_rejects_bad_players(self, registry):
        with pytest.raises(ValueError):
            registry.create_match(["solo"])
        assert registry.list_matches() == []

    def test_submit_action(self, registry):
        match = registry.create_match(["ann", "bob"], seed=1)
        envelope = registry.submit_action(match.match_id, Action.turn_done(1))

        assert envelope.event == "illegal action"
        assert match.actions_resolved == 1

    def test_submit_unknown_match(self, registry):
        with pytest.raises(MatchNotFoundError):
            registry.submit_action("missing", Action.turn_done(0))

    def test_game_end_finishes_match(self, registry):
        match = registry.create_match(["ann", "bob"], seed=1)
        match.game.round = 3

        envelope = registry.submit_action(match.match_id, Action.turn_done(0))

        assert envelope.event == "game end"
        assert match.state == MatchState.FINISHED
        assert registry.list_matches() == []

    def test_end_match(self, registry):
        match = registry.create_match(["ann", "bob"])

        assert registry.end_match(match.match_id, reason="abandoned")
        assert match.state == MatchState.ABANDONED
        assert registry.get_match(match.match_id) is None
        assert not registry.end_match(match.match_id)

    def test_cleanup_finished(self, registry):
        old = registry.create_match(["ann", "bob"])
        old.state = MatchState.FINISHED
        old.created_at -= 7200
        live = registry.create_match(["cy", "dee"])

        assert registry.cleanup_finished(max_age_seconds=3600) == 1
        assert registry.get_match(old.match_id) is None
        assert registry.get_match(live.match_id) is live
