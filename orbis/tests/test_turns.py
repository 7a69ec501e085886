"""
Tests for the turn & phase machine.

Tests:
- Snake draft ordering in round 0
- Round-robin turns and round wrap afterwards
- Simultaneous phase advancement
- End condition
"""

import pytest

from ..engine_core.action import Action
from ..engine_core.constants import Phase, StructureKind
from ..engine_core.reducer import resolve_action
from ..engine_core.turns import (
    clear_phase_done,
    is_end_condition,
    update_phase,
    update_turn,
)


def placement_order(game, picks):
    """Place a mine on each (planet, slot) pick with whoever's turn it is."""
    order = []
    for planet_id, slot in picks:
        player = game.turn
        order.append(player)
        envelope = resolve_action(
            game, Action.place(player, planet_id, StructureKind.MINE, slot)
        )
        assert envelope.event == "game event"
    return order


class TestSnakeDraft:
    """Tests for the round-0 placement order."""

    def test_two_player_snake(self, two_player_game):
        """Two players pick 0, 1, 1, 0 and then round 1 begins."""
        game = two_player_game
        order = placement_order(game, [(0, 0), (0, 1), (1, 0), (1, 1)])

        assert order == [0, 1, 1, 0]
        assert game.round == 1
        assert game.turn == 0
        assert game.phase == Phase.RESOURCE

    def test_three_player_snake(self, three_player_game):
        """Three players pick 0, 1, 2, 2, 1, 0."""
        game = three_player_game
        picks = [(0, 0), (0, 1), (1, 0), (1, 1), (1, 2), (2, 0)]
        order = placement_order(game, picks)

        assert order == [0, 1, 2, 2, 1, 0]
        assert game.round == 1
        assert game.phase == Phase.RESOURCE

    def test_reverse_leg_flag(self, two_player_game):
        """Reaching the last player flips second_mines."""
        game = two_player_game
        assert not game.second_mines

        update_turn(game)
        assert game.turn == 1
        assert not game.second_mines

        update_turn(game)
        assert game.turn == 1
        assert game.second_mines
        assert game.round == 0


class TestRoundRobin:
    """Tests for turns after the placement round."""

    def test_turn_advances(self, build_game):
        update_turn(build_game)
        assert build_game.turn == 1
        assert build_game.round == 1
        assert build_game.phase == Phase.BUILD

    def test_wrap_starts_next_round(self, build_game):
        """Wrapping past the last player opens the next round's resource phase."""
        build_game.turn = 1
        update_turn(build_game)

        assert build_game.turn == 0
        assert build_game.round == 2
        assert build_game.phase == Phase.RESOURCE

    def test_build_wrap_clears_phase_done(self, build_game):
        build_game.turn = 1
        build_game.phase_done = [True, True]
        update_turn(build_game)

        assert build_game.phase_done == [False, False]

    def test_upkeep_wrap_keeps_phase_and_flags(self, resource_game):
        """Turn-done during upkeep wraps the round but leaves the phase alone."""
        game = resource_game
        game.phase = Phase.UPKEEP

        assert resolve_action(game, Action.pay_upkeep(0)).event == "game event"
        assert resolve_action(game, Action.turn_done(0)).event == "game event"
        assert resolve_action(game, Action.turn_done(1)).event == "game event"

        assert game.round == 2
        assert game.phase == Phase.UPKEEP
        assert game.phase_done == [True, False]

        # Player 1 still owes upkeep and finishing it moves on to build
        assert resolve_action(game, Action.pay_upkeep(1)).event == "game event"
        assert game.phase == Phase.BUILD
        assert game.phase_done == [False, False]

    def test_resource_wrap_keeps_phase(self, resource_game):
        resource_game.turn = 1
        update_turn(resource_game)

        assert resource_game.round == 2
        assert resource_game.phase == Phase.RESOURCE


class TestPhaseAdvance:
    """Tests for simultaneous phases."""

    def test_waits_for_everyone(self, resource_game):
        resource_game.phase_done = [True, False]
        update_phase(resource_game)

        assert resource_game.phase == Phase.RESOURCE
        assert resource_game.phase_done == [True, False]

    def test_advances_and_resets(self, resource_game):
        """All done moves resource -> upkeep, resets turn and flags."""
        resource_game.turn = 1
        resource_game.phase_done = [True, True]
        update_phase(resource_game)

        assert resource_game.phase == Phase.UPKEEP
        assert resource_game.turn == 0
        assert resource_game.phase_done == [False, False]

    def test_upkeep_advances_to_build(self, resource_game):
        resource_game.phase = Phase.UPKEEP
        resource_game.phase_done = [True, True]
        update_phase(resource_game)

        assert resource_game.phase == Phase.BUILD

    def test_turn_driven_phases_ignore_flags(self, build_game):
        """Build phase never advances from phase_done."""
        build_game.phase_done = [True, True]
        update_phase(build_game)

        assert build_game.phase == Phase.BUILD
        assert build_game.phase_done == [True, True]

    def test_clear_phase_done(self, three_player_game):
        three_player_game.phase_done = [True, False, True]
        clear_phase_done(three_player_game)
        assert three_player_game.phase_done == [False, False, False]


class TestEndCondition:
    """The match ends at round 3 regardless of anything else."""

    @pytest.mark.parametrize("round_number, expected", [
        (0, False),
        (2, False),
        (3, True),
        (7, True),
    ])
    def test_round_threshold(self, two_player_game, round_number, expected):
        two_player_game.round = round_number
        assert is_end_condition(two_player_game) is expected

    def test_independent_of_other_fields(self, build_game):
        build_game.round = 3
        build_game.turn = 1
        build_game.phase = Phase.UPKEEP
        build_game.phase_done = [True, False]
        assert is_end_condition(build_game)
