"""
Pytest fixtures for Orbis tests.
"""

import pytest

from ..engine_core.constants import BorderState, Phase, ResourceKind
from ..engine_core.state import Game, Planet, ResourceSlot
from ..match.setup import new_game


def fixed_planets() -> list[Planet]:
    """
    A small hand-built board.

    0 (explored) --open-- 1 (explored) --unexplored-- 3 (unexplored)
    0 --blocked-- 2 (explored)
    """
    return [
        Planet(
            w=1,
            explored=True,
            resources=[
                ResourceSlot(kind=ResourceKind.METAL, num=2),
                ResourceSlot(kind=ResourceKind.WATER, num=1),
            ],
            borders={1: BorderState.OPEN, 2: BorderState.BLOCKED},
        ),
        Planet(
            w=2,
            explored=True,
            resources=[
                ResourceSlot(kind=ResourceKind.FUEL, num=3),
                ResourceSlot(kind=ResourceKind.FOOD, num=1),
                ResourceSlot(kind=ResourceKind.METAL, num=1),
            ],
            borders={0: BorderState.OPEN, 3: BorderState.UNEXPLORED},
        ),
        Planet(
            w=1,
            explored=True,
            resources=[ResourceSlot(kind=ResourceKind.FOOD, num=2)],
            borders={0: BorderState.BLOCKED},
        ),
        Planet(
            w=1,
            explored=False,
            resources=[ResourceSlot(kind=ResourceKind.WATER, num=3)],
            borders={1: BorderState.UNEXPLORED},
        ),
    ]


def make_game(players: list[str]) -> Game:
    """Create a fresh game on the fixed board."""
    game = new_game(players, seed=1)
    game.board.planets = fixed_planets()
    return game


@pytest.fixture
def two_player_game() -> Game:
    """A 2-player game at the start of the placement round."""
    return make_game(["ann", "bob"])


@pytest.fixture
def three_player_game() -> Game:
    """A 3-player game at the start of the placement round."""
    return make_game(["ann", "bob", "cy"])


@pytest.fixture
def build_game(two_player_game: Game) -> Game:
    """
    A 2-player game in round 1's build phase, player 0 to act.

    Both players hold plenty of every resource.
    """
    game = two_player_game
    game.round = 1
    game.turn = 0
    game.phase = Phase.BUILD
    game.second_mines = True
    for player in range(game.num_players):
        game.resources[player] = [8, 8, 8, 8]
    return game


@pytest.fixture
def resource_game(two_player_game: Game) -> Game:
    """A 2-player game in round 1's resource phase."""
    game = two_player_game
    game.round = 1
    game.turn = 0
    game.phase = Phase.RESOURCE
    game.second_mines = True
    return game
