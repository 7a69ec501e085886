"""
Turn & Phase Machine - Advances whose turn it is and which phase is active.

Round 0 is the initial placement round, run as a snake draft:
turn goes 0 -> N-1, then N-1 -> 0, and finishing the reverse leg
opens round 1 at the resource phase.

After round 0, turns advance round-robin. Resource and upkeep phases
are simultaneous and advance once every player is done.
"""

from __future__ import annotations
import logging

from .constants import FINAL_ROUND, NUM_PHASES, Phase
from .state import Game

logger = logging.getLogger(__name__)


def update_turn(game: Game) -> None:
    """Advance the turn after a placement, build or turn-done."""
    if game.round == 0:
        if game.second_mines:
            game.turn -= 1
            if game.turn < 0:
                game.turn = 0
                game.round = 1
                game.phase = Phase.RESOURCE
                logger.info("Placement round complete, starting round 1")
        else:
            game.turn += 1
            if game.turn >= game.num_players:
                # Last player picks twice in a row, then the order reverses
                game.turn = game.num_players - 1
                game.second_mines = True
    else:
        game.turn += 1
        if game.turn >= game.num_players:
            game.turn = 0
            game.round += 1
            # Only the build phase hands over to the next round's collection;
            # simultaneous phases still wait on phase_done
            if game.phase == Phase.BUILD:
                game.phase = Phase.RESOURCE
                clear_phase_done(game)
            logger.info("Starting round %d", game.round)


def update_phase(game: Game) -> None:
    """Advance a simultaneous phase once every player has finished it."""
    if game.phase not in (Phase.RESOURCE, Phase.UPKEEP):
        return

    if all(game.phase_done):
        game.phase = Phase((game.phase + 1) % NUM_PHASES)
        game.turn = 0
        clear_phase_done(game)
        logger.info("Round %d advanced to %s phase", game.round, game.phase.name.lower())


def clear_phase_done(game: Game) -> None:
    game.phase_done = [False] * game.num_players


def is_end_condition(game: Game) -> bool:
    """The match ends once the final round is reached."""
    return game.round >= FINAL_ROUND
