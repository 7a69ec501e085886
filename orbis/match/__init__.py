"""
Match Module - Creates games and keeps running matches in memory.

A match is one play-through:
- Created from an ordered player list
- Holds the shared Game the engine mutates
- Serializes actions so the engine resolves one at a time
- Dropped when the game ends

Nothing is persisted.
"""

from .setup import new_game, generate_board
from .registry import MatchRegistry, Match, MatchState, MatchNotFoundError

__all__ = [
    "new_game",
    "generate_board",
    "MatchRegistry",
    "Match",
    "MatchState",
    "MatchNotFoundError",
]
