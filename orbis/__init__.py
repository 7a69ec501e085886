"""
Orbis - Rules Engine for a Multi-Phase Space Strategy Board Game

The authoritative engine for a turn-based game played by several remote
players sharing one mutable game state. It provides:
- Action validation and in-place state mutation
- Snake-draft placement and round/phase progression
- Resource income and upkeep accounting
- Notification envelopes for the transport layer
"""

__version__ = "0.1.0"
