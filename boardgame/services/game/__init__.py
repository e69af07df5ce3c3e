"""Game service module.

Provides:
- Rules engine, projections and anticipation (engine/)
- Sessions serializing moves per game (session.py)
"""

# Re-export from engine for convenience
from .engine import (
    ClientGame,
    GameEndedError,
    IllegalMoveError,
    Resume,
    RulesEngine,
    Start,
    TemplateRules,
    build_move_from_payload,
    initialize_game,
)
from .session import GameSession, PlayedMove, PlayResult, SessionRegistry

__all__ = [
    # Engine
    "RulesEngine",
    "Start",
    "Resume",
    "TemplateRules",
    "ClientGame",
    "IllegalMoveError",
    "GameEndedError",
    "build_move_from_payload",
    "initialize_game",
    # Sessions
    "GameSession",
    "PlayedMove",
    "PlayResult",
    "SessionRegistry",
]
