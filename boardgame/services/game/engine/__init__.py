"""Game rules engine - the authoritative state machine and its projections.

This module provides:
- Move types (the closed set of state transitions) and their wire parsing
- The Ruleset contract and optional capabilities (hidden information, time limit, anticipation)
- RulesEngine, which owns the state and enforces legality
- ClientGame, the client-side anticipation replica

Usage:
    from boardgame.services.game.engine import RulesEngine, Start, TemplateRules

    engine = RulesEngine(TemplateRules(), Start(options))
    engine.play_automatic_moves()

    try:
        engine.play(move)
    except IllegalMoveError as e:
        print(f"Error: {e.error_code} - {e.message}")
"""

# Moves
from .moves import (
    DrawCard,
    DrawCardView,
    EndGame,
    Move,
    MoveBase,
    MoveType,
    MoveView,
    Pass,
    SpendGold,
    StartRound,
    StartTurn,
    build_move_from_payload,
    build_move_view_from_payload,
    strip_disclosures,
)

# Errors
from .errors import (
    AutomaticMoveCycleError,
    ConfigurationError,
    GameEndedError,
    IllegalMoveError,
    ProjectionLeakError,
    RulesError,
)

# Contract
from .capabilities import Anticipation, HiddenInformation, Ruleset, TimeLimit
from .context import GameContext, MoveDispatcher

# Template game
from .anticipation import ClientGame, TemplateAnticipation
from .projection import TemplateProjection
from .rules import TemplateRules, TemplateTimeLimit, get_scores, get_winners, is_legal_move
from .setup import initialize_game, validate_game_options, validate_game_state

# Driver
from .engine import DEFAULT_AUTOMATIC_MOVE_LIMIT, GameSetup, Resume, RulesEngine, Start

__all__ = [
    # Moves
    "Move",
    "MoveBase",
    "MoveType",
    "MoveView",
    "DrawCard",
    "DrawCardView",
    "SpendGold",
    "Pass",
    "StartTurn",
    "StartRound",
    "EndGame",
    "build_move_from_payload",
    "build_move_view_from_payload",
    "strip_disclosures",
    # Errors
    "RulesError",
    "ConfigurationError",
    "IllegalMoveError",
    "GameEndedError",
    "AutomaticMoveCycleError",
    "ProjectionLeakError",
    # Contract
    "Ruleset",
    "HiddenInformation",
    "TimeLimit",
    "Anticipation",
    "GameContext",
    "MoveDispatcher",
    # Template game
    "TemplateRules",
    "TemplateProjection",
    "TemplateTimeLimit",
    "TemplateAnticipation",
    "ClientGame",
    "initialize_game",
    "validate_game_options",
    "validate_game_state",
    "get_scores",
    "get_winners",
    "is_legal_move",
    # Driver
    "RulesEngine",
    "Start",
    "Resume",
    "GameSetup",
    "DEFAULT_AUTOMATIC_MOVE_LIMIT",
]
