"""Game initialization: options in, initial state out, and checks on saved states."""

import logging
import random

from pydantic import ValidationError

from boardgame.schemas.game_state import GamePhase, GameState, PlayerState
from boardgame.schemas.identity import PlayerColor, sort_players
from boardgame.schemas.options import (
    MAX_DECK_SIZE,
    MAX_PLAYERS,
    MAX_ROUNDS,
    MAX_STARTING_GOLD,
    MIN_PLAYERS,
    GameOptions,
)

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def parse_game_options(payload: GameOptions | dict) -> GameOptions:
    """Parse raw options, turning pydantic errors into ConfigurationError."""
    if isinstance(payload, GameOptions):
        return payload
    try:
        return GameOptions.model_validate(payload)
    except ValidationError as e:
        raise ConfigurationError(f"Malformed game options: {e.error_count()} error(s)") from e


def _validate_seats(player_ids: list[PlayerColor]) -> None:
    num_players = len(player_ids)
    if num_players < MIN_PLAYERS:
        raise ConfigurationError(f"A minimum of {MIN_PLAYERS} players is required to start the game.")
    if num_players > MAX_PLAYERS:
        raise ConfigurationError(f"At most {MAX_PLAYERS} players can take part in a game.")

    seen: set[PlayerColor] = set()
    for player_id in player_ids:
        if player_id in seen:
            raise ConfigurationError(f"Duplicate player ID found: {player_id.value}")
        seen.add(player_id)


def validate_game_options(options: GameOptions) -> None:
    """Validate game options before initializing a game."""
    _validate_seats(options.player_ids)


def _create_deck(options: GameOptions) -> list[int]:
    """Cards 1..deck_size, shuffled with the options' seed."""
    deck = list(range(1, options.deck_size + 1))
    random.Random(options.seed).shuffle(deck)
    return deck


def _initialize_players(options: GameOptions) -> list[PlayerState]:
    """Players in seat order, whatever order the options list them in."""
    return [
        PlayerState(id=player_id, hand=[], gold=options.starting_gold)
        for player_id in sort_players(options.player_ids)
    ]


def initialize_game(payload: GameOptions | dict) -> GameState:
    """
    Validate game options and return the initial GameState.

    The game starts in the dealing phase: the first automatic moves deal
    one card to each player.

    Args:
        payload: GameOptions, or their wire form.

    Returns:
        The initial GameState.

    Raises:
        ConfigurationError: If the options are invalid.
    """
    options = parse_game_options(payload)
    validate_game_options(options)

    players = _initialize_players(options)
    state = GameState(
        players=players,
        round=1,
        rounds=options.rounds,
        deck=_create_deck(options),
        phase=GamePhase.DEALING,
        active_player=None,
        pending_deal=[p.id for p in players],
    )
    logger.info(
        "Game initialized: players=%s, rounds=%d, deck_size=%d",
        [p.id.value for p in players],
        options.rounds,
        options.deck_size,
    )
    return state


def validate_game_state(state: GameState) -> None:
    """
    Validate a saved state before a game is resumed from it.

    Pydantic only checks the shape. This checks that the state is one the
    rules could have produced: seated players only, and the fields each
    phase relies on.

    Raises:
        ConfigurationError: If the state is inconsistent.
    """
    seated = [p.id for p in state.players]
    _validate_seats(seated)

    if state.active_player is not None and state.active_player not in seated:
        raise ConfigurationError(f"Active player {state.active_player.value} is not seated in the game.")
    for player_id in state.pending_deal:
        if player_id not in seated:
            raise ConfigurationError(f"Player {player_id.value} is waiting for a card but not seated.")
    if state.phase in (GamePhase.PLAYER_TURN, GamePhase.TURN_ENDED) and state.active_player is None:
        raise ConfigurationError(f"Phase {state.phase.value} requires an active player.")

    if not 1 <= state.rounds <= MAX_ROUNDS or not 1 <= state.round <= state.rounds:
        raise ConfigurationError(f"Round {state.round} of {state.rounds} is out of range.")
    if len(state.deck) > MAX_DECK_SIZE:
        raise ConfigurationError(f"A deck holds at most {MAX_DECK_SIZE} cards.")
    for player in state.players:
        if not 0 <= player.gold <= MAX_STARTING_GOLD:
            raise ConfigurationError(f"Gold of {player.id.value} is out of range: {player.gold}")
