"""The rules engine driver: one authoritative state, moves in, views out.

Usage:
    engine = RulesEngine(TemplateRules(), Start({"players": [{"id": "Red"}, {"id": "Blue"}]}))
    engine.play_automatic_moves()

    for move in engine.legal_moves(PlayerColor.RED):
        ...

    engine.play(move)              # raises IllegalMoveError, GameEndedError
    engine.play_automatic_moves()  # raises AutomaticMoveCycleError on a rules bug
    view = engine.get_player_view(PlayerColor.RED)

The engine is synchronous and single-writer: callers serialize concurrent
submissions for the same game before they reach ``play``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from .capabilities import Ruleset
from .context import GameContext
from .errors import (
    AutomaticMoveCycleError,
    ConfigurationError,
    GameEndedError,
    IllegalMoveError,
)
from .moves import MoveBase

logger = logging.getLogger(__name__)

DEFAULT_AUTOMATIC_MOVE_LIMIT = 1000


@dataclass(frozen=True)
class Start:
    """Create a new game from options."""

    options: Any


@dataclass(frozen=True)
class Resume:
    """Continue a game from a saved state (model or wire dict)."""

    state: Any


GameSetup = Start | Resume


class RulesEngine:
    """Owns one game state and enforces the transitions of a ruleset."""

    def __init__(
        self,
        rules: Ruleset,
        setup: GameSetup,
        max_automatic_moves: int = DEFAULT_AUTOMATIC_MOVE_LIMIT,
    ):
        self.rules = rules
        self.max_automatic_moves = max_automatic_moves

        if isinstance(setup, Start):
            self._state = rules.setup(setup.options)
            logger.info("New %s game created", rules.name)
        elif isinstance(setup, Resume):
            self._state = self._load_state(setup.state)
            logger.info("%s game resumed at phase=%s", rules.name, getattr(self._state, "phase", None))
        else:
            raise TypeError(f"Expected Start or Resume, got {type(setup).__name__}")

    def _load_state(self, data: Any) -> BaseModel:
        if isinstance(data, self.rules.state_model):
            state = data.model_copy(deep=True)
        else:
            try:
                state = self.rules.state_model.model_validate(data)
            except ValidationError as e:
                raise ConfigurationError(f"Malformed saved state: {e.error_count()} error(s)") from e
        self.rules.validate_state(state)
        return state

    # State

    @property
    def state(self) -> BaseModel:
        """Deep copy of the authoritative state."""
        return self._state.model_copy(deep=True)

    @property
    def players(self) -> list:
        return self.rules.player_ids(self._state)

    @property
    def active_player(self) -> Any | None:
        return self.rules.active_player(self._state)

    def is_over(self) -> bool:
        return self.rules.is_over(self._state)

    def serialize(self) -> dict:
        """JSON-compatible form of the state, for persistence and replay."""
        return self._state.model_dump(mode="json", by_alias=True)

    @classmethod
    def deserialize(
        cls,
        rules: Ruleset,
        data: dict,
        max_automatic_moves: int = DEFAULT_AUTOMATIC_MOVE_LIMIT,
    ) -> "RulesEngine":
        return cls(rules, Resume(data), max_automatic_moves=max_automatic_moves)

    @classmethod
    def replay(
        cls,
        rules: Ruleset,
        setup: GameSetup,
        moves: list[MoveBase],
        max_automatic_moves: int = DEFAULT_AUTOMATIC_MOVE_LIMIT,
    ) -> "RulesEngine":
        """Rebuild a game by playing its recorded moves, automatic ones included."""
        engine = cls(rules, setup, max_automatic_moves=max_automatic_moves)
        for move in moves:
            if move in engine.automatic_moves():
                engine.play_automatic_move(move)
            else:
                engine.play(move)
        logger.debug("Replayed %d moves", len(moves))
        return engine

    # Moves

    def legal_moves(self, observer: Any | None = None) -> list[MoveBase]:
        """Every move currently playable, only the observer's when given."""
        if self.rules.is_over(self._state):
            return []
        moves = self.rules.legal_moves(self._state)
        if observer is not None:
            moves = [m for m in moves if self.rules.move_player(m) == observer]
        return moves

    def automatic_moves(self) -> list[MoveBase]:
        if self.rules.is_over(self._state):
            return []
        return self.rules.automatic_moves(self._state)

    def is_legal(self, move: MoveBase) -> bool:
        if self.rules.is_over(self._state):
            return False
        return self.rules.is_legal(self._state, move)

    def play(self, move: MoveBase) -> None:
        """Apply exactly one move submitted by a player.

        The move is applied to a copy of the state, which replaces the
        authoritative state only once the move went through completely.

        Raises:
            GameEndedError: If the game is already over.
            IllegalMoveError: If the move is not legal.
        """
        self._check_not_over(move)
        if not self.rules.is_legal(self._state, move):
            logger.warning(
                "Move rejected: type=%s, player=%s, phase=%s",
                move.type,
                self.rules.move_player(move),
                getattr(self._state, "phase", None),
            )
            raise IllegalMoveError(f"'{move.type}' is not a legal move", move=move)

        self._apply(move)
        logger.info("Move played: %s", move)

    def play_automatic_move(self, move: MoveBase) -> None:
        """Apply the move the game itself plays next.

        Raises:
            GameEndedError: If the game is already over.
            IllegalMoveError: If the move is not a current automatic move.
        """
        self._check_not_over(move)
        if move not in self.rules.automatic_moves(self._state):
            logger.warning("Automatic move rejected: %s", move)
            raise IllegalMoveError(f"'{move.type}' is not the next automatic move", move=move)

        self._apply(move)
        logger.debug("Automatic move played: %s", move)

    def _check_not_over(self, move: MoveBase) -> None:
        if self.rules.is_over(self._state):
            logger.warning("Move rejected, game is over: %s", move)
            raise GameEndedError("Game has already finished")

    def _apply(self, move: MoveBase) -> None:
        context = GameContext(state=self._state.model_copy(deep=True), rules=self.rules)
        context.apply(move)
        self._state = context.state

    def play_automatic_moves(
        self,
        on_move: Callable[[MoveBase], None] | None = None,
    ) -> list[MoveBase]:
        """Play automatic moves one by one until there is none left.

        Args:
            on_move: Called with each automatic move before it is played,
                while the engine still holds the state the move applies to.

        Returns:
            The automatic moves played, in order.

        Raises:
            AutomaticMoveCycleError: If more than ``max_automatic_moves`` were needed.
        """
        played: list[MoveBase] = []
        while True:
            moves = self.automatic_moves()
            if not moves:
                break
            if len(played) >= self.max_automatic_moves:
                logger.error(
                    "Automatic moves did not settle after %d steps, next=%s",
                    self.max_automatic_moves,
                    moves[0],
                )
                raise AutomaticMoveCycleError(
                    f"Automatic moves did not settle after {self.max_automatic_moves} steps",
                    steps=len(played),
                )
            if on_move is not None:
                on_move(moves[0])
            self.play_automatic_move(moves[0])
            played.append(moves[0])

        if played:
            logger.debug("Played %d automatic moves", len(played))
        return played

    # Views

    def get_view(self) -> BaseModel:
        """Spectator view. Without hidden information, the full state."""
        if self.rules.hidden_information is None:
            return self.state
        return self.rules.hidden_information.get_view(self._state)

    def get_player_view(self, observer: Any) -> BaseModel:
        if self.rules.hidden_information is None:
            return self.state
        return self.rules.hidden_information.get_player_view(self._state, observer)

    def get_move_view(self, move: MoveBase) -> MoveBase:
        """Neutral view of a move that is about to be played."""
        if self.rules.hidden_information is None:
            return move
        return self.rules.hidden_information.get_move_view(move, self._state)

    def get_player_move_view(self, move: MoveBase, observer: Any) -> MoveBase:
        """View of a move that is about to be played, for one observer."""
        if self.rules.hidden_information is None:
            return move
        return self.rules.hidden_information.get_player_move_view(move, observer, self._state)

    # Time limit

    def give_time(self, player_id: Any) -> int | None:
        """Seconds for the player's next decision, None when turns are untimed."""
        if self.rules.time_limit is None:
            return None
        return self.rules.time_limit.give_time(self._state, player_id)

    def default_move(self, player_id: Any) -> MoveBase | None:
        """Move forced on a player whose time ran out, None when turns are untimed."""
        if self.rules.time_limit is None:
            return None
        return self.rules.time_limit.default_move(self._state, player_id)
