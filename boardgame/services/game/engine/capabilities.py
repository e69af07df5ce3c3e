"""Ruleset contract and the optional capabilities a ruleset may provide.

A ruleset is the game-specific part of the engine. Capabilities are plain
objects hung on the ruleset instead of extra base classes: the engine
checks whether ``hidden_information``, ``time_limit`` or ``anticipation``
is set and falls back to open-information behavior when it is not.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from .context import MoveDispatcher
from .moves import MoveBase


class HiddenInformation(ABC):
    """Projects state and moves for observers that may not see everything."""

    @abstractmethod
    def get_view(self, state: Any) -> BaseModel:
        """Spectator view: the strictest redaction."""

    @abstractmethod
    def get_player_view(self, state: Any, observer: Any) -> BaseModel:
        """View for one player: their own secrets revealed, nobody else's."""

    @abstractmethod
    def get_move_view(self, move: MoveBase, state: Any) -> MoveBase:
        """Move as broadcast to everyone, evaluated before the move is played."""

    @abstractmethod
    def get_player_move_view(self, move: MoveBase, observer: Any, state: Any) -> MoveBase:
        """Move as seen by one player, evaluated before the move is played."""


class TimeLimit(ABC):
    """Per-decision time budget, enforced by an external timing collaborator."""

    @abstractmethod
    def give_time(self, state: Any, player_id: Any) -> int:
        """Seconds the player gets for their next decision."""

    @abstractmethod
    def default_move(self, state: Any, player_id: Any) -> MoveBase:
        """Move submitted on the player's behalf when their time runs out."""


class Anticipation(ABC):
    """Client-side mirror of the rules, running against a view."""

    @abstractmethod
    def get_automatic_move(self, view: Any, observer: Any) -> MoveBase | None:
        """Next automatic move fully predictable from the view, or None."""

    @abstractmethod
    def apply_move_view(self, view: Any, move: MoveBase, observer: Any) -> None:
        """Apply a received move view to a view, in place."""


class Ruleset(ABC):
    """Game-specific rules, expressed as pure functions of a state.

    Subclasses provide the state and options models, a dispatcher with one
    handler per move type, and the derivations below. None of them may
    mutate the state they are given: only dispatcher handlers do, and only
    on the copy owned by a GameContext.
    """

    name: str = "ruleset"
    state_model: type[BaseModel]
    options_model: type[BaseModel]
    dispatcher: MoveDispatcher

    hidden_information: HiddenInformation | None = None
    time_limit: TimeLimit | None = None
    anticipation: Anticipation | None = None

    @abstractmethod
    def setup(self, options: Any) -> Any:
        """Build the initial state from options.

        Raises:
            ConfigurationError: If the options are invalid.
        """

    def validate_state(self, state: Any) -> None:
        """Check a saved state before resuming from it.

        Raises:
            ConfigurationError: If the state is not one the rules can continue.
        """

    @abstractmethod
    def player_ids(self, state: Any) -> list:
        """Identities taking part in the game, in seat order."""

    @abstractmethod
    def active_player(self, state: Any) -> Any | None:
        """Player expected to act, None when nobody is."""

    @abstractmethod
    def is_over(self, state: Any) -> bool:
        """Whether the game reached its terminal state."""

    @abstractmethod
    def legal_moves(self, state: Any) -> list[MoveBase]:
        """Every move the players may currently submit."""

    @abstractmethod
    def automatic_moves(self, state: Any) -> list[MoveBase]:
        """Moves the engine plays by itself, first one next."""

    @abstractmethod
    def parse_move(self, payload: dict) -> MoveBase:
        """Build a move of this ruleset from its wire form."""

    def is_legal(self, state: Any, move: MoveBase) -> bool:
        """Whether a player may submit the move.

        Rulesets with large move spaces override this to check the move
        directly instead of listing every legal move.
        """
        return move in self.legal_moves(state)

    def move_player(self, move: MoveBase) -> Any | None:
        """Identity acting in a move, None for moves made by the game itself."""
        return getattr(move, "player_id", None)
