"""Authoritative game state and its per-observer views."""

from enum import Enum

from .base import WireModel
from .identity import PlayerColor


class GamePhase(str, Enum):
    DEALING = "dealing"
    PLAYER_TURN = "player_turn"
    TURN_ENDED = "turn_ended"
    GAME_OVER = "game_over"


class PlayerState(WireModel):
    id: PlayerColor
    hand: list[int] = []
    gold: int = 0


class GameState(WireModel):
    """Everything about a game in progress, secrets included.

    Owned by the rules engine and mutated only through ``play``.
    """

    players: list[PlayerState]
    round: int = 1
    rounds: int = 1
    deck: list[int] = []
    phase: GamePhase = GamePhase.DEALING
    active_player: PlayerColor | None = None
    pending_deal: list[PlayerColor] = []

    def get_player(self, player_id: PlayerColor) -> PlayerState | None:
        return next((p for p in self.players if p.id == player_id), None)


class PlayerView(WireModel):
    """A player as seen by an observer.

    ``hand`` is the list of cards for the observer's own seat, and a card
    count for everyone else.
    """

    id: PlayerColor
    hand: list[int] | int
    gold: int = 0


class GameView(WireModel):
    """Redacted projection of GameState: the deck becomes a card count."""

    players: list[PlayerView]
    round: int = 1
    rounds: int = 1
    deck: int = 0
    phase: GamePhase = GamePhase.DEALING
    active_player: PlayerColor | None = None
    pending_deal: list[PlayerColor] = []

    def get_player(self, player_id: PlayerColor) -> PlayerView | None:
        return next((p for p in self.players if p.id == player_id), None)
