"""View projection - what each observer is allowed to know.

Secrets in the sample game are the deck order and the cards in each hand.
The deck always becomes a card count. A hand is a list of cards only in
the view of the player holding it, and a card count for everybody else.
Nothing here mutates its inputs: views are new objects built from the
state, never references into it.
"""

import logging

from boardgame.schemas.game_state import GameState, GameView, PlayerState, PlayerView
from boardgame.schemas.identity import PlayerColor

from .capabilities import HiddenInformation
from .moves import DrawCard, DrawCardView, MoveBase

logger = logging.getLogger(__name__)


def _project_player(player: PlayerState, observer: PlayerColor | None) -> PlayerView:
    if player.id == observer:
        return PlayerView(id=player.id, hand=list(player.hand), gold=player.gold)
    return PlayerView(id=player.id, hand=len(player.hand), gold=player.gold)


def _project(state: GameState, observer: PlayerColor | None) -> GameView:
    return GameView(
        players=[_project_player(p, observer) for p in state.players],
        round=state.round,
        rounds=state.rounds,
        deck=len(state.deck),
        phase=state.phase,
        active_player=state.active_player,
        pending_deal=list(state.pending_deal),
    )


def get_view(state: GameState) -> GameView:
    """Spectator view: every hand and the deck reduced to counts."""
    return _project(state, None)


def get_player_view(state: GameState, observer: PlayerColor) -> GameView:
    """View for one player, who sees their own hand and nothing else.

    An identity that is not seated in the game gets the spectator view.
    """
    if state.get_player(observer) is None:
        logger.debug("Observer %s is not seated, using spectator view", observer)
        return get_view(state)
    return _project(state, observer)


def get_move_view(move: MoveBase, state: GameState) -> MoveBase:
    """Move as broadcast to everyone: no disclosure."""
    return move


def get_player_move_view(move: MoveBase, observer: PlayerColor, state: GameState) -> MoveBase:
    """Move as seen by ``observer``, computed before the move is played.

    The drawing player learns the card on top of the deck. Everyone else
    gets the bare move.
    """
    if isinstance(move, DrawCard) and move.player_id == observer and state.deck:
        return DrawCardView(player_id=move.player_id, card=state.deck[0])
    return get_move_view(move, state)


class TemplateProjection(HiddenInformation):
    def get_view(self, state: GameState) -> GameView:
        return get_view(state)

    def get_player_view(self, state: GameState, observer: PlayerColor) -> GameView:
        return get_player_view(state, observer)

    def get_move_view(self, move: MoveBase, state: GameState) -> MoveBase:
        return get_move_view(move, state)

    def get_player_move_view(
        self, move: MoveBase, observer: PlayerColor, state: GameState
    ) -> MoveBase:
        return get_player_move_view(move, observer, state)
