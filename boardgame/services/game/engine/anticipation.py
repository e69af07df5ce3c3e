"""Client anticipation - apply predictable moves to a view before the server confirms.

A client holding only a GameView can still replay most of the turn flow
on its own: turns and rounds start and end based on public fields only.
It cannot predict a card being dealt, so dealing stops anticipation until
the server's move views arrive. Whatever the client predicted, the next
authoritative view replaces its copy wholesale.
"""

import logging

from boardgame.schemas.game_state import GamePhase, GameView
from boardgame.schemas.identity import PlayerColor

from . import transitions
from .capabilities import Anticipation, Ruleset
from .context import MoveDispatcher
from .errors import AutomaticMoveCycleError, ConfigurationError
from .moves import DrawCard, DrawCardView, MoveBase, MoveType, Pass, SpendGold, StartTurn

logger = logging.getLogger(__name__)

view_dispatcher = MoveDispatcher("view")


@view_dispatcher.register(MoveType.DRAW_CARD)
def draw_card_in_view(view: GameView, move: DrawCard) -> None:
    player = view.get_player(move.player_id)
    if isinstance(player.hand, int):
        # Someone else's hand, or the card was not disclosed to us
        player.hand += 1
    elif isinstance(move, DrawCardView):
        player.hand.append(move.card)
    else:
        raise ValueError(f"Card drawn by {move.player_id.value} was not disclosed to its owner")
    view.deck = max(view.deck - 1, 0)
    if view.phase == GamePhase.DEALING:
        transitions.deal_done(view)
    else:
        transitions.end_action(view)


@view_dispatcher.register(MoveType.SPEND_GOLD)
def spend_gold_in_view(view: GameView, move: SpendGold) -> None:
    view.get_player(move.player_id).gold -= move.quantity
    transitions.end_action(view)


@view_dispatcher.register(MoveType.PASS)
def pass_in_view(view: GameView, move: Pass) -> None:
    transitions.end_action(view)


@view_dispatcher.register(MoveType.START_TURN)
def start_turn_in_view(view: GameView, move: StartTurn) -> None:
    transitions.start_turn(view, move.player_id)


@view_dispatcher.register(MoveType.START_ROUND)
def start_round_in_view(view: GameView, move: MoveBase) -> None:
    transitions.start_round(view)


@view_dispatcher.register(MoveType.END_GAME)
def end_game_in_view(view: GameView, move: MoveBase) -> None:
    transitions.end_game(view)


view_dispatcher.check_exhaustive(MoveType)


class TemplateAnticipation(Anticipation):
    def get_automatic_move(self, view: GameView, observer: PlayerColor | None) -> MoveBase | None:
        if view.phase == GamePhase.TURN_ENDED:
            return transitions.move_after_turn(view)
        if view.phase == GamePhase.DEALING:
            if view.pending_deal and view.deck > 0:
                # The dealt card is hidden: wait for the server
                return None
            return transitions.move_after_deal(view)
        return None

    def apply_move_view(self, view: GameView, move: MoveBase, observer: PlayerColor | None) -> None:
        view_dispatcher.dispatch(view, move)


class ClientGame:
    """Private, disposable replica of one observer's view.

    Usage:
        client = ClientGame(rules, engine.get_player_view(PlayerColor.RED), PlayerColor.RED)
        client.apply_move_view(move_view)    # from the server, or predicted
        client.play_automatic_moves()        # predict what can be predicted
        client.reconcile(authoritative_view) # server update wins
    """

    def __init__(
        self,
        rules: Ruleset,
        view: GameView,
        observer: PlayerColor | None = None,
        max_automatic_moves: int = 1000,
    ):
        if rules.anticipation is None:
            raise ConfigurationError(f"Ruleset {rules.name} does not support anticipation")
        self._anticipation = rules.anticipation
        self._view = view.model_copy(deep=True)
        self.observer = observer
        self.max_automatic_moves = max_automatic_moves

    @property
    def view(self) -> GameView:
        return self._view

    def get_automatic_move(self) -> MoveBase | None:
        return self._anticipation.get_automatic_move(self._view, self.observer)

    def apply_move_view(self, move: MoveBase) -> None:
        logger.debug("Applying move view for %s: %s", self.observer, move)
        self._anticipation.apply_move_view(self._view, move, self.observer)

    def play_automatic_moves(self) -> list[MoveBase]:
        """Apply every predictable automatic move, return them in order.

        Raises:
            AutomaticMoveCycleError: If predictions do not settle within the bound.
        """
        predicted: list[MoveBase] = []
        while True:
            move = self.get_automatic_move()
            if move is None:
                break
            if len(predicted) >= self.max_automatic_moves:
                raise AutomaticMoveCycleError(
                    f"Anticipated moves did not settle after {self.max_automatic_moves} steps",
                    steps=len(predicted),
                )
            self.apply_move_view(move)
            predicted.append(move)
        return predicted

    def matches(self, view: GameView) -> bool:
        return self._view == view

    def reconcile(self, view: GameView) -> bool:
        """Replace the local view with the authoritative one.

        Returns:
            Whether the local view already matched.
        """
        matched = self.matches(view)
        if not matched:
            logger.info("Anticipated view for %s diverged, replacing it", self.observer)
        self._view = view.model_copy(deep=True)
        return matched
