"""Rules of the template game.

Each round, every player is dealt a card, then takes one action in seat
order: draw a card, spend gold, or pass. The game ends after the last
player's action of the last round. Everything the players do not decide
(dealing, passing the turn, starting rounds, ending the game) is an
automatic move.
"""

import logging

from boardgame.schemas.game_state import GamePhase, GameState
from boardgame.schemas.identity import PlayerColor
from boardgame.schemas.options import GameOptions

from . import transitions
from .anticipation import TemplateAnticipation
from .capabilities import Ruleset, TimeLimit
from .context import MoveDispatcher
from .moves import (
    DrawCard,
    MoveBase,
    MoveType,
    Pass,
    SpendGold,
    StartTurn,
    build_move_from_payload,
)
from .projection import TemplateProjection
from .setup import initialize_game, validate_game_state

logger = logging.getLogger(__name__)

DEFAULT_TURN_TIME = 60

state_dispatcher = MoveDispatcher("state")


@state_dispatcher.register(MoveType.DRAW_CARD)
def draw_card(state: GameState, move: DrawCard) -> None:
    player = state.get_player(move.player_id)
    card = state.deck.pop(0)
    player.hand.append(card)
    logger.debug("Player %s drew a card, %d left in deck", move.player_id.value, len(state.deck))
    if state.phase == GamePhase.DEALING:
        transitions.deal_done(state)
    else:
        transitions.end_action(state)


@state_dispatcher.register(MoveType.SPEND_GOLD)
def spend_gold(state: GameState, move: SpendGold) -> None:
    player = state.get_player(move.player_id)
    player.gold -= move.quantity
    transitions.end_action(state)


@state_dispatcher.register(MoveType.PASS)
def pass_turn(state: GameState, move: Pass) -> None:
    transitions.end_action(state)


@state_dispatcher.register(MoveType.START_TURN)
def start_turn(state: GameState, move: StartTurn) -> None:
    transitions.start_turn(state, move.player_id)


@state_dispatcher.register(MoveType.START_ROUND)
def start_round(state: GameState, move: MoveBase) -> None:
    transitions.start_round(state)
    logger.debug("Round %d started", state.round)


@state_dispatcher.register(MoveType.END_GAME)
def end_game(state: GameState, move: MoveBase) -> None:
    transitions.end_game(state)


state_dispatcher.check_exhaustive(MoveType)


def get_legal_moves(state: GameState) -> list[MoveBase]:
    """Moves the active player may choose from.

    Players only decide during their own turn: draw (while the deck lasts),
    spend any amount of the gold they hold, or pass.
    """
    if state.phase != GamePhase.PLAYER_TURN or state.active_player is None:
        return []

    player = state.get_player(state.active_player)
    legal_moves: list[MoveBase] = []
    if state.deck:
        legal_moves.append(DrawCard(player_id=player.id))
    for quantity in range(1, player.gold + 1):
        legal_moves.append(SpendGold(player_id=player.id, quantity=quantity))
    legal_moves.append(Pass(player_id=player.id))
    return legal_moves


def is_legal_move(state: GameState, move: MoveBase) -> bool:
    """Same answer as ``move in get_legal_moves(state)``, without listing every SpendGold."""
    if state.phase != GamePhase.PLAYER_TURN or state.active_player is None:
        return False
    if getattr(move, "player_id", None) != state.active_player:
        return False
    if type(move) is DrawCard:
        return bool(state.deck)
    if type(move) is SpendGold:
        return move.quantity <= state.get_player(move.player_id).gold
    return type(move) is Pass


def get_automatic_moves(state: GameState) -> list[MoveBase]:
    """Next move the game plays by itself, as a list of zero or one move."""
    if state.phase == GamePhase.DEALING:
        if state.pending_deal and state.deck:
            return [DrawCard(player_id=state.pending_deal[0])]
        return [transitions.move_after_deal(state)]
    if state.phase == GamePhase.TURN_ENDED:
        return [transitions.move_after_turn(state)]
    return []


def get_scores(state: GameState) -> dict[PlayerColor, int]:
    """Score of each player: the value of the cards in hand plus remaining gold."""
    return {p.id: sum(p.hand) + p.gold for p in state.players}


def get_winners(state: GameState) -> list[PlayerColor]:
    """Best-scoring players once the game is over, empty before that."""
    if state.phase != GamePhase.GAME_OVER:
        return []
    scores = get_scores(state)
    best = max(scores.values())
    return [player_id for player_id, score in scores.items() if score == best]


class TemplateTimeLimit(TimeLimit):
    def __init__(self, seconds: int = DEFAULT_TURN_TIME):
        self.seconds = seconds

    def give_time(self, state: GameState, player_id: PlayerColor) -> int:
        return self.seconds

    def default_move(self, state: GameState, player_id: PlayerColor) -> MoveBase:
        return Pass(player_id=player_id)


class TemplateRules(Ruleset):
    """The template game, with hidden hands, a turn timer and anticipation."""

    name = "template"
    state_model = GameState
    options_model = GameOptions
    dispatcher = state_dispatcher

    def __init__(self, turn_time_limit: int = DEFAULT_TURN_TIME):
        self.hidden_information = TemplateProjection()
        self.time_limit = TemplateTimeLimit(turn_time_limit)
        self.anticipation = TemplateAnticipation()

    def setup(self, options: GameOptions | dict) -> GameState:
        return initialize_game(options)

    def validate_state(self, state: GameState) -> None:
        validate_game_state(state)

    def player_ids(self, state: GameState) -> list[PlayerColor]:
        return transitions.seat_order(state)

    def active_player(self, state: GameState) -> PlayerColor | None:
        if state.phase != GamePhase.PLAYER_TURN:
            return None
        return state.active_player

    def is_over(self, state: GameState) -> bool:
        return state.phase == GamePhase.GAME_OVER

    def legal_moves(self, state: GameState) -> list[MoveBase]:
        return get_legal_moves(state)

    def is_legal(self, state: GameState, move: MoveBase) -> bool:
        return is_legal_move(state, move)

    def automatic_moves(self, state: GameState) -> list[MoveBase]:
        return get_automatic_moves(state)

    def parse_move(self, payload: dict) -> MoveBase:
        return build_move_from_payload(payload)
