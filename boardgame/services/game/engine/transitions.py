"""Turn and round flow shared by the authoritative state and client views.

Every function here only reads or writes public fields, which GameState
and GameView have in common, so server and client apply them identically.
"""

from boardgame.schemas.game_state import GamePhase, GameState, GameView
from boardgame.schemas.identity import PlayerColor

from .moves import EndGame, MoveBase, StartRound, StartTurn

Game = GameState | GameView


def seat_order(game: Game) -> list[PlayerColor]:
    return [p.id for p in game.players]


def next_seat(game: Game, player_id: PlayerColor) -> PlayerColor | None:
    """Player seated after ``player_id``, None after the last seat."""
    order = seat_order(game)
    index = order.index(player_id)
    return order[index + 1] if index + 1 < len(order) else None


def end_action(game: Game) -> None:
    game.phase = GamePhase.TURN_ENDED


def start_turn(game: Game, player_id: PlayerColor) -> None:
    game.active_player = player_id
    game.phase = GamePhase.PLAYER_TURN
    game.pending_deal = []


def start_round(game: Game) -> None:
    game.round += 1
    game.active_player = None
    game.phase = GamePhase.DEALING
    game.pending_deal = seat_order(game)


def end_game(game: Game) -> None:
    game.active_player = None
    game.phase = GamePhase.GAME_OVER
    game.pending_deal = []


def deal_done(game: Game) -> None:
    """A dealt card reached the first pending player."""
    game.pending_deal = game.pending_deal[1:]


def move_after_turn(game: Game) -> MoveBase:
    """Automatic move once the active player's action is over."""
    following = next_seat(game, game.active_player)
    if following is not None:
        return StartTurn(player_id=following)
    if game.round < game.rounds:
        return StartRound()
    return EndGame()


def move_after_deal(game: Game) -> MoveBase:
    """Automatic move once every pending player got a card (or the deck ran out)."""
    return StartTurn(player_id=seat_order(game)[0])
