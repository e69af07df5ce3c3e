"""Shared fixtures for rules engine tests."""

import pytest

from boardgame.schemas.game_state import GamePhase, GameState, GameView, PlayerState
from boardgame.schemas.identity import PlayerColor
from boardgame.services.game.engine import (
    MoveBase,
    Pass,
    ProjectionLeakError,
    Resume,
    RulesEngine,
    Start,
    TemplateRules,
)

RED = PlayerColor.RED
BLUE = PlayerColor.BLUE
GREEN = PlayerColor.GREEN
YELLOW = PlayerColor.YELLOW


def create_player(
    player_id: PlayerColor, hand: list[int] | None = None, gold: int = 3
) -> PlayerState:
    """Helper to create a player."""
    return PlayerState(id=player_id, hand=hand or [], gold=gold)


def create_state(
    players: list[PlayerState],
    deck: list[int] | None = None,
    phase: GamePhase = GamePhase.PLAYER_TURN,
    active_player: PlayerColor | None = None,
    round: int = 1,
    rounds: int = 1,
    pending_deal: list[PlayerColor] | None = None,
) -> GameState:
    """Helper to create a game state, by default on the first player's turn."""
    if active_player is None and phase == GamePhase.PLAYER_TURN:
        active_player = players[0].id
    return GameState(
        players=players,
        round=round,
        rounds=rounds,
        deck=[1, 2, 3, 4, 5] if deck is None else deck,
        phase=phase,
        active_player=active_player,
        pending_deal=pending_deal or [],
    )


class CyclingRules(TemplateRules):
    """Broken rules: the active player passes forever."""

    def automatic_moves(self, state: GameState) -> list[MoveBase]:
        return [Pass(player_id=state.active_player)]


def make_options(*player_ids: PlayerColor, **params) -> dict:
    """Options payload in wire form."""
    options = {"players": [{"id": p.value} for p in player_ids]}
    options.update(params)
    return options


def assert_redacted(view: GameView, observer: PlayerColor | None) -> None:
    """Raise ProjectionLeakError if the view shows a secret the observer may not see."""
    if not isinstance(view.deck, int):
        raise ProjectionLeakError("Deck content is visible")
    for player in view.players:
        if player.id != observer and not isinstance(player.hand, int):
            raise ProjectionLeakError(f"Hand of {player.id.value} is visible to {observer}")


@pytest.fixture
def rules() -> TemplateRules:
    return TemplateRules()


@pytest.fixture
def red_turn_state() -> GameState:
    """Red and Blue, one round, Red to play with 3 gold, deck [1..5]."""
    return create_state(
        players=[create_player(RED), create_player(BLUE)],
        deck=[1, 2, 3, 4, 5],
        active_player=RED,
    )


@pytest.fixture
def engine(rules: TemplateRules, red_turn_state: GameState) -> RulesEngine:
    """Engine resumed at Red's turn."""
    return RulesEngine(rules, Resume(red_turn_state))


@pytest.fixture
def two_player_options() -> dict:
    return make_options(RED, BLUE, rounds=2, deck_size=10, starting_gold=3, seed=7)


@pytest.fixture
def started_engine(rules: TemplateRules, two_player_options: dict) -> RulesEngine:
    """New two-player game with the opening deal resolved."""
    engine = RulesEngine(rules, Start(two_player_options))
    engine.play_automatic_moves()
    return engine
