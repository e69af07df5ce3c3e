"""Tests for game initialization.

Critical scenarios tested:
- Initial state built from options
- Options validation (player count, duplicates, malformed payloads)
- Deterministic shuffle from the seed
- Explicit Start / Resume construction
"""

import pytest

from boardgame.schemas.game_state import GamePhase, GameState
from boardgame.schemas.options import GameOptions, options_description
from boardgame.services.game.engine import (
    ConfigurationError,
    Resume,
    RulesEngine,
    Start,
    initialize_game,
)

from .conftest import BLUE, GREEN, RED, YELLOW, make_options


class TestInitializeGame:
    """Test the initial state built from options."""

    def test_players_are_seated_in_color_order(self):
        """Players should be seated in identity order, not option order."""
        state = initialize_game(make_options(YELLOW, RED, BLUE))

        assert [p.id for p in state.players] == [BLUE, RED, YELLOW]

    def test_initial_state_starts_with_dealing(self):
        """A new game starts by dealing a card to every player."""
        state = initialize_game(make_options(RED, BLUE, starting_gold=4, rounds=2))

        assert state.phase == GamePhase.DEALING
        assert state.round == 1
        assert state.rounds == 2
        assert state.active_player is None
        assert state.pending_deal == [BLUE, RED]
        assert all(p.gold == 4 and p.hand == [] for p in state.players)

    def test_deck_holds_every_card_once(self):
        """The deck should be a permutation of 1..deck_size."""
        state = initialize_game(make_options(RED, BLUE, deck_size=12))

        assert sorted(state.deck) == list(range(1, 13))

    def test_same_seed_gives_same_state(self):
        """Setup must not depend on anything but the options."""
        options = make_options(RED, BLUE, GREEN, seed=42)

        assert initialize_game(options) == initialize_game(options)

    def test_different_seeds_shuffle_differently(self):
        """The seed is what drives the shuffle."""
        first = initialize_game(make_options(RED, BLUE, seed=1))
        second = initialize_game(make_options(RED, BLUE, seed=2))

        assert first.deck != second.deck

    def test_accepts_parsed_options(self):
        """GameOptions models are accepted as well as wire dicts."""
        options = GameOptions.model_validate(make_options(RED, BLUE))

        state = initialize_game(options)

        assert len(state.players) == 2


class TestOptionsValidation:
    """Test rejection of malformed options."""

    def test_single_player_is_rejected(self):
        with pytest.raises(ConfigurationError, match="minimum of 2 players"):
            initialize_game(make_options(RED))

    def test_empty_player_list_is_rejected(self):
        with pytest.raises(ConfigurationError):
            initialize_game({"players": []})

    def test_duplicate_players_are_rejected(self):
        with pytest.raises(ConfigurationError, match="Duplicate player ID"):
            initialize_game(make_options(RED, RED))

    def test_unknown_color_is_rejected(self):
        """Pydantic errors are reported as configuration errors."""
        with pytest.raises(ConfigurationError, match="Malformed game options"):
            initialize_game({"players": [{"id": "Purple"}, {"id": "Red"}]})

    def test_invalid_parameters_are_rejected(self):
        with pytest.raises(ConfigurationError):
            initialize_game(make_options(RED, BLUE, rounds=0))

    def test_error_code(self):
        with pytest.raises(ConfigurationError) as exc_info:
            initialize_game(make_options(RED))

        assert exc_info.value.error_code == "CONFIGURATION_ERROR"


class TestEngineConstruction:
    """Test that callers state whether they start or resume a game."""

    def test_start_builds_initial_state(self, rules):
        engine = RulesEngine(rules, Start(make_options(RED, BLUE)))

        assert engine.players == [BLUE, RED]
        assert engine.state.phase == GamePhase.DEALING

    def test_start_with_invalid_options_fails(self, rules):
        with pytest.raises(ConfigurationError):
            RulesEngine(rules, Start(make_options(GREEN)))

    def test_resume_keeps_state(self, rules, red_turn_state: GameState):
        engine = RulesEngine(rules, Resume(red_turn_state))

        assert engine.state == red_turn_state

    def test_resume_copies_the_given_state(self, rules, red_turn_state: GameState):
        """The engine must not share its state with the caller."""
        engine = RulesEngine(rules, Resume(red_turn_state))

        red_turn_state.deck.clear()

        assert engine.state.deck == [1, 2, 3, 4, 5]

    def test_resume_with_malformed_state_fails(self, rules):
        with pytest.raises(ConfigurationError, match="Malformed saved state"):
            RulesEngine(rules, Resume({"players": "nope"}))

    def test_bare_options_are_not_guessed(self, rules):
        """Passing options without saying Start or Resume is an error."""
        with pytest.raises(TypeError):
            RulesEngine(rules, make_options(RED, BLUE))


class TestOptionsDescription:
    """Test the options description used to build forms."""

    def test_lists_every_color_with_label(self):
        description = options_description()

        values = description["players"]["id"]["values"]
        assert [v["value"] for v in values] == ["Blue", "Red", "Green", "Yellow"]
        assert values[1]["label"] == "Red"

    def test_documents_bounds_and_seat_order(self):
        """Clients should learn the caps and that seats follow color order."""
        description = options_description()

        assert description["starting_gold"]["max"] == 50
        assert description["deck_size"]["max"] == 100
        assert description["rounds"]["max"] == 20
        assert description["seat_order"] == ["Blue", "Red", "Green", "Yellow"]


class TestOptionBounds:
    """Test the upper bounds that keep legal move lists small."""

    def test_oversized_options_are_rejected(self):
        for params in ({"starting_gold": 2_000_000}, {"deck_size": 101}, {"rounds": 21}):
            with pytest.raises(ConfigurationError):
                initialize_game(make_options(RED, BLUE, **params))

    def test_largest_options_give_a_short_move_list(self, rules):
        engine = RulesEngine(rules, Start(make_options(RED, BLUE, starting_gold=50, deck_size=100)))
        engine.play_automatic_moves()

        assert len(engine.legal_moves()) == 52
