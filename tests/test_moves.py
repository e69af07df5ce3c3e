"""Tests for move parsing and wire format."""

import pytest

from boardgame.services.game.engine import (
    DrawCard,
    DrawCardView,
    EndGame,
    MoveType,
    Pass,
    SpendGold,
    StartRound,
    StartTurn,
    build_move_from_payload,
    build_move_view_from_payload,
    strip_disclosures,
)

from .conftest import BLUE, RED


class TestBuildMove:
    """Test building typed moves from payloads."""

    def test_player_moves(self):
        """Should parse every player move from camelCase payloads."""
        assert build_move_from_payload({"type": "DrawCard", "playerId": "Red"}) == DrawCard(
            player_id=RED
        )
        assert build_move_from_payload(
            {"type": "SpendGold", "playerId": "Blue", "quantity": 2}
        ) == SpendGold(player_id=BLUE, quantity=2)
        assert build_move_from_payload({"type": "Pass", "playerId": "Red"}) == Pass(player_id=RED)

    def test_automatic_moves(self):
        assert build_move_from_payload({"type": "StartTurn", "playerId": "Blue"}) == StartTurn(
            player_id=BLUE
        )
        assert build_move_from_payload({"type": "StartRound"}) == StartRound()
        assert build_move_from_payload({"type": "EndGame"}) == EndGame()

    def test_snake_case_fields_are_accepted(self):
        assert build_move_from_payload({"type": "Pass", "player_id": "Red"}) == Pass(player_id=RED)

    def test_unknown_type_is_rejected(self):
        """Should raise ValueError for a type outside the move set."""
        with pytest.raises(ValueError, match="Unknown move type"):
            build_move_from_payload({"type": "Teleport", "playerId": "Red"})

    def test_missing_type_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown move type"):
            build_move_from_payload({"playerId": "Red"})

    def test_invalid_fields_are_rejected(self):
        """Should raise ValueError for a zero quantity or an unknown color."""
        with pytest.raises(ValueError):
            build_move_from_payload({"type": "SpendGold", "playerId": "Red", "quantity": 0})
        with pytest.raises(ValueError):
            build_move_from_payload({"type": "Pass", "playerId": "Purple"})

    def test_submitted_card_is_not_a_move_field(self):
        """A player cannot choose the card they draw."""
        move = build_move_from_payload({"type": "DrawCard", "playerId": "Red", "card": 30})

        assert move == DrawCard(player_id=RED)
        assert not isinstance(move, DrawCardView)

    def test_move_type(self):
        assert SpendGold(player_id=RED, quantity=1).move_type == MoveType.SPEND_GOLD


class TestMoveViews:
    """Test move views received by observers."""

    def test_disclosed_draw_is_parsed_as_view(self):
        move = build_move_view_from_payload({"type": "DrawCard", "playerId": "Red", "card": 4})

        assert move == DrawCardView(player_id=RED, card=4)

    def test_undisclosed_draw_is_plain(self):
        move = build_move_view_from_payload({"type": "DrawCard", "playerId": "Red"})

        assert move == DrawCard(player_id=RED)

    def test_wire_format(self):
        """Should dump moves with camelCase keys."""
        assert DrawCardView(player_id=RED, card=4).to_wire() == {
            "type": "DrawCard",
            "playerId": "Red",
            "card": 4,
        }
        assert StartRound().to_wire() == {"type": "StartRound"}

    def test_strip_disclosures(self):
        assert strip_disclosures(DrawCardView(player_id=RED, card=4)) == DrawCard(player_id=RED)
        assert strip_disclosures(Pass(player_id=RED)) == Pass(player_id=RED)

    def test_moves_are_immutable(self):
        """Should refuse changes to a built move."""
        move = SpendGold(player_id=RED, quantity=1)

        with pytest.raises(ValueError):
            move.quantity = 3
