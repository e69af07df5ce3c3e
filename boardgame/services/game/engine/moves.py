"""Move types - the closed set of operations that transform game state.

Moves are plain data: JSON-serializable, minimal, never carrying derived
fields. On the wire they look like ``{"type": "DrawCard", "playerId": "Red"}``.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import ConfigDict, Field

from boardgame.schemas.base import WireModel
from boardgame.schemas.identity import PlayerColor


class MoveType(str, Enum):
    DRAW_CARD = "DrawCard"
    SPEND_GOLD = "SpendGold"
    PASS = "Pass"
    START_TURN = "StartTurn"
    START_ROUND = "StartRound"
    END_GAME = "EndGame"


class MoveBase(WireModel):
    """Base class for all moves."""

    model_config = ConfigDict(frozen=True)

    type: str

    @property
    def move_type(self) -> MoveType:
        return MoveType(self.type)


class DrawCard(MoveBase):
    """A player takes the top card of the deck.

    The card is not part of the move: the server knows it is the top of
    the deck. Only the drawing player learns it, through DrawCardView.
    """

    type: Literal["DrawCard"] = "DrawCard"
    player_id: PlayerColor


class DrawCardView(DrawCard):
    """DrawCard as seen by the player who draws: discloses the card."""

    card: int


class SpendGold(MoveBase):
    """A player returns some gold to the bank."""

    type: Literal["SpendGold"] = "SpendGold"
    player_id: PlayerColor
    quantity: int = Field(..., ge=1, description="Gold returned to the bank")


class Pass(MoveBase):
    """A player ends their action without doing anything."""

    type: Literal["Pass"] = "Pass"
    player_id: PlayerColor


class StartTurn(MoveBase):
    """A player becomes the active player."""

    type: Literal["StartTurn"] = "StartTurn"
    player_id: PlayerColor


class StartRound(MoveBase):
    """A new round begins with a card dealt to every player."""

    type: Literal["StartRound"] = "StartRound"


class EndGame(MoveBase):
    """The last round is over."""

    type: Literal["EndGame"] = "EndGame"


# Union type for all moves
Move = Annotated[
    DrawCard | SpendGold | Pass | StartTurn | StartRound | EndGame,
    Field(discriminator="type"),
]

# A move as received by an observer: possibly with disclosed fields
MoveView = DrawCard | DrawCardView | SpendGold | Pass | StartTurn | StartRound | EndGame

_MOVE_MODELS: dict[MoveType, type[MoveBase]] = {
    MoveType.DRAW_CARD: DrawCard,
    MoveType.SPEND_GOLD: SpendGold,
    MoveType.PASS: Pass,
    MoveType.START_TURN: StartTurn,
    MoveType.START_ROUND: StartRound,
    MoveType.END_GAME: EndGame,
}


def _move_type_of(payload: dict) -> MoveType:
    raw_type = payload.get("type")
    try:
        return MoveType(raw_type)
    except ValueError:
        raise ValueError(f"Unknown move type: {raw_type}") from None


def build_move_from_payload(payload: dict) -> Move:
    """Build a typed move from a raw payload dict.

    Args:
        payload: Dict with a 'type' key and move-specific fields.

    Returns:
        The matching move model.

    Raises:
        ValueError: If the type is missing or unknown, or fields are invalid
            (pydantic's ValidationError is a ValueError).
    """
    move_type = _move_type_of(payload)
    return _MOVE_MODELS[move_type].model_validate(payload)


def build_move_view_from_payload(payload: dict) -> MoveView:
    """Like build_move_from_payload, keeping fields disclosed to the observer."""
    move_type = _move_type_of(payload)
    if move_type == MoveType.DRAW_CARD and payload.get("card") is not None:
        return DrawCardView.model_validate(payload)
    return _MOVE_MODELS[move_type].model_validate(payload)


def strip_disclosures(move: MoveBase) -> MoveBase:
    """Return the plain move behind a move view."""
    if isinstance(move, DrawCardView):
        return DrawCard(player_id=move.player_id)
    return move
