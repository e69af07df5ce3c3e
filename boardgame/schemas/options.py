"""Options used to create a new game instance."""

from pydantic import Field

from .base import WireModel
from .identity import PlayerColor, get_player_name, player_colors

MIN_PLAYERS = 2
MAX_PLAYERS = len(player_colors)
MAX_ROUNDS = 20
MAX_DECK_SIZE = 100
MAX_STARTING_GOLD = 50


class PlayerOptions(WireModel):
    """Per-player options: the seat the player takes."""

    id: PlayerColor


class GameOptions(WireModel):
    """Options payload consumed once to build the initial state.

    ``seed`` is the only entropy source the setup uses, so the same options
    always produce the same initial state.
    """

    players: list[PlayerOptions]
    rounds: int = Field(3, ge=1, le=MAX_ROUNDS, description="Number of rounds before the game ends")
    deck_size: int = Field(30, ge=1, le=MAX_DECK_SIZE, description="Cards numbered 1..deck_size")
    starting_gold: int = Field(
        3, ge=0, le=MAX_STARTING_GOLD, description="Gold each player starts with"
    )
    seed: int = Field(0, description="Seed for the deck shuffle")

    @property
    def player_ids(self) -> list[PlayerColor]:
        return [player.id for player in self.players]


def options_description() -> dict:
    """Describe the options so clients can build game creation forms."""
    return {
        "players": {
            "id": {
                "label": "Player color",
                "values": [
                    {"value": color.value, "label": get_player_name(color)}
                    for color in player_colors
                ],
            }
        },
        "rounds": {"label": "Rounds", "default": 3, "min": 1, "max": MAX_ROUNDS},
        "deck_size": {"label": "Deck size", "default": 30, "min": 1, "max": MAX_DECK_SIZE},
        "starting_gold": {
            "label": "Starting gold",
            "default": 3,
            "min": 0,
            "max": MAX_STARTING_GOLD,
        },
        "player_count": {"min": MIN_PLAYERS, "max": MAX_PLAYERS},
        # Players sit in color order, whatever order they are listed in
        "seat_order": [color.value for color in player_colors],
    }
