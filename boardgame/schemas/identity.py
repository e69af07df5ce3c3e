"""Player identities: the fixed, ordered set of seat colors."""

from enum import Enum


class PlayerColor(str, Enum):
    BLUE = "Blue"
    RED = "Red"
    GREEN = "Green"
    YELLOW = "Yellow"


# Declaration order is the seat order
player_colors: list[PlayerColor] = list(PlayerColor)


def seat_index(color: PlayerColor) -> int:
    """Position of a color in the total order of identities."""
    return player_colors.index(color)


def sort_players(colors: list[PlayerColor]) -> list[PlayerColor]:
    return sorted(colors, key=seat_index)


def get_player_name(color: PlayerColor) -> str:
    """Display label for a seat."""
    labels = {
        PlayerColor.RED: "Red",
        PlayerColor.BLUE: "Blue",
        PlayerColor.GREEN: "Green",
        PlayerColor.YELLOW: "Yellow",
    }
    return labels[color]
