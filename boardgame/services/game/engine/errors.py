"""Rules engine error kinds.

Every error carries an ``error_code`` suitable for client localization.
Per-move errors (illegal move, game ended) leave the game untouched and
playable. Configuration and cycle errors are fatal for the game instance.
"""


class RulesError(Exception):
    """Base class for rules engine errors."""

    error_code = "RULES_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(RulesError):
    """Game options are malformed: the game cannot start."""

    error_code = "CONFIGURATION_ERROR"


class IllegalMoveError(RulesError):
    """The submitted move is not legal in the current state."""

    error_code = "ILLEGAL_MOVE"

    def __init__(self, message: str, move=None):
        super().__init__(message)
        self.move = move


class GameEndedError(RulesError):
    """A move was submitted after the game reached its terminal state."""

    error_code = "GAME_ENDED"


class AutomaticMoveCycleError(RulesError):
    """Automatic move resolution did not settle within its step bound.

    This is a rules bug, never a user error.
    """

    error_code = "AUTOMATIC_MOVE_CYCLE"

    def __init__(self, message: str, steps: int):
        super().__init__(message)
        self.steps = steps


class ProjectionLeakError(RulesError):
    """A view or move view discloses information its observer may not see.

    Raised by redaction checks in tests, not at runtime.
    """

    error_code = "PROJECTION_LEAK"
