"""Move dispatch table and the context that moves are applied through."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .moves import MoveBase

if TYPE_CHECKING:
    from .capabilities import Ruleset

logger = logging.getLogger(__name__)

# Type alias for move handlers: mutate the target in place
MoveHandler = Callable[[Any, Any], None]


class MoveDispatcher:
    """Registry mapping a move type to the function that applies it.

    Usage:
        dispatcher = MoveDispatcher("state")

        @dispatcher.register(MoveType.PASS)
        def apply_pass(state, move): ...

        dispatcher.check_exhaustive(MoveType)
    """

    def __init__(self, name: str):
        self.name = name
        self._handlers: dict[Enum, MoveHandler] = {}

    def register(self, move_type: Enum) -> Callable[[MoveHandler], MoveHandler]:
        """Decorator to register the handler for a move type."""

        def decorator(func: MoveHandler) -> MoveHandler:
            if move_type in self._handlers:
                logger.warning(
                    "Overwriting existing %s handler for %s",
                    self.name,
                    move_type,
                )
            self._handlers[move_type] = func
            logger.debug("Registered %s handler for %s: %s", self.name, move_type, func.__name__)
            return func

        return decorator

    def check_exhaustive(self, move_types: type[Enum]) -> None:
        """Fail loudly if any member of the move enum has no handler."""
        missing = [m.value for m in move_types if m not in self._handlers]
        if missing:
            raise RuntimeError(f"No {self.name} handler for move types: {', '.join(missing)}")

    def dispatch(self, target: Any, move: MoveBase) -> None:
        handler_func = self._handlers.get(move.move_type)
        if handler_func is None:
            raise RuntimeError(f"No {self.name} handler for move type: {move.type}")
        handler_func(target, move)


@dataclass
class GameContext:
    """A game state together with the rules that mutate it.

    The context is the only place where moves touch a state. The engine
    gives it a private copy so a failing move never leaks half-applied
    changes into the authoritative state.
    """

    state: Any
    rules: "Ruleset"

    def apply(self, move: MoveBase) -> None:
        self.rules.dispatcher.dispatch(self.state, move)

