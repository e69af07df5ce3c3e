"""Game sessions - the single-writer gate in front of the rules engine.

Each session owns one engine. Submissions for the same game wait on the
session lock, so moves reach ``play`` one at a time and automatic moves
are fully resolved before the next submission is looked at. Different
sessions share nothing and run independently.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from boardgame.schemas.identity import PlayerColor

from .engine import (
    AutomaticMoveCycleError,
    GameEndedError,
    GameSetup,
    IllegalMoveError,
    MoveBase,
    Ruleset,
    RulesEngine,
)

logger = logging.getLogger(__name__)


@dataclass
class PlayedMove:
    """A move that went through, with what each observer gets to see of it."""

    move: MoveBase
    view: MoveBase
    player_views: dict[PlayerColor, MoveBase] = field(default_factory=dict)

    def for_observer(self, observer: PlayerColor | None = None) -> MoveBase:
        if observer is None:
            return self.view
        return self.player_views.get(observer, self.view)


@dataclass
class PlayResult:
    """Result of submitting a move to a session.

    A rejected move is reported to its submitter only: nothing was played
    and there is nothing to broadcast.
    """

    moves: list[PlayedMove] = field(default_factory=list)
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, moves: list[PlayedMove]) -> "PlayResult":
        """Create a successful result with the moves played."""
        return cls(moves=moves, success=True)

    @classmethod
    def failure(cls, code: str, message: str) -> "PlayResult":
        """Create a failure result with error details."""
        return cls(
            moves=[],
            success=False,
            error_code=code,
            error_message=message,
        )


class GameSession:
    """One game, its engine, and the history of every move played."""

    def __init__(self, game_id: str, engine: RulesEngine, setup: GameSetup):
        self.game_id = game_id
        self.engine = engine
        self.setup = setup
        self.history: list[MoveBase] = []
        self.failure: AutomaticMoveCycleError | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def create(
        cls,
        game_id: str,
        rules: Ruleset,
        setup: GameSetup,
        max_automatic_moves: int,
    ) -> tuple["GameSession", list[PlayedMove]]:
        """Build the engine and resolve the opening automatic moves.

        Raises:
            ConfigurationError: If the options or saved state are invalid.
            AutomaticMoveCycleError: If the opening moves never settle.
        """
        engine = RulesEngine(rules, setup, max_automatic_moves=max_automatic_moves)
        session = cls(game_id, engine, setup)
        played = session._drain()
        logger.info(
            "Session %s created: players=%s, opening_moves=%d",
            game_id,
            [getattr(p, "value", p) for p in engine.players],
            len(played),
        )
        return session, played

    def _project(self, move: MoveBase) -> PlayedMove:
        """Project a move for every observer, before it is played."""
        return PlayedMove(
            move=move,
            view=self.engine.get_move_view(move),
            player_views={
                player_id: self.engine.get_player_move_view(move, player_id)
                for player_id in self.engine.players
            },
        )

    def _drain(self) -> list[PlayedMove]:
        played: list[PlayedMove] = []
        try:
            self.engine.play_automatic_moves(on_move=lambda m: played.append(self._project(m)))
        except AutomaticMoveCycleError as e:
            logger.exception("Session %s stopped: automatic moves never settled", self.game_id)
            self.failure = e
            raise
        finally:
            self.history.extend(p.move for p in played)
        return played

    def _play(self, move: MoveBase) -> PlayResult:
        if self.failure is not None:
            return PlayResult.failure(self.failure.error_code, self.failure.message)

        projected = self._project(move)
        try:
            self.engine.play(move)
        except (IllegalMoveError, GameEndedError) as e:
            logger.warning(
                "Move rejected in session %s: code=%s, move=%s",
                self.game_id,
                e.error_code,
                move,
            )
            return PlayResult.failure(e.error_code, e.message)

        self.history.append(move)
        played = [projected, *self._drain()]
        logger.info(
            "Move accepted in session %s: type=%s, moves_played=%d",
            self.game_id,
            move.type,
            len(played),
        )
        return PlayResult.ok(played)

    async def submit(self, move: MoveBase) -> PlayResult:
        """Play a submitted move, then every automatic move it triggers."""
        async with self._lock:
            return self._play(move)

    async def submit_timeout(self, player_id: PlayerColor) -> PlayResult:
        """Play the forced move of a player whose decision time ran out."""
        async with self._lock:
            if self.engine.active_player != player_id:
                return PlayResult.failure(
                    "NOT_ACTIVE_PLAYER",
                    f"{player_id.value} is not the player expected to act",
                )
            move = self.engine.default_move(player_id)
            if move is None:
                return PlayResult.failure("NO_TIME_LIMIT", "Turns are not timed in this game")
            logger.info("Time is up for %s in session %s", player_id.value, self.game_id)
            return self._play(move)

    def time_budget(self) -> int | None:
        """Seconds the active player has for their decision."""
        active = self.engine.active_player
        if active is None:
            return None
        return self.engine.give_time(active)

    def get_view(self, observer: PlayerColor | None = None) -> Any:
        if observer is None:
            return self.engine.get_view()
        return self.engine.get_player_view(observer)

    def legal_moves(self, observer: PlayerColor | None = None) -> list[MoveBase]:
        return self.engine.legal_moves(observer)


class SessionRegistry:
    """In-memory map of running games."""

    def __init__(self, rules: Ruleset, max_automatic_moves: int):
        self.rules = rules
        self.max_automatic_moves = max_automatic_moves
        self._sessions: dict[str, GameSession] = {}

    def create(self, setup: GameSetup) -> tuple[GameSession, list[PlayedMove]]:
        game_id = str(uuid.uuid4())
        session, played = GameSession.create(game_id, self.rules, setup, self.max_automatic_moves)
        self._sessions[game_id] = session
        return session, played

    def get(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def remove(self, game_id: str) -> None:
        if self._sessions.pop(game_id, None) is not None:
            logger.info("Session %s removed", game_id)

    def __len__(self) -> int:
        return len(self._sessions)
