"""REST endpoints exposing the rules engine contract."""

import logging
from typing import Any, NoReturn

from fastapi import APIRouter, HTTPException, status

from boardgame.dependencies.sessions import get_session_registry
from boardgame.schemas.api import (
    GameCreatedResponse,
    MovesResponse,
    ResumeGameRequest,
    StartGameRequest,
)
from boardgame.schemas.identity import PlayerColor
from boardgame.schemas.options import options_description
from boardgame.services.game import GameSession, PlayResult, Resume, Start
from boardgame.services.game.engine import AutomaticMoveCycleError, ConfigurationError, GameSetup

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])

error_status_map = {
    "CONFIGURATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_MOVE": status.HTTP_400_BAD_REQUEST,
    "ILLEGAL_MOVE": status.HTTP_400_BAD_REQUEST,
    "NO_TIME_LIMIT": status.HTTP_400_BAD_REQUEST,
    "GAME_ENDED": status.HTTP_409_CONFLICT,
    "NOT_ACTIVE_PLAYER": status.HTTP_409_CONFLICT,
    "AUTOMATIC_MOVE_CYCLE": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_session(game_id: str) -> GameSession:
    session = get_session_registry().get(game_id)
    if session is None:
        logger.warning("Game %s not found", game_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Game not found",
        )
    return session


def _raise_for(error_code: str | None, message: str | None) -> NoReturn:
    http_status = error_status_map.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=http_status, detail=message or "Request failed")


def _create(setup: GameSetup) -> GameCreatedResponse:
    try:
        session, played = get_session_registry().create(setup)
    except ConfigurationError as e:
        logger.warning("Game creation rejected: %s", e.message)
        _raise_for(e.error_code, e.message)
    except AutomaticMoveCycleError as e:
        _raise_for(e.error_code, e.message)

    return GameCreatedResponse(
        game_id=session.game_id,
        view=session.get_view().to_wire(),
        moves=[p.view.to_wire() for p in played],
    )


def _moves_response(session: GameSession, result: PlayResult, observer: Any) -> MovesResponse:
    if not result.success:
        _raise_for(result.error_code, result.error_message)
    return MovesResponse(
        moves=[p.for_observer(observer).to_wire() for p in result.moves],
        time_limit=session.time_budget(),
    )


@router.get("/options")
async def get_options_description():
    """Describe the options accepted when creating a game."""
    return options_description()


@router.post("", response_model=GameCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_game(request: StartGameRequest):
    """Create a new game from options.

    The opening automatic moves (dealing) are resolved before responding.

    Raises:
        HTTPException 422: If the options are invalid.
    """
    logger.info("POST /games - players: %s", request.options.get("players"))
    return _create(Start(request.options))


@router.post("/resume", response_model=GameCreatedResponse, status_code=status.HTTP_201_CREATED)
async def resume_game(request: ResumeGameRequest):
    """Resume a game from a saved state.

    Raises:
        HTTPException 422: If the state is malformed.
    """
    logger.info("POST /games/resume")
    return _create(Resume(request.state))


@router.get("/{game_id}/view")
async def get_view(game_id: str, player: PlayerColor | None = None):
    """View of the game for a player, or the spectator view without one."""
    session = _get_session(game_id)
    return session.get_view(player).to_wire()


@router.get("/{game_id}/legal-moves")
async def get_legal_moves(game_id: str, player: PlayerColor | None = None):
    """Moves currently playable, only the player's own when given."""
    session = _get_session(game_id)
    return [move.to_wire() for move in session.legal_moves(player)]


@router.get("/{game_id}/state")
async def get_state(game_id: str):
    """Authoritative state in wire form, for persistence."""
    session = _get_session(game_id)
    return session.engine.serialize()


@router.post("/{game_id}/moves", response_model=MovesResponse)
async def play_move(game_id: str, payload: dict[str, Any]):
    """Submit a move.

    Returns the submitted move followed by the automatic moves it
    triggered, as seen by the player who submitted it.

    Raises:
        HTTPException 400: If the move is malformed or illegal.
        HTTPException 404: If the game does not exist.
        HTTPException 409: If the game is over.
    """
    session = _get_session(game_id)
    try:
        move = session.engine.rules.parse_move(payload)
    except ValueError as e:
        logger.warning("Invalid move payload for game %s: %s", game_id, e)
        _raise_for("INVALID_MOVE", str(e))

    logger.info("POST /games/%s/moves - move: %s", game_id, move)
    try:
        result = await session.submit(move)
    except AutomaticMoveCycleError as e:
        _raise_for(e.error_code, e.message)

    return _moves_response(session, result, session.engine.rules.move_player(move))


@router.post("/{game_id}/timeout", response_model=MovesResponse)
async def time_out(game_id: str, player: PlayerColor):
    """Force the default move of a player whose decision time ran out.

    Raises:
        HTTPException 409: If the player is not the one expected to act.
    """
    session = _get_session(game_id)
    logger.info("POST /games/%s/timeout - player: %s", game_id, player.value)
    try:
        result = await session.submit_timeout(player)
    except AutomaticMoveCycleError as e:
        _raise_for(e.error_code, e.message)

    return _moves_response(session, result, player)
