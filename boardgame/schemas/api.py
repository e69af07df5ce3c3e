"""Pydantic schemas for the games API."""

from typing import Any

from pydantic import BaseModel, Field


class StartGameRequest(BaseModel):
    """Request body for creating a game from options."""

    options: dict[str, Any] = Field(..., description="Game options in wire form")


class ResumeGameRequest(BaseModel):
    """Request body for resuming a game from a saved state."""

    state: dict[str, Any] = Field(..., description="Serialized game state")


class GameCreatedResponse(BaseModel):
    """Response from game creation."""

    game_id: str = Field(..., description="UUID of the game")
    view: dict[str, Any] = Field(..., description="Spectator view after the opening moves")
    moves: list[dict[str, Any]] = Field(
        default_factory=list, description="Opening automatic moves, as broadcast"
    )


class MovesResponse(BaseModel):
    """Moves played after a submission: the submitted one, then automatic ones."""

    moves: list[dict[str, Any]] = Field(..., description="Move views for the requester")
    time_limit: int | None = Field(
        None, description="Seconds the next active player has to decide"
    )
