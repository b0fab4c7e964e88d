"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    phase: str
    activePlayer: str  # noqa: N815
    winner: str | None
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    state: dict


class SubmitActionResponse(BaseModel):
    """Response after submitting an action."""

    accepted: bool
    error: dict | None = None
    message: str | None = None
    state: dict | None = None


class ActionLogResponse(BaseModel):
    """Accepted actions for a game, oldest first."""

    gameId: str  # noqa: N815
    actions: list[dict] = Field(default_factory=list)
