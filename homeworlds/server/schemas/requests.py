"""Pydantic request schemas for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class ActionRequest(BaseModel):
    """A single game action submitted by a player."""

    type: Literal["setup:take_star", "setup:take_ship"] = Field(description="Action type")
    color: Literal["yellow", "green", "blue", "red"] = Field(description="Piece color")
    size: int = Field(ge=1, le=3, description="Piece size: 1 (small) to 3 (large)")
    player: Literal["player1", "player2"] = Field(description="Acting player")


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    actions: list[ActionRequest] = Field(
        default_factory=list,
        description="Optional action log to replay, oldest first",
    )
