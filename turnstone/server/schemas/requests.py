"""Pydantic request schemas for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class CreateMatchRequest(BaseModel):
    """Request to create a new match."""

    game: str = Field(default="dice-duel", description="Name of a bundled game")
    numPlayers: int = Field(default=2, gt=0, description="Number of players")  # noqa: N815
    seed: str | int | float | None = Field(
        default=None, description="Optional seed; omit or use 'random' for an unpredictable one"
    )


class MakeMoveRequest(BaseModel):
    """Request to run a move on the authoritative state."""

    playerID: str = Field(description="Player submitting the move")  # noqa: N815
    move: str = Field(description="Move name")
    args: list[Any] = Field(default_factory=list, description="Move arguments")
    stateID: int | None = Field(  # noqa: N815
        default=None, description="State the client predicted from; stale moves are rejected"
    )
