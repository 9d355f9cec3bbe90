"""Pydantic response schemas for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class MatchStateResponse(BaseModel):
    """Response containing a viewer's state of a match."""

    matchId: str  # noqa: N815
    playerID: str | None  # noqa: N815
    state: dict


class CreateMatchResponse(BaseModel):
    """Response after creating a new match."""

    matchId: str  # noqa: N815
    game: str
    numPlayers: int  # noqa: N815
    state: dict


class MakeMoveResponse(BaseModel):
    """Response after submitting a move."""

    accepted: bool
    stateID: int  # noqa: N815
    errors: list[str] = Field(default_factory=list)
    gameover: Any = None

