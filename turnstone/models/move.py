"""Move data model for player actions."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Move:
    """A request to run one of the game's move handlers.

    Moves are submitted by players (or by the engine on their behalf) and
    processed by the GameReducer.
    """

    name: str  # Key into GameDefinition.moves
    args: tuple[Any, ...] = field(default_factory=tuple)  # Extra handler arguments
    player_id: str | None = None  # Submitting player, None for local play

    def __post_init__(self):
        """Validate move data after initialization."""
        if not self.name:
            raise ValueError("Move name cannot be empty")


def make_move(name: str, *args, player_id: str | None = None) -> Move:
    """Convenience constructor: ``make_move("roll", player_id="0")``."""
    return Move(name=name, args=tuple(args), player_id=player_id)
