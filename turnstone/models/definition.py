"""Game definitions and the context handed to game handlers."""

from dataclasses import dataclass, field
from typing import Any, Callable

from ..utils.constants import DEFAULT_NUM_PLAYERS
from .ctx import Ctx

# Returned by a move handler to reject the move without changing state
INVALID_MOVE = "INVALID_MOVE"


@dataclass
class MoveContext:
    """Everything a move or turn handler can see.

    ``random`` and ``events`` are the plugin APIs for this invocation. They are
    populated before any handler runs, including ``setup`` and
    ``on_turn_begin``.
    """

    G: dict
    ctx: Ctx
    random: Any  # turnstone.plugins.random.Random
    events: Any  # turnstone.plugins.events.Events
    player_id: str | None = None


@dataclass
class GameDefinition:
    """Rules of a game as seen by the engine.

    Handlers take a MoveContext as their first argument and return the new G.
    ``setup`` returns the initial G; turn hooks may return None to leave G
    unchanged. ``player_view`` receives (G, ctx, player_id) and returns the G a
    given viewer is allowed to see.
    """

    name: str
    moves: dict[str, Callable[..., Any]] = field(default_factory=dict)
    setup: Callable[[MoveContext], dict] | None = None
    seed: str | int | float | None = None  # None or "random": picked at game creation
    on_turn_begin: Callable[[MoveContext], dict | None] | None = None
    on_turn_end: Callable[[MoveContext], dict | None] | None = None
    player_view: Callable[[dict, Ctx, str | None], dict] | None = None
    num_players: int = DEFAULT_NUM_PLAYERS

    def __post_init__(self):
        """Validate definition after initialization."""
        if not self.name:
            raise ValueError("Game name cannot be empty")
        if self.num_players <= 0:
            raise ValueError(f"Invalid num_players: {self.num_players} (must be > 0)")
