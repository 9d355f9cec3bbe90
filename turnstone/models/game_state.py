"""Immutable game state snapshot."""

from dataclasses import dataclass, field
from typing import Any

from .ctx import Ctx


@dataclass(frozen=True)
class PluginData:
    """Persisted data of one plugin inside a snapshot.

    ``data`` is None when the plugin has nothing to persist or when the
    snapshot has been redacted for a viewer.
    """

    data: Any = None


@dataclass(frozen=True)
class GameState:
    """A snapshot of a game.

    Snapshots are never modified in place. The reducer returns a new
    GameState for every committed move, or the very same object when a move
    is rejected or discarded.
    """

    G: dict  # Game-specific data, owned by move handlers
    ctx: Ctx
    plugins: dict[str, PluginData] = field(default_factory=dict)  # Plugin name -> data
    state_id: int = 0  # Number of committed moves

    def __post_init__(self):
        """Validate snapshot data after initialization."""
        if self.state_id < 0:
            raise ValueError(f"Invalid state_id: {self.state_id} (must be >= 0)")
