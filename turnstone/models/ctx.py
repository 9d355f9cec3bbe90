"""Turn bookkeeping shared by every game."""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class Ctx:
    """Turn order and progress.

    Games read ctx but never modify it directly; the reducer produces a new
    Ctx when a turn ends or the game is over.
    """

    num_players: int
    play_order: tuple[str, ...]  # Player IDs in seating order
    play_order_pos: int = 0  # Index into play_order of the current player
    turn: int = 1  # Current turn number (starts at 1)
    gameover: Any = None  # Result passed to events.end_game(), None while running

    def __post_init__(self):
        """Validate ctx data after initialization."""
        if self.num_players <= 0:
            raise ValueError(f"Invalid num_players: {self.num_players} (must be > 0)")
        if len(self.play_order) != self.num_players:
            raise ValueError(
                f"play_order has {len(self.play_order)} players, expected {self.num_players}"
            )
        if not 0 <= self.play_order_pos < self.num_players:
            raise ValueError(f"Invalid play_order_pos: {self.play_order_pos}")

    @classmethod
    def create(cls, num_players: int) -> "Ctx":
        """Create the ctx for a fresh game with players "0", "1", ..."""
        return cls(num_players=num_players, play_order=tuple(str(i) for i in range(num_players)))

    @property
    def current_player(self) -> str:
        """ID of the player whose turn it is."""
        return self.play_order[self.play_order_pos]

    def next_turn(self) -> "Ctx":
        """Return the ctx for the following turn."""
        return replace(
            self,
            play_order_pos=(self.play_order_pos + 1) % self.num_players,
            turn=self.turn + 1,
        )
