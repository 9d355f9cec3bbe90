"""Game engine components."""

from .initialize import initialize_game
from .player_view import player_view
from .reducer import GameReducer
from .turns import process_events

__all__ = [
    "initialize_game",
    "player_view",
    "process_events",
    "GameReducer",
]
