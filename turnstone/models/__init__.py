"""Data models for Turnstone."""

from .ctx import Ctx
from .definition import INVALID_MOVE, GameDefinition, MoveContext
from .game_state import GameState, PluginData
from .mode import ExecutionMode
from .move import Move, make_move

__all__ = [
    "Ctx",
    "ExecutionMode",
    "GameDefinition",
    "GameState",
    "INVALID_MOVE",
    "Move",
    "MoveContext",
    "PluginData",
    "make_move",
]
