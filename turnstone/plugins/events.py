"""Events plugin: lets handlers end the turn or the game."""

import logging
from typing import Any

from ..models.mode import ExecutionMode
from .base import Plugin

logger = logging.getLogger(__name__)


class Events:
    """Request API handed to handlers as ``context.events``.

    Requests are recorded here and applied by the reducer once the handler
    has returned.
    """

    def __init__(self):
        self.turn_ended = False
        self.game_ended = False
        self.result: Any = None

    def end_turn(self) -> None:
        self.turn_ended = True

    def end_game(self, result: Any = True) -> None:
        self.game_ended = True
        self.result = result

    def reset(self) -> None:
        """Forget processed requests so hooks can raise new ones."""
        self.turn_ended = False
        self.game_ended = False
        self.result = None


class EventsPlugin(Plugin):
    """Engine hooks for the events plugin. Persists nothing."""

    name = "events"

    def api(self, data: Any, mode: ExecutionMode) -> Events:
        return Events()
