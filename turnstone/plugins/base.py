"""Base class for engine plugins."""

from typing import Any

from ..models.definition import GameDefinition
from ..models.mode import ExecutionMode


class Plugin:
    """A unit of engine functionality with its own slice of persisted state.

    The engine calls these hooks at fixed points:

    - ``setup`` once, when the game state is created
    - ``api`` before any handler runs, to build the object handlers use
    - ``flush`` after the handlers ran, to fold the api back into data
    - ``no_client`` to ask whether a speculative execution must be discarded
    - ``player_view`` for every snapshot sent to a viewer

    Subclasses override what they need. The defaults persist nothing.
    """

    name: str = ""

    def setup(self, game: GameDefinition) -> Any:
        return None

    def api(self, data: Any, mode: ExecutionMode) -> Any:
        return None

    def flush(self, api: Any) -> Any:
        return None

    def no_client(self, api: Any) -> bool:
        return False

    def player_view(self, data: Any, player_id: str | None) -> Any:
        return data
