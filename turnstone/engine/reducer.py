"""Move reducer: advances a snapshot by one move.

Processing a move runs these steps in order:
1. Validation (game over, unknown move, out-of-turn player)
2. Plugin API construction for the reducer's execution mode
3. Move handler
4. Event processing (end of game, end of turn with its hooks)
5. Speculation gate (speculative executions that touched randomness are dropped)
6. Plugin flush and commit of the new snapshot

A rejected or discarded move returns the very same GameState object, so
callers can detect it with ``is``.
"""

import copy
import logging
from typing import Any, Sequence

from ..models.definition import INVALID_MOVE, GameDefinition, MoveContext
from ..models.game_state import GameState
from ..models.mode import ExecutionMode
from ..models.move import Move
from ..plugins.base import Plugin
from ..plugins.lifecycle import (
    DEFAULT_PLUGINS,
    build_apis,
    flush_plugins,
    is_speculation_unsafe,
)
from .turns import process_events

logger = logging.getLogger(__name__)


class GameReducer:
    """Applies moves to snapshots for one executor.

    The server (or a singleplayer client) uses an AUTHORITATIVE reducer.
    Multiplayer clients use a SPECULATIVE one to predict moves locally; their
    results are replaced by the next authoritative snapshot.
    """

    def __init__(
        self,
        game: GameDefinition,
        mode: ExecutionMode = ExecutionMode.AUTHORITATIVE,
        plugins: Sequence[Plugin] = DEFAULT_PLUGINS,
    ):
        self.game = game
        self.mode = mode
        self.plugins = tuple(plugins)

    def __call__(self, state: GameState, move: Move) -> GameState:
        return self.process_move(state, move)

    def validate_move(self, state: GameState, move: Move) -> str | None:
        """Check whether a move may run on a snapshot.

        Args:
            state: Current snapshot
            move: Submitted move

        Returns:
            Error message, or None if the move may run
        """
        if state.ctx.gameover is not None:
            return f"Game is over ({state.ctx.gameover!r})"
        if move.name not in self.game.moves:
            return f"Unknown move: {move.name}"
        if move.player_id is not None and move.player_id != state.ctx.current_player:
            return (
                f"Player {move.player_id} cannot move during "
                f"player {state.ctx.current_player}'s turn"
            )
        return None

    def process_move(self, state: GameState, move: Move) -> GameState:
        """Run one move and return the successor snapshot.

        Args:
            state: Current snapshot (never modified)
            move: Move to run

        Returns:
            New GameState, or ``state`` itself if the move was rejected or
            discarded as unsafe speculation
        """
        error = self.validate_move(state, move)
        if error:
            logger.error(f"Rejected move '{move.name}': {error}")
            return state

        apis = self._build_apis(state)
        G = self._run_handler(state, move, apis)
        if isinstance(G, str) and G == INVALID_MOVE:
            logger.warning(f"Move '{move.name}' returned INVALID_MOVE")
            return state

        G, ctx = process_events(self.game, G, state.ctx, apis)

        if self.mode is ExecutionMode.SPECULATIVE and is_speculation_unsafe(apis, self.plugins):
            logger.debug(f"Discarding speculative result of move '{move.name}'")
            return state

        plugins = flush_plugins(state.plugins, apis, self.plugins)
        logger.debug(f"Committed move '{move.name}' as state {state.state_id + 1}")
        return GameState(G=G, ctx=ctx, plugins=plugins, state_id=state.state_id + 1)

    def _build_apis(self, state: GameState) -> dict[str, Any]:
        return build_apis(state.plugins, self.mode, self.plugins)

    def _run_handler(self, state: GameState, move: Move, apis: dict[str, Any]) -> Any:
        # Handlers get a private copy of G so the input snapshot stays intact
        context = MoveContext(
            G=copy.deepcopy(state.G),
            ctx=state.ctx,
            random=apis["random"],
            events=apis["events"],
            player_id=move.player_id if move.player_id is not None else state.ctx.current_player,
        )
        result = self.game.moves[move.name](context, *move.args)
        return context.G if result is None else result
