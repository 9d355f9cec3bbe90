"""Match session management.

The server is the authoritative executor: only its reducer advances the
random generator. Everything it sends out goes through ``player_view``
first, so no client ever sees the seed or the generator registers.
"""

import logging
import uuid
from dataclasses import dataclass, field

from fastapi import WebSocket

from ..engine.initialize import initialize_game
from ..engine.player_view import player_view
from ..engine.reducer import GameReducer
from ..games import GAMES
from ..models.definition import GameDefinition
from ..models.game_state import GameState
from ..models.mode import ExecutionMode
from ..models.move import make_move
from ..utils.serialization import state_to_dict

logger = logging.getLogger(__name__)


@dataclass
class MatchSession:
    """Manages one match.

    Holds the authoritative snapshot, the reducer that advances it, and the
    WebSocket connections (with the player each one views as).
    """

    id: str
    game: GameDefinition
    state: GameState
    reducer: GameReducer
    connections: list[tuple[WebSocket, str | None]] = field(default_factory=list)

    def get_state_for_player(self, player_id: str | None = None) -> dict:
        """Serialize the snapshot as one viewer may see it.

        Args:
            player_id: Viewer, None for spectators

        Returns:
            Redacted state dictionary
        """
        return state_to_dict(player_view(self.game, self.state, player_id))

    def process_move(
        self, player_id: str, move_name: str, args: list, state_id: int | None = None
    ) -> list[str]:
        """Validate and run a move on the authoritative snapshot.

        Args:
            player_id: Submitting player
            move_name: Move to run
            args: Move arguments
            state_id: Snapshot the client was on, None to skip the staleness check

        Returns:
            List of error messages (empty if the move was committed)
        """
        if state_id is not None and state_id != self.state.state_id:
            logger.warning(
                f"Match {self.id}: stale move from player {player_id} "
                f"(stateID {state_id}, current {self.state.state_id})"
            )
            return [f"Stale stateID {state_id} (current {self.state.state_id})"]

        if player_id not in self.state.ctx.play_order:
            return [f"Unknown player: {player_id}"]

        move = make_move(move_name, *args, player_id=player_id)
        error = self.reducer.validate_move(self.state, move)
        if error:
            logger.warning(f"Match {self.id}: {error}")
            return [error]

        new_state = self.reducer(self.state, move)
        if new_state is self.state:
            return [f"Move '{move_name}' was rejected"]

        self.state = new_state
        logger.info(
            f"Match {self.id}: player {player_id} played '{move_name}' "
            f"(state {self.state.state_id})"
        )
        return []

    async def broadcast_state(self):
        """Send every connected viewer their own view of the snapshot."""
        disconnected = []
        for ws, player_id in self.connections:
            try:
                await ws.send_json(
                    {"type": "STATE_UPDATED", "state": self.get_state_for_player(player_id)}
                )
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                disconnected.append((ws, player_id))

        # Remove disconnected clients
        for entry in disconnected:
            self.connections.remove(entry)

    def add_connection(self, websocket: WebSocket, player_id: str | None):
        """Add a WebSocket connection to this session."""
        self.connections.append((websocket, player_id))
        logger.info(f"WebSocket connected to match {self.id}, total: {len(self.connections)}")

    def remove_connection(self, websocket: WebSocket):
        """Remove a WebSocket connection from this session."""
        self.connections = [entry for entry in self.connections if entry[0] is not websocket]
        logger.info(
            f"WebSocket disconnected from match {self.id}, remaining: {len(self.connections)}"
        )


class MatchSessionManager:
    """Manages all active match sessions.

    In-memory storage only.
    """

    def __init__(self):
        self.sessions: dict[str, MatchSession] = {}

    def create_session(
        self,
        game_name: str = "dice-duel",
        num_players: int = 2,
        seed: str | int | float | None = None,
    ) -> MatchSession:
        """Create a new match.

        Args:
            game_name: Key into the bundled games
            num_players: Number of players
            seed: Optional seed; None or "random" picks one at creation

        Returns:
            Newly created MatchSession

        Raises:
            KeyError: If the game is unknown
            ValueError: If the seed or player count is invalid
        """
        factory = GAMES[game_name]
        game = factory(seed=seed, num_players=num_players)

        match_id = f"match-{uuid.uuid4().hex[:8]}"
        session = MatchSession(
            id=match_id,
            game=game,
            state=initialize_game(game),
            reducer=GameReducer(game, mode=ExecutionMode.AUTHORITATIVE),
        )
        self.sessions[match_id] = session

        logger.info(f"Created match {match_id}: game={game_name}, players={num_players}")
        return session

    def get(self, match_id: str) -> MatchSession | None:
        """Get a match session by ID."""
        return self.sessions.get(match_id)

    def delete(self, match_id: str) -> bool:
        """Delete a match session.

        Returns:
            True if deleted, False if not found
        """
        if match_id in self.sessions:
            del self.sessions[match_id]
            logger.info(f"Deleted match {match_id}")
            return True
        return False

    async def cleanup_all(self):
        """Close all connections and drop all sessions (called on shutdown)."""
        for session in self.sessions.values():
            for ws, _ in list(session.connections):
                try:
                    await ws.close()
                except Exception as e:
                    logger.warning(f"Failed to close WebSocket: {e}")
        self.sessions.clear()
