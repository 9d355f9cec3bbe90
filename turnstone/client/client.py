"""Game client that predicts moves locally.

A multiplayer client runs a SPECULATIVE reducer: moves that do not touch the
Random API show up immediately, moves that do are left for the server. Every
authoritative snapshot received through ``sync`` replaces the local one as a
whole. A singleplayer client is its own authority and commits everything.
"""

import logging

from ..engine.initialize import initialize_game
from ..engine.player_view import player_view
from ..engine.reducer import GameReducer
from ..models.definition import GameDefinition
from ..models.game_state import GameState
from ..models.mode import ExecutionMode
from ..models.move import Move, make_move

logger = logging.getLogger(__name__)


class GameClient:
    """Holds one participant's copy of a game."""

    def __init__(
        self,
        game: GameDefinition,
        player_id: str | None = None,
        mode: ExecutionMode = ExecutionMode.AUTHORITATIVE,
        num_players: int | None = None,
        state: GameState | None = None,
    ):
        """Initialize client.

        Args:
            game: Game definition
            player_id: Player this client acts for, None for local hot-seat play
            mode: AUTHORITATIVE for singleplayer, SPECULATIVE when a server
                  owns the game
            num_players: Player count for singleplayer games
            state: Snapshot to resume from instead of starting a new game

        Raises:
            ValueError: If an authoritative client is given a redacted snapshot
        """
        self.game = game
        self.player_id = player_id
        self.mode = mode
        self.reducer = GameReducer(game, mode=mode)
        self.state: GameState | None = None
        if state is not None:
            self.sync(state)
        elif mode is ExecutionMode.AUTHORITATIVE:
            self.state = initialize_game(game, num_players=num_players)

    @property
    def is_authoritative(self) -> bool:
        return self.mode is ExecutionMode.AUTHORITATIVE

    def make_move(self, name: str, *args) -> Move:
        """Apply a move locally and return it for submission to the server.

        Raises:
            RuntimeError: If a speculative client has not been synced yet
        """
        if self.state is None:
            raise RuntimeError("Client has no state yet; call sync() first")
        move = make_move(name, *args, player_id=self.player_id)
        self.state = self.reducer(self.state, move)
        return move

    def sync(self, state: GameState) -> None:
        """Replace the local snapshot with an authoritative one.

        Raises:
            ValueError: If an authoritative client is given a redacted snapshot
        """
        if self.is_authoritative:
            random_data = state.plugins.get("random")
            if random_data is None or random_data.data is None:
                raise ValueError(
                    "Authoritative client needs the full snapshot, not a player view"
                )
            if self.state is not None:
                logger.warning("Authoritative client received a sync; overwriting local state")
        logger.debug(f"Client {self.player_id} synced to state {state.state_id}")
        self.state = state

    def get_state(self) -> GameState | None:
        """The snapshot as this client's player may see it.

        Plugin internals are always redacted, even for a singleplayer client.
        """
        if self.state is None:
            return None
        return player_view(self.game, self.state, self.player_id)
