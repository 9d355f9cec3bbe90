"""Creation of the initial game state."""

import logging
from typing import Sequence

from ..models.ctx import Ctx
from ..models.definition import GameDefinition, MoveContext
from ..models.game_state import GameState
from ..models.mode import ExecutionMode
from ..plugins.base import Plugin
from ..plugins.lifecycle import DEFAULT_PLUGINS, build_apis, flush_plugins, setup_plugins
from .turns import begin_turn, process_events

logger = logging.getLogger(__name__)


def initialize_game(
    game: GameDefinition,
    num_players: int | None = None,
    plugins: Sequence[Plugin] = DEFAULT_PLUGINS,
) -> GameState:
    """Create the first snapshot of a game.

    Plugins are set up first (this is where an unspecified seed is picked),
    then ``game.setup`` and the first ``on_turn_begin`` run with the plugin
    APIs already available. Initialization is always authoritative.

    Args:
        game: Game definition
        num_players: Player count, defaults to game.num_players
        plugins: Plugins to run

    Returns:
        Initial GameState with state_id 0

    Raises:
        ValueError: If the configured seed or player count is invalid
    """
    ctx = Ctx.create(num_players or game.num_players)
    state_plugins = setup_plugins(game, plugins)
    apis = build_apis(state_plugins, ExecutionMode.AUTHORITATIVE, plugins)

    G: dict = {}
    if game.setup is not None:
        context = MoveContext(G=G, ctx=ctx, random=apis["random"], events=apis["events"])
        G = game.setup(context)

    G = begin_turn(game, G, ctx, apis)
    G, ctx = process_events(game, G, ctx, apis)

    logger.info(f"Initialized game '{game.name}' with {ctx.num_players} players")
    return GameState(G=G, ctx=ctx, plugins=flush_plugins(state_plugins, apis, plugins))
