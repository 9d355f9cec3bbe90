"""Per-viewer projection of snapshots."""

from dataclasses import replace
from typing import Sequence

from ..models.definition import GameDefinition
from ..models.game_state import GameState
from ..plugins.base import Plugin
from ..plugins.lifecycle import DEFAULT_PLUGINS, redact_plugins


def player_view(
    game: GameDefinition,
    state: GameState,
    player_id: str | None = None,
    plugins: Sequence[Plugin] = DEFAULT_PLUGINS,
) -> GameState:
    """Return the snapshot a viewer is allowed to see.

    The game's own player_view filters G; every plugin redacts its data.
    Values already written into G (a die result, say) stay visible. The
    input snapshot is not modified.

    Args:
        game: Game definition
        state: Authoritative snapshot
        player_id: Viewer, None for spectators

    Returns:
        Redacted copy of state
    """
    G = state.G
    if game.player_view is not None:
        G = game.player_view(G, state.ctx, player_id)
    return replace(state, G=G, plugins=redact_plugins(state.plugins, player_id, plugins))
