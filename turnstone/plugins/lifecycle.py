"""Lifecycle functions the engine runs over every registered plugin."""

import logging
from typing import Any, Sequence

from ..models.definition import GameDefinition
from ..models.game_state import PluginData
from ..models.mode import ExecutionMode
from .base import Plugin
from .events import EventsPlugin
from .random import RandomPlugin

logger = logging.getLogger(__name__)

DEFAULT_PLUGINS: tuple[Plugin, ...] = (RandomPlugin(), EventsPlugin())


def setup_plugins(
    game: GameDefinition, plugins: Sequence[Plugin] = DEFAULT_PLUGINS
) -> dict[str, PluginData]:
    """Create the initial data of every plugin."""
    return {plugin.name: PluginData(data=plugin.setup(game)) for plugin in plugins}


def build_apis(
    state_plugins: dict[str, PluginData],
    mode: ExecutionMode,
    plugins: Sequence[Plugin] = DEFAULT_PLUGINS,
) -> dict[str, Any]:
    """Build the handler-facing API object of every plugin.

    A plugin missing from the snapshot gets None as data, which is what a
    redacted snapshot looks like.
    """
    apis = {}
    for plugin in plugins:
        entry = state_plugins.get(plugin.name)
        apis[plugin.name] = plugin.api(entry.data if entry else None, mode)
    return apis


def flush_plugins(
    state_plugins: dict[str, PluginData],
    apis: dict[str, Any],
    plugins: Sequence[Plugin] = DEFAULT_PLUGINS,
) -> dict[str, PluginData]:
    """Fold each API back into plugin data, returning a new mapping."""
    flushed = dict(state_plugins)
    for plugin in plugins:
        flushed[plugin.name] = PluginData(data=plugin.flush(apis[plugin.name]))
    return flushed


def is_speculation_unsafe(
    apis: dict[str, Any], plugins: Sequence[Plugin] = DEFAULT_PLUGINS
) -> bool:
    """True if any plugin says this execution must not be kept on a client."""
    unsafe = [plugin.name for plugin in plugins if plugin.no_client(apis[plugin.name])]
    if unsafe:
        logger.debug(f"Plugins unsafe for speculative execution: {unsafe}")
    return bool(unsafe)


def redact_plugins(
    state_plugins: dict[str, PluginData],
    player_id: str | None,
    plugins: Sequence[Plugin] = DEFAULT_PLUGINS,
) -> dict[str, PluginData]:
    """Project plugin data for one viewer. The input mapping is untouched."""
    redacted = dict(state_plugins)
    for plugin in plugins:
        entry = state_plugins.get(plugin.name)
        if entry is None or entry.data is None:
            continue
        redacted[plugin.name] = PluginData(data=plugin.player_view(entry.data, player_id))
    return redacted
