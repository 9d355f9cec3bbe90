"""Game state serialization to/from JSON.

This module provides functions to save and load snapshots to JSON files and
to convert them to plain dictionaries for the network. Plugin data, including
the random generator registers, survives the round-trip exactly, so a game
resumed from disk draws the same values it would have drawn without the
interruption.
"""

import json
from pathlib import Path
from typing import Any

from ..models.ctx import Ctx
from ..models.game_state import GameState, PluginData
from ..plugins.random import RandomState

# Plugin name -> persisted data type with to_dict/from_dict
_PLUGIN_DATA_TYPES: dict[str, Any] = {"random": RandomState}


def save_state(state: GameState, filepath: str) -> None:
    """Save a snapshot to a JSON file.

    Args:
        state: Snapshot to save
        filepath: Path to save file (will be created in /state directory if relative)

    Example:
        save_state(state, "my_game.json")  # Saves to state/my_game.json
        save_state(state, "/absolute/path/game.json")  # Saves to absolute path
    """
    path = Path(filepath)
    if not path.is_absolute():
        state_dir = Path(__file__).parent.parent.parent / "state"
        state_dir.mkdir(exist_ok=True)
        path = state_dir / filepath

    with open(path, "w") as f:
        json.dump(state_to_dict(state), f, indent=2)


def load_state(filepath: str) -> GameState:
    """Load a snapshot from a JSON file.

    Args:
        filepath: Path to saved file

    Returns:
        Loaded GameState

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid or malformed

    Example:
        state = load_state("my_game.json")  # Loads from state/my_game.json
    """
    path = Path(filepath)
    if not path.is_absolute():
        state_dir = Path(__file__).parent.parent.parent / "state"
        path = state_dir / filepath

    with open(path) as f:
        data = json.load(f)

    return state_from_dict(data)


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Convert a snapshot to a JSON-compatible dictionary.

    Args:
        state: Snapshot to serialize

    Returns:
        Dictionary representation of the snapshot
    """
    return {
        "G": state.G,
        "ctx": _serialize_ctx(state.ctx),
        "plugins": {
            name: {"data": _serialize_plugin_data(entry.data)}
            for name, entry in state.plugins.items()
        },
        "stateID": state.state_id,
    }


def state_from_dict(data: dict[str, Any]) -> GameState:
    """Reconstruct a snapshot from ``state_to_dict`` output.

    Raises:
        ValueError: If required fields are missing
    """
    try:
        return GameState(
            G=data["G"],
            ctx=_deserialize_ctx(data["ctx"]),
            plugins={
                name: PluginData(data=_deserialize_plugin_data(name, entry.get("data")))
                for name, entry in data.get("plugins", {}).items()
            },
            state_id=data.get("stateID", 0),
        )
    except KeyError as e:
        raise ValueError(f"Malformed game state: missing {e}") from e


def _serialize_ctx(ctx: Ctx) -> dict[str, Any]:
    """Convert Ctx to dictionary."""
    return {
        "numPlayers": ctx.num_players,
        "playOrder": list(ctx.play_order),
        "playOrderPos": ctx.play_order_pos,
        "currentPlayer": ctx.current_player,
        "turn": ctx.turn,
        "gameover": ctx.gameover,
    }


def _deserialize_ctx(data: dict[str, Any]) -> Ctx:
    """Reconstruct Ctx from dictionary."""
    return Ctx(
        num_players=data["numPlayers"],
        play_order=tuple(data["playOrder"]),
        play_order_pos=data.get("playOrderPos", 0),
        turn=data.get("turn", 1),
        gameover=data.get("gameover"),
    )


def _serialize_plugin_data(data: Any) -> Any:
    if hasattr(data, "to_dict"):
        return data.to_dict()
    return data


def _deserialize_plugin_data(name: str, data: Any) -> Any:
    if data is None or name not in _PLUGIN_DATA_TYPES:
        return data
    return _PLUGIN_DATA_TYPES[name].from_dict(data)
