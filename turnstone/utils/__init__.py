"""Utility functions and constants for Turnstone."""

from .alea import AleaState, Mash, next_value, seed_state, seed_to_text
from .constants import (
    DEFAULT_NUM_PLAYERS,
    DEFAULT_SPOT_VALUE,
    PLACEHOLDER_SEED,
    PREDEFINED_DICE,
    RANDOM_SEED_SENTINEL,
)

__all__ = [
    "DEFAULT_NUM_PLAYERS",
    "DEFAULT_SPOT_VALUE",
    "PLACEHOLDER_SEED",
    "PREDEFINED_DICE",
    "RANDOM_SEED_SENTINEL",
    "AleaState",
    "Mash",
    "next_value",
    "seed_state",
    "seed_to_text",
]
