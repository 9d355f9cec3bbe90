"""Bundled game definitions."""

from .dice_duel import create_dice_duel

# Game name -> factory taking (seed, num_players)
GAMES = {
    "dice-duel": create_dice_duel,
}

__all__ = ["GAMES", "create_dice_duel"]
