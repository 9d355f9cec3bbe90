"""Turnstone: a turn-based game engine with reproducible, redactable randomness."""

__version__ = "1.0.0"
