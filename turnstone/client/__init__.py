"""Game clients."""

from .client import GameClient

__all__ = ["GameClient"]
