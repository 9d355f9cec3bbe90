"""Engine plugins."""

from .base import Plugin
from .events import Events, EventsPlugin
from .lifecycle import (
    DEFAULT_PLUGINS,
    build_apis,
    flush_plugins,
    is_speculation_unsafe,
    redact_plugins,
    setup_plugins,
)
from .random import Random, RandomPlugin, RandomState, draw, resolve_seed

__all__ = [
    "DEFAULT_PLUGINS",
    "Events",
    "EventsPlugin",
    "Plugin",
    "Random",
    "RandomPlugin",
    "RandomState",
    "build_apis",
    "draw",
    "flush_plugins",
    "is_speculation_unsafe",
    "redact_plugins",
    "resolve_seed",
    "setup_plugins",
]
