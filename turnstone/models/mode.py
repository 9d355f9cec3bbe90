"""Execution mode of a reducer invocation."""

from enum import Enum


class ExecutionMode(Enum):
    """Who is executing a move.

    AUTHORITATIVE: the single participant allowed to commit results (the
        server, or a singleplayer client acting as its own authority).
    SPECULATIVE: a client applying a move locally before the authoritative
        snapshot arrives. Anything random it computes is discarded.
    """

    AUTHORITATIVE = "authoritative"
    SPECULATIVE = "speculative"
