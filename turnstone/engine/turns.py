"""Turn hooks and event processing.

Both initialization and the reducer end up here: after a handler returns,
the events it requested are applied in order. Ending the game wins over
ending the turn. Ending a turn runs ``on_turn_end``, hands the turn to the
next player and runs ``on_turn_begin``, which may itself request events.
"""

import logging
from dataclasses import replace
from typing import Any, Callable

from ..models.ctx import Ctx
from ..models.definition import GameDefinition, MoveContext

logger = logging.getLogger(__name__)

# Upper bound on consecutive turn endings triggered by turn hooks
MAX_EVENT_ROUNDS = 100


def run_hook(
    hook: Callable[[MoveContext], dict | None] | None,
    G: dict,
    ctx: Ctx,
    apis: dict[str, Any],
    player_id: str | None = None,
) -> dict:
    """Call a turn hook with populated plugin APIs and return the new G."""
    if hook is None:
        return G
    context = MoveContext(
        G=G, ctx=ctx, random=apis["random"], events=apis["events"], player_id=player_id
    )
    result = hook(context)
    return context.G if result is None else result


def begin_turn(game: GameDefinition, G: dict, ctx: Ctx, apis: dict[str, Any]) -> dict:
    """Run the game's on_turn_begin hook for the current player."""
    logger.debug(f"Turn {ctx.turn} begins for player {ctx.current_player}")
    return run_hook(game.on_turn_begin, G, ctx, apis, ctx.current_player)


def end_turn(
    game: GameDefinition, G: dict, ctx: Ctx, apis: dict[str, Any]
) -> tuple[dict, Ctx]:
    """Finish the current turn and start the next one."""
    G = run_hook(game.on_turn_end, G, ctx, apis, ctx.current_player)
    ctx = ctx.next_turn()
    G = begin_turn(game, G, ctx, apis)
    return G, ctx


def process_events(
    game: GameDefinition, G: dict, ctx: Ctx, apis: dict[str, Any]
) -> tuple[dict, Ctx]:
    """Apply the events requested by the handlers that just ran.

    Args:
        game: Game definition
        G: Game data returned by the handler
        ctx: Current ctx
        apis: Plugin APIs of this invocation

    Returns:
        Tuple of (G, ctx) after all requested events
    """
    events = apis["events"]
    for _ in range(MAX_EVENT_ROUNDS):
        if events.game_ended:
            logger.info(f"Game '{game.name}' over on turn {ctx.turn}: {events.result!r}")
            ctx = replace(ctx, gameover=events.result)
            events.reset()
            return G, ctx
        if not events.turn_ended:
            return G, ctx
        events.reset()
        G, ctx = end_turn(game, G, ctx, apis)

    logger.error(
        f"Game '{game.name}': turn hooks ended {MAX_EVENT_ROUNDS} turns in a row, stopping"
    )
    events.reset()
    return G, ctx
