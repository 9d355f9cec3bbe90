"""Dice Duel: a small demo game built on the Random API.

Players take turns rolling two dice and adding them to their score; the
first to reach the target wins. A shared deck of bonus cards is shuffled at
setup, and drawn cards add to the drawing player's score. The deck order and
opponents' hands are hidden from viewers.
"""

from ..models.ctx import Ctx
from ..models.definition import INVALID_MOVE, GameDefinition, MoveContext

TARGET_SCORE = 30
DECK = list(range(1, 11))


def setup(context: MoveContext) -> dict:
    players = context.ctx.play_order
    return {
        "scores": {pid: 0 for pid in players},
        "hands": {pid: [] for pid in players},
        "deck": context.random.Shuffle(DECK),
        "last_roll": None,
        "rolled": False,
        "target": TARGET_SCORE,
    }


def on_turn_begin(context: MoveContext) -> dict:
    context.G["rolled"] = False
    return context.G


def roll(context: MoveContext):
    """Roll two dice once per turn."""
    G = context.G
    if G["rolled"]:
        return INVALID_MOVE
    dice = context.random.D6(2)
    G["last_roll"] = dice
    G["rolled"] = True
    G["scores"][context.player_id] += sum(dice)
    if G["scores"][context.player_id] >= G["target"]:
        context.events.end_game({"winner": context.player_id})
    return G


def draw_card(context: MoveContext):
    """Take the top bonus card."""
    G = context.G
    if not G["deck"]:
        return INVALID_MOVE
    card = G["deck"].pop(0)
    G["hands"][context.player_id].append(card)
    G["scores"][context.player_id] += card
    if G["scores"][context.player_id] >= G["target"]:
        context.events.end_game({"winner": context.player_id})
    return G


def reshuffle(context: MoveContext) -> dict:
    context.G["deck"] = context.random.Shuffle(context.G["deck"])
    return context.G


def pass_turn(context: MoveContext) -> dict:
    context.events.end_turn()
    return context.G


def player_view(G: dict, ctx: Ctx, player_id: str | None) -> dict:
    """Hide the deck order and other players' hands."""
    return {
        **G,
        "deck": None,
        "deck_size": len(G["deck"]),
        "hands": {
            pid: list(hand) if pid == player_id else len(hand) for pid, hand in G["hands"].items()
        },
    }


def create_dice_duel(seed: str | int | float | None = None, num_players: int = 2) -> GameDefinition:
    """Build the Dice Duel definition for a given seed."""
    return GameDefinition(
        name="dice-duel",
        moves={
            "roll": roll,
            "draw_card": draw_card,
            "reshuffle": reshuffle,
            "pass_turn": pass_turn,
        },
        setup=setup,
        seed=seed,
        on_turn_begin=on_turn_begin,
        player_view=player_view,
        num_players=num_players,
    )
